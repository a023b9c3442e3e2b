"""
Database CRUD operations.

Provides async functions for reading, writing and deleting player
settings snapshots.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from encounterforge.models.db import UserSettingsDB
from encounterforge.models.game import ExpansionPack, GameLanguage
from encounterforge.models.session import SessionSettings


async def get_user_settings(session: AsyncSession, user_id: str) -> UserSettingsDB | None:
    """
    Get a player's stored settings by user_id.

    Returns None if nothing is stored for this player.
    """
    result = await session.execute(select(UserSettingsDB).where(UserSettingsDB.user_id == user_id))
    return result.scalar_one_or_none()


async def save_user_settings(
    session: AsyncSession,
    user_id: str,
    snapshot: SessionSettings,
) -> UserSettingsDB:
    """
    Create or replace a player's stored settings.
    """
    record = await get_user_settings(session, user_id)
    if record is None:
        record = UserSettingsDB(user_id=user_id)
        session.add(record)

    record.language = snapshot.language.value
    record.expansions = sorted(pack.value for pack in snapshot.expansions)
    record.use_preset = snapshot.use_preset
    record.player_count = snapshot.player_count
    record.preset_pack = snapshot.preset_pack.value
    record.preset_chapter = snapshot.preset_chapter

    await session.flush()
    return record


async def delete_user_settings(session: AsyncSession, user_id: str) -> bool:
    """
    Delete a player's stored settings.

    Returns True if deleted, False if not found.
    """
    record = await get_user_settings(session, user_id)
    if not record:
        return False

    await session.delete(record)
    return True


def settings_to_model(record: UserSettingsDB) -> SessionSettings:
    """Convert stored settings to a domain model."""
    return SessionSettings(
        language=GameLanguage(record.language),
        expansions={ExpansionPack(token) for token in record.expansions},
        use_preset=record.use_preset,
        player_count=record.player_count,
        preset_pack=ExpansionPack(record.preset_pack),
        preset_chapter=record.preset_chapter,
    )

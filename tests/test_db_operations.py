"""Tests for database CRUD operations."""

from unittest.mock import patch

import pytest
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from encounterforge.db.database import init_db
from encounterforge.db.operations import (
    delete_user_settings,
    get_user_settings,
    save_user_settings,
    settings_to_model,
)
from encounterforge.models.game import ExpansionPack, GameLanguage
from encounterforge.models.session import SessionSettings


@pytest.fixture
async def session(async_engine) -> AsyncSession:
    """Provide a database session for tests."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session


@pytest.fixture
def snapshot() -> SessionSettings:
    return SessionSettings(
        language=GameLanguage.DE,
        expansions={ExpansionPack.CORE, ExpansionPack.SPOILS_OF_WAR},
        use_preset=False,
        player_count=3,
        preset_pack=ExpansionPack.SPOILS_OF_WAR,
        preset_chapter=2,
    )


class TestUserSettingsOperations:
    async def test_get_missing_returns_none(self, session: AsyncSession) -> None:
        assert await get_user_settings(session, "nobody") is None

    async def test_save_creates_record(
        self, session: AsyncSession, snapshot: SessionSettings
    ) -> None:
        record = await save_user_settings(session, "user-123", snapshot)
        await session.commit()

        assert record.id is not None
        assert record.user_id == "user-123"
        assert record.language == "de"
        assert record.expansions == ["Core", "SpoilsOfWar"]
        assert record.player_count == 3

    async def test_save_replaces_existing(
        self, session: AsyncSession, snapshot: SessionSettings
    ) -> None:
        first = await save_user_settings(session, "user-123", snapshot)
        await session.commit()

        updated = snapshot.model_copy(update={"player_count": 5, "use_preset": True})
        second = await save_user_settings(session, "user-123", updated)
        await session.commit()

        assert second.id == first.id
        record = await get_user_settings(session, "user-123")
        assert record.player_count == 5
        assert record.use_preset is True

    async def test_delete(self, session: AsyncSession, snapshot: SessionSettings) -> None:
        await save_user_settings(session, "user-123", snapshot)
        await session.commit()

        assert await delete_user_settings(session, "user-123") is True
        await session.commit()

        assert await get_user_settings(session, "user-123") is None

    async def test_delete_missing(self, session: AsyncSession) -> None:
        assert await delete_user_settings(session, "nobody") is False

    async def test_round_trip_to_model(
        self, session: AsyncSession, snapshot: SessionSettings
    ) -> None:
        await save_user_settings(session, "user-123", snapshot)
        await session.commit()

        record = await get_user_settings(session, "user-123")

        assert settings_to_model(record) == snapshot


class TestInitDb:
    async def test_creates_settings_table(self) -> None:
        engine = create_async_engine("sqlite+aiosqlite:///:memory:")
        try:
            with patch("encounterforge.db.database.engine", engine):
                await init_db()

            async with engine.connect() as conn:
                tables = await conn.run_sync(lambda c: inspect(c).get_table_names())
        finally:
            await engine.dispose()

        assert "user_settings" in tables

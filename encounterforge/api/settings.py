"""
Settings API endpoints.

Reads and replaces a player's stored settings snapshot. Replacing the
snapshot also updates the player's live session, if one exists.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from encounterforge.db import get_user_settings, save_user_settings, settings_to_model
from encounterforge.db.database import get_session
from encounterforge.models.session import SessionSettings
from encounterforge.services.session_store import SessionStore, get_session_store

router = APIRouter(prefix="/settings", tags=["settings"])


class SettingsResponse(BaseModel):
    """Response model for a settings snapshot."""

    user_id: str
    settings: SessionSettings
    stored: bool = False


@router.get("/{user_id}", response_model=SettingsResponse)
async def get_settings(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> SettingsResponse:
    """
    Get a player's settings.

    Returns the configured defaults with stored=False if nothing is stored.
    """
    record = await get_user_settings(session, user_id)
    if record is None:
        return SettingsResponse(user_id=user_id, settings=SessionSettings())

    return SettingsResponse(user_id=user_id, settings=settings_to_model(record), stored=True)


@router.put("/{user_id}", response_model=SettingsResponse)
async def put_settings(
    user_id: str,
    request: SessionSettings,
    session: Annotated[AsyncSession, Depends(get_session)],
    store: Annotated[SessionStore, Depends(get_session_store)],
) -> SettingsResponse:
    """
    Replace a player's settings.

    A live session picks up the new language, player count and expansions
    immediately; its slots are kept.
    """
    record = await save_user_settings(session, user_id, request)

    state = store.get(user_id)
    if state is not None:
        state.language = request.language
        state.player_count = request.player_count
        state.set_enabled(request.expansions)

    return SettingsResponse(user_id=user_id, settings=settings_to_model(record), stored=True)

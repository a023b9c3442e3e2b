"""
Session API endpoints.

Each player owns one live selection. Every mutation recomputes the roster
and returns the rendered session, with a warning when no roster could be
drawn.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from encounterforge.config import MAX_PLAYERS, MIN_PLAYERS
from encounterforge.db import get_user_settings, settings_to_model
from encounterforge.db.database import get_session
from encounterforge.models.failure import (
    ASSIGNMENT_IMPOSSIBLE_DETAIL,
    FailureDetail,
    KnownError,
    NotFoundError,
)
from encounterforge.models.game import (
    ColorClass,
    ExpansionPack,
    GameLanguage,
    LevelTier,
    SpecialKind,
)
from encounterforge.models.session import SessionSettings
from encounterforge.models.setup import SlotRequest
from encounterforge.services.catalog import Catalog, get_catalog
from encounterforge.services.roster_formatter import (
    format_roster,
    is_in_play,
    monster_label,
    slot_label,
)
from encounterforge.services.selection import SelectionState
from encounterforge.services.session_store import SessionStore, get_session_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/session", tags=["session"])


class SlotResponse(BaseModel):
    """One slot, raw and rendered."""

    label: str
    monster: str = ""
    monster_en: str | None = Field(
        default=None,
        description="English catalog name of the bound monster, if any",
    )
    number: int | None = None
    color: ColorClass | None = None
    level: LevelTier
    special: SpecialKind | None = None
    exclude: bool = False
    preset: bool = False
    in_play: bool = Field(
        default=True,
        description="False when the slot number exceeds the player count",
    )


class ActivePresetResponse(BaseModel):
    """The template the selection was loaded from."""

    pack: ExpansionPack
    chapter: int
    name: str


class SessionResponse(BaseModel):
    """Response model for a live session."""

    user_id: str
    language: GameLanguage
    player_count: int
    expansions: list[ExpansionPack] = Field(default_factory=list)
    slots: list[SlotResponse] = Field(default_factory=list)
    output: list[SlotResponse] = Field(default_factory=list)
    roster: str = ""
    active_preset: ActivePresetResponse | None = None
    warning: FailureDetail | None = None


class SlotAddRequest(BaseModel):
    """Request model for adding a custom slot."""

    number: int | None = Field(
        default=None,
        ge=MIN_PLAYERS,
        le=MAX_PLAYERS,
        description="Player count from which the slot is used",
    )
    color: ColorClass
    level: LevelTier = Field(
        default=LevelTier.SPECIAL,
        description="Rank tier; ignored for commander slots",
    )
    monster: str | None = Field(
        default=None,
        description="English name of a monster to bind to the slot",
        examples=["Skeleton"],
    )


class PresetLoadRequest(BaseModel):
    """Request model for loading a preset template."""

    pack: ExpansionPack
    chapter: int = Field(..., ge=0)
    index: int = Field(default=0, ge=0, description="Template index within the chapter")


class ToggleResponse(BaseModel):
    """Response model for an expansion toggle."""

    pack: ExpansionPack
    enabled: bool
    session: SessionResponse


def _http_error(error: KnownError) -> HTTPException:
    return HTTPException(status_code=error.status_code, detail=error.to_detail().model_dump())


def _render_slot(slot: SlotRequest, catalog: Catalog, state: SelectionState) -> SlotResponse:
    language = state.language
    return SlotResponse(
        label=slot_label(slot, language),
        monster=monster_label(slot, language, catalog.monsters),
        monster_en=slot.monster.name_en if slot.monster is not None else None,
        number=slot.number,
        color=slot.color,
        level=slot.level,
        special=slot.special,
        exclude=slot.exclude,
        preset=slot.preset,
        in_play=is_in_play(slot, state.player_count),
    )


def render_session(user_id: str, state: SelectionState, catalog: Catalog) -> SessionResponse:
    """Render a live selection for the API."""
    language = state.language
    preset = state.active_preset

    return SessionResponse(
        user_id=user_id,
        language=language,
        player_count=state.player_count,
        expansions=sorted(state.enabled, key=lambda p: p.sort_key(language)),
        slots=[_render_slot(s, catalog, state) for s in state.slots],
        output=[_render_slot(s, catalog, state) for s in state.output],
        roster=format_roster(state.output, language, catalog.monsters, state.player_count),
        active_preset=(
            ActivePresetResponse(pack=preset.pack, chapter=preset.chapter, name=preset.name)
            if preset is not None
            else None
        ),
        warning=ASSIGNMENT_IMPOSSIBLE_DETAIL if state.assignment_failed else None,
    )


async def _load_state(
    user_id: str,
    store: SessionStore,
    catalog: Catalog,
    session: AsyncSession,
) -> SelectionState:
    """
    Get the player's live selection, creating it on first use.

    A new selection is seeded from the stored settings snapshot (or the
    configured defaults) and starts from the configured preset when the
    snapshot asks for one.
    """
    state = store.get(user_id)
    if state is not None:
        return state

    record = await get_user_settings(session, user_id)
    snapshot = settings_to_model(record) if record is not None else SessionSettings()

    # Another request may have created the state while the lookup awaited
    if user_id in store:
        return store.get(user_id)

    state = store.get_or_create(user_id, catalog.monsters, snapshot)
    if snapshot.use_preset:
        try:
            state.load_preset(catalog.presets.get(snapshot.preset_pack, snapshot.preset_chapter))
        except LookupError:
            logger.debug(
                "No preset %s.%d for new session %s",
                snapshot.preset_pack.value,
                snapshot.preset_chapter,
                user_id,
            )
    return state


@router.get("/{user_id}", response_model=SessionResponse)
async def get_session_state(
    user_id: str,
    store: Annotated[SessionStore, Depends(get_session_store)],
    catalog: Annotated[Catalog, Depends(get_catalog)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> SessionResponse:
    """
    Get a player's live session.

    Creates the session from stored settings on first access.
    """
    state = await _load_state(user_id, store, catalog, session)
    return render_session(user_id, state, catalog)


@router.post("/{user_id}/slots", response_model=SessionResponse)
async def add_slot(
    user_id: str,
    request: SlotAddRequest,
    store: Annotated[SessionStore, Depends(get_session_store)],
    catalog: Annotated[Catalog, Depends(get_catalog)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> SessionResponse:
    """
    Add a custom slot and recompute the roster.

    Returns 400 if the slot is rejected, 404 if the named monster does not exist.
    """
    state = await _load_state(user_id, store, catalog, session)

    monster = None
    if request.monster is not None:
        monster = catalog.monsters.find(request.monster)
        if monster is None:
            raise _http_error(NotFoundError(f"Unknown monster: {request.monster}"))

    try:
        state.add_slot(request.number, request.color, request.level, monster)
    except KnownError as e:
        raise _http_error(e) from e

    return render_session(user_id, state, catalog)


@router.delete("/{user_id}/slots/{index}", response_model=SessionResponse)
async def remove_slot(
    user_id: str,
    index: int,
    store: Annotated[SessionStore, Depends(get_session_store)],
    catalog: Annotated[Catalog, Depends(get_catalog)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> SessionResponse:
    """Remove the slot at index and recompute the roster."""
    state = await _load_state(user_id, store, catalog, session)

    try:
        state.remove_slot(index)
    except KnownError as e:
        raise _http_error(e) from e

    return render_session(user_id, state, catalog)


@router.post("/{user_id}/randomize", response_model=SessionResponse)
async def randomize(
    user_id: str,
    store: Annotated[SessionStore, Depends(get_session_store)],
    catalog: Annotated[Catalog, Depends(get_catalog)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> SessionResponse:
    """Draw every open slot again. Fixed bindings and the active preset are kept."""
    state = await _load_state(user_id, store, catalog, session)
    state.randomize()
    return render_session(user_id, state, catalog)


@router.post("/{user_id}/expansions/{pack}", response_model=ToggleResponse)
async def toggle_expansion(
    user_id: str,
    pack: ExpansionPack,
    store: Annotated[SessionStore, Depends(get_session_store)],
    catalog: Annotated[Catalog, Depends(get_catalog)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ToggleResponse:
    """
    Enable or disable an expansion for the session.

    Slots bound to monsters of a disabled expansion go back to open.
    """
    state = await _load_state(user_id, store, catalog, session)
    enabled = state.toggle_expansion(pack)
    return ToggleResponse(
        pack=pack,
        enabled=enabled,
        session=render_session(user_id, state, catalog),
    )


@router.post("/{user_id}/preset", response_model=SessionResponse)
async def load_preset(
    user_id: str,
    request: PresetLoadRequest,
    store: Annotated[SessionStore, Depends(get_session_store)],
    catalog: Annotated[Catalog, Depends(get_catalog)],
    session: Annotated[AsyncSession, Depends(get_session)],
) -> SessionResponse:
    """
    Replace the selection with a preset template.

    Returns 404 if the pack/chapter has no template at that index.
    """
    try:
        setup = catalog.presets.get(request.pack, request.chapter, request.index)
    except LookupError as e:
        raise _http_error(NotFoundError(str(e))) from e

    state = await _load_state(user_id, store, catalog, session)
    state.load_preset(setup)
    return render_session(user_id, state, catalog)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(
    user_id: str,
    store: Annotated[SessionStore, Depends(get_session_store)],
) -> None:
    """
    Discard a player's live session.

    Stored settings are kept. Returns 404 if the player has no live session.
    """
    if not store.drop(user_id):
        raise _http_error(NotFoundError(f"No live session for {user_id}"))

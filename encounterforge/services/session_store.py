"""
In-process store of live selection states, one per player.

Each SelectionState is owned by exactly one entry. Handlers mutate a state
without awaiting in between, so every mutation runs to completion before
the next request for the same player is served.
"""

import logging
import random
from functools import lru_cache

from encounterforge.config import settings
from encounterforge.models.session import SessionSettings
from encounterforge.services.catalog import MonsterCatalog
from encounterforge.services.selection import SelectionState

logger = logging.getLogger(__name__)


def new_rng() -> random.Random:
    """Random source for a new session, seeded when a seed is configured."""
    if settings.rng_seed is None:
        return random.Random()
    return random.Random(settings.rng_seed)


class SessionStore:
    """Live selection states keyed by user_id."""

    def __init__(self) -> None:
        self._states: dict[str, SelectionState] = {}

    def __contains__(self, user_id: str) -> bool:
        return user_id in self._states

    def __len__(self) -> int:
        return len(self._states)

    def get(self, user_id: str) -> SelectionState | None:
        return self._states.get(user_id)

    def get_or_create(
        self,
        user_id: str,
        monsters: MonsterCatalog,
        snapshot: SessionSettings,
    ) -> SelectionState:
        """Return the player's state, seeding a new one from the settings snapshot."""
        state = self._states.get(user_id)
        if state is None:
            state = SelectionState.from_settings(monsters, snapshot, rng=new_rng())
            self._states[user_id] = state
            logger.debug("Created selection state for %s", user_id)
        return state

    def drop(self, user_id: str) -> bool:
        return self._states.pop(user_id, None) is not None

    def clear(self) -> None:
        self._states.clear()


@lru_cache(maxsize=1)
def get_session_store() -> SessionStore:
    """Process-wide session store (FastAPI dependency)."""
    return SessionStore()

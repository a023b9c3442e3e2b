"""
EncounterForge services.

Catalog loading, roster assignment and session state.
"""

from encounterforge.services.assignment import compute
from encounterforge.services.catalog import (
    Catalog,
    MonsterCatalog,
    PresetCatalog,
    build_catalog,
    get_catalog,
    load_catalog,
)
from encounterforge.services.roster_formatter import format_roster
from encounterforge.services.selection import SelectionState
from encounterforge.services.session_store import SessionStore, get_session_store

__all__ = [
    "Catalog",
    "MonsterCatalog",
    "PresetCatalog",
    "SelectionState",
    "SessionStore",
    "build_catalog",
    "compute",
    "format_roster",
    "get_catalog",
    "get_session_store",
    "load_catalog",
]

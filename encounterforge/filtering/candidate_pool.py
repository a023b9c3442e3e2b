"""
Candidate Pool Builder: Deterministic Pre-Shuffle Filtering.

Reduces the monster roster to the monsters eligible for random assignment.

INVARIANTS:
- Filtering is monotonic (only removes monsters, never adds)
- Same roster + enabled packs + selection → same pool, in catalog order
- Only enabled packs contribute; a draw still has to match the slot color
"""

import logging
from collections import deque
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from encounterforge.models.game import ExpansionPack
from encounterforge.models.monster import MonsterDefinition
from encounterforge.models.setup import SlotRequest

logger = logging.getLogger(__name__)


@dataclass
class CandidatePoolMetrics:
    """Metrics recorded per candidate pool build."""

    available: int = 0
    bound: int = 0
    final_pool_size: int = 0


# Module-level metrics accumulator, keeps only the most recent builds
MAX_METRICS_HISTORY = 1000
_metrics_history: deque[CandidatePoolMetrics] = deque(maxlen=MAX_METRICS_HISTORY)


def get_pool_metrics() -> list[CandidatePoolMetrics]:
    """Get the recorded metrics, oldest first."""
    return list(_metrics_history)


def reset_pool_metrics() -> None:
    """Reset metrics history (for testing)."""
    _metrics_history.clear()


def build_available_pool(
    monsters: Iterable[MonsterDefinition],
    enabled: Iterable[ExpansionPack],
) -> list[MonsterDefinition]:
    """Every monster of an enabled pack, in roster order."""
    packs = set(enabled)
    return [m for m in monsters if m.pack in packs]


def bound_monster_names(selection: Iterable[SlotRequest]) -> set[str]:
    """English names of every monster bound anywhere in the selection, exclude rows included."""
    return {slot.monster.name_en for slot in selection if slot.monster is not None}


def build_candidate_pool(
    available: Sequence[MonsterDefinition],
    selection: Sequence[SlotRequest],
) -> list[MonsterDefinition]:
    """
    Remove monsters already committed by the selection from the available pool.

    Args:
        available: Output of build_available_pool
        selection: The current slot requests

    Returns:
        Available monsters not bound by any slot, in input order
    """
    bound = bound_monster_names(selection)
    candidates = [m for m in available if m.name_en not in bound]

    metrics = CandidatePoolMetrics(
        available=len(available),
        bound=len(bound),
        final_pool_size=len(candidates),
    )
    _metrics_history.append(metrics)

    logger.debug(
        "Candidate pool: %d available, %d after removing %d bound monsters",
        len(available),
        len(candidates),
        len(bound),
    )
    return candidates

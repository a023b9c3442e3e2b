"""
Assignment engine.

Fills the open slots of a selection with randomly drawn, distinct monsters
of the requested color.

The search runs in two phases:
1. Draw from enabled monsters not bound anywhere in the selection.
2. If that fails, draw again from all enabled monsters, allowing a monster
   that is fixed elsewhere in the selection to be drawn a second time.

If both phases fail there is no valid assignment and the result is None.
That is an expected outcome (too many distinct monsters requested for the
enabled content), not an error.

The shuffle is the only source of randomness. Given the same random.Random
state the result is fully deterministic.
"""

import logging
import random
from collections import Counter
from collections.abc import Iterable, Sequence

from encounterforge.filtering.candidate_pool import build_available_pool, build_candidate_pool
from encounterforge.models.game import ColorClass, ExpansionPack, LevelTier
from encounterforge.models.monster import MonsterDefinition
from encounterforge.models.setup import SlotRequest

logger = logging.getLogger(__name__)

DemandKey = tuple[ColorClass, LevelTier]
Picks = dict[DemandKey, list[MonsterDefinition]]


def tally_demand(selection: Iterable[SlotRequest]) -> Counter[DemandKey] | None:
    """
    Count open slots per (color, level).

    Keys keep the order in which they first appear in the selection.

    Returns:
        The demand, or None if an open slot has no color and
        therefore can never be filled
    """
    demand: Counter[DemandKey] = Counter()
    for slot in selection:
        if slot.exclude or slot.is_resolved:
            continue
        if slot.color is None:
            return None
        demand[(slot.color, slot.level)] += 1
    return demand


def draw(
    pool: Sequence[MonsterDefinition],
    demand: Counter[DemandKey],
    rng: random.Random,
) -> Picks | None:
    """
    One assignment attempt over a freshly shuffled copy of the pool.

    For each demand key and each unit of its count, takes the first
    remaining monster of matching color.

    Returns:
        Monsters drawn per key, or None if the pool runs out of a color
    """
    remaining = list(pool)
    rng.shuffle(remaining)

    picks: Picks = {}
    for key, count in demand.items():
        color = key[0]
        for _ in range(count):
            index = next((i for i, m in enumerate(remaining) if m.color == color), None)
            if index is None:
                logger.debug("No %s monster left for %s", color.value, key[1].value)
                return None
            picks.setdefault(key, []).append(remaining.pop(index))

    return picks


def materialize(selection: Iterable[SlotRequest], picks: Picks) -> list[SlotRequest]:
    """
    Build the roster from the selection and a successful draw.

    Exclude rows are omitted. Bound slots are kept and marked preset.
    Open slots take the next monster drawn for their key.
    """
    drawn = {key: iter(monsters) for key, monsters in picks.items()}

    output: list[SlotRequest] = []
    for slot in selection:
        if slot.exclude:
            continue
        if slot.monster is not None:
            output.append(slot.bind(slot.monster, preset=True))
        else:
            # tally_demand guarantees a color for every open slot
            key = (slot.color, slot.level)
            output.append(slot.bind(next(drawn[key]), preset=False))  # type: ignore[index]

    return output


def compute(
    selection: Sequence[SlotRequest],
    enabled: Iterable[ExpansionPack],
    monsters: Iterable[MonsterDefinition],
    rng: random.Random | None = None,
) -> list[SlotRequest] | None:
    """
    Compute the roster for a selection.

    Args:
        selection: Slot requests in display order
        enabled: Packs whose monsters may be drawn
        monsters: The monster roster (typically a MonsterCatalog)
        rng: Source of the shuffle. A fresh unseeded Random if omitted

    Returns:
        The roster (exclude rows omitted, every entry bound), or None
        if no valid assignment exists
    """
    rng = rng or random.Random()

    demand = tally_demand(selection)
    if demand is None:
        logger.info("Selection has an open slot without color; no assignment possible")
        return None

    available = build_available_pool(monsters, enabled)
    candidates = build_candidate_pool(available, selection)

    picks = draw(candidates, demand, rng)
    if picks is None:
        logger.debug(
            "Draw from %d unbound monsters failed; retrying with all %d available",
            len(candidates),
            len(available),
        )
        picks = draw(available, demand, rng)

    if picks is None:
        logger.info(
            "No assignment for %d open slots from %d available monsters",
            sum(demand.values()),
            len(available),
        )
        return None

    return materialize(selection, picks)

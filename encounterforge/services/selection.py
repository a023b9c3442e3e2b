"""
Selection state.

The live working set of one session: the slot requests the player declared
or loaded from a preset, and the roster last computed from them.

Every mutation recomputes the roster before returning. A failed
computation leaves an empty roster and sets assignment_failed; a partially
filled roster is never stored.
"""

import logging
import random
from collections.abc import Iterable

from encounterforge.config import MAX_PLAYERS, MIN_PLAYERS
from encounterforge.models.failure import InvalidSlotError
from encounterforge.models.game import ColorClass, ExpansionPack, GameLanguage, LevelTier
from encounterforge.models.monster import PURE_SPECIAL_MONSTER, MonsterDefinition
from encounterforge.models.session import SessionSettings
from encounterforge.models.setup import PresetDescriptor, Setup, SlotRequest
from encounterforge.services.assignment import compute
from encounterforge.services.catalog import MonsterCatalog

logger = logging.getLogger(__name__)


class SelectionState:
    """
    Mutable selection of one session.

    Usage:
        state = SelectionState(catalog.monsters, enabled={ExpansionPack.CORE})
        state.add_slot(1, ColorClass.WHITE, LevelTier.ROOKIE)
        state.output          # roster with a random white monster
        state.randomize()     # draw again
    """

    def __init__(
        self,
        monsters: MonsterCatalog,
        enabled: Iterable[ExpansionPack] = (ExpansionPack.CORE,),
        player_count: int = MAX_PLAYERS,
        language: GameLanguage = GameLanguage.EN,
        rng: random.Random | None = None,
    ):
        self._monsters = monsters
        self._rng = rng or random.Random()
        self.enabled: set[ExpansionPack] = set(enabled)
        self.player_count = player_count
        self.language = language

        self.slots: list[SlotRequest] = []
        self.output: list[SlotRequest] = []
        self.active_preset: PresetDescriptor | None = None
        self.assignment_failed = False

    @classmethod
    def from_settings(
        cls,
        monsters: MonsterCatalog,
        session_settings: SessionSettings,
        rng: random.Random | None = None,
    ) -> "SelectionState":
        return cls(
            monsters,
            enabled=session_settings.expansions,
            player_count=session_settings.player_count,
            language=session_settings.language,
            rng=rng,
        )

    # --- Mutations ---

    def add_slot(
        self,
        number: int | None,
        color: ColorClass,
        level: LevelTier,
        monster: MonsterDefinition | None = None,
    ) -> SlotRequest:
        """
        Append a custom slot and recompute.

        Commander slots always use LevelTier.SPECIAL; the given level is
        ignored for them.

        Raises:
            InvalidSlotError: If the number exceeds the player count, the
                color is a special color, a ranked color has no rank, or
                the monster does not fit the slot
        """
        if number is not None and not MIN_PLAYERS <= number <= self.player_count:
            raise InvalidSlotError(
                f"Slot number {number} is outside 1..{self.player_count}",
                suggestion="Raise the player count or pick a lower number.",
            )
        if color.is_any_special():
            raise InvalidSlotError(f"Slots cannot be added with color {color.value}")

        if color is ColorClass.COMMANDER:
            level = LevelTier.SPECIAL
        elif level is LevelTier.SPECIAL:
            raise InvalidSlotError(f"{color.value} slots need a level")

        if monster is not None:
            if monster.color != color:
                raise InvalidSlotError(
                    f"{monster.name_en} is {monster.color.value}, not {color.value}"
                )
            if monster.pack not in self.enabled:
                raise InvalidSlotError(
                    f"{monster.name_en} belongs to a disabled expansion",
                    suggestion=f"Enable {monster.pack.name_for(self.language)}.",
                )

        slot = SlotRequest(number=number, color=color, level=level, monster=monster)
        self.slots.append(slot)
        self._recompute(keep_preset=False)
        return slot

    def remove_slot(self, index: int) -> SlotRequest:
        """
        Delete the slot at index and recompute.

        Raises:
            InvalidSlotError: If there is no slot at index
        """
        if not 0 <= index < len(self.slots):
            raise InvalidSlotError(f"No slot at index {index}")

        slot = self.slots.pop(index)
        self._recompute(keep_preset=False)
        return slot

    def randomize(self) -> None:
        """Draw open slots again, keeping the selection and active preset."""
        self._recompute(keep_preset=True)

    def toggle_expansion(self, pack: ExpansionPack) -> bool:
        """
        Enable a disabled pack or disable an enabled one.

        Returns:
            True if the pack is enabled afterwards
        """
        enabled = set(self.enabled)
        enabled.symmetric_difference_update({pack})
        self.set_enabled(enabled)
        return pack in self.enabled

    def set_enabled(self, packs: Iterable[ExpansionPack]) -> None:
        """
        Replace the enabled packs.

        Slots bound to a monster of a pack that is no longer enabled go back
        to open; color, level, special unit, exclude and preset flags are kept.
        Special units without a catalog monster stay bound.
        """
        self.enabled = set(packs)

        cleared = 0
        for i, slot in enumerate(self.slots):
            if _bound_outside(slot, self.enabled):
                self.slots[i] = slot.unbind()
                cleared += 1

        if cleared:
            logger.debug("Cleared %d slots bound to disabled expansions", cleared)
        self._recompute(keep_preset=False)

    def load_preset(self, setup: Setup) -> None:
        """Replace the selection with a copy of a template's roster and recompute."""
        self.slots = [
            slot.bind(slot.monster, preset=True) if slot.monster is not None else slot
            for slot in setup.slots
        ]
        self._recompute(keep_preset=False)
        self.active_preset = setup.descriptor(self.language)

    def clear(self) -> None:
        """Empty the selection."""
        self.slots = []
        self._recompute(keep_preset=False)

    # --- Computation ---

    def _recompute(self, keep_preset: bool) -> None:
        if not keep_preset:
            self.active_preset = None

        output = compute(self.slots, self.enabled, self._monsters, self._rng)
        self.assignment_failed = output is None
        self.output = output or []


def _bound_outside(slot: SlotRequest, enabled: set[ExpansionPack]) -> bool:
    if slot.monster is None or slot.monster == PURE_SPECIAL_MONSTER:
        return False
    return slot.monster.pack not in enabled

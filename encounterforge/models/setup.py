"""
Slot and preset template models.

A SlotRequest is one demand or commitment unit of an encounter. A Setup is a
curated template: an ordered roster of SlotRequests for one pack and chapter.

INVARIANTS:
- All models are frozen; state changes produce new instances
- A slot with exclude=True never appears in a computed roster
- A resolved slot (monster bound) is never reassigned by the engine
"""

from dataclasses import dataclass, replace

from encounterforge.models.game import (
    ColorClass,
    ExpansionPack,
    GameLanguage,
    LevelTier,
    SpecialKind,
)
from encounterforge.models.monster import MonsterDefinition


@dataclass(frozen=True, slots=True)
class SlotRequest:
    """
    One slot of an encounter.

    Attributes:
        number: Player count from which the slot is used (1-5), None for exclude rows
        color: Declared color class, None when not declared
        level: Rank tier, or LevelTier.SPECIAL for commander/special/exclude slots
        monster: Bound monster, None while the slot is open
        special: Special unit the slot was bound to, if any
        exclude: True if the slot only withholds its monster from random draws
        preset: True if the binding is fixed (template or engine-preserved)
    """

    number: int | None
    color: ColorClass | None
    level: LevelTier
    monster: MonsterDefinition | None = None
    special: SpecialKind | None = None
    exclude: bool = False
    preset: bool = False

    @property
    def is_resolved(self) -> bool:
        return self.monster is not None

    @property
    def demand_key(self) -> tuple[ColorClass | None, LevelTier]:
        return (self.color, self.level)

    def bind(self, monster: MonsterDefinition, preset: bool) -> "SlotRequest":
        return replace(self, monster=monster, preset=preset)

    def unbind(self) -> "SlotRequest":
        return replace(self, monster=None)


@dataclass(frozen=True, slots=True)
class Setup:
    """A curated encounter template."""

    pack: ExpansionPack
    chapter: int
    name_en: str
    name_de: str
    slots: tuple[SlotRequest, ...] = ()

    @property
    def order_key(self) -> tuple[int, int]:
        return (self.pack.ordinal, self.chapter)

    def name_for(self, language: GameLanguage) -> str:
        return self.name_en if language is GameLanguage.EN else self.name_de

    def descriptor(self, language: GameLanguage) -> "PresetDescriptor":
        return PresetDescriptor(pack=self.pack, chapter=self.chapter, name=self.name_for(language))


@dataclass(frozen=True, slots=True)
class PresetDescriptor:
    """Reference to the preset a selection was loaded from."""

    pack: ExpansionPack
    chapter: int
    name: str

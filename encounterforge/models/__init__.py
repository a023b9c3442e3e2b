from encounterforge.models.failure import (
    ASSIGNMENT_IMPOSSIBLE_DETAIL,
    FailureDetail,
    FailureKind,
    InvalidSlotError,
    KnownError,
    NotFoundError,
)
from encounterforge.models.game import (
    ColorClass,
    ExpansionPack,
    GameLanguage,
    InvalidOperandError,
    LevelTier,
    SpecialColorPolicy,
    SpecialKind,
)
from encounterforge.models.monster import PURE_SPECIAL_MONSTER, MonsterDefinition
from encounterforge.models.setup import PresetDescriptor, Setup, SlotRequest

__all__ = [
    "ASSIGNMENT_IMPOSSIBLE_DETAIL",
    "PURE_SPECIAL_MONSTER",
    "ColorClass",
    "ExpansionPack",
    "FailureDetail",
    "FailureKind",
    "GameLanguage",
    "InvalidOperandError",
    "InvalidSlotError",
    "KnownError",
    "LevelTier",
    "MonsterDefinition",
    "NotFoundError",
    "PresetDescriptor",
    "Setup",
    "SlotRequest",
    "SpecialColorPolicy",
    "SpecialKind",
]

"""
Closed game enumerations.

Expansion packs, monster color classes, level tiers and special units are
fixed sets. Each enum carries its localized names and the short codes used in
the catalog grammar and in rendered rosters.

INVARIANTS:
- Special and SpecialCommander have no rendered name, short form or prefix.
  Asking for one raises InvalidOperandError (a programming error, never a
  user-facing condition).
- LevelTier.SPECIAL has no rank code or rank name for the same reason.
"""

from enum import Enum


class InvalidOperandError(Exception):
    """
    Raised when a helper is called on an enum arm that does not support it.

    This is a contract violation. Callers must check the arm first
    (e.g. ColorClass.is_any_special) instead of catching this.
    """

    def __init__(self, operand: Enum, operation: str):
        self.operand = operand
        self.operation = operation
        super().__init__(f"called {type(operand).__name__}.{operand.name}.{operation}()")


class GameLanguage(str, Enum):
    """Languages the game material is printed in."""

    EN = "en"
    DE = "de"


def _pick(names: tuple[str, str], language: GameLanguage) -> str:
    return names[0] if language is GameLanguage.EN else names[1]


class ExpansionPack(str, Enum):
    """
    A purchasable content set.

    The value is the token used in catalog rows. Declaration order is the
    pack ordinal, which orders preset templates in the catalog.
    """

    CORE = "Core"
    APOCALYPSE = "Apocalypse"
    AWAKENINGS = "Awakenings"
    DESERT_OF_THE_HELLSCAR = "DesertOfTheHellscar"
    FALLEN_SISTERS = "FallenSisters"
    MONSTER_PACK_1 = "MonsterPack1"
    RISE_OF_THE_UNDEAD_DRAGON = "RiseOfTheUndeadDragon"
    SPOILS_OF_WAR = "SpoilsOfWar"
    THE_RUIN_OF_LUCCANOR = "TheRuinOfLuccanor"
    THE_SHADOW_WORLD = "TheShadowWorld"

    @property
    def ordinal(self) -> int:
        return _PACK_ORDER[self]

    def name_for(self, language: GameLanguage) -> str:
        return _pick(_PACK_NAMES[self], language)

    def sort_key(self, language: GameLanguage) -> str:
        """Display ordering key: the core game always comes first."""
        if self is ExpansionPack.CORE:
            return "!first"
        return self.name_for(language)

    @classmethod
    def parse(cls, token: str) -> "ExpansionPack":
        """
        Resolve a catalog token.

        Accepts the enum value ("DesertOfTheHellscar") or the English
        display name ("Desert of the Hellscar").

        Raises:
            ValueError: If the token names no pack
        """
        try:
            return cls(token)
        except ValueError:
            for pack in cls:
                if pack.name_for(GameLanguage.EN) == token:
                    return pack
            raise


_PACK_ORDER: dict[ExpansionPack, int] = {pack: i for i, pack in enumerate(ExpansionPack)}

_PACK_NAMES: dict[ExpansionPack, tuple[str, str]] = {
    ExpansionPack.CORE: ("Core", "Grundspiel"),
    ExpansionPack.APOCALYPSE: ("Apocalypse", "Apocalypse"),
    ExpansionPack.AWAKENINGS: ("Awakenings", "Erwachen"),
    ExpansionPack.DESERT_OF_THE_HELLSCAR: ("Desert of the Hellscar", "Wüste der Narben"),
    ExpansionPack.FALLEN_SISTERS: ("Fallen Sisters", "Fallen Sisters*"),
    ExpansionPack.MONSTER_PACK_1: ("Monster Pack 1", "Neue Helden & neue Monster"),
    ExpansionPack.RISE_OF_THE_UNDEAD_DRAGON: ("Rise of the Undead Dragon", "Der untote Drache"),
    ExpansionPack.SPOILS_OF_WAR: ("Spoils of War", "Kriegsbeute"),
    ExpansionPack.THE_RUIN_OF_LUCCANOR: ("The Ruin of Luccanor", "Admiral Luccanors Verderben"),
    ExpansionPack.THE_SHADOW_WORLD: ("The Shadow World", "Die Schattenwelt"),
}


class ColorClass(str, Enum):
    """Monster size/role category."""

    WHITE = "White"
    GRAY = "Gray"
    BLACK = "Black"
    COMMANDER = "Commander"
    SPECIAL = "Special"
    SPECIAL_COMMANDER = "SpecialCommander"

    def is_any_special(self) -> bool:
        return self in (ColorClass.SPECIAL, ColorClass.SPECIAL_COMMANDER)

    def is_any_commander(self) -> bool:
        return self in (ColorClass.COMMANDER, ColorClass.SPECIAL_COMMANDER)

    def is_ranked(self) -> bool:
        """True for colors whose slots carry a Rookie..Champion tier."""
        return self in (ColorClass.WHITE, ColorClass.GRAY, ColorClass.BLACK)

    def name_for(self, language: GameLanguage) -> str:
        return _pick(self._table(_COLOR_NAMES, "name_for"), language)

    def short(self, language: GameLanguage) -> str:
        return _pick(self._table(_COLOR_SHORT, "short"), language)

    def prefix(self, language: GameLanguage) -> str:
        return _pick(self._table(_COLOR_PREFIX, "prefix"), language)

    def prefix_lower(self) -> str:
        if self is ColorClass.SPECIAL:
            raise InvalidOperandError(self, "prefix_lower")
        if self is ColorClass.SPECIAL_COMMANDER:
            return "c"
        return self.prefix(GameLanguage.EN).lower()

    def size(self, language: GameLanguage) -> str | None:
        """Miniature base size, only defined for ranked colors."""
        if self in (ColorClass.WHITE, ColorClass.GRAY):
            return _pick(("small", "klein"), language)
        if self is ColorClass.BLACK:
            return _pick(("big", "groß"), language)
        return None

    def _table(
        self, table: dict["ColorClass", tuple[str, str]], operation: str
    ) -> tuple[str, str]:
        if self.is_any_special():
            raise InvalidOperandError(self, operation)
        return table[self]


_COLOR_NAMES: dict[ColorClass, tuple[str, str]] = {
    ColorClass.WHITE: ("White", "Weiß"),
    ColorClass.GRAY: ("Gray", "Grau"),
    ColorClass.BLACK: ("Black", "Schwarz"),
    ColorClass.COMMANDER: ("Commander", "Kommandant"),
}

_COLOR_SHORT: dict[ColorClass, tuple[str, str]] = {
    ColorClass.WHITE: ("WM", "WM"),
    ColorClass.GRAY: ("GM", "GM"),
    ColorClass.BLACK: ("BM", "SM"),
    ColorClass.COMMANDER: ("Commander", "Kommandant"),
}

_COLOR_PREFIX: dict[ColorClass, tuple[str, str]] = {
    ColorClass.WHITE: ("W", "W"),
    ColorClass.GRAY: ("G", "G"),
    ColorClass.BLACK: ("B", "S"),
    ColorClass.COMMANDER: ("C", "K"),
}


class LevelTier(str, Enum):
    """
    Difficulty rank of a monster instance.

    SPECIAL is used by Commander slots, special-marked slots and exclude
    rows. The special unit itself, if any, lives on SlotRequest.special.
    """

    ROOKIE = "Rookie"
    FIGHTER = "Fighter"
    VETERAN = "Veteran"
    CHAMPION = "Champion"
    SPECIAL = "Special"

    @classmethod
    def ranks(cls) -> tuple["LevelTier", ...]:
        return (cls.ROOKIE, cls.FIGHTER, cls.VETERAN, cls.CHAMPION)

    @classmethod
    def from_code(cls, code: str) -> "LevelTier":
        """
        Resolve a two-letter rank code ("Ro", "Fi", "Ve", "Ch").

        Raises:
            ValueError: If the code names no rank
        """
        for level in cls.ranks():
            if _LEVEL_CODES[level] == code:
                return level
        raise ValueError(f"unknown level code: {code!r}")

    @property
    def code(self) -> str:
        if self is LevelTier.SPECIAL:
            raise InvalidOperandError(self, "code")
        return _LEVEL_CODES[self]

    @property
    def code_lower(self) -> str:
        return self.code.lower()

    def name_for(self, language: GameLanguage) -> str:
        if self is LevelTier.SPECIAL:
            raise InvalidOperandError(self, "name_for")
        return _pick(_LEVEL_NAMES[self], language)


_LEVEL_CODES: dict[LevelTier, str] = {
    LevelTier.ROOKIE: "Ro",
    LevelTier.FIGHTER: "Fi",
    LevelTier.VETERAN: "Ve",
    LevelTier.CHAMPION: "Ch",
}

_LEVEL_NAMES: dict[LevelTier, tuple[str, str]] = {
    LevelTier.ROOKIE: ("Rookie", "Novize"),
    LevelTier.FIGHTER: ("Fighter", "Kämpfer"),
    LevelTier.VETERAN: ("Veteran", "Veteran"),
    LevelTier.CHAMPION: ("Champion", "Meister"),
}


class SpecialKind(str, Enum):
    """
    A named non-standard unit referenced from preset rosters as ``*Name``.

    Some kinds stand for a catalog monster, some force the slot color.
    """

    COMMANDER_BRUTE = "Commander Brute"
    WANDERING_MONSTER = "Wandering Monster"
    NEMESIS = "Nemesis"
    UNDEAD_DRAGON = "Undead Dragon"
    SOUL_REAPER = "Soul Reaper"

    def name_for(self, language: GameLanguage) -> str:
        return _pick(_SPECIAL_NAMES[self], language)

    @property
    def monster(self) -> str | None:
        """English name of the catalog monster representing this unit."""
        return _SPECIAL_MONSTERS.get(self)

    @property
    def color(self) -> ColorClass | None:
        """Forced slot color, if the unit overrides it."""
        return _SPECIAL_COLORS.get(self)

    @classmethod
    def find(cls, name_en: str) -> "SpecialKind | None":
        for kind in cls:
            if kind.name_for(GameLanguage.EN) == name_en:
                return kind
        return None


_SPECIAL_NAMES: dict[SpecialKind, tuple[str, str]] = {
    SpecialKind.COMMANDER_BRUTE: ("Commander Brute", "Kommandant Rohling"),
    SpecialKind.WANDERING_MONSTER: ("Wandering Monster", "Wandermonster"),
    SpecialKind.NEMESIS: ("Nemesis", "Nemesis"),
    SpecialKind.UNDEAD_DRAGON: ("Undead Dragon", "Untoter Drache"),
    SpecialKind.SOUL_REAPER: ("Soul Reaper", "Seelenschnitter"),
}

_SPECIAL_MONSTERS: dict[SpecialKind, str] = {
    SpecialKind.UNDEAD_DRAGON: "Undead Dragon",
    SpecialKind.SOUL_REAPER: "Soul Reaper",
}

_SPECIAL_COLORS: dict[SpecialKind, ColorClass] = {
    SpecialKind.COMMANDER_BRUTE: ColorClass.COMMANDER,
    SpecialKind.NEMESIS: ColorClass.SPECIAL_COMMANDER,
}


class SpecialColorPolicy(str, Enum):
    """
    Color given to an ``S`` slot bound to a special kind without a forced color.

    NONE leaves the slot without a displayed color; COMMANDER treats it as
    a Commander slot.
    """

    NONE = "none"
    COMMANDER = "commander"

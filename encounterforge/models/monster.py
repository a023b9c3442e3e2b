import re
from dataclasses import dataclass

from encounterforge.models.game import ColorClass, ExpansionPack, GameLanguage

_NON_ALNUM = re.compile(r"[^0-9A-Za-z]")


@dataclass(frozen=True, slots=True)
class MonsterDefinition:
    """
    One catalog monster.

    Attributes:
        name_en: English name, the monster's identity in the catalog
        name_de: German display name
        pack: Expansion pack the monster ships in
        color: Color class of the monster
        represented_by: English name of the monster whose miniature
            stands in for this one, or None if it has its own
    """

    name_en: str
    name_de: str
    pack: ExpansionPack
    color: ColorClass
    represented_by: str | None = None

    @property
    def ident(self) -> str:
        """Alphanumeric identifier derived from the English name."""
        return _NON_ALNUM.sub("", self.name_en)

    def name_for(self, language: GameLanguage) -> str:
        return self.name_en if language is GameLanguage.EN else self.name_de


# Bound by special-marked slots whose unit has no catalog monster.
# Never part of a catalog roster, so never drawn at random.
PURE_SPECIAL_MONSTER = MonsterDefinition(
    name_en="(special)",
    name_de="(Spezial)",
    pack=ExpansionPack.CORE,
    color=ColorClass.SPECIAL,
)

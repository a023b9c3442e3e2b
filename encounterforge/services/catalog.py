"""
Monster and preset catalogs.

Parses the catalog text once into immutable lookup structures and caches
the result for the lifetime of the process.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType

from encounterforge.config import settings
from encounterforge.models.game import ExpansionPack, GameLanguage, SpecialColorPolicy
from encounterforge.models.monster import MonsterDefinition
from encounterforge.models.setup import Setup
from encounterforge.parsers.catalog_grammar import parse_monster_rows, parse_setup_rows

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonsterCatalog:
    """
    The full, read-only monster roster.

    Attributes:
        monsters: Every catalog monster in file order
    """

    monsters: tuple[MonsterDefinition, ...] = ()
    _by_name: Mapping[str, MonsterDefinition] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "_by_name", MappingProxyType({m.name_en: m for m in self.monsters})
        )

    def __contains__(self, name_en: object) -> bool:
        return name_en in self._by_name

    def __len__(self) -> int:
        return len(self.monsters)

    def __iter__(self) -> Iterator[MonsterDefinition]:
        return iter(self.monsters)

    @property
    def by_name(self) -> Mapping[str, MonsterDefinition]:
        """Read-only mapping of English name to monster."""
        return self._by_name

    def get(self, name_en: str) -> MonsterDefinition:
        """
        Look up a monster by English name.

        Raises:
            KeyError: If no monster has that name
        """
        return self._by_name[name_en]

    def find(self, name_en: str) -> MonsterDefinition | None:
        return self._by_name.get(name_en)

    def for_packs(self, enabled: Iterable[ExpansionPack]) -> list[MonsterDefinition]:
        """Monsters from the given packs, in catalog order."""
        packs = set(enabled)
        return [m for m in self.monsters if m.pack in packs]

    def miniature(self, monster: MonsterDefinition) -> MonsterDefinition | None:
        """The monster whose miniature stands in for this one, if any."""
        if monster.represented_by is None:
            return None
        return self._by_name[monster.represented_by]


@dataclass(frozen=True)
class PresetCatalog:
    """
    Ordered preset templates.

    Templates are sorted by (pack ordinal, chapter); the grammar parser
    rejects catalogs that are not.
    """

    setups: tuple[Setup, ...] = ()

    def __len__(self) -> int:
        return len(self.setups)

    def packs(self, language: GameLanguage = GameLanguage.EN) -> list[ExpansionPack]:
        """Packs that own at least one template, core game first."""
        packs = {s.pack for s in self.setups}
        return sorted(packs, key=lambda p: p.sort_key(language))

    def chapters(self, pack: ExpansionPack) -> list[int]:
        return sorted({s.chapter for s in self.setups if s.pack == pack})

    def setups_for(self, pack: ExpansionPack, chapter: int) -> list[Setup]:
        return [s for s in self.setups if s.pack == pack and s.chapter == chapter]

    def get(self, pack: ExpansionPack, chapter: int, index: int = 0) -> Setup:
        """
        Get one template of a pack/chapter.

        Raises:
            LookupError: If the pack/chapter has no template at that index
        """
        matches = self.setups_for(pack, chapter)
        if not 0 <= index < len(matches):
            raise LookupError(f"No preset {pack.value}.{chapter}[{index}]")
        return matches[index]


@dataclass(frozen=True)
class Catalog:
    """Both catalogs, built together from one set of catalog files."""

    monsters: MonsterCatalog
    presets: PresetCatalog


def build_catalog(
    monster_text: str,
    setup_text: str,
    special_color_policy: SpecialColorPolicy = SpecialColorPolicy.NONE,
) -> Catalog:
    """
    Build both catalogs from catalog text.

    Raises:
        CatalogBuildError: If either text violates the grammar or an invariant
    """
    monsters = MonsterCatalog(tuple(parse_monster_rows(monster_text)))
    setups = parse_setup_rows(setup_text, monsters.by_name, special_color_policy)
    return Catalog(monsters=monsters, presets=PresetCatalog(tuple(setups)))


def load_catalog(
    monster_path: Path | None = None,
    setup_path: Path | None = None,
    special_color_policy: SpecialColorPolicy | None = None,
) -> Catalog:
    """
    Load catalogs from files.

    Args:
        monster_path: Monster catalog file. Defaults to the configured path
        setup_path: Setup catalog file. Defaults to the configured path
        special_color_policy: Defaults to the configured policy

    Raises:
        FileNotFoundError: If a catalog file doesn't exist
        CatalogBuildError: If the catalog text is invalid
    """
    monster_path = monster_path or settings.monster_catalog_path
    setup_path = setup_path or settings.setup_catalog_path
    if special_color_policy is None:
        special_color_policy = settings.special_color_policy

    for path in (monster_path, setup_path):
        if not path.exists():
            raise FileNotFoundError(f"Catalog file not found at {path}.")

    catalog = build_catalog(
        monster_path.read_text(encoding="utf-8"),
        setup_path.read_text(encoding="utf-8"),
        special_color_policy,
    )

    logger.info(
        "Loaded %d monsters and %d presets from %s",
        len(catalog.monsters),
        len(catalog.presets),
        monster_path.parent,
    )
    return catalog


@lru_cache(maxsize=1)
def get_catalog() -> Catalog:
    """
    Get the process-wide catalog.

    Built on first call and never modified afterwards.

    Raises:
        FileNotFoundError: If a catalog file doesn't exist
        CatalogBuildError: If the catalog text is invalid
    """
    return load_catalog()

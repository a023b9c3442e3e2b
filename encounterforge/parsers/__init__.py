from encounterforge.parsers.catalog_grammar import (
    CatalogBuildError,
    parse_monster_rows,
    parse_setup_rows,
    split_rows,
)

__all__ = [
    "CatalogBuildError",
    "parse_monster_rows",
    "parse_setup_rows",
    "split_rows",
]

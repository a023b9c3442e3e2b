"""
Validate the monster and setup catalogs.

Run this job after editing a catalog file. It parses both files with the
same grammar the service uses at startup and reports the first error.
"""

import argparse
import logging
import sys
from pathlib import Path

from encounterforge.models.game import SpecialColorPolicy
from encounterforge.parsers.catalog_grammar import CatalogBuildError
from encounterforge.services.catalog import Catalog, load_catalog

logger = logging.getLogger(__name__)


def run_validation(
    monster_path: Path | None = None,
    setup_path: Path | None = None,
    special_color_policy: SpecialColorPolicy | None = None,
) -> Catalog | None:
    """
    Parse both catalogs.

    Returns:
        The parsed catalog, or None if a file is missing or invalid
    """
    try:
        catalog = load_catalog(monster_path, setup_path, special_color_policy)
    except FileNotFoundError as e:
        logger.error("%s", e)
        return None
    except CatalogBuildError as e:
        logger.error("Invalid catalog: %s", e)
        return None

    for pack in catalog.presets.packs():
        logger.info(
            "%s: %d monsters, chapters %s",
            pack.value,
            len(catalog.monsters.for_packs([pack])),
            catalog.presets.chapters(pack),
        )
    return catalog


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns the process exit code."""
    parser = argparse.ArgumentParser(description="Validate EncounterForge catalog files")
    parser.add_argument(
        "--monsters",
        type=Path,
        default=None,
        help="Monster catalog file (default: configured path)",
    )
    parser.add_argument(
        "--setups",
        type=Path,
        default=None,
        help="Setup catalog file (default: configured path)",
    )
    parser.add_argument(
        "--special-color-policy",
        type=SpecialColorPolicy,
        choices=list(SpecialColorPolicy),
        default=None,
        help="Color given to special slots without one (default: configured policy)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    catalog = run_validation(args.monsters, args.setups, args.special_color_policy)
    return 0 if catalog is not None else 1


if __name__ == "__main__":
    sys.exit(main())

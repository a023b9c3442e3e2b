"""Tests for the catalog validation job."""

import logging
from pathlib import Path

import pytest

from encounterforge.jobs.validate_catalog import main, run_validation
from encounterforge.models.game import ColorClass, SpecialColorPolicy


@pytest.fixture
def catalog_files(tmp_path: Path, monster_text: str, setup_text: str) -> tuple[Path, Path]:
    monster_path = tmp_path / "monsters.csv"
    setup_path = tmp_path / "setups.csv"
    monster_path.write_text(monster_text, encoding="utf-8")
    setup_path.write_text(setup_text, encoding="utf-8")
    return monster_path, setup_path


class TestRunValidation:
    def test_valid_catalog(self, catalog_files: tuple[Path, Path]) -> None:
        catalog = run_validation(*catalog_files)

        assert catalog is not None
        assert len(catalog.monsters) == 9

    def test_packaged_catalog(self) -> None:
        assert run_validation() is not None

    def test_policy_override(self, catalog_files: tuple[Path, Path]) -> None:
        catalog = run_validation(*catalog_files, SpecialColorPolicy.COMMANDER)

        wandering = catalog.presets.setups[-1].slots[-1]
        assert wandering.color is ColorClass.COMMANDER

    def test_invalid_catalog_logged(
        self, catalog_files: tuple[Path, Path], caplog: pytest.LogCaptureFixture
    ) -> None:
        monster_path, setup_path = catalog_files
        setup_path.write_text("Core,1,A,A,W1 Ro,Nobody\n", encoding="utf-8")

        with caplog.at_level(logging.ERROR):
            assert run_validation(monster_path, setup_path) is None

        assert "unknown monster" in caplog.text

    def test_missing_file_logged(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.ERROR):
            assert run_validation(tmp_path / "nope.csv", tmp_path / "nope.csv") is None

        assert "not found" in caplog.text


class TestMain:
    def test_exit_code_zero_on_success(self, catalog_files: tuple[Path, Path]) -> None:
        monster_path, setup_path = catalog_files

        assert main(["--monsters", str(monster_path), "--setups", str(setup_path)]) == 0

    def test_exit_code_one_on_failure(self, catalog_files: tuple[Path, Path]) -> None:
        monster_path, setup_path = catalog_files
        monster_path.write_text("Core,Orc,White,Orc,Ork\n", encoding="utf-8")

        assert main(["--monsters", str(monster_path), "--setups", str(setup_path)]) == 1

    def test_policy_argument(self, catalog_files: tuple[Path, Path]) -> None:
        monster_path, setup_path = catalog_files

        exit_code = main(
            [
                "--monsters",
                str(monster_path),
                "--setups",
                str(setup_path),
                "--special-color-policy",
                "commander",
            ]
        )

        assert exit_code == 0

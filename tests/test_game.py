"""Tests for the closed game enumerations."""

import pytest

from encounterforge.models.game import (
    ColorClass,
    ExpansionPack,
    GameLanguage,
    InvalidOperandError,
    LevelTier,
    SpecialKind,
)


class TestExpansionPack:
    def test_ordinal_follows_declaration_order(self) -> None:
        assert ExpansionPack.CORE.ordinal == 0
        assert ExpansionPack.APOCALYPSE.ordinal == 1
        assert ExpansionPack.THE_SHADOW_WORLD.ordinal == len(ExpansionPack) - 1

    def test_core_sorts_first_in_every_language(self) -> None:
        for language in GameLanguage:
            packs = sorted(ExpansionPack, key=lambda p: p.sort_key(language))
            assert packs[0] is ExpansionPack.CORE

    def test_other_packs_sort_by_localized_name(self) -> None:
        packs = sorted(ExpansionPack, key=lambda p: p.sort_key(GameLanguage.EN))
        names = [p.name_for(GameLanguage.EN) for p in packs[1:]]
        assert names == sorted(names)

    def test_localized_names(self) -> None:
        assert ExpansionPack.CORE.name_for(GameLanguage.DE) == "Grundspiel"
        assert ExpansionPack.SPOILS_OF_WAR.name_for(GameLanguage.EN) == "Spoils of War"

    def test_parse_accepts_value_and_display_name(self) -> None:
        assert ExpansionPack.parse("DesertOfTheHellscar") is ExpansionPack.DESERT_OF_THE_HELLSCAR
        assert (
            ExpansionPack.parse("Desert of the Hellscar")
            is ExpansionPack.DESERT_OF_THE_HELLSCAR
        )

    def test_parse_unknown_raises(self) -> None:
        with pytest.raises(ValueError):
            ExpansionPack.parse("Nowhere")


class TestColorClass:
    def test_predicates(self) -> None:
        assert ColorClass.SPECIAL.is_any_special()
        assert ColorClass.SPECIAL_COMMANDER.is_any_special()
        assert not ColorClass.COMMANDER.is_any_special()

        assert ColorClass.COMMANDER.is_any_commander()
        assert ColorClass.SPECIAL_COMMANDER.is_any_commander()
        assert not ColorClass.BLACK.is_any_commander()

        assert ColorClass.GRAY.is_ranked()
        assert not ColorClass.COMMANDER.is_ranked()

    def test_names_and_prefixes(self) -> None:
        assert ColorClass.BLACK.name_for(GameLanguage.DE) == "Schwarz"
        assert ColorClass.BLACK.prefix(GameLanguage.EN) == "B"
        assert ColorClass.BLACK.prefix(GameLanguage.DE) == "S"
        assert ColorClass.COMMANDER.prefix(GameLanguage.DE) == "K"
        assert ColorClass.WHITE.short(GameLanguage.EN) == "WM"

    def test_prefix_lower(self) -> None:
        assert ColorClass.GRAY.prefix_lower() == "g"
        assert ColorClass.SPECIAL_COMMANDER.prefix_lower() == "c"

    def test_size(self) -> None:
        assert ColorClass.WHITE.size(GameLanguage.EN) == "small"
        assert ColorClass.BLACK.size(GameLanguage.DE) == "groß"
        assert ColorClass.COMMANDER.size(GameLanguage.EN) is None

    @pytest.mark.parametrize("color", [ColorClass.SPECIAL, ColorClass.SPECIAL_COMMANDER])
    def test_special_colors_have_no_name(self, color: ColorClass) -> None:
        with pytest.raises(InvalidOperandError):
            color.name_for(GameLanguage.EN)
        with pytest.raises(InvalidOperandError):
            color.short(GameLanguage.EN)
        with pytest.raises(InvalidOperandError):
            color.prefix(GameLanguage.DE)

    def test_special_has_no_lower_prefix(self) -> None:
        with pytest.raises(InvalidOperandError) as exc_info:
            ColorClass.SPECIAL.prefix_lower()

        assert exc_info.value.operand is ColorClass.SPECIAL
        assert exc_info.value.operation == "prefix_lower"


class TestLevelTier:
    def test_from_code(self) -> None:
        assert LevelTier.from_code("Ro") is LevelTier.ROOKIE
        assert LevelTier.from_code("Ch") is LevelTier.CHAMPION

    def test_from_code_rejects_unknown(self) -> None:
        with pytest.raises(ValueError):
            LevelTier.from_code("Xx")

    def test_ranks_exclude_special(self) -> None:
        assert LevelTier.SPECIAL not in LevelTier.ranks()
        assert len(LevelTier.ranks()) == 4

    def test_codes_and_names(self) -> None:
        assert LevelTier.VETERAN.code == "Ve"
        assert LevelTier.VETERAN.code_lower == "ve"
        assert LevelTier.CHAMPION.name_for(GameLanguage.DE) == "Meister"

    def test_special_has_no_code(self) -> None:
        with pytest.raises(InvalidOperandError):
            _ = LevelTier.SPECIAL.code
        with pytest.raises(InvalidOperandError):
            LevelTier.SPECIAL.name_for(GameLanguage.EN)


class TestSpecialKind:
    def test_find_by_english_name(self) -> None:
        assert SpecialKind.find("Commander Brute") is SpecialKind.COMMANDER_BRUTE
        assert SpecialKind.find("Kommandant Rohling") is None

    def test_represented_monsters(self) -> None:
        assert SpecialKind.UNDEAD_DRAGON.monster == "Undead Dragon"
        assert SpecialKind.WANDERING_MONSTER.monster is None

    def test_forced_colors(self) -> None:
        assert SpecialKind.COMMANDER_BRUTE.color is ColorClass.COMMANDER
        assert SpecialKind.NEMESIS.color is ColorClass.SPECIAL_COMMANDER
        assert SpecialKind.SOUL_REAPER.color is None

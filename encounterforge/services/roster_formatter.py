"""
Roster formatter.

THIS MODULE HANDLES OUTPUT RENDERING ONLY.

It turns computed rosters into localized labels. It does not validate:
it trusts that every entry it receives came out of the assignment engine.
"""

from encounterforge.models.game import GameLanguage, LevelTier
from encounterforge.models.monster import PURE_SPECIAL_MONSTER
from encounterforge.models.setup import SlotRequest
from encounterforge.services.catalog import MonsterCatalog

EXCLUDE_LABEL = "Exclude"

NOT_IN_PLAY_LABELS = {
    GameLanguage.EN: "not in play",
    GameLanguage.DE: "nicht im Spiel",
}


def is_in_play(slot: SlotRequest, player_count: int) -> bool:
    """A slot is used once the player count reaches its number. Unnumbered slots always are."""
    return slot.number is None or slot.number <= player_count


def slot_label(slot: SlotRequest, language: GameLanguage) -> str:
    """
    Label of a slot as printed on a roster.

    Examples (English):
        "W1 Ro"           ranked slot
        "Commander 2"     commander slot
        "Undead Dragon"   special unit
    """
    if slot.exclude:
        return EXCLUDE_LABEL

    if slot.special is not None:
        return slot.special.name_for(language)

    if slot.color is None:
        return ""

    number = "" if slot.number is None else str(slot.number)
    if slot.level is LevelTier.SPECIAL:
        return f"{slot.color.name_for(language)} {number}".rstrip()

    return f"{slot.color.prefix(language)}{number} {slot.level.code}"


def monster_label(
    slot: SlotRequest,
    language: GameLanguage,
    catalog: MonsterCatalog | None = None,
) -> str:
    """Name of the bound monster, with its stand-in miniature when the catalog knows one."""
    if slot.monster is None or slot.monster == PURE_SPECIAL_MONSTER:
        return ""

    name = slot.monster.name_for(language)
    if catalog is not None:
        miniature = catalog.miniature(slot.monster)
        if miniature is not None:
            name = f"{name} (→ {miniature.name_for(language)})"
    return name


def format_roster(
    output: list[SlotRequest],
    language: GameLanguage,
    catalog: MonsterCatalog | None = None,
    player_count: int | None = None,
) -> str:
    """
    Format a roster as one line per entry.

    Args:
        output: A roster computed by the assignment engine
        language: Language of labels and names
        catalog: Resolves stand-in miniatures when given
        player_count: Marks entries numbered above it as not in play

    Returns:
        Lines of "<slot label>: <monster name>", suffixed with
        "(not in play)" for entries the player count does not reach
    """
    lines: list[str] = []
    for slot in output:
        label = slot_label(slot, language)
        name = monster_label(slot, language, catalog)
        line = f"{label}: {name}" if name else label
        if player_count is not None and not is_in_play(slot, player_count):
            line = f"{line} ({NOT_IN_PLAY_LABELS[language]})"
        lines.append(line)
    return "\n".join(lines)

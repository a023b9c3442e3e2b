"""
Parser for the catalog text format.

Two row families share one comma-separated notation. Blank lines and lines
starting with "#" are ignored; trailing empty fields are trimmed.

Monster rows:
    <pack>,<English name>,<color>,<represented-by name or "self">,<German name>

Example:
    Core,Skeleton Warrior,White,self,Skelettkrieger
    Awakenings,Skeleton Archer,White,Skeleton Warrior,Skelettbogenschütze

Setup rows:
    <pack>,<chapter>,<English name>,<German name>,(<slot code>,<monster>)*

Example:
    Core,1,The Graveyard,Der Friedhof,Exclude,Troll,C1,Orc Chief,W1 Ro,,G2 Fi,

Slot codes:
    Exclude          withhold the paired monster (if any) from random draws
    W1 Ro            color char (W, G, B, C or S), player-count digit (1-5),
                     and for W/G/B a level code (Ro, Fi, Ve, Ch)

Monster field:
    (empty)          open slot, filled at random
    *Name            special unit from the SpecialKind table
    Name             catalog monster by exact English name

Every violation raises CatalogBuildError. Nothing is returned on failure.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, replace

from encounterforge.config import MAX_PLAYERS, MIN_PLAYERS
from encounterforge.models.game import (
    ColorClass,
    ExpansionPack,
    LevelTier,
    SpecialColorPolicy,
    SpecialKind,
)
from encounterforge.models.monster import PURE_SPECIAL_MONSTER, MonsterDefinition
from encounterforge.models.setup import Setup, SlotRequest

EXCLUDE_CODE = "Exclude"
SELF_REFERENCE = "self"
SPECIAL_MARKER = "*"

MONSTER_FIELD_COUNT = 5
SETUP_HEADER_FIELD_COUNT = 4

# Color characters of slot codes; "S" declares no color
SLOT_COLOR_CHARS: dict[str, ColorClass | None] = {
    "W": ColorClass.WHITE,
    "G": ColorClass.GRAY,
    "B": ColorClass.BLACK,
    "C": ColorClass.COMMANDER,
    "S": None,
}


class CatalogBuildError(Exception):
    """
    Raised when catalog text violates the grammar or a load-time invariant.

    This is a content-authoring bug. The catalog cannot be used and
    the program must not start with a partial catalog.
    """

    def __init__(
        self,
        reason: str,
        line: str = "",
        line_number: int | None = None,
        field: str | None = None,
    ):
        self.reason = reason
        self.line = line
        self.line_number = line_number
        self.field = field

        message = f'error "{reason}"'
        if field is not None:
            message += f' on field "{field}"'
        if line_number is not None:
            message += f" in line {line_number}"
        if line:
            message += f': "{line}"'
        super().__init__(message)


@dataclass(frozen=True, slots=True)
class CatalogRow:
    """One non-empty, non-comment line split into fields."""

    line_number: int
    line: str
    fields: list[str]

    def error(self, reason: str, field: str | None = None) -> CatalogBuildError:
        return CatalogBuildError(reason, line=self.line, line_number=self.line_number, field=field)


def split_rows(text: str) -> Iterator[CatalogRow]:
    """Yield rows of catalog text, skipping blank lines and comments."""
    for line_number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        fields = [f.strip() for f in line.split(",")]
        while fields and not fields[-1]:
            fields.pop()

        yield CatalogRow(line_number=line_number, line=line, fields=fields)


def _parse_pack(row: CatalogRow, token: str) -> ExpansionPack:
    try:
        return ExpansionPack.parse(token)
    except ValueError:
        raise row.error("unknown expansion pack", field=token) from None


# --- Monster rows ---


def parse_monster_rows(text: str) -> list[MonsterDefinition]:
    """
    Parse monster rows into a validated roster.

    Args:
        text: Monster catalog text

    Returns:
        Monsters in file order

    Raises:
        CatalogBuildError: On bad tokens, duplicate English names,
            or represented-by links that dangle, point to themselves
            or chain through another stand-in
    """
    monsters: list[MonsterDefinition] = []
    rows: dict[str, CatalogRow] = {}

    for row in split_rows(text):
        monster = _read_monster(row)

        if monster.name_en in rows:
            other = rows[monster.name_en]
            raise row.error(
                f"duplicate monster name (first seen in line {other.line_number})",
                field=monster.name_en,
            )

        rows[monster.name_en] = row
        monsters.append(monster)

    by_name = {m.name_en: m for m in monsters}
    for monster in monsters:
        if monster.represented_by is None:
            continue

        row = rows[monster.name_en]
        target = by_name.get(monster.represented_by)
        if target is None:
            raise row.error("unknown represented-by monster", field=monster.represented_by)
        if target.name_en == monster.name_en:
            raise row.error("monster represented by itself", field=monster.represented_by)
        if target.represented_by is not None:
            raise row.error(
                f"represented-by monster is itself represented by {target.represented_by!r}",
                field=monster.represented_by,
            )

    return monsters


def _read_monster(row: CatalogRow) -> MonsterDefinition:
    if len(row.fields) < MONSTER_FIELD_COUNT:
        raise row.error(f"expected {MONSTER_FIELD_COUNT} fields, got {len(row.fields)}")

    pack_token, name_en, color_token, represented, name_de = row.fields[:MONSTER_FIELD_COUNT]

    pack = _parse_pack(row, pack_token)
    try:
        color = ColorClass(color_token)
    except ValueError:
        raise row.error("unknown color", field=color_token) from None

    if not name_en:
        raise row.error("empty monster name")
    if not represented:
        raise row.error("empty represented-by field", field=name_en)

    return MonsterDefinition(
        name_en=name_en,
        name_de=name_de,
        pack=pack,
        color=color,
        represented_by=None if represented == SELF_REFERENCE else represented,
    )


# --- Setup rows ---


def parse_setup_rows(
    text: str,
    monsters: Mapping[str, MonsterDefinition],
    special_color_policy: SpecialColorPolicy = SpecialColorPolicy.NONE,
) -> list[Setup]:
    """
    Parse setup rows into preset templates.

    Args:
        text: Setup catalog text
        monsters: Validated roster keyed by English name
        special_color_policy: Color of "S" slots whose special unit
            neither forces a color nor stands for a catalog monster

    Returns:
        Setups in file order

    Raises:
        CatalogBuildError: On bad tokens, unknown monsters, color
            mismatches, decreasing slot numbers, or templates not sorted
            by (pack, chapter)
    """
    setups: list[Setup] = []
    previous: Setup | None = None

    for row in split_rows(text):
        setup = _read_setup(row, monsters, special_color_policy)

        if previous is not None and setup.order_key < previous.order_key:
            raise row.error(
                f"wrong order: {previous.pack.value}.{previous.chapter}.{previous.name_en} "
                f"is before {setup.pack.value}.{setup.chapter}.{setup.name_en}"
            )

        previous = setup
        setups.append(setup)

    return setups


def _read_setup(
    row: CatalogRow,
    monsters: Mapping[str, MonsterDefinition],
    policy: SpecialColorPolicy,
) -> Setup:
    if len(row.fields) < SETUP_HEADER_FIELD_COUNT:
        raise row.error(f"expected at least {SETUP_HEADER_FIELD_COUNT} fields")

    pack = _parse_pack(row, row.fields[0])
    try:
        chapter = int(row.fields[1])
    except ValueError:
        raise row.error("unknown chapter", field=row.fields[1]) from None
    if chapter < 0:
        raise row.error("negative chapter", field=row.fields[1])

    pairs = row.fields[SETUP_HEADER_FIELD_COUNT:]
    if len(pairs) % 2:
        pairs = [*pairs, ""]

    slots: list[SlotRequest] = []
    last_number = MIN_PLAYERS
    for i in range(0, len(pairs), 2):
        code, monster_field = pairs[i], pairs[i + 1]
        if not code and not monster_field:
            continue

        if code == EXCLUDE_CODE:
            slot = SlotRequest(number=None, color=None, level=LevelTier.SPECIAL, exclude=True)
        else:
            number, color, level = _read_slot_code(row, code)
            if number < last_number:
                raise row.error("number decreased", field=code)
            last_number = number
            slot = SlotRequest(number=number, color=color, level=level)

        slots.append(_bind_slot(row, slot, code, monster_field, monsters, policy))

    return Setup(
        pack=pack,
        chapter=chapter,
        name_en=row.fields[2],
        name_de=row.fields[3],
        slots=tuple(slots),
    )


def _read_slot_code(row: CatalogRow, code: str) -> tuple[int, ColorClass | None, LevelTier]:
    if len(code) < 2:
        raise row.error("field too short", field=code)

    color_char, digit, level_code = code[0], code[1], code[2:].strip()

    if color_char not in SLOT_COLOR_CHARS:
        raise row.error("unknown color", field=code)
    color = SLOT_COLOR_CHARS[color_char]

    if not digit.isdigit() or not MIN_PLAYERS <= int(digit) <= MAX_PLAYERS:
        raise row.error("unknown number", field=code)

    if color is not None and color.is_ranked():
        try:
            level = LevelTier.from_code(level_code)
        except ValueError:
            raise row.error("unknown regular level", field=code) from None
    elif level_code:
        raise row.error("unknown commander/special level", field=code)
    else:
        level = LevelTier.SPECIAL

    return int(digit), color, level


def _bind_slot(
    row: CatalogRow,
    slot: SlotRequest,
    code: str,
    monster_field: str,
    monsters: Mapping[str, MonsterDefinition],
    policy: SpecialColorPolicy,
) -> SlotRequest:
    if not monster_field:
        if not slot.exclude and slot.color is None:
            raise row.error("special without monster", field=code)
        return slot

    if monster_field.startswith(SPECIAL_MARKER):
        return _bind_special(row, slot, code, monster_field, monsters, policy)

    monster = monsters.get(monster_field)
    if monster is None:
        raise row.error("unknown monster", field=monster_field)

    if slot.exclude:
        return replace(slot, monster=monster)

    # special-colored monsters bind only through a special unit
    if monster.color.is_any_special():
        raise row.error(
            f"color mismatch: monster {monster.color.value} needs {SPECIAL_MARKER}{monster_field}",
            field=monster_field,
        )

    # "S" slots take the color of the monster they are bound to
    if slot.color is None:
        return replace(slot, color=monster.color, monster=monster)

    if slot.color != monster.color:
        raise row.error(
            f"color mismatch: slot {slot.color.value}, monster {monster.color.value}",
            field=monster_field,
        )
    return replace(slot, monster=monster)


def _bind_special(
    row: CatalogRow,
    slot: SlotRequest,
    code: str,
    monster_field: str,
    monsters: Mapping[str, MonsterDefinition],
    policy: SpecialColorPolicy,
) -> SlotRequest:
    name = monster_field[len(SPECIAL_MARKER) :]
    kind = SpecialKind.find(name)
    if kind is None:
        raise row.error("unknown special monster", field=monster_field)

    if kind.monster is None:
        monster = PURE_SPECIAL_MONSTER
    else:
        found = monsters.get(kind.monster)
        if found is None:
            raise row.error(f"unknown monster {kind.monster!r} for special unit", field=code)
        monster = found

    color = slot.color
    if not slot.exclude:
        if kind.color is not None:
            color = kind.color
        elif color is None and kind.monster is not None:
            color = monster.color
        elif color is None and policy is SpecialColorPolicy.COMMANDER:
            color = ColorClass.COMMANDER

    return replace(slot, color=color, level=LevelTier.SPECIAL, monster=monster, special=kind)

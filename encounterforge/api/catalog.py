"""
Catalog API endpoints.

Read-only browsing of expansions, monsters and preset templates.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from encounterforge.models.game import ColorClass, ExpansionPack, GameLanguage
from encounterforge.services.catalog import Catalog, get_catalog
from encounterforge.services.roster_formatter import monster_label, slot_label

router = APIRouter(prefix="/catalog", tags=["catalog"])


class ExpansionResponse(BaseModel):
    """One expansion pack."""

    pack: ExpansionPack
    name: str
    monster_count: int = 0
    has_presets: bool = False


class MonsterResponse(BaseModel):
    """One catalog monster."""

    name_en: str
    name: str
    pack: ExpansionPack
    color: ColorClass
    represented_by: str | None = Field(
        default=None,
        description="English name of the monster whose miniature stands in for this one",
    )


class PresetPackResponse(BaseModel):
    """A pack that has preset templates, with its chapters."""

    pack: ExpansionPack
    name: str
    chapters: list[int] = Field(default_factory=list)


class PresetSlotResponse(BaseModel):
    """One slot of a preset template, rendered."""

    label: str
    monster: str = ""
    exclude: bool = False


class PresetResponse(BaseModel):
    """One preset template."""

    index: int
    name: str
    slots: list[PresetSlotResponse] = Field(default_factory=list)


@router.get("/expansions", response_model=list[ExpansionResponse])
async def list_expansions(
    catalog: Annotated[Catalog, Depends(get_catalog)],
    language: GameLanguage = GameLanguage.EN,
) -> list[ExpansionResponse]:
    """List every expansion pack, core game first."""
    preset_packs = set(catalog.presets.packs(language))
    packs = sorted(ExpansionPack, key=lambda p: p.sort_key(language))

    return [
        ExpansionResponse(
            pack=pack,
            name=pack.name_for(language),
            monster_count=len(catalog.monsters.for_packs([pack])),
            has_presets=pack in preset_packs,
        )
        for pack in packs
    ]


@router.get("/monsters", response_model=list[MonsterResponse])
async def list_monsters(
    catalog: Annotated[Catalog, Depends(get_catalog)],
    expansion: Annotated[list[ExpansionPack] | None, Query()] = None,
    language: GameLanguage = GameLanguage.EN,
) -> list[MonsterResponse]:
    """
    List catalog monsters.

    Filters by one or more expansions when given; otherwise returns all.
    """
    monsters = catalog.monsters.for_packs(expansion) if expansion else list(catalog.monsters)

    return [
        MonsterResponse(
            name_en=m.name_en,
            name=m.name_for(language),
            pack=m.pack,
            color=m.color,
            represented_by=m.represented_by,
        )
        for m in monsters
    ]


@router.get("/presets", response_model=list[PresetPackResponse])
async def list_preset_packs(
    catalog: Annotated[Catalog, Depends(get_catalog)],
    language: GameLanguage = GameLanguage.EN,
) -> list[PresetPackResponse]:
    """List packs with preset templates and their chapters."""
    return [
        PresetPackResponse(
            pack=pack,
            name=pack.name_for(language),
            chapters=catalog.presets.chapters(pack),
        )
        for pack in catalog.presets.packs(language)
    ]


@router.get("/presets/{pack}/{chapter}", response_model=list[PresetResponse])
async def list_presets(
    pack: ExpansionPack,
    chapter: int,
    catalog: Annotated[Catalog, Depends(get_catalog)],
    language: GameLanguage = GameLanguage.EN,
) -> list[PresetResponse]:
    """List the templates of one pack and chapter, with their rosters."""
    setups = catalog.presets.setups_for(pack, chapter)
    if not setups:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No presets for {pack.value} chapter {chapter}",
        )

    return [
        PresetResponse(
            index=i,
            name=setup.name_for(language),
            slots=[
                PresetSlotResponse(
                    label=slot_label(slot, language),
                    monster=monster_label(slot, language, catalog.monsters),
                    exclude=slot.exclude,
                )
                for slot in setup.slots
            ],
        )
        for i, setup in enumerate(setups)
    ]

from pydantic import BaseModel, Field

from encounterforge.config import MAX_PLAYERS, MIN_PLAYERS, settings
from encounterforge.models.game import ExpansionPack, GameLanguage


class SessionSettings(BaseModel):
    """
    A player's settings snapshot.

    Stored by the persistence layer and used to seed new sessions.
    """

    language: GameLanguage = Field(default_factory=lambda: settings.default_language)
    expansions: set[ExpansionPack] = Field(
        default_factory=lambda: set(settings.default_expansions),
        description="Enabled expansion packs",
    )
    use_preset: bool = Field(
        default=True,
        description="True to build encounters from preset templates, False for custom slots",
    )
    player_count: int = Field(
        default_factory=lambda: settings.default_player_count,
        ge=MIN_PLAYERS,
        le=MAX_PLAYERS,
    )
    preset_pack: ExpansionPack = ExpansionPack.CORE
    preset_chapter: int = Field(default=1, ge=0)

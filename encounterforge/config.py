from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from encounterforge.models.game import ExpansionPack, GameLanguage, SpecialColorPolicy

DATA_DIR = Path(__file__).parent / "data"


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="ENCOUNTERFORGE_")

    app_name: str = "EncounterForge"
    debug: bool = False

    database_url: str = "sqlite+aiosqlite:///./encounterforge.db"

    monster_catalog_path: Path = DATA_DIR / "monsters.csv"
    setup_catalog_path: Path = DATA_DIR / "setups.csv"

    # Defaults for a player without a stored settings snapshot
    default_language: GameLanguage = GameLanguage.EN
    default_expansions: frozenset[ExpansionPack] = frozenset({ExpansionPack.CORE})
    default_player_count: int = 5

    # Seed for every new session's shuffle; None draws from system entropy
    rng_seed: int | None = None

    # Color of "S" slots bound to a special unit without a forced color
    special_color_policy: SpecialColorPolicy = SpecialColorPolicy.NONE


settings = Settings()


# =============================================================================
# SLOT LIMITS
# =============================================================================

# Player-count numbers printed on slot codes
MIN_PLAYERS = 1
MAX_PLAYERS = 5

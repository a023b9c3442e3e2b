from encounterforge.db.database import get_session, init_db
from encounterforge.db.operations import (
    delete_user_settings,
    get_user_settings,
    save_user_settings,
    settings_to_model,
)

__all__ = [
    "delete_user_settings",
    "get_session",
    "get_user_settings",
    "init_db",
    "save_user_settings",
    "settings_to_model",
]

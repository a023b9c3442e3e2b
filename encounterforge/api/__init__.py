from encounterforge.api.catalog import router as catalog_router
from encounterforge.api.health import router as health_router
from encounterforge.api.session import router as session_router
from encounterforge.api.settings import router as settings_router

__all__ = [
    "catalog_router",
    "health_router",
    "session_router",
    "settings_router",
]

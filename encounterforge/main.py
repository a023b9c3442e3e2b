from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from encounterforge.api import (
    catalog_router,
    health_router,
    session_router,
    settings_router,
)
from encounterforge.config import settings
from encounterforge.db.database import init_db
from encounterforge.services.catalog import get_catalog


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    # Fail at startup on a broken catalog, not on the first request
    get_catalog()
    await init_db()
    yield


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("encounterforge"),
    lifespan=lifespan,
)

app.include_router(catalog_router)
app.include_router(health_router)
app.include_router(session_router)
app.include_router(settings_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

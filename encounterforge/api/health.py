"""
Health check endpoints.

Provides liveness and readiness probes with database and catalog checks.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from encounterforge.db.database import get_session
from encounterforge.services.catalog import Catalog, get_catalog

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    database: str | None = None
    monsters: int | None = None
    presets: int | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running.
    Does not check dependencies.
    """
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(
    response: Response,
    session: Annotated[AsyncSession, Depends(get_session)],
    catalog: Annotated[Catalog, Depends(get_catalog)],
) -> HealthResponse:
    """
    Readiness probe.

    Returns ready if the service can handle requests.
    Checks database connectivity. Returns 503 if database is unavailable.
    Reports catalog sizes.
    """
    counts = {"monsters": len(catalog.monsters), "presets": len(catalog.presets)}
    try:
        await session.execute(text("SELECT 1"))
        return HealthResponse(status="ready", database="connected", **counts)
    except SQLAlchemyError:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(status="not ready", database="disconnected", **counts)

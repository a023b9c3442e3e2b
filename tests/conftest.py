import random

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from encounterforge.db.database import get_session
from encounterforge.filtering.candidate_pool import reset_pool_metrics
from encounterforge.main import app
from encounterforge.models.db import Base
from encounterforge.services.catalog import Catalog, build_catalog, get_catalog
from encounterforge.services.session_store import get_session_store

MONSTER_TEXT = """\
# pack,English name,color,represented by,German name
Core,Skeleton,White,self,Skelett
Core,Orc,White,self,Ork
Core,Ghoul,Gray,self,Ghul
Core,Troll,Black,self,Troll
Core,Orc Chief,Commander,self,Orkhäuptling
Core,Soul Reaper,Special,self,Seelenschnitter
Awakenings,Zombie,White,Skeleton,Zombie
Awakenings,Wight,Gray,self,Grabunhold
RiseOfTheUndeadDragon,Undead Dragon,SpecialCommander,self,Untoter Drache
"""

SETUP_TEXT = """\
# pack,chapter,English name,German name,(slot code,monster)*
Core,1,The Graveyard,Der Friedhof,Exclude,Troll,C1,Orc Chief,W1Ro,
Core,2,Soul Harvest,Seelenernte,S1,*Soul Reaper,W1 Ro,Skeleton,G2 Fi,
Awakenings,1,Restless Dead,Ruhelose Tote,W1 Ro,Zombie,C1,*Commander Brute,S2,*Wandering Monster
"""


@pytest.fixture(autouse=True)
def reset_state():
    """Clear process-wide metrics and live sessions between tests."""
    reset_pool_metrics()
    get_session_store().clear()
    yield
    get_session_store().clear()


@pytest.fixture
def monster_text() -> str:
    return MONSTER_TEXT


@pytest.fixture
def setup_text() -> str:
    return SETUP_TEXT


@pytest.fixture
def catalog() -> Catalog:
    """Small catalog covering every color and special unit."""
    return build_catalog(MONSTER_TEXT, SETUP_TEXT)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def client(async_engine, catalog: Catalog):
    """Provide an async test client with overridden database session and catalog."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_session():
        async with async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_catalog] = lambda: catalog

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()

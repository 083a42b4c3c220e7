"""Root conftest - per-test SQLite store and HTTP clients against the app.

Invariants:
    - Every test gets a fresh SQLite file database under tmp_path
    - db_manager singleton points at the test engine for the test's duration
      and is restored afterwards
    - Lifespan does not run under ASGITransport, so fixtures own setup/teardown

Design Decisions:
    - File database over :memory:: the refetch tests read concurrently, and
      separate pooled connections keep those reads independent
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./folio-test.db")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402

import folio.infrastructure.database as db_module  # noqa: E402
from folio.client.api_client import FolioClient  # noqa: E402
from folio.db.base import Base  # noqa: E402
from folio.infrastructure.database import DatabaseSessionManager  # noqa: E402
from folio.main import app  # noqa: E402
from folio.models import Experience, Portfolio  # noqa: E402, F401


@pytest.fixture
async def test_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{(tmp_path / 'folio.db').as_posix()}", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_manager(test_engine):
    """Session manager over the test engine, installed as the app singleton."""
    manager = DatabaseSessionManager.from_engine(test_engine)
    original_manager = db_module.db_manager
    db_module.db_manager = manager
    yield manager
    db_module.db_manager = original_manager


@pytest.fixture
async def client(db_manager):
    """Raw HTTP client for route tests."""
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def folio_client(db_manager):
    """Typed FolioClient talking to the app in-process."""
    async with FolioClient(
        base_url="http://test", transport=ASGITransport(app=app),
    ) as c:
        yield c


@pytest.fixture
def portfolio_payload():
    return {
        "title": "Folio",
        "description": "Personal portfolio site",
        "imageUrl": "https://example.com/cover.png",
        "projectUrl": "",
        "githubUrl": "https://github.com/example/folio",
        "technologies": ["React", " TypeScript ", ""],
        "featured": True,
    }


@pytest.fixture
def experience_payload():
    return {
        "title": "Backend Engineer",
        "company": "Acme",
        "location": "Remote",
        "startDate": "2020-01-01",
        "endDate": "2022-07-01",
        "current": False,
        "description": "Built the billing platform",
        "technologies": ["Python", "PostgreSQL"],
    }

import os

# ── Environment Overrides ───────────────────────────────────────────
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_ALGORITHM"] = "HS256"
os.environ["JWT_VERIFY_KEY"] = "test-secret"
os.environ["JWT_SIGNING_KEY"] = "test-secret"
os.environ.pop("JWT_ISSUER", None)
# ────────────────────────────────────────────────────────────────────

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from ark.main import app
from ark.core.database import Base, get_db
from ark.core.security import create_access_token
from ark.models.models import Asset, AssetLog  # noqa: F401  (register tables)


def _enable_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE and FK checks unless asked per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
async def engine():
    _engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(_engine.sync_engine, "connect", _enable_foreign_keys)
    yield _engine
    await _engine.dispose()


@pytest.fixture
def TestingSessionLocal(engine):
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture(autouse=True)
async def init_db(engine):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def db_session(TestingSessionLocal):
    async with TestingSessionLocal() as session:
        yield session


@pytest.fixture(autouse=True)
async def override_get_db(db_session):
    async def _get_test_db():
        yield db_session
    app.dependency_overrides[get_db] = _get_test_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture
async def client():
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


def bearer(sub: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(sub)}"}


@pytest.fixture
def auth_headers():
    return bearer


@pytest.fixture
def alice_headers() -> dict[str, str]:
    return bearer("alice")


@pytest.fixture
def bob_headers() -> dict[str, str]:
    return bearer("bob")

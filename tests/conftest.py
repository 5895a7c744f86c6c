import base64
import json
from collections.abc import AsyncGenerator

import itsdangerous
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from recruiter.api.deps import get_store
from recruiter.core.config import get_settings
from recruiter.main import create_app
from recruiter.schemas.user import UserRead, UserUpsert
from recruiter.storage.database import DatabaseRecordStore
from recruiter.storage.memory import InMemoryRecordStore

TEST_SQLITE_URL = "sqlite+aiosqlite:///:memory:"
BASE_URL = "http://test"


def make_session_cookie(session: dict) -> str:
    """Sign a session payload the way Starlette's SessionMiddleware does."""
    signer = itsdangerous.TimestampSigner(str(get_settings().session_secret))
    payload = base64.b64encode(json.dumps(session).encode("utf-8"))
    return signer.sign(payload).decode("utf-8")


def make_position_payload(**overrides):
    """Helper to create a valid position payload."""
    data = {
        "title": "Backend Developer",
        "department": "Engineering",
        "location": "Remote",
        "description": "Build and run our APIs",
    }
    data.update(overrides)
    return data


def make_candidate_payload(**overrides):
    """Helper to create a valid candidate payload."""
    data = {
        "name": "John Doe",
        "email": "john.doe@example.com",
        "phone": "+1234567890",
        "resume": "https://example.com/resumes/john-doe.pdf",
        "positionApplied": "Backend Developer",
    }
    data.update(overrides)
    return data


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def store() -> InMemoryRecordStore:
    """An empty in-memory store, without the sample position."""
    return InMemoryRecordStore()


@pytest_asyncio.fixture
async def sql_store() -> AsyncGenerator[DatabaseRecordStore]:
    """A database store over a private in-memory SQLite database."""
    engine = create_async_engine(
        TEST_SQLITE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    db_store = DatabaseRecordStore(engine, create_tables=True)
    await db_store.initialize()
    yield db_store
    await db_store.close()


@pytest_asyncio.fixture
async def user(store) -> UserRead:
    return await store.upsert_user(
        UserUpsert(
            id="oidc|42",
            email="recruiter@example.com",
            first_name="Rita",
            last_name="Cruz",
        )
    )


@pytest.fixture
def app(store):
    application = create_app()
    application.dependency_overrides[get_store] = lambda: store
    return application


@pytest_asyncio.fixture
async def anon_client(app) -> AsyncGenerator[AsyncClient]:
    """Client without a session."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=BASE_URL) as ac:
        yield ac


@pytest_asyncio.fixture
async def client(app, user) -> AsyncGenerator[AsyncClient]:
    """Client carrying a signed session for ``user``."""
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url=BASE_URL,
        cookies={"session": make_session_cookie({"user_id": user.id})},
    ) as ac:
        yield ac

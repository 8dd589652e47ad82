"""Root conftest: memory-backed app, seeded users and bearer tokens."""

import os

# Importing gtonline.main builds a module level app from the environment
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest
from httpx import ASGITransport, AsyncClient

from gtonline.core.config import Settings
from gtonline.core.security import create_access_token, get_password_hash
from gtonline.main import create_app
from gtonline.repositories.memory import MemoryStorage
from gtonline.schemas.profile import Employer, School
from gtonline.schemas.user import UserRecord

PASSWORD = "secret123"

ALICE = "alice@example.com"
BOB = "bob@example.com"
CAROL = "carol@example.com"


@pytest.fixture(scope="session")
def password_hash():
    return get_password_hash(PASSWORD)


@pytest.fixture
def settings():
    return Settings(
        STORAGE_BACKEND="memory",
        JWT_SECRET_KEY="test-secret-key",
        REDIS_URL="",
        LOG_FORMAT="text",
    )


@pytest.fixture
def storage(password_hash):
    """Memory storage with three users and a small catalog."""
    store = MemoryStorage()
    store.add_users([
        UserRecord(email=ALICE, password=password_hash, first_name="Alice", last_name="Anders"),
        UserRecord(email=BOB, password=password_hash, first_name="Bob", last_name="Brown"),
        UserRecord(email=CAROL, password=password_hash, first_name="Carol", last_name="Chen"),
    ])
    store.add_schools([
        School(school_name="Georgia Tech", type="University"),
        School(school_name="Lakeside High", type="High School"),
    ])
    store.add_employers([
        Employer(employer_name="Globex"),
        Employer(employer_name="Acme"),
    ])
    return store


@pytest.fixture
def app(settings, storage):
    return create_app(settings, storage)


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest.fixture
def auth_headers(settings):
    """Build an Authorization header for any email."""
    def _headers(email: str) -> dict:
        return {"Authorization": f"Bearer {create_access_token(email, settings)}"}
    return _headers

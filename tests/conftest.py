"""Pytest configuration and fixtures."""

import os
import uuid

# Settings are read once at import time; point them at the test setup first
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("GIST_MARKER_FILE", "setup.sh")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from gistlink.api.dependencies import get_gist_client
from gistlink.config import get_settings
from gistlink.database import Base, get_db
from gistlink.main import app
from gistlink.models.user import User
from gistlink.services.auth import TOKEN_COOKIE, create_access_token, get_password_hash
from gistlink.services.gist import GistLookupError

SQLALCHEMY_DATABASE_URL = os.environ["DATABASE_URL"]
connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

DEMO_PASSWORD = "demopass123"  # noqa: S105
DEMO_GIST_ID = "5fb484f659ccc54a493d4295d6346a39"

# Gists known to the fake GitHub API
GISTS = {
    DEMO_GIST_ID: ["README.md", "setup.sh"],
    "f7217444324b91f926d01e1c02ce2755": ["README.md", "brew.sh", "setup.sh"],
    "0a1b2c3d4e5f60718293a4b5c6d7e8f9": ["setup.sh"],
    "9f8e7d6c5b4a39281706f5e4d3c2b1a0": ["setup.sh", ".zshrc"],
    "c0ffee00c0ffee00c0ffee00c0ffee00": ["notes.txt"],
}
BROKEN_GIST_ID = "broken"

USER_PAYLOAD = {
    "gist_id": "f7217444324b91f926d01e1c02ce2755",
    "username": "super_coder",
    "email": "git_creator@gmail.com",
    "name": "Linus Torvalds",
    "password": "hello",
}


class FakeGistClient:
    """Stands in for the GitHub API and records which ids were looked up."""

    def __init__(self, gists: dict[str, list[str]] | None = None):
        self.gists = GISTS if gists is None else gists
        self.calls: list[str | None] = []

    async def fetch_gist_files(self, gist_id: str | None) -> list[str]:
        self.calls.append(gist_id)
        if gist_id == BROKEN_GIST_ID:
            raise GistLookupError("connection reset")
        if not gist_id:
            return []
        return list(self.gists.get(gist_id, []))


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def gist_client():
    return FakeGistClient()


@pytest.fixture(scope="function")
def client(db, gist_client):
    """Create a test client with database and gist API overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_gist_client] = lambda: gist_client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def demo_user(db):
    """The pre-seeded demo account."""
    user = User(
        id=uuid.UUID(get_settings().demo_user_id),
        gist_id=DEMO_GIST_ID,
        name=None,
        email="jballin@fake.com",
        username="JBallin",
        hashed_pwd=get_password_hash(DEMO_PASSWORD),
    )
    db.add(user)
    db.commit()
    return user


def use_token(client: TestClient, user_id, token: str | None = None) -> None:
    """Replace the client's token cookie with one for ``user_id``."""
    client.cookies.clear()
    client.cookies.set(TOKEN_COOKIE, token or create_access_token(user_id))


def create_user(client: TestClient, db, **overrides) -> uuid.UUID:
    """Sign up through the API and return the new user's id."""
    payload = {**USER_PAYLOAD, **overrides}
    response = client.post("/users", json=payload)
    assert response.status_code == 201, response.json()
    client.cookies.clear()
    return db.query(User).filter(User.username == payload["username"]).one().id

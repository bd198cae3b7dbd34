"""Pytest configuration and fixtures."""

import os
import shutil
import tempfile

# Point the app at test resources before anything reads settings
SQLALCHEMY_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///./test.db")
TEST_UPLOAD_DIR = tempfile.mkdtemp(prefix="blog-api-uploads-")
os.environ["DATABASE_URL"] = SQLALCHEMY_DATABASE_URL
os.environ["UPLOAD_DIR"] = TEST_UPLOAD_DIR

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from blog_api.config import get_settings  # noqa: E402
from blog_api.database import Base, get_db  # noqa: E402
from blog_api.main import app  # noqa: E402
from blog_api.services.storage import FileStore  # noqa: E402

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    from blog_api import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    yield
    shutil.rmtree(TEST_UPLOAD_DIR, ignore_errors=True)


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
def png_bytes():
    """Small image payload for avatar and thumbnail uploads."""
    return PNG_BYTES


@pytest.fixture
def session_factory():
    """Factory for extra sessions, one per simulated concurrent request."""
    return TestingSessionLocal


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def store(settings):
    """File store on the test upload directory, emptied after each test."""
    file_store = FileStore(settings.upload_dir)
    yield file_store
    for path in file_store.root.iterdir():
        if path.is_file():
            path.unlink()


@pytest.fixture(scope="function")
def client(db, store):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def register_and_login(client, name: str, email: str, password: str = "secret123") -> AuthHeaders:
    response = client.post(
        "/api/users/register",
        json={"name": name, "email": email, "password": password, "password2": password},
    )
    assert response.status_code == 201

    response = client.post("/api/users/login", json={"email": email, "password": password})
    assert response.status_code == 200
    data = response.json()
    return AuthHeaders(
        {"Authorization": f"Bearer {data['token']}"}, user_id=data["user"]["id"], email=email
    )


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return register_and_login(client, "Test Author", "author@example.com")


@pytest.fixture
def second_auth_headers(client):
    """A second, unrelated user."""
    return register_and_login(client, "Other Author", "other@example.com")


@pytest.fixture
def create_post(client):
    """Factory that creates a post through the API and returns its JSON."""

    def _create(headers, **overrides):
        data = {
            "title": "A post title",
            "category": "Fantasy",
            "description": "A description long enough to edit later.",
        }
        thumbnail = overrides.pop("thumbnail", ("cover.png", PNG_BYTES, "image/png"))
        data.update(overrides)
        response = client.post(
            "/api/posts", headers=headers, data=data, files={"thumbnail": thumbnail}
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create

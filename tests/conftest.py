"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- FastAPI test client backed by in-memory storage and sessions
- Storage backends (in-memory and SQLite through SQLAlchemy)
- Sample request bodies and login helpers
"""

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.database import make_engine
from app.core.sessions import MemorySessionStore
from app.core.storage import MemStorage, SqlStorage
from main import create_app


# Use in-memory SQLite for the relational backend (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"


def make_settings(**overrides) -> Settings:
    """Test settings that never read a local .env file."""
    return Settings(_env_file=None, **overrides)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def mem_storage():
    return MemStorage()


@pytest.fixture
def sql_storage():
    """
    Fresh SQLite database for each test.
    """
    engine = make_engine(SQLALCHEMY_TEST_DATABASE_URL)
    storage = SqlStorage(engine)
    storage.init_schema()
    yield storage
    engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def storage(request):
    """Runs a test once against each storage backend."""
    if request.param == "memory":
        return MemStorage()
    return request.getfixturevalue("sql_storage")


@pytest.fixture
def session_store():
    return MemorySessionStore(ttl_seconds=3600)


@pytest.fixture
def app(settings, mem_storage, session_store):
    return create_app(settings, mem_storage, session_store)


@pytest.fixture
def client(app):
    """
    FastAPI test client. Cookies persist between requests like a browser.
    """
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sql_client(settings, sql_storage, session_store):
    """Test client running against the SQLAlchemy backend."""
    app = create_app(settings, sql_storage, session_store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def creator_data():
    """Sample creator registration body"""
    return {
        "username": "alice",
        "email": "alice@example.com",
        "password": "secret123",
        "fullName": "Alice Creator",
        "role": "creator",
    }


@pytest.fixture
def editor_data():
    """Sample editor registration body"""
    return {
        "username": "bob",
        "email": "bob@example.com",
        "password": "secret123",
        "fullName": "Bob Editor",
        "role": "editor",
    }


def register(client, data):
    response = client.post("/api/auth/register", json=data)
    assert response.status_code == 201, response.text
    return response.json()


def login(client, username, password="secret123"):
    response = client.post("/api/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return response.json()


def job_body(creator_id, **overrides):
    body = {
        "title": "Gaming Video Editor Needed",
        "description": "Looking for a skilled editor for my Minecraft YouTube channel.",
        "jobType": "Remote",
        "employmentType": "Per Project",
        "minPrice": 50,
        "maxPrice": 200,
        "priceType": "per video",
        "skills": ["Premiere Pro", "After Effects"],
        "creatorId": creator_id,
    }
    body.update(overrides)
    return body


def profile_body(user_id, **overrides):
    body = {
        "userId": user_id,
        "title": "Professional Video Editor",
        "description": "Experienced editor specializing in gaming content.",
        "skills": ["Premiere Pro", "DaVinci Resolve"],
        "hourlyRate": 25,
        "experience": 5,
        "portfolioUrl": "https://portfolio.example.com",
    }
    body.update(overrides)
    return body


def application_body(job_id, editor_id, **overrides):
    body = {
        "jobId": job_id,
        "editorId": editor_id,
        "coverLetter": "I have edited gaming videos for three years.",
        "price": 120,
    }
    body.update(overrides)
    return body


@pytest.fixture
def creator(client, creator_data):
    """A registered creator (not logged in)"""
    return register(client, creator_data)


@pytest.fixture
def editor(client, editor_data):
    """A registered editor (not logged in)"""
    return register(client, editor_data)


@pytest.fixture
def job(client, creator):
    """An active job posted by the sample creator"""
    response = client.post("/api/jobs", json=job_body(creator["id"]))
    assert response.status_code == 201, response.text
    return response.json()

"""
Zyx Dashboard - Test Fixtures
=============================

Shared fixtures for all tests.
"""

import os
import tempfile

import pytest

# Set up test environment before importing modules
os.environ.setdefault("ZYX_SESSION_SECRET", "test-secret-key-that-is-long-enough-for-hs256")
os.environ["ZYX_LOG_DIR"] = tempfile.mkdtemp(prefix="zyx-test-logs-")
os.environ["ZYX_TIMEZONE"] = "UTC"
os.environ.pop("ZYX_ERROR_WEBHOOK_URL", None)

from fastapi.testclient import TestClient

from zyx.core.database import DatabaseManager
from zyx.api.app import create_app
from zyx.api.config import APIConfig
from zyx.api.services.auth import AuthService


TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"

ALICE = {
    "email": "alice@example.com",
    "password": "wonderland",
    "firstName": "Alice",
    "lastName": "Liddell",
}

BOB = {
    "email": "bob@example.com",
    "password": "builder123",
    "firstName": "Bob",
}

GUILD = {
    "id": "123456789012345678",
    "name": "Test Guild",
    "memberCount": 42,
}


# =============================================================================
# Storage
# =============================================================================

@pytest.fixture
def temp_db_path(tmp_path):
    """Create a temporary database path for testing."""
    return tmp_path / "test_zyx.db"


@pytest.fixture
def test_db(temp_db_path):
    """Create a fresh test database instance."""
    db = DatabaseManager(temp_db_path)
    yield db
    db.close()


@pytest.fixture
def owner(test_db):
    """A stored user to own servers in storage-level tests."""
    return test_db.create_user("owner@example.com", "not-a-real-hash", "Olive", "Owner")


@pytest.fixture
def stored_server(test_db, owner):
    """A stored server owned by `owner`."""
    return test_db.upsert_server("987654321098765432", "Storage Guild", owner["id"], member_count=10)


# =============================================================================
# Auth
# =============================================================================

@pytest.fixture
def api_config(temp_db_path):
    """API config with a test secret and cheap bcrypt rounds."""
    return APIConfig(
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
        database_path=str(temp_db_path),
    )


@pytest.fixture
def auth_service(api_config, test_db):
    """AuthService bound to the test database."""
    return AuthService(api_config, test_db)


# =============================================================================
# HTTP
# =============================================================================

@pytest.fixture
def app(api_config, test_db):
    """Application wired to the test config and database."""
    return create_app(api_config, test_db)


@pytest.fixture
def client(app):
    """Anonymous test client with the lifespan running."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_client(client):
    """Client logged in as Alice through registration."""
    response = client.post("/api/auth/register", json=ALICE)
    assert response.status_code == 201
    return client


@pytest.fixture
def other_client(app):
    """A second client logged in as Bob."""
    test_client = TestClient(app)
    response = test_client.post("/api/auth/register", json=BOB)
    assert response.status_code == 201
    return test_client


@pytest.fixture
def server(auth_client):
    """A server registered by Alice."""
    response = auth_client.post("/api/servers", json=GUILD)
    assert response.status_code == 201
    return response.json()

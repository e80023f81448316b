"""Shared test fixtures for basicauth."""

import sqlite3

import pytest

from basicauth.auth.passwords import PasswordHasher
from basicauth.auth.token import TokenService
from basicauth.config import Settings
from basicauth.db import apply_schema
from basicauth.main import create_app

TEST_SECRET = "test-secret-key-0123456789abcdefghij"


@pytest.fixture
def test_db():
    """Create in-memory test database with schema."""
    db = sqlite3.connect(":memory:")
    db.row_factory = sqlite3.Row
    apply_schema(db)

    yield db

    db.close()


@pytest.fixture
def test_settings(tmp_path):
    """Settings pointing at a temp database file with a fast bcrypt work factor."""
    return Settings(
        database_path=str(tmp_path / "test.db"),
        jwt_secret_key=TEST_SECRET,
        bcrypt_work_factor=4,
        _env_file=None,
    )


@pytest.fixture
def hasher():
    """Fast bcrypt hasher for tests."""
    return PasswordHasher(work_factor=4)


@pytest.fixture
def token_service():
    """Token service signed with the test secret."""
    return TokenService(TEST_SECRET)


@pytest.fixture
def app(test_settings):
    """Create the Flask app against a fresh temp database."""
    app = create_app(test_settings)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Create test client for API testing."""
    with app.test_client() as client:
        yield client


@pytest.fixture
def auth_service(app):
    """The AuthService wired into the test app."""
    return app.extensions["basicauth"]


@pytest.fixture
def registered_user(client):
    """Register alice through the API.

    Returns the registration payload (plaintext password and answer included).
    """
    payload = {
        "username": "alice",
        "email": "a@x.com",
        "password": "p1",
        "securityQuestion": "q",
        "securityAnswer": "ans",
    }
    response = client.post("/register", json=payload)
    assert response.status_code == 201
    return payload


@pytest.fixture
def auth_headers(client, registered_user):
    """Log alice in and return Authorization headers with her token."""
    response = client.post(
        "/login",
        json={"email": registered_user["email"], "password": registered_user["password"]},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.get_json()['token']}"}

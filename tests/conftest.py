# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up environment variables before any imports
# - Provides an in-memory store, an app bound to it, and a test client
# - Provides helpers to seed users and mint tokens for them
# =============================================================================

import os
from functools import lru_cache

from tests.helpers import TEST_SECRET_KEY, make_token, run

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.main, which reads settings at import

os.environ["SECRET_KEY"] = TEST_SECRET_KEY
os.environ["STORE_BACKEND"] = "memory"
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "false")

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from lib.security import hash_password
from lib.store import USERS, InMemoryStore


# =============================================================================
# Fixtures
# =============================================================================

@lru_cache(maxsize=None)
def _hashed(password: str) -> str:
    """bcrypt is slow on purpose; hash each test password once per session."""
    return hash_password(password)


@pytest.fixture
def store():
    """Fresh in-memory document store."""
    return InMemoryStore()


@pytest.fixture
def app(store):
    """Application bound to the test store."""
    return create_app(store=store)


@pytest.fixture
def client(app):
    """Test client with the app lifespan running."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user(store):
    """Factory that stores a user directly and returns the stored document."""
    def _make_user(
        name: str = "Ada Lovelace",
        email: str = "ada@example.com",
        password: str = "s3cret-pass",
        address: dict | None = None,
    ) -> dict:
        doc = {
            "name": name,
            "email": email,
            "password": _hashed(password),
            "posts": [],
        }
        if address is not None:
            doc["address"] = address
        return run(store.insert(USERS, doc))

    return _make_user


@pytest.fixture
def auth_headers():
    """Build an Authorization header for a stored user."""
    def _auth_headers(user: dict) -> dict:
        return {"Authorization": f"Bearer {make_token({'sub': user['id']})}"}

    return _auth_headers


@pytest.fixture
def sample_address():
    """Sample address payload for testing."""
    return {"city": "London", "street": "St James's Square"}

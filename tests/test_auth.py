# =============================================================================
# tests/test_auth.py - Authentication Guard Tests
# =============================================================================
# Tests for token verification and the authenticate stage:
# - cookie and bearer header are both accepted
# - missing, expired, badly-signed and unresolvable tokens are all 401
# =============================================================================

import pytest

from app.config import Settings
from app.auth import verify_token
from app.exceptions import AuthenticationError
from tests.helpers import API, TEST_SECRET_KEY, make_token


@pytest.fixture
def settings():
    return Settings(SECRET_KEY=TEST_SECRET_KEY)


# =============================================================================
# verify_token
# =============================================================================

class TestVerifyToken:

    def test_valid_token(self, settings):
        assert verify_token(make_token({"sub": "u1"}), settings) == "u1"

    def test_legacy_id_claim(self, settings):
        assert verify_token(make_token({"_id": "u2"}), settings) == "u2"

    def test_expired_token(self, settings):
        token = make_token({"sub": "u1"}, expires_in=-60)

        with pytest.raises(AuthenticationError) as exc_info:
            verify_token(token, settings)

        assert exc_info.value.message == "Token has expired"

    def test_wrong_signature(self, settings):
        token = make_token({"sub": "u1"}, secret="some-other-secret-key")

        with pytest.raises(AuthenticationError):
            verify_token(token, settings)

    def test_garbage(self, settings):
        with pytest.raises(AuthenticationError):
            verify_token("not-a-jwt", settings)

    def test_missing_subject(self, settings):
        with pytest.raises(AuthenticationError):
            verify_token(make_token({"role": "admin"}), settings)


# =============================================================================
# authenticate stage (through /auth/me)
# =============================================================================

class TestAuthenticateStage:

    def test_bearer_header(self, client, make_user, auth_headers):
        user = make_user()

        response = client.get(f"{API}/auth/me", headers=auth_headers(user))

        assert response.status_code == 200
        assert response.json()["id"] == user["id"]
        assert "password" not in response.json()

    def test_cookie(self, client, make_user):
        user = make_user()
        client.cookies.set("Authorization", make_token({"sub": user["id"]}))

        response = client.get(f"{API}/auth/me")

        assert response.status_code == 200
        assert response.json()["id"] == user["id"]

    def test_missing_token(self, client):
        response = client.get(f"{API}/auth/me")

        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"
        assert response.json()["code"] == "AUTHENTICATION_FAILED"

    def test_non_bearer_scheme(self, client, make_user):
        make_user()

        response = client.get(f"{API}/auth/me", headers={"Authorization": "Basic dXNlcjpwdw=="})

        assert response.status_code == 401

    def test_unknown_user_is_401_not_404(self, client):
        """A valid token for a non-existent user must not reveal that."""
        headers = {"Authorization": f"Bearer {make_token({'sub': 'ghost'})}"}

        response = client.get(f"{API}/auth/me", headers=headers)

        assert response.status_code == 401
        assert "ghost" not in response.json()["message"]

    def test_bad_signature(self, client, make_user):
        user = make_user()
        token = make_token({"sub": user["id"]}, secret="attacker-chosen-secret")

        response = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

# =============================================================================
# tests/helpers.py - Shared Test Helpers
# =============================================================================

import asyncio
import time

from jose import jwt

API = "/api/v1"
TEST_SECRET_KEY = "test-secret-key-for-postbook"


def run(coro):
    """Drive a coroutine to completion from synchronous test code."""
    return asyncio.run(coro)


def make_token(claims: dict, secret: str = TEST_SECRET_KEY, expires_in: int = 3600) -> str:
    """Mint a token the way the external credential service would."""
    now = int(time.time())
    payload = {"iat": now, "exp": now + expires_in, **claims}
    return jwt.encode(payload, secret, algorithm="HS256")

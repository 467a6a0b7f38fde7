# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides JWT verification as a pipeline stage.
#
# Usage:
#   from app.auth import authenticate
#   compose(handler, authenticate)
# =============================================================================

from app.auth.dependencies import authenticate, extract_token, verify_token
from app.auth.models import TokenPayload

__all__ = [
    "authenticate",
    "extract_token",
    "verify_token",
    "TokenPayload",
]

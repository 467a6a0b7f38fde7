# =============================================================================
# app/auth/dependencies.py - Authentication Guard
# =============================================================================
# Pipeline stage that verifies the caller's token and loads their user
# record into the request context.
#
# The token is looked for in:
# - the auth cookie (AUTH_COOKIE_NAME, default "Authorization")
# - the "Authorization: Bearer <token>" header
#
# Tokens are signed JWTs issued by an external credential service; this
# module only verifies them against SECRET_KEY.
#
# Usage (in app/routes.py):
#   compose(create_post, authenticate, validate(CreatePostDto))
# =============================================================================

import logging

from fastapi import Request
from fastapi.security import HTTPBearer
from fastapi.security.utils import get_authorization_scheme_param
from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import ValidationError

from app.auth.models import TokenPayload
from app.config import Settings
from app.exceptions import AuthenticationError
from app.pipeline import RequestContext
from core.services.user_service import UserService

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor; errors are raised by the guard itself
security_optional = HTTPBearer(auto_error=False)


async def extract_token(request: Request, settings: Settings) -> str | None:
    """
    Find the raw token on a request.

    The cookie wins over the header. A cookie value may be the bare token
    or "Bearer <token>".
    """
    cookie = request.cookies.get(settings.AUTH_COOKIE_NAME)
    if cookie:
        scheme, param = get_authorization_scheme_param(cookie)
        if scheme.lower() == "bearer" and param:
            return param
        return cookie

    credentials = await security_optional(request)
    if credentials is not None:
        return credentials.credentials
    return None


def verify_token(token: str, settings: Settings) -> str:
    """
    Verify a token's signature and return the user id it names.

    Raises:
        AuthenticationError: If the token is expired, badly signed,
            malformed, or has no subject
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
        )
        claims = TokenPayload.model_validate(payload)

    except ExpiredSignatureError:
        logger.warning("JWT token has expired")
        raise AuthenticationError("Token has expired")

    except (JWTError, ValidationError) as e:
        logger.warning(f"JWT validation failed: {e}")
        raise AuthenticationError()

    if not claims.user_id:
        logger.warning("JWT token missing subject claim")
        raise AuthenticationError()

    return claims.user_id


async def authenticate(ctx: RequestContext) -> None:
    """
    Guard stage: resolve the caller and attach their record to the context.

    A valid token for a user that no longer exists fails the same way as
    a bad token, so callers cannot probe which ids exist.

    Raises:
        AuthenticationError: On any missing, invalid, or unresolvable credential
    """
    settings: Settings = ctx.request.app.state.settings

    token = await extract_token(ctx.request, settings)
    if not token:
        raise AuthenticationError("Authentication token missing")

    user_id = verify_token(token, settings)

    user = await UserService(ctx.store).get_document(user_id)
    if user is None:
        logger.warning(f"Token subject does not resolve to a user: {user_id}")
        raise AuthenticationError()

    ctx.user = user
    ctx.request.state.user = user
    logger.debug(f"Authenticated user: {user_id}")

# =============================================================================
# app/auth/routes.py - Authentication Handlers
# =============================================================================
# Handlers for authentication-related operations.
#
# Note: Sign-up tokens and logins are handled by the credential service.
# These handlers are for inspecting the caller once authenticated.
# =============================================================================

from fastapi import Response

from app.pipeline import RequestContext, json_response
from core.models.user import UserPublic


async def get_current_user_info(ctx: RequestContext) -> Response:
    """
    Get the current authenticated user's profile.

    Runs behind the authenticate stage, so ctx.user is always set.
    """
    return json_response(UserPublic.from_document(ctx.user))

# =============================================================================
# app/exceptions.py - Exception Taxonomy and Error Translator
# =============================================================================
# Centralized exception handling for the API.
# Every failure raised by a pipeline stage ends up here and is turned into
# exactly one JSON response of the form:
#   {"message": ..., "code": ..., "errors"?: [...], "suggestion"?: ...}
# Errors should tell HOW to fix, not just WHAT failed.
# =============================================================================

import logging
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class PostbookException(Exception):
    """
    Base exception for the Postbook API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "POSTBOOK_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}
        self.headers = headers

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result: dict[str, Any] = {
            "message": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Validation Exceptions
# =============================================================================

class ValidationFailedError(PostbookException):
    """Raised when a payload violates one or more field constraints."""

    def __init__(self, violations: list[dict[str, str]]):
        fields = ", ".join(dict.fromkeys(v["field"] for v in violations))
        super().__init__(
            message=f"Validation failed for: {fields}",
            code="VALIDATION_ERROR",
            status_code=400,
            suggestion="Fix the listed fields and resend the request",
        )
        self.violations = violations

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["errors"] = self.violations
        return result


# =============================================================================
# Authentication Exceptions
# =============================================================================

class AuthenticationError(PostbookException):
    """
    Raised when a credential is missing, invalid, or resolves to no user.

    The message never says which of these happened for unknown users,
    so the API does not leak which identities exist.
    """

    def __init__(self, message: str = "Wrong authentication token"):
        super().__init__(
            message=message,
            code="AUTHENTICATION_FAILED",
            status_code=401,
            suggestion="Sign in again to obtain a fresh token",
            headers={"WWW-Authenticate": "Bearer"},
        )


class ForbiddenError(PostbookException):
    """Raised when an authenticated caller acts on someone else's record."""

    def __init__(self, message: str = "You are not allowed to modify this resource"):
        super().__init__(
            message=message,
            code="FORBIDDEN",
            status_code=403,
        )


# =============================================================================
# Not Found Exceptions
# =============================================================================

class NotFoundError(PostbookException):
    """Raised when a referenced record does not exist."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(
            message=f"{resource} with id {identifier} not found",
            code=f"{resource.upper()}_NOT_FOUND",
            status_code=404,
            suggestion=f"Check that the {resource.lower()} id is correct",
            details={"id": identifier},
        )
        self.identifier = identifier


class PostNotFoundError(NotFoundError):
    """Raised when a post ID doesn't exist."""

    def __init__(self, post_id: str):
        super().__init__("Post", post_id)


class UserNotFoundError(NotFoundError):
    """Raised when a user ID doesn't exist."""

    def __init__(self, user_id: str):
        super().__init__("User", user_id)


# =============================================================================
# Persistence Exceptions
# =============================================================================

class PersistenceError(PostbookException):
    """Raised when the document store fails to read or write."""

    def __init__(
        self,
        message: str,
        code: str = "PERSISTENCE_ERROR",
        suggestion: str | None = "Try again later or contact support if the issue persists",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=500,
            suggestion=suggestion,
            details=details,
        )


class AuthorshipAttachmentError(PersistenceError):
    """
    Raised when a post was stored but the author's back-reference was not.

    The post exists with the author listed; only User.posts is behind.
    Attachment is idempotent, so repeating it is safe.
    """

    def __init__(self, post_id: str, user_id: str, error: str):
        super().__init__(
            message=f"Post {post_id} was saved but could not be linked to user {user_id}: {error}",
            code="AUTHORSHIP_ATTACHMENT_FAILED",
            suggestion="The operation is idempotent and safe to retry",
            details={"post_id": post_id, "user_id": user_id},
        )


# =============================================================================
# Pipeline Exceptions
# =============================================================================

class UnhandledRequestError(PostbookException):
    """Raised when no stage of a route's pipeline produced a response."""

    def __init__(self, route: str):
        super().__init__(
            message=f"No response was produced for {route}",
            code="UNHANDLED_REQUEST",
            status_code=500,
            details={"route": route},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def postbook_exception_handler(
    request: Request,
    exc: PostbookException
) -> JSONResponse:
    """
    Convert PostbookException to JSON response.

    Returns structured error with:
    - message: Human-readable message
    - code: Machine-readable error code
    - errors: Per-field violations (validation failures only)
    - suggestion: How to fix (if available)
    """
    if exc.status_code >= 500:
        cause = exc.__cause__
        logger.error(
            f"{request.method} {request.url.path} failed: [{exc.code}] {exc.message}"
            + (f" (cause: {cause!r})" if cause else "")
        )
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=exc.headers,
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """
    Give routing errors (unknown path, unsupported method) the same body
    shape as every other failure.
    """
    try:
        code = HTTPStatus(exc.status_code).name
    except ValueError:
        code = f"HTTP_{exc.status_code}"
    logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {code}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail, "code": code},
        headers=exc.headers,
    )


async def unexpected_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle anything the taxonomy does not classify."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "message": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error translator to an application."""
    app.add_exception_handler(PostbookException, postbook_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unexpected_exception_handler)

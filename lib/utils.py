# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from typing import Any
from uuid import UUID, uuid4


# =============================================================================
# Identifier Utilities
# =============================================================================

def normalize_id(value: str | UUID) -> str:
    """
    Normalize a record identifier to string format.

    Handles both string and UUID objects, ensuring consistent string output.

    Example:
        post_id = normalize_id(uuid_obj)  # "550e8400-..."
        post_id = normalize_id("550e8400-...")  # "550e8400-..."
    """
    return str(value) if isinstance(value, UUID) else value


def new_id() -> str:
    """Generate an opaque, server-assigned record identifier."""
    return str(uuid4())


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base error class for library-level errors.

    Provides actionable error messages following the principle:
    "Errors should tell HOW to fix, not just WHAT failed."

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        suggestion: Actionable suggestion for fixing the error
        details: Additional context for debugging
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for API responses."""
        return {
            "code": self.code,
            "message": self.message,
            "suggestion": self.suggestion,
            "details": self.details,
        }

# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# These models define what clients see of a user:
# - Address: optional nested value object
# - AuthorPublic: the projection embedded in a post's authors list
# - UserPublic: the projection returned by the users endpoints
#
# The stored password never appears in any of them.
# =============================================================================

from typing import Any

from pydantic import BaseModel, Field


class Address(BaseModel):
    """Postal address attached to a user."""
    city: str | None = None
    street: str | None = None


class AuthorPublic(BaseModel):
    """
    Public view of a user as an author of a post.

    Excludes password and address (and the user's own posts list).

    Example:
        {"id": "u1", "name": "Ada", "email": "ada@example.com"}
    """

    id: str = Field(..., description="User identifier")
    name: str | None = Field(default=None, description="Display name")
    email: str | None = Field(default=None, description="Contact email")

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "AuthorPublic":
        return cls(id=doc["id"], name=doc.get("name"), email=doc.get("email"))


class UserPublic(BaseModel):
    """
    Public view of a user record.

    Example:
        {
            "id": "u1",
            "name": "Ada",
            "email": "ada@example.com",
            "address": {"city": "London", "street": "St James's Square"},
            "posts": ["p1", "p2"]
        }
    """

    id: str = Field(..., description="User identifier")
    name: str | None = Field(default=None, description="Display name")
    email: str | None = Field(default=None, description="Contact email")
    address: Address | None = Field(default=None, description="Optional postal address")

    # Back-references to authored posts; may include ids of deleted posts
    posts: list[str] = Field(default_factory=list, description="Ids of posts this user authored")

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "UserPublic":
        return cls(
            id=doc["id"],
            name=doc.get("name"),
            email=doc.get("email"),
            address=doc.get("address"),
            posts=doc.get("posts") or [],
        )

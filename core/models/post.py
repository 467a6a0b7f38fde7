# =============================================================================
# core/models/post.py - Post Schemas
# =============================================================================
# PostResponse is a post with its authors populated: each author id is
# swapped for that user's public projection.
# =============================================================================

from typing import Any

from pydantic import BaseModel, Field

from .user import AuthorPublic


class PostResponse(BaseModel):
    """
    Schema for returning post data to clients.

    Returned by every /posts endpoint except DELETE.

    Example:
        {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "title": "T",
            "content": "C",
            "authors": [{"id": "u1", "name": "Ada", "email": "ada@example.com"}]
        }
    """

    id: str = Field(..., description="Unique post identifier")
    title: str | None = Field(default=None, description="Post title")
    content: str | None = Field(default=None, description="Post body")

    # Contribution order is preserved; authors that no longer exist are dropped
    authors: list[AuthorPublic] = Field(
        default_factory=list,
        description="Public projection of each author"
    )

    @classmethod
    def from_document(
        cls,
        doc: dict[str, Any],
        users_by_id: dict[str, dict[str, Any]],
    ) -> "PostResponse":
        return cls(
            id=doc["id"],
            title=doc.get("title"),
            content=doc.get("content"),
            authors=[
                AuthorPublic.from_document(users_by_id[author_id])
                for author_id in doc.get("authors") or []
                if author_id in users_by_id
            ],
        )

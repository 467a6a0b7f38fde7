# =============================================================================
# core/services/post_service.py - Post Business Logic
# =============================================================================
# Handles post CRUD operations and author population.
# Separates HTTP concerns from store/business logic.
# =============================================================================

import logging
from typing import Any

from app.exceptions import PostNotFoundError
from core.models.post import PostResponse
from core.validation import Dto
from lib.store import POSTS, USERS
from .base import StoreBackedService, persistence_errors
from .relationship_service import RelationshipService

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("title", "content")


class PostService(StoreBackedService):
    """
    Service for post management operations.

    Authors are stored as user ids and populated on the way out with a
    single batch lookup per call, never one lookup per post.
    """

    def __init__(self, store, relationships: RelationshipService | None = None):
        super().__init__(store)
        self.relationships = relationships or RelationshipService(store)

    # -------------------------------------------------------------------------
    # Population
    # -------------------------------------------------------------------------

    async def populate(self, posts: list[dict[str, Any]]) -> list[PostResponse]:
        """
        Attach each post's authors as public projections.

        Author ids with no user behind them are skipped.
        """
        author_ids = {a for post in posts for a in post.get("authors") or []}
        users_by_id: dict[str, dict[str, Any]] = {}
        if author_ids:
            with persistence_errors("load authors"):
                users = await self.store.find(USERS, ids=author_ids)
            users_by_id = {u["id"]: u for u in users}
        return [PostResponse.from_document(post, users_by_id) for post in posts]

    # -------------------------------------------------------------------------
    # CRUD
    # -------------------------------------------------------------------------

    async def list_posts(self) -> list[PostResponse]:
        """Return every post with authors populated."""
        with persistence_errors("load posts"):
            posts = await self.store.find(POSTS)
        return await self.populate(posts)

    async def list_posts_by_ids(self, post_ids: list[str]) -> list[PostResponse]:
        """
        Return the posts behind a list of ids, in the given order.

        Ids that no longer resolve (deleted posts) are skipped.
        """
        if not post_ids:
            return []
        with persistence_errors("load posts"):
            found = await self.store.find(POSTS, ids=post_ids)
        by_id = {p["id"]: p for p in found}
        ordered = [by_id[pid] for pid in dict.fromkeys(post_ids) if pid in by_id]
        return await self.populate(ordered)

    async def get_post(self, post_id: str) -> PostResponse:
        """
        Get a post by ID.

        Raises:
            PostNotFoundError: If no post has this id
        """
        with persistence_errors("load post"):
            post = await self.store.find_one(POSTS, post_id)
        if post is None:
            raise PostNotFoundError(post_id)
        return (await self.populate([post]))[0]

    async def create_post(self, dto: Dto, author_id: str) -> PostResponse:
        """
        Create a post authored by the caller.

        The post is stored with authors=[author_id], then the author's
        back-reference is attached.

        Raises:
            PersistenceError: If the post could not be stored
            AuthorshipAttachmentError: If the post was stored but the
                author's posts list was not updated
        """
        data = {
            "title": dto["title"],
            "content": dto["content"],
            "authors": [author_id],
        }
        with persistence_errors("create post"):
            post = await self.store.insert(POSTS, data)
        logger.info(f"Created post: {post['id']} for user: {author_id}")

        await self.relationships.attach_authorship(post["id"], author_id)
        return await self.get_post(post["id"])

    async def update_post(self, post_id: str, dto: Dto) -> PostResponse:
        """
        Apply a partial update to a post.

        Only title and content are editable. Authors never change here,
        so no back-reference needs touching.

        Raises:
            PostNotFoundError: If no post has this id
        """
        changes = {k: dto[k] for k in EDITABLE_FIELDS if k in dto}
        if not changes:
            return await self.get_post(post_id)

        with persistence_errors("update post"):
            post = await self.store.update(POSTS, post_id, changes)
        if post is None:
            raise PostNotFoundError(post_id)

        logger.info(f"Updated post: {post_id} fields={sorted(changes)}")
        return (await self.populate([post]))[0]

    async def delete_post(self, post_id: str) -> None:
        """
        Delete a post.

        Authors keep the id in their posts list; readers filter it out.

        Raises:
            PostNotFoundError: If no post has this id
        """
        with persistence_errors("delete post"):
            deleted = await self.store.delete(POSTS, post_id)
        if deleted is None:
            raise PostNotFoundError(post_id)
        logger.info(f"Deleted post: {post_id}")

# =============================================================================
# core/services/relationship_service.py - Post <-> User References
# =============================================================================
# Maintains the two-way link between Post.authors and User.posts.
#
# Invariant: for every post p and every u in p.authors, User(u).posts
# contains p.id, and conversely. There are no transactions, so attachment
# is two sequential writes (owning side first). Between them the invariant
# is briefly false; if the second write fails it stays false until the
# caller retries. Each write is an add-to-set, so retrying is always safe.
# =============================================================================

import logging

from app.exceptions import AuthorshipAttachmentError, PostNotFoundError
from lib.store import POSTS, USERS, StoreError
from .base import StoreBackedService, persistence_errors

logger = logging.getLogger(__name__)


class RelationshipService(StoreBackedService):
    """Keeps Post.authors and User.posts mirrored."""

    async def attach_authorship(self, post_id: str, user_id: str) -> None:
        """
        Ensure user_id is an author of post_id and post_id is in the user's posts.

        Idempotent: calling it again with the same ids changes nothing.

        Raises:
            PostNotFoundError: If the post does not exist
            PersistenceError: If the first (post) write fails
            AuthorshipAttachmentError: If the post write succeeded but the
                user write did not; not rolled back, safe to retry
        """
        with persistence_errors(f"add author {user_id} to post {post_id}"):
            post = await self.store.add_to_set(POSTS, post_id, "authors", user_id)
        if post is None:
            raise PostNotFoundError(post_id)

        try:
            user = await self.store.add_to_set(USERS, user_id, "posts", post_id)
        except StoreError as e:
            logger.error(f"Authorship half-applied: post={post_id} user={user_id}: {e}")
            raise AuthorshipAttachmentError(post_id, user_id, e.message) from e
        if user is None:
            logger.error(f"Authorship half-applied: user {user_id} missing for post {post_id}")
            raise AuthorshipAttachmentError(post_id, user_id, "user not found")

        logger.info(f"Attached post {post_id} to user {user_id}")

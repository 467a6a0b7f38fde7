# =============================================================================
# core/services/user_service.py - User Business Logic
# =============================================================================
# Handles user CRUD operations. Passwords are hashed before they reach the
# store and stripped from everything returned.
# =============================================================================

import logging
from typing import Any

from fastapi.concurrency import run_in_threadpool

from app.exceptions import ForbiddenError, UserNotFoundError
from core.models.user import UserPublic
from core.validation import Dto
from lib.security import hash_password
from lib.store import USERS
from .base import StoreBackedService, persistence_errors

logger = logging.getLogger(__name__)


class UserService(StoreBackedService):
    """Service for user management operations."""

    @staticmethod
    async def _to_document(dto: Dto) -> dict[str, Any]:
        data = dto.to_dict()
        if "password" in data:
            # bcrypt is CPU-bound; keep it off the event loop
            data["password"] = await run_in_threadpool(hash_password, data["password"])
        return data

    @staticmethod
    def ensure_self(user_id: str, caller: dict[str, Any]) -> None:
        """
        Only let a caller modify their own record.

        Raises:
            ForbiddenError: If the caller is someone else
        """
        if caller.get("id") != user_id:
            raise ForbiddenError()

    async def get_document(self, user_id: str) -> dict[str, Any] | None:
        """Fetch the raw stored user (password included), or None."""
        with persistence_errors("load user"):
            return await self.store.find_one(USERS, user_id)

    async def list_users(self) -> list[UserPublic]:
        with persistence_errors("load users"):
            users = await self.store.find(USERS)
        return [UserPublic.from_document(u) for u in users]

    async def get_user(self, user_id: str) -> UserPublic:
        """
        Get a user by ID.

        Raises:
            UserNotFoundError: If no user has this id
        """
        user = await self.get_document(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return UserPublic.from_document(user)

    async def get_post_ids(self, user_id: str) -> list[str]:
        """
        Return the user's posts back-references as stored.

        Raises:
            UserNotFoundError: If no user has this id
        """
        user = await self.get_document(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return list(user.get("posts") or [])

    async def create_user(self, dto: Dto) -> UserPublic:
        """Create a user with an empty posts list."""
        data = await self._to_document(dto)
        data["posts"] = []
        with persistence_errors("create user"):
            user = await self.store.insert(USERS, data)
        logger.info(f"Created user: {user['id']}")
        return UserPublic.from_document(user)

    async def update_user(self, user_id: str, dto: Dto) -> UserPublic:
        """
        Apply a partial update to a user.

        The posts list is not part of the DTO shape and cannot be edited here.

        Raises:
            UserNotFoundError: If no user has this id
        """
        changes = await self._to_document(dto)
        if not changes:
            return await self.get_user(user_id)

        with persistence_errors("update user"):
            user = await self.store.update(USERS, user_id, changes)
        if user is None:
            raise UserNotFoundError(user_id)

        logger.info(f"Updated user: {user_id} fields={sorted(changes)}")
        return UserPublic.from_document(user)

    async def delete_user(self, user_id: str) -> None:
        """
        Delete a user.

        Posts keep the id in their authors list; population skips it.

        Raises:
            UserNotFoundError: If no user has this id
        """
        with persistence_errors("delete user"):
            deleted = await self.store.delete(USERS, user_id)
        if deleted is None:
            raise UserNotFoundError(user_id)
        logger.info(f"Deleted user: {user_id}")

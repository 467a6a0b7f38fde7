# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .base import StoreBackedService, persistence_errors
from .post_service import PostService
from .relationship_service import RelationshipService
from .user_service import UserService

__all__ = [
    "StoreBackedService",
    "persistence_errors",
    "PostService",
    "RelationshipService",
    "UserService",
]

# =============================================================================
# core/models/ - Data Models
# =============================================================================
# This package contains the shapes data takes at the API boundary:
# - dto.py: Constraint tables for inbound payloads (Validation Engine input)
# - post.py: Post response schema with populated authors
# - user.py: User projections (public profile, author view)
#
# These models define the "contract" between API and clients.
# =============================================================================

from .dto import AddressDto, CreatePostDto, CreateUserDto
from .post import PostResponse
from .user import Address, AuthorPublic, UserPublic

__all__ = [
    # DTO shapes
    "AddressDto",
    "CreatePostDto",
    "CreateUserDto",
    # Post
    "PostResponse",
    # User
    "Address",
    "AuthorPublic",
    "UserPublic",
]

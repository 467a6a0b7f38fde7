# =============================================================================
# app/routers/ - Controller Handlers
# =============================================================================
# This package contains request handlers organized by resource:
# - health.py: Health check endpoints (plain FastAPI routes)
# - posts.py: Post controller handlers
# - users.py: User controller handlers
#
# Post and user handlers are wired into pipelines in app/routes.py.
# =============================================================================

from . import health
from . import posts
from . import users

__all__ = [
    "health",
    "posts",
    "users",
]

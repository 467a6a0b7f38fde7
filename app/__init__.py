# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: App factory, middleware setup, error handlers
# - config.py: Environment variable loading and settings
# - pipeline.py: Stage chaining for each route
# - routes.py: Which stages each route runs, in which order
# - auth/: Token verification guard
# - routers/: Controller handlers per resource, plus health checks
#
# The app layer is thin - it handles HTTP concerns and delegates
# business logic to the core/ package.
# =============================================================================

__version__ = "1.0.0"

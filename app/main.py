# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Postbook API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app import __version__
from app.config import Settings, get_settings
from app.exceptions import register_exception_handlers
from app.routers import health
from app.routes import auth_router, posts_router, users_router
from lib.store import DocumentStore, InMemoryStore, SupabaseStore

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


async def build_store(settings: Settings) -> DocumentStore:
    """Create the document store selected by STORE_BACKEND."""
    if settings.STORE_BACKEND == "supabase":
        return await SupabaseStore.connect(
            settings.SUPABASE_URL,
            settings.SUPABASE_SERVICE_KEY,
        )
    logger.warning("Using in-memory store; data is lost on restart")
    return InMemoryStore()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown:
    - Startup: Build the document store unless one was injected
    - Shutdown: Drop the store handle if it was built here
    """
    settings: Settings = app.state.settings
    logger.info(f"Starting Postbook API in {settings.ENVIRONMENT} mode")

    owns_store = app.state.store is None
    if owns_store:
        app.state.store = await build_store(settings)

    yield

    logger.info("Shutting down Postbook API")
    if owns_store:
        app.state.store = None


def create_app(
    settings: Settings | None = None,
    store: DocumentStore | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use (defaults to the cached environment settings)
        store: Pre-built document store; when omitted the lifespan builds one

    Returns:
        FastAPI: The configured application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Postbook API",
        description="""
## Posts and their authors

CRUD for posts and users, with each post's `authors` mirrored in every
author's `posts` list.

- Reads are public.
- Writes need a signed token in the `Authorization` cookie or an
  `Authorization: Bearer` header.
""",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store

    # =========================================================================
    # Middleware
    # =========================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    register_exception_handlers(app)

    # =========================================================================
    # Routers
    # =========================================================================

    app.include_router(health.router, prefix=settings.API_PREFIX, tags=["Health"])
    app.include_router(auth_router, prefix=settings.API_PREFIX)
    app.include_router(posts_router, prefix=settings.API_PREFIX)
    app.include_router(users_router, prefix=settings.API_PREFIX)

    @app.get("/", tags=["Root"])
    async def root():
        """
        Root endpoint - returns API info.
        """
        return {
            "name": "Postbook API",
            "version": __version__,
            "docs": "/docs",
            "health": f"{settings.API_PREFIX}/health",
        }

    return app


configure_logging(get_settings())
app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=_settings.API_HOST,
        port=_settings.API_PORT,
        reload=_settings.is_development,
    )

# =============================================================================
# core/services/base.py - Shared Service Plumbing
# =============================================================================
# Every service receives its DocumentStore explicitly. Store failures are
# re-raised as PersistenceError so the error translator can report them.
# =============================================================================

from collections.abc import Iterator
from contextlib import contextmanager

from app.exceptions import PersistenceError
from lib.store import DocumentStore, StoreError


@contextmanager
def persistence_errors(operation: str) -> Iterator[None]:
    """
    Convert StoreError raised inside the block into PersistenceError.

    Example:
        with persistence_errors("load posts"):
            posts = await store.find("posts")
    """
    try:
        yield
    except StoreError as e:
        raise PersistenceError(
            message=f"Failed to {operation}: {e.message}",
            details=e.details,
        ) from e


class StoreBackedService:
    """Base for services that work against an injected document store."""

    def __init__(self, store: DocumentStore):
        self.store = store

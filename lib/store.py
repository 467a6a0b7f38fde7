# =============================================================================
# lib/store.py - Document Store Interface
# =============================================================================
# This module provides the persistence seam used by the service layer.
# Services never reach for a global database handle: a DocumentStore is
# built once in the app lifespan and passed into every service explicitly.
#
# Two implementations are provided:
# - InMemoryStore: dict-backed, used for development and tests
# - SupabaseStore: async Supabase client against the posts/users tables
#
# Documents are plain dicts with a string "id" key. Every method is a
# coroutine, so each call is a suspension point for the request task.
#
# Usage:
#   from lib.store import InMemoryStore
#   store = InMemoryStore()
#   post = await store.insert("posts", {"title": "T", "content": "C"})
# =============================================================================

from __future__ import annotations

import copy
import logging
from abc import ABC, abstractmethod
from typing import Any, Iterable

from lib.utils import ApplicationError, new_id, normalize_id

# Set up logging for this module
logger = logging.getLogger(__name__)

POSTS = "posts"
USERS = "users"
COLLECTIONS = (POSTS, USERS)


class StoreError(ApplicationError):
    """
    Error during a document store operation.

    Raised for connectivity problems and rejected writes. The service
    layer converts it into a PersistenceError for the API.
    """

    def __init__(
        self,
        message: str,
        code: str = "STORE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, suggestion=suggestion, details=details)


class DocumentStore(ABC):
    """
    Async interface over a document store with two collections.

    Read methods return copies, so callers may mutate results freely.
    Write methods that target a single id return the stored document,
    or None when no document has that id.
    """

    @abstractmethod
    async def find(
        self,
        collection: str,
        ids: Iterable[str] | None = None,
    ) -> list[dict[str, Any]]:
        """Return all documents, or only those whose id is in `ids`."""

    @abstractmethod
    async def find_one(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        """Return one document by id, or None."""

    @abstractmethod
    async def insert(self, collection: str, document: dict[str, Any]) -> dict[str, Any]:
        """Store a new document, assigning its id, and return it."""

    @abstractmethod
    async def update(
        self,
        collection: str,
        doc_id: str,
        fields: dict[str, Any],
    ) -> dict[str, Any] | None:
        """Merge `fields` into a document and return the updated document."""

    @abstractmethod
    async def delete(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        """Remove a document and return what was removed."""

    @abstractmethod
    async def add_to_set(
        self,
        collection: str,
        doc_id: str,
        field: str,
        value: str,
    ) -> dict[str, Any] | None:
        """
        Append `value` to the list in `field` unless it is already there.

        Idempotent: repeating the call leaves the document unchanged.
        """

    async def ping(self) -> bool:
        """Check connectivity. Stores with nothing to check return True."""
        return True


# =============================================================================
# In-Memory Store
# =============================================================================

class InMemoryStore(DocumentStore):
    """
    Dict-backed store.

    No method awaits internally, so each call is atomic with respect to
    other tasks on the same event loop.
    """

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {
            name: {} for name in COLLECTIONS
        }

    def _table(self, collection: str) -> dict[str, dict[str, Any]]:
        try:
            return self._collections[collection]
        except KeyError:
            raise StoreError(
                message=f"Unknown collection: {collection}",
                code="UNKNOWN_COLLECTION",
                suggestion=f"Use one of: {', '.join(COLLECTIONS)}",
                details={"collection": collection},
            )

    async def find(self, collection, ids=None):
        table = self._table(collection)
        if ids is None:
            return [copy.deepcopy(doc) for doc in table.values()]
        return [
            copy.deepcopy(table[doc_id])
            for doc_id in dict.fromkeys(normalize_id(i) for i in ids)
            if doc_id in table
        ]

    async def find_one(self, collection, doc_id):
        doc = self._table(collection).get(normalize_id(doc_id))
        return copy.deepcopy(doc) if doc is not None else None

    async def insert(self, collection, document):
        table = self._table(collection)
        doc = copy.deepcopy(document)
        doc["id"] = new_id()
        table[doc["id"]] = doc
        logger.debug(f"Inserted {collection}/{doc['id']}")
        return copy.deepcopy(doc)

    async def update(self, collection, doc_id, fields):
        doc = self._table(collection).get(normalize_id(doc_id))
        if doc is None:
            return None
        changes = {k: copy.deepcopy(v) for k, v in fields.items() if k != "id"}
        doc.update(changes)
        return copy.deepcopy(doc)

    async def delete(self, collection, doc_id):
        return self._table(collection).pop(normalize_id(doc_id), None)

    async def add_to_set(self, collection, doc_id, field, value):
        doc = self._table(collection).get(normalize_id(doc_id))
        if doc is None:
            return None
        values = doc.setdefault(field, [])
        if value not in values:
            values.append(value)
        return copy.deepcopy(doc)


# =============================================================================
# Supabase Store
# =============================================================================

class SupabaseStore(DocumentStore):
    """
    Store backed by Supabase tables named after the collections.

    Expected schema:
        posts(id text primary key, title text, content text, authors text[])
        users(id text primary key, name text, email text, password text,
              address jsonb, posts text[])

    Example:
        store = await SupabaseStore.connect(url, service_key)
        posts = await store.find("posts")
    """

    def __init__(self, client: Any):
        self._client = client

    @classmethod
    async def connect(cls, url: str, key: str) -> "SupabaseStore":
        """
        Create the async Supabase client.

        Uses the service_role key, which bypasses Row Level Security.
        This is appropriate for server-side operations.

        Raises:
            StoreError: If client creation fails
        """
        from supabase import acreate_client

        try:
            client = await acreate_client(url, key)
        except Exception as e:
            raise StoreError(
                message=f"Failed to create Supabase client: {e}",
                code="CLIENT_INIT_FAILED",
                suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file",
            )
        logger.info("Supabase client initialized successfully")
        return cls(client)

    async def _execute(self, query: Any, operation: str, **details: Any) -> list[dict[str, Any]]:
        try:
            response = await query.execute()
        except Exception as e:
            raise StoreError(
                message=f"Failed to {operation}: {e}",
                code=f"{operation.upper().replace(' ', '_')}_FAILED",
                suggestion="Check Supabase connectivity and that the table exists",
                details=details,
            )
        return response.data or []

    async def find(self, collection, ids=None):
        query = self._client.table(collection).select("*")
        if ids is not None:
            id_list = list(dict.fromkeys(normalize_id(i) for i in ids))
            if not id_list:
                return []
            query = query.in_("id", id_list)
        return await self._execute(query, f"find {collection}")

    async def find_one(self, collection, doc_id):
        doc_id = normalize_id(doc_id)
        rows = await self._execute(
            self._client.table(collection).select("*").eq("id", doc_id).limit(1),
            f"find {collection}",
            id=doc_id,
        )
        return rows[0] if rows else None

    async def insert(self, collection, document):
        doc = {**document, "id": new_id()}
        rows = await self._execute(
            self._client.table(collection).insert(doc),
            f"insert {collection}",
        )
        if not rows:
            raise StoreError(
                message="Insert returned no data",
                code="INSERT_EMPTY",
                details={"collection": collection},
            )
        return rows[0]

    async def update(self, collection, doc_id, fields):
        doc_id = normalize_id(doc_id)
        changes = {k: v for k, v in fields.items() if k != "id"}
        if not changes:
            return await self.find_one(collection, doc_id)
        rows = await self._execute(
            self._client.table(collection).update(changes).eq("id", doc_id),
            f"update {collection}",
            id=doc_id,
        )
        return rows[0] if rows else None

    async def delete(self, collection, doc_id):
        doc_id = normalize_id(doc_id)
        rows = await self._execute(
            self._client.table(collection).delete().eq("id", doc_id),
            f"delete {collection}",
            id=doc_id,
        )
        return rows[0] if rows else None

    async def add_to_set(self, collection, doc_id, field, value):
        # Read-modify-write; concurrent writers may race but each write is
        # idempotent, so repeated attachment converges.
        doc = await self.find_one(collection, doc_id)
        if doc is None:
            return None
        values = list(doc.get(field) or [])
        if value in values:
            return doc
        values.append(value)
        return await self.update(collection, doc_id, {field: values})

    async def ping(self):
        try:
            await self._client.table(USERS).select("id").limit(1).execute()
        except Exception as e:
            logger.warning(f"Supabase ping failed: {e}")
            return False
        return True

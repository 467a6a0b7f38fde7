# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - store.py: Async document store interface (in-memory and Supabase)
# - security.py: Password hashing
# - utils.py: Shared utilities (error base class, id helpers)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.store import DocumentStore, InMemoryStore, StoreError, SupabaseStore
from lib.security import hash_password, verify_password
from lib.utils import ApplicationError, new_id, normalize_id

__all__ = [
    # Store
    "DocumentStore",
    "InMemoryStore",
    "StoreError",
    "SupabaseStore",
    # Security
    "hash_password",
    "verify_password",
    # Utils
    "ApplicationError",
    "new_id",
    "normalize_id",
]

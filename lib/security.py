# =============================================================================
# lib/security.py - Password Hashing
# =============================================================================
# Passwords are stored as bcrypt hashes through a passlib CryptContext and
# never leave the service in a response.
#
# bcrypt is CPU-bound: async callers should run these functions in a
# threadpool (see core/services/user_service.py).
# =============================================================================

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """
    Hash a plaintext password with a random salt.

    Example:
        stored = hash_password("hunter22")
        verify_password("hunter22", stored)  # True
    """
    return pwd_context.hash(password)


def verify_password(password: str, stored: str) -> bool:
    """Check a plaintext password against a stored hash."""
    if not stored or pwd_context.identify(stored) is None:
        return False
    return pwd_context.verify(password, stored)

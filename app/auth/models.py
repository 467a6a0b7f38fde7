# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from pydantic import BaseModel, ConfigDict, Field


class TokenPayload(BaseModel):
    """
    Decoded JWT token payload.

    The user id is carried in "sub". Tokens from older issuers put it in
    "_id" instead, which is still accepted.
    """
    model_config = ConfigDict(populate_by_name=True)

    sub: str | None = None  # User ID
    legacy_id: str | None = Field(default=None, alias="_id")
    exp: int | None = None  # Expiration timestamp
    iat: int | None = None  # Issued at timestamp

    @property
    def user_id(self) -> str | None:
        return self.sub or self.legacy_id

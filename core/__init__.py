# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business logic behind the API:
# - models/: DTO constraint tables and response schemas
# - services/: Post, user and relationship operations against a store
# - validation.py: The engine that turns payloads into DTOs
#
# Services receive their store explicitly and never touch FastAPI request
# objects. This keeps the logic testable and reusable.
# =============================================================================

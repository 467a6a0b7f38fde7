# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Postbook API:
# - test_validation.py: Validation engine (strict/partial, nested shapes)
# - test_store.py: In-memory document store semantics
# - test_relationships.py: Post <-> User authorship maintenance
# - test_auth.py: Token verification and the authenticate stage
# - test_pipeline.py: Stage ordering, route table, error translation
# - test_posts_api.py / test_users_api.py: Endpoints end to end
#
# Run tests with: pytest
# =============================================================================

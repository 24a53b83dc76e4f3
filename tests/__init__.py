# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Cohort Admin API:
# - test_tenant_router.py: Subdomain extraction and path mapping decisions
# - test_middleware.py: Request rewriting through the ASGI middleware
# - test_config.py: Environment parsing and routing config
# - test_models.py: Unit tests for Pydantic model validation
# - test_supabase_client.py: Query building and error wrapping
# - test_services.py: Tenant and assessment services
# - test_api.py: Integration tests for API endpoints
#
# Run tests with: pytest
# =============================================================================

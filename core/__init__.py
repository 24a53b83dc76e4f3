# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business logic behind the HTTP layer:
# - models/: Pydantic schemas for routing decisions and table records
# - services/: Tenant router, tenant reads, assessment catalogue CRUD
#
# The tenant router never touches the database or the request object and
# can be driven from any ASGI/WSGI host.
# =============================================================================

# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Liveness and database health endpoints
# - assessments.py: Admin assessment catalogue CRUD
# - routing.py: Tenant routing diagnostics
# - tenants.py: Tenant namespace (/tenant/{subdomain}/...) endpoints
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import assessments
from . import routing
from . import tenants

__all__ = [
    "health",
    "assessments",
    "routing",
    "tenants",
]

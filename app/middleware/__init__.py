# =============================================================================
# app/middleware/ - ASGI Middleware
# =============================================================================
# - tenant_routing.py: Rewrites <tenant>.<domain> requests into /tenant/<tenant>/...
# =============================================================================

from app.middleware.tenant_routing import TenantRoutingMiddleware

__all__ = ["TenantRoutingMiddleware"]

# =============================================================================
# app/routers/routing.py - Tenant Routing Diagnostics
# =============================================================================
# Lets operators ask "what would the router do with this host and path?"
# without setting up DNS. Useful when validating the subdomain rules
# against real deployment hostnames.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Query

from app.dependencies import TenantRouterDep
from core.models.routing import RouteDecision

router = APIRouter()


@router.get("/resolve", response_model=RouteDecision)
def resolve_route(
    tenant_router: TenantRouterDep,
    host: Annotated[str, Query(description="Host header, e.g. acme.example.com:443")] = "",
    path: Annotated[str, Query(description="Request path, e.g. /cohorts/42")] = "/",
):
    """
    Resolve a host and path with the configured tenant router.

    Exempt paths are reported as pass-through, matching what the
    middleware does before consulting the router.
    """
    if tenant_router.is_exempt_path(path):
        return RouteDecision.pass_through("exempt_path")
    return tenant_router.resolve(host, path)

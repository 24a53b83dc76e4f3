# =============================================================================
# app/middleware/tenant_routing.py - Subdomain Tenant Routing Middleware
# =============================================================================
# ASGI middleware that applies TenantRouter decisions to incoming requests:
#
#   GET http://acme.example.com/cohorts/42
#     -> routed internally to /tenant/acme/cohort/42
#     -> the client still sees /cohorts/42 in its address bar
#
# Rewrites replace `path` and `raw_path` in the ASGI scope before routing,
# so the Host header and query string reach the handler untouched. The new
# raw_path is mapped from the original one, keeping escapes such as %2F. The
# resolved subdomain is stored on `request.state.tenant`.
#
# Exempt paths (API, static assets, favicon, docs, /tenant itself) are
# forwarded without consulting the router.
#
# Usage:
#   app.add_middleware(TenantRoutingMiddleware)
# =============================================================================

import logging
from urllib.parse import quote, unquote

from starlette.datastructures import Headers
from starlette.responses import RedirectResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from app.dependencies import get_tenant_router
from core.models.routing import RouteAction, RouteDecision
from core.services.tenant_router import TenantRouter

logger = logging.getLogger(__name__)


class TenantRoutingMiddleware:
    """
    Pure ASGI middleware wrapping a TenantRouter.

    Holds no per-request state, so one instance serves all concurrent
    requests.
    """

    def __init__(self, app: ASGIApp, router: TenantRouter | None = None):
        self.app = app
        self.router = router or get_tenant_router()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        path = scope.get("path") or "/"
        if self.router.is_exempt_path(path):
            await self.app(scope, receive, send)
            return

        host = Headers(scope=scope).get("host")
        decision = self.router.resolve(host, path)

        if decision.action == RouteAction.REDIRECT:
            logger.info(f"Redirecting {host}{path} to {decision.destination}")
            response = RedirectResponse(url=decision.destination, status_code=307)
            await response(scope, receive, send)
            return

        if decision.action == RouteAction.REWRITE:
            logger.debug(f"Rewriting {host}{path} to {decision.destination}")
            scope = dict(scope)
            scope["path"] = decision.destination
            scope["raw_path"] = self._rewrite_raw_path(scope, decision)
            scope["state"] = {**scope.get("state", {}), "tenant": decision.subdomain}
        else:
            logger.debug(f"Passing through {host}{path} ({decision.reason})")

        await self.app(scope, receive, send)

    def _rewrite_raw_path(self, scope: Scope, decision: RouteDecision) -> bytes:
        """
        Map the undecoded request path the same way the decoded one was.

        Falls back to quoting the destination when the raw path is missing
        or maps to a different location (e.g. an escaped rule prefix).
        """
        raw_path = scope.get("raw_path")
        if raw_path:
            raw = raw_path.decode("latin-1") or "/"
            mapped = self.router.tenant_root(decision.subdomain) + self.router.map_path(raw)
            if unquote(mapped) == decision.destination:
                return mapped.encode("latin-1")
        return quote(decision.destination).encode("ascii")

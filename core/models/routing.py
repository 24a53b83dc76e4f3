# =============================================================================
# core/models/routing.py - Tenant Routing Schemas
# =============================================================================
# These models describe the inputs and outputs of the tenant router:
# - TenantRoutingConfig: Reserved names and host rules (built from settings)
# - PathRule: One entry of the static tenant path mapping table
# - RouteDecision: What the router decided for a single request
#
# All models are frozen. A decision is computed per request and discarded;
# nothing here is shared mutable state.
# =============================================================================

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from lib.utils import path_has_prefix


# Paths the middleware never inspects. Each entry matches exactly or as a
# segment prefix (see lib.utils.path_has_prefix).
DEFAULT_EXEMPT_PATHS: tuple[str, ...] = (
    "/api",
    "/_next/static",
    "/_next/image",
    "/favicon.ico",
    "/static",
    "/docs",
    "/redoc",
    "/openapi.json",
)


class RouteAction(str, Enum):
    """
    Outcome of a routing decision.

    - pass_through: Serve the request unchanged
    - rewrite: Serve a different internal path, keep the visible URL
    - redirect: Send the client to another URL
    """
    PASS_THROUGH = "pass_through"
    REWRITE = "rewrite"
    REDIRECT = "redirect"


class MatchKind(str, Enum):
    """How a PathRule compares its patterns against a path."""
    EXACT = "exact"
    PREFIX = "prefix"


class TenantRoutingConfig(BaseModel):
    """
    Configuration for the tenant router.

    Built once from application settings (see Settings.tenant_routing)
    and shared read-only by every request.

    Example:
        config = TenantRoutingConfig(admin_subdomain="console")
        config.namespace_root  # "/tenant"
    """

    model_config = ConfigDict(frozen=True)

    # Reserved path segment for tenant-scoped routes: /tenant/<subdomain>/...
    path_prefix: str = Field(
        default="tenant",
        min_length=1,
        description="Reserved namespace segment for tenant routes"
    )

    # Requests on this subdomain belong to the unscoped admin app
    admin_subdomain: str = Field(
        default="admin",
        min_length=1,
        description="Subdomain that is never treated as a tenant"
    )

    # Development roots where one extra label already means "subdomain"
    local_root_domains: tuple[str, ...] = Field(
        default=("localhost", "lvh.me"),
        description="Root domains whose direct children are tenant subdomains"
    )

    # Number of labels in the production apex domain (example.com -> 2)
    root_domain_labels: int = Field(
        default=2,
        ge=1,
        description="Labels in the apex domain; a subdomain needs one more"
    )

    exempt_paths: tuple[str, ...] = Field(
        default=DEFAULT_EXEMPT_PATHS,
        description="Paths the middleware never routes"
    )

    default_tenant: str = Field(
        default="admin",
        min_length=1,
        description="Tenant used when redirecting a bare /login"
    )

    redirect_login_to_default_tenant: bool = Field(
        default=False,
        description="Redirect /login on non-tenant hosts to the default tenant login"
    )

    @property
    def namespace_root(self) -> str:
        """Path of the tenant namespace, e.g. "/tenant"."""
        return "/" + self.path_prefix.strip("/")


class PathRule(BaseModel):
    """
    One entry in the ordered tenant path mapping table.

    A rule matches when any of its patterns matches the path. A matching
    rule produces, in order of precedence:
    - `target` if set (the whole path is replaced)
    - the path with the first occurrence of `replace[0]` swapped for `replace[1]`
    - the path unchanged

    Example:
        rule = PathRule(patterns=("/cohorts",), match=MatchKind.PREFIX,
                        replace=("/cohorts", "/cohort"))
        rule.apply("/cohorts/42")  # "/cohort/42"
    """

    model_config = ConfigDict(frozen=True)

    patterns: tuple[str, ...]
    match: MatchKind = MatchKind.EXACT
    target: str | None = None
    replace: tuple[str, str] | None = None

    def matches(self, path: str) -> bool:
        if self.match == MatchKind.EXACT:
            return path in self.patterns
        return any(path_has_prefix(path, pattern) for pattern in self.patterns)

    def apply(self, path: str) -> str:
        if self.target is not None:
            return self.target
        if self.replace is not None:
            old, new = self.replace
            return path.replace(old, new, 1)
        return path


class RouteDecision(BaseModel):
    """
    Result of routing one request.

    `destination` is set for rewrite and redirect decisions.
    `reason` is a short machine-readable tag used in logs and the
    debug endpoint.

    Example:
        {
            "action": "rewrite",
            "destination": "/tenant/acme/login",
            "subdomain": "acme",
            "reason": "tenant_subdomain"
        }
    """

    model_config = ConfigDict(frozen=True)

    action: RouteAction
    destination: str | None = None
    subdomain: str | None = None
    reason: str

    @classmethod
    def pass_through(cls, reason: str, subdomain: str | None = None) -> "RouteDecision":
        return cls(action=RouteAction.PASS_THROUGH, subdomain=subdomain, reason=reason)

    @classmethod
    def rewrite(cls, destination: str, subdomain: str) -> "RouteDecision":
        return cls(
            action=RouteAction.REWRITE,
            destination=destination,
            subdomain=subdomain,
            reason="tenant_subdomain",
        )

    @classmethod
    def redirect(cls, destination: str, reason: str) -> "RouteDecision":
        return cls(action=RouteAction.REDIRECT, destination=destination, reason=reason)

    @property
    def is_pass_through(self) -> bool:
        return self.action == RouteAction.PASS_THROUGH

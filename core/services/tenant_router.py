# =============================================================================
# core/services/tenant_router.py - Subdomain Tenant Routing
# =============================================================================
# Decides, for one request, whether it belongs to a tenant and where it
# should be served:
#
#   acme.example.com/cohorts/42  ->  rewrite to /tenant/acme/cohort/42
#   admin.example.com/dashboard  ->  pass through (admin app)
#   localhost:3000/login         ->  pass through (no subdomain)
#
# The decision is a pure function of (host, path), the routing config and
# the static TENANT_PATH_RULES table. It performs no I/O and never raises;
# any unexpected failure falls back to pass-through.
#
# Usage:
#   router = TenantRouter(TenantRoutingConfig())
#   decision = router.resolve("acme.example.com", "/cohorts")
#   decision.destination  # "/tenant/acme/cohort"
# =============================================================================

import ipaddress
import logging

from core.models.routing import (
    MatchKind,
    PathRule,
    RouteDecision,
    TenantRoutingConfig,
)
from lib.utils import path_has_prefix

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Tenant path mapping table
# -----------------------------------------------------------------------------
# Ordered, first match wins. Paths that match nothing keep their shape and
# are only prefixed with the tenant namespace.
TENANT_PATH_RULES: tuple[PathRule, ...] = (
    PathRule(patterns=("/", "/login"), match=MatchKind.EXACT, target="/login"),
    PathRule(patterns=("/dashboard",), match=MatchKind.EXACT, target="/dashboard"),
    PathRule(patterns=("/cohorts",), match=MatchKind.PREFIX, replace=("/cohorts", "/cohort")),
    PathRule(patterns=("/cohort",), match=MatchKind.PREFIX),
    PathRule(patterns=("/assessments",), match=MatchKind.PREFIX),
    PathRule(patterns=("/notifications",), match=MatchKind.PREFIX),
)


def normalize_hostname(host: str | None) -> str:
    """
    Reduce a Host header to a bare lower-case hostname.

    Strips the port and a trailing dot. Bracketed IPv6 literals are kept
    with their brackets so they are recognized as IPs later.

    Example:
        normalize_hostname("Acme.Example.com:443")  # "acme.example.com"
        normalize_hostname("[::1]:8000")            # "[::1]"
    """
    host = (host or "").strip().lower()
    if not host:
        return ""

    if host.startswith("["):
        end = host.find("]")
        return host[: end + 1] if end != -1 else ""

    hostname = host.split(":", 1)[0]
    return hostname.rstrip(".")


def is_ip_literal(hostname: str) -> bool:
    """Check whether a normalized hostname is an IPv4/IPv6 address."""
    if hostname.startswith("["):
        return True
    try:
        ipaddress.ip_address(hostname)
        return True
    except ValueError:
        return False


class TenantRouter:
    """
    Maps (host, path) to a RouteDecision.

    Safe to share between concurrent requests: the instance only holds the
    frozen config and the immutable rule table.
    """

    def __init__(
        self,
        config: TenantRoutingConfig | None = None,
        rules: tuple[PathRule, ...] = TENANT_PATH_RULES,
    ):
        self.config = config or TenantRoutingConfig()
        self.rules = tuple(rules)

    # -------------------------------------------------------------------------
    # Path predicates
    # -------------------------------------------------------------------------

    def is_tenant_path(self, path: str) -> bool:
        """Check whether a path is already inside the tenant namespace."""
        return path_has_prefix(path, self.config.namespace_root)

    def tenant_root(self, subdomain: str) -> str:
        """Namespace path serving one tenant, e.g. /tenant/acme."""
        return f"{self.config.namespace_root}/{subdomain}"

    def is_exempt_path(self, path: str) -> bool:
        """
        Check whether the middleware should skip a path entirely.

        Covers the configured exempt list (API, static assets, favicon, docs)
        and the tenant namespace itself.
        """
        if self.is_tenant_path(path):
            return True
        return any(path_has_prefix(path, entry) for entry in self.config.exempt_paths)

    # -------------------------------------------------------------------------
    # Host parsing
    # -------------------------------------------------------------------------

    def is_local_host(self, host: str | None) -> bool:
        """Check whether a host is a development host (local roots or an IP)."""
        hostname = normalize_hostname(host)
        if not hostname:
            return False
        if is_ip_literal(hostname):
            return True
        return any(
            hostname == root or hostname.endswith("." + root)
            for root in self.config.local_root_domains
        )

    def extract_subdomain(self, host: str | None) -> str | None:
        """
        Derive the tenant subdomain from a Host header.

        A host has a subdomain iff, after stripping the port:
        - it is not empty and not an IP literal, and
        - under a local root (localhost, lvh.me) at least one label precedes
          the root, otherwise it has more labels than the apex domain, and
        - the leftmost label is not empty.

        The admin keyword is returned as-is; resolve() decides what to do
        with it.

        Returns:
            The leftmost label, or None if the host has no subdomain
        """
        hostname = normalize_hostname(host)
        if not hostname or is_ip_literal(hostname):
            return None

        labels = hostname.split(".")

        for root in self.config.local_root_domains:
            if hostname == root:
                return None
            if hostname.endswith("." + root):
                return labels[0] or None

        if len(labels) <= self.config.root_domain_labels:
            return None

        return labels[0] or None

    # -------------------------------------------------------------------------
    # Path mapping
    # -------------------------------------------------------------------------

    def map_path(self, path: str) -> str:
        """
        Map an incoming path to its tenant-relative path.

        Example:
            router.map_path("/")            # "/login"
            router.map_path("/cohorts/42")  # "/cohort/42"
            router.map_path("/help")        # "/help"
        """
        for rule in self.rules:
            if rule.matches(path):
                return rule.apply(path)
        return path

    # -------------------------------------------------------------------------
    # Decision
    # -------------------------------------------------------------------------

    def resolve(self, host: str | None, path: str | None) -> RouteDecision:
        """
        Decide how to serve a request.

        Never raises. If the decision itself fails, the request passes
        through unchanged.
        """
        try:
            return self._decide(host, path)
        except Exception:
            logger.exception(f"Tenant routing failed for host={host!r} path={path!r}, passing through")
            return RouteDecision.pass_through("routing_error")

    def _decide(self, host: str | None, path: str | None) -> RouteDecision:
        path = path or "/"
        if not path.startswith("/"):
            path = "/" + path

        if self.is_tenant_path(path):
            return RouteDecision.pass_through("already_namespaced")

        subdomain = self.extract_subdomain(host)

        if subdomain is None:
            if (
                self.config.redirect_login_to_default_tenant
                and path == "/login"
                and not self.is_local_host(host)
            ):
                destination = self.tenant_root(self.config.default_tenant) + "/login"
                return RouteDecision.redirect(destination, reason="default_tenant_login")
            return RouteDecision.pass_through("no_subdomain")

        if subdomain == self.config.admin_subdomain:
            return RouteDecision.pass_through("admin_subdomain", subdomain=subdomain)

        destination = self.tenant_root(subdomain) + self.map_path(path)
        return RouteDecision.rewrite(destination, subdomain=subdomain)

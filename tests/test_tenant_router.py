# =============================================================================
# tests/test_tenant_router.py - Tenant Router Tests
# =============================================================================
# Unit tests for the pure routing decision:
# - Subdomain extraction (ports, localhost, IPs, apex domains)
# - Path mapping table order
# - Rewrite / pass-through / redirect decisions
# - Fail-open behaviour
#
# Run with: pytest tests/test_tenant_router.py -v
# =============================================================================

import os
import subprocess
import sys
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from core.models.routing import RouteAction, TenantRoutingConfig
from core.services.tenant_router import (
    TENANT_PATH_RULES,
    TenantRouter,
    is_ip_literal,
    normalize_hostname,
)


REPO_ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture
def router():
    return TenantRouter(TenantRoutingConfig())


# =============================================================================
# Host Parsing
# =============================================================================

class TestNormalizeHostname:
    """Tests for normalize_hostname()."""

    @pytest.mark.parametrize("host,expected", [
        ("acme.example.com", "acme.example.com"),
        ("Acme.Example.COM:443", "acme.example.com"),
        ("localhost:3000", "localhost"),
        ("acme.example.com.", "acme.example.com"),
        ("  sub.localhost:3000  ", "sub.localhost"),
        ("[::1]:8000", "[::1]"),
        ("[::1", ""),
        ("", ""),
        (None, ""),
    ])
    def test_normalize(self, host, expected):
        assert normalize_hostname(host) == expected

    def test_ip_literals(self):
        assert is_ip_literal("127.0.0.1")
        assert is_ip_literal("[::1]")
        assert not is_ip_literal("acme.example.com")


class TestExtractSubdomain:
    """Tests for TenantRouter.extract_subdomain()."""

    @pytest.mark.parametrize("host,expected", [
        ("acme.example.com", "acme"),
        ("acme.example.com:8443", "acme"),
        ("ACME.example.com", "acme"),
        ("admin.example.com", "admin"),
        ("sub.localhost:3000", "sub"),
        ("sub.localhost", "sub"),
        ("imd.lvh.me:3000", "imd"),
        ("a.b.example.com", "a"),
    ])
    def test_has_subdomain(self, router, host, expected):
        assert router.extract_subdomain(host) == expected

    @pytest.mark.parametrize("host", [
        "example.com",
        "example.com:443",
        "localhost",
        "localhost:3000",
        "lvh.me",
        "127.0.0.1:3000",
        "10.0.0.5",
        "[::1]:3000",
        "testserver",
        ".example.com",
        "",
        None,
    ])
    def test_no_subdomain(self, router, host):
        assert router.extract_subdomain(host) is None

    def test_root_domain_labels_setting(self):
        """A three-label apex (example.co.uk) needs four labels for a tenant."""
        router = TenantRouter(TenantRoutingConfig(root_domain_labels=3))

        assert router.extract_subdomain("example.co.uk") is None
        assert router.extract_subdomain("acme.example.co.uk") == "acme"

    def test_custom_local_root(self):
        router = TenantRouter(TenantRoutingConfig(local_root_domains=("dev.internal",)))

        assert router.extract_subdomain("acme.dev.internal") == "acme"
        assert router.extract_subdomain("dev.internal") is None
        # localhost is no longer special, so it is a one-label host
        assert router.extract_subdomain("sub.localhost") is None


# =============================================================================
# Path Mapping
# =============================================================================

class TestMapPath:
    """Tests for the ordered tenant path mapping table."""

    @pytest.mark.parametrize("path,expected", [
        ("/", "/login"),
        ("/login", "/login"),
        ("/dashboard", "/dashboard"),
        ("/cohorts", "/cohort"),
        ("/cohorts/42", "/cohort/42"),
        ("/cohorts/42/participants/7", "/cohort/42/participants/7"),
        ("/cohort", "/cohort"),
        ("/cohort/42", "/cohort/42"),
        ("/assessments/9/questionnaire", "/assessments/9/questionnaire"),
        ("/notifications", "/notifications"),
        ("/unknown/path", "/unknown/path"),
        ("/dashboard/extra", "/dashboard/extra"),
        ("/cohortsx", "/cohortsx"),
    ])
    def test_map_path(self, router, path, expected):
        assert router.map_path(path) == expected

    def test_only_first_plural_segment_replaced(self, router):
        assert router.map_path("/cohorts/42/cohorts") == "/cohort/42/cohorts"

    def test_table_is_immutable(self):
        assert isinstance(TENANT_PATH_RULES, tuple)
        with pytest.raises(ValidationError):
            TENANT_PATH_RULES[0].target = "/elsewhere"


# =============================================================================
# Decisions
# =============================================================================

class TestResolve:
    """Tests for TenantRouter.resolve()."""

    @pytest.mark.parametrize("path,destination", [
        ("/", "/tenant/acme/login"),
        ("/login", "/tenant/acme/login"),
        ("/dashboard", "/tenant/acme/dashboard"),
        ("/cohorts", "/tenant/acme/cohort"),
        ("/cohorts/42", "/tenant/acme/cohort/42"),
        ("/cohort/42", "/tenant/acme/cohort/42"),
        ("/unknown/path", "/tenant/acme/unknown/path"),
    ])
    def test_rewrite_on_tenant_host(self, router, path, destination):
        decision = router.resolve("acme.example.com", path)

        assert decision.action == RouteAction.REWRITE
        assert decision.destination == destination
        assert decision.subdomain == "acme"

    def test_localhost_subdomain_rewrites(self, router):
        decision = router.resolve("sub.localhost:3000", "/cohorts")

        assert decision.action == RouteAction.REWRITE
        assert decision.destination == "/tenant/sub/cohort"

    @pytest.mark.parametrize("host", ["acme.example.com", "admin.example.com", "localhost:3000", "", None])
    @pytest.mark.parametrize("path", ["/tenant/acme/login", "/tenant/other/cohort/1", "/tenant"])
    def test_already_namespaced_passes_through(self, router, host, path):
        decision = router.resolve(host, path)

        assert decision.is_pass_through
        assert decision.reason == "already_namespaced"

    def test_rewrite_is_idempotent(self, router):
        first = router.resolve("acme.example.com", "/cohorts/42")
        second = router.resolve("acme.example.com", first.destination)

        assert first.action == RouteAction.REWRITE
        assert second.is_pass_through

    @pytest.mark.parametrize("path", ["/", "/login", "/dashboard", "/cohorts/42", "/anything"])
    def test_admin_host_passes_through(self, router, path):
        decision = router.resolve("admin.example.com", path)

        assert decision.is_pass_through
        assert decision.reason == "admin_subdomain"

    @pytest.mark.parametrize("host", ["localhost:3000", "example.com", "127.0.0.1:8000", "", None, ":::"])
    @pytest.mark.parametrize("path", ["/", "/login", "/cohorts/42"])
    def test_host_without_subdomain_passes_through(self, router, host, path):
        decision = router.resolve(host, path)

        assert decision.is_pass_through
        assert decision.destination is None

    def test_missing_path_treated_as_root(self, router):
        assert router.resolve("acme.example.com", "").destination == "/tenant/acme/login"
        assert router.resolve("acme.example.com", None).destination == "/tenant/acme/login"

    def test_custom_reserved_names(self):
        router = TenantRouter(TenantRoutingConfig(path_prefix="t", admin_subdomain="console"))

        assert router.resolve("console.example.com", "/").is_pass_through
        assert router.resolve("admin.example.com", "/").destination == "/t/admin/login"
        assert router.resolve("acme.example.com", "/t/acme/login").is_pass_through

    def test_internal_error_fails_open(self, router):
        with patch.object(TenantRouter, "extract_subdomain", side_effect=RuntimeError("boom")):
            decision = router.resolve("acme.example.com", "/cohorts")

        assert decision.is_pass_through
        assert decision.reason == "routing_error"


class TestLoginRedirect:
    """Tests for the optional default-tenant login redirect."""

    @pytest.fixture
    def redirecting_router(self):
        return TenantRouter(TenantRoutingConfig(
            redirect_login_to_default_tenant=True,
            default_tenant="imd",
        ))

    def test_redirects_bare_login_on_apex_host(self, redirecting_router):
        decision = redirecting_router.resolve("example.com", "/login")

        assert decision.action == RouteAction.REDIRECT
        assert decision.destination == "/tenant/imd/login"

    def test_local_hosts_are_not_redirected(self, redirecting_router):
        assert redirecting_router.resolve("localhost:3000", "/login").is_pass_through

    def test_other_paths_are_not_redirected(self, redirecting_router):
        assert redirecting_router.resolve("example.com", "/dashboard").is_pass_through

    def test_tenant_hosts_still_rewrite(self, redirecting_router):
        decision = redirecting_router.resolve("acme.example.com", "/login")

        assert decision.action == RouteAction.REWRITE

    def test_disabled_by_default(self, router):
        assert router.resolve("example.com", "/login").is_pass_through


class TestExemptPaths:
    """Tests for TenantRouter.is_exempt_path()."""

    @pytest.mark.parametrize("path", [
        "/api",
        "/api/health",
        "/api/admin/assessments/templates",
        "/_next/static/chunks/main.js",
        "/_next/image",
        "/favicon.ico",
        "/tenant/acme/login",
        "/docs",
    ])
    def test_exempt(self, router, path):
        assert router.is_exempt_path(path)

    @pytest.mark.parametrize("path", ["/", "/login", "/apix", "/cohorts", "/favicon.ico.bak", "/tenants"])
    def test_not_exempt(self, router, path):
        assert not router.is_exempt_path(path)


class TestTenantRoot:
    """Tests for TenantRouter.tenant_root()."""

    def test_default_prefix(self, router):
        assert router.tenant_root("acme") == "/tenant/acme"

    def test_custom_prefix(self):
        router = TenantRouter(TenantRoutingConfig(path_prefix="/t/"))

        assert router.tenant_root("acme") == "/t/acme"


# =============================================================================
# Import Isolation
# =============================================================================

class TestImportIsolation:
    """The routing model must load without database settings."""

    def test_routing_model_does_not_load_database_client(self):
        env = {k: v for k, v in os.environ.items() if not k.startswith("SUPABASE_")}
        code = (
            "import sys, core.models.routing, lib.utils; "
            "assert 'lib.supabase_client' not in sys.modules; "
            "assert 'app.config' not in sys.modules"
        )

        result = subprocess.run(
            [sys.executable, "-c", code],
            cwd=REPO_ROOT,
            env=env,
            capture_output=True,
            text=True,
        )

        assert result.returncode == 0, result.stderr

# =============================================================================
# tests/test_config.py - Settings Tests
# =============================================================================
# Checks environment parsing and the derived tenant routing config.
# =============================================================================

import pytest
from pydantic import ValidationError

from app.config import Settings
from core.models.routing import DEFAULT_EXEMPT_PATHS

REQUIRED = {
    "SUPABASE_URL": "https://test-project.supabase.co",
    "SUPABASE_ANON_KEY": "anon",
    "SUPABASE_SERVICE_KEY": "service",
}


def make_settings(**overrides) -> Settings:
    return Settings(_env_file=None, **{**REQUIRED, **overrides})


class TestSettings:
    """Tests for Settings parsing."""

    def test_defaults(self):
        settings = make_settings()

        assert settings.TENANT_PATH_PREFIX == "tenant"
        assert settings.ADMIN_SUBDOMAIN == "admin"
        assert settings.REDIRECT_LOGIN_TO_DEFAULT_TENANT is False
        assert settings.local_root_domains_list == ["localhost", "lvh.me"]

    def test_quoted_supabase_values_are_unwrapped(self):
        settings = make_settings(
            SUPABASE_URL='  "https://quoted.supabase.co"  ',
            SUPABASE_SERVICE_KEY="'service-key'",
        )

        assert settings.SUPABASE_URL == "https://quoted.supabase.co"
        assert settings.SUPABASE_SERVICE_KEY == "service-key"

    def test_reserved_names_are_normalized(self):
        settings = make_settings(TENANT_PATH_PREFIX="/Orgs/", ADMIN_SUBDOMAIN="Console")

        assert settings.TENANT_PATH_PREFIX == "orgs"
        assert settings.ADMIN_SUBDOMAIN == "console"

    def test_csv_lists(self):
        settings = make_settings(
            CORS_ORIGINS="http://localhost:3000, https://app.example.com,",
            TENANT_EXEMPT_PATHS="api, /static ,favicon.ico",
        )

        assert settings.cors_origins_list == ["http://localhost:3000", "https://app.example.com"]
        assert settings.tenant_exempt_paths_list == ["/api", "/static", "/favicon.ico"]

    def test_root_domain_labels_must_be_positive(self):
        with pytest.raises(ValidationError):
            make_settings(ROOT_DOMAIN_LABELS=0)


class TestTenantRoutingConfig:
    """Tests for Settings.tenant_routing."""

    def test_default_config(self):
        config = make_settings().tenant_routing

        assert config.namespace_root == "/tenant"
        assert config.admin_subdomain == "admin"
        assert config.local_root_domains == ("localhost", "lvh.me")
        assert config.root_domain_labels == 2
        assert config.exempt_paths == DEFAULT_EXEMPT_PATHS

    def test_overrides_flow_through(self):
        config = make_settings(
            TENANT_PATH_PREFIX="orgs",
            LOCAL_ROOT_DOMAINS="dev.test",
            DEFAULT_TENANT="imd",
            REDIRECT_LOGIN_TO_DEFAULT_TENANT=True,
        ).tenant_routing

        assert config.namespace_root == "/orgs"
        assert config.local_root_domains == ("dev.test",)
        assert config.default_tenant == "imd"
        assert config.redirect_login_to_default_tenant is True

# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.SUPABASE_URL)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# The Settings class validates all values at startup, catching configuration
# errors early rather than at runtime.
# =============================================================================

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from core.models.routing import TenantRoutingConfig


def _split_csv(value: str | None) -> list[str]:
    """Split a comma-separated setting into trimmed, non-empty items."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses pydantic-settings to:
    - Automatically load from .env file
    - Validate types and constraints
    - Provide sensible defaults for development

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Supabase Configuration
    # -------------------------------------------------------------------------
    # These are required - app won't start without them

    SUPABASE_URL: str = Field(
        ...,
        description="Supabase project URL (e.g., https://xxx.supabase.co)"
    )

    SUPABASE_ANON_KEY: str = Field(
        ...,
        description="Supabase anon/public API key"
    )

    SUPABASE_SERVICE_KEY: str = Field(
        ...,
        description="Supabase service_role key (bypasses RLS)"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging, auto-reload)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Tenant Routing
    # -------------------------------------------------------------------------
    # Requests on <subdomain>.<root> are served from /<TENANT_PATH_PREFIX>/<subdomain>/...

    TENANT_PATH_PREFIX: str = Field(
        default="tenant",
        min_length=1,
        description="Reserved path segment for tenant-scoped routes"
    )

    ADMIN_SUBDOMAIN: str = Field(
        default="admin",
        min_length=1,
        description="Subdomain served by the admin app, never rewritten"
    )

    LOCAL_ROOT_DOMAINS: str = Field(
        default="localhost,lvh.me",
        description="Development root domains (comma-separated); sub.localhost is a tenant"
    )

    ROOT_DOMAIN_LABELS: int = Field(
        default=2,
        ge=1,
        description="Labels in the production apex domain (example.com = 2)"
    )

    TENANT_EXEMPT_PATHS: str = Field(
        default="/api,/_next/static,/_next/image,/favicon.ico,/static,/docs,/redoc,/openapi.json",
        description="Paths never routed to a tenant (comma-separated, exact or segment prefix)"
    )

    DEFAULT_TENANT: str = Field(
        default="admin",
        min_length=1,
        description="Tenant used when redirecting a bare /login"
    )

    REDIRECT_LOGIN_TO_DEFAULT_TENANT: bool = Field(
        default=False,
        description="Redirect /login on hosts without a tenant to the default tenant login"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        # Load from .env file in project root
        env_file=".env",
        env_file_encoding="utf-8",
        # Don't fail if .env doesn't exist (useful for production where
        # env vars are set directly)
        env_ignore_empty=True,
        # Case-sensitive environment variable names
        case_sensitive=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------

    @field_validator("SUPABASE_URL", "SUPABASE_ANON_KEY", "SUPABASE_SERVICE_KEY", mode="before")
    @classmethod
    def strip_quotes(cls, value):
        """
        Trim whitespace and one pair of surrounding quotes.

        Hosting dashboards often store values pasted as "https://..." with
        the quotes included.
        """
        if isinstance(value, str):
            value = value.strip()
            if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
                value = value[1:-1]
        return value

    @field_validator("TENANT_PATH_PREFIX", "ADMIN_SUBDOMAIN", "DEFAULT_TENANT")
    @classmethod
    def lowercase_segment(cls, value: str) -> str:
        """Hostnames are matched lower-case, so the reserved names are too."""
        return value.strip().strip("/").lower()

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return _split_csv(self.CORS_ORIGINS)

    @property
    def local_root_domains_list(self) -> list[str]:
        """Example: "localhost, lvh.me" -> ["localhost", "lvh.me"]"""
        return [domain.lower().strip(".") for domain in _split_csv(self.LOCAL_ROOT_DOMAINS)]

    @property
    def tenant_exempt_paths_list(self) -> list[str]:
        """Exempt paths, each normalized to start with a slash."""
        return [
            path if path.startswith("/") else "/" + path
            for path in _split_csv(self.TENANT_EXEMPT_PATHS)
        ]

    @property
    def tenant_routing(self) -> TenantRoutingConfig:
        """
        Build the tenant router configuration from these settings.

        Example:
            TenantRouter(settings.tenant_routing)
        """
        from core.models.routing import TenantRoutingConfig

        return TenantRoutingConfig(
            path_prefix=self.TENANT_PATH_PREFIX,
            admin_subdomain=self.ADMIN_SUBDOMAIN,
            local_root_domains=tuple(self.local_root_domains_list),
            root_domain_labels=self.ROOT_DOMAIN_LABELS,
            exempt_paths=tuple(self.tenant_exempt_paths_list),
            default_tenant=self.DEFAULT_TENANT,
            redirect_login_to_default_tenant=self.REDIRECT_LOGIN_TO_DEFAULT_TENANT,
        )

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.

    Returns:
        Settings: The application settings instance
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()

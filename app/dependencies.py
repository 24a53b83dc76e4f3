# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from app.config import settings
from core.services.tenant_router import TenantRouter
from lib.supabase_client import SupabaseClient


def get_supabase_client() -> type[SupabaseClient]:
    """
    Get Supabase client wrapper.

    Returns the singleton client wrapper.
    """
    return SupabaseClient


@lru_cache
def get_tenant_router() -> TenantRouter:
    """
    Get the process-wide tenant router.

    Built once from settings; the router is immutable so sharing it is safe.
    """
    return TenantRouter(settings.tenant_routing)


# Type aliases for dependency injection
SupabaseDep = Annotated[type[SupabaseClient], Depends(get_supabase_client)]
TenantRouterDep = Annotated[TenantRouter, Depends(get_tenant_router)]

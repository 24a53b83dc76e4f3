# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for row-level operations
# - utils.py: Shared helpers (UUID normalization, path prefix matching)
#
# These modules are self-contained and can be tested in isolation.
#
# The Supabase wrapper is not re-exported here: it reads app settings on
# import, and the routing models import lib.utils without any environment.
#   from lib.supabase_client import SupabaseClient
# =============================================================================

from lib.utils import normalize_uuid, path_has_prefix

__all__ = [
    "normalize_uuid",
    "path_has_prefix",
]

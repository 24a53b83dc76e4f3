# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from typing import Any
from uuid import UUID


# =============================================================================
# UUID Utilities
# =============================================================================

def normalize_uuid(value: Any) -> Any:
    """
    Normalize a UUID to string format.

    UUID objects become strings; any other value is returned unchanged, so
    it is safe to apply to every PostgREST filter value.

    Example:
        cohort_id = normalize_uuid(uuid_obj)  # "550e8400-..."
        cohort_id = normalize_uuid("550e8400-...")  # "550e8400-..."
    """
    return str(value) if isinstance(value, UUID) else value


# =============================================================================
# Path Utilities
# =============================================================================

def path_has_prefix(path: str, prefix: str) -> bool:
    """
    Check whether a URL path equals `prefix` or lives underneath it.

    Matching is segment-aware: "/api" matches "/api" and "/api/users"
    but not "/apix". The root prefix "/" only matches "/" itself.

    Example:
        path_has_prefix("/cohorts/42", "/cohorts")  # True
        path_has_prefix("/cohortsx", "/cohorts")    # False
    """
    if not path or not prefix:
        return False

    base = prefix.rstrip("/")
    if not base:
        return path == "/"

    return path == base or path.startswith(base + "/")

# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .tenant_router import TENANT_PATH_RULES, TenantRouter
from .tenant_service import TenantService
from .notification_service import NotificationService
from .assessment_service import AssessmentService

__all__ = [
    "TENANT_PATH_RULES",
    "TenantRouter",
    "TenantService",
    "NotificationService",
    "AssessmentService",
]

# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - routing.py: Tenant router config, path rules and decisions
# - tenant.py: Client, plan and cohort records for the tenant namespace
# - assessment.py: Assessment catalogue records and request bodies
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Routing Models - Subdomain tenant routing
# -----------------------------------------------------------------------------
from .routing import (
    DEFAULT_EXEMPT_PATHS,
    MatchKind,
    PathRule,
    RouteAction,
    RouteDecision,
    TenantRoutingConfig,
)

# -----------------------------------------------------------------------------
# Tenant Models - Clients and their cohorts
# -----------------------------------------------------------------------------
from .tenant import (
    AssessmentTypeRef,
    ClientRecord,
    ClientStatus,
    CohortAssessmentRecord,
    CohortList,
    CohortRecord,
    CohortRef,
    NotificationKind,
    NotificationList,
    NotificationRecord,
    PersonRef,
    PlanRecord,
    TenantPortal,
)

# -----------------------------------------------------------------------------
# Assessment Models - Admin assessment catalogue
# -----------------------------------------------------------------------------
from .assessment import (
    AssessmentTemplateRecord,
    AssessmentTypeRecord,
    DataResponse,
    QuestionCreate,
    QuestionRecord,
    QuestionUpdate,
    TemplateCreate,
    TemplateRef,
    TemplateVersionRecord,
    VersionCreate,
    VersionStatus,
    VersionUpdate,
)

__all__ = [
    # Routing
    "DEFAULT_EXEMPT_PATHS",
    "MatchKind",
    "PathRule",
    "RouteAction",
    "RouteDecision",
    "TenantRoutingConfig",
    # Tenant
    "AssessmentTypeRef",
    "ClientRecord",
    "ClientStatus",
    "CohortAssessmentRecord",
    "CohortList",
    "CohortRecord",
    "CohortRef",
    "NotificationKind",
    "NotificationList",
    "NotificationRecord",
    "PersonRef",
    "PlanRecord",
    "TenantPortal",
    # Assessment
    "AssessmentTemplateRecord",
    "AssessmentTypeRecord",
    "DataResponse",
    "QuestionCreate",
    "QuestionRecord",
    "QuestionUpdate",
    "TemplateCreate",
    "TemplateRef",
    "TemplateVersionRecord",
    "VersionCreate",
    "VersionStatus",
    "VersionUpdate",
]

# =============================================================================
# core/models/tenant.py - Tenant Schemas
# =============================================================================
# Record types for the tables behind the tenant namespace:
# - ClientRecord: An organization (tenant), addressed by its subdomain
# - PlanRecord: A program plan a cohort follows
# - CohortRecord: A group of participants running a plan for a client
# - CohortAssessmentRecord: An assessment scheduled for a cohort
# - NotificationRecord: Review requests and answers for a tenant user
#
# Optional columns are modeled as nullable fields with a None default.
# Unknown columns returned by the database are ignored.
# =============================================================================

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ClientStatus(str, Enum):
    """Lifecycle of a client organization."""
    ACTIVE = "active"
    INACTIVE = "inactive"


class ClientRecord(BaseModel):
    """
    Row of the `clients` table.

    Example:
        {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "name": "Acme Corp",
            "subdomain": "acme",
            "status": "active"
        }
    """

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    subdomain: str | None = None
    status: ClientStatus | str | None = None
    logo_url: str | None = None
    primary_contact_email: str | None = None
    theme: dict[str, Any] | None = None
    created_at: datetime | None = None


class PlanRecord(BaseModel):
    """Row (or embedded subset) of the `plans` table."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    description: str | None = None


class AssessmentTypeRef(BaseModel):
    """Embedded `assessment_types` subset."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    description: str | None = None


class CohortRef(BaseModel):
    """Embedded `(id, name)` reference to a cohort."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str


class CohortAssessmentRecord(BaseModel):
    """
    Row of `cohort_assessments`: one assessment scheduled for a cohort.

    `assessment_type` comes from the embedded relation (or a manual merge);
    `cohort` is only filled on the single-assessment endpoint.
    """

    model_config = ConfigDict(extra="ignore")

    id: str
    cohort_id: str | None = None
    assessment_type_id: str | None = None
    name: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    status: str | None = None
    created_at: datetime | None = None
    assessment_type: AssessmentTypeRef | None = None
    cohort: CohortRef | None = None


class CohortRecord(BaseModel):
    """
    Row of the `cohorts` table, optionally enriched with its plan.

    The `plan` field is filled from the embedded `plan:plans(id, name)`
    relation, or merged in manually when the embed is unavailable.
    `assessments` is only filled on the single-cohort endpoint.
    """

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    client_id: str | None = None
    plan_id: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    status: str | None = None
    created_at: datetime | None = None
    plan: PlanRecord | None = None
    assessments: list[CohortAssessmentRecord] = Field(
        default_factory=list,
        description="Cohort assessments, 360 first, then pulse, then by type name",
    )


class TenantPortal(BaseModel):
    """
    Public description of a tenant portal.

    Returned by GET /tenant/{subdomain} and /tenant/{subdomain}/login.
    """
    subdomain: str
    client_id: str
    name: str
    display_name: str = Field(..., description="Capitalized subdomain for headings")
    logo_url: str | None = None
    theme: dict[str, Any] | None = None


class CohortList(BaseModel):
    """Cohorts of one tenant."""
    subdomain: str
    cohorts: list[CohortRecord] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)


# =============================================================================
# Notifications
# =============================================================================

class NotificationKind(str, Enum):
    """What a tenant user is being told about."""
    REVIEW_REQUEST = "review_request"
    NOMINATION_ACCEPTED = "nomination_accepted"
    NOMINATION_REJECTED = "nomination_rejected"


class PersonRef(BaseModel):
    """Subset of a `client_users` row."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    name: str | None = None
    surname: str | None = None
    email: str | None = None


class NotificationRecord(BaseModel):
    """
    One notification, derived from a `reviewer_nominations` row.

    `person` is the other party: who asked for the review on a
    review_request, who answered it on an accepted/rejected nomination.
    """
    id: str
    type: NotificationKind
    message: str
    nomination_id: str
    created_at: datetime | None = None
    person: PersonRef | None = None
    assessment_name: str | None = None


class NotificationList(BaseModel):
    """Notifications of one tenant user, newest first."""
    subdomain: str
    user_id: str
    notifications: list[NotificationRecord] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)

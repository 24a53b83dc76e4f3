# =============================================================================
# app/routers/tenants.py - Tenant Namespace Endpoints
# =============================================================================
# Serves the /tenant/{subdomain}/... routes that TenantRoutingMiddleware
# rewrites subdomain requests into:
#
#   acme.example.com/               -> GET /tenant/acme/login
#   acme.example.com/dashboard      -> GET /tenant/acme/dashboard
#   acme.example.com/cohorts/7      -> GET /tenant/acme/cohort/7
#   acme.example.com/assessments/9  -> GET /tenant/acme/assessments/9
#   acme.example.com/notifications  -> GET /tenant/acme/notifications
#
# The routes are also reachable directly by path, which is how deployments
# without wildcard DNS address a tenant.
# =============================================================================

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Path, Query

from app.exceptions import MissingParameterError
from core.models.tenant import (
    ClientRecord,
    CohortAssessmentRecord,
    CohortList,
    CohortRecord,
    NotificationList,
    NotificationRecord,
    TenantPortal,
)
from core.services.notification_service import NotificationService
from core.services.tenant_service import TenantService

router = APIRouter()

SubdomainPath = Annotated[
    str,
    Path(min_length=1, max_length=63, description="Tenant subdomain", examples=["acme"]),
]


def _portal(subdomain: str) -> TenantPortal:
    client = ClientRecord.model_validate(TenantService.get_client_by_subdomain(subdomain))
    subdomain = subdomain.lower()
    return TenantPortal(
        subdomain=subdomain,
        client_id=client.id,
        name=client.name,
        display_name=subdomain[:1].upper() + subdomain[1:],
        logo_url=client.logo_url,
        theme=client.theme,
    )


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/{subdomain}", response_model=TenantPortal)
def get_tenant(subdomain: SubdomainPath):
    """
    Get the tenant portal.

    Returns the client registered for this subdomain.
    """
    return _portal(subdomain)


@router.get("/{subdomain}/login", response_model=TenantPortal)
def get_tenant_login(subdomain: SubdomainPath):
    """
    Get what the tenant login page needs to render.

    Credentials are checked by the presentation layer against Supabase;
    this endpoint only confirms the tenant exists and returns its branding.
    """
    return _portal(subdomain)


@router.get("/{subdomain}/dashboard")
def get_tenant_dashboard(subdomain: SubdomainPath):
    """Tenant dashboard landing payload."""
    portal = _portal(subdomain)
    return {
        "subdomain": portal.subdomain,
        "name": portal.name,
        "message": f"Welcome to {portal.subdomain}",
    }


@router.get("/{subdomain}/cohort", response_model=CohortList)
def list_tenant_cohorts(
    subdomain: SubdomainPath,
    include_past: Annotated[bool, Query(description="Include cohorts that already ended")] = False,
    start_date_from: Annotated[date | None, Query(description="Earliest start date")] = None,
    start_date_to: Annotated[date | None, Query(description="Latest start date")] = None,
):
    """
    List the tenant's cohorts.

    Returns active cohorts (not yet ended) by default, most recent start
    first, each with its plan.
    """
    cohorts = TenantService.list_cohorts(
        subdomain,
        include_past=include_past,
        start_date_from=start_date_from,
        start_date_to=start_date_to,
    )

    return CohortList(
        subdomain=subdomain.lower(),
        cohorts=[CohortRecord.model_validate(c) for c in cohorts],
        total=len(cohorts),
    )


@router.get("/{subdomain}/cohort/{cohort_id}", response_model=CohortRecord)
def get_tenant_cohort(
    subdomain: SubdomainPath,
    cohort_id: Annotated[str, Path(min_length=1, description="Cohort id")],
):
    """
    Get one cohort of the tenant.

    Includes the cohort's scheduled assessments, 360 first, then pulse,
    then the rest by type name. Returns 404 if the cohort belongs to
    another tenant.
    """
    return CohortRecord.model_validate(TenantService.get_cohort(subdomain, cohort_id))


@router.get("/{subdomain}/assessments/{assessment_id}", response_model=CohortAssessmentRecord)
def get_tenant_assessment(
    subdomain: SubdomainPath,
    assessment_id: Annotated[str, Path(min_length=1, description="Cohort assessment id")],
):
    """
    Get one cohort assessment with its type and cohort.

    Returns 404 unless the assessment belongs to one of the tenant's cohorts.
    """
    return CohortAssessmentRecord.model_validate(
        TenantService.get_cohort_assessment(subdomain, assessment_id)
    )


@router.get("/{subdomain}/notifications", response_model=NotificationList)
def list_tenant_notifications(
    subdomain: SubdomainPath,
    user_id: Annotated[str | None, Query(description="Tenant user (client_users) id")] = None,
):
    """
    List a tenant user's notifications, newest first.

    Covers pending review requests addressed to the user and answers to
    the review requests the user sent. `user_id` is required.
    """
    if not user_id:
        raise MissingParameterError("user_id")

    notifications = NotificationService.list_notifications(subdomain, user_id)

    return NotificationList(
        subdomain=subdomain.lower(),
        user_id=user_id,
        notifications=[NotificationRecord.model_validate(n) for n in notifications],
        total=len(notifications),
    )

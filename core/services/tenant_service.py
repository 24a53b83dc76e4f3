# =============================================================================
# core/services/tenant_service.py - Tenant Business Logic
# =============================================================================
# Resolves a tenant subdomain to its client organization and reads the
# cohorts (and their scheduled assessments) that belong to it. Every read is
# scoped by client_id so a tenant can never see another tenant's rows.
#
# Embedded relations (plan, assessment type) are requested in one query.
# When PostgREST reports a missing relationship or a stale schema cache, the
# related rows are read separately and merged by foreign key.
# =============================================================================

import logging
from datetime import date
from typing import Any
from uuid import UUID

from lib.supabase_client import SupabaseClient, SupabaseClientError
from app.exceptions import (
    CohortAssessmentNotFoundError,
    CohortNotFoundError,
    DatabaseError,
    TenantNotFoundError,
)

logger = logging.getLogger(__name__)

COHORT_COLUMNS = "*, plan:plans(id, name)"
COHORT_ASSESSMENT_COLUMNS = "*, assessment_type:assessment_types(id, name, description)"

# Assessment types listed first on a cohort, in this order; others follow by name
LEADING_ASSESSMENT_TYPES = ("360", "pulse")


class TenantService:
    """
    Service for tenant-scoped reads.

    Provides a clean interface between the tenant routes and the database.
    """

    @staticmethod
    def get_client_by_subdomain(subdomain: str) -> dict[str, Any]:
        """
        Look up the client registered for a subdomain.

        Args:
            subdomain: Tenant subdomain (case-insensitive)

        Returns:
            Client row dict

        Raises:
            TenantNotFoundError: If no client has this subdomain
            DatabaseError: If the query fails
        """
        subdomain = subdomain.strip().lower()

        try:
            client = SupabaseClient.fetch_one(
                "clients",
                columns="id, name, subdomain, status, logo_url, theme",
                filters={"subdomain": subdomain},
            )
        except SupabaseClientError as e:
            logger.error(f"Failed to resolve tenant {subdomain}: {e}")
            raise DatabaseError("resolve tenant", e.message) from e

        if not client:
            raise TenantNotFoundError(subdomain)

        return client

    @staticmethod
    def list_cohorts(
        subdomain: str,
        include_past: bool = False,
        start_date_from: date | None = None,
        start_date_to: date | None = None,
        today: date | None = None,
    ) -> list[dict[str, Any]]:
        """
        List a tenant's cohorts, most recent start first.

        By default only cohorts that have not ended yet are returned
        (end_date >= today). Each cohort carries its plan as `plan`.

        Args:
            subdomain: Tenant subdomain
            include_past: Also return cohorts whose end_date has passed
            start_date_from: Inclusive lower bound on start_date
            start_date_to: Inclusive upper bound on start_date
            today: Reference date for the active filter (defaults to today)

        Returns:
            List of cohort dicts

        Raises:
            TenantNotFoundError: If the subdomain is unknown
            DatabaseError: If the query fails
        """
        client = TenantService.get_client_by_subdomain(subdomain)

        ranges: dict[str, tuple[Any, Any]] = {}
        if not include_past:
            ranges["end_date"] = ((today or date.today()).isoformat(), None)
        if start_date_from or start_date_to:
            ranges["start_date"] = (
                start_date_from.isoformat() if start_date_from else None,
                start_date_to.isoformat() if start_date_to else None,
            )

        try:
            return TenantService._fetch_cohorts({"client_id": client["id"]}, ranges=ranges)
        except SupabaseClientError as e:
            logger.error(f"Failed to list cohorts for {subdomain}: {e}")
            raise DatabaseError("list cohorts", e.message) from e

    @staticmethod
    def get_cohort(subdomain: str, cohort_id: str | UUID) -> dict[str, Any]:
        """
        Get one cohort of a tenant with its plan and scheduled assessments.

        Raises:
            TenantNotFoundError: If the subdomain is unknown
            CohortNotFoundError: If the cohort doesn't exist for this tenant
            DatabaseError: If the query fails
        """
        client = TenantService.get_client_by_subdomain(subdomain)

        try:
            cohorts = TenantService._fetch_cohorts(
                {"id": cohort_id, "client_id": client["id"]},
                limit=1,
            )
            cohort = cohorts[0] if cohorts else None
            if cohort:
                cohort["assessments"] = TenantService._fetch_cohort_assessments(
                    {"cohort_id": cohort["id"]}
                )
        except SupabaseClientError as e:
            logger.error(f"Failed to fetch cohort {cohort_id}: {e}")
            raise DatabaseError("fetch cohort", e.message) from e

        if not cohort:
            # Same answer whether the cohort is missing or belongs to another tenant
            raise CohortNotFoundError(str(cohort_id), subdomain)

        return cohort

    @staticmethod
    def get_cohort_assessment(subdomain: str, assessment_id: str | UUID) -> dict[str, Any]:
        """
        Get one cohort assessment with its assessment type and cohort.

        The assessment must belong to a cohort of this tenant.

        Raises:
            TenantNotFoundError: If the subdomain is unknown
            CohortAssessmentNotFoundError: If it doesn't exist for this tenant
            DatabaseError: If the query fails
        """
        client = TenantService.get_client_by_subdomain(subdomain)

        cohort = None
        try:
            rows = TenantService._fetch_cohort_assessments({"id": assessment_id})
            assessment = rows[0] if rows else None
            if assessment and assessment.get("cohort_id"):
                cohort = SupabaseClient.fetch_one(
                    "cohorts",
                    columns="id, name",
                    filters={"id": assessment["cohort_id"], "client_id": client["id"]},
                )
        except SupabaseClientError as e:
            logger.error(f"Failed to fetch assessment {assessment_id}: {e}")
            raise DatabaseError("fetch assessment", e.message) from e

        if not assessment or not cohort:
            raise CohortAssessmentNotFoundError(str(assessment_id), subdomain)

        return {**assessment, "cohort": cohort}

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _fetch_cohorts(
        filters: dict[str, Any],
        ranges: dict[str, tuple[Any, Any]] | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Read cohorts with their plan, newest start first."""
        query: dict[str, Any] = {
            "filters": filters,
            "ranges": ranges,
            "order_by": "start_date",
            "descending": True,
        }
        if limit:
            query["limit"] = limit

        try:
            return SupabaseClient.fetch_rows("cohorts", columns=COHORT_COLUMNS, **query)
        except SupabaseClientError as e:
            if not TenantService._is_relationship_error(e):
                raise
            logger.warning(f"Plan relationship unavailable, merging plans manually: {e}")

        cohorts = SupabaseClient.fetch_rows("cohorts", **query)
        return TenantService._attach(cohorts, "plan", "plan_id", "plans", "id, name")

    @staticmethod
    def _fetch_cohort_assessments(filters: dict[str, Any]) -> list[dict[str, Any]]:
        """Read cohort assessments with their assessment type, in display order."""
        try:
            rows = SupabaseClient.fetch_rows(
                "cohort_assessments",
                columns=COHORT_ASSESSMENT_COLUMNS,
                filters=filters,
            )
        except SupabaseClientError as e:
            if not TenantService._is_relationship_error(e):
                raise
            logger.warning(f"Assessment type relationship unavailable, merging manually: {e}")
            rows = TenantService._attach(
                SupabaseClient.fetch_rows("cohort_assessments", filters=filters),
                "assessment_type",
                "assessment_type_id",
                "assessment_types",
                "id, name, description",
            )

        return sorted(rows, key=TenantService._assessment_sort_key)

    @staticmethod
    def _assessment_sort_key(row: dict[str, Any]) -> tuple[int, str]:
        name = ((row.get("assessment_type") or {}).get("name") or "").lower()
        if name in LEADING_ASSESSMENT_TYPES:
            return LEADING_ASSESSMENT_TYPES.index(name), ""
        return len(LEADING_ASSESSMENT_TYPES), name

    @staticmethod
    def _is_relationship_error(error: SupabaseClientError) -> bool:
        text = str(error).lower()
        return "relationship" in text or "cache" in text

    @staticmethod
    def _attach(
        rows: list[dict[str, Any]],
        field: str,
        foreign_key: str,
        table: str,
        columns: str,
    ) -> list[dict[str, Any]]:
        """
        Merge related rows into `field` of each row, matched by `foreign_key`.

        Example:
            _attach(cohorts, "plan", "plan_id", "plans", "id, name")
        """
        ids = sorted({row[foreign_key] for row in rows if row.get(foreign_key)})
        related: dict[Any, dict[str, Any]] = {}
        if ids:
            related = {
                item["id"]: item
                for item in SupabaseClient.fetch_rows(table, columns=columns, in_filters={"id": ids})
            }

        return [{**row, field: related.get(row.get(foreign_key))} for row in rows]

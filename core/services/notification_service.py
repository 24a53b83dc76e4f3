# =============================================================================
# core/services/notification_service.py - Tenant User Notifications
# =============================================================================
# Builds the notification feed of a tenant user from `reviewer_nominations`:
# - review_request: someone nominated this user as a reviewer (pending)
# - nomination_accepted / nomination_rejected: a reviewer this user
#   nominated answered the request
#
# Related names (people, assessment) are read in batches by id rather than
# through embedded relations, so the feed doesn't depend on foreign key
# names in the schema cache.
# =============================================================================

import logging
from typing import Any

from lib.supabase_client import SupabaseClient, SupabaseClientError
from app.exceptions import ClientUserNotFoundError, DatabaseError
from core.models.tenant import NotificationKind
from core.services.tenant_service import TenantService

logger = logging.getLogger(__name__)

PERSON_COLUMNS = "id, name, surname, email"
ANSWERED_STATUSES = ("accepted", "rejected")


class NotificationService:
    """Service for the tenant notification feed."""

    @staticmethod
    def list_notifications(subdomain: str, user_id: str) -> list[dict[str, Any]]:
        """
        List a tenant user's notifications, newest first.

        Args:
            subdomain: Tenant subdomain
            user_id: `client_users` id; must belong to the tenant's client

        Returns:
            List of notification dicts

        Raises:
            TenantNotFoundError: If the subdomain is unknown
            ClientUserNotFoundError: If the user is not a member of the tenant
            DatabaseError: If a query fails
        """
        client = TenantService.get_client_by_subdomain(subdomain)

        try:
            user = SupabaseClient.fetch_one(
                "client_users",
                columns=PERSON_COLUMNS,
                filters={"id": user_id, "client_id": client["id"]},
            )
        except SupabaseClientError as e:
            logger.error(f"Failed to resolve user {user_id}: {e}")
            raise DatabaseError("resolve user", e.message) from e

        if not user:
            raise ClientUserNotFoundError(user_id, subdomain)

        try:
            requests = SupabaseClient.fetch_rows(
                "reviewer_nominations",
                columns="id, created_at, nominated_by_id, participant_assessment_id",
                filters={"reviewer_id": user_id, "is_external": False, "request_status": "pending"},
                order_by="created_at",
                descending=True,
            )
            answers = SupabaseClient.fetch_rows(
                "reviewer_nominations",
                columns="id, created_at, request_status, reviewer_id, participant_assessment_id",
                filters={"nominated_by_id": user_id},
                in_filters={"request_status": list(ANSWERED_STATUSES)},
                order_by="created_at",
                descending=True,
            )

            people = NotificationService._people_by_id(
                [r.get("nominated_by_id") for r in requests] + [a.get("reviewer_id") for a in answers]
            )
            assessment_names = NotificationService._assessment_names(
                [n.get("participant_assessment_id") for n in requests + answers]
            )
        except SupabaseClientError as e:
            logger.error(f"Failed to list notifications for {user_id}: {e}")
            raise DatabaseError("list notifications", e.message) from e

        notifications = [
            NotificationService._review_request(
                row,
                people.get(row.get("nominated_by_id")),
                assessment_names.get(row.get("participant_assessment_id")),
            )
            for row in requests
        ] + [
            NotificationService._answer(
                row,
                people.get(row.get("reviewer_id")),
                assessment_names.get(row.get("participant_assessment_id")),
            )
            for row in answers
        ]

        notifications.sort(key=lambda n: n["created_at"] or "", reverse=True)
        logger.debug(f"Built {len(notifications)} notifications for {user_id}")
        return notifications

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _review_request(row, person, assessment_name) -> dict[str, Any]:
        return {
            "id": f"review_request_{row['id']}",
            "type": NotificationKind.REVIEW_REQUEST.value,
            "message": f"{display_name(person)} has requested a review nomination from you",
            "nomination_id": row["id"],
            "created_at": row.get("created_at"),
            "person": person,
            "assessment_name": assessment_name,
        }

    @staticmethod
    def _answer(row, person, assessment_name) -> dict[str, Any]:
        accepted = row.get("request_status") == "accepted"
        kind = NotificationKind.NOMINATION_ACCEPTED if accepted else NotificationKind.NOMINATION_REJECTED
        verb = "accepted" if accepted else "rejected"
        return {
            "id": f"status_change_{row['id']}",
            "type": kind.value,
            "message": (
                f"{display_name(person)} {verb} your review request "
                f"for {assessment_name or 'Assessment'}"
            ),
            "nomination_id": row["id"],
            "created_at": row.get("created_at"),
            "person": person,
            "assessment_name": assessment_name,
        }

    @staticmethod
    def _people_by_id(ids: list[Any]) -> dict[Any, dict[str, Any]]:
        wanted = sorted({i for i in ids if i})
        if not wanted:
            return {}
        rows = SupabaseClient.fetch_rows(
            "client_users", columns=PERSON_COLUMNS, in_filters={"id": wanted}
        )
        return {row["id"]: row for row in rows}

    @staticmethod
    def _assessment_names(participant_assessment_ids: list[Any]) -> dict[Any, str]:
        """Map participant_assessment id -> cohort assessment name."""
        wanted = sorted({i for i in participant_assessment_ids if i})
        if not wanted:
            return {}

        links = SupabaseClient.fetch_rows(
            "participant_assessments",
            columns="id, cohort_assessment_id",
            in_filters={"id": wanted},
        )
        cohort_assessment_ids = sorted(
            {link["cohort_assessment_id"] for link in links if link.get("cohort_assessment_id")}
        )
        if not cohort_assessment_ids:
            return {}

        names = {
            row["id"]: row.get("name")
            for row in SupabaseClient.fetch_rows(
                "cohort_assessments",
                columns="id, name",
                in_filters={"id": cohort_assessment_ids},
            )
        }
        return {
            link["id"]: names[link["cohort_assessment_id"]]
            for link in links
            if names.get(link.get("cohort_assessment_id"))
        }


def display_name(person: dict[str, Any] | None) -> str:
    """
    Full name of a user, falling back to email, then "Someone".

    Example:
        display_name({"name": "Ada", "surname": None, "email": "a@x.io"})  # "Ada"
    """
    if not person:
        return "Someone"
    full = f"{person.get('name') or ''} {person.get('surname') or ''}".strip()
    return full or person.get("email") or "Someone"

# =============================================================================
# core/services/assessment_service.py - Assessment Configuration Logic
# =============================================================================
# CRUD for the admin assessment catalogue:
#   assessment_types -> assessment_templates -> assessment_template_versions
#                                                 -> assessment_questions
#
# Templates and versions are returned with their parent embedded as
# `assessment_type` / `template` so the admin UI can render names without
# a second request.
# =============================================================================

import logging
from typing import Any

from lib.supabase_client import SupabaseClient, SupabaseClientError
from core.models.assessment import (
    QuestionCreate,
    QuestionUpdate,
    TemplateCreate,
    VersionCreate,
    VersionUpdate,
)
from app.exceptions import DatabaseError, EmptyUpdateError, RecordNotFoundError

logger = logging.getLogger(__name__)

TEMPLATE_COLUMNS = "*, assessment_type:assessment_types(id, name)"
VERSION_COLUMNS = "*, template:assessment_templates(id, name)"


class AssessmentService:
    """
    Service for assessment configuration.

    Translates database failures into DatabaseError so routes only deal
    with API exceptions.
    """

    # -------------------------------------------------------------------------
    # Types
    # -------------------------------------------------------------------------

    @staticmethod
    def list_assessment_types() -> list[dict[str, Any]]:
        """List all assessment types ordered by name."""
        try:
            return SupabaseClient.fetch_rows("assessment_types", order_by="name")
        except SupabaseClientError as e:
            logger.error(f"Failed to list assessment types: {e}")
            raise DatabaseError("list assessment types", e.message) from e

    # -------------------------------------------------------------------------
    # Templates
    # -------------------------------------------------------------------------

    @staticmethod
    def list_templates() -> list[dict[str, Any]]:
        """List templates, newest first, with their assessment type."""
        try:
            return SupabaseClient.fetch_rows(
                "assessment_templates",
                columns=TEMPLATE_COLUMNS,
                order_by="created_at",
                descending=True,
            )
        except SupabaseClientError as e:
            logger.error(f"Failed to list templates: {e}")
            raise DatabaseError("list templates", e.message) from e

    @staticmethod
    def create_template(request: TemplateCreate) -> dict[str, Any]:
        """Create a template and return it with its assessment type."""
        data = {
            "name": request.name,
            "assessment_type_id": request.assessment_type_id,
            "description": request.description or None,
        }

        try:
            return SupabaseClient.insert_row("assessment_templates", data, columns=TEMPLATE_COLUMNS)
        except SupabaseClientError as e:
            logger.error(f"Failed to create template: {e}")
            raise DatabaseError("create template", e.message) from e

    # -------------------------------------------------------------------------
    # Versions
    # -------------------------------------------------------------------------

    @staticmethod
    def list_versions(
        template_id: str | None = None,
        status: str | None = None,
    ) -> list[dict[str, Any]]:
        """
        List template versions, newest first.

        Args:
            template_id: Only versions of this template. "all" means no filter.
            status: Only versions in this status
        """
        filters: dict[str, Any] = {}
        if template_id and template_id != "all":
            filters["template_id"] = template_id
        if status:
            filters["status"] = status

        try:
            return SupabaseClient.fetch_rows(
                "assessment_template_versions",
                columns=VERSION_COLUMNS,
                filters=filters,
                order_by="created_at",
                descending=True,
            )
        except SupabaseClientError as e:
            logger.error(f"Failed to list versions: {e}")
            raise DatabaseError("list versions", e.message) from e

    @staticmethod
    def create_version(request: VersionCreate) -> dict[str, Any]:
        """Create a template version (draft unless told otherwise)."""
        data = {
            "template_id": request.template_id,
            "version_name": request.version_name,
            "status": request.status.value,
        }

        try:
            return SupabaseClient.insert_row(
                "assessment_template_versions", data, columns=VERSION_COLUMNS
            )
        except SupabaseClientError as e:
            logger.error(f"Failed to create version: {e}")
            raise DatabaseError("create version", e.message) from e

    @staticmethod
    def update_version(version_id: str, request: VersionUpdate) -> dict[str, Any]:
        """
        Apply a partial update to a version.

        Raises:
            EmptyUpdateError: If the request sets no fields
            RecordNotFoundError: If the version doesn't exist
        """
        data = request.model_dump(exclude_unset=True, mode="json")
        if not data:
            raise EmptyUpdateError("assessment_template_versions")

        try:
            version = SupabaseClient.update_row(
                "assessment_template_versions", version_id, data, columns=VERSION_COLUMNS
            )
        except SupabaseClientError as e:
            logger.error(f"Failed to update version {version_id}: {e}")
            raise DatabaseError("update version", e.message) from e

        if version is None:
            raise RecordNotFoundError("assessment_template_versions", version_id)
        return version

    # -------------------------------------------------------------------------
    # Questions
    # -------------------------------------------------------------------------

    @staticmethod
    def list_questions(template_version_id: str) -> list[dict[str, Any]]:
        """List the questions of a version in display order."""
        try:
            return SupabaseClient.fetch_rows(
                "assessment_questions",
                filters={"template_version_id": template_version_id},
                order_by="question_order",
            )
        except SupabaseClientError as e:
            logger.error(f"Failed to list questions: {e}")
            raise DatabaseError("list questions", e.message) from e

    @staticmethod
    def create_question(request: QuestionCreate) -> dict[str, Any]:
        data = {
            "template_version_id": request.template_version_id,
            "question_text": request.question_text,
            "category": request.category or None,
            "question_order": request.question_order,
        }

        try:
            return SupabaseClient.insert_row("assessment_questions", data)
        except SupabaseClientError as e:
            logger.error(f"Failed to create question: {e}")
            raise DatabaseError("create question", e.message) from e

    @staticmethod
    def update_question(question_id: str, request: QuestionUpdate) -> dict[str, Any]:
        """
        Apply a partial update to a question.

        Raises:
            EmptyUpdateError: If the request sets no fields
            RecordNotFoundError: If the question doesn't exist
        """
        data = request.model_dump(exclude_unset=True)
        if not data:
            raise EmptyUpdateError("assessment_questions")
        if "category" in data:
            # Blank category is stored as NULL
            data["category"] = data["category"] or None

        try:
            question = SupabaseClient.update_row("assessment_questions", question_id, data)
        except SupabaseClientError as e:
            logger.error(f"Failed to update question {question_id}: {e}")
            raise DatabaseError("update question", e.message) from e

        if question is None:
            raise RecordNotFoundError("assessment_questions", question_id)
        return question

    @staticmethod
    def delete_question(question_id: str) -> None:
        """
        Delete a question.

        Deleting an id that doesn't exist is not an error.
        """
        try:
            SupabaseClient.delete_rows("assessment_questions", {"id": question_id})
        except SupabaseClientError as e:
            logger.error(f"Failed to delete question {question_id}: {e}")
            raise DatabaseError("delete question", e.message) from e

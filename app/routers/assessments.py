# =============================================================================
# app/routers/assessments.py - Admin Assessment Catalogue Endpoints
# =============================================================================
# CRUD for assessment types, templates, template versions and questions.
# Mounted under /api/admin/assessments. Successful responses use the
# {"data": ...} envelope the admin UI expects.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Query

from app.exceptions import MissingParameterError
from core.models.assessment import (
    AssessmentTemplateRecord,
    AssessmentTypeRecord,
    DataResponse,
    QuestionCreate,
    QuestionRecord,
    QuestionUpdate,
    TemplateCreate,
    TemplateVersionRecord,
    VersionCreate,
    VersionStatus,
    VersionUpdate,
)
from core.services.assessment_service import AssessmentService

router = APIRouter()

RecordId = Annotated[str, Path(min_length=1, description="Record id")]


# =============================================================================
# Assessment Types
# =============================================================================

@router.get("/assessment-types", response_model=DataResponse[list[AssessmentTypeRecord]])
def list_assessment_types():
    """List all assessment types, alphabetically."""
    return {"data": AssessmentService.list_assessment_types()}


# =============================================================================
# Templates
# =============================================================================

@router.get("/templates", response_model=DataResponse[list[AssessmentTemplateRecord]])
def list_templates():
    """List templates, newest first, each with its assessment type."""
    return {"data": AssessmentService.list_templates()}


@router.post("/templates", response_model=DataResponse[AssessmentTemplateRecord])
def create_template(request: TemplateCreate):
    """Create a template."""
    return {"data": AssessmentService.create_template(request)}


# =============================================================================
# Versions
# =============================================================================

@router.get("/versions", response_model=DataResponse[list[TemplateVersionRecord]])
def list_versions(
    template_id: Annotated[str | None, Query(description="Template id, or 'all'")] = None,
    status: Annotated[VersionStatus | None, Query(description="Filter by status")] = None,
):
    """
    List template versions, newest first.

    Filter by `template_id` (pass `all` or omit for every template) and
    by `status`. `status` must be one of draft, published or archived;
    any other value is rejected with 422 instead of matching nothing.
    """
    return {
        "data": AssessmentService.list_versions(
            template_id=template_id,
            status=status.value if status else None,
        )
    }


@router.post("/versions", response_model=DataResponse[TemplateVersionRecord])
def create_version(request: VersionCreate):
    """Create a template version. Status defaults to draft."""
    return {"data": AssessmentService.create_version(request)}


@router.put("/versions/{version_id}", response_model=DataResponse[TemplateVersionRecord])
def update_version(version_id: RecordId, request: VersionUpdate):
    """Update the fields present in the body."""
    return {"data": AssessmentService.update_version(version_id, request)}


# =============================================================================
# Questions
# =============================================================================

@router.get("/questions", response_model=DataResponse[list[QuestionRecord]])
def list_questions(
    template_version_id: Annotated[str | None, Query(description="Template version id")] = None,
):
    """
    List the questions of a template version in display order.

    `template_version_id` is required.
    """
    if not template_version_id:
        raise MissingParameterError("template_version_id")
    return {"data": AssessmentService.list_questions(template_version_id)}


@router.post("/questions", response_model=DataResponse[QuestionRecord])
def create_question(request: QuestionCreate):
    """Add a question to a template version."""
    return {"data": AssessmentService.create_question(request)}


@router.put("/questions/{question_id}", response_model=DataResponse[QuestionRecord])
def update_question(question_id: RecordId, request: QuestionUpdate):
    """Update the fields present in the body. Omitted fields keep their value."""
    return {"data": AssessmentService.update_question(question_id, request)}


@router.delete("/questions/{question_id}")
def delete_question(question_id: RecordId):
    """Delete a question."""
    AssessmentService.delete_question(question_id)
    return {"success": True}

# =============================================================================
# core/models/assessment.py - Assessment Configuration Schemas
# =============================================================================
# These models define the API contract for the admin assessment endpoints:
# - Assessment types (e.g. 360 review, pulse survey)
# - Templates per type, versions per template, questions per version
#
# Create/Update models validate request bodies. Record models describe rows
# returned from the database, including embedded relations.
# =============================================================================

from datetime import datetime
from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class VersionStatus(str, Enum):
    """
    States of a template version.

    Flow: draft -> published -> archived
    """
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


# =============================================================================
# Records
# =============================================================================

class AssessmentTypeRecord(BaseModel):
    """Row of `assessment_types`."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    description: str | None = None


class TemplateRef(BaseModel):
    """Embedded `(id, name)` reference to a template or type."""
    id: str
    name: str


class AssessmentTemplateRecord(BaseModel):
    """Row of `assessment_templates` with its embedded assessment type."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    assessment_type_id: str | None = None
    description: str | None = None
    created_at: datetime | None = None
    assessment_type: TemplateRef | None = None


class TemplateVersionRecord(BaseModel):
    """Row of `assessment_template_versions` with its embedded template."""

    model_config = ConfigDict(extra="ignore")

    id: str
    template_id: str | None = None
    version_name: str | None = None
    status: str | None = None
    created_at: datetime | None = None
    template: TemplateRef | None = None


class QuestionRecord(BaseModel):
    """Row of `assessment_questions`."""

    model_config = ConfigDict(extra="ignore")

    id: str
    template_version_id: str | None = None
    question_text: str
    category: str | None = None
    question_order: int | None = None


# =============================================================================
# Responses
# =============================================================================

class DataResponse(BaseModel, Generic[T]):
    """`{"data": ...}` envelope used by every admin assessment endpoint."""
    data: T


# =============================================================================
# Request bodies
# =============================================================================

class TemplateCreate(BaseModel):
    """
    Body of POST /api/admin/assessments/templates.

    Example:
        {"name": "Leadership 360", "assessment_type_id": "...", "description": null}
    """
    name: str = Field(..., min_length=1, max_length=255)
    assessment_type_id: str = Field(..., min_length=1)
    description: str | None = None


class VersionCreate(BaseModel):
    """Body of POST /api/admin/assessments/versions."""
    template_id: str = Field(..., min_length=1)
    version_name: str = Field(..., min_length=1, max_length=255)
    status: VersionStatus = VersionStatus.DRAFT


class VersionUpdate(BaseModel):
    """
    Body of PUT /api/admin/assessments/versions/{id}.

    Only fields present in the request are written.
    """
    version_name: str | None = Field(default=None, min_length=1, max_length=255)
    status: VersionStatus | None = None
    template_id: str | None = None


class QuestionCreate(BaseModel):
    """Body of POST /api/admin/assessments/questions."""
    template_version_id: str = Field(..., min_length=1)
    question_text: str = Field(..., min_length=1)
    category: str | None = None
    question_order: int = Field(default=0, ge=0)


class QuestionUpdate(BaseModel):
    """
    Body of PUT /api/admin/assessments/questions/{id}.

    Only fields present in the request are written; an omitted
    question_order keeps the stored order.
    """
    question_text: str | None = Field(default=None, min_length=1)
    category: str | None = None
    question_order: int | None = Field(default=None, ge=0)

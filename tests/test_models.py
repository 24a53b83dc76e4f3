# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the Pydantic models to ensure:
# - Path rules match and rewrite as documented
# - Decisions serialize for the diagnostics endpoint
# - Records accept database rows (extra columns, nulls, embeds)
# - Request bodies reject invalid input
#
# Run with: pytest tests/test_models.py -v
# =============================================================================

from datetime import date

import pytest
from pydantic import ValidationError

from core.models import (
    CohortAssessmentRecord,
    CohortRecord,
    MatchKind,
    NotificationKind,
    NotificationRecord,
    PathRule,
    QuestionCreate,
    QuestionUpdate,
    RouteAction,
    RouteDecision,
    TemplateVersionRecord,
    TenantRoutingConfig,
    VersionCreate,
    VersionStatus,
    VersionUpdate,
)


# =============================================================================
# Routing Model Tests
# =============================================================================

class TestPathRule:
    """Tests for PathRule."""

    def test_exact_rule_with_target(self):
        rule = PathRule(patterns=("/", "/login"), match=MatchKind.EXACT, target="/login")

        assert rule.matches("/")
        assert rule.matches("/login")
        assert not rule.matches("/login/extra")
        assert rule.apply("/") == "/login"

    def test_prefix_rule_with_replace(self):
        rule = PathRule(patterns=("/cohorts",), match=MatchKind.PREFIX, replace=("/cohorts", "/cohort"))

        assert rule.matches("/cohorts")
        assert rule.matches("/cohorts/1")
        assert not rule.matches("/cohortsx")
        assert rule.apply("/cohorts/1") == "/cohort/1"

    def test_passthrough_rule_keeps_path(self):
        rule = PathRule(patterns=("/cohort",), match=MatchKind.PREFIX)

        assert rule.apply("/cohort/9") == "/cohort/9"


class TestRouteDecision:
    """Tests for RouteDecision."""

    def test_rewrite_factory(self):
        decision = RouteDecision.rewrite("/tenant/acme/login", subdomain="acme")

        assert decision.action == RouteAction.REWRITE
        assert not decision.is_pass_through
        assert decision.model_dump(mode="json") == {
            "action": "rewrite",
            "destination": "/tenant/acme/login",
            "subdomain": "acme",
            "reason": "tenant_subdomain",
        }

    def test_pass_through_has_no_destination(self):
        decision = RouteDecision.pass_through("no_subdomain")

        assert decision.is_pass_through
        assert decision.destination is None

    def test_decisions_are_frozen(self):
        decision = RouteDecision.pass_through("no_subdomain")

        with pytest.raises(ValidationError):
            decision.destination = "/elsewhere"


class TestTenantRoutingConfig:
    """Tests for TenantRoutingConfig."""

    def test_namespace_root_normalizes_slashes(self):
        assert TenantRoutingConfig(path_prefix="/tenant/").namespace_root == "/tenant"

    def test_rejects_empty_prefix(self):
        with pytest.raises(ValidationError):
            TenantRoutingConfig(path_prefix="")


# =============================================================================
# Record Model Tests
# =============================================================================

class TestCohortRecord:
    """Tests for CohortRecord."""

    def test_from_row_with_embedded_plan(self, sample_cohort_rows):
        cohort = CohortRecord.model_validate(sample_cohort_rows[0])

        assert cohort.start_date == date(2025, 3, 1)
        assert cohort.plan is not None
        assert cohort.plan.name == "Leadership Essentials"

    def test_nullable_columns(self):
        cohort = CohortRecord.model_validate({
            "id": "c-1",
            "name": "Unscheduled",
            "start_date": None,
            "end_date": None,
            "plan": None,
            "created_by": "someone",
        })

        assert cohort.start_date is None
        assert cohort.plan is None

    def test_cohort_assessments_default_empty(self, sample_cohort_rows):
        assert CohortRecord.model_validate(sample_cohort_rows[0]).assessments == []


class TestCohortAssessmentRecord:
    """Tests for CohortAssessmentRecord."""

    def test_from_row_with_embedded_type(self, sample_cohort_assessment_rows):
        record = CohortAssessmentRecord.model_validate(sample_cohort_assessment_rows[1])

        assert record.assessment_type.name == "360"
        assert record.start_date == date(2025, 4, 1)
        assert record.cohort is None


class TestNotificationRecord:
    """Tests for NotificationRecord."""

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            NotificationRecord(id="n-1", type="reminder", message="hi", nomination_id="nom-1")

    def test_person_is_optional(self):
        record = NotificationRecord(
            id="review_request_nom-1",
            type="review_request",
            message="Someone has requested a review nomination from you",
            nomination_id="nom-1",
        )

        assert record.type == NotificationKind.REVIEW_REQUEST
        assert record.person is None

class TestAssessmentModels:
    """Tests for assessment records and request bodies."""

    def test_version_record_with_template(self):
        version = TemplateVersionRecord.model_validate({
            "id": "v-1",
            "template_id": "t-1",
            "version_name": "2025.1",
            "status": "draft",
            "template": {"id": "t-1", "name": "Leadership 360"},
        })

        assert version.template.name == "Leadership 360"

    def test_version_create_defaults_to_draft(self):
        request = VersionCreate(template_id="t-1", version_name="2025.1")

        assert request.status == VersionStatus.DRAFT

    def test_version_update_only_dumps_set_fields(self):
        request = VersionUpdate(status="published")

        assert request.model_dump(exclude_unset=True, mode="json") == {"status": "published"}

    def test_question_requires_text(self):
        with pytest.raises(ValidationError):
            QuestionCreate(template_version_id="v-1", question_text="")

    def test_question_order_cannot_be_negative(self):
        with pytest.raises(ValidationError):
            QuestionCreate(template_version_id="v-1", question_text="Q?", question_order=-1)

    def test_question_update_fields_are_optional(self):
        request = QuestionUpdate(question_text="Reworded?")

        assert request.question_order is None
        assert request.model_dump(exclude_unset=True) == {"question_text": "Reworded?"}

    def test_question_update_rejects_blank_text(self):
        with pytest.raises(ValidationError):
            QuestionUpdate(question_text="")

# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides a chainable fake for the Supabase query builder
# - Provides sample rows for the tenant and assessment tables
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from unittest.mock import MagicMock

import pytest


QUERY_METHODS = ("select", "eq", "gte", "lte", "in_", "order", "limit", "insert", "update", "delete")


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def make_supabase_client():
    """
    Build a fake Supabase client whose query builder chains.

    Every builder method returns the same query mock, and execute()
    returns a response carrying `data`.

    Usage:
        client, query = make_supabase_client([{"id": "1"}])
        query.eq.assert_called_with("id", "1")
    """

    def _make(data=None, error: Exception | None = None):
        query = MagicMock(name="query")
        for method in QUERY_METHODS:
            getattr(query, method).return_value = query

        if error is not None:
            query.execute.side_effect = error
        else:
            query.execute.return_value = MagicMock(data=data)

        client = MagicMock(name="supabase")
        client.table.return_value = query
        return client, query

    return _make


@pytest.fixture
def sample_client_row():
    """Sample `clients` row for the acme tenant."""
    return {
        "id": "client-acme",
        "name": "Acme Corp",
        "subdomain": "acme",
        "status": "active",
        "logo_url": "https://cdn.example.com/acme.png",
        "theme": {"primary": "#123456"},
    }


@pytest.fixture
def sample_cohort_rows():
    """Sample `cohorts` rows with embedded plans."""
    return [
        {
            "id": "cohort-2",
            "name": "Spring 2025",
            "client_id": "client-acme",
            "plan_id": "plan-1",
            "start_date": "2025-03-01",
            "end_date": "2025-09-01",
            "status": "active",
            "created_at": "2025-01-10T09:00:00Z",
            "plan": {"id": "plan-1", "name": "Leadership Essentials"},
        },
        {
            "id": "cohort-1",
            "name": "Autumn 2024",
            "client_id": "client-acme",
            "plan_id": "plan-2",
            "start_date": "2024-10-01",
            "end_date": "2025-04-01",
            "status": "active",
            "created_at": "2024-08-01T09:00:00Z",
            "plan": {"id": "plan-2", "name": "Manager Foundations"},
        },
    ]


@pytest.fixture
def sample_cohort_assessment_rows():
    """Sample `cohort_assessments` rows of cohort-2, in database order."""

    def row(assessment_id, type_id, type_name, name):
        return {
            "id": assessment_id,
            "cohort_id": "cohort-2",
            "assessment_type_id": type_id,
            "name": name,
            "start_date": "2025-04-01",
            "end_date": "2025-04-30",
            "status": "active",
            "assessment_type": {"id": type_id, "name": type_name, "description": None},
        }

    return [
        row("ca-culture", "type-culture", "Culture", "Culture Check"),
        row("ca-360", "type-360", "360", "Leadership 360"),
        row("ca-pulse", "type-pulse", "Pulse", "Spring Pulse"),
        row("ca-agility", "type-agility", "Agility", "Agility Scan"),
    ]


@pytest.fixture
def sample_question_row():
    """Sample `assessment_questions` row."""
    return {
        "id": "q-1",
        "template_version_id": "v-1",
        "question_text": "How clearly does this person communicate goals?",
        "category": "Communication",
        "question_order": 1,
    }

# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Errors should tell HOW to fix, not just WHAT failed.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


class CohortAdminException(Exception):
    """
    Base exception for the Cohort Admin API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "COHORT_ADMIN_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Tenant Exceptions
# =============================================================================

class TenantNotFoundError(CohortAdminException):
    """Raised when no client is registered for a subdomain."""

    def __init__(self, subdomain: str):
        super().__init__(
            message=f"Tenant not found: {subdomain}",
            code="TENANT_NOT_FOUND",
            status_code=404,
            suggestion="Check the subdomain in the URL or register the client with this subdomain",
            details={"subdomain": subdomain}
        )


class CohortNotFoundError(CohortAdminException):
    """Raised when a cohort doesn't exist or belongs to another tenant."""

    def __init__(self, cohort_id: str, subdomain: str):
        super().__init__(
            message=f"Cohort not found: {cohort_id}",
            code="COHORT_NOT_FOUND",
            status_code=404,
            suggestion="Check that the cohort_id is correct for this tenant",
            details={"cohort_id": cohort_id, "subdomain": subdomain}
        )


class CohortAssessmentNotFoundError(CohortAdminException):
    """Raised when a cohort assessment doesn't exist or belongs to another tenant."""

    def __init__(self, assessment_id: str, subdomain: str):
        super().__init__(
            message=f"Assessment not found: {assessment_id}",
            code="ASSESSMENT_NOT_FOUND",
            status_code=404,
            suggestion="Check that the assessment belongs to one of this tenant's cohorts",
            details={"assessment_id": assessment_id, "subdomain": subdomain}
        )


class ClientUserNotFoundError(CohortAdminException):
    """Raised when a user id is not a member of the tenant."""

    def __init__(self, user_id: str, subdomain: str):
        super().__init__(
            message=f"User not found: {user_id}",
            code="USER_NOT_FOUND",
            status_code=404,
            suggestion="Check that the user_id belongs to this tenant",
            details={"user_id": user_id, "subdomain": subdomain}
        )


# =============================================================================
# Record Exceptions
# =============================================================================

class RecordNotFoundError(CohortAdminException):
    """Raised when an admin record ID doesn't exist."""

    def __init__(self, table: str, record_id: str):
        super().__init__(
            message=f"Record not found in {table}: {record_id}",
            code="RECORD_NOT_FOUND",
            status_code=404,
            suggestion="Check that the id is correct",
            details={"table": table, "id": record_id}
        )


class MissingParameterError(CohortAdminException):
    """Raised when a required query parameter is absent."""

    def __init__(self, parameter: str):
        super().__init__(
            message=f"{parameter} is required",
            code="MISSING_PARAMETER",
            status_code=400,
            suggestion=f"Pass ?{parameter}=<value> in the query string",
            details={"parameter": parameter}
        )


class EmptyUpdateError(CohortAdminException):
    """Raised when an update request carries no fields."""

    def __init__(self, table: str):
        super().__init__(
            message=f"No fields to update in {table}",
            code="EMPTY_UPDATE",
            status_code=400,
            suggestion="Include at least one field in the request body",
            details={"table": table}
        )


class DatabaseError(CohortAdminException):
    """Raised when the database rejects or fails a query."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            message=f"Database error while trying to {operation}: {error}",
            code="DATABASE_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"operation": operation, "error": error}
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def cohort_admin_exception_handler(
    request: Request,
    exc: CohortAdminException
) -> JSONResponse:
    """
    Convert CohortAdminException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Converts validation errors to user-friendly messages.
    """
    errors = jsonable_encoder(exc.errors()) if hasattr(exc, "errors") else str(exc)
    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }
    )

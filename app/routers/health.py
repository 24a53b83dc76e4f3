# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and uptime pingers.
# The database check doubles as a keep-alive for paused Supabase projects.
# =============================================================================

import time
from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.config import settings
from app.dependencies import SupabaseDep

router = APIRouter()

API_VERSION = "1.0.0"


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class DatabaseHealthResponse(BaseModel):
    """Database check response."""
    status: str
    message: str
    responseTime: str
    timestamp: str
    error: str | None = None


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=API_VERSION,
    )


@router.get("/health/db", response_model=DatabaseHealthResponse)
def database_health_check(supabase: SupabaseDep):
    """
    Database health check.

    Runs a lightweight read against `clients` and reports how long it took.
    Returns 500 with `status: error` if the query fails.
    """
    started = time.perf_counter()

    try:
        supabase.fetch_rows("clients", columns="id", limit=1)
    except Exception as e:
        elapsed = int((time.perf_counter() - started) * 1000)
        body = DatabaseHealthResponse(
            status="error",
            message="DB error",
            error=str(e),
            responseTime=f"{elapsed}ms",
            timestamp=_now(),
        )
        return JSONResponse(status_code=500, content=body.model_dump())

    elapsed = int((time.perf_counter() - started) * 1000)
    return DatabaseHealthResponse(
        status="ok",
        message="OK",
        responseTime=f"{elapsed}ms",
        timestamp=_now(),
    )

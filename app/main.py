# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Cohort Admin API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    CohortAdminException,
    cohort_admin_exception_handler,
    validation_exception_handler,
)
from app.middleware import TenantRoutingMiddleware
from app.routers import assessments, health, routing, tenants

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Logs the effective configuration on startup. The Supabase client is
    created lazily on first use and needs no teardown.
    """
    routing_config = settings.tenant_routing
    logger.info(f"Starting Cohort Admin API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    logger.info(
        f"Tenant routing: namespace={routing_config.namespace_root} "
        f"admin={routing_config.admin_subdomain} "
        f"local_roots={list(routing_config.local_root_domains)}"
    )

    yield

    logger.info("Shutting down Cohort Admin API")


# Create FastAPI application
app = FastAPI(
    title="Cohort Admin API",
    description="""
## Multi-tenant cohort and assessment administration

Each client organization is served on its own subdomain. Requests to
`<tenant>.<domain>` are routed internally to `/tenant/<tenant>/...`
without changing the URL the browser shows.

| Host | Path | Served by |
|------|------|-----------|
| `acme.example.com` | `/` | `/tenant/acme/login` |
| `acme.example.com` | `/cohorts/42` | `/tenant/acme/cohort/42` |
| `admin.example.com` | any | admin routes, unchanged |
| `localhost:3000` | any | admin routes, unchanged |

API routes under `/api` are never rewritten.
""",
    version=health.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Health",
            "description": "API and database health checks",
        },
        {
            "name": "Assessments",
            "description": "Admin assessment types, templates, versions and questions",
        },
        {
            "name": "Tenants",
            "description": "Tenant namespace endpoints reached through subdomain routing",
        },
        {
            "name": "Routing",
            "description": "Tenant routing diagnostics",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Tenant routing - added last so it runs first, before routing happens
app.add_middleware(TenantRoutingMiddleware)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(CohortAdminException)
async def handle_cohort_admin_exception(request: Request, exc: CohortAdminException):
    """Handle custom Cohort Admin exceptions."""
    return await cohort_admin_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Handle request body/query validation errors."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api",
    tags=["Health"]
)

# Admin assessment catalogue
app.include_router(
    assessments.router,
    prefix="/api/admin/assessments",
    tags=["Assessments"]
)

# Routing diagnostics
app.include_router(
    routing.router,
    prefix="/api/tenant-routing",
    tags=["Routing"]
)

# Tenant namespace - target of subdomain rewrites
app.include_router(
    tenants.router,
    prefix=settings.tenant_routing.namespace_root,
    tags=["Tenants"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.

    Only reached on hosts without a tenant subdomain; tenant hosts are
    routed to their login page.
    """
    return {
        "name": "Cohort Admin API",
        "version": health.API_VERSION,
        "docs": "/docs",
        "health": "/api/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )

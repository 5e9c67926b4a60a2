"""
Agent Launchpad - Main FastAPI Application.

REST API layer in front of the orchestration engine: starts agent creation
workflows in the background and serves their status.
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
import time

from api.dependencies import get_orchestrator, peek_orchestrator
from api.routes import agents, health, orchestrations, workflows
from core.infrastructure.logging import configure_logging
from core.settings import get_app_settings


# Setup logging
configure_logging(get_app_settings().service.log_level)
logger = logging.getLogger(__name__)


# =============================================================================
# CREATE FASTAPI APP
# =============================================================================

app = FastAPI(
    title="Agent Launchpad - Orchestration API",
    description="""
    Step-based orchestration of agent provisioning.

    Features:
    - Fire-and-forget agent creation workflows
    - Status polling with progress and current step
    - Cancellation of running workflows
    - Registered workflow introspection
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)


# =============================================================================
# CORS MIDDLEWARE
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


# =============================================================================
# REQUEST LOGGING MIDDLEWARE
# =============================================================================

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests with timing."""
    start_time = time.time()

    logger.info(f"→ {request.method} {request.url.path}")

    response = await call_next(request)

    duration = time.time() - start_time
    logger.info(
        f"← {request.method} {request.url.path} "
        f"[{response.status_code}] ({duration:.3f}s)"
    )

    return response


# =============================================================================
# GLOBAL EXCEPTION HANDLER
# =============================================================================

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all uncaught exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": str(exc),
            "path": request.url.path
        }
    )


# =============================================================================
# STARTUP/SHUTDOWN EVENTS
# =============================================================================

@app.on_event("startup")
async def startup_event():
    """Run on application startup."""
    logger.info("Agent Launchpad API starting up...")

    settings = get_app_settings()
    if settings.orchestration.store_backend == "database":
        from core.infrastructure.database.config import init_database
        await init_database()

    orchestrator = get_orchestrator()
    logger.info(f"Workflows: {', '.join(orchestrator.registry.workflow_types())}")
    logger.info("Swagger UI available at: /docs")


@app.on_event("shutdown")
async def shutdown_event():
    """Run on application shutdown."""
    logger.info("Agent Launchpad API shutting down...")

    orchestrator = peek_orchestrator()
    if orchestrator is not None:
        await orchestrator.shutdown(cancel_running=True)

    if get_app_settings().orchestration.store_backend == "database":
        from core.infrastructure.database.config import close_database
        await close_database()


# =============================================================================
# INCLUDE ROUTERS
# =============================================================================

app.include_router(
    health.router,
    tags=["Health"]
)

app.include_router(
    agents.router,
    prefix="/api/v1/agents",
    tags=["Agents"]
)

app.include_router(
    orchestrations.router,
    prefix="/api/v1/orchestrations",
    tags=["Orchestrations"]
)

app.include_router(
    workflows.router,
    prefix="/api/v1/workflows",
    tags=["Workflows"]
)


# =============================================================================
# ROOT ENDPOINT
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """API root endpoint."""
    return {
        "message": "Agent Launchpad - Orchestration API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }

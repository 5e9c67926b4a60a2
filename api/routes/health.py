"""
Health check endpoints.

Used for monitoring and load balancer health checks.
"""
from datetime import datetime, timezone
import platform

from fastapi import APIRouter

from api.dependencies import get_orchestrator
from core.settings import get_app_settings


router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns system health status.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": "agent-launchpad",
        "version": "1.0.0",
        "python_version": platform.python_version(),
    }


@router.get("/health/ready")
async def readiness_check():
    """
    Readiness check endpoint.

    Returns whether the service is ready to accept traffic.
    """
    orchestrator = get_orchestrator()
    settings = get_app_settings()

    return {
        "status": "ready",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {
            "api": "ok",
            "orchestrator": "ok",
            "workflows": orchestrator.registry.workflow_types(),
            "status_store": settings.orchestration.store_backend,
        },
    }

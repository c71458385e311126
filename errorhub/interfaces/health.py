"""
Health check router.

Provides a simple health endpoint for liveness/readiness probes.
No business logic. Returns application status and version.
"""

from fastapi import APIRouter, Depends

from errorhub.interfaces.reporting.dependencies import ReportingContainer, get_container
from errorhub.interfaces.reporting.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Returns application health status and version.",
)
def health_check(container: ReportingContainer = Depends(get_container)) -> HealthResponse:
    """Return current application health status."""
    settings = container.settings
    return HealthResponse(status="ok", version=settings.version, environment=settings.environment)

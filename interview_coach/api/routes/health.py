"""
Health Check Routes - System health and monitoring endpoints.

These endpoints are used for:
1. Load balancer health checks
2. Container liveness/readiness probes
3. Quick system status verification
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from interview_coach import __version__
from interview_coach.api.dependencies import get_store
from interview_coach.core.exceptions import DatabaseUnavailableError
from interview_coach.core.logging_config import get_logger
from interview_coach.database.connection import DocumentStore
from interview_coach.models.common import HealthResponse

logger = get_logger(__name__)

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check endpoint",
    description="Returns 200 while the API process is up. Does not touch the database."
)
async def health_check() -> HealthResponse:
    logger.debug("Health check requested")
    return HealthResponse(status="healthy", version=__version__, timestamp=datetime.now(timezone.utc))


@router.get(
    "/ready",
    response_model=HealthResponse,
    summary="Readiness check endpoint",
    description="Returns 200 when the document store answers, 503 otherwise."
)
def readiness_check(store: DocumentStore = Depends(get_store)) -> HealthResponse:
    """
    Verify the document store is reachable.

    The probe runs on every call so a recovered database is noticed
    without restarting the service.
    """
    if not store.check_connection():
        raise DatabaseUnavailableError()
    return HealthResponse(status="ready", version=__version__, timestamp=datetime.now(timezone.utc))

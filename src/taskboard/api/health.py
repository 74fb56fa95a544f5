"""Health check endpoints for Kubernetes probes."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..database import Database
from ..db.session import get_database
from ..errors import UpstreamStoreError

router = APIRouter()

SERVICE_NAME = "taskboard"


@router.get("/health")
def health_check():
    """
    Health check endpoint for Kubernetes liveness probe.
    Returns 200 OK if the service is running.
    """
    return {"status": "healthy", "service": SERVICE_NAME}


@router.get("/ready")
def readiness_check(database: Database = Depends(get_database)):
    """
    Readiness check endpoint for Kubernetes readiness probe.
    Returns 200 OK once the database answers, 503 otherwise.
    """
    try:
        database.ping()
    except UpstreamStoreError:
        return JSONResponse(
            status_code=503,
            content={"status": "unavailable", "service": SERVICE_NAME},
        )
    return {"status": "ready", "service": SERVICE_NAME}

"""
Health check and readiness router.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ..dependencies import get_resilient_client
from ..services.resilient_client import ResilientClient
from .schemas import HealthResponse, ReadinessResponse

router = APIRouter(tags=["health"])


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Liveness check; 200 whenever the process is serving requests."""
    return HealthResponse(status="healthy", timestamp=_now())


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(client: ResilientClient = Depends(get_resilient_client)):
    """
    Readiness check.

    Storage must be reachable. An unreachable Functions API only degrades
    the service, since every CRUD operation can fall back to storage.
    """
    storage_ok = await client.storage.health_check()
    remote_ok = await client.remote_healthy()

    checks = {
        "storage": "healthy" if storage_ok else "unhealthy",
        "functions_api": "healthy" if remote_ok else "degraded",
    }
    body = ReadinessResponse(ready=storage_ok, checks=checks, timestamp=_now())
    code = status.HTTP_200_OK if storage_ok else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(status_code=code, content=body.model_dump())

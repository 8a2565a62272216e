"""Dependency health endpoint."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Response, status

from jobly.api.deps import get_health_service
from jobly.core.health import HealthService

router = APIRouter()


@router.get("")
async def health_check(
    response: Response,
    health_service: Annotated[HealthService, Depends(get_health_service)],
) -> dict[str, Any]:
    """Report database connectivity and API version.

    Responds 503 when any probed dependency is unhealthy.
    """
    payload = await health_service.get_health_payload()
    if payload["status"] == "unhealthy":
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return payload

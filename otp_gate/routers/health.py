"""
Health check endpoint.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from redis.exceptions import RedisError

from otp_gate.dependencies import OtpServiceDep
from otp_gate.models import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    operation_id="getHealth",
    summary="Health check",
)
async def get_health(service: OtpServiceDep) -> HealthResponse:
    try:
        store_ok = await service.store.ping()
    except RedisError:
        logger.warning("Health check: store unreachable", exc_info=True)
        store_ok = False

    return HealthResponse(
        status="ok" if store_ok else "degraded",
        store="ok" if store_ok else "unreachable",
        version="0.1.0",
        timestamp=datetime.now(timezone.utc),
    )

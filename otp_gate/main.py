"""Main FastAPI application for OTP Gate."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from redis.exceptions import RedisError
from slowapi.errors import RateLimitExceeded

from otp_gate.config import REDIS_URL
from otp_gate.errors import IncorrectOtp, OtpError
from otp_gate.models import ErrorResponse
from otp_gate.rate_limit import limiter
from otp_gate.routers import health, otp
from otp_gate.services.email import EmailDispatcher
from otp_gate.services.otp.service import OtpService
from otp_gate.services.store import RedisStore

logger = logging.getLogger(__name__)


def build_otp_service() -> OtpService:
    """Production wiring: shared Redis store and SMTP delivery."""
    return OtpService(RedisStore.from_url(REDIS_URL), EmailDispatcher())


@asynccontextmanager
async def lifespan(app: FastAPI):
    service = build_otp_service()
    app.state.otp_service = service
    logger.info("OTP service ready")
    try:
        yield
    finally:
        await service.store.close()
        logger.info("OTP store closed")


app = FastAPI(
    title="OTP Gate API",
    description="Issues and verifies one-time codes for registration and password reset",
    version="0.1.0",
    lifespan=lifespan,
)

app.state.limiter = limiter


# ── Error handlers ─────────────────────────────────────────────────────────


@app.exception_handler(OtpError)
async def otp_error_handler(request: Request, exc: OtpError) -> JSONResponse:
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    body = ErrorResponse(
        message=exc.message,
        remaining_attempts=exc.remaining_attempts if isinstance(exc, IncorrectOtp) else None,
    )
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(exclude_none=True))


@app.exception_handler(RedisError)
async def store_error_handler(request: Request, exc: RedisError) -> JSONResponse:
    logger.error("%s %s failed: store unavailable (%s)", request.method, request.url.path, exc)
    body = ErrorResponse(message="Something went wrong, please try again!")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=body.model_dump(exclude_none=True),
    )


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"detail": f"Rate limit exceeded: {exc.detail}"},
    )


app.include_router(health.router)
app.include_router(otp.router)

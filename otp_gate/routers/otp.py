"""
OTP endpoints – request a code by email and verify it.

Both endpoints sit behind a per-IP slowapi limit; the per-address
cooldown, spam lock and account lock are enforced by ``OtpService``.
"""

from fastapi import APIRouter, Request

from otp_gate.dependencies import OtpServiceDep
from otp_gate.models import (
    ErrorResponse,
    MessageResponse,
    OtpRequest,
    OtpRequestResponse,
    OtpVerifyRequest,
)
from otp_gate.rate_limit import AUTH, STRICT, limiter
from otp_gate.services.otp.service import delivery_context

router = APIRouter(prefix="/api/otp", tags=["otp"])

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
}


@router.post(
    "/request",
    response_model=OtpRequestResponse,
    responses=_ERROR_RESPONSES,
    operation_id="requestOtp",
    summary="Send a one-time code to the given email",
)
@limiter.limit(STRICT)
async def request_otp(
    request: Request,
    body: OtpRequest,
    service: OtpServiceDep,
) -> OtpRequestResponse:
    context = delivery_context(body.purpose, body.name or body.email)
    result = await service.request_otp(body.purpose, body.email, context)
    return OtpRequestResponse(
        message="OTP sent to email, please verify",
        expires_in_seconds=service.settings.otp_ttl,
        delivered=result.delivered,
    )


@router.post(
    "/verify",
    response_model=MessageResponse,
    responses=_ERROR_RESPONSES,
    operation_id="verifyOtp",
    summary="Verify a previously sent one-time code",
)
@limiter.limit(AUTH)
async def verify_otp(
    request: Request,
    body: OtpVerifyRequest,
    service: OtpServiceDep,
) -> MessageResponse:
    await service.verify_otp(body.purpose, body.email, body.otp)
    return MessageResponse(message="OTP verified successfully")

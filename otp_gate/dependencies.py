from typing import Annotated

from fastapi import Depends, Request

from otp_gate.services.otp.service import OtpService


def get_otp_service(request: Request) -> OtpService:
    """The OtpService created by the application lifespan."""
    return request.app.state.otp_service


OtpServiceDep = Annotated[OtpService, Depends(get_otp_service)]

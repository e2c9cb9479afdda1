"""Pydantic models for the OTP Gate API."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from otp_gate.services.otp.keys import Purpose


def _normalize_email(value: str) -> str:
    """One identity per mailbox: Alice@X.com and alice@x.com share OTP state."""
    return value.strip().lower()


class OtpRequest(BaseModel):
    """Ask for a code to be sent to an address."""
    email: EmailStr = Field(..., description="Destination address")
    purpose: Purpose = Field(..., description="Account flow the code gates")
    name: str = Field("", max_length=100, description="Recipient name used in the email")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return _normalize_email(value)


class OtpRequestResponse(BaseModel):
    message: str
    expires_in_seconds: int
    delivered: bool = Field(..., description="False when the email could not be sent")


class OtpVerifyRequest(BaseModel):
    """Submit a code for verification."""
    email: EmailStr
    purpose: Purpose
    otp: str = Field(..., min_length=1, max_length=16, description="Submitted code")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return _normalize_email(value)


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    status: str = "error"
    message: str
    remaining_attempts: int | None = None


class HealthResponse(BaseModel):
    status: str
    store: str
    version: str
    timestamp: datetime

"""
OTP rejection kinds.

Every rejection carries the user-facing message and the HTTP status the
API layer answers with.  Store failures are not wrapped here; they
propagate as the store client's own exceptions.
"""

from __future__ import annotations


class OtpError(Exception):
    """Base class for OTP rejections."""

    status_code: int = 400
    default_message: str = "OTP request rejected"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


# ── Issuance guard ────────────────────────────────────────────────────────


class CooldownActive(OtpError):
    """A code was issued moments ago."""

    status_code = 429
    default_message = "Please wait before requesting another OTP"


class RequestRateExceeded(OtpError):
    """Too many codes were requested within the rolling window."""

    status_code = 429
    default_message = "Too many OTP requests, please try again after 1 hour"


class AccountLocked(OtpError):
    """Too many wrong codes were submitted."""

    status_code = 403
    default_message = (
        "Account locked due to multiple failed attempts, "
        "please try again after 30 minutes"
    )


# ── Verification ──────────────────────────────────────────────────────────


class InvalidOrExpiredOtp(OtpError):
    """No pending code: never issued, already consumed, or expired."""

    default_message = "Invalid OTP, please try again"


class IncorrectOtp(OtpError):
    """The submitted code does not match the pending one."""

    def __init__(self, remaining_attempts: int) -> None:
        self.remaining_attempts = remaining_attempts
        super().__init__(f"Incorrect OTP, {remaining_attempts} attempts left")

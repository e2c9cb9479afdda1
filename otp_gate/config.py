"""
Application configuration from environment variables.

All settings have sensible defaults for local development.
A .env file in the project root is loaded automatically (if present).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env file before reading any env vars
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

# ── Redis ─────────────────────────────────────────────────────────────────

REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")

# Every OTP key is stored as "{prefix}{kind}:{purpose}:{identity}"
OTP_KEY_PREFIX: str = os.getenv("OTP_KEY_PREFIX", "otp:")

# ── OTP lifetimes (seconds) ───────────────────────────────────────────────

OTP_TTL: int = int(os.getenv("OTP_TTL", "300"))
OTP_COOLDOWN_TTL: int = int(os.getenv("OTP_COOLDOWN_TTL", "60"))
OTP_SPAM_LOCK_TTL: int = int(os.getenv("OTP_SPAM_LOCK_TTL", "3600"))
OTP_REQUEST_WINDOW: int = int(os.getenv("OTP_REQUEST_WINDOW", "3600"))
OTP_LOCK_TTL: int = int(os.getenv("OTP_LOCK_TTL", "1800"))

# ── OTP thresholds ────────────────────────────────────────────────────────

# Issuances allowed per rolling window; the request that would exceed it
# installs the spam lock instead.
OTP_MAX_REQUESTS: int = int(os.getenv("OTP_MAX_REQUESTS", "3"))

# Wrong submissions tolerated before the next one locks the account.
OTP_MAX_ATTEMPTS: int = int(os.getenv("OTP_MAX_ATTEMPTS", "3"))

# ── SMTP ──────────────────────────────────────────────────────────────────

SMTP_HOST: str = os.getenv("SMTP_HOST", "")
SMTP_PORT: int = int(os.getenv("SMTP_PORT", "587"))
SMTP_USERNAME: str = os.getenv("SMTP_USERNAME", "")
SMTP_PASSWORD: str = os.getenv("SMTP_PASSWORD", "")
SMTP_FROM_EMAIL: str = os.getenv("SMTP_FROM_EMAIL", "noreply@otp-gate.local")
SMTP_USE_TLS: bool = os.getenv("SMTP_USE_TLS", "true").lower() == "true"

# Set to "false" to force console-only mode even when SMTP credentials are present.
_SMTP_ENABLED_OVERRIDE: str = os.getenv("SMTP_ENABLED", "auto")


def smtp_enabled() -> bool:
    """True when SMTP should actually send emails.

    Controlled by SMTP_ENABLED env var:
      • "auto" (default): send if credentials are configured
      • "true": always send (will fail if credentials are missing)
      • "false": never send, log to console instead
    """
    if _SMTP_ENABLED_OVERRIDE.lower() == "false":
        return False
    if _SMTP_ENABLED_OVERRIDE.lower() == "true":
        return True
    return bool(SMTP_HOST and SMTP_USERNAME and SMTP_PASSWORD)


@dataclass(frozen=True)
class OtpSettings:
    """Lifetimes and thresholds shared by the guard, counter and lifecycle."""

    key_prefix: str = OTP_KEY_PREFIX
    otp_ttl: int = OTP_TTL
    cooldown_ttl: int = OTP_COOLDOWN_TTL
    spam_lock_ttl: int = OTP_SPAM_LOCK_TTL
    request_window: int = OTP_REQUEST_WINDOW
    lock_ttl: int = OTP_LOCK_TTL
    max_requests: int = OTP_MAX_REQUESTS
    max_attempts: int = OTP_MAX_ATTEMPTS

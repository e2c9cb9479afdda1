"""
Shared test fixtures.

Provides:
  • a MemoryStore driven by a manual clock (no Redis, no sleeping)
  • a recording dispatcher (no SMTP)
  • an OtpService wired to both
  • a FastAPI TestClient whose lifespan builds that OtpService

Rate limiting is disabled for the `client` fixture; see
tests/unit_tests/test_rate_limit.py for the enabled variant.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from otp_gate.config import OtpSettings
from otp_gate.main import app
from otp_gate.services.otp.keys import OtpKeys, Purpose
from otp_gate.services.otp.service import OtpService
from otp_gate.services.store import MemoryStore
from tests.mocks.clock import ManualClock
from tests.mocks.dispatcher import RecordingDispatcher


# ── Core fixtures ──────────────────────────────────────────────────────────


@pytest.fixture()
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture()
def store(clock: ManualClock) -> MemoryStore:
    return MemoryStore(clock=clock)


@pytest.fixture()
def dispatcher() -> RecordingDispatcher:
    return RecordingDispatcher()


@pytest.fixture()
def settings() -> OtpSettings:
    return OtpSettings(
        key_prefix="otp:",
        otp_ttl=300,
        cooldown_ttl=60,
        spam_lock_ttl=3600,
        request_window=3600,
        lock_ttl=1800,
        max_requests=3,
        max_attempts=3,
    )


@pytest.fixture()
def keys() -> OtpKeys:
    return OtpKeys(purpose=Purpose.USER_REGISTRATION, prefix="otp:")


@pytest.fixture()
def otp_service(
    store: MemoryStore,
    dispatcher: RecordingDispatcher,
    settings: OtpSettings,
) -> OtpService:
    return OtpService(store, dispatcher, settings)


# ── API fixtures ───────────────────────────────────────────────────────────


@pytest.fixture()
def _test_env(monkeypatch, otp_service: OtpService) -> OtpService:
    """Make the app lifespan use the in-memory OtpService."""
    monkeypatch.setattr("otp_gate.main.build_otp_service", lambda: otp_service)

    from otp_gate.rate_limit import limiter as _limiter
    monkeypatch.setattr(_limiter, "enabled", False)

    return otp_service


@pytest.fixture()
def client(_test_env: OtpService) -> TestClient:
    with TestClient(app, raise_server_exceptions=False) as tc:
        yield tc

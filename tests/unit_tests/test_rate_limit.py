"""Tests for per-IP rate limiting behaviour."""

import pytest
from fastapi.testclient import TestClient

from otp_gate.main import app


class TestRateLimiting:
    """Verify that rate limiting kicks in for the OTP endpoints."""

    @pytest.fixture()
    def limited_client(self, _test_env):
        """
        TestClient with rate limiting **enabled** (unlike the default
        `client` fixture which disables it for convenience).
        """
        from otp_gate.rate_limit import limiter

        limiter.enabled = True
        # Reset in-memory state so previous tests don't pollute counts
        limiter.reset()

        with TestClient(app, raise_server_exceptions=False) as tc:
            yield tc

        limiter.enabled = False

    def test_otp_request_rate_limit(self, limited_client):
        """POST /api/otp/request is limited to 5 requests/minute per IP."""
        for i in range(5):
            resp = limited_client.post(
                "/api/otp/request",
                json={"email": f"user{i}@example.com", "purpose": "user-registration"},
            )
            assert resp.status_code == 200, f"Request {i + 1} should succeed"

        # 6th request should be rate-limited even for a fresh address
        resp = limited_client.post(
            "/api/otp/request",
            json={"email": "user5@example.com", "purpose": "user-registration"},
        )
        assert resp.status_code == 429
        assert "Rate limit exceeded" in resp.json()["detail"]

    def test_otp_verify_rate_limit(self, limited_client):
        """POST /api/otp/verify is limited to 10 requests/minute per IP."""
        for i in range(10):
            resp = limited_client.post(
                "/api/otp/verify",
                json={
                    "email": f"user{i}@example.com",
                    "purpose": "user-registration",
                    "otp": "1234",
                },
            )
            # 400 (no pending OTP) is fine – we just need it not to be 429 yet
            assert resp.status_code == 400, f"Request {i + 1} should not be rate-limited"

        resp = limited_client.post(
            "/api/otp/verify",
            json={"email": "x@example.com", "purpose": "user-registration", "otp": "1234"},
        )
        assert resp.status_code == 429


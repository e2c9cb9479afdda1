"""
Request guard – decides whether a new OTP may be issued.
"""

from __future__ import annotations

from otp_gate.errors import AccountLocked, CooldownActive, RequestRateExceeded
from otp_gate.services.otp.keys import OtpKeys
from otp_gate.services.store import EphemeralStore


class RequestGuard:
    """Read-only check of the cooldown, account lock and spam lock markers."""

    def __init__(self, store: EphemeralStore, keys: OtpKeys) -> None:
        self._store = store
        self._keys = keys

    async def check_restriction(self, identity: str) -> None:
        """
        Raise if issuance is currently blocked for *identity*.

        When several markers are present the first one in the order
        cooldown → account lock → spam lock decides the error.
        """
        if await self._store.get(self._keys.cooldown(identity)):
            raise CooldownActive()
        if await self._store.get(self._keys.lock(identity)):
            raise AccountLocked()
        if await self._store.get(self._keys.spam_lock(identity)):
            raise RequestRateExceeded()

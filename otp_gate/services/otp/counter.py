"""
Request counter – caps issuances per identity within a sliding window.
"""

from __future__ import annotations

import logging

from otp_gate.config import OtpSettings
from otp_gate.errors import RequestRateExceeded
from otp_gate.services.otp.keys import OtpKeys
from otp_gate.services.store import EphemeralStore

logger = logging.getLogger(__name__)


class RequestCounter:
    def __init__(
        self,
        store: EphemeralStore,
        keys: OtpKeys,
        settings: OtpSettings,
    ) -> None:
        self._store = store
        self._keys = keys
        self._settings = settings

    async def record_request(self, identity: str) -> None:
        """
        Count one issuance for *identity*, or install the spam lock.

        Every successful increment restarts the window's TTL, so the
        window slides with the most recent request.
        """
        count = int(await self._store.get(self._keys.request_count(identity)) or 0)

        if count >= self._settings.max_requests - 1:
            await self._store.set(
                self._keys.spam_lock(identity),
                "true",
                self._settings.spam_lock_ttl,
            )
            logger.warning(
                "Spam lock set for %s (%s) after %d requests",
                identity,
                self._keys.purpose.value,
                count,
            )
            raise RequestRateExceeded()

        await self._store.set(
            self._keys.request_count(identity),
            count + 1,
            self._settings.request_window,
        )

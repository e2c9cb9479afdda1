"""
OTP lifecycle – generate, store, deliver and verify a short numeric code.

Issuance does not consult the guard or the counter; callers run those
first (see ``OtpService.request_otp``).

Verification allows ``max_attempts`` wrong codes and locks the account
on the next one.  The remaining-attempts figure is computed from the
counter *before* it is incremented, so with the default of 3 the user
sees "3, 2, 1 attempts left" and the fourth wrong code locks.
"""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from typing import Callable

from otp_gate.config import OtpSettings
from otp_gate.errors import AccountLocked, IncorrectOtp, InvalidOrExpiredOtp
from otp_gate.services.email import DeliveryContext, NotificationDispatcher
from otp_gate.services.otp.keys import OtpKeys
from otp_gate.services.store import EphemeralStore

logger = logging.getLogger(__name__)


def generate_code() -> str:
    """Uniform 4-digit code in 1000–9999; never zero-padded."""
    return str(1000 + secrets.randbelow(9000))


@dataclass(frozen=True)
class IssueResult:
    code: str
    delivered: bool


class OtpLifecycle:
    def __init__(
        self,
        store: EphemeralStore,
        keys: OtpKeys,
        dispatcher: NotificationDispatcher,
        settings: OtpSettings,
        *,
        code_factory: Callable[[], str] = generate_code,
    ) -> None:
        self._store = store
        self._keys = keys
        self._dispatcher = dispatcher
        self._settings = settings
        self._code_factory = code_factory

    # ── Issue ──────────────────────────────────────────────────────────

    async def issue(self, identity: str, context: DeliveryContext) -> IssueResult:
        """
        Create a pending code for *identity*, replacing any previous one,
        and start the resend cooldown.

        A failed delivery is logged and reported via ``delivered=False``
        but does not fail the call; the pending code is still stored.
        """
        code = self._code_factory()

        try:
            delivered = await self._dispatcher.send(identity, code, context)
        except Exception:
            logger.exception("OTP delivery to %s raised", identity)
            delivered = False
        if not delivered:
            logger.error("OTP for %s was not delivered", identity)

        await self._store.set(self._keys.pending(identity), code, self._settings.otp_ttl)
        await self._store.set(
            self._keys.cooldown(identity), "true", self._settings.cooldown_ttl
        )
        logger.info(
            "OTP issued for %s (%s), expires in %ds",
            identity,
            self._keys.purpose.value,
            self._settings.otp_ttl,
        )
        return IssueResult(code=code, delivered=delivered)

    # ── Verify ─────────────────────────────────────────────────────────

    async def verify(self, identity: str, submitted_code: str) -> None:
        """Consume the pending code if *submitted_code* matches it, else raise."""
        pending_key = self._keys.pending(identity)
        attempts_key = self._keys.attempts(identity)

        stored = await self._store.get(pending_key)
        if not stored:
            raise InvalidOrExpiredOtp()

        attempts = int(await self._store.get(attempts_key) or 0)

        if stored.strip() == str(submitted_code).strip():
            await self._store.delete(pending_key, attempts_key)
            return

        if attempts >= self._settings.max_attempts:
            await self._store.set(
                self._keys.lock(identity), "true", self._settings.lock_ttl
            )
            await self._store.delete(pending_key, attempts_key)
            logger.warning(
                "Account lock set for %s (%s) after %d failed attempts",
                identity,
                self._keys.purpose.value,
                attempts + 1,
            )
            raise AccountLocked()

        await self._store.set(attempts_key, attempts + 1, self._settings.otp_ttl)
        raise IncorrectOtp(remaining_attempts=self._settings.max_attempts - attempts)

"""
OTP service – wires the guard, counter and lifecycle per purpose.

Usage::

    service = OtpService(RedisStore.from_url(REDIS_URL), EmailDispatcher())
    result = await service.request_otp(Purpose.USER_REGISTRATION, email, context)
    ...
    await service.verify_otp(Purpose.USER_REGISTRATION, email, submitted)
"""

from __future__ import annotations

from typing import Callable

from otp_gate.config import OtpSettings
from otp_gate.errors import AccountLocked
from otp_gate.services.email import DeliveryContext, NotificationDispatcher
from otp_gate.services.otp.counter import RequestCounter
from otp_gate.services.otp.guard import RequestGuard
from otp_gate.services.otp.keys import OtpKeys, Purpose
from otp_gate.services.otp.lifecycle import IssueResult, OtpLifecycle, generate_code
from otp_gate.services.store import EphemeralStore

# Email template and subject sent for each purpose
_DELIVERY = {
    Purpose.USER_REGISTRATION: ("user-activation-email", "Verify Your Email!"),
    Purpose.SELLER_REGISTRATION: ("user-activation-email", "Verify Your Email!"),
    Purpose.PASSWORD_RESET: ("reset-password-email", "Reset Password!"),
}


def delivery_context(purpose: Purpose, name: str) -> DeliveryContext:
    template, subject = _DELIVERY[purpose]
    return DeliveryContext(name=name, template=template, subject=subject)


class OtpFlow:
    """The three sub-machines bound to one purpose's key namespace."""

    def __init__(
        self,
        store: EphemeralStore,
        dispatcher: NotificationDispatcher,
        settings: OtpSettings,
        purpose: Purpose,
        code_factory: Callable[[], str] = generate_code,
    ) -> None:
        self.keys = OtpKeys(purpose=purpose, prefix=settings.key_prefix)
        self.guard = RequestGuard(store, self.keys)
        self.counter = RequestCounter(store, self.keys, settings)
        self.lifecycle = OtpLifecycle(
            store, self.keys, dispatcher, settings, code_factory=code_factory
        )


class OtpService:
    """
    Stateless façade over the OTP flows.

    Holds no per-identity state of its own; any number of instances may
    share one store.
    """

    def __init__(
        self,
        store: EphemeralStore,
        dispatcher: NotificationDispatcher,
        settings: OtpSettings | None = None,
        *,
        code_factory: Callable[[], str] = generate_code,
    ) -> None:
        self._store = store
        self._settings = settings or OtpSettings()
        self._flows = {
            purpose: OtpFlow(store, dispatcher, self._settings, purpose, code_factory)
            for purpose in Purpose
        }

    @property
    def store(self) -> EphemeralStore:
        return self._store

    @property
    def settings(self) -> OtpSettings:
        return self._settings

    def flow(self, purpose: Purpose) -> OtpFlow:
        return self._flows[Purpose(purpose)]

    async def request_otp(
        self,
        purpose: Purpose,
        identity: str,
        context: DeliveryContext | None = None,
    ) -> IssueResult:
        """Guard check, then count the request, then issue a fresh code."""
        flow = self.flow(purpose)
        await flow.guard.check_restriction(identity)
        await flow.counter.record_request(identity)
        return await flow.lifecycle.issue(
            identity, context or delivery_context(flow.keys.purpose, identity)
        )

    async def verify_otp(self, purpose: Purpose, identity: str, code: str) -> None:
        """
        Verify *code* for *identity*.

        An active account lock rejects the attempt even when the code is
        correct.
        """
        flow = self.flow(purpose)
        if await self._store.get(flow.keys.lock(identity)):
            raise AccountLocked()
        await flow.lifecycle.verify(identity, code)

"""
Store key layout for OTP state.

Keys are namespaced by purpose so a registration code and a password
reset code for the same address never share a cooldown, counter or lock.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Purpose(str, Enum):
    """The account flow an OTP gates."""

    USER_REGISTRATION = "user-registration"
    SELLER_REGISTRATION = "seller-registration"
    PASSWORD_RESET = "password-reset"


@dataclass(frozen=True)
class OtpKeys:
    """Builds the six store keys for one (purpose, identity) pair."""

    purpose: Purpose
    prefix: str = "otp:"

    def _key(self, kind: str, identity: str) -> str:
        return f"{self.prefix}{kind}:{self.purpose.value}:{identity}"

    def cooldown(self, identity: str) -> str:
        return self._key("cooldown", identity)

    def spam_lock(self, identity: str) -> str:
        return self._key("spamlock", identity)

    def request_count(self, identity: str) -> str:
        return self._key("reqcount", identity)

    def lock(self, identity: str) -> str:
        return self._key("lock", identity)

    def pending(self, identity: str) -> str:
        return self._key("otp", identity)

    def attempts(self, identity: str) -> str:
        return self._key("attempts", identity)

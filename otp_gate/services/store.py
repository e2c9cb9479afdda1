"""
Ephemeral key-value stores with per-key expiry.

All OTP state lives behind the ``EphemeralStore`` protocol.  Production
uses ``RedisStore`` so every process instance sees the same keys;
``MemoryStore`` keeps the same semantics inside one process and is meant
for local development and tests only.

Values are always read back as strings, matching a Redis client created
with ``decode_responses=True``.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Protocol

import redis.asyncio as aioredis

logger = logging.getLogger(__name__)


class EphemeralStore(Protocol):
    """Protocol that every store backend must satisfy."""

    async def get(self, key: str) -> str | None:
        """Return the value for *key*, or None if absent or expired."""
        ...

    async def set(self, key: str, value: str | int, ttl_seconds: int) -> None:
        """Store *value* under *key*, replacing any previous value and expiry."""
        ...

    async def delete(self, *keys: str) -> None:
        """Remove the given keys; missing keys are ignored."""
        ...

    async def ping(self) -> bool:
        ...

    async def close(self) -> None:
        ...


class RedisStore:
    """``EphemeralStore`` backed by a shared Redis server."""

    def __init__(self, client: aioredis.Redis) -> None:
        self._client = client

    @classmethod
    def from_url(cls, url: str) -> RedisStore:
        logger.info("Connecting OTP store to %s", url)
        return cls(aioredis.from_url(url, decode_responses=True))

    async def get(self, key: str) -> str | None:
        return await self._client.get(key)

    async def set(self, key: str, value: str | int, ttl_seconds: int) -> None:
        await self._client.set(key, str(value), ex=ttl_seconds)

    async def delete(self, *keys: str) -> None:
        if keys:
            await self._client.delete(*keys)

    async def ping(self) -> bool:
        return bool(await self._client.ping())

    async def close(self) -> None:
        await self._client.aclose()


class MemoryStore:
    """
    In-process ``EphemeralStore`` with lazy expiry.

    Expired entries are dropped the next time they are read.  *clock*
    returns the current time in seconds and can be replaced in tests to
    move time forward without sleeping.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._data: dict[str, tuple[str, float]] = {}

    async def get(self, key: str) -> str | None:
        entry = self._data.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._clock() >= expires_at:
            del self._data[key]
            return None
        return value

    async def set(self, key: str, value: str | int, ttl_seconds: int) -> None:
        self._data[key] = (str(value), self._clock() + ttl_seconds)

    async def delete(self, *keys: str) -> None:
        for key in keys:
            self._data.pop(key, None)

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        self._data.clear()

    def ttl(self, key: str) -> float | None:
        """Seconds until *key* expires, or None if it is absent."""
        entry = self._data.get(key)
        if entry is None:
            return None
        remaining = entry[1] - self._clock()
        return remaining if remaining > 0 else None

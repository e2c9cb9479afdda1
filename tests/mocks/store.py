"""Store doubles that simulate an unreachable Redis server."""

from __future__ import annotations

from redis.exceptions import ConnectionError as RedisConnectionError


class UnreachableStore:
    """Every operation fails the way a dropped Redis connection does."""

    async def get(self, key: str) -> str | None:
        raise RedisConnectionError("Connection refused")

    async def set(self, key: str, value: str | int, ttl_seconds: int) -> None:
        raise RedisConnectionError("Connection refused")

    async def delete(self, *keys: str) -> None:
        raise RedisConnectionError("Connection refused")

    async def ping(self) -> bool:
        raise RedisConnectionError("Connection refused")

    async def close(self) -> None:
        pass

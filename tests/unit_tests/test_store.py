"""Tests for the ephemeral store backends."""

from unittest.mock import AsyncMock

from otp_gate.services.store import MemoryStore, RedisStore


class TestMemoryStore:
    async def test_missing_key_reads_none(self, store):
        assert await store.get("nope") is None

    async def test_set_then_get_returns_string(self, store):
        await store.set("count", 2, 60)
        assert await store.get("count") == "2"

    async def test_key_expires_after_ttl(self, store, clock):
        await store.set("k", "v", 60)
        clock.advance(59)
        assert await store.get("k") == "v"
        clock.advance(1)
        assert await store.get("k") is None

    async def test_set_overwrites_value_and_ttl(self, store, clock):
        await store.set("k", "old", 10)
        clock.advance(5)
        await store.set("k", "new", 10)
        clock.advance(8)
        assert await store.get("k") == "new"
        assert store.ttl("k") == 2

    async def test_delete_many_ignores_missing(self, store):
        await store.set("a", "1", 60)
        await store.set("b", "2", 60)
        await store.delete("a", "b", "c")
        assert await store.get("a") is None
        assert await store.get("b") is None

    def test_ttl_of_missing_key_is_none(self):
        assert MemoryStore().ttl("absent") is None


class TestRedisStore:
    def _store(self) -> tuple[RedisStore, AsyncMock]:
        client = AsyncMock()
        return RedisStore(client), client

    async def test_set_passes_expiry_in_seconds(self):
        store, client = self._store()
        await store.set("otp:cooldown:user-registration:a@x.com", "true", 60)
        client.set.assert_awaited_once_with(
            "otp:cooldown:user-registration:a@x.com", "true", ex=60
        )

    async def test_set_stringifies_integers(self):
        store, client = self._store()
        await store.set("k", 3, 3600)
        client.set.assert_awaited_once_with("k", "3", ex=3600)

    async def test_get_delegates(self):
        store, client = self._store()
        client.get.return_value = "4821"
        assert await store.get("k") == "4821"

    async def test_delete_without_keys_skips_call(self):
        store, client = self._store()
        await store.delete()
        client.delete.assert_not_awaited()

    async def test_delete_passes_all_keys(self):
        store, client = self._store()
        await store.delete("a", "b")
        client.delete.assert_awaited_once_with("a", "b")

    async def test_close_closes_client(self):
        store, client = self._store()
        await store.close()
        client.aclose.assert_awaited_once()

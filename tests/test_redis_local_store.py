"""
Tests for the Redis-backed local store
"""
import pytest
from unittest.mock import AsyncMock

from infrastructure.cache import InMemoryLocalStore, RedisLocalStore


class TestRedisLocalStore:
    """Redis local store"""

    @pytest.fixture
    def client(self):
        return AsyncMock()

    @pytest.fixture
    def store(self, client):
        return RedisLocalStore(client=client)

    @pytest.mark.asyncio
    async def test_get_set_remove(self, store, client):
        client.get.return_value = "value"

        assert await store.get_item("k") == "value"
        await store.set_item("k", "v")
        await store.remove_item("k")

        client.get.assert_awaited_once_with("k")
        client.set.assert_awaited_once_with("k", "v")
        client.delete.assert_awaited_once_with("k")

    @pytest.mark.asyncio
    async def test_errors_read_as_missing(self, store, client):
        client.get.side_effect = ConnectionError("redis down")
        client.set.side_effect = ConnectionError("redis down")

        assert await store.get_item("k") is None
        await store.set_item("k", "v")

    @pytest.mark.asyncio
    async def test_without_connection(self):
        store = RedisLocalStore()

        assert await store.get_item("k") is None
        await store.set_item("k", "v")
        await store.remove_item("k")

    @pytest.mark.asyncio
    async def test_disconnect_closes_client(self, store, client):
        await store.disconnect()
        client.aclose.assert_awaited_once()


class TestInMemoryLocalStore:
    """Dictionary-backed local store"""

    @pytest.mark.asyncio
    async def test_round_trip(self):
        store = InMemoryLocalStore({"a": "1"})

        assert await store.get_item("a") == "1"
        await store.set_item("b", "2")
        await store.remove_item("a")
        await store.remove_item("missing")

        assert store.items == {"b": "2"}

"""Unit tests for session storage backends and user sessions."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from src.agenda.core.models.session import Toast, ToastBatch, UserSession
from src.agenda.core.storage.session_storage import (
    InMemorySessionStorage,
    RedisSessionStorage,
    _detect_redis_availability,
    _reset_storage,
    get_session_storage,
)


class TestInMemorySessionStorage:
    @pytest.mark.asyncio
    async def test_set_get_delete(self, session_storage: InMemorySessionStorage):
        batch = ToastBatch(toasts=[Toast(kind="success", message="hola")])
        await session_storage.set("toast:k", batch, 60)

        assert await session_storage.exists("toast:k")
        assert await session_storage.get("toast:k", ToastBatch) == batch

        await session_storage.delete("toast:k")
        assert await session_storage.get("toast:k", ToastBatch) is None

    @pytest.mark.asyncio
    async def test_entries_expire(self, session_storage: InMemorySessionStorage):
        await session_storage.set("toast:k", ToastBatch(), 1)
        await asyncio.sleep(1.1)

        assert await session_storage.get("toast:k", ToastBatch) is None

    @pytest.mark.asyncio
    async def test_cleanup_expired(self, session_storage: InMemorySessionStorage):
        await session_storage.set("short", ToastBatch(), 0)
        await session_storage.set("long", ToastBatch(), 60)
        await asyncio.sleep(0.01)

        assert await session_storage.cleanup_expired() == 1
        assert await session_storage.exists("long")

    @pytest.mark.asyncio
    async def test_wrong_model_is_dropped(self, session_storage: InMemorySessionStorage):
        await session_storage.set("k", ToastBatch(), 60)
        assert await session_storage.get("k", UserSession) is None
        assert not await session_storage.exists("k")


class TestRedisSessionStorage:
    @pytest.mark.asyncio
    async def test_round_trips_json(self):
        client = AsyncMock()
        storage = RedisSessionStorage(client)
        batch = ToastBatch(toasts=[Toast(kind="error", message="fallo")])

        await storage.set("toast:k", batch, 30)
        client.setex.assert_awaited_once_with("toast:k", 30, batch.model_dump_json())

        client.get.return_value = batch.model_dump_json().encode("utf-8")
        assert await storage.get("toast:k", ToastBatch) == batch

    @pytest.mark.asyncio
    async def test_failures_mark_unavailable(self):
        client = AsyncMock()
        client.get.side_effect = ConnectionError("down")
        storage = RedisSessionStorage(client)

        with pytest.raises(RuntimeError):
            await storage.get("k", ToastBatch)
        assert not storage.is_available()

    @pytest.mark.asyncio
    async def test_ping(self):
        client = AsyncMock()
        storage = RedisSessionStorage(client)
        assert await storage.ping()

        client.ping.side_effect = ConnectionError("down")
        assert not await storage.ping()


class TestStorageSelection:
    @pytest.mark.asyncio
    async def test_redis_disabled_uses_memory(self):
        assert isinstance(await _detect_redis_availability(), InMemorySessionStorage)

    @pytest.mark.asyncio
    async def test_storage_is_shared(self):
        _reset_storage()
        try:
            assert await get_session_storage() is await get_session_storage()
        finally:
            _reset_storage()


class TestUserSessionService:
    @pytest.mark.asyncio
    async def test_create_and_get(self, user_session_service):
        created = await user_session_service.create_user_session("u1", "a@x.com", "fp")

        fetched = await user_session_service.get_user_session(created.id)

        assert fetched.user_id == "u1"
        assert fetched.provider == "password"
        assert not fetched.is_expired()

    @pytest.mark.asyncio
    async def test_expired_session_is_removed(self, user_session_service, session_storage):
        created = await user_session_service.create_user_session("u1", "a@x.com", "fp")
        created.expires_at = 0
        await session_storage.set(f"user:{created.id}", created, 60)

        assert await user_session_service.get_user_session(created.id) is None
        assert not await session_storage.exists(f"user:{created.id}")

    @pytest.mark.asyncio
    async def test_delete(self, user_session_service):
        created = await user_session_service.create_user_session("u1", "a@x.com", "fp")
        await user_session_service.delete_user_session(created.id)
        assert await user_session_service.get_user_session(created.id) is None

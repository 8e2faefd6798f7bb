"""Unit tests for toasts and their storage between requests."""

import pytest

from src.agenda.core.models.session import Toast
from src.agenda.core.services.notifications import Notifier
from src.agenda.runtime.config.config_data import AppConfig, ConfigData
from src.agenda.runtime.context import with_context


class TestNotifier:
    def test_messages_are_localized(self, notifier: Notifier):
        notifier.success("contacts.created")
        notifier.error("contacts.load_error")

        assert notifier.drain() == [
            Toast(kind="success", message="Contacto creado"),
            Toast(kind="error", message="Error al cargar contactos"),
        ]
        assert notifier.drain() == []

    def test_english_catalog(self):
        with with_context(ConfigData(app=AppConfig(locale="en"))):
            notifier = Notifier()
            notifier.success("contacts.deleted")
            assert notifier.toasts[0].message == "Contact deleted"

    def test_unknown_key_falls_back_to_key(self, notifier: Notifier):
        notifier.error("contacts.unknown")
        assert notifier.toasts[0].message == "contacts.unknown"


class TestToastStore:
    @pytest.mark.asyncio
    async def test_push_then_pop_once(self, toast_store):
        key = toast_store.new_key()
        await toast_store.push(key, [Toast(kind="success", message="uno")])
        await toast_store.push(key, [Toast(kind="error", message="dos")])

        assert [t.message for t in await toast_store.pop(key)] == ["uno", "dos"]
        assert await toast_store.pop(key) == []

    @pytest.mark.asyncio
    async def test_pop_without_key(self, toast_store):
        assert await toast_store.pop(None) == []

    @pytest.mark.asyncio
    async def test_empty_push_stores_nothing(self, toast_store, session_storage):
        await toast_store.push("k", [])
        assert not await session_storage.exists("toast:k")

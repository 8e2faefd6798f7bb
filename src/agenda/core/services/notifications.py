"""One-shot notifications carried across the Post/Redirect/Get cycle."""

import secrets

from src.agenda.core.i18n import t
from src.agenda.core.models.session import Toast, ToastBatch
from src.agenda.core.storage.session_storage import SessionStorage
from src.agenda.runtime.context import get_config

TOAST_COOKIE = "agenda_toasts"


class Notifier:
    """Collects toasts raised while handling one request."""

    def __init__(self) -> None:
        self._toasts: list[Toast] = []

    @property
    def toasts(self) -> list[Toast]:
        return list(self._toasts)

    def success(self, key: str) -> None:
        self._toasts.append(Toast(kind="success", message=t(key)))

    def error(self, key: str) -> None:
        self._toasts.append(Toast(kind="error", message=t(key)))

    def drain(self) -> list[Toast]:
        toasts, self._toasts = self._toasts, []
        return toasts


class ToastStore:
    """Keeps undelivered toasts in session storage, keyed by a browser cookie.

    The key is independent of the user session so that a toast raised while
    signing out still reaches the sign-in page.
    """

    def __init__(self, storage: SessionStorage) -> None:
        self._storage = storage

    @staticmethod
    def new_key() -> str:
        return secrets.token_urlsafe(16)

    async def push(self, key: str, toasts: list[Toast]) -> None:
        if not toasts:
            return
        batch = await self._storage.get(f"toast:{key}", ToastBatch) or ToastBatch()
        batch.toasts.extend(toasts)
        await self._storage.set(
            f"toast:{key}", batch, get_config().security.toast_ttl_seconds
        )

    async def pop(self, key: str | None) -> list[Toast]:
        if not key:
            return []
        batch = await self._storage.get(f"toast:{key}", ToastBatch)
        if batch is None:
            return []
        await self._storage.delete(f"toast:{key}")
        return batch.toasts

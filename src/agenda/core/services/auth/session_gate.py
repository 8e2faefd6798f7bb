"""Keeps unauthenticated visitors away from the contact views."""

from fastapi.responses import RedirectResponse
from loguru import logger

from src.agenda.core.models.session import UserSession
from .auth_service import (
    AuthEvent,
    AuthService,
    AuthStateChange,
    Subscription,
)

AUTH_PATH = "/auth"


class SessionGate:
    """Observes one browser session for the lifetime of a request.

    ``mount`` subscribes to auth-state changes and looks the session up once;
    a failed lookup counts as no session. Whenever the gate ends up without a
    session it asks for a redirect to the auth screen.
    """

    def __init__(
        self, auth_service: AuthService, session_id: str | None, client_fingerprint: str
    ) -> None:
        self._auth = auth_service
        self._session_id = session_id
        self._client_fingerprint = client_fingerprint
        self._subscription: Subscription | None = None
        self._session: UserSession | None = None
        self._redirect_required = False

    @property
    def session(self) -> UserSession | None:
        return self._session

    @property
    def session_id(self) -> str | None:
        return self._session_id

    @property
    def redirect_required(self) -> bool:
        return self._redirect_required

    async def mount(self) -> UserSession | None:
        self._subscription = self._auth.on_auth_state_change(self._on_auth_state_change)
        try:
            session = await self._auth.get_session(self._session_id, self._client_fingerprint)
        except Exception:
            logger.exception("Session lookup failed")
            session = None
        self._set_session(session)
        return session

    def teardown(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def _on_auth_state_change(self, change: AuthStateChange) -> None:
        if change.session_id != self._session_id:
            return
        if change.event is AuthEvent.SIGNED_OUT:
            self._set_session(None)
        else:
            self._set_session(change.session)

    def _set_session(self, session: UserSession | None) -> None:
        self._session = session
        self._redirect_required = session is None

    def redirect(self) -> RedirectResponse:
        return RedirectResponse(AUTH_PATH, status_code=303)

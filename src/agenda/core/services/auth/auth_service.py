"""Email/password authentication with observable session state."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from src.agenda.core.models.session import UserSession
from src.agenda.core.security import hash_password, verify_password
from src.agenda.core.services.session.user_session import UserSessionService
from src.agenda.entities.profile import Profile, ProfileRepository
from src.agenda.entities.user import User, UserRepository
from src.agenda.runtime.context import get_config


class AuthEvent(str, Enum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"


@dataclass(frozen=True)
class AuthStateChange:
    event: AuthEvent
    session_id: str
    session: UserSession | None = None


AuthListener = Callable[[AuthStateChange], None]


class AuthError(Exception):
    """Authentication failure carrying the message key shown to the user."""

    message_key = "auth.invalid_credentials"


class InvalidCredentialsError(AuthError):
    message_key = "auth.invalid_credentials"


class EmailTakenError(AuthError):
    message_key = "auth.email_taken"


class WeakPasswordError(AuthError):
    message_key = "auth.weak_password"


class Subscription:
    """Handle returned by ``on_auth_state_change``."""

    def __init__(self, listeners: list[AuthListener], callback: AuthListener) -> None:
        self._listeners = listeners
        self._callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        if self._active:
            self._listeners.remove(self._callback)
            self._active = False


class AuthService:
    """Sign-up, sign-in, session lookup and sign-out.

    Listeners registered with ``on_auth_state_change`` are told about every
    sign-in and sign-out; they filter by session id themselves.
    """

    def __init__(self, user_session_service: UserSessionService) -> None:
        self._sessions = user_session_service
        self._listeners: list[AuthListener] = []

    def on_auth_state_change(self, callback: AuthListener) -> Subscription:
        self._listeners.append(callback)
        return Subscription(self._listeners, callback)

    def _emit(self, change: AuthStateChange) -> None:
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception:
                logger.exception("Auth state listener failed for {}", change.event.value)

    def register_user(
        self, db: Session, email: str, password: str, full_name: str | None = None
    ) -> User:
        """Create a user and its profile. The caller owns the transaction."""
        email = email.strip().lower()
        if len(password) < get_config().security.min_password_length:
            raise WeakPasswordError(email)

        users = UserRepository(db)
        if users.get_by_email(email) is not None:
            raise EmailTakenError(email)

        try:
            user = users.create(User(email=email, password_hash=hash_password(password)))
            ProfileRepository(db).create(
                Profile(user_id=user.id, full_name=(full_name or "").strip() or None)
            )
        except IntegrityError as e:
            raise EmailTakenError(email) from e

        logger.info("Registered user {}", user.id)
        return user

    async def sign_up(
        self,
        db: Session,
        email: str,
        password: str,
        full_name: str | None,
        client_fingerprint: str,
    ) -> UserSession:
        user = self.register_user(db, email, password, full_name)
        db.commit()
        return await self._start_session(user, client_fingerprint)

    async def sign_in(
        self, db: Session, email: str, password: str, client_fingerprint: str
    ) -> UserSession:
        user = UserRepository(db).get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Rejected sign-in attempt")
            raise InvalidCredentialsError(email)
        return await self._start_session(user, client_fingerprint)

    async def _start_session(self, user: User, client_fingerprint: str) -> UserSession:
        user_session = await self._sessions.create_user_session(
            user_id=user.id, email=user.email, client_fingerprint=client_fingerprint
        )
        logger.info("User {} signed in", user.id)
        self._emit(AuthStateChange(AuthEvent.SIGNED_IN, user_session.id, user_session))
        return user_session

    async def get_session(
        self, session_id: str | None, client_fingerprint: str
    ) -> UserSession | None:
        if not session_id:
            return None
        return await self._sessions.validate_user_session(session_id, client_fingerprint)

    async def sign_out(self, session_id: str | None) -> None:
        if not session_id:
            return
        await self._sessions.delete_user_session(session_id)
        logger.info("Session signed out")
        self._emit(AuthStateChange(AuthEvent.SIGNED_OUT, session_id))

import secrets

from src.agenda.core.models.session import UserSession
from src.agenda.core.storage.session_storage import SessionStorage
from src.agenda.runtime.context import get_config


class UserSessionService:
    """Service for managing user sessions."""

    def __init__(self, session_storage: SessionStorage) -> None:
        self._storage = session_storage

    async def create_user_session(
        self,
        user_id: str,
        email: str,
        client_fingerprint: str,
        provider: str = "password",
    ) -> UserSession:
        """Create and store a new session.

        Args:
            user_id: Internal user ID
            email: Email the user signed in with
            client_fingerprint: Hashed client fingerprint
            provider: Authentication method

        Returns:
            The stored session
        """
        main_config = get_config()

        user_session = UserSession.create(
            session_id=secrets.token_urlsafe(32),
            user_id=user_id,
            email=email,
            provider=provider,
            client_fingerprint=client_fingerprint,
            session_max_age=main_config.app.session_max_age,
        )

        await self._storage.set(
            f"user:{user_session.id}", user_session, main_config.app.session_max_age
        )
        return user_session

    async def get_user_session(self, session_id: str) -> UserSession | None:
        """Get user session by ID, refreshing its last-access time.

        Returns:
            User session or None if not found/expired
        """
        user_session = await self._storage.get(f"user:{session_id}", UserSession)

        if not user_session:
            return None

        if user_session.is_expired():
            await self._storage.delete(f"user:{session_id}")
            return None

        user_session.update_access()
        await self._storage.set(
            f"user:{user_session.id}", user_session, get_config().app.session_max_age
        )

        return user_session

    async def validate_user_session(
        self,
        session_id: str,
        client_fingerprint: str,
    ) -> UserSession | None:
        """Get a session and check it belongs to the same client.

        A fingerprint mismatch deletes the session.
        """
        user_session = await self.get_user_session(session_id)
        if not user_session:
            return None

        if (
            get_config().security.enable_client_fingerprinting
            and client_fingerprint != user_session.client_fingerprint
        ):
            await self.delete_user_session(session_id)
            return None

        return user_session

    async def delete_user_session(self, session_id: str) -> None:
        await self._storage.delete(f"user:{session_id}")

    async def purge_expired(self) -> None:
        """Cleanup expired sessions from storage."""
        await self._storage.cleanup_expired()

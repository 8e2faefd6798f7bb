"""Session and notification models kept in session storage."""

import time
from typing import Literal

from pydantic import BaseModel, Field


class UserSession(BaseModel):
    """Persistent user session after successful authentication."""

    id: str = Field(description="Session identifier")
    user_id: str = Field(description="Internal user ID")
    email: str = Field(description="Email the user signed in with")
    provider: str = Field(default="password", description="Authentication method")
    client_fingerprint: str = Field(description="Client context fingerprint")
    created_at: int = Field(description="Creation timestamp")
    last_accessed_at: int = Field(description="Last access timestamp")
    expires_at: int = Field(description="Session expiration timestamp")

    @classmethod
    def create(
        cls,
        session_id: str,
        user_id: str,
        email: str,
        client_fingerprint: str,
        provider: str = "password",
        session_max_age: int = 3600,
    ) -> "UserSession":
        """Create a new user session with timestamps."""
        now = int(time.time())
        return cls(
            id=session_id,
            user_id=user_id,
            email=email,
            provider=provider,
            client_fingerprint=client_fingerprint,
            created_at=now,
            last_accessed_at=now,
            expires_at=now + session_max_age,
        )

    def is_expired(self) -> bool:
        """Check if session is expired."""
        return time.time() > self.expires_at

    def update_access(self) -> None:
        """Update last accessed time."""
        self.last_accessed_at = int(time.time())


class Toast(BaseModel):
    """A one-shot notification shown on the next rendered page."""

    kind: Literal["success", "error"]
    message: str


class ToastBatch(BaseModel):
    """Notifications waiting to be displayed for one browser."""

    toasts: list[Toast] = Field(default_factory=list)

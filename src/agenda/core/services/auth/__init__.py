from .auth_service import (
    AuthError,
    AuthEvent,
    AuthService,
    AuthStateChange,
    EmailTakenError,
    InvalidCredentialsError,
    Subscription,
    WeakPasswordError,
)
from .session_gate import AUTH_PATH, SessionGate

__all__ = [
    "AUTH_PATH",
    "AuthError",
    "AuthEvent",
    "AuthService",
    "AuthStateChange",
    "EmailTakenError",
    "InvalidCredentialsError",
    "SessionGate",
    "Subscription",
    "WeakPasswordError",
]

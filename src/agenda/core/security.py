"""Security utilities for password authentication and browser sessions."""

import hashlib
import hmac
import time

import bcrypt
from fastapi import Request

from src.agenda.runtime.context import get_config


def hash_password(password: str) -> str:
    """Hash a password with bcrypt using the configured cost factor."""
    rounds = get_config().security.bcrypt_rounds
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash in storage
        return False


def _csrf_secret() -> bytes:
    secret = get_config().app.csrf_signing_secret
    return secret.encode() if secret else b"dev-secret"


def generate_csrf_token(session_id: str, timestamp: int | None = None) -> str:
    """Generate CSRF token bound to session and time.

    Args:
        session_id: Session identifier to bind token to
        timestamp: Optional timestamp (defaults to current hour)

    Returns:
        HMAC-based CSRF token prefixed with its timestamp
    """
    if timestamp is None:
        timestamp = int(time.time() // 3600)

    message = f"{session_id}:{timestamp}"
    csrf_token = hmac.new(_csrf_secret(), message.encode(), hashlib.sha256).hexdigest()
    return f"{timestamp}:{csrf_token}"


def validate_csrf_token(
    session_id: str, csrf_token: str | None, max_age_hours: int | None = None
) -> bool:
    """Validate CSRF token for session.

    Args:
        session_id: Session identifier
        csrf_token: CSRF token to validate
        max_age_hours: Maximum age of token in hours (defaults to config)

    Returns:
        True if valid, False otherwise
    """
    if not csrf_token:
        return False

    if max_age_hours is None:
        max_age_hours = get_config().security.csrf_token_max_age_hours

    parts = csrf_token.split(":", 1)
    if len(parts) != 2:
        return False

    token_timestamp, token_value = parts
    try:
        timestamp = int(token_timestamp)
    except ValueError:
        return False

    current_hour = int(time.time() // 3600)
    if current_hour - timestamp > max_age_hours:
        return False

    expected_value = generate_csrf_token(session_id, timestamp).split(":", 1)[1]
    return hmac.compare_digest(expected_value, token_value)


def hash_client_fingerprint(
    user_agent: str | None, client_ip: str | None = None
) -> str:
    """Create a stable fingerprint for client context binding.

    Args:
        user_agent: Client User-Agent header
        client_ip: Optional client IP (be careful with proxies)

    Returns:
        SHA256 hash of client characteristics
    """
    components = []

    if user_agent:
        components.append(user_agent.strip())

    if client_ip:
        components.append(client_ip.strip())

    if not components:
        components.append("unknown-client")

    fingerprint_data = "|".join(components)
    return hashlib.sha256(fingerprint_data.encode("utf-8")).hexdigest()


def extract_client_fingerprint(request: Request) -> str:
    """Extract and hash client fingerprint from FastAPI request."""
    user_agent = request.headers.get("user-agent")

    client_ip = None
    for header in ("x-forwarded-for", "x-real-ip", "cf-connecting-ip"):
        value = request.headers.get(header)
        if value:
            client_ip = value.split(",")[0].strip()
            break

    if not client_ip and request.client:
        client_ip = request.client.host

    return hash_client_fingerprint(user_agent, client_ip)

"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator
from functools import lru_cache
from typing import Any
from urllib.parse import urlparse

from fastapi import Depends, HTTPException, Request
from fastapi.responses import Response
from sqlmodel import Session

from src.agenda.api.http.app_data import ApplicationDependencies
from src.agenda.core.security import extract_client_fingerprint, validate_csrf_token
from src.agenda.core.services.auth import AuthService, SessionGate
from src.agenda.core.services.notifications import TOAST_COOKIE, Notifier, ToastStore
from src.agenda.core.services.session import UserSessionService
from src.agenda.runtime.context import get_config

SESSION_COOKIE = "user_session_id"


def get_db_session(request: Request) -> Iterator[Session]:
    """Get a database session for the duration of the request."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    db = app_deps.database_service.get_session()
    try:
        yield db
    finally:
        db.close()


def get_user_session_service(request: Request) -> UserSessionService:
    """Get the User Session service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.user_session_service


def get_auth_service(request: Request) -> AuthService:
    """Get the Auth service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.auth_service


def get_toast_store(request: Request) -> ToastStore:
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.toast_store


def get_notifier() -> Notifier:
    """One notifier per request; FastAPI caches it across sub-dependencies."""
    return Notifier()


async def require_session_gate(
    request: Request, auth_service: AuthService = Depends(get_auth_service)
) -> AsyncIterator[SessionGate]:
    """Mount a session gate for the request and tear it down afterwards."""
    gate = SessionGate(
        auth_service,
        request.cookies.get(SESSION_COOKIE),
        extract_client_fingerprint(request),
    )
    await gate.mount()
    try:
        yield gate
    finally:
        gate.teardown()


def get_secure_cookie_settings() -> dict[str, Any]:
    config = get_config()
    return {
        "httponly": True,
        "secure": config.app.environment == "production",
        "samesite": config.security.cookie_samesite,
        "path": "/",
    }


async def attach_toasts(
    request: Request, response: Response, notifier: Notifier, toast_store: ToastStore
) -> Response:
    """Park the request's toasts for the next page render."""
    toasts = notifier.drain()
    if not toasts:
        return response
    key = request.cookies.get(TOAST_COOKIE) or toast_store.new_key()
    await toast_store.push(key, toasts)
    response.set_cookie(
        key=TOAST_COOKIE,
        value=key,
        max_age=get_config().security.toast_ttl_seconds,
        **get_secure_cookie_settings(),
    )
    return response


@lru_cache(maxsize=50)
def normalize_origin(origin: str) -> tuple[str, str, int]:
    """Normalize an origin string into a tuple for comparison."""
    parsed = urlparse(origin)
    return (
        parsed.scheme.lower(),
        (parsed.hostname or "").lower(),
        parsed.port or (443 if parsed.scheme == "https" else 80),
    )


def get_allowed_origins() -> set[tuple[str, str, int]]:
    """Allowed origins from config, plus the app's own base URL."""
    cfg = get_config()
    allowed = {normalize_origin(a) for a in cfg.app.cors.origins}
    allowed.add(normalize_origin(cfg.app.base_url))
    return allowed


def is_origin_allowed(origin: str) -> bool:
    return normalize_origin(origin) in get_allowed_origins()


def _enforcement_skipped(request: Request) -> bool:
    if request.method not in {"POST", "PUT", "PATCH", "DELETE"}:
        return True
    return get_config().app.environment in ("development", "test")


def enforce_origin(request: Request) -> None:
    """Enforce Origin/Referer allowlist for state-changing requests."""
    if _enforcement_skipped(request):
        return

    origin = request.headers.get("origin")
    referer = request.headers.get("referer")

    if origin:
        if origin == "null":
            raise HTTPException(status_code=403, detail="Origin 'null' not allowed")
        if not is_origin_allowed(origin):
            raise HTTPException(status_code=403, detail="Origin not allowed")
        return

    if not referer:
        raise HTTPException(status_code=403, detail="Missing or invalid Origin")
    if not is_origin_allowed(referer):
        raise HTTPException(status_code=403, detail="Referer origin not allowed")


async def require_csrf(request: Request) -> None:
    """Require a CSRF token, from the header or the posted form, bound to the session."""
    if _enforcement_skipped(request):
        return

    session_id = request.cookies.get(SESSION_COOKIE)
    if not session_id:
        raise HTTPException(status_code=401, detail="No session found")

    csrf_token = request.headers.get("x-csrf-token")
    if not csrf_token:
        form = await request.form()
        value = form.get("csrf_token")
        csrf_token = value if isinstance(value, str) else None
    if not csrf_token:
        raise HTTPException(status_code=403, detail="Missing CSRF token")

    if not validate_csrf_token(session_id, csrf_token):
        raise HTTPException(status_code=403, detail="Invalid CSRF token")

"""Email/password sign-in, sign-up and sign-out."""

from typing import Literal

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse, Response
from loguru import logger
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from src.agenda.api.http.deps import (
    SESSION_COOKIE,
    attach_toasts,
    enforce_origin,
    get_auth_service,
    get_db_session,
    get_notifier,
    get_secure_cookie_settings,
    get_toast_store,
    require_csrf,
    require_session_gate,
)
from src.agenda.api.http.rendering import render_page
from src.agenda.core.models.session import UserSession
from src.agenda.core.security import extract_client_fingerprint, generate_csrf_token
from src.agenda.core.services.auth import AuthError, AuthService, SessionGate
from src.agenda.core.services.contacts import ContactListController
from src.agenda.core.services.notifications import TOAST_COOKIE, Notifier, ToastStore
from src.agenda.runtime.context import get_config

router = APIRouter(prefix="/auth", tags=["auth"])


class AuthState(BaseModel):
    """Current authentication state for scripted clients."""

    authenticated: bool
    email: str | None = None
    csrf_token: str | None = None


def _signed_in_response(user_session: UserSession) -> RedirectResponse:
    response = RedirectResponse("/", status_code=303)
    response.set_cookie(
        key=SESSION_COOKIE,
        value=user_session.id,
        max_age=get_config().app.session_max_age,
        **get_secure_cookie_settings(),
    )
    return response


@router.get("", response_model=None)
async def auth_page(
    request: Request,
    mode: Literal["sign-in", "sign-up"] = "sign-in",
    gate: SessionGate = Depends(require_session_gate),
    toast_store: ToastStore = Depends(get_toast_store),
) -> Response:
    """Sign-in / sign-up screen; signed-in visitors go straight to their contacts."""
    if gate.session is not None:
        return RedirectResponse("/", status_code=303)

    toasts = await toast_store.pop(request.cookies.get(TOAST_COOKIE))
    response = render_page("auth.html", {"mode": mode, "toasts": toasts})
    if toasts:
        response.delete_cookie(TOAST_COOKIE, path="/")
    return response


@router.post("/sign-in", response_model=None, dependencies=[Depends(enforce_origin)])
async def sign_in(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    db: Session = Depends(get_db_session),
    auth_service: AuthService = Depends(get_auth_service),
    notifier: Notifier = Depends(get_notifier),
    toast_store: ToastStore = Depends(get_toast_store),
) -> Response:
    try:
        user_session = await auth_service.sign_in(
            db, email, password, extract_client_fingerprint(request)
        )
    except AuthError as e:
        notifier.error(e.message_key)
        response = RedirectResponse("/auth", status_code=303)
        return await attach_toasts(request, response, notifier, toast_store)

    notifier.success("auth.signed_in")
    return await attach_toasts(
        request, _signed_in_response(user_session), notifier, toast_store
    )


@router.post("/sign-up", response_model=None, dependencies=[Depends(enforce_origin)])
async def sign_up(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    full_name: str = Form(""),
    db: Session = Depends(get_db_session),
    auth_service: AuthService = Depends(get_auth_service),
    notifier: Notifier = Depends(get_notifier),
    toast_store: ToastStore = Depends(get_toast_store),
) -> Response:
    try:
        user_session = await auth_service.sign_up(
            db, email, password, full_name, extract_client_fingerprint(request)
        )
    except (AuthError, SQLAlchemyError) as e:
        db.rollback()
        if isinstance(e, AuthError):
            notifier.error(e.message_key)
        else:
            logger.exception("Sign-up failed")
            notifier.error("auth.sign_up_error")
        response = RedirectResponse("/auth?mode=sign-up", status_code=303)
        return await attach_toasts(request, response, notifier, toast_store)

    return await attach_toasts(
        request, _signed_in_response(user_session), notifier, toast_store
    )


@router.post(
    "/sign-out",
    response_model=None,
    dependencies=[Depends(enforce_origin), Depends(require_csrf)],
)
async def sign_out(
    request: Request,
    gate: SessionGate = Depends(require_session_gate),
    db: Session = Depends(get_db_session),
    auth_service: AuthService = Depends(get_auth_service),
    notifier: Notifier = Depends(get_notifier),
    toast_store: ToastStore = Depends(get_toast_store),
) -> Response:
    """Sign out; the gate sees the SIGNED_OUT event and sends the browser to /auth."""
    if gate.session is not None:
        controller = ContactListController(db, gate.session, auth_service, notifier)
        await controller.sign_out()

    response = gate.redirect() if gate.redirect_required else RedirectResponse("/", status_code=303)
    response.delete_cookie(SESSION_COOKIE, path="/")
    return await attach_toasts(request, response, notifier, toast_store)


@router.get("/session")
async def get_auth_state(gate: SessionGate = Depends(require_session_gate)) -> AuthState:
    """Current authentication state with a CSRF token for the session."""
    if gate.session is None:
        return AuthState(authenticated=False)
    return AuthState(
        authenticated=True,
        email=gate.session.email,
        csrf_token=generate_csrf_token(gate.session.id),
    )

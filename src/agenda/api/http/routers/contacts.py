"""Contact list page and its form posts."""

from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import RedirectResponse, Response
from sqlmodel import Session

from src.agenda.api.http.deps import (
    attach_toasts,
    enforce_origin,
    get_auth_service,
    get_db_session,
    get_notifier,
    get_toast_store,
    require_csrf,
    require_session_gate,
)
from src.agenda.api.http.rendering import render_page
from src.agenda.core.security import generate_csrf_token
from src.agenda.core.services.auth import AuthService, SessionGate
from src.agenda.core.services.contacts import ContactListController
from src.agenda.core.services.notifications import TOAST_COOKIE, Notifier, ToastStore

router = APIRouter(tags=["contacts"])


def _list_url(search_term: str | None) -> str:
    return f"/?{urlencode({'q': search_term})}" if search_term else "/"


@router.get("/", response_model=None)
async def contact_list(
    request: Request,
    q: str | None = None,
    dialog: str | None = None,
    edit: str | None = None,
    gate: SessionGate = Depends(require_session_gate),
    db: Session = Depends(get_db_session),
    auth_service: AuthService = Depends(get_auth_service),
    notifier: Notifier = Depends(get_notifier),
    toast_store: ToastStore = Depends(get_toast_store),
) -> Response:
    """Render the signed-in user's contacts, filtered by ``q``."""
    if gate.redirect_required or gate.session is None:
        return gate.redirect()

    controller = ContactListController(db, gate.session, auth_service, notifier)
    controller.load()
    controller.set_search_term(q)

    if edit:
        editing = next((c for c in controller.state.contacts if c.id == edit), None)
        if editing is not None:
            controller.open_edit_dialog(editing)
    elif dialog == "new":
        controller.open_create_dialog()

    toasts = await toast_store.pop(request.cookies.get(TOAST_COOKIE))
    toasts.extend(notifier.drain())
    response = render_page(
        "index.html",
        {
            "controller": controller,
            "state": controller.state,
            "dialog": controller.dialog,
            "toasts": toasts,
            "csrf_token": generate_csrf_token(gate.session.id),
        },
    )
    if toasts:
        response.delete_cookie(TOAST_COOKIE, path="/")
    return response


@router.post(
    "/contacts",
    response_model=None,
    dependencies=[Depends(enforce_origin), Depends(require_csrf)],
)
async def save_contact(
    request: Request,
    q: str = Form(""),
    gate: SessionGate = Depends(require_session_gate),
    db: Session = Depends(get_db_session),
    auth_service: AuthService = Depends(get_auth_service),
    notifier: Notifier = Depends(get_notifier),
    toast_store: ToastStore = Depends(get_toast_store),
) -> Response:
    """Save the dialog form: update when it carries an id, insert otherwise."""
    if gate.redirect_required or gate.session is None:
        return gate.redirect()

    controller = ContactListController(db, gate.session, auth_service, notifier)
    form = await request.form()
    editing_id = form.get("id")
    controller.dialog.from_form(editing_id if isinstance(editing_id, str) else None, form)
    controller.dialog.submit()

    response = RedirectResponse(_list_url(q), status_code=303)
    return await attach_toasts(request, response, notifier, toast_store)


@router.post(
    "/contacts/{contact_id}/delete",
    response_model=None,
    dependencies=[Depends(enforce_origin), Depends(require_csrf)],
)
async def delete_contact(
    request: Request,
    contact_id: str,
    q: str = Form(""),
    gate: SessionGate = Depends(require_session_gate),
    db: Session = Depends(get_db_session),
    auth_service: AuthService = Depends(get_auth_service),
    notifier: Notifier = Depends(get_notifier),
    toast_store: ToastStore = Depends(get_toast_store),
) -> Response:
    if gate.redirect_required or gate.session is None:
        return gate.redirect()

    controller = ContactListController(db, gate.session, auth_service, notifier)
    controller.delete(contact_id)

    response = RedirectResponse(_list_url(q), status_code=303)
    return await attach_toasts(request, response, notifier, toast_store)

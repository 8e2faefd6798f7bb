"""Request-scoped controller behind the contact list page."""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from loguru import logger
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from src.agenda.core.models.session import UserSession
from src.agenda.core.services.auth.auth_service import AuthService
from src.agenda.core.services.notifications import Notifier
from src.agenda.entities.contact import (
    Contact,
    ContactDraft,
    ContactNotFoundError,
    ContactRepository,
)
from src.agenda.entities.profile import ProfileRepository
from src.agenda.views.contact_card import ContactCard
from src.agenda.views.contact_form import ContactFormDialog

from .search import contact_matches, filter_contacts

# pydantic.ValidationError is a ValueError
WRITE_ERRORS = (SQLAlchemyError, ValueError, LookupError)


class ViewStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"


@dataclass
class DialogState:
    open: bool = False
    editing: Contact | None = None


@dataclass
class ContactListState:
    user_id: str
    user_email: str
    display_name: str
    contacts: list[Contact] = field(default_factory=list)
    search_term: str = ""
    status: ViewStatus = ViewStatus.LOADING
    dialog: DialogState = field(default_factory=DialogState)


class ContactListController:
    """Owns the list page state for one signed-in user.

    Children only read ``state``; every mutation goes through the operations
    below, which commit or roll back the database session themselves and turn
    failures into toasts.
    """

    def __init__(
        self,
        db: Session,
        user_session: UserSession,
        auth_service: AuthService,
        notifier: Notifier,
    ) -> None:
        self._db = db
        self._user_session = user_session
        self._auth = auth_service
        self._notifier = notifier
        self._contacts = ContactRepository(db, user_session.user_id)
        self._profiles = ProfileRepository(db)
        self._state = ContactListState(
            user_id=user_session.user_id,
            user_email=user_session.email,
            display_name=user_session.email,
        )
        self.dialog = ContactFormDialog(
            on_save=self.save, on_open_change=self._on_dialog_open_change
        )

    @property
    def state(self) -> ContactListState:
        return self._state

    def load(self) -> None:
        self.load_profile()
        self.load_contacts()

    def load_contacts(self) -> None:
        self._state.status = ViewStatus.LOADING
        try:
            contacts = self._contacts.list_for_owner()
        except (SQLAlchemyError, ValidationError):
            logger.exception("Failed to load contacts for {}", self._state.user_id)
            self._notifier.error("contacts.load_error")
        else:
            self._state.contacts = contacts
        self._state.status = ViewStatus.READY

    def load_profile(self) -> None:
        try:
            full_name = self._profiles.get_full_name(self._state.user_id)
        except SQLAlchemyError as e:
            logger.debug("Profile lookup failed for {}: {}", self._state.user_id, e)
            full_name = None
        self._state.display_name = full_name or self._state.user_email

    def set_search_term(self, term: str | None) -> None:
        self._state.search_term = term or ""

    @property
    def filtered_contacts(self) -> list[Contact]:
        return filter_contacts(self._state.contacts, self._state.search_term)

    @property
    def cards(self) -> list[ContactCard]:
        return [ContactCard.from_contact(contact) for contact in self.filtered_contacts]

    @property
    def card_rows(self) -> list[tuple[ContactCard, bool]]:
        """Every loaded card paired with whether it matches the search term.

        The page renders all of them so the filter can be recomputed in the
        browser as the user types.
        """
        term = self._state.search_term
        return [
            (ContactCard.from_contact(contact), contact_matches(contact, term))
            for contact in self._state.contacts
        ]

    def save(self, draft: ContactDraft) -> bool:
        if draft.id:
            saved = self._write(
                lambda: self._contacts.update(draft),
                success_key="contacts.updated",
                error_key="contacts.update_error",
            )
        else:
            saved = self._write(
                lambda: self._contacts.create(draft),
                success_key="contacts.created",
                error_key="contacts.create_error",
            )
        self._state.dialog = DialogState()
        return saved

    def delete(self, contact_id: str) -> bool:
        def _delete() -> None:
            if not self._contacts.delete(contact_id):
                raise ContactNotFoundError(contact_id)

        return self._write(
            _delete, success_key="contacts.deleted", error_key="contacts.delete_error"
        )

    def _write(self, operation: Callable[[], object], success_key: str, error_key: str) -> bool:
        try:
            operation()
            self._db.commit()
        except WRITE_ERRORS as e:
            self._db.rollback()
            logger.error("Contact write failed for {}: {}", self._state.user_id, e)
            self._notifier.error(error_key)
            return False
        self._notifier.success(success_key)
        self.load_contacts()
        return True

    async def sign_out(self) -> None:
        await self._auth.sign_out(self._user_session.id)
        self._notifier.success("auth.signed_out")

    def open_create_dialog(self) -> None:
        self._state.dialog = DialogState(open=True)
        self.dialog.open()

    def open_edit_dialog(self, contact: Contact) -> None:
        self._state.dialog = DialogState(open=True, editing=contact)
        self.dialog.open(contact)

    def close_dialog(self) -> None:
        self.dialog.close()

    def _on_dialog_open_change(self, is_open: bool) -> None:
        self._state.dialog.open = is_open

"""Owner-scoped data access for contacts."""

from loguru import logger
from sqlmodel import Session, col, select

from .entity import Contact, ContactDraft
from .table import ContactTable


class ContactNotFoundError(LookupError):
    """No contact with that id is visible to the requesting owner."""


class ContactRepository:
    """Data-access layer for one owner's contacts.

    Every statement is filtered by the owner the repository was created for,
    so rows belonging to other users are neither visible nor mutable.
    """

    def __init__(self, session: Session, owner_id: str) -> None:
        self._session = session
        self._owner_id = owner_id

    @property
    def owner_id(self) -> str:
        return self._owner_id

    def _owned_row(self, contact_id: str) -> ContactTable | None:
        statement = select(ContactTable).where(
            (ContactTable.id == contact_id) & (ContactTable.user_id == self._owner_id)
        )
        return self._session.exec(statement).first()

    def list_for_owner(self) -> list[Contact]:
        """All contacts of the owner, newest first."""
        statement = (
            select(ContactTable)
            .where(ContactTable.user_id == self._owner_id)
            .order_by(col(ContactTable.created_at).desc())
        )
        rows = self._session.exec(statement).all()
        return [Contact.model_validate(row, from_attributes=True) for row in rows]

    def get(self, contact_id: str) -> Contact | None:
        row = self._owned_row(contact_id)
        if row is None:
            return None
        return Contact.model_validate(row, from_attributes=True)

    def create(self, draft: ContactDraft) -> Contact:
        """Insert a new contact owned by the repository's owner.

        ``city`` is written as NULL: new rows never pick up the store default.
        """
        contact = Contact(user_id=self._owner_id, city=None, **draft.changes())
        row = ContactTable.model_validate(contact.model_dump())
        self._session.add(row)
        self._session.flush()
        logger.debug("Inserted contact {} for owner {}", row.id, self._owner_id)
        return Contact.model_validate(row, from_attributes=True)

    def update(self, draft: ContactDraft) -> Contact:
        """Overwrite the mutable fields of an owned contact.

        Raises:
            ContactNotFoundError: if no owned contact has ``draft.id``.
        """
        if draft.id is None:
            raise ValueError("Cannot update a contact without an id")

        row = self._owned_row(draft.id)
        if row is None:
            raise ContactNotFoundError(draft.id)

        changes = draft.changes()
        # Validate through the entity so an empty name never reaches the table
        Contact.model_validate({**row.model_dump(), **changes})
        for field, value in changes.items():
            setattr(row, field, value)
        self._session.add(row)
        self._session.flush()
        return Contact.model_validate(row, from_attributes=True)

    def delete(self, contact_id: str) -> bool:
        """Delete an owned contact; returns False when nothing matched."""
        row = self._owned_row(contact_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True

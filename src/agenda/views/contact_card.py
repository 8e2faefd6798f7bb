"""Display model for a single contact card."""

from dataclasses import dataclass
from typing import Literal

from src.agenda.entities.contact import Contact

DetailKind = Literal["email", "phone", "address", "city"]

_DETAIL_ICONS: dict[DetailKind, str] = {
    "email": "✉",
    "phone": "☎",
    "address": "⌂",
    "city": "⌂",
}


@dataclass(frozen=True)
class CardDetail:
    kind: DetailKind
    value: str

    @property
    def icon(self) -> str:
        return _DETAIL_ICONS[self.kind]


@dataclass(frozen=True)
class ContactCard:
    """Pure display of one contact plus its edit and delete actions.

    Edit hands the whole record upward, delete only the id.
    """

    contact: Contact

    @classmethod
    def from_contact(cls, contact: Contact) -> "ContactCard":
        return cls(contact=contact)

    @property
    def title(self) -> str:
        return self.contact.name

    @property
    def details(self) -> list[CardDetail]:
        details = []
        for kind in ("email", "phone", "address", "city"):
            value = getattr(self.contact, kind)
            if value:
                details.append(CardDetail(kind=kind, value=value))
        return details

    @property
    def notes(self) -> str | None:
        return self.contact.notes or None

    @property
    def edit_href(self) -> str:
        return f"/?edit={self.contact.id}"

    @property
    def delete_action(self) -> str:
        return f"/contacts/{self.contact.id}/delete"

    @property
    def edit_payload(self) -> Contact:
        return self.contact

    @property
    def delete_payload(self) -> str:
        return self.contact.id

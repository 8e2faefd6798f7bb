"""Contact domain entities."""

from typing import Any

from pydantic import BaseModel, Field

from src.agenda.entities._base import Entity

# Fields a saved edit may change; id, owner and creation time never move.
MUTABLE_FIELDS = ("name", "email", "phone", "address", "notes")


class Contact(Entity):
    """A personal contact owned by exactly one user.

    Optional fields are ``None`` when not provided, never an empty string.
    """

    user_id: str = Field(description="Owner of the contact")
    name: str = Field(min_length=1, description="Contact's name")
    email: str | None = Field(default=None, description="Email address")
    phone: str | None = Field(default=None, description="Phone number")
    address: str | None = Field(default=None, description="Postal address")
    city: str | None = Field(default=None, description="City")
    notes: str | None = Field(default=None, description="Free-form notes")

    def __eq__(self, other: Any) -> bool:
        """Compare contacts by identity and business attributes."""
        if not isinstance(other, Contact):
            return False

        return (
            self.id == other.id
            and self.user_id == other.user_id
            and self.name == other.name
            and self.email == other.email
            and self.phone == other.phone
            and self.address == other.address
            and self.city == other.city
            and self.notes == other.notes
        )

    def __hash__(self) -> int:
        return hash((self.id, self.user_id, self.name))


class ContactDraft(BaseModel):
    """Record emitted by the contact form.

    ``id`` is only present when an existing contact is being edited.
    """

    id: str | None = None
    name: str
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    notes: str | None = None

    @property
    def is_new(self) -> bool:
        return self.id is None

    def changes(self) -> dict[str, str | None]:
        """Values for the mutable columns, absent fields included as None."""
        return {field: getattr(self, field) for field in MUTABLE_FIELDS}


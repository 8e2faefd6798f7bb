"""Create/edit dialog for a contact."""

from collections.abc import Callable, Mapping

from src.agenda.entities.contact import Contact, ContactDraft

# City is shown on cards but is not editable here.
FORM_FIELDS = ("name", "email", "phone", "address", "notes")


class ContactFormDialog:
    """Modal form bound to five text fields.

    Opening for edit seeds the fields from the record, with absent optional
    values shown as empty strings; opening for create clears them. Submitting
    turns empty optional fields back into ``None``, hands the record to
    ``on_save`` and asks to be closed.
    """

    def __init__(
        self,
        on_save: Callable[[ContactDraft], None],
        on_open_change: Callable[[bool], None],
    ) -> None:
        self._on_save = on_save
        self._on_open_change = on_open_change
        self._editing_id: str | None = None
        self.is_open = False
        self.name = ""
        self.email = ""
        self.phone = ""
        self.address = ""
        self.notes = ""

    @property
    def is_editing(self) -> bool:
        return self._editing_id is not None

    @property
    def editing_id(self) -> str | None:
        return self._editing_id

    @property
    def title_key(self) -> str:
        return "dialog.edit_title" if self.is_editing else "dialog.new_title"

    @property
    def description_key(self) -> str:
        return "dialog.edit_description" if self.is_editing else "dialog.new_description"

    @property
    def submit_key(self) -> str:
        return "dialog.update" if self.is_editing else "dialog.save"

    def values(self) -> dict[str, str]:
        return {field: getattr(self, field) for field in FORM_FIELDS}

    def open(self, editing: Contact | None = None) -> None:
        if editing is not None:
            self._editing_id = editing.id
            self.name = editing.name
            self.email = editing.email or ""
            self.phone = editing.phone or ""
            self.address = editing.address or ""
            self.notes = editing.notes or ""
        else:
            self._editing_id = None
            for field in FORM_FIELDS:
                setattr(self, field, "")
        self.is_open = True
        self._on_open_change(True)

    def from_form(self, editing_id: str | None, form: Mapping[str, str]) -> None:
        """Rebuild an open dialog from posted form values."""
        self._editing_id = editing_id or None
        for field in FORM_FIELDS:
            setattr(self, field, form.get(field) or "")
        self.is_open = True

    def submit(self) -> ContactDraft:
        draft = ContactDraft(
            **({"id": self._editing_id} if self._editing_id else {}),
            name=self.name,
            email=self.email or None,
            phone=self.phone or None,
            address=self.address or None,
            notes=self.notes or None,
        )
        self._on_save(draft)
        self.close()
        return draft

    def close(self) -> None:
        self.is_open = False
        self._on_open_change(False)

"""Unit tests for the contact card display model."""

from src.agenda.entities import Contact
from src.agenda.views import ContactCard


class TestContactCard:
    def test_details_show_only_present_fields_in_order(self):
        contact = Contact(
            user_id="u1",
            name="Ana",
            email="ana@x.com",
            address="Calle Mayor 1",
            city="Burgos",
        )

        card = ContactCard.from_contact(contact)

        assert card.title == "Ana"
        assert [(d.kind, d.value) for d in card.details] == [
            ("email", "ana@x.com"),
            ("address", "Calle Mayor 1"),
            ("city", "Burgos"),
        ]

    def test_empty_strings_are_hidden(self):
        card = ContactCard.from_contact(Contact(user_id="u1", name="Luis", email="", notes=""))
        assert card.details == []
        assert card.notes is None

    def test_payloads(self):
        contact = Contact(user_id="u1", name="Ana", notes="Cumple en mayo")
        card = ContactCard.from_contact(contact)

        assert card.edit_payload is contact
        assert card.delete_payload == contact.id
        assert card.notes == "Cumple en mayo"
        assert card.edit_href == f"/?edit={contact.id}"
        assert card.delete_action == f"/contacts/{contact.id}/delete"

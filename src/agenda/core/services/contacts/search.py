from collections.abc import Iterable

from src.agenda.entities.contact import Contact


def contact_matches(contact: Contact, term: str) -> bool:
    """Substring match on name or email (case-insensitive) or phone (as typed)."""
    needle = term.lower()
    if needle in contact.name.lower():
        return True
    if contact.email is not None and needle in contact.email.lower():
        return True
    return contact.phone is not None and term in contact.phone


def filter_contacts(contacts: Iterable[Contact], term: str) -> list[Contact]:
    """Filter already loaded contacts, keeping their order."""
    return [contact for contact in contacts if contact_matches(contact, term)]

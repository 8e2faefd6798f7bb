"""Contact entity module.

- Contact / ContactDraft: domain entity and the form's save record
- ContactTable: database persistence model
- ContactRepository: owner-scoped data access
"""

from .entity import MUTABLE_FIELDS, Contact, ContactDraft
from .repository import ContactNotFoundError, ContactRepository
from .table import ContactTable

__all__ = [
    "MUTABLE_FIELDS",
    "Contact",
    "ContactDraft",
    "ContactNotFoundError",
    "ContactRepository",
    "ContactTable",
]

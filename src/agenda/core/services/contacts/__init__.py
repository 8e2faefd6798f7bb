from .contact_list import (
    ContactListController,
    ContactListState,
    DialogState,
    ViewStatus,
)
from .search import contact_matches, filter_contacts

__all__ = [
    "ContactListController",
    "ContactListState",
    "DialogState",
    "ViewStatus",
    "contact_matches",
    "filter_contacts",
]

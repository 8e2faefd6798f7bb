"""Entities organized by business concept.

Each entity has its own package containing:
- entity.py: Domain model with validation
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .contact import (
    Contact,
    ContactDraft,
    ContactNotFoundError,
    ContactRepository,
    ContactTable,
)
from .profile import Profile, ProfileRepository, ProfileTable
from .user import User, UserRepository, UserTable

__all__ = [
    "Contact",
    "ContactDraft",
    "ContactNotFoundError",
    "ContactRepository",
    "ContactTable",
    "Profile",
    "ProfileRepository",
    "ProfileTable",
    "User",
    "UserRepository",
    "UserTable",
]

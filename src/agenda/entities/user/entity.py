"""User domain entity."""

from pydantic import Field

from src.agenda.entities._base import Entity


class User(Entity):
    """An account that owns contacts."""

    email: str = Field(min_length=3, description="Sign-in email, stored lowercase")
    password_hash: str = Field(repr=False, description="bcrypt hash of the password")

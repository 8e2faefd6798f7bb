"""Profile domain entity."""

from pydantic import Field

from src.agenda.entities._base import Entity


class Profile(Entity):
    """Display information for a user, one per user."""

    user_id: str = Field(description="User the profile belongs to")
    full_name: str | None = Field(default=None, description="Name shown in the header")

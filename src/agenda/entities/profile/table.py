"""Profile database table model."""

from sqlmodel import Field

from src.agenda.entities._base import EntityTable


class ProfileTable(EntityTable, table=True):
    """Database persistence model for profiles."""

    __tablename__ = "profiles"

    user_id: str = Field(foreign_key="users.id", unique=True, nullable=False)
    full_name: str | None = None

"""Contact database table model."""

import sqlalchemy as sa
from sqlmodel import Field

from src.agenda.entities._base import EntityTable
from src.agenda.runtime.config.config_data import DEFAULT_CITY


class ContactTable(EntityTable, table=True):
    """Database persistence model for contacts.

    ``city`` carries a store-side default for rows inserted without it. The
    repository always writes it explicitly, so contacts created by the app keep
    it NULL.
    """

    __tablename__ = "contacts"

    user_id: str = Field(foreign_key="users.id", index=True, nullable=False)
    name: str = Field(nullable=False)
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    # evaluates_none: an explicit None is inserted as NULL instead of being omitted
    city: str | None = Field(
        default=None,
        sa_type=sa.String().evaluates_none(),
        sa_column_kwargs={"server_default": DEFAULT_CITY},
    )
    notes: str | None = None

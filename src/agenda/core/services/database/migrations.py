"""One-time schema migrations, recorded in ``schema_migrations``."""

from collections.abc import Callable
from dataclasses import dataclass

import sqlalchemy as sa
from alembic.migration import MigrationContext
from alembic.operations import Operations
from loguru import logger
from sqlalchemy.engine import Connection, Engine

from src.agenda.entities._base import utcnow
from src.agenda.runtime.config.config_data import ConfigData

_metadata = sa.MetaData()

schema_migrations = sa.Table(
    "schema_migrations",
    _metadata,
    sa.Column("version", sa.String(64), primary_key=True),
    sa.Column("description", sa.String(255), nullable=False),
    sa.Column("applied_at", sa.DateTime(timezone=True), nullable=False),
)


@dataclass(frozen=True)
class Migration:
    version: str
    description: str
    upgrade: Callable[[Operations, Connection, ConfigData], None]


def _add_contact_city(op: Operations, connection: Connection, config: ConfigData) -> None:
    default_city = config.contacts.default_city
    columns = {column["name"]: column for column in sa.inspect(connection).get_columns("contacts")}
    city = columns.get("city")
    if city is None:
        op.add_column(
            "contacts",
            sa.Column("city", sa.Text(), nullable=True, server_default=default_city),
        )
    elif default_city not in (city["default"] or ""):
        # Reflected defaults are rendered SQL, e.g. 'Burgos' or 'Burgos'::text
        with op.batch_alter_table("contacts") as batch_op:
            batch_op.alter_column(
                "city",
                existing_type=city["type"],
                existing_nullable=True,
                server_default=default_city,
            )
        logger.info("Set contacts.city default to {}", default_city)
    result = connection.execute(
        sa.text("UPDATE contacts SET city = :city WHERE city IS NULL"),
        {"city": default_city},
    )
    logger.info("Backfilled city on {} existing contacts", result.rowcount)


MIGRATIONS: tuple[Migration, ...] = (
    Migration(
        version="0001_contacts_city",
        description="Add contacts.city with a default and backfill existing rows",
        upgrade=_add_contact_city,
    ),
)


def applied_versions(engine: Engine) -> set[str]:
    with engine.begin() as connection:
        schema_migrations.create(connection, checkfirst=True)
        return set(connection.execute(sa.select(schema_migrations.c.version)).scalars())


def apply_migrations(engine: Engine, config: ConfigData) -> list[str]:
    """Apply every pending migration in order.

    Returns:
        Versions applied by this call.
    """
    applied: list[str] = []
    done = applied_versions(engine)

    for migration in MIGRATIONS:
        if migration.version in done:
            continue
        logger.info("Applying migration {}: {}", migration.version, migration.description)
        with engine.begin() as connection:
            op = Operations(MigrationContext.configure(connection))
            migration.upgrade(op, connection, config)
            connection.execute(
                sa.insert(schema_migrations).values(
                    version=migration.version,
                    description=migration.description,
                    applied_at=utcnow(),
                )
            )
        applied.append(migration.version)

    if not applied:
        logger.info("Database schema is up to date")
    return applied

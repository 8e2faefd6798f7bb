"""Unit tests for schema creation and the contacts.city migration."""

from collections.abc import Generator

import pytest
from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
from sqlmodel import Session

from src.agenda.core.services.database import DbManageService, build_engine
from src.agenda.core.services.database.migrations import applied_versions, apply_migrations
from src.agenda.entities import ContactDraft, ContactRepository
from src.agenda.runtime.context import get_config


@pytest.fixture
def legacy_engine() -> Generator[Engine]:
    """A database created before contacts had a city column."""
    engine = build_engine(get_config())
    with engine.begin() as connection:
        connection.execute(
            text(
                "CREATE TABLE users (id VARCHAR PRIMARY KEY, email VARCHAR NOT NULL, "
                "password_hash VARCHAR NOT NULL, created_at DATETIME NOT NULL)"
            )
        )
        connection.execute(
            text(
                "CREATE TABLE contacts (id VARCHAR PRIMARY KEY, user_id VARCHAR NOT NULL, "
                "name VARCHAR NOT NULL, email VARCHAR, phone VARCHAR, address VARCHAR, "
                "notes VARCHAR, created_at DATETIME NOT NULL)"
            )
        )
        connection.execute(
            text(
                "INSERT INTO contacts (id, user_id, name, created_at) VALUES "
                "('c1', 'u1', 'Ana', '2024-01-01 10:00:00'), "
                "('c2', 'u1', 'Luis', '2024-01-02 10:00:00')"
            )
        )
    yield engine
    engine.dispose()


class TestCityMigration:
    def test_backfills_existing_rows(self, legacy_engine: Engine):
        applied = apply_migrations(legacy_engine, get_config())

        assert applied == ["0001_contacts_city"]
        with legacy_engine.connect() as connection:
            cities = connection.execute(text("SELECT city FROM contacts ORDER BY id")).scalars().all()
        assert cities == ["Burgos", "Burgos"]

    def test_new_inserts_keep_city_null(self, legacy_engine: Engine):
        apply_migrations(legacy_engine, get_config())

        with Session(legacy_engine, expire_on_commit=False) as session:
            ContactRepository(session, "u1").create(ContactDraft(name="Carla"))
            session.commit()
            contacts = ContactRepository(session, "u1").list_for_owner()

        by_name = {c.name: c.city for c in contacts}
        assert by_name == {"Carla": None, "Ana": "Burgos", "Luis": "Burgos"}

    def test_raw_insert_without_city_gets_store_default(self, legacy_engine: Engine):
        apply_migrations(legacy_engine, get_config())

        with legacy_engine.begin() as connection:
            connection.execute(
                text(
                    "INSERT INTO contacts (id, user_id, name, created_at) "
                    "VALUES ('c3', 'u1', 'Raw', '2024-01-03 10:00:00')"
                )
            )
            city = connection.execute(text("SELECT city FROM contacts WHERE id = 'c3'")).scalar_one()
        assert city == "Burgos"

    def test_applied_once(self, legacy_engine: Engine):
        apply_migrations(legacy_engine, get_config())

        assert apply_migrations(legacy_engine, get_config()) == []
        assert applied_versions(legacy_engine) == {"0001_contacts_city"}


class TestFreshDatabase:
    def test_create_all_then_migrate(self):
        engine = build_engine(get_config())
        try:
            service = DbManageService(engine)
            service.create_all()
            assert service.migrate() == ["0001_contacts_city"]

            tables = set(inspect(engine).get_table_names())
            assert {"users", "profiles", "contacts", "schema_migrations"} <= tables
            columns = {c["name"]: c for c in inspect(engine).get_columns("contacts")}
            assert "Burgos" in columns["city"]["default"]

            with engine.begin() as connection:
                connection.execute(
                    text(
                        "INSERT INTO users (id, email, password_hash, created_at) "
                        "VALUES ('u1', 'ana@example.com', 'x', '2024-01-01 10:00:00')"
                    )
                )
                connection.execute(
                    text(
                        "INSERT INTO contacts (id, user_id, name, created_at) "
                        "VALUES ('raw', 'u1', 'Raw', '2024-01-02 10:00:00')"
                    )
                )
            with Session(engine, expire_on_commit=False) as session:
                ContactRepository(session, "u1").create(ContactDraft(name="Carla"))
                session.commit()
                by_name = {c.name: c.city for c in ContactRepository(session, "u1").list_for_owner()}
            assert by_name == {"Raw": "Burgos", "Carla": None}
        finally:
            engine.dispose()

    def test_configured_city_replaces_column_default(self):
        engine = build_engine(get_config())
        config = get_config().model_copy(deep=True)
        config.contacts.default_city = "Soria"
        try:
            DbManageService(engine).create_all()
            assert apply_migrations(engine, config) == ["0001_contacts_city"]

            columns = {c["name"]: c for c in inspect(engine).get_columns("contacts")}
            assert "Soria" in columns["city"]["default"]
        finally:
            engine.dispose()

    def test_init_db_fixture_applied_migrations(self, engine: Engine):
        assert applied_versions(engine) == {"0001_contacts_city"}

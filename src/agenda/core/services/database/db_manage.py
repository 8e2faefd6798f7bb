"""Schema creation and migration entry points."""

from loguru import logger
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel

from src.agenda.core.services.database.migrations import apply_migrations
from src.agenda.runtime.context import get_config


class DbManageService:
    def __init__(self, engine: Engine):
        self._engine = engine

    def create_all(self) -> None:
        """Create all database tables."""
        from src.agenda.entities.contact import ContactTable  # noqa: F401
        from src.agenda.entities.profile import ProfileTable  # noqa: F401
        from src.agenda.entities.user import UserTable  # noqa: F401

        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables.")

    def migrate(self) -> list[str]:
        """Apply pending schema migrations."""
        return apply_migrations(self._engine, get_config())

"""Database initialization script."""

from sqlalchemy.engine import Engine

from src.agenda.core.services.database import DbManageService, DbSessionService


def init_db(engine: Engine | None = None) -> list[str]:
    """Create all tables and apply pending migrations.

    Returns the versions applied by this call.
    """
    if engine is None:
        engine = DbSessionService().engine
    db_manage_service = DbManageService(engine)
    db_manage_service.create_all()
    return db_manage_service.migrate()


if __name__ == "__main__":
    init_db()

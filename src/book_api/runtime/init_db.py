"""Database initialization script."""

from book_api.api.utils.app_startup import configure_logging
from book_api.core.services import DbManageService, DbSessionService
from book_api.runtime.config.config_template import load_config


def init_db() -> None:
    """Create all database tables."""
    config = load_config()
    configure_logging(config)

    database_service = DbSessionService(config)
    try:
        DbManageService(database_service.engine).create_all()
    finally:
        database_service.dispose()


if __name__ == "__main__":
    init_db()

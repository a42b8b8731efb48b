"""Database engine and session factory used across the application."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from loguru import logger
from sqlalchemy import Engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from book_api.runtime.config.config_data import ConfigData


class DbSessionService:
    def __init__(self, config: ConfigData, engine: Engine | None = None):
        """Initialize the shared database engine and session factory.

        An already built ``engine`` can be injected, which is how tests run
        the service against an in-memory SQLite database.
        """
        if engine is not None:
            self._engine = engine
            return

        db_config = config.database
        logger.info(
            "Configuring database engine for {} in {} environment",
            db_config.safe_target,
            config.app.environment,
        )
        self._engine = create_engine(
            db_config.connection_string, **self._get_engine_kwargs(config)
        )

    @property
    def engine(self) -> Engine:
        return self._engine

    def _get_engine_kwargs(self, config: ConfigData) -> dict[str, Any]:
        """Get database-specific engine arguments."""
        db_config = config.database

        if db_config.is_sqlite:
            kwargs: dict[str, Any] = {
                "echo": False,
                "connect_args": {
                    "check_same_thread": False,  # Sessions cross threadpool workers
                    "timeout": 20,  # Lock timeout
                },
            }
            database = make_url(db_config.connection_string).database
            if not database or database == ":memory:":
                # One connection shared by every session, otherwise each
                # connection would see its own empty database
                kwargs["poolclass"] = StaticPool

            if config.app.environment == "production":
                logger.warning(
                    "SQLite is not recommended for production use. "
                    "Consider PostgreSQL for better performance and reliability."
                )
            return kwargs

        return {
            "pool_size": db_config.pool_size,
            "max_overflow": db_config.max_overflow,
            "pool_timeout": db_config.pool_timeout,
            "pool_recycle": db_config.pool_recycle,
            "pool_pre_ping": True,  # Validate connections before use
            "echo": False,
            "connect_args": {
                "application_name": f"{config.app.environment}_book_api",
                "connect_timeout": 30,
            },
        }

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(
            self._engine,
            expire_on_commit=False,  # Prevent lazy loading issues
            autoflush=True,
        )

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Yield a session that is rolled back on error and always closed."""
        db = self.get_session()
        try:
            yield db
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.bind(error_type=type(e).__name__).error(
                "Database health check failed: {}", e
            )
            return False

    def dispose(self) -> None:
        """Release every pooled connection."""
        self._engine.dispose()

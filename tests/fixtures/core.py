from __future__ import annotations

from collections.abc import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import Engine, StaticPool
from sqlmodel import Session, SQLModel, create_engine

from book_api.api.http.app import create_app
from book_api.core.services import DbSessionService
from book_api.runtime.config.config_data import AppConfig, ConfigData, DatabaseConfig

# Models will be imported within fixtures to control timing


@pytest.fixture
def test_config() -> ConfigData:
    """Configuration pointing at an in-memory SQLite database."""
    return ConfigData(
        app=AppConfig(environment="test"),
        database=DatabaseConfig(url="sqlite://"),
    )


@pytest.fixture
def engine() -> Generator[Engine]:
    """Create a fresh in-memory engine with the book table."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Import models to register them with the metadata
    from book_api.entities.service.book import BookTable  # noqa: F401

    SQLModel.metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def session(engine: Engine) -> Generator[Session]:
    """Create a fresh database session for testing."""
    with Session(engine) as session:
        try:
            yield session
        finally:
            session.rollback()
            session.close()


@pytest.fixture
def database_service(test_config: ConfigData, engine: Engine) -> DbSessionService:
    return DbSessionService(test_config, engine=engine)


@pytest.fixture
def app(test_config: ConfigData, database_service: DbSessionService) -> FastAPI:
    return create_app(test_config, database_service)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient]:
    """Test client; the context manager runs startup and shutdown."""
    with TestClient(app) as client:
        yield client

"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from book_api.api.http.app_data import ApplicationDependencies
from book_api.core.services import DbSessionService
from book_api.entities.service.book import BookRepository


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    """Get the dependency container built by the application factory."""
    return request.app.state.app_dependencies


def get_database_service(
    app_deps: ApplicationDependencies = Depends(get_app_dependencies),
) -> DbSessionService:
    """Get the database session service instance."""
    return app_deps.database_service


def get_db_session(
    database_service: DbSessionService = Depends(get_database_service),
) -> Iterator[Session]:
    """Yield a request-scoped database session."""
    with database_service.session_scope() as session:
        yield session


def get_book_repository(
    session: Session = Depends(get_db_session),
) -> BookRepository:
    """Get a book repository bound to the request session."""
    return BookRepository(session)

"""Data-access layer for books."""

from loguru import logger
from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from book_api.core.errors import StorageError
from book_api.entities.service.book.entity import Book
from book_api.entities.service.book.table import BookTable


class BookRepository:
    """Data-access layer for books.

    Every SQLAlchemy failure is rolled back, logged with its cause and
    re-raised as ``StorageError`` carrying a client-safe message.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def _fail(self, message: str, exc: SQLAlchemyError) -> StorageError:
        self._session.rollback()
        logger.bind(error_type=type(exc).__name__).opt(exception=exc).error(message)
        return StorageError(message)

    def create(self, book: Book) -> Book:
        row = BookTable(**book.model_dump())
        try:
            self._session.add(row)
            self._session.commit()
        except SQLAlchemyError as e:
            raise self._fail("Failed to create book", e) from e
        logger.info("Created book {}", row.id)
        return Book.model_validate(row, from_attributes=True)

    def list_all(self) -> list[Book]:
        statement = select(BookTable).order_by(BookTable.title)
        try:
            rows = self._session.exec(statement).all()
        except SQLAlchemyError as e:
            raise self._fail("Failed to fetch books", e) from e
        return [Book.model_validate(row, from_attributes=True) for row in rows]

    def exists(self, book_id: str) -> bool:
        try:
            return self._session.get(BookTable, book_id) is not None
        except SQLAlchemyError as e:
            raise self._fail("Database error", e) from e

    def delete(self, book_id: str) -> bool:
        """Delete a book by id and report whether a row was removed.

        A single conditional DELETE; a row removed by a concurrent request
        since the existence check reports False.
        """
        statement = delete(BookTable).where(BookTable.id == book_id)
        try:
            result = self._session.connection().execute(statement)
            self._session.commit()
        except SQLAlchemyError as e:
            raise self._fail("Failed to delete book", e) from e

        if result.rowcount == 0:
            return False
        logger.info("Deleted book {}", book_id)
        return True

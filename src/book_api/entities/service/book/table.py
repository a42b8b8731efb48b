"""Book database table model."""

from sqlmodel import Field

from book_api.entities._base import EntityTable


class BookTable(EntityTable, table=True):
    """Database persistence model for books.

    This represents how the Book entity is stored in the database.
    It's separate from the domain entity to maintain clean architecture
    while keeping related code together.
    """

    __tablename__ = "books"

    title: str = Field(max_length=255, nullable=False)
    author: str = Field(max_length=255, nullable=False)
    isbn: str | None = Field(default=None, max_length=20, unique=True, nullable=True)

"""Entity: Book."""

from typing import Any

from pydantic import BaseModel, Field

from book_api.entities._base import Entity


class Book(Entity):
    """Book entity representing a book in the system.

    This is the domain model returned by the API. It inherits from Entity
    to get auto-generated UUID identifiers.
    """

    title: str = Field(description="Title")
    author: str = Field(description="Author")
    isbn: str | None = Field(default=None, description="ISBN, unique when present")

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Book):
            return False

        return (
            self.id == other.id
            and self.title == other.title
            and self.author == other.author
            and self.isbn == other.isbn
        )

    def __hash__(self) -> int:
        return hash((self.id, self.title, self.author, self.isbn))


class BookCreate(BaseModel):
    """Request body for creating a book.

    Missing title or author parse as empty strings so the handler can reject
    them with a single message. Any submitted ``id`` is ignored.
    """

    title: str = Field(default="", max_length=255)
    author: str = Field(default="", max_length=255)
    isbn: str | None = Field(default=None, max_length=20)

    @property
    def has_required_fields(self) -> bool:
        return bool(self.title.strip()) and bool(self.author.strip())

    def to_book(self) -> Book:
        """Build a new Book with a freshly generated id.

        A blank isbn is stored as NULL so books without one never collide
        on the unique constraint.
        """
        isbn = (self.isbn or "").strip() or None
        return Book(title=self.title, author=self.author, isbn=isbn)

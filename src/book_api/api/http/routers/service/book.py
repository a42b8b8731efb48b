"""Book API router with list, create and delete operations."""

from fastapi import APIRouter, Depends, status

from book_api.api.http.deps import get_book_repository
from book_api.core.errors import NotFoundError, ValidationError
from book_api.entities.service.book import Book, BookCreate, BookRepository

router = APIRouter(prefix="/books", tags=["books"])


@router.get("", response_model=list[Book])
def list_books(
    repository: BookRepository = Depends(get_book_repository),
) -> list[Book]:
    """List all books ordered by title."""
    return repository.list_all()


@router.post("", response_model=Book, status_code=status.HTTP_201_CREATED)
def create_book(
    payload: BookCreate,
    repository: BookRepository = Depends(get_book_repository),
) -> Book:
    """Create a new book with a server-generated id."""
    if not payload.has_required_fields:
        raise ValidationError("Title and author are required")

    return repository.create(payload.to_book())


@router.delete("/{book_id}")
def delete_book(
    book_id: str,
    repository: BookRepository = Depends(get_book_repository),
) -> dict[str, str]:
    """Delete a book."""
    if not repository.exists(book_id):
        raise NotFoundError("Book not found")

    # The row may vanish between the check and the delete
    if not repository.delete(book_id):
        raise NotFoundError("Book not found")

    return {"message": "Book deleted successfully"}

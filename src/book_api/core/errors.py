"""Error hierarchy for the book service.

Every error carries the HTTP status it maps to and a message that is safe to
return to clients. Storage details stay on the exception chain (``__cause__``)
and in the logs.
"""


class BookApiError(Exception):
    """Base exception for all book service errors."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_response(self) -> dict[str, str]:
        return {"error": self.message}


class ValidationError(BookApiError):
    """Request body is malformed or misses required fields."""

    status_code = 400


class NotFoundError(BookApiError):
    """The requested book does not exist."""

    status_code = 404


class StorageError(BookApiError):
    """Any failure reported by the database, constraint violations included."""

    status_code = 500

"""Entities module with an entity-centric structure.

Each entity has its own package containing:
- entity.py: Domain model and request shapes
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .service.book import Book, BookCreate, BookRepository, BookTable

__all__ = ["Book", "BookCreate", "BookRepository", "BookTable"]

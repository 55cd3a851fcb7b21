"""
Book repository for the Bookshelf GraphQL service.

Backs the three catalog operations: listing (``books``), creating
(``addBook``) and deleting (``deleteBook``). Deleting an id that does not
exist is not an error; ``delete`` simply reports that nothing was removed.
"""

from ..database.schema import Book as BookDB
from ..models.book import Book as BookModel
from ..models.book import BookCreate
from .repository import BaseRepository


class BookRepository(BaseRepository[BookDB, BookModel]):
    """Repository for book data access."""

    @property
    def model_class(self):
        return BookDB

    @property
    def response_schema(self):
        return BookModel

    def create(self, data: BookCreate) -> BookModel:
        """Add a book to the catalog and return it with its new id."""
        return self._create(**data.model_dump())

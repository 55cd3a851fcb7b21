"""
Sample catalog data for development databases.
"""

import logging

from ..models.book import Book, BookCreate
from .book_repository import BookRepository
from .session import DatabaseManager

logger = logging.getLogger(__name__)

SAMPLE_BOOKS = [
    BookCreate(title="The Great Gatsby", author="F. Scott Fitzgerald"),
    BookCreate(title="To Kill a Mockingbird", author="Harper Lee"),
]


def seed_sample_books(db: DatabaseManager) -> list[Book]:
    """
    Add the sample books unless the catalog already has entries.

    Returns:
        The books created; empty when the catalog was not empty
    """
    with db.session_scope() as session:
        repo = BookRepository(session)
        if repo.count():
            logger.info("Catalog is not empty, skipping sample data")
            return []
        created = [repo.create(book) for book in SAMPLE_BOOKS]

    logger.info("Loaded %d sample book(s)", len(created))
    return created

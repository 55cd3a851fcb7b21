"""
Book resolvers - list, create and delete catalog entries.

Mutations follow one sequence:

1. AUTHORIZATION: the gate verifies the request's token; nothing else runs
   if it fails
2. VALIDATION: arguments are checked before any side effect
3. STATE CHANGE: exactly one repository call, committed before returning
4. NOTIFICATION: creation publishes a snapshot on the ``BOOK_ADDED`` topic

Any valid token authorizes any mutation; the verified claims are only used
for logging.
"""

import logging

from ..auth.gate import Metadata
from ..database.book_repository import BookRepository
from ..models.book import Book, BookCreate
from ..notifications import BOOK_ADDED
from ..observability import trace_resolver
from .context import Services
from .inputs import parse_id, validate_input

logger = logging.getLogger(__name__)


@trace_resolver("books")
async def list_books(services: Services) -> list[Book]:
    """Return every book in insertion order. Open to anonymous callers."""
    with services.db.session_scope() as session:
        books = BookRepository(session).get_all()

    logger.debug("books: returning %d book(s)", len(books))
    return books


@trace_resolver("addBook", mutation=True)
async def add_book(services: Services, *, title: str, author: str, metadata: Metadata) -> Book:
    """
    Create a book and notify ``BOOK_ADDED`` subscribers.

    Raises:
        Unauthenticated: If no token was supplied
        InvalidToken: If the token does not verify
        InvalidInput: If title or author is empty
    """
    claims = services.gate.authorize(metadata)
    data = validate_input(BookCreate, title=title, author=author)

    with services.db.session_scope() as session:
        book = BookRepository(session).create(data)

    logger.info("Book %d added by user %d", book.id, claims.user_id)

    # Publishing only enqueues; slow subscribers do not delay the response
    services.bus.publish(BOOK_ADDED, book)
    return book


@trace_resolver("deleteBook", mutation=True)
async def delete_book(services: Services, *, id: str | int, metadata: Metadata) -> str:
    """
    Delete a book by id.

    Deleting an id that does not exist succeeds with the same confirmation.

    Raises:
        Unauthenticated: If no token was supplied
        InvalidToken: If the token does not verify
        InvalidInput: If ``id`` is not a positive integer
    """
    claims = services.gate.authorize(metadata)
    book_id = parse_id(id)

    with services.db.session_scope() as session:
        deleted = BookRepository(session).delete(book_id)

    if deleted:
        logger.info("Book %d deleted by user %d", book_id, claims.user_id)
    else:
        logger.info("deleteBook: no book %d, nothing to do", book_id)
    return f"Book {book_id} deleted"

"""
Subscription resolvers.

``book_added`` stays open for as long as the client does. When the client
disconnects, the GraphQL server closes this generator and the underlying bus
subscription is released with it.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import aclosing

from ..models.book import Book
from ..notifications import BOOK_ADDED
from .context import Services

logger = logging.getLogger(__name__)


async def book_added(services: Services) -> AsyncIterator[Book]:
    """Yield every book created after the subscription starts."""
    logger.debug("bookAdded subscription opened")
    try:
        async with aclosing(services.bus.stream(BOOK_ADDED)) as books:
            async for book in books:
                yield book
    finally:
        logger.debug("bookAdded subscription closed")

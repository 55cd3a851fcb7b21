"""
Database package for the Bookshelf GraphQL service.

This package provides:
- SQLAlchemy schema definitions (schema.py)
- Session management and connection handling (session.py)
- Repositories for books and accounts
"""

from .book_repository import BookRepository
from .repository import (
    BaseRepository,
    DuplicateError,
    RepositoryException,
)
from .schema import Base, Book, User
from .session import DatabaseManager, safe_commit, safe_query
from .user_repository import UserRepository

__all__ = [
    "Base",
    "BaseRepository",
    "Book",
    "BookRepository",
    "DatabaseManager",
    "DuplicateError",
    "RepositoryException",
    "User",
    "UserRepository",
    "safe_commit",
    "safe_query",
]

"""
SQLAlchemy database schema for the Bookshelf GraphQL service.

Two independent tables back the API:
1. ``users`` - accounts created by ``register`` and read by ``login``
2. ``books`` - catalog entries created by ``addBook`` and removed by ``deleteBook``

There is no relationship between them.
"""

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

# Base class for all SQLAlchemy models
Base = declarative_base()


class User(Base):
    """
    Users table - stores accounts and their password hashes.

    The username is unique and compared case-sensitively; the unique
    constraint is what enforces it under concurrent registrations.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(150), nullable=False)
    # bcrypt output, never the plaintext
    password_hash = Column(String(128), nullable=False)

    created_at = Column(DateTime, nullable=False, default=func.now())

    __table_args__ = (
        UniqueConstraint("username", name="uq_users_username"),
        CheckConstraint("length(username) > 0", name="check_username_not_empty"),
        # Never reuse ids of deleted rows
        {"sqlite_autoincrement": True},
    )


class Book(Base):
    """
    Books table - the catalog.

    Rows are created and deleted but never updated.
    """

    __tablename__ = "books"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(500), nullable=False)
    author = Column(String(200), nullable=False)

    created_at = Column(DateTime, nullable=False, default=func.now())

    __table_args__ = (
        CheckConstraint("length(title) > 0", name="check_title_not_empty"),
        CheckConstraint("length(author) > 0", name="check_author_not_empty"),
        {"sqlite_autoincrement": True},
    )

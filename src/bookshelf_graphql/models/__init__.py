"""
Bookshelf GraphQL Models.

Pydantic models for the service's records and operation inputs:
- Book / BookCreate: catalog entries
- User / Credentials / AuthPayload: accounts and authentication results
"""

from .book import Book, BookCreate
from .user import AuthPayload, Credentials, User, UserWithHash

__all__ = [
    "AuthPayload",
    "Book",
    "BookCreate",
    "Credentials",
    "User",
    "UserWithHash",
]

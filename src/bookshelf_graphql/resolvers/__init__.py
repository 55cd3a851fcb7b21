"""
Resolver layer - one async function per API operation.

Resolvers are transport-agnostic: they take the ``Services`` container plus
plain arguments (and, for mutations that need it, the request metadata) and
return Pydantic models or raise ``errors.ApiError`` subclasses.
"""

from .accounts import login, register
from .books import add_book, delete_book, list_books
from .context import Services, create_services
from .subscriptions import book_added

__all__ = [
    "Services",
    "add_book",
    "book_added",
    "create_services",
    "delete_book",
    "list_books",
    "login",
    "register",
]

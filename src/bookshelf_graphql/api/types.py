"""
GraphQL object types.

These mirror the Pydantic models one-to-one; ``from_model`` converts at the
edge so resolvers never see Strawberry types.
"""

import strawberry

from ..models.book import Book as BookModel
from ..models.user import AuthPayload as AuthPayloadModel


@strawberry.type(description="A catalog entry")
class Book:
    id: strawberry.ID
    title: str
    author: str

    @classmethod
    def from_model(cls, book: BookModel) -> "Book":
        return cls(id=strawberry.ID(str(book.id)), title=book.title, author=book.author)


@strawberry.type(description="Identity and bearer token returned by register and login")
class AuthPayload:
    id: strawberry.ID
    username: str
    token: str

    @classmethod
    def from_model(cls, payload: AuthPayloadModel) -> "AuthPayload":
        return cls(
            id=strawberry.ID(str(payload.id)),
            username=payload.username,
            token=payload.token,
        )

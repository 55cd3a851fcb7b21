"""
GraphQL Schema Definition

Root Query, Mutation and Subscription types. Each field delegates to the
matching function in ``resolvers`` and converts the result to a Strawberry
type. Domain errors become GraphQL errors carrying ``extensions.code``;
anything unexpected is logged and reported as ``INTERNAL_ERROR`` without
internal details.
"""

import logging
from collections.abc import AsyncGenerator, Awaitable
from contextlib import aclosing
from typing import TypeVar

import strawberry
from graphql import GraphQLError
from strawberry.types import Info

from .. import resolvers
from ..errors import ApiError
from .context import GraphQLContext
from .types import AuthPayload, Book

logger = logging.getLogger(__name__)

T = TypeVar("T")

Ctx = Info[GraphQLContext, None]


async def _resolve(operation: Awaitable[T]) -> T:
    """Await a resolver, translating its failures into GraphQL errors."""
    try:
        return await operation
    except ApiError as e:
        raise GraphQLError(e.message, extensions={"code": e.code}, original_error=e) from e
    except Exception as e:
        logger.exception("Unhandled error in resolver")
        raise GraphQLError(
            "Internal server error",
            extensions={"code": "INTERNAL_ERROR"},
            original_error=e,
        ) from e


# ============================================
# QUERIES
# ============================================


@strawberry.type
class Query:
    @strawberry.field(description="All books, in insertion order")
    async def books(self, info: Ctx) -> list[Book]:
        books = await _resolve(resolvers.list_books(info.context.services))
        return [Book.from_model(book) for book in books]


# ============================================
# MUTATIONS
# ============================================


@strawberry.type
class Mutation:
    @strawberry.mutation(description="Create an account; returns a token for it")
    async def register(self, info: Ctx, username: str, password: str) -> AuthPayload:
        payload = await _resolve(
            resolvers.register(info.context.services, username=username, password=password)
        )
        return AuthPayload.from_model(payload)

    @strawberry.mutation(description="Exchange credentials for a fresh token")
    async def login(self, info: Ctx, username: str, password: str) -> AuthPayload:
        payload = await _resolve(
            resolvers.login(info.context.services, username=username, password=password)
        )
        return AuthPayload.from_model(payload)

    @strawberry.mutation(description="Add a book; requires a bearer token")
    async def add_book(self, info: Ctx, title: str, author: str) -> Book:
        book = await _resolve(
            resolvers.add_book(
                info.context.services,
                title=title,
                author=author,
                metadata=info.context.metadata,
            )
        )
        return Book.from_model(book)

    @strawberry.mutation(description="Delete a book by id; requires a bearer token")
    async def delete_book(self, info: Ctx, id: strawberry.ID) -> str:
        return await _resolve(
            resolvers.delete_book(info.context.services, id=id, metadata=info.context.metadata)
        )


# ============================================
# SUBSCRIPTIONS
# ============================================


@strawberry.type
class Subscription:
    @strawberry.subscription(description="Every book added after subscribing")
    async def book_added(self, info: Ctx) -> AsyncGenerator[Book, None]:
        async with aclosing(resolvers.book_added(info.context.services)) as books:
            async for book in books:
                yield Book.from_model(book)


schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    subscription=Subscription,
)

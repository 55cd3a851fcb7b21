"""
Tests for the book resolvers.

These tests verify:
1. Listing is open to anonymous callers and preserves insertion order
2. Mutations are rejected without a valid token before any side effect
3. addBook publishes exactly one BOOK_ADDED event
4. deleteBook is idempotent
"""

import asyncio

import pytest

from bookshelf_graphql.errors import InvalidInput, InvalidToken, Unauthenticated
from bookshelf_graphql.notifications import BOOK_ADDED
from bookshelf_graphql.resolvers import add_book, book_added, delete_book, list_books


async def _first(stream):
    return await stream.__anext__()


class TestListBooks:
    @pytest.mark.asyncio
    async def test_empty_catalog(self, services):
        assert await list_books(services) == []

    @pytest.mark.asyncio
    async def test_lists_in_insertion_order(self, services, auth_headers):
        for title in ["B", "A", "C"]:
            await add_book(services, title=title, author="Anon", metadata=auth_headers)

        books = await list_books(services)
        assert [b.title for b in books] == ["B", "A", "C"]
        assert [b.id for b in books] == [1, 2, 3]


class TestAddBook:
    @pytest.mark.asyncio
    async def test_add_book(self, services, auth_headers):
        book = await add_book(
            services, title="The Hobbit", author="J.R.R. Tolkien", metadata=auth_headers
        )

        assert book.id == 1
        assert book.title == "The Hobbit"
        assert book.author == "J.R.R. Tolkien"
        assert await list_books(services) == [book]

    @pytest.mark.asyncio
    async def test_publishes_one_event(self, services, auth_headers):
        subscription = services.bus.subscribe(BOOK_ADDED)

        book = await add_book(services, title="Dune", author="Frank Herbert", metadata=auth_headers)

        assert await asyncio.wait_for(subscription.get(), 1.0) == book
        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(subscription.get(), 0.05)

    @pytest.mark.asyncio
    async def test_duplicates_get_distinct_ids(self, services, auth_headers):
        a = await add_book(services, title="Dune", author="Frank Herbert", metadata=auth_headers)
        b = await add_book(services, title="Dune", author="Frank Herbert", metadata=auth_headers)
        assert a.id != b.id

    @pytest.mark.asyncio
    @pytest.mark.parametrize("metadata", [None, {}, {"authorization": ""}])
    async def test_missing_token(self, services, metadata):
        subscription = services.bus.subscribe(BOOK_ADDED)

        with pytest.raises(Unauthenticated):
            await add_book(services, title="Dune", author="Frank Herbert", metadata=metadata)

        assert await list_books(services) == []
        assert services.bus.published_count == 0
        subscription.close()

    @pytest.mark.asyncio
    async def test_invalid_token(self, services):
        with pytest.raises(InvalidToken):
            await add_book(
                services,
                title="Dune",
                author="Frank Herbert",
                metadata={"authorization": "Bearer not-a-token"},
            )
        assert await list_books(services) == []

    @pytest.mark.asyncio
    async def test_expired_token(self, services, auth_headers, clock):
        clock.advance(3600)

        with pytest.raises(InvalidToken):
            await add_book(services, title="Dune", author="Frank Herbert", metadata=auth_headers)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title,author", [("", "Frank Herbert"), ("Dune", ""), ("  ", "x")])
    async def test_invalid_input(self, services, auth_headers, title, author):
        with pytest.raises(InvalidInput):
            await add_book(services, title=title, author=author, metadata=auth_headers)

        assert await list_books(services) == []
        assert services.bus.published_count == 0

    @pytest.mark.asyncio
    async def test_auth_checked_before_input(self, services):
        with pytest.raises(Unauthenticated):
            await add_book(services, title="", author="", metadata={})


class TestDeleteBook:
    @pytest.mark.asyncio
    async def test_delete_existing(self, services, auth_headers):
        book = await add_book(services, title="Emma", author="Jane Austen", metadata=auth_headers)

        result = await delete_book(services, id=str(book.id), metadata=auth_headers)

        assert result == f"Book {book.id} deleted"
        assert await list_books(services) == []

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, services, auth_headers):
        assert await delete_book(services, id="99", metadata=auth_headers) == "Book 99 deleted"
        assert await delete_book(services, id="99", metadata=auth_headers) == "Book 99 deleted"

    @pytest.mark.asyncio
    async def test_delete_leaves_other_books(self, services, auth_headers):
        keep = await add_book(services, title="Keep", author="A", metadata=auth_headers)
        drop = await add_book(services, title="Drop", author="B", metadata=auth_headers)

        await delete_book(services, id=drop.id, metadata=auth_headers)

        assert await list_books(services) == [keep]

    @pytest.mark.asyncio
    async def test_delete_id_beyond_storage_range(self, services, auth_headers):
        book = await add_book(services, title="Emma", author="Jane Austen", metadata=auth_headers)
        huge = "99999999999999999999"

        assert await delete_book(services, id=huge, metadata=auth_headers) == f"Book {huge} deleted"
        assert await list_books(services) == [book]

    @pytest.mark.asyncio
    async def test_delete_requires_token(self, services, auth_headers):
        book = await add_book(services, title="Emma", author="Jane Austen", metadata=auth_headers)

        with pytest.raises(Unauthenticated):
            await delete_book(services, id=str(book.id), metadata=None)

        assert await list_books(services) == [book]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "book_id", ["abc", "0", "-1", "1.5", "", "1_0", "\uff11", "+1", "1" * 5000]
    )
    async def test_invalid_id(self, services, auth_headers, book_id):
        with pytest.raises(InvalidInput):
            await delete_book(services, id=book_id, metadata=auth_headers)


class TestBookAddedSubscription:
    @pytest.mark.asyncio
    async def test_receives_books_added_after_subscribing(self, services, auth_headers):
        await add_book(services, title="Before", author="A", metadata=auth_headers)

        stream = book_added(services)
        pending = asyncio.create_task(_first(stream))
        while services.bus.subscriber_count(BOOK_ADDED) == 0:
            await asyncio.sleep(0)

        book = await add_book(services, title="After", author="B", metadata=auth_headers)

        assert await asyncio.wait_for(pending, 1.0) == book
        await stream.aclose()
        assert services.bus.subscriber_count(BOOK_ADDED) == 0

    @pytest.mark.asyncio
    async def test_each_subscriber_gets_every_book(self, services, auth_headers):
        streams = [book_added(services) for _ in range(3)]
        pending = [asyncio.create_task(_first(s)) for s in streams]
        while services.bus.subscriber_count(BOOK_ADDED) < 3:
            await asyncio.sleep(0)

        book = await add_book(services, title="Shared", author="C", metadata=auth_headers)

        assert await asyncio.gather(*pending) == [book, book, book]
        for stream in streams:
            await stream.aclose()
        assert services.bus.subscriber_count() == 0

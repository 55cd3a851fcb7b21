"""In-memory topic-keyed notification bus.

Each subscriber owns a bounded ``asyncio.Queue``. Publishing copies the event
into the queue of every subscriber currently registered on the topic and
returns immediately; it never waits on a consumer. Events are not retained:
a subscriber registered after a publish never sees that event.

Ordering: for one subscriber on one topic, events arrive in publish order.
Nothing is promised across topics.

Teardown: closing a subscription (explicitly, by leaving its ``async with``
block, or by finalising the generator that iterates it) removes it from the
registry, and no delivery is attempted afterwards. A subscriber whose queue
fills up is evicted the same way, so a stalled consumer cannot block
publishers or grow without bound.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections import defaultdict
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_QUEUE_SIZE = 1000

# Wakes a consumer blocked on an empty queue when its subscription closes
_CLOSED = object()


@dataclass(frozen=True)
class Event:
    """Immutable snapshot delivered to subscribers."""

    topic: str
    payload: Any
    published_at: datetime = field(default_factory=lambda: datetime.now(UTC))


class Subscription:
    """A live, lazily consumed stream of events for one topic.

    Created by ``NotificationBus.subscribe``; registration happens at
    creation, so events published after ``subscribe`` returns are delivered
    even before iteration starts.
    """

    def __init__(self, bus: NotificationBus, topic: str, maxsize: int):
        self.topic = topic
        self._bus = bus
        self._loop = asyncio.get_running_loop()
        self._limit = maxsize
        # One slot beyond the limit is reserved for the close marker
        self._queue: asyncio.Queue[Any] = asyncio.Queue(maxsize=maxsize + 1)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _deliver(self, event: Event) -> bool:
        """Enqueue on the subscriber's loop. Returns False if not delivered."""
        if self._closed:
            return False
        if self._queue.qsize() >= self._limit:
            logger.warning(
                "Subscriber on topic=%s fell %d events behind; evicting",
                self.topic,
                self._limit,
            )
            self.close()
            return False
        self._queue.put_nowait(event)
        return True

    def close(self) -> None:
        """Deregister and end the stream. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._bus._unregister(self)

        if self._loop.is_closed():
            return
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is self._loop:
            self._wake()
        else:
            self._loop.call_soon_threadsafe(self._wake)

    def _wake(self) -> None:
        # Events already queued are still handed out before the stream ends
        self._queue.put_nowait(_CLOSED)

    async def get(self) -> Any:
        """Wait for the next event payload.

        Raises:
            StopAsyncIteration: If the subscription is closed
        """
        if self._closed and self._queue.empty():
            raise StopAsyncIteration
        event = await self._queue.get()
        if event is _CLOSED:
            raise StopAsyncIteration
        return event.payload

    def __aiter__(self) -> Subscription:
        return self

    async def __anext__(self) -> Any:
        return await self.get()

    async def __aenter__(self) -> Subscription:
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.close()


class NotificationBus:
    """Topic-keyed broadcast register.

    Registry access is guarded by a lock, so publishing and
    (un)subscribing may happen concurrently from several in-flight requests,
    including from worker threads.
    """

    def __init__(self, queue_size: int = DEFAULT_QUEUE_SIZE) -> None:
        if queue_size < 1:
            raise ValueError("queue_size must be at least 1")
        self.queue_size = queue_size
        self._lock = threading.Lock()
        # topic -> live subscriptions
        self._subscribers: dict[str, list[Subscription]] = defaultdict(list)
        self._published = 0

    def subscribe(self, topic: str) -> Subscription:
        """Register a new subscriber on ``topic``.

        Must be called from within a running event loop; that loop is where
        the subscriber's events are delivered.
        """
        subscription = Subscription(self, topic, self.queue_size)
        with self._lock:
            self._subscribers[topic].append(subscription)
            count = len(self._subscribers[topic])
        logger.debug("Subscriber added on topic=%s (now %d)", topic, count)
        return subscription

    async def stream(self, topic: str) -> AsyncIterator[Any]:
        """Yield payloads published on ``topic`` until the consumer stops.

        The subscription is released when the generator is closed, which is
        what GraphQL servers do when a client disconnects.
        """
        async with self.subscribe(topic) as subscription:
            async for payload in subscription:
                yield payload

    def publish(self, topic: str, payload: Any) -> int:
        """Fan ``payload`` out to every current subscriber of ``topic``.

        Returns:
            Number of subscribers the event was handed to
        """
        event = Event(topic=topic, payload=payload)
        with self._lock:
            targets = list(self._subscribers.get(topic, ()))
            self._published += 1

        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        delivered = 0
        for subscription in targets:
            if subscription._loop is running:
                delivered += subscription._deliver(event)
                continue
            try:
                subscription._loop.call_soon_threadsafe(subscription._deliver, event)
                delivered += 1
            except RuntimeError:
                # The subscriber's loop has shut down
                logger.debug("Dropping subscriber on topic=%s with closed loop", topic)
                subscription.close()

        logger.debug("Published on topic=%s to %d subscriber(s)", topic, delivered)
        return delivered

    def _unregister(self, subscription: Subscription) -> None:
        with self._lock:
            subscribers = self._subscribers.get(subscription.topic)
            if subscribers is None:
                return
            try:
                subscribers.remove(subscription)
            except ValueError:
                return
            if not subscribers:
                del self._subscribers[subscription.topic]
        logger.debug("Subscriber removed from topic=%s", subscription.topic)

    def subscriber_count(self, topic: str | None = None) -> int:
        """Live subscribers on ``topic``, or across all topics."""
        with self._lock:
            if topic is not None:
                return len(self._subscribers.get(topic, ()))
            return sum(len(subs) for subs in self._subscribers.values())

    @property
    def published_count(self) -> int:
        """Total publish calls since creation."""
        return self._published

    def close(self) -> None:
        """Close every subscription, ending all streams."""
        with self._lock:
            subscriptions = [s for subs in self._subscribers.values() for s in subs]
        for subscription in subscriptions:
            subscription.close()

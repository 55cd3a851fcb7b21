"""Publish/subscribe notifications for live GraphQL subscriptions."""

from .bus import Event, NotificationBus, Subscription

# Topic carrying a snapshot of every newly created book
BOOK_ADDED = "BOOK_ADDED"

__all__ = [
    "BOOK_ADDED",
    "Event",
    "NotificationBus",
    "Subscription",
]

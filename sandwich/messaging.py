"""In-process publish/subscribe for chat notifications.

Route handlers receive a MessageBus and publish events on it; transports
(a WebSocket hub, a test probe) subscribe. Publishing with no subscribers
does nothing.
"""

from __future__ import annotations

import inspect
import logging
import threading
from collections.abc import Awaitable, Callable
from typing import Any, Protocol

logger = logging.getLogger(__name__)

Subscriber = Callable[[dict[str, Any]], Awaitable[None] | None]


class MessageBus(Protocol):
    """Capability handed to handlers that fan out notifications."""

    async def publish(self, event: dict[str, Any]) -> None: ...


class InMemoryMessageBus:
    """Delivers each published event to every current subscriber.

    A failing subscriber is logged and skipped; the others still receive
    the event and publish never raises on their behalf.
    """

    def __init__(self) -> None:
        self._subscribers: list[Subscriber] = []
        self._lock = threading.Lock()

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """Register a subscriber and return a function that removes it."""
        with self._lock:
            self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            with self._lock:
                if subscriber in self._subscribers:
                    self._subscribers.remove(subscriber)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    async def publish(self, event: dict[str, Any]) -> None:
        with self._lock:
            subscribers = list(self._subscribers)

        for subscriber in subscribers:
            try:
                result = subscriber(event)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.warning(f"Message subscriber failed for {event.get('type', 'event')}: {e}")

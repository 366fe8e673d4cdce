"""Inbound clap event stream shared by detectors and device properties."""

import asyncio
import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class ClapChannel:
    """
    Fan-out channel for clap events.

    Unbound, ``publish`` delivers synchronously on the calling thread. Once
    bound to an event loop, publications from any thread are scheduled on
    that loop so subscribers always run on it.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._subscribers: list[Callable] = []
        self._lock = threading.Lock()
        self._loop = loop

    def bind_loop(self, loop: Optional[asyncio.AbstractEventLoop]) -> None:
        """Route deliveries through ``loop`` (``None`` to deliver synchronously)."""
        self._loop = loop

    def subscribe(self, callback: Callable) -> Callable[[], None]:
        """
        Register a subscriber.

        Args:
            callback: Called with each published event

        Returns:
            A callable that removes this subscription; calling it twice is harmless
        """
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def publish(self, event) -> None:
        """Deliver ``event`` to every current subscriber in subscription order."""
        loop = self._loop
        if loop is not None and not loop.is_closed():
            loop.call_soon_threadsafe(self._deliver, event)
        else:
            self._deliver(event)

    def _deliver(self, event) -> None:
        with self._lock:
            subscribers = list(self._subscribers)

        for callback in subscribers:
            try:
                callback(event)
            except Exception as e:
                logger.error(f"Clap subscriber {callback!r} failed: {e}", exc_info=True)

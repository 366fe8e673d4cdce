"""
Abstract base class for clap detection providers.

This module defines the interface that all clap detection providers must
implement. Providers publish ``ClapEvent`` objects on a ``ClapChannel``;
consumers subscribe through ``on_clap`` and never talk to the audio engine.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, Optional

from .channel import ClapChannel


class ClapEvent:
    """Clap detection event."""

    def __init__(self, timestamp: Optional[datetime] = None, peak: float = 1.0):
        """
        Initialize a clap detection event.

        Args:
            timestamp: When the clap was detected (default: now)
            peak: Normalised signal delta that triggered the detection (0.0 to 1.0)
        """
        self.timestamp = timestamp or datetime.now()
        self.peak = peak

    def __repr__(self) -> str:
        return f"ClapEvent(timestamp={self.timestamp.isoformat()}, peak={self.peak:.2f})"


class ClapDetectorProvider(ABC):
    """
    Abstract base class for clap detection providers.

    All provider implementations must inherit from this class and implement
    ``start`` and ``stop``. Detected claps are published on ``channel``.
    """

    def __init__(self, channel: Optional[ClapChannel] = None):
        self.channel = channel or ClapChannel()
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    def on_clap(self, callback: Callable[[ClapEvent], None]) -> Callable[[], None]:
        """
        Subscribe to clap events.

        Args:
            callback: Called once per detected clap with the event

        Returns:
            A callable that removes the subscription
        """
        return self.channel.subscribe(callback)

    @abstractmethod
    def start(self) -> None:
        """
        Begin sensing.

        Calling start on a running provider is a no-op.

        Raises:
            RuntimeError: If the detection engine cannot be initialised
        """
        pass

    @abstractmethod
    def stop(self) -> None:
        """
        Stop sensing and release resources.

        Can be called multiple times safely.
        """
        pass

    def __enter__(self):
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit with cleanup."""
        self.stop()

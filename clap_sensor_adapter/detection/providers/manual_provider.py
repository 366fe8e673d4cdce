"""Clap provider driven by explicit ``trigger`` calls instead of a microphone."""

import logging
from typing import Optional

from ..channel import ClapChannel
from ..clap_interface import ClapDetectorProvider, ClapEvent

logger = logging.getLogger(__name__)


class ManualClapProvider(ClapDetectorProvider):
    """Publishes synthetic clap events, for demos and deterministic tests."""

    def __init__(self, channel: Optional[ClapChannel] = None):
        super().__init__(channel)

    def start(self) -> None:
        if not self._running:
            self._running = True
            logger.info("Manual clap provider started")

    def stop(self) -> None:
        if self._running:
            self._running = False
            logger.info("Manual clap provider stopped")

    def trigger(self, peak: float = 1.0) -> Optional[ClapEvent]:
        """
        Publish one synthetic clap.

        Args:
            peak: Peak value carried by the event

        Returns:
            The published event, or None if the provider is stopped
        """
        if not self._running:
            logger.warning("Ignoring clap trigger: manual provider is not running")
            return None

        event = ClapEvent(peak=peak)
        self.channel.publish(event)
        return event

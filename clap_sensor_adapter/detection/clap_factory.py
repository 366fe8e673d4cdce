"""
Factory for creating clap detection provider instances.

This module provides a factory function that instantiates the appropriate
clap provider based on configuration, so the audio engine can be swapped
through configuration only.
"""

import logging
from typing import Any, Dict, Optional

from .channel import ClapChannel
from .clap_interface import ClapDetectorProvider
from .providers import ManualClapProvider

logger = logging.getLogger(__name__)


def get_clap_provider(
    provider_name: str = "pyaudio",
    config: Dict[str, Any] | None = None,
    channel: Optional[ClapChannel] = None,
) -> ClapDetectorProvider:
    """
    Factory function to get the appropriate clap detection provider instance.

    Args:
        provider_name: Name of the provider ("pyaudio" or "manual")
        config: Optional configuration dictionary with provider-specific settings.
                If None, uses default values.
        channel: Optional channel the provider publishes on

    Returns:
        ClapDetectorProvider: Instance of the requested provider

    Raises:
        ValueError: If provider_name is not recognized
        RuntimeError: If the provider's audio backend is not installed

    Example:
        >>> provider = get_clap_provider("manual")
        >>> provider.on_clap(lambda event: print(event))
        >>> provider.start()
        >>> provider.trigger()
    """
    config = config or {}

    provider_name_lower = provider_name.lower()

    if provider_name_lower == "pyaudio":
        logger.info("Initializing PyAudio clap provider")
        try:
            from .providers.pyaudio_provider import PyAudioClapProvider
        except ImportError as e:
            raise RuntimeError(
                f"Clap detector initialization failed: PyAudio is not installed ({e}). "
                f"Install the 'audio' extra or use the manual provider."
            ) from e

        return PyAudioClapProvider(
            sample_rate=config.get("sample_rate", 16000),
            channels=config.get("channels", 1),
            frames_per_buffer=config.get("frames_per_buffer", 1024),
            threshold=config.get("threshold", 0.25),
            min_interval_ms=config.get("min_interval_ms", 200),
            device_index=config.get("device_index"),
            channel=channel,
        )

    elif provider_name_lower == "manual":
        logger.info("Initializing manual clap provider")
        return ManualClapProvider(channel=channel)

    else:
        raise ValueError(
            f"Unknown clap provider: {provider_name}. "
            f"Supported providers: pyaudio, manual"
        )

"""Detection module - clap event sources and the channel they publish on."""

from .channel import ClapChannel
from .clap_analysis import detect_clap
from .clap_factory import get_clap_provider
from .clap_interface import ClapDetectorProvider, ClapEvent

__all__ = [
    "ClapChannel",
    "ClapDetectorProvider",
    "ClapEvent",
    "detect_clap",
    "get_clap_provider",
]

"""Sensor module - the clap sensor adapter, device and property."""

from .adapter import ClapSensorAdapter
from .clap_sensor import ClapSensor
from .pairing import PendingPair, PendingUnpair
from .toggle_property import ToggleProperty

__all__ = [
    "ClapSensor",
    "ClapSensorAdapter",
    "PendingPair",
    "PendingUnpair",
    "ToggleProperty",
]

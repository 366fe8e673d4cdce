"""Clap sensor adapter - exposes clap detection as a gateway device."""

from .loader import load_clap_sensor_adapter

__all__ = ["load_clap_sensor_adapter"]

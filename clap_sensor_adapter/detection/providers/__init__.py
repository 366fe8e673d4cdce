"""Clap detection provider implementations.

The PyAudio provider is imported lazily by the factory so the package works
on hosts without PortAudio.
"""

from .manual_provider import ManualClapProvider

__all__ = ["ManualClapProvider"]

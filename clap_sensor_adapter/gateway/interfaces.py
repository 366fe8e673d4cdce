"""
Capability interfaces between the gateway, adapters, devices and properties.

Each layer holds a reference to the capability of the layer above it instead
of inheriting from a framework base class:

- a property reports value changes to its ``PropertyHost`` (the device)
- a device forwards them to its ``DeviceHost`` (the adapter)
- an adapter registers devices with its ``GatewayHost`` (the addon manager)
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..detection.channel import ClapChannel


class PropertyHost(ABC):
    """Capability required by a property from the device that owns it."""

    id: str

    @abstractmethod
    def notify_property_changed(self, prop) -> None:
        """
        Propagate a property value change towards the gateway.

        Args:
            prop: The property whose cached value just changed
        """
        pass


class DeviceHost(ABC):
    """Capability required by a device from the adapter that owns it."""

    @property
    @abstractmethod
    def clap_events(self) -> "ClapChannel":
        """Channel delivering clap events to the adapter's properties."""
        pass

    @abstractmethod
    def send_property_changed_notification(self, prop) -> None:
        """
        Forward a property value change to the gateway.

        Args:
            prop: The property whose cached value just changed
        """
        pass


class GatewayHost(ABC):
    """Capability the gateway's addon manager offers to adapters."""

    @abstractmethod
    def add_adapter(self, adapter) -> None:
        """Register an adapter with the gateway."""
        pass

    @abstractmethod
    def handle_device_added(self, device) -> None:
        """Called after an adapter added a device."""
        pass

    @abstractmethod
    def handle_device_removed(self, device) -> None:
        """Called after an adapter removed a device."""
        pass

    @abstractmethod
    def handle_property_changed(
        self, device_id: str, property_name: str, value: Any
    ) -> None:
        """Called with the exact value of every property change."""
        pass

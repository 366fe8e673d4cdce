"""In-process addon manager used by the service and tests."""

import logging
from typing import Any, Optional

from .interfaces import GatewayHost
from .models import PropertyChange

logger = logging.getLogger(__name__)


class AddonManager(GatewayHost):
    """
    Minimal gateway host that keeps adapters and devices in memory.

    Every property notification is logged and appended to ``history`` in
    arrival order, so the host-visible state of a device can be inspected
    without a running gateway.
    """

    def __init__(self):
        self.adapters: dict[str, Any] = {}
        self.devices: dict[str, Any] = {}
        self.history: list[PropertyChange] = []

    def add_adapter(self, adapter) -> None:
        self.adapters[adapter.id] = adapter
        logger.info(f"Adapter added: {adapter.id} (package={adapter.package_name})")

    def get_adapter(self, adapter_id: str):
        return self.adapters.get(adapter_id)

    def handle_device_added(self, device) -> None:
        self.devices[device.id] = device
        logger.info(f"Device added: {device.id} ({device.name})")

    def handle_device_removed(self, device) -> None:
        self.devices.pop(device.id, None)
        logger.info(f"Device removed: {device.id}")

    def handle_property_changed(
        self, device_id: str, property_name: str, value: Any
    ) -> None:
        change = PropertyChange(
            device_id=device_id,
            property_name=property_name,
            value=value,
        )
        self.history.append(change)
        logger.info(f"Property changed: {device_id}.{property_name} = {value!r}")

    def changes_for(
        self, device_id: str, property_name: Optional[str] = None
    ) -> list[PropertyChange]:
        """
        Return recorded notifications for a device.

        Args:
            device_id: Device to filter on
            property_name: Optional property to filter on

        Returns:
            Matching notifications, oldest first
        """
        return [
            change
            for change in self.history
            if change.device_id == device_id
            and (property_name is None or change.property_name == property_name)
        ]

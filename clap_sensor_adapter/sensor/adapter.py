"""
Clap sensor adapter.

Owns the device registry and implements the two-phase pairing protocol the
gateway drives: ``pair_device``/``unpair_device`` record a single pending
request, and ``start_pairing``/``remove_thing`` consume it.
"""

import logging
from typing import Any, Optional, Union

from ..detection.channel import ClapChannel
from ..errors import AdapterError, DeviceAlreadyExistsError, DeviceNotFoundError
from ..gateway.interfaces import DeviceHost, GatewayHost
from ..gateway.models import DeviceDescription
from .clap_sensor import ClapSensor
from .pairing import PendingPair, PendingRequest, PendingUnpair

logger = logging.getLogger(__name__)

ADAPTER_ID = "ClapSensor"


class ClapSensorAdapter(DeviceHost):
    """
    Registry of clap sensor devices for one gateway.

    The adapter registers itself with the gateway on construction. Pending
    pair/unpair requests live in a single slot (``pending``); cancelling
    does not clear it, only the matching ``start_pairing`` or
    ``remove_thing`` call consumes it.
    """

    def __init__(
        self,
        addon_manager: GatewayHost,
        package_name: str,
        clap_events: Optional[ClapChannel] = None,
    ):
        """
        Initialize the adapter and register it with the gateway.

        Args:
            addon_manager: Gateway capability receiving adapter and device events
            package_name: Name of the add-on package owning this adapter
            clap_events: Channel delivering clap events to device properties
        """
        self.manager = addon_manager
        self.id = ADAPTER_ID
        self.name = ADAPTER_ID
        self.package_name = package_name
        self.devices: dict[str, ClapSensor] = {}
        self.pending: PendingRequest = None
        self._clap_events = clap_events or ClapChannel()

        addon_manager.add_adapter(self)

    @property
    def clap_events(self) -> ClapChannel:
        return self._clap_events

    def send_property_changed_notification(self, prop) -> None:
        self.manager.handle_property_changed(prop.device.id, prop.name, prop.value)

    def handle_device_added(self, device: ClapSensor) -> None:
        self.devices[device.id] = device
        self.manager.handle_device_added(device)

    def handle_device_removed(self, device: ClapSensor) -> None:
        self.devices.pop(device.id, None)
        device.close()
        self.manager.handle_device_removed(device)

    def get_device(self, device_id: str) -> Optional[ClapSensor]:
        return self.devices.get(device_id)

    def get_devices(self) -> dict[str, ClapSensor]:
        return dict(self.devices)

    async def add_device(
        self,
        device_id: str,
        description: Union[DeviceDescription, dict],
    ) -> ClapSensor:
        """
        Add a ClapSensor to the adapter.

        Args:
            device_id: ID of the device to add
            description: Device description with its properties

        Returns:
            The device added

        Raises:
            DeviceAlreadyExistsError: If the id is already registered
        """
        if device_id in self.devices:
            raise DeviceAlreadyExistsError(device_id)

        device = ClapSensor(self, device_id, description)
        self.handle_device_added(device)
        return device

    async def remove_device(self, device_id: str) -> ClapSensor:
        """
        Remove a ClapSensor from the adapter.

        Args:
            device_id: ID of the device to remove

        Returns:
            The device removed

        Raises:
            DeviceNotFoundError: If the id is not registered
        """
        device = self.devices.get(device_id)
        if device is None:
            raise DeviceNotFoundError(device_id)

        self.handle_device_removed(device)
        return device

    async def clear_state(self) -> None:
        """Drop any pending request and remove every device (for tests)."""
        self.pending = None

        for device_id in list(self.devices):
            await self.remove_device(device_id)

    def pair_device(
        self, device_id: str, description: Union[DeviceDescription, dict]
    ) -> None:
        self.pending = PendingPair(
            device_id=device_id,
            description=DeviceDescription.model_validate(description),
        )

    def unpair_device(self, device_id: str) -> None:
        self.pending = PendingUnpair(device_id=device_id)

    async def start_pairing(self, timeout_seconds: float) -> None:
        """
        Add the device recorded by ``pair_device``, if any.

        ``timeout_seconds`` is accepted for the gateway's benefit and not
        enforced here. Failures are logged, never raised.
        """
        logger.info(f"{self.name} id {self.id} pairing started")

        if not isinstance(self.pending, PendingPair):
            return

        request = self.pending
        self.pending = None

        try:
            await self.add_device(request.device_id, request.description)
            logger.info(f"Device {request.device_id} was paired")
        except AdapterError as e:
            logger.error(f"Pairing {request.device_id} failed: {e}")

    def cancel_pairing(self) -> None:
        logger.info(f"{self.name} id {self.id} pairing cancelled")

    async def remove_thing(self, device: Any) -> None:
        """
        Remove the device recorded by ``unpair_device``, if any.

        The device passed by the gateway is only logged; the pending request
        decides what is removed. Failures are logged, never raised.
        """
        logger.info(f"{self.name} id {self.id} remove_thing({device.id}) started")

        if not isinstance(self.pending, PendingUnpair):
            return

        request = self.pending
        self.pending = None

        try:
            await self.remove_device(request.device_id)
            logger.info(f"Device {request.device_id} was unpaired")
        except AdapterError as e:
            logger.error(f"Unpairing {request.device_id} failed: {e}")

    def cancel_remove_thing(self, device: Any) -> None:
        logger.info(f"{self.name} id {self.id} cancel_remove_thing({device.id})")

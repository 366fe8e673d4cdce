"""Virtual clap sensor device."""

import logging
from typing import Any, Optional, Union

from ..gateway.interfaces import DeviceHost, PropertyHost
from ..gateway.models import DeviceDescription
from .toggle_property import ToggleProperty

logger = logging.getLogger(__name__)


class ClapSensor(PropertyHost):
    """
    Device whose properties are built once from a declarative description.

    Every property is a ``ToggleProperty`` wired to the adapter's clap
    channel. Property notifications are forwarded to the adapter.
    """

    def __init__(
        self,
        adapter: DeviceHost,
        device_id: str,
        description: Union[DeviceDescription, dict],
    ):
        self.adapter = adapter
        self.id = device_id

        description = DeviceDescription.model_validate(description)
        self.name = description.name
        self.type = description.type
        self.description = description.description

        self.properties: dict[str, ToggleProperty] = {}
        for property_name, property_description in description.properties.items():
            prop = ToggleProperty(
                self, property_name, property_description, adapter.clap_events
            )
            self.properties[property_name] = prop

        logger.debug(
            f"ClapSensor {device_id} created with properties {list(self.properties)}"
        )

    def notify_property_changed(self, prop) -> None:
        self.adapter.send_property_changed_notification(prop)

    def get_property(self, name: str) -> Optional[ToggleProperty]:
        return self.properties.get(name)

    def close(self) -> None:
        """Detach every property from the clap channel."""
        for prop in self.properties.values():
            prop.close()

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "description": self.description,
            "properties": {
                name: prop.as_dict() for name, prop in self.properties.items()
            },
        }

"""Boolean property flipped by clap events."""

import logging
from typing import Any, Callable, Union

from ..detection.channel import ClapChannel
from ..gateway.interfaces import PropertyHost
from ..gateway.models import PropertyDescription
from ..gateway.values import validate_value

logger = logging.getLogger(__name__)


class ToggleProperty:
    """
    A property whose value changes on ``set_value`` and on every clap.

    The owning device is notified after each change with the freshly cached
    value. Writes from ``set_value`` and from clap events are not
    serialised against each other; the last completed write wins.
    """

    def __init__(
        self,
        device: PropertyHost,
        name: str,
        description: Union[PropertyDescription, dict],
        clap_events: ClapChannel,
    ):
        """
        Initialize the property and subscribe it to clap events.

        Args:
            device: Device owning this property
            name: Property name, unique within the device
            description: Type, unit, description and initial value
            clap_events: Channel delivering clap events
        """
        self.device = device
        self.name = name
        self.schema = PropertyDescription.model_validate(description)
        self.type = self.schema.type
        self.unit = self.schema.unit
        self.description = self.schema.description
        self.value: Any = None

        self.set_cached_value(self.schema.value)
        self.device.notify_property_changed(self)

        self._unsubscribe: Callable[[], None] | None = clap_events.subscribe(self._on_clap)

    def _on_clap(self, event) -> None:
        logger.info(f"Clap! {self.device.id}.{self.name} ({event!r})")
        self.set_cached_value(not self.value)
        self.device.notify_property_changed(self)

    def set_cached_value(self, value: Any) -> Any:
        self.value = value
        return self.value

    def get_value(self) -> Any:
        return self.value

    async def set_value(self, value: Any) -> Any:
        """
        Validate and store a new value, then notify the device.

        The returned value is the one actually stored, which may differ from
        the requested one after coercion or clamping.

        Raises:
            PropertyValidationError: If the value is rejected; the device is
                not notified
        """
        updated_value = validate_value(self.schema, value)
        self.set_cached_value(updated_value)
        self.device.notify_property_changed(self)
        return updated_value

    def close(self) -> None:
        """Stop reacting to clap events."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def as_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "value": self.value,
        }
        if self.unit is not None:
            data["unit"] = self.unit
        if self.description is not None:
            data["description"] = self.description
        if self.schema.minimum is not None:
            data["minimum"] = self.schema.minimum
        if self.schema.maximum is not None:
            data["maximum"] = self.schema.maximum
        if self.schema.read_only:
            data["readOnly"] = True
        return data

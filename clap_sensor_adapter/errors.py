"""Exceptions raised by the clap sensor adapter."""


class AdapterError(ValueError):
    """Base class for device registry errors."""


class DeviceAlreadyExistsError(AdapterError):
    """Raised when adding a device whose id is already registered."""

    def __init__(self, device_id: str):
        super().__init__(f"Device: {device_id} already exists.")
        self.device_id = device_id


class DeviceNotFoundError(AdapterError):
    """Raised when removing a device that is not registered."""

    def __init__(self, device_id: str):
        super().__init__(f"Device: {device_id} not found.")
        self.device_id = device_id


class PropertyValidationError(ValueError):
    """Raised when a value is rejected by a property's description."""

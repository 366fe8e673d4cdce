"""Gateway module - host capabilities, descriptions and value validation."""

from .interfaces import DeviceHost, GatewayHost, PropertyHost
from .manager import AddonManager
from .models import AddonManifest, DeviceDescription, PropertyChange, PropertyDescription
from .values import validate_value

__all__ = [
    "AddonManager",
    "AddonManifest",
    "DeviceDescription",
    "DeviceHost",
    "GatewayHost",
    "PropertyChange",
    "PropertyDescription",
    "PropertyHost",
    "validate_value",
]

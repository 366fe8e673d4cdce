"""Pydantic models for gateway device and property descriptions."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class PropertyDescription(BaseModel):
    """Declarative description of a single device property."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    type: str
    unit: Optional[str] = None
    description: Optional[str] = None
    value: Any = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    read_only: bool = Field(default=False, alias="readOnly")


class DeviceDescription(BaseModel):
    """Declarative description of a device and its properties."""

    name: str
    type: str
    description: Optional[str] = None
    properties: dict[str, PropertyDescription] = Field(default_factory=dict)


class AddonManifest(BaseModel):
    """Metadata the gateway passes to the add-on loader."""

    name: str
    version: str = "0.0.0"
    description: Optional[str] = None


class PropertyChange(BaseModel):
    """A property value notification delivered to the gateway."""

    device_id: str
    property_name: str
    value: Any
    timestamp: str = Field(default_factory=lambda: datetime.now().isoformat())

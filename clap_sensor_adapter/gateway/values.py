"""Validation and coercion of property values against their description."""

from typing import Any

from ..errors import PropertyValidationError
from .models import PropertyDescription


def validate_value(description: PropertyDescription, value: Any) -> Any:
    """
    Validate a requested value and return the value that should be stored.

    The returned value may differ from the requested one: integral floats
    are coerced for integer properties and numbers are clamped into the
    declared minimum/maximum.

    Args:
        description: Description of the property being written
        value: Requested value

    Returns:
        The validated (possibly coerced) value

    Raises:
        PropertyValidationError: If the property is read-only or the value
            does not match the declared type
    """
    if description.read_only:
        raise PropertyValidationError(f"Read-only property: {description.name}")

    value_type = description.type

    if value_type == "boolean":
        if not isinstance(value, bool):
            raise PropertyValidationError(
                f"Invalid value for {description.name}: expected boolean, got {value!r}"
            )
        return value

    if value_type in ("integer", "number"):
        # bool is an int subclass but never a valid number here
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise PropertyValidationError(
                f"Invalid value for {description.name}: expected {value_type}, got {value!r}"
            )
        if value_type == "integer":
            if isinstance(value, float) and not value.is_integer():
                raise PropertyValidationError(
                    f"Invalid value for {description.name}: expected integer, got {value!r}"
                )
            value = int(value)
        return _clamp(description, value)

    if value_type == "string":
        if not isinstance(value, str):
            raise PropertyValidationError(
                f"Invalid value for {description.name}: expected string, got {value!r}"
            )
        return value

    raise PropertyValidationError(
        f"Unsupported property type for {description.name}: {value_type}"
    )


def _clamp(description: PropertyDescription, value):
    if description.minimum is not None and value < description.minimum:
        value = description.minimum
    if description.maximum is not None and value > description.maximum:
        value = description.maximum
    if description.type == "integer":
        return int(value)
    return value

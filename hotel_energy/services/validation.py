"""
services/validation.py
----------------------
Domain validation for tenants, rooms and devices.

Request schemas only guarantee types; the rules that make a value acceptable
for the hotel (name lengths, wattage and usage ranges) live here so every
service path, including bulk ones, applies the same checks.

Each function returns Success(cleaned_value) or a validation Failure whose
field_errors map field names to messages.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable, Optional

from hotel_energy.core.result import Failure, Result, Success, invalid

TENANT_NAME_MIN = 2
NAME_MAX = 255
ROOM_TYPE_MAX = 100
MAX_POWER_WATTS = Decimal("99999999.99")  # Numeric(10, 2)
MAX_USAGE_HOURS = Decimal("24")

_CENTS = Decimal("0.01")


@dataclass(frozen=True)
class RoomInput:
    room_number: str
    room_type: Optional[str]


@dataclass(frozen=True)
class DeviceInput:
    device_name: str
    power_watts: Decimal
    usage_hours_per_day: Decimal


def _to_decimal(value: Any) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    return number if number.is_finite() else None


def validate_tenant_name(name: Any) -> Result[str]:
    cleaned = name.strip() if isinstance(name, str) else ""
    if len(cleaned) < TENANT_NAME_MIN:
        return invalid(
            "Invalid tenant data provided",
            {"name": [f"Name must be at least {TENANT_NAME_MIN} characters"]},
        )
    if len(cleaned) > NAME_MAX:
        return invalid(
            "Invalid tenant data provided",
            {"name": [f"Name must be at most {NAME_MAX} characters"]},
        )
    return Success(cleaned)


def validate_room(room_number: Any, room_type: Any = None) -> Result[RoomInput]:
    errors: dict[str, list[str]] = {}

    number = room_number.strip() if isinstance(room_number, str) else ""
    if not number:
        errors["room_number"] = ["Room number is required"]
    elif len(number) > NAME_MAX:
        errors["room_number"] = [f"Room number must be at most {NAME_MAX} characters"]

    kind = room_type.strip() if isinstance(room_type, str) else None
    if kind and len(kind) > ROOM_TYPE_MAX:
        errors["room_type"] = [f"Room type must be at most {ROOM_TYPE_MAX} characters"]

    if errors:
        return invalid("Invalid room data provided", errors)
    # An empty room type means "no type"
    return Success(RoomInput(room_number=number, room_type=kind or None))


def validate_device(
    device_name: Any, power_watts: Any, usage_hours_per_day: Any
) -> Result[DeviceInput]:
    errors: dict[str, list[str]] = {}

    name = device_name.strip() if isinstance(device_name, str) else ""
    if not name:
        errors["device_name"] = ["Device name is required"]
    elif len(name) > NAME_MAX:
        errors["device_name"] = ["Device name too long"]

    watts = _to_decimal(power_watts)
    if watts is None:
        errors["power_watts"] = ["Power must be a number"]
    elif watts < 0:
        errors["power_watts"] = ["Power must be positive"]
    elif watts > MAX_POWER_WATTS:
        errors["power_watts"] = ["Power is too large"]

    hours = _to_decimal(usage_hours_per_day)
    if hours is None:
        errors["usage_hours_per_day"] = ["Usage hours must be a number"]
    elif hours < 0 or hours > MAX_USAGE_HOURS:
        errors["usage_hours_per_day"] = ["Usage hours must be between 0 and 24"]

    if errors:
        return invalid("Invalid device data provided", errors)
    return Success(
        DeviceInput(
            device_name=name,
            power_watts=watts.quantize(_CENTS, rounding=ROUND_HALF_UP),
            usage_hours_per_day=hours.quantize(_CENTS, rounding=ROUND_HALF_UP),
        )
    )


def validate_device_batch(items: Iterable[Any]) -> Result[list[DeviceInput]]:
    """
    Validate a list of device payloads (anything with device_name,
    power_watts and usage_hours_per_day attributes).

    Field errors are keyed "devices.<index>.<field>" so a form can point at
    the offending row. An empty list is rejected.
    """
    cleaned: list[DeviceInput] = []
    errors: dict[str, list[str]] = {}

    for index, item in enumerate(items):
        result = validate_device(
            item.device_name, item.power_watts, item.usage_hours_per_day
        )
        if isinstance(result, Failure):
            for field, messages in result.field_errors.items():
                errors[f"devices.{index}.{field}"] = messages
        else:
            cleaned.append(result.value)

    if errors:
        return invalid("Invalid device data provided", errors)
    if not cleaned:
        return invalid("No devices to save")
    return Success(cleaned)

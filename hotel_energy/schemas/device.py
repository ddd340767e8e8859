"""
schemas/device.py
-----------------
Pydantic models for electrical devices.

Numeric columns are Numeric(10, 2) / Numeric(4, 2) in the database and come
back as Decimal; responses expose them as plain JSON numbers.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from hotel_energy.services.consumption import device_consumption, display


class DeviceFields(BaseModel):
    device_name: str = Field(..., examples=["Air conditioner"])
    power_watts: float = Field(..., examples=[1500], description="Rated power draw in watts")
    usage_hours_per_day: float = Field(
        ..., examples=[8], description="Average hours switched on per day (0-24)"
    )


class DeviceCreate(DeviceFields):
    room_id: Optional[str] = Field(
        default=None, description="Leave empty for a device not assigned to any room"
    )


class DeviceUpdate(DeviceFields):
    pass


class DeviceBatchCreate(BaseModel):
    devices: list[DeviceFields]


class DeviceBatchUpdateItem(DeviceFields):
    id: str


class DeviceBatchUpdate(BaseModel):
    devices: list[DeviceBatchUpdateItem]


class DeviceRead(BaseModel):
    id: str
    tenant_id: str
    room_id: Optional[str]
    device_name: str
    power_watts: float
    usage_hours_per_day: float
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class DeviceConsumptionRead(DeviceRead):
    """Device row plus its consumption at the default rate."""
    daily_kwh: float
    monthly_kwh: float
    yearly_kwh: float
    yearly_cost: float

    @classmethod
    def from_device(cls, device) -> "DeviceConsumptionRead":
        usage = device_consumption(device)
        return cls(
            **DeviceRead.model_validate(device).model_dump(),
            daily_kwh=display(usage.daily_kwh),
            monthly_kwh=display(usage.monthly_kwh),
            yearly_kwh=display(usage.yearly_kwh),
            yearly_cost=display(usage.yearly_cost),
        )

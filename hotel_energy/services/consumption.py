"""
services/consumption.py
-----------------------
Energy-consumption arithmetic for devices, rooms and tenants.

Everything here is a pure function of its arguments: no database access, no
settings lookups, no logging. Callers pass ORM rows (or anything exposing the
same attributes) and get plain dataclasses back.

Units and conventions:
  - power in watts, usage in hours per day
  - a month is 30 days and a year is 365 days, not calendar-aware
  - values stay unrounded floats; rounding to 2 decimals is a presentation
    concern handled by the response schemas (see display()).
"""

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Iterable, Protocol, Sequence

DAYS_PER_MONTH = 30
DAYS_PER_YEAR = 365
WATT_HOURS_PER_KWH = 1000

_CENTS = Decimal("0.01")

DEFAULT_PRICE_PER_KWH = 0.15
# The dashboard always estimates cost at this rate; the report lets the user
# pick their own.
DASHBOARD_PRICE_PER_KWH = 0.15

HIGH_DAILY_KWH = 20
MODERATE_DAILY_KWH = 10


class HealthStatus(str, Enum):
    good = "good"
    moderate = "moderate"
    high = "high"


class DeviceLike(Protocol):
    power_watts: Any
    usage_hours_per_day: Any


class RoomLike(Protocol):
    devices: Sequence[DeviceLike]


@dataclass(frozen=True)
class DeviceConsumption:
    daily_watt_hours: float
    daily_kwh: float
    monthly_kwh: float
    yearly_kwh: float
    yearly_cost: float


@dataclass(frozen=True)
class RoomConsumption:
    device_count: int
    daily_watt_hours: float
    daily_kwh: float
    monthly_kwh: float
    yearly_kwh: float
    yearly_cost: float
    health_status: HealthStatus


@dataclass(frozen=True)
class TenantStats:
    total_rooms: int
    total_devices: int
    total_daily_kwh: float
    total_monthly_kwh: float
    estimated_monthly_cost: float


@dataclass(frozen=True)
class ReportRow:
    room: Any
    consumption: RoomConsumption
    percentage_of_total: float


@dataclass(frozen=True)
class ReportTotals:
    devices: int
    daily_kwh: float
    monthly_kwh: float
    yearly_kwh: float
    yearly_cost: float


@dataclass(frozen=True)
class PowerReport:
    price_per_kwh: float
    rows: list[ReportRow]
    totals: ReportTotals


def _from_watt_hours(daily_watt_hours: float, price_per_kwh: float) -> tuple[float, float, float, float]:
    daily_kwh = daily_watt_hours / WATT_HOURS_PER_KWH
    yearly_kwh = daily_kwh * DAYS_PER_YEAR
    return daily_kwh, daily_kwh * DAYS_PER_MONTH, yearly_kwh, yearly_kwh * price_per_kwh


def device_consumption(
    device: DeviceLike, price_per_kwh: float = DEFAULT_PRICE_PER_KWH
) -> DeviceConsumption:
    """Daily/monthly/yearly kWh and yearly cost for a single device."""
    daily_watt_hours = float(device.power_watts) * float(device.usage_hours_per_day)
    daily_kwh, monthly_kwh, yearly_kwh, yearly_cost = _from_watt_hours(
        daily_watt_hours, price_per_kwh
    )
    return DeviceConsumption(
        daily_watt_hours=daily_watt_hours,
        daily_kwh=daily_kwh,
        monthly_kwh=monthly_kwh,
        yearly_kwh=yearly_kwh,
        yearly_cost=yearly_cost,
    )


def classify_health(daily_kwh: float) -> HealthStatus:
    if daily_kwh > HIGH_DAILY_KWH:
        return HealthStatus.high
    if daily_kwh > MODERATE_DAILY_KWH:
        return HealthStatus.moderate
    return HealthStatus.good


def room_consumption(
    devices: Iterable[DeviceLike], price_per_kwh: float = DEFAULT_PRICE_PER_KWH
) -> RoomConsumption:
    """
    Roll a room's devices up into one figure.

    Device watt-hours are summed before converting, so the room total never
    carries per-device rounding.
    """
    device_count = 0
    daily_watt_hours = 0.0
    for device in devices:
        daily_watt_hours += device_consumption(device, price_per_kwh).daily_watt_hours
        device_count += 1

    daily_kwh, monthly_kwh, yearly_kwh, yearly_cost = _from_watt_hours(
        daily_watt_hours, price_per_kwh
    )
    return RoomConsumption(
        device_count=device_count,
        daily_watt_hours=daily_watt_hours,
        daily_kwh=daily_kwh,
        monthly_kwh=monthly_kwh,
        yearly_kwh=yearly_kwh,
        yearly_cost=yearly_cost,
        health_status=classify_health(daily_kwh),
    )


def estimated_monthly_cost(monthly_kwh: float) -> float:
    return monthly_kwh * DASHBOARD_PRICE_PER_KWH


def tenant_stats(rooms: Sequence[RoomConsumption]) -> TenantStats:
    """Dashboard totals over already rolled-up rooms."""
    total_monthly_kwh = sum(room.monthly_kwh for room in rooms)
    return TenantStats(
        total_rooms=len(rooms),
        total_devices=sum(room.device_count for room in rooms),
        total_daily_kwh=sum(room.daily_kwh for room in rooms),
        total_monthly_kwh=total_monthly_kwh,
        estimated_monthly_cost=estimated_monthly_cost(total_monthly_kwh),
    )


def parse_price(text: str | None) -> float:
    """
    Parse a user-typed electricity rate.

    Empty, unparsable, non-finite and negative input all count as 0 so a
    half-typed value never breaks the report.
    """
    if text is None:
        return 0.0
    try:
        price = float(str(text).strip())
    except ValueError:
        return 0.0
    if not math.isfinite(price) or price < 0:
        return 0.0
    return price


def build_report(rooms: Sequence[RoomLike], price_per_kwh: float) -> PowerReport:
    """
    Recompute every room at the given rate and rank them by yearly usage.

    Rooms come back sorted by yearly kWh, highest first; equal rooms keep
    their input order. percentage_of_total is 0 for every room when the
    hotel uses no energy at all.
    """
    computed = [(room, room_consumption(room.devices, price_per_kwh)) for room in rooms]
    total_yearly_kwh = sum(c.yearly_kwh for _, c in computed)

    rows = [
        ReportRow(
            room=room,
            consumption=c,
            percentage_of_total=(
                c.yearly_kwh / total_yearly_kwh * 100 if total_yearly_kwh > 0 else 0.0
            ),
        )
        for room, c in computed
    ]
    rows.sort(key=lambda row: row.consumption.yearly_kwh, reverse=True)

    totals = ReportTotals(
        devices=sum(c.device_count for _, c in computed),
        daily_kwh=sum(c.daily_kwh for _, c in computed),
        monthly_kwh=sum(c.monthly_kwh for _, c in computed),
        yearly_kwh=total_yearly_kwh,
        yearly_cost=sum(c.yearly_cost for _, c in computed),
    )
    return PowerReport(price_per_kwh=price_per_kwh, rows=rows, totals=totals)


def display(value: float) -> float:
    """Round a figure for output, halves up. Only call this on final values."""
    return float(Decimal(str(value)).quantize(_CENTS, rounding=ROUND_HALF_UP))

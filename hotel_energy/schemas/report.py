"""
schemas/report.py
-----------------
Response models for the tenant dashboard and the power-consumption report.

All kWh and cost figures are rounded to 2 decimals when these models are
built; nothing downstream aggregates them again.
"""

from pydantic import BaseModel

from hotel_energy.schemas.room import RoomRead
from hotel_energy.schemas.tenant import TenantRead
from hotel_energy.services.consumption import HealthStatus


class RoomMetricsRead(RoomRead):
    device_count: int
    daily_kwh: float
    monthly_kwh: float
    yearly_kwh: float
    health_status: HealthStatus


class RoomConsumptionRead(BaseModel):
    """One room's usage, with the monthly cost at the dashboard rate."""
    room: RoomRead
    device_count: int
    daily_kwh: float
    monthly_kwh: float
    yearly_kwh: float
    estimated_monthly_cost: float
    health_status: HealthStatus


class TenantStatsRead(BaseModel):
    total_rooms: int
    total_devices: int
    total_daily_kwh: float
    total_monthly_kwh: float
    estimated_monthly_cost: float


class DashboardRead(BaseModel):
    tenant: TenantRead
    rooms: list[RoomMetricsRead]
    stats: TenantStatsRead


class ReportRoomRead(BaseModel):
    room: RoomRead
    device_count: int
    daily_kwh: float
    monthly_kwh: float
    yearly_kwh: float
    yearly_cost: float
    percentage_of_total: float


class ReportTotalsRead(BaseModel):
    devices: int
    daily_kwh: float
    monthly_kwh: float
    yearly_kwh: float
    yearly_cost: float


class PowerReportRead(BaseModel):
    tenant: TenantRead
    price_per_kwh: float
    total_rooms: int
    rooms: list[ReportRoomRead]
    totals: ReportTotalsRead

"""
services/report_service.py
--------------------------
Loads a tenant's room → device tree and turns it into the dashboard, the
power-consumption report and the single-room consumption summary.

The arithmetic lives in services/consumption.py. This module only fetches
fresh rows and shapes the results into response schemas, rounding figures
to 2 decimals as the very last step. Nothing is cached: every call reads the
latest committed data.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from hotel_energy.core.logging import get_logger
from hotel_energy.core.result import Result, Success, not_found
from hotel_energy.models.room import Room
from hotel_energy.models.tenant import Tenant
from hotel_energy.schemas.report import (
    DashboardRead,
    PowerReportRead,
    ReportRoomRead,
    ReportTotalsRead,
    RoomConsumptionRead,
    RoomMetricsRead,
    TenantStatsRead,
)
from hotel_energy.schemas.room import RoomRead
from hotel_energy.schemas.tenant import TenantRead
from hotel_energy.services import consumption
from hotel_energy.services.consumption import display

logger = get_logger(__name__)


class ReportService:

    @staticmethod
    async def _rooms_with_devices(db: AsyncSession, tenant_id: str) -> list[Room]:
        result = await db.execute(
            select(Room)
            .options(selectinload(Room.devices))
            .where(Room.tenant_id == tenant_id)
            .order_by(Room.display_order, Room.room_number)
        )
        return list(result.scalars().all())

    @staticmethod
    async def get_room_consumption(
        db: AsyncSession, tenant_id: str, room_id: str
    ) -> Result[RoomConsumptionRead]:
        result = await db.execute(
            select(Room)
            .options(selectinload(Room.devices))
            .where(Room.id == room_id, Room.tenant_id == tenant_id)
        )
        room = result.scalar_one_or_none()
        if room is None:
            return not_found("Room")

        c = consumption.room_consumption(room.devices)
        return Success(
            RoomConsumptionRead(
                room=RoomRead.model_validate(room),
                device_count=c.device_count,
                daily_kwh=display(c.daily_kwh),
                monthly_kwh=display(c.monthly_kwh),
                yearly_kwh=display(c.yearly_kwh),
                estimated_monthly_cost=display(
                    consumption.estimated_monthly_cost(c.monthly_kwh)
                ),
                health_status=c.health_status,
            )
        )

    @staticmethod
    async def get_dashboard(db: AsyncSession, tenant: Tenant) -> DashboardRead:
        rooms = await ReportService._rooms_with_devices(db, tenant.id)

        per_room = [consumption.room_consumption(room.devices) for room in rooms]
        stats = consumption.tenant_stats(per_room)

        logger.debug(
            "Dashboard computed",
            tenant_id=tenant.id,
            rooms=stats.total_rooms,
            devices=stats.total_devices,
        )
        return DashboardRead(
            tenant=TenantRead.model_validate(tenant),
            rooms=[
                RoomMetricsRead(
                    **RoomRead.model_validate(room).model_dump(),
                    device_count=c.device_count,
                    daily_kwh=display(c.daily_kwh),
                    monthly_kwh=display(c.monthly_kwh),
                    yearly_kwh=display(c.yearly_kwh),
                    health_status=c.health_status,
                )
                for room, c in zip(rooms, per_room)
            ],
            stats=TenantStatsRead(
                total_rooms=stats.total_rooms,
                total_devices=stats.total_devices,
                total_daily_kwh=display(stats.total_daily_kwh),
                total_monthly_kwh=display(stats.total_monthly_kwh),
                estimated_monthly_cost=display(stats.estimated_monthly_cost),
            ),
        )

    @staticmethod
    async def get_power_report(
        db: AsyncSession, tenant: Tenant, price_per_kwh: float
    ) -> PowerReportRead:
        rooms = await ReportService._rooms_with_devices(db, tenant.id)
        report = consumption.build_report(rooms, price_per_kwh)

        logger.debug(
            "Power report computed",
            tenant_id=tenant.id,
            price_per_kwh=price_per_kwh,
            rooms=len(report.rows),
        )
        return PowerReportRead(
            tenant=TenantRead.model_validate(tenant),
            price_per_kwh=price_per_kwh,
            total_rooms=len(report.rows),
            rooms=[
                ReportRoomRead(
                    room=RoomRead.model_validate(row.room),
                    device_count=row.consumption.device_count,
                    daily_kwh=display(row.consumption.daily_kwh),
                    monthly_kwh=display(row.consumption.monthly_kwh),
                    yearly_kwh=display(row.consumption.yearly_kwh),
                    yearly_cost=display(row.consumption.yearly_cost),
                    percentage_of_total=display(row.percentage_of_total),
                )
                for row in report.rows
            ],
            totals=ReportTotalsRead(
                devices=report.totals.devices,
                daily_kwh=display(report.totals.daily_kwh),
                monthly_kwh=display(report.totals.monthly_kwh),
                yearly_kwh=display(report.totals.yearly_kwh),
                yearly_cost=display(report.totals.yearly_cost),
            ),
        )

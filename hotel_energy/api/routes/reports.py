"""
api/routes/reports.py
---------------------
Read-only consumption views of a tenant.

GET /tenants/{tenant_id}/dashboard               — Rooms with health status + hotel totals
GET /tenants/{tenant_id}/report?price_per_kwh=   — Rooms ranked by yearly usage at a chosen rate

Both are recomputed from the database on every request.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_energy.db.session import get_db
from hotel_energy.dependencies import get_price_per_kwh, get_tenant
from hotel_energy.models.tenant import Tenant
from hotel_energy.schemas.report import DashboardRead, PowerReportRead
from hotel_energy.services.report_service import ReportService

router = APIRouter(prefix="/tenants/{tenant_id}", tags=["Reports"])


@router.get(
    "/dashboard",
    response_model=DashboardRead,
    summary="Tenant dashboard with per-room health and totals",
)
async def get_dashboard(
    tenant: Annotated[Tenant, Depends(get_tenant)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DashboardRead:
    return await ReportService.get_dashboard(db, tenant)


@router.get(
    "/report",
    response_model=PowerReportRead,
    summary="Power-consumption report at a given electricity rate",
)
async def get_power_report(
    tenant: Annotated[Tenant, Depends(get_tenant)],
    db: Annotated[AsyncSession, Depends(get_db)],
    price_per_kwh: Annotated[float, Depends(get_price_per_kwh)],
) -> PowerReportRead:
    """
    `price_per_kwh` is taken as typed: leave it out for the default rate,
    anything that is not a non-negative number counts as 0.
    """
    return await ReportService.get_power_report(db, tenant, price_per_kwh)

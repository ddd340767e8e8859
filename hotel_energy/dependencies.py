"""
dependencies.py
---------------
FastAPI dependency injection functions shared by the routers.

get_tenant:        resolves the {tenant_id} path parameter to a Tenant row,
                   answering 404 when it does not exist. Every tenant-scoped
                   route depends on it, so nothing below it has to repeat
                   the existence check.
get_price_per_kwh: reads the report's ?price_per_kwh= query string the way
                   the rate input field behaves: missing → configured
                   default, anything unparsable → 0.
"""

from typing import Annotated, Optional

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_energy.api.errors import ServiceFailure
from hotel_energy.core.config import settings
from hotel_energy.core.result import not_found
from hotel_energy.db.session import get_db
from hotel_energy.models.tenant import Tenant
from hotel_energy.services.consumption import parse_price
from hotel_energy.services.tenant_service import TenantService


async def get_tenant(
    tenant_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Tenant:
    tenant = await TenantService.get_tenant_by_id(db, tenant_id)
    if tenant is None:
        raise ServiceFailure(not_found("Tenant"))
    return tenant


def get_price_per_kwh(
    price_per_kwh: Optional[str] = Query(
        default=None,
        description="Electricity rate per kWh as typed by the user",
        examples=["0.15"],
    ),
) -> float:
    if price_per_kwh is None:
        return settings.DEFAULT_PRICE_PER_KWH
    return parse_price(price_per_kwh)

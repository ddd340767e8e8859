"""
api/routes/tenants.py
---------------------
Tenant (hotel) management endpoints.

POST   /tenants              — Create a hotel.
GET    /tenants              — List hotels by name.
GET    /tenants/{tenant_id}  — Fetch one hotel.
PATCH  /tenants/{tenant_id}  — Rename a hotel.
DELETE /tenants/{tenant_id}  — Delete a hotel with all its rooms and devices.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_energy.api.errors import unwrap
from hotel_energy.api.invalidation import mark_stale, tenant_views
from hotel_energy.db.session import get_db
from hotel_energy.dependencies import get_tenant
from hotel_energy.models.tenant import Tenant
from hotel_energy.schemas.tenant import TenantCreate, TenantRead, TenantUpdate
from hotel_energy.services.tenant_service import TenantService

router = APIRouter(prefix="/tenants", tags=["Tenants"])


@router.post(
    "",
    response_model=TenantRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new tenant (hotel)",
)
async def create_tenant(
    body: TenantCreate,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TenantRead:
    tenant = unwrap(await TenantService.create_tenant(db, body))
    mark_stale(response, tenant_views(tenant.id))
    return TenantRead.model_validate(tenant)


@router.get("", response_model=list[TenantRead], summary="List all tenants")
async def list_tenants(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[TenantRead]:
    tenants = await TenantService.list_tenants(db)
    return [TenantRead.model_validate(t) for t in tenants]


@router.get("/{tenant_id}", response_model=TenantRead, summary="Get a tenant")
async def get_tenant_detail(
    tenant: Annotated[Tenant, Depends(get_tenant)],
) -> TenantRead:
    return TenantRead.model_validate(tenant)


@router.patch("/{tenant_id}", response_model=TenantRead, summary="Rename a tenant")
async def update_tenant(
    tenant_id: str,
    body: TenantUpdate,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TenantRead:
    tenant = unwrap(await TenantService.update_tenant(db, tenant_id, body))
    mark_stale(response, tenant_views(tenant.id))
    return TenantRead.model_validate(tenant)


@router.delete(
    "/{tenant_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a tenant and everything in it",
)
async def delete_tenant(
    tenant_id: str,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """
    Rooms and devices are removed by the database cascade.
    """
    unwrap(await TenantService.delete_tenant(db, tenant_id))
    mark_stale(response, tenant_views(tenant_id))

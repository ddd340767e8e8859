"""
api/routes/devices.py
---------------------
Tenant-level device endpoints.

POST   /tenants/{tenant_id}/devices               — Create a device (room optional)
POST   /tenants/{tenant_id}/devices/batch         — Create several devices outside any room
GET    /tenants/{tenant_id}/devices               — All devices, newest first (?unassigned=true for room-less ones)
PATCH  /tenants/{tenant_id}/devices/{device_id}   — Update name / watts / hours
DELETE /tenants/{tenant_id}/devices/{device_id}   — Delete a device

Room-scoped batch operations live in api/routes/rooms.py.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_energy.api.errors import unwrap
from hotel_energy.api.invalidation import mark_stale, room_views, tenant_views
from hotel_energy.db.session import get_db
from hotel_energy.dependencies import get_tenant
from hotel_energy.models.tenant import Tenant
from hotel_energy.schemas.device import (
    DeviceBatchCreate,
    DeviceConsumptionRead,
    DeviceCreate,
    DeviceRead,
    DeviceUpdate,
)
from hotel_energy.services.device_service import DeviceService

router = APIRouter(prefix="/tenants/{tenant_id}/devices", tags=["Devices"])


@router.post(
    "",
    response_model=DeviceRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a device",
)
async def create_device(
    body: DeviceCreate,
    response: Response,
    tenant: Annotated[Tenant, Depends(get_tenant)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DeviceRead:
    device = unwrap(await DeviceService.create_device(db, tenant.id, body))
    mark_stale(response, room_views(tenant.id, device.room_id))
    return DeviceRead.model_validate(device)


@router.post(
    "/batch",
    response_model=list[DeviceRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create several unassigned devices",
)
async def save_devices(
    body: DeviceBatchCreate,
    response: Response,
    tenant: Annotated[Tenant, Depends(get_tenant)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[DeviceRead]:
    devices = unwrap(await DeviceService.save_devices(db, tenant.id, body.devices))
    mark_stale(response, tenant_views(tenant.id))
    return [DeviceRead.model_validate(d) for d in devices]


@router.get(
    "",
    response_model=list[DeviceConsumptionRead],
    summary="List a tenant's devices with their consumption",
)
async def list_devices(
    tenant: Annotated[Tenant, Depends(get_tenant)],
    db: Annotated[AsyncSession, Depends(get_db)],
    unassigned: bool = Query(default=False, description="Only devices not placed in a room"),
) -> list[DeviceConsumptionRead]:
    devices = await DeviceService.list_devices_for_tenant(db, tenant.id, unassigned_only=unassigned)
    return [DeviceConsumptionRead.from_device(d) for d in devices]


@router.patch("/{device_id}", response_model=DeviceRead, summary="Update a device")
async def update_device(
    device_id: str,
    body: DeviceUpdate,
    response: Response,
    tenant: Annotated[Tenant, Depends(get_tenant)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DeviceRead:
    device = unwrap(await DeviceService.update_device(db, tenant.id, device_id, body))
    mark_stale(response, room_views(tenant.id, device.room_id))
    return DeviceRead.model_validate(device)


@router.delete(
    "/{device_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a device",
)
async def delete_device(
    device_id: str,
    response: Response,
    tenant: Annotated[Tenant, Depends(get_tenant)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    room_id = unwrap(await DeviceService.delete_device(db, tenant.id, device_id))
    mark_stale(response, room_views(tenant.id, room_id))

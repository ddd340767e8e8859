"""
api/routes/rooms.py
-------------------
Room endpoints, all scoped to one tenant.

POST   /tenants/{tenant_id}/rooms                            — Create a room (appended to display order)
GET    /tenants/{tenant_id}/rooms                            — Rooms in display order with device counts
GET    /tenants/{tenant_id}/rooms/{room_id}                  — One room
PATCH  /tenants/{tenant_id}/rooms/{room_id}                  — Change number / type
DELETE /tenants/{tenant_id}/rooms/{room_id}                  — Delete a room and its devices
GET    /tenants/{tenant_id}/rooms/{room_id}/consumption      — Usage, monthly cost and health of the room
GET    /tenants/{tenant_id}/rooms/{room_id}/next             — Where to go after this room
POST   /tenants/{tenant_id}/rooms/{room_id}/copy-devices     — Copy this room's devices elsewhere
GET    /tenants/{tenant_id}/rooms/{room_id}/devices          — Devices in the room
POST   /tenants/{tenant_id}/rooms/{room_id}/devices          — Add a batch of devices
PUT    /tenants/{tenant_id}/rooms/{room_id}/devices          — Update a batch of devices atomically
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_energy.api.errors import unwrap
from hotel_energy.api.invalidation import mark_stale, room_views
from hotel_energy.db.session import get_db
from hotel_energy.dependencies import get_tenant
from hotel_energy.models.tenant import Tenant
from hotel_energy.schemas.device import (
    DeviceBatchCreate,
    DeviceBatchUpdate,
    DeviceConsumptionRead,
    DeviceRead,
)
from hotel_energy.schemas.report import RoomConsumptionRead
from hotel_energy.schemas.room import (
    CopyDevicesRead,
    CopyDevicesRequest,
    NextRoomRead,
    RoomCreate,
    RoomListItem,
    RoomRead,
    RoomUpdate,
)
from hotel_energy.services.device_service import DeviceService
from hotel_energy.services.navigation import NextRoom
from hotel_energy.services.report_service import ReportService
from hotel_energy.services.room_service import RoomService

router = APIRouter(prefix="/tenants/{tenant_id}/rooms", tags=["Rooms"])

TenantDep = Annotated[Tenant, Depends(get_tenant)]
DbDep = Annotated[AsyncSession, Depends(get_db)]


@router.post(
    "",
    response_model=RoomRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a room",
)
async def create_room(
    body: RoomCreate, response: Response, tenant: TenantDep, db: DbDep
) -> RoomRead:
    room = unwrap(await RoomService.create_room(db, tenant.id, body))
    mark_stale(response, room_views(tenant.id, room.id))
    return RoomRead.model_validate(room)


@router.get("", response_model=list[RoomListItem], summary="List rooms in display order")
async def list_rooms(tenant: TenantDep, db: DbDep) -> list[RoomListItem]:
    rows = await RoomService.list_rooms(db, tenant.id)
    return [
        RoomListItem(**RoomRead.model_validate(room).model_dump(), device_count=count)
        for room, count in rows
    ]


@router.get("/{room_id}", response_model=RoomRead, summary="Get a room")
async def get_room(room_id: str, tenant: TenantDep, db: DbDep) -> RoomRead:
    room = unwrap(await RoomService.get_room(db, tenant.id, room_id))
    return RoomRead.model_validate(room)


@router.patch("/{room_id}", response_model=RoomRead, summary="Update a room")
async def update_room(
    room_id: str, body: RoomUpdate, response: Response, tenant: TenantDep, db: DbDep
) -> RoomRead:
    room = unwrap(await RoomService.update_room(db, tenant.id, room_id, body))
    mark_stale(response, room_views(tenant.id, room.id))
    return RoomRead.model_validate(room)


@router.delete(
    "/{room_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a room and its devices",
)
async def delete_room(
    room_id: str, response: Response, tenant: TenantDep, db: DbDep
) -> None:
    unwrap(await RoomService.delete_room(db, tenant.id, room_id))
    mark_stale(response, room_views(tenant.id, room_id))


@router.get(
    "/{room_id}/consumption",
    response_model=RoomConsumptionRead,
    summary="Energy usage summary of one room",
)
async def get_room_consumption(
    room_id: str, tenant: TenantDep, db: DbDep
) -> RoomConsumptionRead:
    return unwrap(await ReportService.get_room_consumption(db, tenant.id, room_id))


@router.get(
    "/{room_id}/next",
    response_model=NextRoomRead,
    summary="Find the room that follows this one",
)
async def get_next_room(room_id: str, tenant: TenantDep, db: DbDep) -> NextRoomRead:
    """
    Returns `next_room` with the following room, or `return_to_tenant` when
    this is the hotel's last room.
    """
    target = unwrap(await RoomService.get_next_room(db, tenant.id, room_id))
    if isinstance(target, NextRoom):
        return NextRoomRead(
            action="next_room",
            tenant_id=tenant.id,
            room=RoomRead.model_validate(target.room),
        )
    return NextRoomRead(action="return_to_tenant", tenant_id=target.tenant_id)


@router.post(
    "/{room_id}/copy-devices",
    response_model=CopyDevicesRead,
    status_code=status.HTTP_201_CREATED,
    summary="Copy every device of this room into another room",
)
async def copy_room_devices(
    room_id: str,
    body: CopyDevicesRequest,
    response: Response,
    tenant: TenantDep,
    db: DbDep,
) -> CopyDevicesRead:
    result = await RoomService.copy_room_devices(db, tenant.id, room_id, body.target_room_id)
    copies = unwrap(result)
    mark_stale(response, room_views(tenant.id, body.target_room_id))
    return CopyDevicesRead(copied=len(copies), message=result.message)


@router.get(
    "/{room_id}/devices",
    response_model=list[DeviceConsumptionRead],
    summary="List the devices in a room",
)
async def list_room_devices(
    room_id: str, tenant: TenantDep, db: DbDep
) -> list[DeviceConsumptionRead]:
    devices = unwrap(await DeviceService.list_devices_for_room(db, tenant.id, room_id))
    return [DeviceConsumptionRead.from_device(d) for d in devices]


@router.post(
    "/{room_id}/devices",
    response_model=list[DeviceRead],
    status_code=status.HTTP_201_CREATED,
    summary="Add several devices to a room",
)
async def save_room_devices(
    room_id: str,
    body: DeviceBatchCreate,
    response: Response,
    tenant: TenantDep,
    db: DbDep,
) -> list[DeviceRead]:
    devices = unwrap(
        await DeviceService.save_devices_to_room(db, tenant.id, room_id, body.devices)
    )
    mark_stale(response, room_views(tenant.id, room_id))
    return [DeviceRead.model_validate(d) for d in devices]


@router.put(
    "/{room_id}/devices",
    response_model=list[DeviceRead],
    summary="Update several devices of a room in one transaction",
)
async def update_room_devices(
    room_id: str,
    body: DeviceBatchUpdate,
    response: Response,
    tenant: TenantDep,
    db: DbDep,
) -> list[DeviceRead]:
    devices = unwrap(
        await DeviceService.update_devices_in_room(db, tenant.id, room_id, body.devices)
    )
    mark_stale(response, room_views(tenant.id, room_id))
    return [DeviceRead.model_validate(d) for d in devices]

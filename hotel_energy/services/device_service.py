"""
services/device_service.py
--------------------------
Business logic for electrical devices.

Devices always carry their tenant_id. A device may sit in a room of that
tenant or in no room at all; a room_id from another tenant is treated as a
missing room.

Batch paths (save several devices into a room, update several devices at
once) validate every row before writing any of them and run inside the
request's single transaction, so they either apply completely or not at all.
"""

from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_energy.core.logging import get_logger
from hotel_energy.core.result import Failure, Result, Success, not_found
from hotel_energy.models.device import ElectricalDevice
from hotel_energy.schemas.device import (
    DeviceBatchUpdateItem,
    DeviceCreate,
    DeviceFields,
    DeviceUpdate,
)
from hotel_energy.services.room_service import RoomService
from hotel_energy.services.validation import (
    DeviceInput,
    validate_device,
    validate_device_batch,
)

logger = get_logger(__name__)


def _apply(device: ElectricalDevice, fields: DeviceInput) -> None:
    device.device_name = fields.device_name
    device.power_watts = fields.power_watts
    device.usage_hours_per_day = fields.usage_hours_per_day


async def _insert(
    db: AsyncSession,
    tenant_id: str,
    room_id: Optional[str],
    rows: Sequence[DeviceInput],
) -> list[ElectricalDevice]:
    devices = []
    for fields in rows:
        device = ElectricalDevice(tenant_id=tenant_id, room_id=room_id)
        _apply(device, fields)
        devices.append(device)
    db.add_all(devices)
    await db.flush()
    for device in devices:
        await db.refresh(device)
    return devices


class DeviceService:

    @staticmethod
    async def create_device(
        db: AsyncSession, tenant_id: str, data: DeviceCreate
    ) -> Result[ElectricalDevice]:
        checked = validate_device(data.device_name, data.power_watts, data.usage_hours_per_day)
        if isinstance(checked, Failure):
            return checked

        if data.room_id is not None:
            found = await RoomService.get_room(db, tenant_id, data.room_id)
            if isinstance(found, Failure):
                return found

        device = ElectricalDevice(tenant_id=tenant_id, room_id=data.room_id)
        _apply(device, checked.value)
        db.add(device)
        await db.flush()
        await db.refresh(device)

        logger.info(
            "Device created",
            device_id=device.id,
            tenant_id=tenant_id,
            room_id=device.room_id,
        )
        return Success(device, "Device created successfully")

    @staticmethod
    async def list_devices_for_tenant(
        db: AsyncSession, tenant_id: str, unassigned_only: bool = False
    ) -> list[ElectricalDevice]:
        """All devices of a tenant, newest first. Optionally only those in no room."""
        query = select(ElectricalDevice).where(ElectricalDevice.tenant_id == tenant_id)
        if unassigned_only:
            query = query.where(ElectricalDevice.room_id.is_(None))
        result = await db.execute(
            query.order_by(ElectricalDevice.created_at.desc(), ElectricalDevice.id)
        )
        return list(result.scalars().all())

    @staticmethod
    async def list_devices_for_room(
        db: AsyncSession, tenant_id: str, room_id: str
    ) -> Result[list[ElectricalDevice]]:
        found = await RoomService.get_room(db, tenant_id, room_id)
        if isinstance(found, Failure):
            return found

        result = await db.execute(
            select(ElectricalDevice)
            .where(
                ElectricalDevice.room_id == room_id,
                ElectricalDevice.tenant_id == tenant_id,
            )
            .order_by(ElectricalDevice.created_at.desc(), ElectricalDevice.id)
        )
        return Success(list(result.scalars().all()))

    @staticmethod
    async def save_devices_to_room(
        db: AsyncSession,
        tenant_id: str,
        room_id: str,
        items: Sequence[DeviceFields],
    ) -> Result[list[ElectricalDevice]]:
        """Insert a batch of new devices into one room."""
        checked = validate_device_batch(items)
        if isinstance(checked, Failure):
            return checked

        found = await RoomService.get_room(db, tenant_id, room_id)
        if isinstance(found, Failure):
            return found

        devices = await _insert(db, tenant_id, room_id, checked.value)
        logger.info(
            "Devices saved to room",
            tenant_id=tenant_id,
            room_id=room_id,
            count=len(devices),
        )
        return Success(devices, f"Successfully saved {len(devices)} device(s)")

    @staticmethod
    async def save_devices(
        db: AsyncSession, tenant_id: str, items: Sequence[DeviceFields]
    ) -> Result[list[ElectricalDevice]]:
        """Insert a batch of devices that belong to no room yet."""
        checked = validate_device_batch(items)
        if isinstance(checked, Failure):
            return checked

        devices = await _insert(db, tenant_id, None, checked.value)
        logger.info("Unassigned devices saved", tenant_id=tenant_id, count=len(devices))
        return Success(devices, f"Successfully saved {len(devices)} device(s)")

    @staticmethod
    async def get_device(
        db: AsyncSession, tenant_id: str, device_id: str
    ) -> Result[ElectricalDevice]:
        result = await db.execute(
            select(ElectricalDevice).where(
                ElectricalDevice.id == device_id,
                ElectricalDevice.tenant_id == tenant_id,
            )
        )
        device = result.scalar_one_or_none()
        if device is None:
            return not_found("Device")
        return Success(device)

    @staticmethod
    async def update_device(
        db: AsyncSession, tenant_id: str, device_id: str, data: DeviceUpdate
    ) -> Result[ElectricalDevice]:
        checked = validate_device(data.device_name, data.power_watts, data.usage_hours_per_day)
        if isinstance(checked, Failure):
            return checked

        found = await DeviceService.get_device(db, tenant_id, device_id)
        if isinstance(found, Failure):
            return found

        device = found.value
        _apply(device, checked.value)
        await db.flush()
        await db.refresh(device)

        logger.info("Device updated", device_id=device.id, tenant_id=tenant_id)
        return Success(device, "Device updated successfully")

    @staticmethod
    async def update_devices_in_room(
        db: AsyncSession,
        tenant_id: str,
        room_id: str,
        items: Sequence[DeviceBatchUpdateItem],
    ) -> Result[list[ElectricalDevice]]:
        """
        Update several devices of one room in a single transaction.

        If any row is invalid or names a device that is not in this room,
        nothing is written.
        """
        checked = validate_device_batch(items)
        if isinstance(checked, Failure):
            return checked

        found = await RoomService.get_room(db, tenant_id, room_id)
        if isinstance(found, Failure):
            return found

        ids = [item.id for item in items]
        result = await db.execute(
            select(ElectricalDevice).where(
                ElectricalDevice.id.in_(ids),
                ElectricalDevice.room_id == room_id,
                ElectricalDevice.tenant_id == tenant_id,
            )
        )
        by_id = {device.id: device for device in result.scalars().all()}
        missing = [device_id for device_id in ids if device_id not in by_id]
        if missing:
            logger.warning("Batch update references unknown devices", room_id=room_id, missing=missing)
            return not_found("Device")

        updated = []
        for item, fields in zip(items, checked.value):
            device = by_id[item.id]
            _apply(device, fields)
            updated.append(device)
        await db.flush()
        for device in updated:
            await db.refresh(device)

        logger.info(
            "Devices updated in room",
            tenant_id=tenant_id,
            room_id=room_id,
            count=len(updated),
        )
        return Success(updated, f"Successfully updated {len(updated)} device(s)")

    @staticmethod
    async def delete_device(
        db: AsyncSession, tenant_id: str, device_id: str
    ) -> Result[Optional[str]]:
        """Delete a device. The value is the room it was in, if any."""
        found = await DeviceService.get_device(db, tenant_id, device_id)
        if isinstance(found, Failure):
            return found

        room_id = found.value.room_id
        await db.delete(found.value)
        await db.flush()

        logger.info("Device deleted", device_id=device_id, tenant_id=tenant_id)
        return Success(room_id, "Device deleted successfully")

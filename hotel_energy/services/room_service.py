"""
services/room_service.py
------------------------
Business logic for rooms: CRUD, display ordering, "next room" navigation and
copying one room's device setup into another.

Every query filters on tenant_id as well as the room id, so a room id from
another hotel behaves exactly like a missing room.
"""

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_energy.core.logging import get_logger
from hotel_energy.core.result import (
    Failure,
    Result,
    Success,
    conflict,
    invalid,
    not_found,
)
from hotel_energy.models.device import ElectricalDevice
from hotel_energy.models.room import Room
from hotel_energy.schemas.room import RoomCreate, RoomUpdate
from hotel_energy.services.navigation import NavigationTarget, next_room
from hotel_energy.services.validation import validate_room

logger = get_logger(__name__)

_DUPLICATE_ROOM = "Room number already exists for this hotel"


class RoomService:

    @staticmethod
    async def create_room(
        db: AsyncSession, tenant_id: str, data: RoomCreate
    ) -> Result[Room]:
        """
        Create a room at the end of the tenant's display order.
        Fails with a conflict if the room number is already taken in this hotel.
        """
        checked = validate_room(data.room_number, data.room_type)
        if isinstance(checked, Failure):
            return checked

        result = await db.execute(
            select(func.max(Room.display_order)).where(Room.tenant_id == tenant_id)
        )
        last_order = result.scalar_one_or_none()

        room = Room(
            tenant_id=tenant_id,
            room_number=checked.value.room_number,
            room_type=checked.value.room_type,
            display_order=(last_order or 0) + 1,
        )
        db.add(room)
        try:
            await db.flush()
            await db.refresh(room)
        except IntegrityError:
            await db.rollback()
            return conflict(_DUPLICATE_ROOM)

        logger.info(
            "Room created",
            room_id=room.id,
            tenant_id=tenant_id,
            room_number=room.room_number,
            display_order=room.display_order,
        )
        return Success(room, "Room created successfully")

    @staticmethod
    async def list_rooms(
        db: AsyncSession, tenant_id: str
    ) -> list[tuple[Room, int]]:
        """
        All rooms of a tenant in display order, each paired with its device count.
        """
        device_count = func.count(ElectricalDevice.id)
        result = await db.execute(
            select(Room, device_count)
            .outerjoin(ElectricalDevice, ElectricalDevice.room_id == Room.id)
            .where(Room.tenant_id == tenant_id)
            .group_by(Room.id)
            .order_by(Room.display_order, Room.room_number)
        )
        return [(room, count) for room, count in result.all()]

    @staticmethod
    async def get_room(
        db: AsyncSession, tenant_id: str, room_id: str
    ) -> Result[Room]:
        result = await db.execute(
            select(Room).where(Room.id == room_id, Room.tenant_id == tenant_id)
        )
        room = result.scalar_one_or_none()
        if room is None:
            return not_found("Room")
        return Success(room)

    @staticmethod
    async def update_room(
        db: AsyncSession, tenant_id: str, room_id: str, data: RoomUpdate
    ) -> Result[Room]:
        checked = validate_room(data.room_number, data.room_type)
        if isinstance(checked, Failure):
            return checked

        found = await RoomService.get_room(db, tenant_id, room_id)
        if isinstance(found, Failure):
            return found

        room = found.value
        room.room_number = checked.value.room_number
        room.room_type = checked.value.room_type
        try:
            await db.flush()
            await db.refresh(room)
        except IntegrityError:
            await db.rollback()
            return conflict(_DUPLICATE_ROOM)

        logger.info("Room updated", room_id=room.id, tenant_id=tenant_id)
        return Success(room, "Room updated successfully")

    @staticmethod
    async def delete_room(
        db: AsyncSession, tenant_id: str, room_id: str
    ) -> Result[str]:
        """Delete a room together with its devices."""
        found = await RoomService.get_room(db, tenant_id, room_id)
        if isinstance(found, Failure):
            return found

        await db.delete(found.value)
        await db.flush()

        logger.info("Room deleted", room_id=room_id, tenant_id=tenant_id)
        return Success(room_id, "Room deleted successfully")

    @staticmethod
    async def get_next_room(
        db: AsyncSession, tenant_id: str, room_id: str
    ) -> Result[NavigationTarget]:
        found = await RoomService.get_room(db, tenant_id, room_id)
        if isinstance(found, Failure):
            return found

        result = await db.execute(select(Room).where(Room.tenant_id == tenant_id))
        return Success(next_room(result.scalars().all(), found.value))

    @staticmethod
    async def copy_room_devices(
        db: AsyncSession,
        tenant_id: str,
        source_room_id: str,
        target_room_id: str,
    ) -> Result[list[ElectricalDevice]]:
        """
        Duplicate every device of the source room into the target room.

        The copies get new ids; the source room is left untouched and devices
        already in the target are kept as they are (no deduplication).
        """
        if source_room_id == target_room_id:
            return invalid(
                "Choose a different room to copy to",
                {"target_room_id": ["Target room must differ from the source room"]},
            )

        for room_id in (source_room_id, target_room_id):
            found = await RoomService.get_room(db, tenant_id, room_id)
            if isinstance(found, Failure):
                return found

        result = await db.execute(
            select(ElectricalDevice)
            .where(
                ElectricalDevice.room_id == source_room_id,
                ElectricalDevice.tenant_id == tenant_id,
            )
            .order_by(ElectricalDevice.created_at, ElectricalDevice.id)
        )
        source_devices = list(result.scalars().all())
        if not source_devices:
            return invalid("Source room has no devices to copy")

        copies = [
            ElectricalDevice(
                tenant_id=tenant_id,
                room_id=target_room_id,
                device_name=device.device_name,
                power_watts=device.power_watts,
                usage_hours_per_day=device.usage_hours_per_day,
            )
            for device in source_devices
        ]
        db.add_all(copies)
        await db.flush()
        for copy in copies:
            await db.refresh(copy)

        logger.info(
            "Room devices copied",
            tenant_id=tenant_id,
            source_room_id=source_room_id,
            target_room_id=target_room_id,
            copied=len(copies),
        )
        return Success(
            copies,
            f"Successfully copied {len(copies)} device(s) to target room",
        )

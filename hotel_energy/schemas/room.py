"""
schemas/room.py
---------------
Pydantic models for rooms, room listings and "next room" navigation.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field


class RoomCreate(BaseModel):
    room_number: str = Field(..., examples=["101"])
    room_type: Optional[str] = Field(
        default=None,
        examples=["Deluxe"],
        description="Free-form category such as Standard, Deluxe, Suite",
    )


class RoomUpdate(RoomCreate):
    pass


class RoomRead(BaseModel):
    id: str
    tenant_id: str
    room_number: str
    room_type: Optional[str]
    display_order: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class RoomListItem(RoomRead):
    device_count: int = 0


class NextRoomRead(BaseModel):
    """
    Where to go after finishing a room.

    action == "next_room"         → open `room`
    action == "return_to_tenant"  → this was the last room; go back to the hotel
    """
    action: Literal["next_room", "return_to_tenant"]
    tenant_id: str
    room: Optional[RoomRead] = None


class CopyDevicesRequest(BaseModel):
    target_room_id: str = Field(..., description="Room that receives the copies")


class CopyDevicesRead(BaseModel):
    copied: int
    message: str

"""
models/room.py
--------------
Room ORM model.

room_number is unique per tenant, not globally. display_order linearises the
tenant's rooms for "next room" navigation; it is assigned on creation and is
deliberately not a unique constraint.
"""

from typing import Optional

from sqlalchemy import ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hotel_energy.db.base import Base, TimestampMixin, generate_uuid


class Room(Base, TimestampMixin):
    __tablename__ = "rooms"
    __table_args__ = (
        UniqueConstraint("tenant_id", "room_number", name="rooms_tenant_room_unique"),
        Index("idx_rooms_display_order", "tenant_id", "display_order"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    tenant_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    room_number: Mapped[str] = mapped_column(String(255), nullable=False)
    room_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    tenant: Mapped["Tenant"] = relationship("Tenant", back_populates="rooms")  # noqa: F821
    devices: Mapped[list["ElectricalDevice"]] = relationship(  # noqa: F821
        "ElectricalDevice",
        back_populates="room",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Room id={self.id} number={self.room_number} order={self.display_order}>"

"""
models/device.py
----------------
Electrical device ORM model.

tenant_id is stored on every device (not only derived through the room) so
unassigned devices still belong to a hotel and tenant-wide listings need no
JOIN. room_id is nullable for the same reason.
"""

from decimal import Decimal
from typing import Optional

from sqlalchemy import ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hotel_energy.db.base import Base, TimestampMixin, generate_uuid


class ElectricalDevice(Base, TimestampMixin):
    __tablename__ = "electrical_devices"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    tenant_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    room_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("rooms.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    device_name: Mapped[str] = mapped_column(String(255), nullable=False)
    power_watts: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    usage_hours_per_day: Mapped[Decimal] = mapped_column(Numeric(4, 2), nullable=False)

    # Relationships
    tenant: Mapped["Tenant"] = relationship("Tenant", back_populates="devices")  # noqa: F821
    room: Mapped[Optional["Room"]] = relationship("Room", back_populates="devices")  # noqa: F821

    def __repr__(self) -> str:
        return f"<ElectricalDevice id={self.id} name={self.device_name} room_id={self.room_id}>"

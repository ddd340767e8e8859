"""
models/tenant.py
----------------
Tenant (hotel) ORM model.

Each tenant is an isolated property account. All rooms and devices belonging
to a tenant are scoped by tenant_id at the query level — always include
tenant_id in WHERE clauses.

Deleting a tenant removes its rooms and devices through ON DELETE CASCADE;
passive_deletes lets the database do that without loading the children.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hotel_energy.db.base import Base, TimestampMixin, generate_uuid


class Tenant(Base, TimestampMixin):
    __tablename__ = "tenants"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)

    # Relationships
    rooms: Mapped[list["Room"]] = relationship(  # noqa: F821
        "Room",
        back_populates="tenant",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Room.display_order",
    )
    devices: Mapped[list["ElectricalDevice"]] = relationship(  # noqa: F821
        "ElectricalDevice",
        back_populates="tenant",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Tenant id={self.id} name={self.name}>"

"""
models/__init__.py
------------------
Re-export all models so table creation can import Base and discover
all tables via a single import:

    from hotel_energy.models import Base
"""

from hotel_energy.db.base import Base
from hotel_energy.models.tenant import Tenant
from hotel_energy.models.room import Room
from hotel_energy.models.device import ElectricalDevice

__all__ = ["Base", "Tenant", "Room", "ElectricalDevice"]

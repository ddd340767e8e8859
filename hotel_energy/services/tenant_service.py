"""
services/tenant_service.py
--------------------------
Business logic for tenant (hotel) management.

Service layer is responsible for:
  - Constructing queries
  - Enforcing business rules (e.g. unique names)
  - Returning Success / Failure results to the route layer
  - Never returning HTTP responses (that's the route's job)
"""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from hotel_energy.core.logging import get_logger
from hotel_energy.core.result import Failure, Result, Success, conflict, not_found
from hotel_energy.models.tenant import Tenant
from hotel_energy.schemas.tenant import TenantCreate, TenantUpdate
from hotel_energy.services.validation import validate_tenant_name

logger = get_logger(__name__)


class TenantService:

    @staticmethod
    async def create_tenant(db: AsyncSession, data: TenantCreate) -> Result[Tenant]:
        """
        Create a new tenant.
        Fails with a conflict if a tenant with the same name already exists.
        """
        checked = validate_tenant_name(data.name)
        if isinstance(checked, Failure):
            return checked

        tenant = Tenant(name=checked.value)
        db.add(tenant)
        try:
            await db.flush()  # Trigger DB constraints before commit
            await db.refresh(tenant)
        except IntegrityError:
            await db.rollback()
            return conflict(f"Tenant '{checked.value}' already exists")

        logger.info("Tenant created", tenant_id=tenant.id, name=tenant.name)
        return Success(tenant, "Tenant created successfully")

    @staticmethod
    async def list_tenants(db: AsyncSession) -> list[Tenant]:
        result = await db.execute(select(Tenant).order_by(Tenant.name))
        return list(result.scalars().all())

    @staticmethod
    async def get_tenant_by_id(db: AsyncSession, tenant_id: str) -> Tenant | None:
        result = await db.execute(select(Tenant).where(Tenant.id == tenant_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def get_tenant_by_name(db: AsyncSession, name: str) -> Tenant | None:
        result = await db.execute(select(Tenant).where(Tenant.name == name.strip()))
        return result.scalar_one_or_none()

    @staticmethod
    async def update_tenant(
        db: AsyncSession, tenant_id: str, data: TenantUpdate
    ) -> Result[Tenant]:
        checked = validate_tenant_name(data.name)
        if isinstance(checked, Failure):
            return checked

        tenant = await TenantService.get_tenant_by_id(db, tenant_id)
        if tenant is None:
            return not_found("Tenant")

        tenant.name = checked.value
        try:
            await db.flush()
            await db.refresh(tenant)  # Pick up the re-stamped updated_at
        except IntegrityError:
            await db.rollback()
            return conflict(f"Tenant '{checked.value}' already exists")

        logger.info("Tenant renamed", tenant_id=tenant.id, name=tenant.name)
        return Success(tenant, "Tenant updated successfully")

    @staticmethod
    async def delete_tenant(db: AsyncSession, tenant_id: str) -> Result[str]:
        """
        Delete a tenant. Rooms and devices go with it via ON DELETE CASCADE.
        """
        tenant = await TenantService.get_tenant_by_id(db, tenant_id)
        if tenant is None:
            return not_found("Tenant")

        await db.delete(tenant)
        await db.flush()

        logger.info("Tenant deleted", tenant_id=tenant_id)
        return Success(tenant_id, "Tenant deleted successfully")

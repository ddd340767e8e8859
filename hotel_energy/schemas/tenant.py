"""
schemas/tenant.py
-----------------
Pydantic request/response models for Tenant.

Naming convention:
  TenantCreate  → inbound request body
  TenantRead    → outbound response body

Length rules for the name are checked in services/validation.py.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class TenantCreate(BaseModel):
    name: str = Field(
        ...,
        examples=["Grand Hotel Riverside"],
        description="Unique hotel / tenant name (2-255 characters)",
    )


class TenantUpdate(TenantCreate):
    pass


class TenantRead(BaseModel):
    id: str
    name: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}

"""
Pydantic schemas for tenants
"""

from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional
import uuid

from roombook.models.tenant import PlanType, TenantStatus


class TenantCreate(BaseModel):
    """Tenant registration schema"""
    name: str = Field(..., min_length=1, max_length=255)
    subdomain: str = Field(..., min_length=3, max_length=100, pattern=r"^[a-z0-9](?:[a-z0-9-]*[a-z0-9])?$")
    domain: Optional[str] = Field(default=None, max_length=255)
    plan_type: PlanType = PlanType.FREE
    settings: Optional[str] = None


class TenantUpdate(BaseModel):
    """Partial tenant update"""
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    domain: Optional[str] = Field(default=None, max_length=255)
    plan_type: Optional[PlanType] = None
    status: Optional[TenantStatus] = None
    settings: Optional[str] = None


class TenantResponse(BaseModel):
    """Tenant response model"""
    id: uuid.UUID
    name: str
    subdomain: str
    domain: Optional[str] = None
    plan_type: PlanType
    status: TenantStatus
    settings: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

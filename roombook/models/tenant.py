"""
Tenant model - Multi-tenancy foundation
"""

from sqlmodel import Field, SQLModel
from datetime import datetime
from typing import Optional
from enum import Enum
import uuid


class TenantStatus(str, Enum):
    """Lifecycle status of a tenant account"""
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


class PlanType(str, Enum):
    """Subscription plan tier"""
    FREE = "free"
    BASIC = "basic"
    PRO = "pro"
    BUSINESS = "business"


class Tenant(SQLModel, table=True):
    """Tenant (venue) account, the unit of data isolation"""

    __tablename__ = "tenants"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(index=True, max_length=255)
    subdomain: str = Field(unique=True, index=True, max_length=100, description="Unique tenant identifier for subdomain routing")
    domain: Optional[str] = Field(default=None, max_length=255)

    # Settings (JSON stored as text)
    settings: Optional[str] = None

    # Plan
    plan_type: PlanType = Field(default=PlanType.FREE, description="Subscription plan: free, basic, pro, business")
    status: TenantStatus = Field(default=TenantStatus.ACTIVE, index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = Field(default=None, index=True, description="Soft-delete marker")

    @property
    def is_active(self) -> bool:
        """Whether the tenant may receive requests"""
        return self.status == TenantStatus.ACTIVE and self.deleted_at is None

    def soft_delete(self) -> None:
        now = datetime.utcnow()
        self.deleted_at = now
        self.status = TenantStatus.INACTIVE
        self.updated_at = now

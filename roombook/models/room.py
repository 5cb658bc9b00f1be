"""
Room model for bookable venue spaces
"""

from sqlmodel import Field, SQLModel
from sqlalchemy import Column, Numeric, UniqueConstraint, CheckConstraint
from datetime import datetime
from decimal import Decimal
from typing import Optional
import uuid


class Room(SQLModel, table=True):
    """Bookable room owned by exactly one tenant"""

    __tablename__ = "rooms"
    __table_args__ = (
        UniqueConstraint("tenant_id", "name", name="uq_rooms_tenant_name"),
        CheckConstraint("capacity > 0", name="ck_rooms_capacity_positive"),
        CheckConstraint("hourly_rate >= 0", name="ck_rooms_rate_non_negative"),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    tenant_id: uuid.UUID = Field(foreign_key="tenants.id", index=True, description="Tenant ID for multi-tenant isolation")

    # Room details
    name: str = Field(max_length=255, nullable=False, description="Display name, unique per tenant")
    capacity: int = Field(default=4, description="Maximum number of guests")
    category: str = Field(default="Standard", max_length=100)
    description: Optional[str] = Field(default=None, max_length=2000)

    # Pricing
    hourly_rate: Decimal = Field(
        default=Decimal("0.00"),
        description="Price per hour",
        sa_column=Column(Numeric(10, 2), nullable=False)
    )

    # Status
    is_active: bool = Field(default=True, index=True)

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = Field(default=None, index=True, description="Soft-delete marker")

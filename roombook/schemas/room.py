"""
Pydantic schemas for rooms
"""

from pydantic import BaseModel, Field
from datetime import datetime
from decimal import Decimal
from typing import Optional
import uuid


class RoomCreate(BaseModel):
    """Room creation schema"""
    name: str = Field(..., min_length=1, max_length=255)
    capacity: int = Field(..., gt=0)
    category: str = Field(default="Standard", max_length=100)
    description: Optional[str] = Field(default=None, max_length=2000)
    hourly_rate: Decimal = Field(default=Decimal("0.00"), ge=0, max_digits=10, decimal_places=2)
    is_active: bool = True


class RoomUpdate(BaseModel):
    """Partial room update"""
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    capacity: Optional[int] = Field(default=None, gt=0)
    category: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = Field(default=None, max_length=2000)
    hourly_rate: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    is_active: Optional[bool] = None


class RoomResponse(BaseModel):
    """Room response model"""
    id: uuid.UUID
    tenant_id: uuid.UUID
    name: str
    capacity: int
    category: str
    description: Optional[str] = None
    hourly_rate: Decimal
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

"""
Pydantic schemas for bookings and availability
"""

from pydantic import BaseModel, EmailStr, Field, model_validator
from datetime import datetime
from decimal import Decimal
from typing import Optional
import uuid

from roombook.models.booking import BookingStatus


class CustomerInfo(BaseModel):
    """Contact details of the booking customer"""
    name: str = Field(..., min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=50)


class BookingCreate(BaseModel):
    """Booking request"""
    room_id: uuid.UUID
    customer_name: str = Field(..., min_length=1, max_length=255)
    customer_email: Optional[EmailStr] = None
    customer_phone: Optional[str] = Field(default=None, max_length=50)
    start_time: datetime
    end_time: datetime
    notes: Optional[str] = Field(default=None, max_length=2000)

    @property
    def customer(self) -> CustomerInfo:
        return CustomerInfo(name=self.customer_name, email=self.customer_email, phone=self.customer_phone)


class BookingUpdate(BaseModel):
    """Status transition, reschedule and editable booking fields"""
    status: Optional[BookingStatus] = None
    room_id: Optional[uuid.UUID] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    notes: Optional[str] = Field(default=None, max_length=2000)
    customer_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    customer_email: Optional[EmailStr] = None
    customer_phone: Optional[str] = Field(default=None, max_length=50)

    @model_validator(mode="after")
    def check_not_empty(self):
        if not self.model_fields_set:
            raise ValueError("No fields to update")
        for key in ("room_id", "start_time", "end_time"):
            if key in self.model_fields_set and getattr(self, key) is None:
                raise ValueError(f"{key} cannot be cleared")
        return self


class BookingResponse(BaseModel):
    """Booking as returned by the API"""
    id: uuid.UUID
    tenant_id: uuid.UUID
    room_id: uuid.UUID
    customer_name: str
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    start_time: datetime
    end_time: datetime
    status: BookingStatus
    total_price: Decimal
    notes: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class AvailableSlot(BaseModel):
    """Offerable booking slot for a concrete date"""
    start_time: datetime
    end_time: datetime
    is_next_day: bool

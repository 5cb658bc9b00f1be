"""
Booking model for customer room reservations
"""

from sqlmodel import Field, SQLModel
from sqlalchemy import Column, Numeric, CheckConstraint, Index
from datetime import datetime
from decimal import Decimal
from typing import Optional
from enum import Enum
import uuid


class BookingStatus(str, Enum):
    """Status of a booking"""
    CONFIRMED = "confirmed"      # Accepted, holds the room
    CANCELLED = "cancelled"      # Released, no longer blocks the room
    COMPLETED = "completed"      # Customer showed up, booking finished
    NO_SHOW = "no_show"          # Customer never arrived


# Allowed status transitions
STATUS_TRANSITIONS: dict[BookingStatus, set[BookingStatus]] = {
    BookingStatus.CONFIRMED: {BookingStatus.CANCELLED, BookingStatus.COMPLETED, BookingStatus.NO_SHOW},
    BookingStatus.CANCELLED: set(),
    BookingStatus.COMPLETED: set(),
    BookingStatus.NO_SHOW: set(),
}


class Booking(SQLModel, table=True):
    """Customer booking of a room over the half-open interval [start_time, end_time)"""

    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("end_time > start_time", name="valid_booking_time"),
        Index("idx_bookings_room_time", "tenant_id", "room_id", "start_time", "end_time"),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    tenant_id: uuid.UUID = Field(foreign_key="tenants.id", index=True, description="Tenant ID for multi-tenant isolation")
    room_id: uuid.UUID = Field(foreign_key="rooms.id", index=True, description="Booked room")

    # Customer contact
    customer_name: str = Field(max_length=255)
    customer_email: Optional[str] = Field(default=None, max_length=255)
    customer_phone: Optional[str] = Field(default=None, max_length=50)

    # Interval (naive local wall-clock)
    start_time: datetime = Field(index=True)
    end_time: datetime

    status: BookingStatus = Field(default=BookingStatus.CONFIRMED, index=True)

    # Price snapshot taken at creation, not recomputed on rate changes
    total_price: Decimal = Field(
        default=Decimal("0.00"),
        sa_column=Column(Numeric(10, 2), nullable=False)
    )
    notes: Optional[str] = Field(default=None, max_length=2000)

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = Field(default=None, index=True, description="Soft-delete marker")

    @property
    def blocks_room(self) -> bool:
        """Whether this booking takes part in conflict detection"""
        return self.status != BookingStatus.CANCELLED and self.deleted_at is None

    def can_transition_to(self, new_status: BookingStatus) -> bool:
        return new_status in STATUS_TRANSITIONS[BookingStatus(self.status)]

    def transition_to(self, new_status: BookingStatus) -> None:
        """Move to a new status, raising ValueError on an illegal transition"""
        if not self.can_transition_to(new_status):
            raise ValueError(f"Cannot transition booking from {self.status} to {new_status}")

        now = datetime.utcnow()
        self.status = new_status
        self.updated_at = now
        if new_status == BookingStatus.CANCELLED:
            self.cancelled_at = now

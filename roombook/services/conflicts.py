"""
Booking conflict detection over half-open intervals
"""

from datetime import datetime
from typing import Iterable, Optional
import uuid

from roombook.models.booking import Booking


def intervals_overlap(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    """[a_start, a_end) and [b_start, b_end) share at least one instant"""
    return a_start < b_end and b_start < a_end


def find_conflict(
    room_id: uuid.UUID,
    tenant_id: uuid.UUID,
    start: datetime,
    end: datetime,
    existing_bookings: Iterable[Booking],
    exclude_booking_id: Optional[uuid.UUID] = None,
) -> Optional[Booking]:
    """First booking of the room that overlaps the candidate interval

    Cancelled and soft-deleted bookings, and bookings of other tenants or
    rooms, never conflict.
    """
    for booking in existing_bookings:
        if booking.tenant_id != tenant_id or booking.room_id != room_id:
            continue
        if not booking.blocks_room or booking.id == exclude_booking_id:
            continue
        if intervals_overlap(start, end, booking.start_time, booking.end_time):
            return booking
    return None


def has_conflict(
    room_id: uuid.UUID,
    tenant_id: uuid.UUID,
    start: datetime,
    end: datetime,
    existing_bookings: Iterable[Booking],
) -> bool:
    return find_conflict(room_id, tenant_id, start, end, existing_bookings) is not None

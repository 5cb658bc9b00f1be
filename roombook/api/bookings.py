"""
Bookings API endpoints
"""

from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional
from datetime import date
import structlog
import uuid

from roombook.core.dependencies import get_booking_service, get_public_tenant_id, get_tenant_id
from roombook.models.booking import BookingStatus
from roombook.schemas.booking import BookingCreate, BookingResponse, BookingUpdate
from roombook.services.booking_service import BookingService

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post("/", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_booking(
    booking_data: BookingCreate,
    tenant_id: uuid.UUID = Depends(get_public_tenant_id),
    service: BookingService = Depends(get_booking_service)
):
    """Create a booking

    Rules:
    - End time must be after start time
    - The interval must lie within the venue's business hours
    - The interval must not overlap a non-cancelled booking of the room
    - Price is hourly rate times duration, fixed at creation
    """
    return service.create_booking(
        tenant_id,
        booking_data.room_id,
        booking_data.customer,
        booking_data.start_time,
        booking_data.end_time,
        notes=booking_data.notes,
    )


@router.get("/", response_model=List[BookingResponse])
def list_bookings(
    room_id: Optional[uuid.UUID] = None,
    day: Optional[date] = Query(default=None, alias="date"),
    booking_status: Optional[BookingStatus] = Query(default=None, alias="status"),
    tenant_id: uuid.UUID = Depends(get_tenant_id),
    service: BookingService = Depends(get_booking_service)
):
    """List bookings of the tenant, ordered by start time"""
    return service.list_bookings(tenant_id, room_id=room_id, on_date=day, status=booking_status)


@router.get("/{booking_id}", response_model=BookingResponse)
def get_booking(
    booking_id: uuid.UUID,
    tenant_id: uuid.UUID = Depends(get_tenant_id),
    service: BookingService = Depends(get_booking_service)
):
    """Get booking by ID"""
    return service.get_booking(tenant_id, booking_id)


@router.patch("/{booking_id}", response_model=BookingResponse)
def update_booking(
    booking_id: uuid.UUID,
    booking_update: BookingUpdate,
    tenant_id: uuid.UUID = Depends(get_tenant_id),
    service: BookingService = Depends(get_booking_service)
):
    """Reschedule a booking or change its status and contact details"""
    changes = booking_update.model_dump(exclude_unset=True)
    new_status = changes.pop("status", None)
    return service.update_booking(tenant_id, booking_id, status=new_status, **changes)


@router.delete("/{booking_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_booking(
    booking_id: uuid.UUID,
    tenant_id: uuid.UUID = Depends(get_tenant_id),
    service: BookingService = Depends(get_booking_service)
):
    """Soft-delete booking"""
    service.delete_booking(tenant_id, booking_id)

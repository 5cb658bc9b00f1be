"""
Rooms API endpoints
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session
from typing import List
from datetime import date, datetime
import structlog
import uuid

from roombook.core.database import get_session
from roombook.core.dependencies import get_booking_service, get_current_tenant, get_public_tenant_id
from roombook.core.exceptions import ConflictError, NotFoundError
from roombook.core.tenancy import for_tenant
from roombook.models.room import Room
from roombook.models.tenant import Tenant
from roombook.schemas.booking import AvailableSlot
from roombook.schemas.room import RoomCreate, RoomResponse, RoomUpdate
from roombook.services.booking_service import BookingService

logger = structlog.get_logger(__name__)
router = APIRouter()

DUPLICATE_NAME_MESSAGE = "A room with this name already exists"


def _get_room(session: Session, tenant_id: uuid.UUID, room_id: uuid.UUID) -> Room:
    room = session.exec(for_tenant(Room, tenant_id).where(Room.id == room_id)).first()
    if not room:
        raise NotFoundError("Room not found")
    return room


def _commit_room(session: Session, room: Room) -> Room:
    try:
        session.add(room)
        session.commit()
    except IntegrityError as e:
        session.rollback()
        logger.warning(f"Room write rejected: {e.orig}")
        raise ConflictError(DUPLICATE_NAME_MESSAGE)
    session.refresh(room)
    return room


@router.post("/", response_model=RoomResponse, status_code=status.HTTP_201_CREATED)
def create_room(
    room_data: RoomCreate,
    tenant: Tenant = Depends(get_current_tenant),
    session: Session = Depends(get_session)
):
    """Create a new room"""
    room = _commit_room(session, Room(tenant_id=tenant.id, **room_data.model_dump()))
    logger.info(f"Room created: {room.id}")
    return room


@router.get("/", response_model=List[RoomResponse])
def list_rooms(
    include_inactive: bool = False,
    tenant: Tenant = Depends(get_current_tenant),
    session: Session = Depends(get_session)
):
    """List rooms of the tenant"""
    query = for_tenant(Room, tenant.id)
    if not include_inactive:
        query = query.where(Room.is_active == True)  # noqa: E712
    return session.exec(query.order_by(Room.name)).all()


@router.get("/{room_id}", response_model=RoomResponse)
def get_room(
    room_id: uuid.UUID,
    tenant: Tenant = Depends(get_current_tenant),
    session: Session = Depends(get_session)
):
    """Get room by ID"""
    return _get_room(session, tenant.id, room_id)


@router.put("/{room_id}", response_model=RoomResponse)
def update_room(
    room_id: uuid.UUID,
    room_update: RoomUpdate,
    tenant: Tenant = Depends(get_current_tenant),
    session: Session = Depends(get_session)
):
    """Update room; existing bookings keep the price they were created with"""
    room = _get_room(session, tenant.id, room_id)

    for key, value in room_update.model_dump(exclude_unset=True).items():
        setattr(room, key, value)

    room.updated_at = datetime.utcnow()
    room = _commit_room(session, room)
    logger.info(f"Room updated: {room_id}")
    return room


@router.delete("/{room_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_room(
    room_id: uuid.UUID,
    tenant: Tenant = Depends(get_current_tenant),
    session: Session = Depends(get_session)
):
    """Soft-delete room"""
    room = _get_room(session, tenant.id, room_id)
    now = datetime.utcnow()
    room.deleted_at = now
    room.is_active = False
    room.updated_at = now
    session.add(room)
    session.commit()
    logger.info(f"Room deleted: {room_id}")


@router.get("/{room_id}/availability", response_model=List[AvailableSlot])
def get_room_availability(
    room_id: uuid.UUID,
    day: date = Query(..., alias="date", description="Calendar date, YYYY-MM-DD"),
    tenant_id: uuid.UUID = Depends(get_public_tenant_id),
    service: BookingService = Depends(get_booking_service)
):
    """Bookable slots of the room on a date"""
    return service.get_available_slots(tenant_id, room_id, day)

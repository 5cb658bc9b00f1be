"""
SQLModel-backed tenant directory and booking store
"""

from contextlib import contextmanager
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Optional
import uuid

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select
import structlog

from roombook.core.exceptions import (
    BookingEngineError,
    ConcurrencyError,
    InvalidIntervalError,
    NotFoundError,
)
from roombook.core.tenancy import for_tenant, require_tenant
from roombook.models.booking import Booking, BookingStatus
from roombook.models.business_hours import BusinessHoursRule, Weekday
from roombook.models.room import Room
from roombook.models.tenant import Tenant
from roombook.repositories.base import SLOT_TAKEN_MESSAGE, BookingStore, TenantDirectory

logger = structlog.get_logger(__name__)

OVERLAP_CONSTRAINT = "bookings_no_overlap"


class SqlTenantDirectory(TenantDirectory):
    """Tenant lookups against the tenants table"""

    def __init__(self, session: Session):
        self.session = session

    def get_tenant(self, tenant_id: uuid.UUID) -> Optional[Tenant]:
        return self.session.exec(
            select(Tenant).where(Tenant.id == tenant_id, Tenant.deleted_at.is_(None))
        ).first()

    def get_by_subdomain(self, subdomain: str) -> Optional[Tenant]:
        return self.session.exec(
            select(Tenant).where(Tenant.subdomain == subdomain.lower(), Tenant.deleted_at.is_(None))
        ).first()


class SqlBookingStore(BookingStore):
    """Booking store on a SQLModel session"""

    def __init__(self, session: Session):
        self.session = session

    def get_room(self, tenant_id: uuid.UUID, room_id: uuid.UUID) -> Optional[Room]:
        return self.session.exec(for_tenant(Room, tenant_id).where(Room.id == room_id)).first()

    def list_rooms(self, tenant_id: uuid.UUID, include_inactive: bool = False) -> list[Room]:
        statement = for_tenant(Room, tenant_id)
        if not include_inactive:
            statement = statement.where(Room.is_active == True)  # noqa: E712
        return list(self.session.exec(statement.order_by(Room.name)).all())

    def get_business_hours(self, tenant_id: uuid.UUID, weekday: Weekday) -> Optional[BusinessHoursRule]:
        return self.session.exec(
            for_tenant(BusinessHoursRule, tenant_id).where(BusinessHoursRule.weekday == int(weekday))
        ).first()

    def list_business_hours(self, tenant_id: uuid.UUID) -> list[BusinessHoursRule]:
        return list(self.session.exec(
            for_tenant(BusinessHoursRule, tenant_id).order_by(BusinessHoursRule.weekday)
        ).all())

    def _overlapping(self, tenant_id: uuid.UUID, room_id: uuid.UUID, window_start: datetime, window_end: datetime):
        return (
            for_tenant(Booking, tenant_id)
            .where(
                Booking.room_id == room_id,
                Booking.status != BookingStatus.CANCELLED,
                Booking.start_time < window_end,
                Booking.end_time > window_start,
            )
            .order_by(Booking.start_time)
        )

    def list_room_bookings(
        self,
        tenant_id: uuid.UUID,
        room_id: uuid.UUID,
        window_start: datetime,
        window_end: datetime,
    ) -> list[Booking]:
        return list(self.session.exec(
            self._overlapping(tenant_id, room_id, window_start, window_end)
        ).all())

    def list_bookings(
        self,
        tenant_id: uuid.UUID,
        room_id: Optional[uuid.UUID] = None,
        on_date: Optional[date] = None,
        status: Optional[BookingStatus] = None,
    ) -> list[Booking]:
        statement = for_tenant(Booking, tenant_id)
        if room_id:
            statement = statement.where(Booking.room_id == room_id)
        if on_date:
            day_start = datetime.combine(on_date, time.min)
            statement = statement.where(
                Booking.start_time >= day_start,
                Booking.start_time < day_start + timedelta(days=1),
            )
        if status:
            statement = statement.where(Booking.status == status)
        return list(self.session.exec(statement.order_by(Booking.start_time)).all())

    def get_booking(self, tenant_id: uuid.UUID, booking_id: uuid.UUID) -> Optional[Booking]:
        return self.session.exec(for_tenant(Booking, tenant_id).where(Booking.id == booking_id)).first()

    def _check_slot_free(
        self,
        tenant_id: uuid.UUID,
        room_id: uuid.UUID,
        start_time: datetime,
        end_time: datetime,
        exclude_booking_id: Optional[uuid.UUID] = None,
    ) -> None:
        """Lock the room row, then re-check the interval against stored bookings"""
        room = self.session.exec(
            for_tenant(Room, tenant_id).where(Room.id == room_id).with_for_update()
        ).first()
        if room is None:
            raise NotFoundError("Room not found")

        statement = self._overlapping(tenant_id, room_id, start_time, end_time)
        if exclude_booking_id is not None:
            statement = statement.where(Booking.id != exclude_booking_id)
        clash = self.session.exec(statement.limit(1)).first()
        if clash is not None:
            logger.warning(f"Booking write rejected, room {room_id} taken by {clash.id}")
            raise ConcurrencyError(SLOT_TAKEN_MESSAGE)

    @contextmanager
    def _booking_write(self, booking: Booking):
        """Commit on success; roll back and translate constraint violations"""
        try:
            yield
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            message = str(e.orig)
            if OVERLAP_CONSTRAINT in message:
                logger.warning(f"Overlap constraint rejected booking for room {booking.room_id}")
                raise ConcurrencyError(SLOT_TAKEN_MESSAGE) from e
            if "valid_booking_time" in message:
                raise InvalidIntervalError("Booking end time must be after start time") from e
            raise
        except BookingEngineError:
            self.session.rollback()
            raise

    def add_booking(self, booking: Booking) -> Booking:
        """Insert a booking inside one transaction serialized per room

        The room row is locked before the overlap re-check, so concurrent
        writers for the same room queue behind each other. The database
        exclusion constraint rejects any overlap that still slips through.
        """
        tenant_id = require_tenant(booking.tenant_id)
        with self._booking_write(booking):
            self._check_slot_free(tenant_id, booking.room_id, booking.start_time, booking.end_time)
            self.session.add(booking)

        self.session.refresh(booking)
        return booking

    def reschedule_booking(
        self,
        booking: Booking,
        room_id: uuid.UUID,
        start_time: datetime,
        end_time: datetime,
        total_price: Decimal,
    ) -> Booking:
        tenant_id = require_tenant(booking.tenant_id)
        with self._booking_write(booking):
            self._check_slot_free(tenant_id, room_id, start_time, end_time, exclude_booking_id=booking.id)
            booking.room_id = room_id
            booking.start_time = start_time
            booking.end_time = end_time
            booking.total_price = total_price
            booking.updated_at = datetime.utcnow()
            self.session.add(booking)

        self.session.refresh(booking)
        return booking

    def save_booking(self, booking: Booking) -> Booking:
        try:
            self.session.add(booking)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        self.session.refresh(booking)
        return booking

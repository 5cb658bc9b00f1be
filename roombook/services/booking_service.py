"""
Booking service

Entry point for the availability read path and the booking write path.
Tenant resolution, room lookup, business-hours containment, conflict
detection and pricing run here; persistence goes through the injected
BookingStore, whose ``add_booking`` and ``reschedule_booking`` close the
check-then-write race.
"""

from datetime import date, datetime
from typing import Optional
import uuid

import structlog

from roombook.core.exceptions import (
    ConflictError,
    InvalidIntervalError,
    NotFoundError,
    ValidationError,
)
from roombook.models.booking import Booking, BookingStatus
from roombook.models.business_hours import BusinessHoursRule, Weekday
from roombook.models.room import Room
from roombook.repositories.base import BookingStore, TenantDirectory
from roombook.schemas.booking import AvailableSlot, CustomerInfo
from roombook.services.availability import (
    DEFAULT_SLOT_SIZE_MINUTES,
    MAX_SLOTS_PER_DAY,
    generate_slots,
    is_within_business_hours,
    resolve_business_day,
)
from roombook.services.conflicts import find_conflict
from roombook.services.pricing import compute_price

logger = structlog.get_logger(__name__)

CONFLICT_MESSAGE = "Time slot conflicts with an existing booking"
OUTSIDE_HOURS_MESSAGE = "Booking falls outside business hours"
RESCHEDULE_FIELDS = ("room_id", "start_time", "end_time")


class BookingService:
    """Availability and booking operations for one request"""

    def __init__(
        self,
        store: BookingStore,
        directory: TenantDirectory,
        slot_size_minutes: int = DEFAULT_SLOT_SIZE_MINUTES,
        max_slots: int = MAX_SLOTS_PER_DAY,
    ):
        self.store = store
        self.directory = directory
        self.slot_size_minutes = slot_size_minutes
        self.max_slots = max_slots

    # Lookups
    def rule_for(self, tenant_id: uuid.UUID, weekday: Weekday) -> BusinessHoursRule:
        """Stored rule for the weekday, or the default weekly hours"""
        rule = self.store.get_business_hours(tenant_id, weekday)
        if rule is None:
            return BusinessHoursRule.default_for(tenant_id, weekday)
        return rule

    def get_room(self, tenant_id: uuid.UUID, room_id: uuid.UUID) -> Room:
        self.directory.get_active_tenant(tenant_id)
        room = self.store.get_room(tenant_id, room_id)
        if room is None or not room.is_active:
            raise NotFoundError("Room not found or does not belong to tenant")
        return room

    # Read path
    def get_available_slots(self, tenant_id: uuid.UUID, room_id: uuid.UUID, day: date) -> list[AvailableSlot]:
        """Slots of the room on ``day`` that fit business hours and are not booked"""
        if not isinstance(day, date) or isinstance(day, datetime):
            raise ValidationError("A calendar date is required")

        room = self.get_room(tenant_id, room_id)
        rule = self.rule_for(tenant_id, Weekday.of(day))
        slots = generate_slots(rule, self.slot_size_minutes, self.max_slots)
        if not slots:
            return []

        window_start = slots[0].start_on(day)
        window_end = slots[-1].end_on(day)
        bookings = self.store.list_room_bookings(tenant_id, room.id, window_start, window_end)

        available = []
        for slot in slots:
            start = slot.start_on(day)
            end = slot.end_on(day)
            if not is_within_business_hours(rule, start, end, business_day=day):
                continue
            if find_conflict(room.id, tenant_id, start, end, bookings) is not None:
                continue
            available.append(AvailableSlot(start_time=start, end_time=end, is_next_day=slot.is_next_day))

        logger.debug(f"Availability for room {room.id} on {day}: {len(available)}/{len(slots)} slots free")
        return available

    # Write path
    def create_booking(
        self,
        tenant_id: uuid.UUID,
        room_id: uuid.UUID,
        customer: CustomerInfo,
        start: datetime,
        end: datetime,
        notes: Optional[str] = None,
    ) -> Booking:
        """Validate, price and atomically persist a booking"""
        if start is None or end is None:
            raise ValidationError("Start and end time are required")
        if end <= start:
            raise InvalidIntervalError("Booking end time must be after start time")
        if not customer.name or not customer.name.strip():
            raise ValidationError("Customer name is required")

        room = self.get_room(tenant_id, room_id)

        business_day = resolve_business_day(start, end, lambda weekday: self.rule_for(tenant_id, weekday))
        if business_day is None:
            logger.info(f"Booking rejected for room {room.id}: {start} - {end} outside business hours")
            raise ConflictError(OUTSIDE_HOURS_MESSAGE)

        existing = self.store.list_room_bookings(tenant_id, room.id, start, end)
        clash = find_conflict(room.id, tenant_id, start, end, existing)
        if clash is not None:
            logger.info(f"Booking rejected for room {room.id}: overlaps booking {clash.id}")
            raise ConflictError(CONFLICT_MESSAGE)

        booking = Booking(
            tenant_id=tenant_id,
            room_id=room.id,
            customer_name=customer.name.strip(),
            customer_email=customer.email,
            customer_phone=customer.phone,
            start_time=start,
            end_time=end,
            status=BookingStatus.CONFIRMED,
            total_price=compute_price(room.hourly_rate, start, end),
            notes=notes,
        )
        booking = self.store.add_booking(booking)

        logger.info(
            "Booking created",
            booking_id=str(booking.id),
            tenant_id=str(tenant_id),
            room_id=str(room.id),
            total_price=str(booking.total_price),
        )
        return booking

    def get_booking(self, tenant_id: uuid.UUID, booking_id: uuid.UUID) -> Booking:
        self.directory.get_active_tenant(tenant_id)
        booking = self.store.get_booking(tenant_id, booking_id)
        if booking is None:
            raise NotFoundError("Booking not found")
        return booking

    def list_bookings(
        self,
        tenant_id: uuid.UUID,
        room_id: Optional[uuid.UUID] = None,
        on_date: Optional[date] = None,
        status: Optional[BookingStatus] = None,
    ) -> list[Booking]:
        self.directory.get_active_tenant(tenant_id)
        return self.store.list_bookings(tenant_id, room_id=room_id, on_date=on_date, status=status)

    def update_booking(
        self,
        tenant_id: uuid.UUID,
        booking_id: uuid.UUID,
        status: Optional[BookingStatus] = None,
        **changes,
    ) -> Booking:
        """Apply a status transition, a reschedule and/or contact and notes edits

        A reschedule is checked like a new booking: business hours, conflicts
        with every other booking of the target room, and a fresh price.
        """
        booking = self.get_booking(tenant_id, booking_id)

        if "customer_name" in changes and not (changes["customer_name"] or "").strip():
            raise ValidationError("Customer name is required")

        status_changes = status is not None and status != booking.status
        if status_changes and not booking.can_transition_to(status):
            raise ValidationError(f"Cannot transition booking from {booking.status} to {status}")

        if any(changes.get(key) is not None for key in RESCHEDULE_FIELDS):
            booking = self._reschedule(
                tenant_id,
                booking,
                room_id=changes.get("room_id") or booking.room_id,
                start=changes.get("start_time") or booking.start_time,
                end=changes.get("end_time") or booking.end_time,
            )

        if status_changes:
            booking.transition_to(status)
            logger.info(f"Booking {booking.id} moved to {status.value}")

        for key in ("customer_name", "customer_email", "customer_phone", "notes"):
            if key in changes:
                setattr(booking, key, changes[key])
        booking.updated_at = datetime.utcnow()

        return self.store.save_booking(booking)

    def _reschedule(
        self,
        tenant_id: uuid.UUID,
        booking: Booking,
        room_id: uuid.UUID,
        start: datetime,
        end: datetime,
    ) -> Booking:
        if booking.status != BookingStatus.CONFIRMED:
            raise ValidationError("Only confirmed bookings can be rescheduled")
        if end <= start:
            raise InvalidIntervalError("Booking end time must be after start time")
        if (room_id, start, end) == (booking.room_id, booking.start_time, booking.end_time):
            return booking

        room = self.get_room(tenant_id, room_id)

        business_day = resolve_business_day(start, end, lambda weekday: self.rule_for(tenant_id, weekday))
        if business_day is None:
            logger.info(f"Reschedule of booking {booking.id} rejected: {start} - {end} outside business hours")
            raise ConflictError(OUTSIDE_HOURS_MESSAGE)

        existing = self.store.list_room_bookings(tenant_id, room.id, start, end)
        clash = find_conflict(room.id, tenant_id, start, end, existing, exclude_booking_id=booking.id)
        if clash is not None:
            logger.info(f"Reschedule of booking {booking.id} rejected: overlaps booking {clash.id}")
            raise ConflictError(CONFLICT_MESSAGE)

        booking = self.store.reschedule_booking(
            booking, room.id, start, end, compute_price(room.hourly_rate, start, end)
        )
        logger.info(
            "Booking rescheduled",
            booking_id=str(booking.id),
            room_id=str(room.id),
            start_time=start.isoformat(),
            end_time=end.isoformat(),
            total_price=str(booking.total_price),
        )
        return booking

    def cancel_booking(self, tenant_id: uuid.UUID, booking_id: uuid.UUID) -> Booking:
        return self.update_booking(tenant_id, booking_id, status=BookingStatus.CANCELLED)

    def delete_booking(self, tenant_id: uuid.UUID, booking_id: uuid.UUID) -> Booking:
        """Soft-delete a booking; it no longer blocks the room"""
        booking = self.get_booking(tenant_id, booking_id)
        now = datetime.utcnow()
        booking.deleted_at = now
        booking.updated_at = now
        booking = self.store.save_booking(booking)
        logger.info(f"Booking deleted: {booking_id}")
        return booking

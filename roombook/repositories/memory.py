"""
In-memory tenant directory and booking store

Backed by plain collections owned by each instance; used by tests and
local tooling in place of the database.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
import threading
import uuid

from roombook.core.exceptions import ConcurrencyError, NotFoundError
from roombook.core.tenancy import require_tenant
from roombook.models.booking import Booking, BookingStatus
from roombook.models.business_hours import BusinessHoursRule, Weekday
from roombook.models.room import Room
from roombook.models.tenant import Tenant
from roombook.repositories.base import SLOT_TAKEN_MESSAGE, BookingStore, TenantDirectory
from roombook.services.conflicts import find_conflict, intervals_overlap


class InMemoryTenantDirectory(TenantDirectory):

    def __init__(self, tenants: Optional[list[Tenant]] = None):
        self._tenants: dict[uuid.UUID, Tenant] = {}
        for tenant in tenants or []:
            self.add_tenant(tenant)

    def add_tenant(self, tenant: Tenant) -> Tenant:
        self._tenants[tenant.id] = tenant
        return tenant

    def get_tenant(self, tenant_id: uuid.UUID) -> Optional[Tenant]:
        tenant = self._tenants.get(tenant_id)
        if tenant is None or tenant.deleted_at is not None:
            return None
        return tenant


class InMemoryBookingStore(BookingStore):
    """Booking store over dictionaries, with writes serialized by a lock"""

    def __init__(self):
        self._rooms: dict[uuid.UUID, Room] = {}
        self._rules: dict[tuple[uuid.UUID, int], BusinessHoursRule] = {}
        self._bookings: dict[uuid.UUID, Booking] = {}
        self._lock = threading.Lock()

    # Setup helpers
    def add_room(self, room: Room) -> Room:
        require_tenant(room.tenant_id)
        self._rooms[room.id] = room
        return room

    def set_business_hours(self, rule: BusinessHoursRule) -> BusinessHoursRule:
        self._rules[(require_tenant(rule.tenant_id), rule.weekday)] = rule
        return rule

    def get_room(self, tenant_id: uuid.UUID, room_id: uuid.UUID) -> Optional[Room]:
        tenant_id = require_tenant(tenant_id)
        room = self._rooms.get(room_id)
        if room is None or room.tenant_id != tenant_id or room.deleted_at is not None:
            return None
        return room

    def list_rooms(self, tenant_id: uuid.UUID, include_inactive: bool = False) -> list[Room]:
        tenant_id = require_tenant(tenant_id)
        rooms = [
            room for room in self._rooms.values()
            if room.tenant_id == tenant_id and room.deleted_at is None
            and (include_inactive or room.is_active)
        ]
        return sorted(rooms, key=lambda room: room.name)

    def get_business_hours(self, tenant_id: uuid.UUID, weekday: Weekday) -> Optional[BusinessHoursRule]:
        return self._rules.get((require_tenant(tenant_id), int(weekday)))

    def list_business_hours(self, tenant_id: uuid.UUID) -> list[BusinessHoursRule]:
        tenant_id = require_tenant(tenant_id)
        rules = [rule for (owner, _), rule in self._rules.items() if owner == tenant_id]
        return sorted(rules, key=lambda rule: rule.weekday)

    def _live_bookings(self, tenant_id: uuid.UUID) -> list[Booking]:
        return [
            booking for booking in self._bookings.values()
            if booking.tenant_id == tenant_id and booking.deleted_at is None
        ]

    def list_room_bookings(
        self,
        tenant_id: uuid.UUID,
        room_id: uuid.UUID,
        window_start: datetime,
        window_end: datetime,
    ) -> list[Booking]:
        tenant_id = require_tenant(tenant_id)
        bookings = [
            booking for booking in self._live_bookings(tenant_id)
            if booking.room_id == room_id
            and booking.status != BookingStatus.CANCELLED
            and intervals_overlap(window_start, window_end, booking.start_time, booking.end_time)
        ]
        return sorted(bookings, key=lambda booking: booking.start_time)

    def list_bookings(
        self,
        tenant_id: uuid.UUID,
        room_id: Optional[uuid.UUID] = None,
        on_date: Optional[date] = None,
        status: Optional[BookingStatus] = None,
    ) -> list[Booking]:
        bookings = [
            booking for booking in self._live_bookings(require_tenant(tenant_id))
            if (room_id is None or booking.room_id == room_id)
            and (on_date is None or booking.start_time.date() == on_date)
            and (status is None or booking.status == status)
        ]
        return sorted(bookings, key=lambda booking: booking.start_time)

    def get_booking(self, tenant_id: uuid.UUID, booking_id: uuid.UUID) -> Optional[Booking]:
        tenant_id = require_tenant(tenant_id)
        booking = self._bookings.get(booking_id)
        if booking is None or booking.tenant_id != tenant_id or booking.deleted_at is not None:
            return None
        return booking

    def add_booking(self, booking: Booking) -> Booking:
        tenant_id = require_tenant(booking.tenant_id)
        with self._lock:
            self._check_slot_free(tenant_id, booking.room_id, booking.start_time, booking.end_time)
            self._bookings[booking.id] = booking
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
        with self._lock:
            self._check_slot_free(tenant_id, room_id, start_time, end_time, exclude_booking_id=booking.id)
            booking.room_id = room_id
            booking.start_time = start_time
            booking.end_time = end_time
            booking.total_price = total_price
            booking.updated_at = datetime.utcnow()
            self._bookings[booking.id] = booking
        return booking

    def _check_slot_free(
        self,
        tenant_id: uuid.UUID,
        room_id: uuid.UUID,
        start_time: datetime,
        end_time: datetime,
        exclude_booking_id: Optional[uuid.UUID] = None,
    ) -> None:
        # Caller holds the lock
        if self.get_room(tenant_id, room_id) is None:
            raise NotFoundError("Room not found")
        clash = find_conflict(
            room_id, tenant_id, start_time, end_time,
            self._bookings.values(), exclude_booking_id=exclude_booking_id,
        )
        if clash is not None:
            raise ConcurrencyError(SLOT_TAKEN_MESSAGE)

    def save_booking(self, booking: Booking) -> Booking:
        with self._lock:
            self._bookings[booking.id] = booking
        return booking

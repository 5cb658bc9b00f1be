"""
Persistence interfaces consumed by the booking service

Every operation takes the tenant identifier as its first argument; an
implementation must never return rows of another tenant.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from decimal import Decimal
from typing import Optional
import uuid

from roombook.core.exceptions import NotFoundError
from roombook.core.tenancy import require_tenant
from roombook.models.booking import Booking, BookingStatus
from roombook.models.business_hours import BusinessHoursRule, Weekday
from roombook.models.room import Room
from roombook.models.tenant import Tenant

SLOT_TAKEN_MESSAGE = "This time slot was just booked by someone else. Please refresh availability and try again."


class TenantDirectory(ABC):
    """Resolves tenant identifiers to tenant accounts"""

    @abstractmethod
    def get_tenant(self, tenant_id: uuid.UUID) -> Optional[Tenant]:
        ...

    def get_active_tenant(self, tenant_id: Optional[uuid.UUID]) -> Tenant:
        """Tenant for the identifier, rejecting absent, deleted or inactive ones"""
        tenant = self.get_tenant(require_tenant(tenant_id))
        if tenant is None or not tenant.is_active:
            raise NotFoundError("Tenant not found or inactive")
        return tenant


class BookingStore(ABC):
    """Rooms, business hours and bookings of tenants"""

    @abstractmethod
    def get_room(self, tenant_id: uuid.UUID, room_id: uuid.UUID) -> Optional[Room]:
        ...

    @abstractmethod
    def list_rooms(self, tenant_id: uuid.UUID, include_inactive: bool = False) -> list[Room]:
        ...

    @abstractmethod
    def get_business_hours(self, tenant_id: uuid.UUID, weekday: Weekday) -> Optional[BusinessHoursRule]:
        ...

    @abstractmethod
    def list_business_hours(self, tenant_id: uuid.UUID) -> list[BusinessHoursRule]:
        ...

    @abstractmethod
    def list_room_bookings(
        self,
        tenant_id: uuid.UUID,
        room_id: uuid.UUID,
        window_start: datetime,
        window_end: datetime,
    ) -> list[Booking]:
        """Non-cancelled bookings of a room overlapping ``[window_start, window_end)``"""

    @abstractmethod
    def list_bookings(
        self,
        tenant_id: uuid.UUID,
        room_id: Optional[uuid.UUID] = None,
        on_date: Optional[date] = None,
        status: Optional[BookingStatus] = None,
    ) -> list[Booking]:
        ...

    @abstractmethod
    def get_booking(self, tenant_id: uuid.UUID, booking_id: uuid.UUID) -> Optional[Booking]:
        ...

    @abstractmethod
    def add_booking(self, booking: Booking) -> Booking:
        """Persist a new booking atomically

        Must raise ConcurrencyError when an overlapping non-cancelled booking
        for the same room exists at write time.
        """

    @abstractmethod
    def save_booking(self, booking: Booking) -> Booking:
        """Persist changes to an existing booking"""

    @abstractmethod
    def reschedule_booking(
        self,
        booking: Booking,
        room_id: uuid.UUID,
        start_time: datetime,
        end_time: datetime,
        total_price: Decimal,
    ) -> Booking:
        """Move an existing booking to a new room and/or interval atomically

        Same write-time guarantee as ``add_booking``, with the booking itself
        left out of the overlap check.
        """

"""
Schemas for API responses and requests
"""

from roombook.schemas.token import TokenPayload
from roombook.schemas.tenant import TenantCreate, TenantUpdate, TenantResponse
from roombook.schemas.room import RoomCreate, RoomUpdate, RoomResponse
from roombook.schemas.business_hours import BusinessHoursEntry, WeeklyHoursUpdate, BusinessHoursResponse
from roombook.schemas.booking import (
    AvailableSlot,
    BookingCreate,
    BookingResponse,
    BookingUpdate,
    CustomerInfo,
)

__all__ = [
    "TokenPayload",
    "TenantCreate",
    "TenantUpdate",
    "TenantResponse",
    "RoomCreate",
    "RoomUpdate",
    "RoomResponse",
    "BusinessHoursEntry",
    "WeeklyHoursUpdate",
    "BusinessHoursResponse",
    "AvailableSlot",
    "BookingCreate",
    "BookingResponse",
    "BookingUpdate",
    "CustomerInfo",
]

"""
API routers
"""

from roombook.api import bookings, business_hours, rooms, tenants

__all__ = ["bookings", "business_hours", "rooms", "tenants"]

from roombook.models.tenant import Tenant, TenantStatus, PlanType
from roombook.models.room import Room
from roombook.models.business_hours import BusinessHoursRule, Weekday, DEFAULT_WEEKLY_HOURS
from roombook.models.booking import Booking, BookingStatus

"""
Weekly business hours model
"""

from sqlmodel import Field, SQLModel
from sqlalchemy import UniqueConstraint, CheckConstraint
from datetime import datetime, date, time
from typing import Optional
from enum import IntEnum
import uuid


class Weekday(IntEnum):
    """Day of week, Sunday-based (0=Sunday .. 6=Saturday)"""
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @classmethod
    def of(cls, day: date) -> "Weekday":
        """Weekday of a calendar date (Python's date.weekday() is Monday-based)"""
        return cls((day.weekday() + 1) % 7)


# Hours applied when a tenant has no stored rule for a weekday
DEFAULT_WEEKLY_HOURS: dict[Weekday, tuple[time, time]] = {
    Weekday.SUNDAY: (time(10, 0), time(21, 0)),
    Weekday.MONDAY: (time(9, 0), time(22, 0)),
    Weekday.TUESDAY: (time(9, 0), time(22, 0)),
    Weekday.WEDNESDAY: (time(9, 0), time(22, 0)),
    Weekday.THURSDAY: (time(9, 0), time(22, 0)),
    Weekday.FRIDAY: (time(9, 0), time(23, 0)),
    Weekday.SATURDAY: (time(10, 0), time(23, 0)),
}


class BusinessHoursRule(SQLModel, table=True):
    """Opening hours of a tenant for one weekday

    When ``close_time`` is earlier than ``open_time`` the venue closes after
    midnight, on the following calendar day.
    """

    __tablename__ = "business_hours"
    __table_args__ = (
        UniqueConstraint("tenant_id", "weekday", name="uq_business_hours_tenant_weekday"),
        CheckConstraint("weekday >= 0 AND weekday <= 6", name="ck_business_hours_weekday"),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    tenant_id: uuid.UUID = Field(foreign_key="tenants.id", index=True, description="Tenant ID for multi-tenant isolation")
    weekday: int = Field(description="0=Sunday .. 6=Saturday")

    open_time: Optional[time] = Field(default=None, description="Wall-clock opening time")
    close_time: Optional[time] = Field(default=None, description="Wall-clock closing time")
    is_closed: bool = Field(default=False, description="Closed all day, open/close ignored")

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = None

    @property
    def day(self) -> Weekday:
        return Weekday(self.weekday)

    @property
    def spans_midnight(self) -> bool:
        """Close time falls on the next calendar day"""
        if self.is_closed or self.open_time is None or self.close_time is None:
            return False
        return self.close_time < self.open_time

    @classmethod
    def default_for(cls, tenant_id: uuid.UUID, weekday: Weekday) -> "BusinessHoursRule":
        open_time, close_time = DEFAULT_WEEKLY_HOURS[weekday]
        return cls(
            tenant_id=tenant_id,
            weekday=int(weekday),
            open_time=open_time,
            close_time=close_time,
            is_closed=False,
        )

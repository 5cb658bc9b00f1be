"""
Pydantic schemas for weekly business hours
"""

from pydantic import BaseModel, Field, model_validator
from datetime import time
from typing import Optional

from roombook.models.business_hours import Weekday


class BusinessHoursEntry(BaseModel):
    """Hours for one weekday; close before open means closing after midnight"""
    weekday: Weekday
    open_time: Optional[time] = None
    close_time: Optional[time] = None
    is_closed: bool = False

    @model_validator(mode="after")
    def check_times(self):
        if not self.is_closed and (self.open_time is None or self.close_time is None):
            raise ValueError("open_time and close_time are required unless the day is closed")
        for value in (self.open_time, self.close_time):
            if value is not None and (value.second or value.microsecond):
                raise ValueError("Business hours must be whole minutes")
        return self


class WeeklyHoursUpdate(BaseModel):
    """Replacement hours for one or more weekdays"""
    business_hours: list[BusinessHoursEntry] = Field(..., min_length=1, max_length=7)

    @model_validator(mode="after")
    def check_unique_weekdays(self):
        weekdays = [entry.weekday for entry in self.business_hours]
        if len(set(weekdays)) != len(weekdays):
            raise ValueError("Each weekday may appear only once")
        return self


class BusinessHoursResponse(BaseModel):
    """Effective hours for one weekday"""
    weekday: Weekday
    day: str
    open_time: Optional[time] = None
    close_time: Optional[time] = None
    is_closed: bool
    spans_midnight: bool
    is_default: bool = False

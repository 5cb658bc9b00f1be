"""
Business-hours slot generation and interval containment

Times of day are handled as minutes since midnight. A rule that closes
after midnight is normalized into an opening window measured from midnight
of the day it opens (its *business day*), so ``20:00-02:00`` becomes
``[1200, 1560)``. Slot generation and containment are range checks over
that window.
"""

from datetime import date, datetime, time, timedelta
from typing import Callable, NamedTuple, Optional

from pydantic import BaseModel

from roombook.core.exceptions import ValidationError
from roombook.models.business_hours import BusinessHoursRule, Weekday

MINUTES_PER_DAY = 24 * 60
DEFAULT_SLOT_SIZE_MINUTES = 15
MAX_SLOTS_PER_DAY = 200


def minutes_of(value: time, round_up: bool = False) -> int:
    """Minutes since midnight of a wall-clock time

    Seconds are dropped, or counted as a whole extra minute with ``round_up``.
    """
    minutes = value.hour * 60 + value.minute
    if round_up and (value.second or value.microsecond):
        minutes += 1
    return minutes


def clock_time(minutes: int) -> time:
    """Wall-clock time for a minute offset, wrapping past midnight"""
    minutes %= MINUTES_PER_DAY
    return time(minutes // 60, minutes % 60)


def minutes_since(business_day: date, moment: datetime) -> float:
    """Elapsed minutes from midnight of ``business_day`` to ``moment``"""
    delta = moment - datetime.combine(business_day, time.min)
    return delta.total_seconds() / 60


class OpeningWindow(NamedTuple):
    """Open hours of one business day as elapsed minutes ``[open_minute, close_minute)``"""

    open_minute: int
    close_minute: int
    spans_midnight: bool

    def contains(self, start_offset: float, end_offset: float) -> bool:
        return self.open_minute <= start_offset and end_offset <= self.close_minute


def opening_window(rule: BusinessHoursRule) -> Optional[OpeningWindow]:
    """Normalize a rule, or None when the venue does not open that day

    Partial minutes shrink the window: opening rounds up, closing rounds down.
    """
    if rule.is_closed or rule.open_time is None or rule.close_time is None:
        return None

    spans_midnight = rule.close_time < rule.open_time
    open_minute = minutes_of(rule.open_time, round_up=True)
    close_minute = minutes_of(rule.close_time)
    if spans_midnight:
        close_minute += MINUTES_PER_DAY
    if close_minute <= open_minute:
        return None
    return OpeningWindow(open_minute, close_minute, spans_midnight)


class Slot(BaseModel):
    """Candidate booking start derived from business hours"""

    start: time
    end: time
    is_next_day: bool
    offset_minutes: int
    duration_minutes: int

    def start_on(self, business_day: date) -> datetime:
        return datetime.combine(business_day, time.min) + timedelta(minutes=self.offset_minutes)

    def end_on(self, business_day: date) -> datetime:
        return self.start_on(business_day) + timedelta(minutes=self.duration_minutes)


def generate_slots(
    rule: BusinessHoursRule,
    slot_size_minutes: int = DEFAULT_SLOT_SIZE_MINUTES,
    max_slots: int = MAX_SLOTS_PER_DAY,
) -> list[Slot]:
    """Bookable start times for the business day governed by ``rule``

    Slots start at opening time and repeat every ``slot_size_minutes`` while
    the running clock is before closing time, continuing past midnight for
    rules that close the next day. At most ``max_slots`` are produced.
    """
    if isinstance(slot_size_minutes, bool) or not isinstance(slot_size_minutes, int) or slot_size_minutes <= 0:
        raise ValidationError("Slot size must be a positive number of minutes")

    window = opening_window(rule)
    if window is None:
        return []

    slots: list[Slot] = []
    offset = window.open_minute
    while offset < window.close_minute and len(slots) < max_slots:
        slots.append(
            Slot(
                start=clock_time(offset),
                end=clock_time(offset + slot_size_minutes),
                is_next_day=offset >= MINUTES_PER_DAY,
                offset_minutes=offset,
                duration_minutes=slot_size_minutes,
            )
        )
        offset += slot_size_minutes
    return slots


def is_within_business_hours(
    rule: BusinessHoursRule,
    start: datetime,
    end: datetime,
    business_day: Optional[date] = None,
) -> bool:
    """Whether ``[start, end)`` lies entirely inside the rule's open hours

    Both endpoints are measured from midnight of ``business_day`` (the date
    whose weekday selected ``rule``; defaults to the start's date), so
    intervals crossing midnight are compared on one continuous axis.
    """
    if end <= start:
        return False

    window = opening_window(rule)
    if window is None:
        return False

    day = business_day or start.date()
    return window.contains(minutes_since(day, start), minutes_since(day, end))


def resolve_business_day(
    start: datetime,
    end: datetime,
    rule_for: Callable[[Weekday], BusinessHoursRule],
) -> Optional[date]:
    """Business day whose open hours contain ``[start, end)``

    The start's own date is tried first, then the previous date, whose
    window may still be open after midnight.
    """
    for day in (start.date(), start.date() - timedelta(days=1)):
        if is_within_business_hours(rule_for(Weekday.of(day)), start, end, business_day=day):
            return day
    return None

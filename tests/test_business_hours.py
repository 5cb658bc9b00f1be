"""
Unit tests for business-hours containment and weekday handling
"""

from datetime import date, datetime, time
import uuid

from pydantic import ValidationError as PydanticValidationError
import pytest

from roombook.models.business_hours import BusinessHoursRule, DEFAULT_WEEKLY_HOURS, Weekday
from roombook.schemas.business_hours import BusinessHoursEntry
from roombook.services.availability import (
    generate_slots,
    is_within_business_hours,
    opening_window,
    resolve_business_day,
)

MONDAY = date(2026, 10, 19)
SATURDAY = date(2026, 10, 17)
SUNDAY = date(2026, 10, 18)


def make_rule(open_time, close_time, weekday=Weekday.MONDAY, is_closed=False):
    return BusinessHoursRule(
        tenant_id=uuid.uuid4(),
        weekday=int(weekday),
        open_time=open_time,
        close_time=close_time,
        is_closed=is_closed,
    )


def at(day, hour, minute=0):
    return datetime.combine(day, time(hour, minute))


def test_weekday_of_is_sunday_based():
    assert Weekday.of(SUNDAY) == Weekday.SUNDAY == 0
    assert Weekday.of(MONDAY) == Weekday.MONDAY == 1
    assert Weekday.of(SATURDAY) == Weekday.SATURDAY == 6


def test_default_weekly_hours_cover_all_days():
    assert set(DEFAULT_WEEKLY_HOURS) == set(Weekday)
    assert DEFAULT_WEEKLY_HOURS[Weekday.FRIDAY] == (time(9, 0), time(23, 0))
    assert DEFAULT_WEEKLY_HOURS[Weekday.SUNDAY] == (time(10, 0), time(21, 0))

    rule = BusinessHoursRule.default_for(uuid.uuid4(), Weekday.SATURDAY)
    assert rule.weekday == 6
    assert rule.open_time == time(10, 0)
    assert rule.close_time == time(23, 0)
    assert rule.spans_midnight is False


def test_same_day_containment():
    rule = make_rule(time(9, 0), time(22, 0))

    assert is_within_business_hours(rule, at(MONDAY, 9), at(MONDAY, 10))
    assert is_within_business_hours(rule, at(MONDAY, 21), at(MONDAY, 22))
    assert not is_within_business_hours(rule, at(MONDAY, 8, 45), at(MONDAY, 9, 30))
    assert not is_within_business_hours(rule, at(MONDAY, 21, 30), at(MONDAY, 22, 30))


def test_spanning_rule_contains_interval_across_midnight():
    """20:00-02:00 holds [23:00, 01:00) but not [10:00, 11:00)"""
    rule = make_rule(time(20, 0), time(2, 0), weekday=Weekday.SATURDAY)

    assert rule.spans_midnight is True
    assert is_within_business_hours(rule, at(SATURDAY, 23), at(SUNDAY, 1), business_day=SATURDAY)
    assert not is_within_business_hours(rule, at(SATURDAY, 10), at(SATURDAY, 11), business_day=SATURDAY)


def test_spanning_rule_bounds():
    rule = make_rule(time(20, 0), time(2, 0), weekday=Weekday.SATURDAY)

    assert is_within_business_hours(rule, at(SATURDAY, 20), at(SATURDAY, 21), business_day=SATURDAY)
    assert is_within_business_hours(rule, at(SUNDAY, 1), at(SUNDAY, 2), business_day=SATURDAY)
    assert not is_within_business_hours(rule, at(SUNDAY, 1, 30), at(SUNDAY, 2, 30), business_day=SATURDAY)
    assert not is_within_business_hours(rule, at(SATURDAY, 19, 45), at(SATURDAY, 20, 15), business_day=SATURDAY)


def test_spanning_window_offsets():
    window = opening_window(make_rule(time(20, 0), time(2, 0)))

    assert window.open_minute == 1200
    assert window.close_minute == 1560
    assert window.spans_midnight is True


def test_partial_minutes_shrink_the_window():
    """Opening at 09:00:30 means 09:00 is still closed"""
    rule = make_rule(time(9, 0, 30), time(21, 59, 30))
    window = opening_window(rule)

    assert (window.open_minute, window.close_minute) == (541, 1319)
    assert not is_within_business_hours(rule, at(MONDAY, 9), at(MONDAY, 10))
    assert is_within_business_hours(rule, at(MONDAY, 9, 1), at(MONDAY, 10))
    assert not is_within_business_hours(rule, at(MONDAY, 21), at(MONDAY, 22))
    assert generate_slots(rule)[0].start == time(9, 1)


def test_sub_minute_window_is_closed():
    assert opening_window(make_rule(time(9, 0, 15), time(9, 0, 45))) is None


def test_hours_entry_requires_whole_minutes():
    with pytest.raises(PydanticValidationError):
        BusinessHoursEntry(weekday=Weekday.MONDAY, open_time=time(9, 0, 30), close_time=time(22, 0))
    with pytest.raises(PydanticValidationError):
        BusinessHoursEntry(weekday=Weekday.MONDAY, open_time="09:00", close_time="22:00:01")

    entry = BusinessHoursEntry(weekday=Weekday.MONDAY, open_time="09:00", close_time="22:00")
    assert entry.open_time == time(9, 0)


def test_empty_or_reversed_interval_is_never_contained():
    rule = make_rule(time(9, 0), time(22, 0))

    assert not is_within_business_hours(rule, at(MONDAY, 10), at(MONDAY, 10))
    assert not is_within_business_hours(rule, at(MONDAY, 11), at(MONDAY, 10))


def test_closed_day_contains_nothing():
    rule = make_rule(None, None, is_closed=True)
    assert not is_within_business_hours(rule, at(MONDAY, 12), at(MONDAY, 13))


def test_resolve_business_day_uses_previous_evening():
    """An after-midnight booking belongs to the window opened the evening before"""
    rules = {
        Weekday.SATURDAY: make_rule(time(20, 0), time(2, 0), weekday=Weekday.SATURDAY),
        Weekday.SUNDAY: make_rule(time(10, 0), time(21, 0), weekday=Weekday.SUNDAY),
    }

    assert resolve_business_day(at(SUNDAY, 0, 30), at(SUNDAY, 1, 30), rules.get) == SATURDAY
    assert resolve_business_day(at(SATURDAY, 23), at(SUNDAY, 1), rules.get) == SATURDAY
    assert resolve_business_day(at(SUNDAY, 12), at(SUNDAY, 13), rules.get) == SUNDAY
    assert resolve_business_day(at(SUNDAY, 3), at(SUNDAY, 4), rules.get) is None

"""
Booking price calculation
"""

from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

from roombook.core.exceptions import InvalidIntervalError

CENT = Decimal("0.01")
SECONDS_PER_HOUR = Decimal(3600)


def compute_price(hourly_rate: Union[Decimal, int, float, str], start: datetime, end: datetime) -> Decimal:
    """Hourly rate times (fractional) duration, rounded half-up to cents"""
    if end <= start:
        raise InvalidIntervalError("Booking end time must be after start time")

    rate = Decimal(str(hourly_rate))
    hours = Decimal(str((end - start).total_seconds())) / SECONDS_PER_HOUR
    return (hours * rate).quantize(CENT, rounding=ROUND_HALF_UP)

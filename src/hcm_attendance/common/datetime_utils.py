from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta, timezone
from typing import Callable, Iterator, List, Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.constants import DEFAULT_BUSINESS_TIMEZONE
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(str(value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date {value!r} (expected YYYY-MM-DD)")


def parse_hhmm(value: Optional[str]) -> Optional[time]:
    v = (value or "").strip()
    if not v:
        return None
    try:
        return datetime.strptime(v, "%H:%M").time()
    except ValueError:
        raise ValidationError(f"Invalid time {value!r} (expected HH:MM)")


def minutes_of_day(value: datetime | time) -> int:
    return value.hour * 60 + value.minute


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    if not 1 <= int(month) <= 12:
        raise ValidationError("month must be between 1 and 12")
    if not 1970 <= int(year) <= 9999:
        raise ValidationError("year is out of range")
    last = calendar.monthrange(int(year), int(month))[1]
    return date(int(year), int(month), 1), date(int(year), int(month), last)


def iter_dates(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def business_days(start: date, end: date) -> List[date]:
    """Weekdays (Mon-Fri) in the inclusive range."""
    return [d for d in iter_dates(start, end) if d.weekday() < 5]


def overlap_days(a_start: date, a_end: date, b_start: date, b_end: date) -> int:
    """Inclusive day-count of the intersection of two date ranges, floored at 0."""
    start = max(a_start, b_start)
    end = min(a_end, b_end)
    return max(0, (end - start).days + 1)


class BusinessClock:
    """Single timezone policy for the whole core.

    Every timestamp the core stores or compares is a naive wall-clock value in the
    configured business timezone. Aware datetimes entering the core are converted once,
    here; naive datetimes are taken to be business-local already.
    """

    def __init__(self, tz_name: str = DEFAULT_BUSINESS_TIMEZONE, *, now_fn: Optional[Callable[[], datetime]] = None):
        try:
            self._tz = ZoneInfo(tz_name)
        except ZoneInfoNotFoundError:
            raise ValidationError(f"Unknown timezone {tz_name!r}")
        self._now_fn = now_fn

    @property
    def tz(self) -> ZoneInfo:
        return self._tz

    def localize(self, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value
        return value.astimezone(self._tz).replace(tzinfo=None)

    def now(self) -> datetime:
        """Current business-local time.

        Note: Wrapped so tests can inject a fixed clock.
        """
        current = self._now_fn() if self._now_fn else datetime.now(timezone.utc)
        return self.localize(current)

    def today(self) -> date:
        return self.now().date()

"""Civil calendar capability for the analytics engine.

All "today" computations are anchored to a single fixed UTC offset rather
than host-local time. The offset is a property of the clock handed to the
engine, so tests and replays can supply a frozen instant.

Usage:
    from loadwatch.core.clock import FixedOffsetClock, FrozenClock

    clock = FixedOffsetClock(offset_hours=9)
    clock.today()  # civil date in UTC+9

    frozen = FrozenClock(datetime(2025, 3, 1, tzinfo=UTC))
"""

import calendar
from datetime import UTC, date, datetime, timedelta, timezone
from typing import Protocol

DEFAULT_OFFSET_HOURS = 9


class Clock(Protocol):
    """Protocol for the source of "now" used by the engine."""

    def now(self) -> datetime:
        """Current instant as an aware datetime in the clock's civil offset."""
        ...

    def today(self) -> date:
        """Current civil date."""
        ...


class FixedOffsetClock:
    """Wall clock converted to a fixed UTC offset."""

    def __init__(self, offset_hours: int = DEFAULT_OFFSET_HOURS) -> None:
        self.tz = timezone(timedelta(hours=offset_hours))

    def now(self) -> datetime:
        return datetime.now(UTC).astimezone(self.tz)

    def today(self) -> date:
        return self.now().date()


class FrozenClock:
    """Clock pinned to one instant.

    Naive datetimes are taken to be in the clock's offset already.
    """

    def __init__(
        self,
        instant: datetime | date,
        offset_hours: int = DEFAULT_OFFSET_HOURS,
    ) -> None:
        self.tz = timezone(timedelta(hours=offset_hours))
        if not isinstance(instant, datetime):
            instant = datetime(instant.year, instant.month, instant.day)
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=self.tz)
        self._instant = instant.astimezone(self.tz)

    def now(self) -> datetime:
        return self._instant

    def today(self) -> date:
        return self._instant.date()

    def advance(self, days: int = 0, hours: int = 0) -> None:
        """Move the frozen instant forward."""
        self._instant += timedelta(days=days, hours=hours)


def parse_civil_date(value: object) -> date | None:
    """Interpret a value as a civil date.

    Accepts ``date``, ``datetime`` (its own date is used, no conversion) or
    an ISO ``"YYYY-MM-DD"`` string. Anything else returns ``None``.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def months_before(day: date, months: int) -> date:
    """Return the same day ``months`` earlier, clamped to the month end."""
    index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))

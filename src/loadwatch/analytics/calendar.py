"""Monday-anchored week and calendar-month helpers.

Weeks run Monday to Sunday. A week belongs to the calendar year of its
Monday and is numbered from the Monday on or before January 1st of that
year, so a date in the first days of January can sit in the last week of
the previous year.
"""

import calendar
from datetime import date, timedelta

MONTH_LABELS = tuple(calendar.month_name[1:])


def week_start(day: date) -> date:
    """Monday of the week containing ``day``."""
    return day - timedelta(days=day.weekday())


def first_monday(year: int) -> date:
    """Monday on or before January 1st of ``year``."""
    return week_start(date(year, 1, 1))


def week_key(day: date) -> tuple[int, int]:
    """``(year, week_number)`` of the Monday-to-Sunday span holding ``day``."""
    monday = week_start(day)
    number = (monday - first_monday(monday.year)).days // 7 + 1
    return monday.year, number


def week_date_range(year: int, week_number: int) -> tuple[date, date]:
    """Monday and Sunday of a numbered week."""
    start = first_monday(year) + timedelta(weeks=week_number - 1)
    return start, start + timedelta(days=6)


def month_label(month: int) -> str:
    """English name of a 1-based month."""
    return MONTH_LABELS[month - 1]

"""Calendar helpers: date ranges, period floors and month arithmetic."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class DateRange:
    start: Optional[date] = None
    end: Optional[date] = None

    @property
    def is_bounded(self) -> bool:
        return self.start is not None and self.end is not None


def to_date(value: date | datetime | None) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    return value


def resolve_range(
    start: date | datetime | None, end: date | datetime | None
) -> DateRange:
    start_date = to_date(start)
    end_date = to_date(end)
    if start_date and end_date and start_date > end_date:
        raise ValueError("startDate must be on or before endDate")
    return DateRange(start_date, end_date)


def period_start(period: str, *, today: Optional[date] = None) -> date:
    """First day of the current calendar month or year."""
    today = today or date.today()
    if period == "monthly":
        return today.replace(day=1)
    return today.replace(month=1, day=1)


def shift_months(day: date, months: int) -> date:
    """Move ``day`` by whole months, clamping to the last day of the target month."""
    month_index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    if month == 12:
        next_month = date(year + 1, 1, 1)
    else:
        next_month = date(year, month + 1, 1)
    last_day = (next_month - date.resolution).day
    return date(year, month, min(day.day, last_day))


def parse_date_param(value: str | None) -> Optional[date]:
    """Parse ``YYYY-MM-DD`` or an ISO-8601 timestamp from a query string."""
    if value is None or value == "":
        return None
    text = value.strip()
    if len(text) == 10:
        return date.fromisoformat(text)
    return datetime.fromisoformat(text).date()

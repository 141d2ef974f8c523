from __future__ import annotations

import calendar
from datetime import date, datetime


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def hours_between(start: datetime, end: datetime) -> float:
    """Elapsed time as fractional hours (not rounded)."""
    return (end - start).total_seconds() / 3600.0


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def epoch_millis(value: datetime) -> int:
    return int(value.timestamp() * 1000)


def format_clock(value: datetime | None, placeholder: str = "-") -> str:
    return value.strftime("%H:%M") if value else placeholder

"""Month grid generation.

A month is shown as 6 rows x 7 columns (Sunday first). Cells before day 1 are
filled from the end of the previous month and cells after the last day from the
start of the next month.

Months are 0-based (0=January). Day keys use 1-based months.
"""

from __future__ import annotations

from calendar import month_name, monthrange
from dataclasses import dataclass
from datetime import date

GRID_CELLS = 42
DAYS_PER_WEEK = 7


@dataclass(frozen=True)
class DayCell:
    """One cell of the month grid.

    Attributes:
        day: Day of month (1-31)
        year: Calendar year of the cell (adjacent year on rollover cells)
        month: 0-based month of the cell (adjacent month on overflow cells)
        overflow: True for cells borrowed from the previous/next month
        is_today: Cell is the current day (never set on overflow cells)
        is_past: Cell is before today (never set on overflow cells)
    """

    day: int
    year: int
    month: int
    overflow: bool
    is_today: bool = False
    is_past: bool = False

    @property
    def date(self) -> date:
        return date(self.year, self.month + 1, self.day)

    @property
    def key(self) -> str:
        return day_key(self.year, self.month, self.day)

    @property
    def weekday(self) -> int:
        return sunday_weekday(self.date)


def _validate_month(month: int) -> None:
    if not 0 <= month <= 11:
        raise ValueError(f"Month must be 0 (January) to 11 (December), got {month}")


def day_key(year: int, month: int, day: int) -> str:
    """Format a day as ``YYYY-MM-DD`` from a 0-based month."""
    return f"{year:04d}-{month + 1:02d}-{day:02d}"


def date_key(d: date) -> str:
    return day_key(d.year, d.month - 1, d.day)


def parse_day_key(key: str) -> tuple[int, int, int]:
    """Inverse of day_key: returns (year, 0-based month, day).

    Raises:
        ValueError: If key is not a valid ``YYYY-MM-DD`` date
    """
    parts = key.split("-")
    if len(parts) != 3:
        raise ValueError(f"Invalid day key '{key}', expected YYYY-MM-DD")
    try:
        year, month, day = (int(part) for part in parts)
        date(year, month, day)
    except ValueError as e:
        raise ValueError(f"Invalid day key '{key}': {e}") from e
    return year, month - 1, day


def sunday_weekday(d: date) -> int:
    """Weekday index with 0=Sunday .. 6=Saturday."""
    return (d.weekday() + 1) % DAYS_PER_WEEK


def days_in_month(year: int, month: int) -> int:
    _validate_month(month)
    return monthrange(year, month + 1)[1]


def previous_month(year: int, month: int) -> tuple[int, int]:
    _validate_month(month)
    if month == 0:
        return year - 1, 11
    return year, month - 1


def next_month(year: int, month: int) -> tuple[int, int]:
    _validate_month(month)
    if month == 11:
        return year + 1, 0
    return year, month + 1


def month_title(year: int, month: int) -> str:
    """Grid header, e.g. ``"January 2024"``."""
    _validate_month(month)
    return f"{month_name[month + 1]} {year}"


def _classify(cell_date: date, today: date | None) -> tuple[bool, bool]:
    if today is None:
        return False, False
    return cell_date == today, cell_date < today


def build_month_grid(year: int, month: int, today: date | None = None) -> list[DayCell]:
    """Build the 42 cells shown for a month.

    Args:
        year: Calendar year
        month: 0-based month (0=January)
        today: Reference date for is_today / is_past; flags stay False when None

    Returns:
        Exactly 42 DayCell objects in display order
    """
    _validate_month(month)
    first_weekday = sunday_weekday(date(year, month + 1, 1))
    month_days = days_in_month(year, month)
    prev_year, prev_month = previous_month(year, month)
    prev_month_days = days_in_month(prev_year, prev_month)
    next_year, next_month_index = next_month(year, month)

    cells: list[DayCell] = []

    for i in range(first_weekday):
        day = prev_month_days - first_weekday + i + 1
        cells.append(DayCell(day=day, year=prev_year, month=prev_month, overflow=True))

    for day in range(1, month_days + 1):
        is_today, is_past = _classify(date(year, month + 1, day), today)
        cells.append(DayCell(day=day, year=year, month=month, overflow=False, is_today=is_today, is_past=is_past))

    day = 1
    while len(cells) < GRID_CELLS:
        cells.append(DayCell(day=day, year=next_year, month=next_month_index, overflow=True))
        day += 1

    return cells

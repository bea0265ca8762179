"""Month grid and cell styling."""

from workout_calendar.calendar.grid import (
    GRID_CELLS,
    DayCell,
    build_month_grid,
    date_key,
    day_key,
    days_in_month,
    month_title,
    next_month,
    parse_day_key,
    previous_month,
    sunday_weekday,
)
from workout_calendar.calendar.styling import background_tint, cell_classes, is_active

__all__ = [
    "GRID_CELLS",
    "DayCell",
    "background_tint",
    "build_month_grid",
    "cell_classes",
    "date_key",
    "day_key",
    "days_in_month",
    "is_active",
    "month_title",
    "next_month",
    "parse_day_key",
    "previous_month",
    "sunday_weekday",
]

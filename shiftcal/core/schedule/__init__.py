"""
Schedule module - días libres, jornada reducida y grillas.

Exporta todas las funciones públicas.
"""

from .core import (
    ShiftCalendar,
    clear_calendar_cache,
    get_calendar,
    get_day_in_cycle,
    get_settings,
    is_rest_day,
)
from .grid import build_day_cell, build_month_grid, build_staff_row, build_week_grid
from .hours import (
    adjusted_horario,
    is_reduced_hour_day,
    parse_horario,
    reduced_hour_dates,
    turno_from_horario,
    weekly_hours,
)
from .weeks import (
    days_in_month,
    format_day_of_week,
    format_week_range,
    get_month_dates,
    get_week_dates,
    get_week_start,
    is_date_in_range,
    is_past_date,
    is_today,
    month_name,
    next_week,
    parse_date,
    previous_week,
    to_date,
    weekday_index,
)

__all__ = [
    # core
    "ShiftCalendar",
    "is_rest_day",
    "get_calendar",
    "get_settings",
    "get_day_in_cycle",
    "clear_calendar_cache",
    # hours
    "reduced_hour_dates",
    "is_reduced_hour_day",
    "weekly_hours",
    "adjusted_horario",
    "turno_from_horario",
    "parse_horario",
    # weeks
    "parse_date",
    "to_date",
    "weekday_index",
    "get_week_start",
    "get_week_dates",
    "previous_week",
    "next_week",
    "days_in_month",
    "get_month_dates",
    "is_date_in_range",
    "is_today",
    "is_past_date",
    "format_day_of_week",
    "month_name",
    "format_week_range",
    # grid
    "build_day_cell",
    "build_staff_row",
    "build_week_grid",
    "build_month_grid",
]

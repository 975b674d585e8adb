"""Grillas de semana y mes por persona."""

import datetime
import logging
from collections.abc import Iterable, Mapping

from shiftcal.core.config import REDUCED_DAY_HOURS, REGULAR_DAY_HOURS
from shiftcal.core.constants import DAY_NAMES_SHORT, DAY_STATUS_OFF, DAY_STATUS_WORK
from shiftcal.core.models import DateOverride, SpecialTemplate, StaffShiftAssignment
from shiftcal.core.patterns import Pattern, PatternResolver
from shiftcal.core.types import CalendarGrid, DayCell, GridHeader, ShiftTypeCode, StaffId, StaffRow

from .core import ShiftCalendar
from .hours import adjusted_horario, is_reduced_hour_day, reduced_hour_dates, turno_from_horario, weekly_hours
from .weeks import format_week_range, get_month_dates, get_week_dates, is_past_date, is_today, month_name, weekday_index

logger = logging.getLogger(__name__)

OverrideMap = Mapping[tuple[str, datetime.date], DateOverride]


def build_day_cell(
    calendar: ShiftCalendar,
    assignment: StaffShiftAssignment | None,
    date: datetime.date,
    pattern: Pattern | None,
    special_template: SpecialTemplate | None = None,
    override: DateOverride | None = None,
) -> DayCell:
    """
    Celda de una persona en una fecha.

    reduced es True solo si el día es de trabajo y cae en un día de
    jornada reducida. El horario de esos días viene ajustado.
    """
    if assignment is None:
        rest = override.is_rest if override is not None else False
        horario = None
    else:
        rest = calendar.is_rest_day(
            date,
            assignment.shift_type_code,
            assignment.variant_code,
            pattern,
            special_template,
            override,
        )
        horario = assignment.horario

    reduced = not rest and is_reduced_hour_day(date)
    weekday = weekday_index(date)

    return {
        "date": date,
        "weekday_index": weekday,
        "weekday_name": DAY_NAMES_SHORT[weekday],
        "status": DAY_STATUS_OFF if rest else DAY_STATUS_WORK,
        "reduced": reduced,
        "overridden": override is not None,
        "horario": None if rest else adjusted_horario(horario, reduced),
        "turno": turno_from_horario(horario),
        "is_today": is_today(date),
        "is_past": is_past_date(date),
    }


def build_staff_row(
    calendar: ShiftCalendar,
    staff_id: str,
    assignment: StaffShiftAssignment | None,
    dates: list[datetime.date],
    resolver: PatternResolver,
    special_templates: Mapping[str, SpecialTemplate] | None = None,
    overrides: OverrideMap | None = None,
) -> StaffRow:
    """Todas las celdas de una persona, con totales."""
    special_templates = special_templates or {}
    overrides = overrides or {}

    pattern = None
    if assignment is None:
        logger.warning("Staff %s has no shift assignment, rendering as working days", staff_id)
    else:
        pattern = resolver.resolve(assignment.shift_type_code)

    template = special_templates.get(staff_id)
    days = [
        build_day_cell(calendar, assignment, d, pattern, template, overrides.get((staff_id, d)))
        for d in dates
    ]

    rest_days = sum(1 for day in days if day["status"] == DAY_STATUS_OFF)
    reduced_days = sum(1 for day in days if day["reduced"])

    return {
        "staff_id": StaffId(staff_id),
        "shift_type_code": ShiftTypeCode(assignment.shift_type_code) if assignment else None,
        "variant_code": assignment.variant_code.value if assignment else None,
        "days": days,
        "work_days": len(days) - rest_days,
        "rest_days": rest_days,
        "reduced_days": reduced_days,
    }


def _headers(dates: list[datetime.date], reduced: set[datetime.date]) -> list[GridHeader]:
    return [
        {
            "date": d,
            "weekday_name": DAY_NAMES_SHORT[weekday_index(d)],
            "day_number": d.day,
            "reduced": d in reduced,
            "is_today": is_today(d),
        }
        for d in dates
    ]


def _rows(
    calendar: ShiftCalendar,
    dates: list[datetime.date],
    assignments: Mapping[str, StaffShiftAssignment],
    resolver: PatternResolver,
    staff_ids: Iterable[str] | None,
    special_templates: Mapping[str, SpecialTemplate] | None,
    overrides: OverrideMap | None,
) -> list[StaffRow]:
    ids = list(staff_ids) if staff_ids is not None else sorted(assignments)
    return [
        build_staff_row(calendar, sid, assignments.get(sid), dates, resolver, special_templates, overrides)
        for sid in ids
    ]


def build_week_grid(
    calendar: ShiftCalendar,
    week_start: datetime.date,
    assignments: Mapping[str, StaffShiftAssignment],
    resolver: PatternResolver,
    staff_ids: Iterable[str] | None = None,
    special_templates: Mapping[str, SpecialTemplate] | None = None,
    overrides: OverrideMap | None = None,
    regular_hours: int = REGULAR_DAY_HOURS,
    reduced_hours: int = REDUCED_DAY_HOURS,
) -> CalendarGrid:
    """
    Grilla semanal.

    Args:
        calendar: Calculadora de días libres
        week_start: Lunes de la semana
        assignments: staff_id -> asignación de turno
        resolver: Resuelve código de turno -> patrón
        staff_ids: Personas a mostrar; por defecto todas las asignadas
        special_templates: staff_id -> plantilla ESPECIAL
        overrides: (staff_id, fecha) -> override
        regular_hours: Horas de un día normal
        reduced_hours: Horas de un día de jornada reducida

    Returns:
        Grilla con encabezados, filas y horas semanales por persona
    """
    dates = get_week_dates(week_start)
    rows = _rows(calendar, dates, assignments, resolver, staff_ids, special_templates, overrides)

    for row in rows:
        regular_days = row["work_days"] - row["reduced_days"]
        row["weekly_hours"] = weekly_hours(regular_days, row["reduced_days"], regular_hours, reduced_hours)

    return {
        "start_date": dates[0],
        "end_date": dates[-1],
        "title": format_week_range(week_start),
        "headers": _headers(dates, set(reduced_hour_dates(week_start))),
        "rows": rows,
    }


def build_month_grid(
    calendar: ShiftCalendar,
    year: int,
    month: int,
    assignments: Mapping[str, StaffShiftAssignment],
    resolver: PatternResolver,
    staff_ids: Iterable[str] | None = None,
    special_templates: Mapping[str, SpecialTemplate] | None = None,
    overrides: OverrideMap | None = None,
) -> CalendarGrid:
    """Grilla mensual (month 1-12). Mismos argumentos que build_week_grid."""
    dates = get_month_dates(year, month)
    rows = _rows(calendar, dates, assignments, resolver, staff_ids, special_templates, overrides)

    return {
        "start_date": dates[0],
        "end_date": dates[-1],
        "title": f"{month_name(month)} {year}",
        "headers": _headers(dates, {d for d in dates if is_reduced_hour_day(d)}),
        "rows": rows,
    }

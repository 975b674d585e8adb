"""Generación de archivos iCal con los días de trabajo de una persona."""

import calendar
import datetime

from icalendar import Calendar, Event

from shiftcal.core.config import DEFAULT_TIMEZONE
from shiftcal.core.constants import TURNO_NOCHE
from shiftcal.core.models import DateOverride, SpecialTemplate, StaffShiftAssignment
from shiftcal.core.patterns import Pattern
from shiftcal.core.schedule.core import ShiftCalendar
from shiftcal.core.schedule.hours import adjusted_horario, is_reduced_hour_day, parse_horario, turno_from_horario

TURNO_NAMES: dict[str, str] = {
    "DIA": "Turno Día",
    "NOCHE": "Turno Noche",
}


def generate_ical(
    shift_calendar: ShiftCalendar,
    assignment: StaffShiftAssignment,
    pattern: Pattern | None,
    start_date: datetime.date,
    end_date: datetime.date,
    special_template: SpecialTemplate | None = None,
    overrides: dict[datetime.date, DateOverride] | None = None,
    timezone: str = DEFAULT_TIMEZONE,
) -> str:
    """
    Genera un iCal con un evento por cada día de trabajo.

    Los días libres no generan evento.

    Args:
        shift_calendar: Calculadora de días libres
        assignment: Asignación de turno de la persona
        pattern: Patrón resuelto para la asignación
        start_date: Primera fecha del intervalo
        end_date: Última fecha del intervalo (inclusive)
        special_template: Plantilla ESPECIAL de la persona
        overrides: fecha -> override de la persona
        timezone: Zona horaria IANA para X-WR-TIMEZONE

    Returns:
        String en formato iCal
    """
    overrides = overrides or {}

    cal = Calendar()
    cal.add("prodid", "-//shiftcal//Calendario de turnos//ES")
    cal.add("version", "2.0")
    cal.add("calscale", "GREGORIAN")
    cal.add("method", "PUBLISH")
    cal.add("x-wr-calname", f"Turnos {assignment.staff_id}")
    cal.add("x-wr-timezone", timezone)

    # end_date puede ser datetime.date.max
    for offset in range((end_date - start_date).days + 1):
        current_date = start_date + datetime.timedelta(days=offset)
        rest = shift_calendar.is_rest_day(
            current_date,
            assignment.shift_type_code,
            assignment.variant_code,
            pattern,
            special_template,
            overrides.get(current_date),
        )

        if not rest:
            cal.add_component(_create_work_event(current_date, assignment))

    return cal.to_ical().decode("utf-8")


def _create_work_event(date: datetime.date, assignment: StaffShiftAssignment) -> Event:
    """
    Crea un VEVENT para un día de trabajo.

    Con horario conocido el evento tiene hora de inicio y fin (el turno de
    noche termina al día siguiente); si no, es un evento de día completo.
    Sin día siguiente representable (datetime.date.max) se omite DTEND.
    """
    event = Event()

    reduced = is_reduced_hour_day(date)
    horario = adjusted_horario(assignment.horario, reduced)
    turno = turno_from_horario(assignment.horario)

    event.add("summary", TURNO_NAMES[turno])
    event.add("uid", f"{date.isoformat()}_{assignment.staff_id}_{assignment.shift_type_code}@shiftcal")

    times = parse_horario(horario)
    if times:
        start_time, end_time = times
        start_dt = datetime.datetime.combine(date, start_time)
        end_dt = datetime.datetime.combine(date, end_time)

        # Turno que cruza medianoche
        if end_dt <= start_dt:
            end_dt = _next_day(end_dt)

        event.add("dtstart", start_dt)
        if end_dt is not None:
            event.add("dtend", end_dt)
    else:
        event.add("dtstart", date)
        end_date = _next_day(date)
        if end_date is not None:
            event.add("dtend", end_date)

    description_parts = [f"Tipo de turno: {assignment.shift_type_code}", f"Variante: {assignment.variant_code.value}"]
    if horario:
        description_parts.append(f"Horario: {horario}")
    if reduced:
        description_parts.append("Jornada reducida (Ley 40 horas)")
    if turno == TURNO_NOCHE:
        description_parts.append("Turno de noche")

    event.add("description", "\n".join(description_parts))
    event.add("dtstamp", datetime.datetime.now(datetime.timezone.utc))

    return event


def _next_day(value):
    try:
        return value + datetime.timedelta(days=1)
    except OverflowError:
        return None


def generate_ical_for_month(
    shift_calendar: ShiftCalendar,
    assignment: StaffShiftAssignment,
    pattern: Pattern | None,
    year: int,
    month: int,
    special_template: SpecialTemplate | None = None,
    overrides: dict[datetime.date, DateOverride] | None = None,
    timezone: str = DEFAULT_TIMEZONE,
) -> str:
    """iCal para un mes (1-12)."""
    start_date = datetime.date(year, month, 1)
    last_day = calendar.monthrange(year, month)[1]
    end_date = datetime.date(year, month, last_day)

    return generate_ical(
        shift_calendar, assignment, pattern, start_date, end_date, special_template, overrides, timezone
    )


def generate_ical_for_year(
    shift_calendar: ShiftCalendar,
    assignment: StaffShiftAssignment,
    pattern: Pattern | None,
    year: int,
    special_template: SpecialTemplate | None = None,
    overrides: dict[datetime.date, DateOverride] | None = None,
    timezone: str = DEFAULT_TIMEZONE,
) -> str:
    """iCal para un año completo."""
    start_date = datetime.date(year, 1, 1)
    end_date = datetime.date(year, 12, 31)

    return generate_ical(
        shift_calendar, assignment, pattern, start_date, end_date, special_template, overrides, timezone
    )

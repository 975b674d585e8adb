"""Jornada reducida (Ley 40 horas) y horarios."""

import datetime
import logging
import re

from shiftcal.core.config import REDUCED_DAY_HOURS, REDUCED_DAY_OFFSETS, REGULAR_DAY_HOURS
from shiftcal.core.constants import NIGHT_SHIFT_END_HOUR, NIGHT_SHIFT_START_HOUR, TURNO_DIA, TURNO_NOCHE

from .weeks import DateLike, parse_date

logger = logging.getLogger(__name__)

_HORARIO_START = re.compile(r"^(\d{1,2}):(\d{2})")
_HORARIO_RANGE = re.compile(r"(\d{1,2}):(\d{2})-(\d{1,2}):(\d{2})")


def reduced_hour_dates(week_start: DateLike) -> tuple[datetime.date, ...]:
    """
    Días de jornada reducida de la semana.

    En 2026 la semana es de 43 horas: dos días por semana se acortan una
    hora. Se usan martes y jueves, es decir los desplazamientos 1 y 3 desde
    el lunes. No considera si el día es libre; quien llama debe excluir los
    días libres si necesita "reducido y trabajado".

    Args:
        week_start: Lunes de la semana

    Returns:
        (martes, jueves), o una tupla vacía si la fecha no es válida o
        la semana se sale del rango de datetime.date
    """
    start = parse_date(week_start)
    if start is None:
        return ()
    try:
        return tuple(start + datetime.timedelta(days=offset) for offset in REDUCED_DAY_OFFSETS)
    except OverflowError:
        logger.debug("Week of %s runs past %s, no reduced-hour dates", start, datetime.date.max)
        return ()


def is_reduced_hour_day(date: DateLike) -> bool:
    """True si la fecha cae en martes o jueves."""
    day = parse_date(date)
    if day is None:
        return False
    return day.weekday() in REDUCED_DAY_OFFSETS


def weekly_hours(
    regular_days: int,
    reduced_days: int,
    regular_hours: int = REGULAR_DAY_HOURS,
    reduced_hours: int = REDUCED_DAY_HOURS,
) -> int:
    """
    Horas semanales.

    5 días normales = 45 horas; con dos días reducidos = 43 horas.
    """
    return regular_days * regular_hours + reduced_days * reduced_hours


def adjusted_horario(horario: str | None, is_reduced: bool) -> str | None:
    """
    Horario de un día reducido: entra una hora más tarde.

    "10:00-20:00" pasa a "11:00-20:00". Horarios vacíos o que no se pueden
    interpretar se devuelven sin cambios.
    """
    if not horario or not is_reduced:
        return horario

    match = _HORARIO_RANGE.search(horario)
    if not match:
        return horario

    start_hour, start_min, end_hour, end_min = match.groups()
    new_start_hour = (int(start_hour) + 1) % 24
    return f"{new_start_hour:02d}:{start_min}-{end_hour}:{end_min}"


def turno_from_horario(horario: str | None) -> str:
    """DIA o NOCHE según la hora de inicio del horario."""
    if not horario:
        return TURNO_DIA

    match = _HORARIO_START.match(horario.strip())
    if not match:
        return TURNO_DIA

    start_hour = int(match.group(1))

    # Noche: empieza a las 20:00 o después, o antes de las 06:00
    if start_hour >= NIGHT_SHIFT_START_HOUR or start_hour < NIGHT_SHIFT_END_HOUR:
        return TURNO_NOCHE

    return TURNO_DIA


def parse_horario(horario: str | None) -> tuple[datetime.time, datetime.time] | None:
    """(inicio, fin) de un horario "HH:MM-HH:MM", o None."""
    if not horario:
        return None
    match = _HORARIO_RANGE.search(horario)
    if not match:
        return None
    start_hour, start_min, end_hour, end_min = (int(part) for part in match.groups())
    try:
        return datetime.time(start_hour, start_min), datetime.time(end_hour, end_min)
    except ValueError:
        return None

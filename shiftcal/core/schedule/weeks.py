"""Semanas, meses y comparaciones de fechas."""

import calendar
import datetime
import logging
from typing import Union

from shiftcal.core.config import DATE_FORMAT_ISO
from shiftcal.core.constants import DAY_NAMES_SHORT, DAYS_PER_WEEK, MONTH_NAMES, MONTH_NAMES_SHORT
from shiftcal.core.types import WeekdayIndex
from shiftcal.core.utils import get_today

logger = logging.getLogger(__name__)

DateLike = Union[datetime.date, str]


def parse_date(value: object) -> datetime.date | None:
    """
    Convierte una fecha de entrada en datetime.date.

    Acepta datetime.date, datetime.datetime (se ignora la hora) y strings
    ISO ("YYYY-MM-DD" o un datetime ISO completo).

    Returns:
        La fecha, o None si el valor no se puede interpretar
    """
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return datetime.datetime.strptime(text, DATE_FORMAT_ISO).date()
        except ValueError:
            pass
        try:
            return datetime.datetime.fromisoformat(text).date()
        except ValueError:
            logger.debug("Unparseable date string %r", value)
            return None
    return None


def to_date(value: DateLike) -> datetime.date:
    """Como parse_date, pero lanza ValueError si la fecha no es válida."""
    parsed = parse_date(value)
    if parsed is None:
        raise ValueError(f"Invalid date: {value!r}")
    return parsed


def weekday_index(date: datetime.date) -> WeekdayIndex:
    """Día de la semana con domingo = 0 ... sábado = 6."""
    return WeekdayIndex(date.isoweekday() % DAYS_PER_WEEK)


def get_week_start(date: DateLike) -> datetime.date:
    """
    Lunes de la semana que contiene la fecha.

    El domingo pertenece a la semana que empezó seis días antes.
    """
    day = to_date(date)
    return _shift(day, -day.weekday())


def get_week_dates(week_start: DateLike) -> list[datetime.date]:
    """
    Siete fechas consecutivas desde week_start, en orden ascendente.

    Raises:
        ValueError: fecha inválida, o la semana termina después de date.max
    """
    start = to_date(week_start)
    return [_shift(start, offset) for offset in range(DAYS_PER_WEEK)]


def previous_week(week_start: DateLike) -> datetime.date:
    return _shift(to_date(week_start), -DAYS_PER_WEEK)


def next_week(week_start: DateLike) -> datetime.date:
    return _shift(to_date(week_start), DAYS_PER_WEEK)


def _shift(date: datetime.date, days: int) -> datetime.date:
    try:
        return date + datetime.timedelta(days=days)
    except OverflowError as e:
        raise ValueError(f"{date} + {days} days is outside {datetime.date.min}..{datetime.date.max}") from e


def days_in_month(year: int, month: int) -> int:
    """Cantidad de días del mes (month 1-12)."""
    return calendar.monthrange(year, month)[1]


def get_month_dates(year: int, month: int) -> list[datetime.date]:
    """Todas las fechas del mes (month 1-12)."""
    return [datetime.date(year, month, day) for day in range(1, days_in_month(year, month) + 1)]


def is_date_in_range(date: DateLike, start_date: DateLike, end_date: DateLike) -> bool:
    """True si start_date <= date <= end_date. Fechas inválidas dan False."""
    day, start, end = parse_date(date), parse_date(start_date), parse_date(end_date)
    if day is None or start is None or end is None:
        return False
    return start <= day <= end


def is_today(date: DateLike) -> bool:
    """Compara YYYY-MM-DD con la fecha local de hoy."""
    day = parse_date(date)
    if day is None:
        return False
    return day.isoformat() == get_today().isoformat()


def is_past_date(date: DateLike) -> bool:
    """True si la fecha es anterior a hoy (comparación YYYY-MM-DD)."""
    day = parse_date(date)
    if day is None:
        return False
    return day.isoformat() < get_today().isoformat()


def format_day_of_week(date: DateLike) -> str:
    """Abreviatura del día, por ejemplo "Lun"."""
    day = parse_date(date)
    return DAY_NAMES_SHORT[weekday_index(day)] if day else ""


def month_name(month: int) -> str:
    """Nombre del mes en español (month 1-12)."""
    return MONTH_NAMES[month - 1]


def format_week_range(week_start: DateLike) -> str:
    """
    Rango legible de la semana.

    "5 - 11 Ene 2026" si la semana cae en un mes, si no
    "29 Dic - 4 Ene 2026". El año es el del último día.
    """
    dates = get_week_dates(week_start)
    start, end = dates[0], dates[-1]
    start_month = MONTH_NAMES_SHORT[start.month - 1]
    end_month = MONTH_NAMES_SHORT[end.month - 1]

    if start.month == end.month:
        return f"{start.day} - {end.day} {start_month} {end.year}"

    return f"{start.day} {start_month} - {end.day} {end_month} {end.year}"

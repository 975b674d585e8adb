import datetime

from fastapi import HTTPException, status

from shiftcal.core.schedule.weeks import get_week_dates, get_week_start, parse_date


def validate_date_param(value: str) -> datetime.date:
    """
    Valida una fecha "YYYY-MM-DD" recibida en la URL.

    Fechas inválidas dan HTTP 400.
    """
    parsed = parse_date(value)
    if parsed is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid date",
        )
    return parsed


def validate_week_param(value: str) -> datetime.date:
    """
    Lunes de la semana que contiene la fecha recibida en la URL.

    Da HTTP 400 si la fecha es inválida o si la semana completa no cabe
    en el rango de datetime.date (última semana del año 9999).
    """
    monday = get_week_start(validate_date_param(value))
    try:
        get_week_dates(monday)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Week out of range",
        )
    return monday


def validate_year_month(year: int, month: int) -> tuple[int, int]:
    """Valida año y mes (1-12) creando el día 1. Inválido da HTTP 400."""
    try:
        datetime.date(year, month, 1)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid year/month",
        )
    return year, month

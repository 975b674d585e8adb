# shiftcal/core/utils.py
import datetime


def get_today() -> datetime.date:
    """Fecha local de hoy (reloj de la máquina)."""
    return datetime.date.today()

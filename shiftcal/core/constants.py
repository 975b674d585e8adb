# shiftcal/core/constants.py
from typing import Final

# ==========================
# Estados de día
# ==========================

#: Día libre.
DAY_STATUS_OFF: Final[str] = "OFF"

#: Día de trabajo.
DAY_STATUS_WORK: Final[str] = "WORK"

#: Turno de día / de noche, derivado del horario.
TURNO_DIA: Final[str] = "DIA"
TURNO_NOCHE: Final[str] = "NOCHE"

#: Un horario que comienza a esta hora o después es turno de noche...
NIGHT_SHIFT_START_HOUR: Final[int] = 20

#: ...igual que uno que comienza antes de esta hora.
NIGHT_SHIFT_END_HOUR: Final[int] = 6


# ==========================
# Semana / fechas
# ==========================

#: Días por semana. Se usa en los loops en lugar de "7".
DAYS_PER_WEEK: Final[int] = 7

#: Nombres cortos indexados con domingo = 0.
DAY_NAMES_SHORT: Final[tuple[str, ...]] = ("Dom", "Lun", "Mar", "Mié", "Jue", "Vie", "Sáb")

#: Nombres completos indexados con domingo = 0.
DAY_NAMES: Final[tuple[str, ...]] = (
    "Domingo",
    "Lunes",
    "Martes",
    "Miércoles",
    "Jueves",
    "Viernes",
    "Sábado",
)

MONTH_NAMES: Final[tuple[str, ...]] = (
    "Enero",
    "Febrero",
    "Marzo",
    "Abril",
    "Mayo",
    "Junio",
    "Julio",
    "Agosto",
    "Septiembre",
    "Octubre",
    "Noviembre",
    "Diciembre",
)

MONTH_NAMES_SHORT: Final[tuple[str, ...]] = (
    "Ene",
    "Feb",
    "Mar",
    "Abr",
    "May",
    "Jun",
    "Jul",
    "Ago",
    "Sep",
    "Oct",
    "Nov",
    "Dic",
)

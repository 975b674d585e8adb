"""Cálculo de días libres y de trabajo según el patrón de turno."""

import datetime
import logging
from functools import cache

from shiftcal.core.config import DEFAULT_MANUAL_CYCLE_DAYS
from shiftcal.core.constants import DAY_STATUS_OFF, DAY_STATUS_WORK, DAYS_PER_WEEK
from shiftcal.core.models import (
    DateOverride,
    FixedPattern,
    ManualPattern,
    RotatingPattern,
    Settings,
    SpecialTemplate,
    VariantCode,
)
from shiftcal.core.storage import load_settings
from shiftcal.core.types import DayInCycle

from .weeks import DateLike, parse_date, weekday_index

logger = logging.getLogger(__name__)


class ShiftCalendar:
    """
    Calculadora de días libres anclada en un lunes de referencia.

    Todos los ciclos (semanas de un rotativo, días de una plantilla manual)
    se cuentan desde reference_date. La instancia no tiene estado mutable y
    se puede usar desde varios hilos a la vez.
    """

    __slots__ = ("_reference_date",)

    def __init__(self, reference_date: datetime.date):
        if reference_date.weekday() != 0:
            raise ValueError(f"Reference date {reference_date} is not a Monday")
        self._reference_date = reference_date

    @property
    def reference_date(self) -> datetime.date:
        return self._reference_date

    def __repr__(self) -> str:
        return f"ShiftCalendar(reference_date={self._reference_date.isoformat()})"

    def days_since_reference(self, date: datetime.date) -> int:
        """Días calendario enteros desde la referencia. Negativo antes de ella."""
        return (date - self._reference_date).days

    def week_in_cycle(self, date: datetime.date, cycle: int) -> int:
        """Semana dentro de un ciclo de `cycle` semanas, en [0, cycle)."""
        weeks = self.days_since_reference(date) // DAYS_PER_WEEK
        return weeks % cycle

    def day_in_cycle(self, date: DateLike, cycle_days: int = DEFAULT_MANUAL_CYCLE_DAYS) -> DayInCycle:
        """
        Día dentro de un ciclo de `cycle_days` días, en [0, cycle_days).

        Raises:
            ValueError: fecha inválida
        """
        day = parse_date(date)
        if day is None:
            raise ValueError(f"Invalid date: {date!r}")
        return DayInCycle(self.days_since_reference(day) % cycle_days)

    def is_rest_day(
        self,
        date: DateLike,
        shift_type_code: str,
        variant_code: VariantCode | str,
        pattern: FixedPattern | RotatingPattern | ManualPattern | None,
        special_template: SpecialTemplate | None = None,
        override: DateOverride | None = None,
    ) -> bool:
        """
        Determina si la fecha es día libre.

        Un override gana siempre. Sin override se evalúa el patrón:

        - fixed: el día de la semana está en off_days
        - rotating: se elige la semana del ciclo (una posición más para
          CONTRATURNO) y se mira su off_days
        - manual: el día del ciclo está en la plantilla de la persona

        Nunca lanza excepciones: fechas inválidas, patrones ausentes o
        desconocidos y plantillas faltantes dan día de trabajo (False).

        Args:
            date: Fecha a evaluar (date, datetime o "YYYY-MM-DD")
            shift_type_code: Código del tipo de turno asignado
            variant_code: PRINCIPAL, CONTRATURNO, ...
            pattern: Patrón resuelto para shift_type_code
            special_template: Plantilla de la persona (solo patrones manual)
            override: Override de la persona para esa fecha

        Returns:
            True si es día libre
        """
        if override is not None:
            return override.is_rest

        day = parse_date(date)
        if day is None:
            logger.warning("Invalid date %r for shift type %s, treating as working day", date, shift_type_code)
            return False

        if isinstance(pattern, FixedPattern):
            return weekday_index(day) in pattern.off_days

        if isinstance(pattern, RotatingPattern):
            week_index = self.week_in_cycle(day, pattern.cycle)

            # Contraturno: la rotación va una semana desplazada
            if variant_code == VariantCode.CONTRATURNO:
                week_index = (week_index + 1) % pattern.cycle

            if week_index >= len(pattern.weeks):
                return False
            return weekday_index(day) in pattern.weeks[week_index].off_days

        if isinstance(pattern, ManualPattern):
            if special_template is None:
                logger.debug("No special template for manual shift type %s, treating as working day", shift_type_code)
                return False
            return self.day_in_cycle(day, pattern.cycle_days) in special_template.off_days

        if pattern is None:
            logger.debug("No pattern for shift type %s, treating as working day", shift_type_code)
        else:
            logger.warning(
                "Unrecognized pattern %s for shift type %s, treating as working day",
                type(pattern).__name__,
                shift_type_code,
            )
        return False

    def day_status(self, *args, **kwargs) -> str:
        """OFF o WORK. Mismos argumentos que is_rest_day."""
        return DAY_STATUS_OFF if self.is_rest_day(*args, **kwargs) else DAY_STATUS_WORK


# === Lazy-loaded data ===
_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


@cache
def get_calendar() -> ShiftCalendar:
    """ShiftCalendar con la referencia configurada en settings.json."""
    return ShiftCalendar(get_settings().cycle_reference_date)


def is_rest_day(
    date: DateLike,
    shift_type_code: str,
    variant_code: VariantCode | str,
    pattern: FixedPattern | RotatingPattern | ManualPattern | None,
    special_template: SpecialTemplate | None = None,
    override: DateOverride | None = None,
) -> bool:
    """is_rest_day con el calendario configurado."""
    return get_calendar().is_rest_day(date, shift_type_code, variant_code, pattern, special_template, override)


def get_day_in_cycle(date: DateLike, cycle_days: int = DEFAULT_MANUAL_CYCLE_DAYS) -> DayInCycle:
    return get_calendar().day_in_cycle(date, cycle_days)


def clear_calendar_cache() -> None:
    """Olvida settings y calendario cargados (por ejemplo tras cambiar settings.json)."""
    global _settings
    _settings = None
    get_calendar.cache_clear()

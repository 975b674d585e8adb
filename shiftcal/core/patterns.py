# shiftcal/core/patterns.py
"""
Resolution of shift type codes to patterns.

The backing store is the source of truth for shift types. When a code has no
stored row (or the row's pattern does not validate), the shipped defaults in
data/shift_types.json are used instead, and that fallback is logged.
"""

import logging
from collections.abc import Iterable

from shiftcal.core.constants import DAY_NAMES
from shiftcal.core.models import FixedPattern, ManualPattern, RotatingPattern, ShiftType, VariantCode
from shiftcal.core.storage import load_default_shift_types
from shiftcal.core.types import ShiftTypeCode

logger = logging.getLogger(__name__)

Pattern = FixedPattern | RotatingPattern | ManualPattern


class DefaultPatternProvider:
    """Fallback shift types, keyed by code."""

    def __init__(self, shift_types: Iterable[ShiftType] | None = None):
        if shift_types is None:
            shift_types = load_default_shift_types()
        self._by_code: dict[ShiftTypeCode, ShiftType] = {ShiftTypeCode(st.code): st for st in shift_types}

    def get(self, code: str) -> ShiftType | None:
        return self._by_code.get(code)

    def all(self) -> list[ShiftType]:
        return list(self._by_code.values())

    def __contains__(self, code: str) -> bool:
        return code in self._by_code


class PatternResolver:
    """
    Looks up the pattern for a shift type code.

    Stored definitions win over defaults. A code found in neither resolves
    to None, which the calendar treats as a working day.
    """

    def __init__(self, stored_types: Iterable[ShiftType], defaults: DefaultPatternProvider):
        self._stored: dict[ShiftTypeCode, ShiftType] = {ShiftTypeCode(st.code): st for st in stored_types}
        self._defaults = defaults

    def shift_type(self, code: str) -> ShiftType | None:
        stored = self._stored.get(code)
        if stored is not None:
            return stored

        fallback = self._defaults.get(code)
        if fallback is not None:
            logger.warning("No stored pattern for shift type %s, using default", code)
            return fallback

        logger.warning(
            "No pattern found for shift type %s, days will render as working days",
            code,
            extra={"extra_fields": {"shift_type_code": code}},
        )
        return None

    def resolve(self, code: str) -> Pattern | None:
        shift_type = self.shift_type(code)
        return shift_type.pattern if shift_type else None

    def all_shift_types(self) -> list[ShiftType]:
        """Stored types plus any default not overridden by the store."""
        merged = dict((st.code, st) for st in self._defaults.all())
        merged.update(self._stored)
        return list(merged.values())


def describe_off_days(shift_type: ShiftType, variant: VariantCode | str = VariantCode.PRINCIPAL) -> str:
    """
    Human description of a shift type's rest days, in Spanish.

    CONTRATURNO rests on pattern week i during cycle week i - 1, so each
    line is labelled with the cycle week in which it applies.
    """
    pattern = shift_type.pattern

    if isinstance(pattern, FixedPattern) and pattern.off_days:
        names = " y ".join(DAY_NAMES[d] for d in pattern.off_days)
        return f"Libre: {names} (todas las semanas)"

    if isinstance(pattern, RotatingPattern) and pattern.weeks:
        lines: list[str] = []
        for i, week in enumerate(pattern.weeks):
            adjusted = (i - 1) % len(pattern.weeks) if variant == VariantCode.CONTRATURNO else i
            names = " + ".join(DAY_NAMES[d] for d in week.off_days)
            lines.append(f"Semana {adjusted + 1}: {names}")
        return " | ".join(lines)

    return pattern.description

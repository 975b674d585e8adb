# shiftcal/routes/shared.py
"""
Shared dependencies and request schemas for route modules.
"""

import datetime
from functools import cache

from fastapi import Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from shiftcal.core.config import DEFAULT_MANUAL_CYCLE_DAYS
from shiftcal.core.models import OverrideType, Settings, ShiftPattern, VariantCode
from shiftcal.core.patterns import DefaultPatternProvider, PatternResolver
from shiftcal.core.repository import fetch_shift_types
from shiftcal.core.schedule import ShiftCalendar, get_calendar, get_settings
from shiftcal.database.database import get_db


@cache
def get_default_patterns() -> DefaultPatternProvider:
    """Fallback patterns from data/shift_types.json, loaded once."""
    return DefaultPatternProvider()


def get_shift_calendar() -> ShiftCalendar:
    return get_calendar()


def get_app_settings() -> Settings:
    return get_settings()


def get_pattern_resolver(
    db: Session = Depends(get_db),
    defaults: DefaultPatternProvider = Depends(get_default_patterns),
) -> PatternResolver:
    """Resolver over the stored shift types of this request's session."""
    return PatternResolver(fetch_shift_types(db), defaults)


# ============ Pydantic schemas ============


class StaffShiftIn(BaseModel):
    shift_type_code: str
    variant_code: VariantCode = VariantCode.PRINCIPAL
    start_date: datetime.date | None = None
    horario: str | None = Field(default=None, pattern=r"^\d{1,2}:\d{2}-\d{1,2}:\d{2}$")


class SpecialTemplateIn(BaseModel):
    cycle_days: int = Field(default=DEFAULT_MANUAL_CYCLE_DAYS, ge=1)
    off_days: list[int] = Field(default_factory=list)


class OverrideIn(BaseModel):
    override_type: OverrideType
    meta: dict = Field(default_factory=dict)


class ShiftTypeIn(BaseModel):
    name: str
    pattern: ShiftPattern

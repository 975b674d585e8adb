import datetime
import enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator, model_validator

from shiftcal.core.config import (
    DEFAULT_CYCLE_REFERENCE_DATE,
    DEFAULT_MANUAL_CYCLE_DAYS,
    DEFAULT_TIMEZONE,
    REDUCED_DAY_HOURS,
    REGULAR_DAY_HOURS,
)


class VariantCode(str, enum.Enum):
    """Variant of a staff shift assignment. Only CONTRATURNO changes rotation."""

    PRINCIPAL = "PRINCIPAL"
    CONTRATURNO = "CONTRATURNO"
    SUPER = "SUPER"
    FIJO = "FIJO"
    ESPECIAL = "ESPECIAL"
    RELEVO = "RELEVO"


class OverrideType(str, enum.Enum):
    OFF = "OFF"
    WORK = "WORK"
    CUSTOM = "CUSTOM"


def _check_weekdays(days: list[int]) -> list[int]:
    for day in days:
        if not 0 <= day <= 6:
            raise ValueError(f"weekday index {day} outside 0..6 (0=Sunday)")
    return days


class _PatternBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    description: str = ""


class WeekOffDays(BaseModel):
    """Rest weekdays for one week of a rotating cycle."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    off_days: list[int] = Field(default_factory=list, alias="offDays")

    @field_validator("off_days")
    @classmethod
    def valid_weekdays(cls, value: list[int]) -> list[int]:
        return _check_weekdays(value)


class FixedPattern(_PatternBase):
    """Same rest weekdays every week."""

    type: Literal["fixed"] = "fixed"
    off_days: list[int] = Field(default_factory=list, alias="offDays")

    @field_validator("off_days")
    @classmethod
    def valid_weekdays(cls, value: list[int]) -> list[int]:
        return _check_weekdays(value)


class RotatingPattern(_PatternBase):
    """A cycle of weeks anchored on the reference Monday, each with its own rest weekdays."""

    type: Literal["rotating"] = "rotating"
    cycle: int = Field(ge=1)
    weeks: list[WeekOffDays]

    @model_validator(mode="after")
    def weeks_match_cycle(self) -> "RotatingPattern":
        if len(self.weeks) != self.cycle:
            raise ValueError(f"rotating pattern has cycle={self.cycle} but {len(self.weeks)} weeks")
        return self


class ManualPattern(_PatternBase):
    """Day-in-cycle template; the rest days come from the staff member's SpecialTemplate."""

    type: Literal["manual"] = "manual"
    cycle_days: int = Field(default=DEFAULT_MANUAL_CYCLE_DAYS, ge=1, alias="cycleDays")


ShiftPattern = Annotated[Union[FixedPattern, RotatingPattern, ManualPattern], Field(discriminator="type")]

_pattern_adapter: TypeAdapter = TypeAdapter(ShiftPattern)


def parse_pattern(data: Any) -> FixedPattern | RotatingPattern | ManualPattern:
    """
    Validate raw pattern JSON into one of the pattern models.

    Raises:
        pydantic.ValidationError: unknown ``type`` or broken invariants
    """
    return _pattern_adapter.validate_python(data)


class ShiftType(BaseModel):
    """Named shift pattern, e.g. 5X2_ROTATIVO."""

    code: str
    name: str
    pattern: ShiftPattern = Field(alias="pattern_json")

    model_config = ConfigDict(populate_by_name=True)


class StaffShiftAssignment(BaseModel):
    """Which shift type and variant a staff member works."""

    staff_id: str
    shift_type_code: str
    variant_code: VariantCode = VariantCode.PRINCIPAL
    start_date: datetime.date | None = None
    horario: str | None = None  # "HH:MM-HH:MM"


class SpecialTemplate(BaseModel):
    """Per-staff rest days for a manual (ESPECIAL) pattern."""

    staff_id: str
    cycle_days: int = Field(default=DEFAULT_MANUAL_CYCLE_DAYS, ge=1)
    off_days: list[int] = Field(default_factory=list, alias="off_days_json")

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="after")
    def days_inside_cycle(self) -> "SpecialTemplate":
        for day in self.off_days:
            if not 0 <= day < self.cycle_days:
                raise ValueError(f"day-in-cycle {day} outside 0..{self.cycle_days - 1}")
        return self


class DateOverride(BaseModel):
    """Explicit status for one staff member on one date. Wins over any pattern."""

    staff_id: str
    override_date: datetime.date
    override_type: OverrideType
    meta: dict[str, Any] = Field(default_factory=dict, alias="meta_json")

    model_config = ConfigDict(populate_by_name=True)

    @property
    def is_rest(self) -> bool:
        return self.override_type == OverrideType.OFF


class Settings(BaseModel):
    """Application settings from settings.json."""

    cycle_reference_date: datetime.date = datetime.date.fromisoformat(DEFAULT_CYCLE_REFERENCE_DATE)
    timezone: str = DEFAULT_TIMEZONE
    regular_hours: int = REGULAR_DAY_HOURS
    reduced_hours: int = REDUCED_DAY_HOURS

    @field_validator("cycle_reference_date")
    @classmethod
    def reference_is_monday(cls, value: datetime.date) -> datetime.date:
        if value.weekday() != 0:
            raise ValueError(f"cycle_reference_date {value} is not a Monday")
        return value

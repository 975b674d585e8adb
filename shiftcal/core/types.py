# shiftcal/core/types.py

"""
Custom type definitions for the calendar grid and API payloads.

NewType wrappers keep staff ids, day-in-cycle indices and weekday indices
from being mixed up with each other.
"""

from datetime import date
from typing import Literal, NewType, TypedDict

StaffId = NewType("StaffId", str)
ShiftTypeCode = NewType("ShiftTypeCode", str)
WeekdayIndex = NewType("WeekdayIndex", int)  # 0=Sunday..6=Saturday
DayInCycle = NewType("DayInCycle", int)

DayStatus = Literal["OFF", "WORK"]
Turno = Literal["DIA", "NOCHE"]

Hours = int


class DayCell(TypedDict):
    """One staff member on one date, as the grid renders it."""

    date: date
    weekday_index: WeekdayIndex
    weekday_name: str
    status: DayStatus
    reduced: bool
    overridden: bool
    horario: str | None
    turno: Turno
    is_today: bool
    is_past: bool


class StaffRow(TypedDict, total=False):
    """All cells for one staff member plus row totals."""

    staff_id: StaffId
    shift_type_code: ShiftTypeCode | None
    variant_code: str | None
    days: list[DayCell]
    work_days: int
    rest_days: int
    reduced_days: int
    weekly_hours: Hours


class GridHeader(TypedDict):
    date: date
    weekday_name: str
    day_number: int
    reduced: bool
    is_today: bool


class CalendarGrid(TypedDict, total=False):
    """Week or month grid for a set of staff members."""

    start_date: date
    end_date: date
    title: str
    headers: list[GridHeader]
    rows: list[StaffRow]

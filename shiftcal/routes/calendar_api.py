# shiftcal/routes/calendar_api.py
"""
Read endpoints: rest-day lookups, week/month grids and iCal export.
"""

import datetime

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from shiftcal.core.calendar_export import generate_ical_for_month, generate_ical_for_year
from shiftcal.core.constants import DAY_STATUS_OFF, DAY_STATUS_WORK
from shiftcal.core.logging_config import get_logger
from shiftcal.core.models import Settings
from shiftcal.core.patterns import PatternResolver, describe_off_days
from shiftcal.core.repository import (
    fetch_overrides_for_range,
    fetch_special_template,
    fetch_special_templates,
    fetch_staff_shift,
    fetch_staff_shifts,
)
from shiftcal.core.schedule import (
    ShiftCalendar,
    build_month_grid,
    build_week_grid,
    days_in_month,
    get_month_dates,
    get_week_dates,
    is_reduced_hour_day,
    reduced_hour_dates,
)
from shiftcal.core.validators import validate_date_param, validate_week_param, validate_year_month
from shiftcal.database.database import get_db
from shiftcal.routes.shared import get_app_settings, get_pattern_resolver, get_shift_calendar

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["calendar"])


@router.get("/shift-types")
async def list_shift_types(resolver: PatternResolver = Depends(get_pattern_resolver)):
    """Stored shift types merged with the defaults, with a readable description."""
    return [
        {
            "code": st.code,
            "name": st.name,
            "pattern": st.pattern.model_dump(by_alias=True),
            "description": describe_off_days(st),
        }
        for st in resolver.all_shift_types()
    ]


@router.get("/staff/{staff_id}/rest-day/{date}")
async def get_rest_day(
    staff_id: str,
    date: str,
    db: Session = Depends(get_db),
    calendar: ShiftCalendar = Depends(get_shift_calendar),
    resolver: PatternResolver = Depends(get_pattern_resolver),
):
    """Rest/work status for one staff member on one date."""
    day = validate_date_param(date)

    assignment = fetch_staff_shift(db, staff_id)
    if assignment is None:
        raise HTTPException(status_code=404, detail="Staff member has no shift assignment")

    pattern = resolver.resolve(assignment.shift_type_code)
    template = fetch_special_template(db, staff_id)
    override = fetch_overrides_for_range(db, day, day, [staff_id]).get((staff_id, day))

    rest = calendar.is_rest_day(
        day, assignment.shift_type_code, assignment.variant_code, pattern, template, override
    )

    return {
        "staff_id": staff_id,
        "date": day,
        "shift_type_code": assignment.shift_type_code,
        "variant_code": assignment.variant_code,
        "is_rest_day": rest,
        "status": DAY_STATUS_OFF if rest else DAY_STATUS_WORK,
        "reduced": not rest and is_reduced_hour_day(day),
        "overridden": override is not None,
    }


@router.get("/calendar/week/{week_start}")
async def get_week_grid(
    week_start: str,
    staff_ids: list[str] | None = Query(default=None),
    db: Session = Depends(get_db),
    calendar: ShiftCalendar = Depends(get_shift_calendar),
    resolver: PatternResolver = Depends(get_pattern_resolver),
    settings: Settings = Depends(get_app_settings),
):
    """Week grid. Any date of the week is accepted; the grid starts on its Monday."""
    monday = validate_week_param(week_start)
    dates = get_week_dates(monday)

    return build_week_grid(
        calendar,
        monday,
        fetch_staff_shifts(db),
        resolver,
        staff_ids=staff_ids,
        special_templates=fetch_special_templates(db, staff_ids),
        overrides=fetch_overrides_for_range(db, dates[0], dates[-1], staff_ids),
        regular_hours=settings.regular_hours,
        reduced_hours=settings.reduced_hours,
    )


@router.get("/calendar/month/{year}/{month}")
async def get_month_grid(
    year: int,
    month: int,
    staff_ids: list[str] | None = Query(default=None),
    db: Session = Depends(get_db),
    calendar: ShiftCalendar = Depends(get_shift_calendar),
    resolver: PatternResolver = Depends(get_pattern_resolver),
):
    """Month grid (month 1-12)."""
    year, month = validate_year_month(year, month)
    dates = get_month_dates(year, month)

    return build_month_grid(
        calendar,
        year,
        month,
        fetch_staff_shifts(db),
        resolver,
        staff_ids=staff_ids,
        special_templates=fetch_special_templates(db, staff_ids),
        overrides=fetch_overrides_for_range(db, dates[0], dates[-1], staff_ids),
    )


@router.get("/calendar/reduced/{week_start}")
async def get_reduced_days(week_start: str):
    """The two reduced-hour dates of the week containing week_start."""
    monday = validate_week_param(week_start)
    return {"week_start": monday, "reduced_dates": list(reduced_hour_dates(monday))}


@router.get("/staff/{staff_id}/calendar.ics")
async def export_ical(
    staff_id: str,
    year: int,
    month: int | None = None,
    db: Session = Depends(get_db),
    calendar: ShiftCalendar = Depends(get_shift_calendar),
    resolver: PatternResolver = Depends(get_pattern_resolver),
    settings: Settings = Depends(get_app_settings),
):
    """iCal with the staff member's working days for a month, or a whole year without month."""
    validate_year_month(year, month if month is not None else 1)

    assignment = fetch_staff_shift(db, staff_id)
    if assignment is None:
        raise HTTPException(status_code=404, detail="Staff member has no shift assignment")

    pattern = resolver.resolve(assignment.shift_type_code)
    template = fetch_special_template(db, staff_id)

    if month is not None:
        first, last = datetime.date(year, month, 1), datetime.date(year, month, days_in_month(year, month))
    else:
        first, last = datetime.date(year, 1, 1), datetime.date(year, 12, 31)
    overrides = {day: override for (_, day), override in fetch_overrides_for_range(db, first, last, [staff_id]).items()}

    if month is not None:
        ical = generate_ical_for_month(calendar, assignment, pattern, year, month, template, overrides, settings.timezone)
        filename = f"turnos_{staff_id}_{year}_{month:02d}.ics"
    else:
        ical = generate_ical_for_year(calendar, assignment, pattern, year, template, overrides, settings.timezone)
        filename = f"turnos_{staff_id}_{year}.ics"

    logger.info(f"iCal export for {staff_id} ({filename})")
    return Response(
        content=ical,
        media_type="text/calendar",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

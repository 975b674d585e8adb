# shiftcal/routes/staff_shifts.py
"""
Write endpoints: shift types, staff assignments, special templates and date overrides.
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError
from sqlalchemy.orm import Session

from shiftcal.core.logging_config import get_logger
from shiftcal.core.models import ShiftType, SpecialTemplate
from shiftcal.core.patterns import PatternResolver
from shiftcal.core.repository import (
    delete_override,
    fetch_staff_shift,
    upsert_override,
    upsert_shift_type,
    upsert_special_template,
    upsert_staff_shift,
)
from shiftcal.core.validators import validate_date_param
from shiftcal.database.database import get_db
from shiftcal.routes.shared import (
    OverrideIn,
    ShiftTypeIn,
    SpecialTemplateIn,
    StaffShiftIn,
    get_pattern_resolver,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["staff"])


@router.put("/shift-types/{code}")
async def save_shift_type(code: str, payload: ShiftTypeIn, db: Session = Depends(get_db)):
    """Store a shift type. Stored types take precedence over the built-in defaults."""
    shift_type = upsert_shift_type(db, ShiftType(code=code, name=payload.name, pattern=payload.pattern))
    return {"code": shift_type.code, "name": shift_type.name, "pattern": shift_type.pattern.model_dump(by_alias=True)}


@router.put("/staff/{staff_id}/shift")
async def save_staff_shift(
    staff_id: str,
    payload: StaffShiftIn,
    db: Session = Depends(get_db),
    resolver: PatternResolver = Depends(get_pattern_resolver),
):
    """
    Assign a shift type and variant to a staff member.

    The shift type must be stored or one of the defaults.
    """
    if resolver.shift_type(payload.shift_type_code) is None:
        raise HTTPException(status_code=400, detail=f"Unknown shift type: {payload.shift_type_code}")

    return upsert_staff_shift(
        db,
        staff_id,
        payload.shift_type_code,
        payload.variant_code,
        payload.start_date,
        payload.horario,
    )


@router.put("/staff/{staff_id}/special-template")
async def save_special_template(staff_id: str, payload: SpecialTemplateIn, db: Session = Depends(get_db)):
    """Rest days (day-in-cycle numbers) for a staff member on a manual pattern."""
    try:
        template = SpecialTemplate(staff_id=staff_id, cycle_days=payload.cycle_days, off_days=payload.off_days)
    except ValidationError as e:
        logger.warning(f"Rejected special template for {staff_id}: {e.error_count()} errors")
        raise HTTPException(status_code=400, detail="off_days must be within 0..cycle_days-1") from e

    return upsert_special_template(db, template).model_dump()


@router.put("/staff/{staff_id}/overrides/{date}")
async def save_override(staff_id: str, date: str, payload: OverrideIn, db: Session = Depends(get_db)):
    """Force OFF, WORK or CUSTOM on one date. Replaces any existing override for that date."""
    day = validate_date_param(date)

    if fetch_staff_shift(db, staff_id) is None:
        raise HTTPException(status_code=404, detail="Staff member has no shift assignment")

    return upsert_override(db, staff_id, day, payload.override_type, payload.meta).model_dump()


@router.delete("/staff/{staff_id}/overrides/{date}")
async def remove_override(staff_id: str, date: str, db: Session = Depends(get_db)):
    day = validate_date_param(date)

    if not delete_override(db, staff_id, day):
        raise HTTPException(status_code=404, detail="Override not found")

    logger.info(f"Override removed for {staff_id} on {day}")
    return {"deleted": True, "staff_id": staff_id, "date": day}

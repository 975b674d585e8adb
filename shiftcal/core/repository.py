# shiftcal/core/repository.py
"""
Reads and writes shift data in the database and converts rows to models.

The calendar itself never touches the database; route handlers fetch what
they need here and hand plain models to shiftcal.core.schedule.
"""

import datetime
import logging

from pydantic import ValidationError
from sqlalchemy.orm import Session

from shiftcal.core.models import (
    DateOverride,
    OverrideType,
    ShiftType,
    SpecialTemplate,
    StaffShiftAssignment,
    VariantCode,
)
from shiftcal.core.types import StaffId
from shiftcal.database.database import (
    OverrideKind,
    ShiftTypeRecord,
    StaffShift,
    StaffShiftOverride,
    StaffShiftSpecialTemplate,
)

logger = logging.getLogger(__name__)


# === Shift types ===


def fetch_shift_types(session: Session) -> list[ShiftType]:
    """
    All stored shift types with a valid pattern.

    Rows whose pattern JSON does not validate are skipped with an error log;
    the resolver then falls back to the default pattern for that code.
    """
    result = []
    for record in session.query(ShiftTypeRecord).order_by(ShiftTypeRecord.code).all():
        try:
            result.append(ShiftType(code=record.code, name=record.name, pattern_json=record.pattern_json))
        except ValidationError as e:
            logger.error(
                "Invalid pattern for shift type %s, ignoring stored row: %s",
                record.code,
                e,
                extra={"extra_fields": {"shift_type_code": record.code}},
            )
    return result


def upsert_shift_type(session: Session, shift_type: ShiftType) -> ShiftType:
    record = session.query(ShiftTypeRecord).filter(ShiftTypeRecord.code == shift_type.code).first()
    pattern_json = shift_type.pattern.model_dump(by_alias=True)

    if record:
        record.name = shift_type.name
        record.pattern_json = pattern_json
    else:
        session.add(ShiftTypeRecord(code=shift_type.code, name=shift_type.name, pattern_json=pattern_json))

    session.commit()
    return shift_type


# === Staff shift assignments ===


def _to_assignment(row: StaffShift) -> StaffShiftAssignment:
    return StaffShiftAssignment(
        staff_id=row.staff_id,
        shift_type_code=row.shift_type_code,
        variant_code=row.variant_code,
        start_date=row.start_date,
        horario=row.horario,
    )


def _checked_assignment(row: StaffShift) -> StaffShiftAssignment | None:
    try:
        return _to_assignment(row)
    except ValidationError as e:
        logger.error("Invalid staff shift row for %s, ignoring: %s", row.staff_id, e)
        return None


def fetch_staff_shift(session: Session, staff_id: str) -> StaffShiftAssignment | None:
    row = session.query(StaffShift).filter(StaffShift.staff_id == staff_id).first()
    return _checked_assignment(row) if row else None


def fetch_staff_shifts(session: Session) -> dict[StaffId, StaffShiftAssignment]:
    """All valid assignments keyed by staff_id."""
    rows = session.query(StaffShift).all()
    logger.debug("Fetched %d staff shifts", len(rows))

    result = {}
    for row in rows:
        assignment = _checked_assignment(row)
        if assignment is not None:
            result[StaffId(row.staff_id)] = assignment
    return result


def upsert_staff_shift(
    session: Session,
    staff_id: str,
    shift_type_code: str,
    variant_code: VariantCode = VariantCode.PRINCIPAL,
    start_date: datetime.date | None = None,
    horario: str | None = None,
) -> StaffShiftAssignment:
    """Create or replace the assignment for a staff member."""
    row = session.query(StaffShift).filter(StaffShift.staff_id == staff_id).first()

    if row:
        row.shift_type_code = shift_type_code
        row.variant_code = VariantCode(variant_code).value
        row.start_date = start_date
        row.horario = horario
    else:
        row = StaffShift(
            staff_id=staff_id,
            shift_type_code=shift_type_code,
            variant_code=VariantCode(variant_code).value,
            start_date=start_date,
            horario=horario,
        )
        session.add(row)

    session.commit()
    session.refresh(row)
    logger.info(
        "Staff shift saved for %s: %s %s",
        staff_id,
        shift_type_code,
        row.variant_code,
        extra={"extra_fields": {"staff_id": staff_id, "shift_type_code": shift_type_code}},
    )
    return _to_assignment(row)


# === Special templates ===


def _to_template(row: StaffShiftSpecialTemplate) -> SpecialTemplate | None:
    try:
        return SpecialTemplate(staff_id=row.staff_id, cycle_days=row.cycle_days, off_days=row.off_days_json or [])
    except ValidationError as e:
        logger.error("Invalid special template for staff %s, ignoring: %s", row.staff_id, e)
        return None


def fetch_special_template(session: Session, staff_id: str) -> SpecialTemplate | None:
    row = session.query(StaffShiftSpecialTemplate).filter(StaffShiftSpecialTemplate.staff_id == staff_id).first()
    return _to_template(row) if row else None


def fetch_special_templates(session: Session, staff_ids: list[str] | None = None) -> dict[str, SpecialTemplate]:
    query = session.query(StaffShiftSpecialTemplate)
    if staff_ids is not None:
        query = query.filter(StaffShiftSpecialTemplate.staff_id.in_(staff_ids))

    result = {}
    for row in query.all():
        template = _to_template(row)
        if template is not None:
            result[row.staff_id] = template
    return result


def upsert_special_template(session: Session, template: SpecialTemplate) -> SpecialTemplate:
    row = (
        session.query(StaffShiftSpecialTemplate)
        .filter(StaffShiftSpecialTemplate.staff_id == template.staff_id)
        .first()
    )
    off_days = sorted(set(template.off_days))

    if row:
        row.cycle_days = template.cycle_days
        row.off_days_json = off_days
    else:
        row = StaffShiftSpecialTemplate(
            staff_id=template.staff_id,
            cycle_days=template.cycle_days,
            off_days_json=off_days,
        )
        session.add(row)

    session.commit()
    logger.info("Special template saved for %s (%d rest days)", template.staff_id, len(off_days))
    return SpecialTemplate(staff_id=template.staff_id, cycle_days=template.cycle_days, off_days=off_days)


# === Overrides ===


def _to_override(row: StaffShiftOverride) -> DateOverride:
    return DateOverride(
        staff_id=row.staff_id,
        override_date=row.override_date,
        override_type=OverrideType(row.override_type.value),
        meta=row.meta_json or {},
    )


def fetch_overrides_for_range(
    session: Session,
    start_date: datetime.date,
    end_date: datetime.date,
    staff_ids: list[str] | None = None,
) -> dict[tuple[StaffId, datetime.date], DateOverride]:
    """Overrides with start_date <= date <= end_date, keyed by (staff_id, date)."""
    query = session.query(StaffShiftOverride).filter(
        StaffShiftOverride.override_date >= start_date,
        StaffShiftOverride.override_date <= end_date,
    )
    if staff_ids is not None:
        query = query.filter(StaffShiftOverride.staff_id.in_(staff_ids))

    return {(StaffId(row.staff_id), row.override_date): _to_override(row) for row in query.all()}


def upsert_override(
    session: Session,
    staff_id: str,
    date: datetime.date,
    override_type: OverrideType,
    meta: dict | None = None,
) -> DateOverride:
    """One override per staff member and date; an existing one is replaced."""
    row = (
        session.query(StaffShiftOverride)
        .filter(StaffShiftOverride.staff_id == staff_id, StaffShiftOverride.override_date == date)
        .first()
    )
    kind = OverrideKind(OverrideType(override_type).value)

    if row:
        row.override_type = kind
        row.meta_json = meta or {}
    else:
        row = StaffShiftOverride(staff_id=staff_id, override_date=date, override_type=kind, meta_json=meta or {})
        session.add(row)

    session.commit()
    session.refresh(row)
    logger.info("Override %s saved for %s on %s", kind.value, staff_id, date)
    return _to_override(row)


def delete_override(session: Session, staff_id: str, date: datetime.date) -> bool:
    """Returns False if there was nothing to delete."""
    deleted = (
        session.query(StaffShiftOverride)
        .filter(StaffShiftOverride.staff_id == staff_id, StaffShiftOverride.override_date == date)
        .delete()
    )
    session.commit()
    return deleted > 0

# shiftcal/database/database.py
"""
SQLAlchemy database setup and models.
"""

import enum
from datetime import datetime

from sqlalchemy import (
    JSON,
    Column,
    Date,
    DateTime,
    Integer,
    String,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import declarative_base, sessionmaker

from shiftcal.core.config import DATABASE_URL

_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=_connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


class OverrideKind(str, enum.Enum):
    """Stored override kinds. OFF forces a rest day, the others a working day."""

    OFF = "OFF"
    WORK = "WORK"
    CUSTOM = "CUSTOM"


class ShiftTypeRecord(Base):
    """Shift type with its pattern JSON ({"type": "fixed" | "rotating" | "manual", ...})."""

    __tablename__ = "shift_types"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(40), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=False)
    pattern_json = Column(JSON, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<ShiftTypeRecord(code={self.code}, type={(self.pattern_json or {}).get('type')})>"


class StaffShift(Base):
    """Shift assignment for one staff member (one row per staff_id)."""

    __tablename__ = "staff_shifts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    staff_id = Column(String(64), unique=True, nullable=False, index=True)
    shift_type_code = Column(String(40), nullable=False)
    variant_code = Column(String(20), nullable=False, default="PRINCIPAL")
    start_date = Column(Date, nullable=True)
    horario = Column(String(20), nullable=True)  # "10:00-20:00"
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<StaffShift(staff_id={self.staff_id}, code={self.shift_type_code}, variant={self.variant_code})>"


class StaffShiftSpecialTemplate(Base):
    """Day-in-cycle rest days for staff on an ESPECIAL (manual) shift."""

    __tablename__ = "staff_shift_special_templates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    staff_id = Column(String(64), unique=True, nullable=False, index=True)
    cycle_days = Column(Integer, nullable=False, default=28)
    off_days_json = Column(JSON, nullable=False, default=list)  # [0, 7, 14, 21]
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class StaffShiftOverride(Base):
    """Forced status for one staff member on one date."""

    __tablename__ = "staff_shift_overrides"
    __table_args__ = (UniqueConstraint("staff_id", "override_date", name="uq_staff_override_date"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    staff_id = Column(String(64), nullable=False, index=True)
    override_date = Column(Date, nullable=False)
    override_type = Column(SQLEnum(OverrideKind), nullable=False)
    meta_json = Column(JSON, default=dict)
    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<StaffShiftOverride(staff_id={self.staff_id}, date={self.override_date}, type={self.override_type})>"


def create_tables():
    """Create all database tables."""
    Base.metadata.create_all(bind=engine)


def get_db():
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

"""
Pytest configuration and shared fixtures for testing.

Provides reusable test fixtures:
- test_db: In-memory SQLite database for isolated testing
- test_client: FastAPI TestClient for API integration tests
- calendar: ShiftCalendar anchored on Monday 2025-12-29
- fixed_pattern / rotating_pattern / manual_pattern: the shipped default patterns
- resolver: PatternResolver over the shipped defaults only
"""

import datetime
import os
import sys
import tempfile
from pathlib import Path

# Configure before shiftcal.core.config is imported
os.environ.setdefault("SHIFTCAL_DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("LOG_DIR", str(Path(tempfile.gettempdir()) / "shiftcal-test-logs"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# ruff: noqa: E402
from shiftcal.core.models import (
    FixedPattern,
    ManualPattern,
    RotatingPattern,
    SpecialTemplate,
    StaffShiftAssignment,
    WeekOffDays,
)
from shiftcal.core.patterns import DefaultPatternProvider, PatternResolver
from shiftcal.core.schedule import ShiftCalendar
from shiftcal.database.database import Base, get_db
from shiftcal.main import app

REFERENCE_MONDAY = datetime.date(2025, 12, 29)


@pytest.fixture(scope="function")
def test_db():
    """
    Create an in-memory SQLite database for testing.

    StaticPool keeps one connection so the TestClient's worker thread sees
    the same database as the test.

    Yields:
        SQLAlchemy Session: Database session for test use
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()

    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_client(test_db):
    """
    Create FastAPI TestClient with test database dependency override.

    Args:
        test_db: Test database session fixture

    Yields:
        TestClient: FastAPI test client for API testing
    """

    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def calendar():
    return ShiftCalendar(REFERENCE_MONDAY)


@pytest.fixture
def fixed_pattern():
    """Saturday and Sunday off every week."""
    return FixedPattern(off_days=[6, 0])


@pytest.fixture
def rotating_pattern():
    """Two-week cycle: Wed+Sun, then Fri+Sat."""
    return RotatingPattern(
        cycle=2,
        weeks=[WeekOffDays(off_days=[3, 0]), WeekOffDays(off_days=[5, 6])],
    )


@pytest.fixture
def manual_pattern():
    return ManualPattern(cycle_days=28)


@pytest.fixture
def weekly_template():
    """One rest day every seven days of a 28-day cycle, starting on day 0."""
    return SpecialTemplate(staff_id="esp-1", cycle_days=28, off_days=[0, 7, 14, 21])


@pytest.fixture
def resolver():
    return PatternResolver([], DefaultPatternProvider())


@pytest.fixture
def rotating_assignment():
    return StaffShiftAssignment(staff_id="ana", shift_type_code="5X2_ROTATIVO", horario="10:00-20:00")

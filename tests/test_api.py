"""
Integration tests for FastAPI endpoints.

Tests verify status codes, validation and the JSON/iCal responses.
"""

import pytest
from icalendar import Calendar

from shiftcal.core.models import Settings
from shiftcal.main import app
from shiftcal.routes.shared import get_app_settings


@pytest.fixture
def ana(test_client):
    """ana works 5X2_ROTATIVO, principal, 10:00-20:00."""
    response = test_client.put(
        "/api/staff/ana/shift",
        json={"shift_type_code": "5X2_ROTATIVO", "variant_code": "PRINCIPAL", "horario": "10:00-20:00"},
    )
    assert response.status_code == 200
    return response.json()


class TestHealth:
    def test_health_endpoint_returns_ok(self, test_client):
        """GET /health should return 200 OK for monitoring."""
        response = test_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "connected"

    def test_request_id_header(self, test_client):
        response = test_client.get("/health")
        assert response.headers.get("X-Request-ID")


class TestShiftTypes:
    def test_defaults_listed_with_descriptions(self, test_client):
        response = test_client.get("/api/shift-types")

        assert response.status_code == 200
        by_code = {st["code"]: st for st in response.json()}
        assert {"5X2_FIJO", "5X2_ROTATIVO", "5X2_SUPER", "ESPECIAL"} <= set(by_code)
        assert by_code["5X2_FIJO"]["pattern"]["offDays"] == [6, 0]
        assert by_code["5X2_FIJO"]["description"].startswith("Libre:")

    def test_stored_type_overrides_default(self, test_client):
        response = test_client.put(
            "/api/shift-types/5X2_FIJO",
            json={"name": "Fijo domingo", "pattern": {"type": "fixed", "offDays": [0]}},
        )
        assert response.status_code == 200

        by_code = {st["code"]: st for st in test_client.get("/api/shift-types").json()}
        assert by_code["5X2_FIJO"]["name"] == "Fijo domingo"
        assert by_code["5X2_FIJO"]["pattern"]["offDays"] == [0]

    def test_invalid_pattern_rejected(self, test_client):
        response = test_client.put(
            "/api/shift-types/MALO",
            json={"name": "Malo", "pattern": {"type": "rotating", "cycle": 2, "weeks": [{"offDays": [1]}]}},
        )
        assert response.status_code == 422


class TestStaffShift:
    def test_assign(self, test_client, ana):
        assert ana["staff_id"] == "ana"
        assert ana["variant_code"] == "PRINCIPAL"

    def test_unknown_shift_type(self, test_client):
        response = test_client.put("/api/staff/ana/shift", json={"shift_type_code": "NO_EXISTE"})
        assert response.status_code == 400

    def test_bad_horario(self, test_client):
        response = test_client.put(
            "/api/staff/ana/shift", json={"shift_type_code": "5X2_FIJO", "horario": "mañana"}
        )
        assert response.status_code == 422


class TestRestDay:
    def test_rest_day(self, test_client, ana):
        data = test_client.get("/api/staff/ana/rest-day/2025-12-31").json()
        assert data["is_rest_day"] is True
        assert data["status"] == "OFF"
        assert data["reduced"] is False

    def test_reduced_work_day(self, test_client, ana):
        data = test_client.get("/api/staff/ana/rest-day/2025-12-30").json()
        assert data["is_rest_day"] is False
        assert data["status"] == "WORK"
        assert data["reduced"] is True

    def test_contraturno(self, test_client):
        test_client.put(
            "/api/staff/beto/shift", json={"shift_type_code": "5X2_ROTATIVO", "variant_code": "CONTRATURNO"}
        )
        data = test_client.get("/api/staff/beto/rest-day/2025-12-31").json()
        assert data["is_rest_day"] is False

    def test_unknown_staff(self, test_client):
        assert test_client.get("/api/staff/nadie/rest-day/2026-01-05").status_code == 404

    @pytest.mark.parametrize("bad", ["2026-13-01", "ayer", "2026-02-30"])
    def test_invalid_date(self, test_client, ana, bad):
        assert test_client.get(f"/api/staff/ana/rest-day/{bad}").status_code == 400


class TestSpecialTemplate:
    def test_manual_pattern(self, test_client):
        test_client.put("/api/staff/esp/shift", json={"shift_type_code": "ESPECIAL", "variant_code": "ESPECIAL"})
        response = test_client.put(
            "/api/staff/esp/special-template", json={"cycle_days": 28, "off_days": [0, 7, 14, 21]}
        )
        assert response.status_code == 200
        assert response.json()["off_days"] == [0, 7, 14, 21]

        assert test_client.get("/api/staff/esp/rest-day/2025-12-29").json()["is_rest_day"] is True
        assert test_client.get("/api/staff/esp/rest-day/2025-12-30").json()["is_rest_day"] is False
        assert test_client.get("/api/staff/esp/rest-day/2026-01-26").json()["is_rest_day"] is True

    def test_day_outside_cycle(self, test_client):
        response = test_client.put("/api/staff/esp/special-template", json={"cycle_days": 28, "off_days": [28]})
        assert response.status_code == 400

    def test_zero_cycle(self, test_client):
        response = test_client.put("/api/staff/esp/special-template", json={"cycle_days": 0, "off_days": []})
        assert response.status_code == 422


class TestOverrides:
    def test_override_flips_day(self, test_client, ana):
        response = test_client.put("/api/staff/ana/overrides/2025-12-31", json={"override_type": "WORK"})
        assert response.status_code == 200

        data = test_client.get("/api/staff/ana/rest-day/2025-12-31").json()
        assert data["is_rest_day"] is False
        assert data["overridden"] is True

    def test_delete_restores_pattern(self, test_client, ana):
        test_client.put("/api/staff/ana/overrides/2025-12-31", json={"override_type": "WORK"})

        assert test_client.delete("/api/staff/ana/overrides/2025-12-31").status_code == 200
        assert test_client.get("/api/staff/ana/rest-day/2025-12-31").json()["is_rest_day"] is True
        assert test_client.delete("/api/staff/ana/overrides/2025-12-31").status_code == 404

    def test_override_for_unknown_staff(self, test_client):
        response = test_client.put("/api/staff/nadie/overrides/2026-01-05", json={"override_type": "OFF"})
        assert response.status_code == 404

    def test_override_bad_date(self, test_client, ana):
        response = test_client.put("/api/staff/ana/overrides/31-12-2025", json={"override_type": "OFF"})
        assert response.status_code == 400


class TestCalendarGrids:
    def test_week_grid_normalizes_to_monday(self, test_client, ana):
        data = test_client.get("/api/calendar/week/2026-01-07").json()

        assert data["start_date"] == "2026-01-05"
        assert data["end_date"] == "2026-01-11"
        assert data["title"] == "5 - 11 Ene 2026"
        row = data["rows"][0]
        assert row["staff_id"] == "ana"
        assert row["weekly_hours"] == 43

    def test_week_grid_applies_overrides(self, test_client, ana):
        test_client.put("/api/staff/ana/overrides/2026-01-06", json={"override_type": "OFF"})
        row = test_client.get("/api/calendar/week/2026-01-05").json()["rows"][0]
        assert row["days"][1]["status"] == "OFF"
        assert row["weekly_hours"] == 35

    def test_month_grid(self, test_client, ana):
        data = test_client.get("/api/calendar/month/2026/1").json()
        assert data["title"] == "Enero 2026"
        assert len(data["headers"]) == 31

    def test_invalid_month(self, test_client):
        assert test_client.get("/api/calendar/month/2026/13").status_code == 400

    def test_invalid_week(self, test_client):
        assert test_client.get("/api/calendar/week/hoy").status_code == 400

    def test_reduced_days(self, test_client):
        data = test_client.get("/api/calendar/reduced/2026-01-07").json()
        assert data["week_start"] == "2026-01-05"
        assert data["reduced_dates"] == ["2026-01-06", "2026-01-08"]

    @pytest.mark.parametrize("path", ["/api/calendar/week/9999-12-31", "/api/calendar/reduced/9999-12-31"])
    def test_week_past_last_representable_date(self, test_client, ana, path):
        response = test_client.get(path)
        assert response.status_code == 400
        assert response.json()["detail"] == "Week out of range"

    def test_week_grid_uses_configured_hours(self, test_client, ana):
        app.dependency_overrides[get_app_settings] = lambda: Settings(regular_hours=10, reduced_hours=9)
        row = test_client.get("/api/calendar/week/2026-01-05").json()["rows"][0]
        assert row["weekly_hours"] == 48


class TestIcalExport:
    def test_month_export(self, test_client, ana):
        response = test_client.get("/api/staff/ana/calendar.ics", params={"year": 2026, "month": 2})

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/calendar")
        assert "turnos_ana_2026_02.ics" in response.headers["content-disposition"]
        events = [c for c in Calendar.from_ical(response.text).walk() if c.name == "VEVENT"]
        assert len(events) == 20

    def test_year_export(self, test_client, ana):
        response = test_client.get("/api/staff/ana/calendar.ics", params={"year": 2026})
        assert response.status_code == 200
        assert "turnos_ana_2026.ics" in response.headers["content-disposition"]

    def test_export_uses_configured_timezone(self, test_client, ana):
        app.dependency_overrides[get_app_settings] = lambda: Settings(timezone="Europe/Madrid")
        response = test_client.get("/api/staff/ana/calendar.ics", params={"year": 2026, "month": 1})
        assert str(Calendar.from_ical(response.text)["x-wr-timezone"]) == "Europe/Madrid"

    def test_year_9999_export(self, test_client, ana):
        response = test_client.get("/api/staff/ana/calendar.ics", params={"year": 9999})
        assert response.status_code == 200
        assert "turnos_ana_9999.ics" in response.headers["content-disposition"]

    def test_unknown_staff(self, test_client):
        response = test_client.get("/api/staff/nadie/calendar.ics", params={"year": 2026, "month": 1})
        assert response.status_code == 404

    def test_invalid_month(self, test_client, ana):
        response = test_client.get("/api/staff/ana/calendar.ics", params={"year": 2026, "month": 0})
        assert response.status_code == 400

"""
Integration tests for API endpoints.

Tests the full HTTP request/response cycle against a seeded store and a
clock pinned to the seed date.
"""
import pytest
from fastapi.testclient import TestClient

from poultry_dashboard.config import settings
from poultry_dashboard.main import create_app


def as_role(role: str) -> dict:
    return {"X-Farm-Role": role}


# ============================================================
# Health Check Tests
# ============================================================

class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_root_endpoint(self, test_client):
        """Root endpoint should return healthy status."""
        response = test_client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "service" in data
        assert "version" in data

    def test_health_endpoint(self, test_client):
        response = test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_openapi_lists_routes(self, test_client):
        paths = test_client.get("/openapi.json").json()["paths"]

        assert "/api/v1/flocks" in paths
        assert "/api/v1/reports/daily-entry" in paths
        assert "/api/v1/dashboard/summary" in paths

    def test_listing_routes_document_record_schema(self, test_client):
        paths = test_client.get("/openapi.json").json()["paths"]

        schema = paths["/api/v1/reports/mortality"]["get"]["responses"]["200"]["content"]["application/json"]["schema"]
        assert schema["type"] == "array"
        assert "MortalityReport" in schema["items"]["$ref"]
        assert "post" in paths["/api/v1/reports/mortality"]

    def test_debug_setting_applied(self, seeded_store, fixed_clock, monkeypatch):
        monkeypatch.setattr(settings, "debug", True)

        assert create_app(store=seeded_store, clock=fixed_clock).debug is True


# ============================================================
# Session Tests
# ============================================================

class TestSessionEndpoints:
    """Tests for simulated sign-in and role navigation."""

    def test_login_returns_pages(self, test_client):
        response = test_client.post("/api/v1/auth/login", json={"role": "Worker"})

        assert response.status_code == 200
        data = response.json()
        assert data["user"] == {"username": "worker@aafarm.com", "role": "Worker"}
        assert data["landing_page"] == "Daily Feed & Water"
        assert "Dashboard" not in data["allowed_pages"]

    def test_login_rejects_unknown_role(self, test_client):
        response = test_client.post("/api/v1/auth/login", json={"role": "Owner"})

        assert response.status_code == 422

    def test_role_pages_with_space_in_name(self, test_client):
        response = test_client.get("/api/v1/roles/Security%20Guard/pages")

        assert response.status_code == 200
        assert response.json()["allowed_pages"] == ["Security Gate Log"]


# ============================================================
# Flock Endpoint Tests
# ============================================================

class TestFlockEndpoints:
    """Tests for flock registration and lookup."""

    FLOCK = {
        "name": "H4",
        "breed": "Bovans Brown",
        "arrival_date": "2024-05-01",
        "initial_bird_count": 3000,
        "cost_per_chick": 130,
    }

    def test_list_seeded_flocks(self, test_client):
        response = test_client.get("/api/v1/flocks")

        assert response.status_code == 200
        assert [f["id"] for f in response.json()] == ["h1", "h2", "h3"]

    def test_register_flock(self, test_client):
        response = test_client.post("/api/v1/flocks", json=self.FLOCK, headers=as_role("Manager"))

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Flock H4 added successfully!"
        assert data["record"]["id"] == "h4"
        assert data["record"]["current_bird_count"] == 3000
        assert data["record"]["total_eggs"] == 0

    def test_register_requires_role_header(self, test_client):
        response = test_client.post("/api/v1/flocks", json=self.FLOCK)

        assert response.status_code == 401
        assert response.json()["error"] == "MissingRoleError"

    def test_worker_cannot_register(self, test_client):
        response = test_client.post("/api/v1/flocks", json=self.FLOCK, headers=as_role("Worker"))

        assert response.status_code == 403
        assert response.json()["error"] == "PermissionDeniedError"
        assert len(test_client.get("/api/v1/flocks").json()) == 3

    def test_register_rejects_empty_name(self, test_client):
        response = test_client.post(
            "/api/v1/flocks", json={**self.FLOCK, "name": ""}, headers=as_role("Admin"),
        )

        assert response.status_code == 422

    def test_get_unknown_flock(self, test_client):
        response = test_client.get("/api/v1/flocks/h9")

        assert response.status_code == 404
        assert response.json()["detail"] == "Flock 'h9' not found"


# ============================================================
# Report Endpoint Tests
# ============================================================

class TestReportSubmission:
    """Tests for daily report submissions."""

    def test_feed_report_updates_flock(self, test_client):
        response = test_client.post(
            "/api/v1/reports/feed",
            json={"date": "2024-07-27", "flock_id": "h3", "feed_consumed_per_bird": 100},
            headers=as_role("Worker"),
        )

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Feed & Water report added successfully!"
        assert data["record"]["total_feed_used"] == pytest.approx(495.0)
        assert data["record"]["bird_count_snapshot"] == 4950
        flock = test_client.get("/api/v1/flocks/h3").json()
        assert flock["total_feed"] == pytest.approx(48495.0)

    def test_malformed_number_coerced_to_zero(self, test_client):
        response = test_client.post(
            "/api/v1/reports/feed",
            json={"date": "2024-07-27", "flock_id": "h1", "feed_consumed_per_bird": "abc"},
            headers=as_role("Worker"),
        )

        assert response.status_code == 201
        assert response.json()["record"]["total_feed_used"] == 0

    def test_mortality_report_reduces_birds(self, test_client):
        response = test_client.post(
            "/api/v1/reports/mortality",
            json={"date": "2024-07-27", "flock_id": "h1", "night_mortality": 2, "hospital_mortality": 1},
            headers=as_role("Worker"),
        )

        assert response.status_code == 201
        assert response.json()["record"]["total"] == 3
        assert test_client.get("/api/v1/flocks/h1").json()["current_bird_count"] == 4847

    def test_negative_mortality_leaves_flock_unchanged(self, test_client):
        response = test_client.post(
            "/api/v1/reports/mortality",
            json={"date": "2024-07-27", "flock_id": "h1", "night_mortality": "-5"},
            headers=as_role("Worker"),
        )

        assert response.status_code == 201
        assert response.json()["record"]["total"] == 0
        flock = test_client.get("/api/v1/flocks/h1").json()
        assert flock["current_bird_count"] == 4850
        assert flock["total_mortality"] == 150

    def test_unknown_flock_rejected(self, test_client):
        response = test_client.post(
            "/api/v1/reports/mortality",
            json={"date": "2024-07-27", "flock_id": "h9", "night_mortality": 1},
            headers=as_role("Worker"),
        )

        assert response.status_code == 404
        assert response.json()["error"] == "UnknownFlockError"

    def test_medicine_report_requires_name(self, test_client):
        response = test_client.post(
            "/api/v1/reports/medicine",
            json={"date": "2024-07-27", "flock_id": "h1", "medicine_name": ""},
            headers=as_role("Manager"),
        )

        assert response.status_code == 422

    def test_egg_report_accepts_legacy_names(self, test_client):
        response = test_client.post(
            "/api/v1/reports/egg-production",
            json={
                "date": "2024-07-27",
                "flock_id": "h2",
                "standard": {"today": {"petti": 1, "tray": 2, "eggs": 3}},
            },
            headers=as_role("Worker"),
        )

        assert response.status_code == 201
        assert response.json()["record"]["standard"]["today"] == {"case": 1, "tray": 2, "loose": 3}
        assert test_client.get("/api/v1/flocks/h2").json()["total_eggs"] == 925000 + 423

    def test_daily_entry(self, test_client):
        response = test_client.post(
            "/api/v1/reports/daily-entry",
            json={
                "date": "2024-07-27",
                "flock_id": "h1",
                "feed": {"feed_consumed_per_bird": 110},
                "mortality": {"night_mortality": 1},
                "medicines": [{"medicine_name": "Kanamycin", "dose": "1ml/L"}, {"medicine_name": ""}],
                "eggs": {"jumbo": {"today": {"tray": 1}}},
            },
            headers=as_role("Manager"),
        )

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Daily report for Flock H1 on 2024-07-27 submitted successfully!"
        assert len(data["record"]["medicine_reports"]) == 1
        assert data["record"]["mortality_report"]["total"] == 1

    def test_worker_cannot_use_daily_entry(self, test_client):
        response = test_client.post(
            "/api/v1/reports/daily-entry",
            json={"date": "2024-07-27", "flock_id": "h1"},
            headers=as_role("Worker"),
        )

        assert response.status_code == 403


class TestReportListing:
    """Tests for listing and filtering reports."""

    def test_list_by_kind(self, test_client):
        response = test_client.get("/api/v1/reports/feed")

        assert response.status_code == 200
        assert {r["id"] for r in response.json()} == {"fr1", "fr2"}

    def test_date_filter(self, test_client):
        test_client.post(
            "/api/v1/reports/mortality",
            json={"date": "2024-07-25", "flock_id": "h2", "night_mortality": 1},
            headers=as_role("Worker"),
        )

        response = test_client.get("/api/v1/reports/mortality", params={"start": "2024-07-27", "end": "2024-07-27"})

        assert [r["id"] for r in response.json()] == ["mr1"]

    def test_inverted_range_is_empty(self, test_client):
        response = test_client.get("/api/v1/reports/feed", params={"start": "2024-07-28", "end": "2024-07-27"})

        assert response.status_code == 200
        assert response.json() == []

    def test_unknown_kind(self, test_client):
        assert test_client.get("/api/v1/reports/vaccination").status_code == 404

    def test_egg_production_table(self, test_client):
        response = test_client.get("/api/v1/egg-production")

        assert response.status_code == 200
        row = response.json()[0]
        assert row["flock_name"] == "H1"
        assert row["total_eggs"] == 5868
        assert row["production_percentage"] == 120.99
        assert set(row["closing_stock"]) == {"starter", "medium", "standard", "jumbo", "dirty", "broken", "liquid"}


# ============================================================
# Finance, Inventory and Gate Tests
# ============================================================

class TestFinanceEndpoints:
    """Tests for the finance ledger."""

    def test_balance(self, test_client):
        data = test_client.get("/api/v1/finance/balance").json()

        assert data == {"opening": 50000, "total_inward": 55000, "total_outward": 125000, "closing": -20000}

    def test_filter_by_type(self, test_client):
        response = test_client.get("/api/v1/finance/transactions", params={"type": "Outward"})

        assert {t["id"] for t in response.json()} == {"ft2", "ft3"}

    def test_accountant_adds_transaction(self, test_client):
        response = test_client.post(
            "/api/v1/finance/transactions",
            json={"date": "2024-07-27", "type": "Inward", "amount": "20000"},
            headers=as_role("Accountant"),
        )

        assert response.status_code == 201
        assert response.json()["message"] == "Transaction added successfully!"
        assert test_client.get("/api/v1/finance/balance").json()["closing"] == 0

    def test_worker_cannot_add_transaction(self, test_client):
        response = test_client.post(
            "/api/v1/finance/transactions",
            json={"date": "2024-07-27", "type": "Inward", "amount": 1},
            headers=as_role("Worker"),
        )

        assert response.status_code == 403


class TestInventoryEndpoints:
    """Tests for inventory and low stock alerts."""

    def test_low_stock_after_adding_item(self, test_client):
        assert test_client.get("/api/v1/inventory/low-stock").json()["count"] == 0

        response = test_client.post(
            "/api/v1/inventory",
            json={"name": "Vaccine", "category": "Medicine", "unit": "bottles", "stock": 10, "low_stock_threshold": 10},
            headers=as_role("Accountant"),
        )

        assert response.status_code == 201
        assert response.json()["message"] == "Item Vaccine added to inventory."
        low_stock = test_client.get("/api/v1/inventory/low-stock").json()
        assert low_stock["count"] == 1
        assert low_stock["items"][0]["name"] == "Vaccine"
        assert test_client.get("/api/v1/inventory").json()[0]["id"] == "inv4"


class TestSecurityEndpoints:
    """Tests for the gate log."""

    def test_guard_records_movement(self, test_client):
        response = test_client.post(
            "/api/v1/security/logs",
            json={"timestamp": "2024-07-28T10:00:00", "type": "Inward", "vehicle_number": "ABC-1"},
            headers=as_role("Security Guard"),
        )

        assert response.status_code == 201
        assert response.json()["message"] == "Inward entry recorded successfully!"
        logs = test_client.get("/api/v1/security/logs", params={"start": "2024-07-28", "end": "2024-07-28"}).json()
        assert len(logs) == 3

    def test_manager_cannot_record_movement(self, test_client):
        response = test_client.post(
            "/api/v1/security/logs",
            json={"timestamp": "2024-07-28T10:00:00", "type": "Outward"},
            headers=as_role("Manager"),
        )

        assert response.status_code == 403


# ============================================================
# Dashboard Tests
# ============================================================

class TestDashboardEndpoints:
    """Tests for dashboard metrics."""

    def test_summary(self, test_client):
        data = test_client.get("/api/v1/dashboard/summary").json()

        assert data["date"] == "2024-07-27"
        assert data["total_birds"] == 14710
        assert data["eggs_today"] == 5868
        assert data["feed_today_kg"] == pytest.approx(1083.5)
        assert data["net_cash_flow"] == -70000

    def test_default_trend(self, test_client):
        data = test_client.get("/api/v1/dashboard/trend").json()

        assert data["days"] == 7
        assert len(data["eggs"]) == 7
        assert data["eggs"][-1]["date"] == "2024-07-27"
        assert data["eggs"][-1]["flocks"] == {"h1": 5868, "h2": 0, "h3": 0}

    @pytest.mark.parametrize("days,status_code", [(0, 422), (14, 200), (91, 422)])
    def test_trend_window_bounds(self, test_client, days, status_code):
        response = test_client.get("/api/v1/dashboard/trend", params={"days": days})

        assert response.status_code == status_code


# ============================================================
# Rate Limiting Tests
# ============================================================

class TestRateLimiting:
    """Tests for per-client rate limits."""

    def test_requests_over_limit_rejected(self, seeded_store, fixed_clock):
        app = create_app(store=seeded_store, clock=fixed_clock, rate_limit="2/minute")

        with TestClient(app) as client:
            codes = [client.get("/health").status_code for _ in range(3)]

        assert codes == [200, 200, 429]


# ============================================================
# Async Client Tests
# ============================================================

class TestAsyncClient:
    """The API served through an async transport."""

    async def test_submit_and_read_back(self, async_test_client):
        response = await async_test_client.post(
            "/api/v1/reports/mortality",
            json={"date": "2024-07-27", "flock_id": "h3", "night_mortality": 5},
            headers=as_role("Admin"),
        )
        summary = await async_test_client.get("/api/v1/dashboard/summary")

        assert response.status_code == 201
        assert summary.json()["mortality_today"] == 8

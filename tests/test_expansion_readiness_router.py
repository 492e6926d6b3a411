"""
Tests for the Expansion Readiness API endpoints
"""

from unittest.mock import patch

import pytest


class TestExpansionReadinessEndpoint:
    """GET /api/expansion-readiness"""

    def test_rolling_90d(self, test_client):
        response = test_client.get("/api/expansion-readiness", params={"range": "90d"})

        assert response.status_code == 200
        data = response.json()
        assert data["overallScore"] == 25
        assert data["readyToExpand"] is True

        metrics = data["fleetUtilization"]["metrics"]
        assert metrics["dayCount"] == 90
        assert metrics["activeTruckCount"] == 12
        assert metrics["fleetBand"] == "MID"
        assert metrics["avgRevenueDaysPerTruck"] == 45
        assert metrics["utilizationRate"] == 0.5
        assert metrics["lowUtilThresholdDays"] == 16
        assert metrics["lowUtilTruckCount"] == 6
        assert metrics["lowUtilPct"] == 0.5
        assert metrics["distribution"] == {
            "ge20": 6,
            "between18And19": 0,
            "between15And17": 0,
            "lt15": 6,
        }
        assert metrics["cv"] == 1.0
        assert metrics["trendDelta"] == 0

        score = data["fleetUtilization"]["score"]
        assert score == {
            "totalPoints": 25,
            "tier": "STRONG",
            "flags": ["VERY_HIGH_UTILIZATION"],
        }

    def test_default_range_is_month(self, test_client):
        response = test_client.get("/api/expansion-readiness")

        assert response.status_code == 200
        metrics = response.json()["fleetUtilization"]["metrics"]
        assert metrics["periodStart"].endswith("-01")
        assert metrics["dayCount"] in (28, 29, 30, 31)
        assert metrics["activeTruckCount"] == 12

    def test_explicit_company(self, test_client):
        response = test_client.get(
            "/api/expansion-readiness", params={"range": "180d", "company_id": "empty-co"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["fleetUtilization"]["metrics"]["activeTruckCount"] == 0
        assert data["fleetUtilization"]["score"]["tier"] == "NEEDS_WORK"
        assert data["overallScore"] == 5
        assert data["readyToExpand"] is False

    @pytest.mark.parametrize("bad_range", ["1y", "week", "MONTH", "30d"])
    def test_invalid_range(self, test_client, bad_range):
        response = test_client.get("/api/expansion-readiness", params={"range": bad_range})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] is True
        assert body["category"] == "validation"
        assert body["details"]["range"] == bad_range

    def test_empty_range_is_rejected(self, test_client):
        """?range= with no value is an unknown selector, not the default"""
        response = test_client.get("/api/expansion-readiness", params={"range": ""})

        assert response.status_code == 400
        body = response.json()
        assert body["category"] == "validation"
        assert body["details"]["range"] == ""

    def test_unknown_company(self, test_client):
        response = test_client.get(
            "/api/expansion-readiness", params={"range": "90d", "company_id": "ghost"}
        )

        assert response.status_code == 503
        assert response.json()["category"] == "database"

    def test_unexpected_failure(self, test_client):
        with patch(
            "routers.expansion_readiness_router.calculate_expansion_readiness",
            side_effect=RuntimeError("boom"),
        ):
            response = test_client.get("/api/expansion-readiness", params={"range": "90d"})

        assert response.status_code == 500


class TestFleetUtilizationEndpoint:
    """GET /api/expansion-readiness/fleet-utilization"""

    def test_breakdown(self, test_client):
        response = test_client.get(
            "/api/expansion-readiness/fleet-utilization", params={"range": "90d"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["range"] == "90d"
        assert data["window"]["daysInPeriod"] == 90
        assert data["fleet"] == {
            "truckCount": 12,
            "fleetBand": "MID",
            "lowUtilThresholdDays": 16,
        }

        pillars = data["pillars"]
        assert pillars["overallUtilization"] == {
            "totalRevenueDays": 540,
            "availableDays": 1080,
            "utilizationRate": 0.5,
        }
        by_truck = pillars["revenueDaysPerTruck"]["byTruck"]
        assert len(by_truck) == 12
        assert by_truck[0] == {
            "truckId": "T001",
            "unitNumber": "101",
            "status": "ACTIVE",
            "revenueDays": 90,
            "isLowUtil": False,
        }
        assert sum(t["isLowUtil"] for t in by_truck) == 6
        assert pillars["lowUtilization"] == {"lowUtilCount": 6, "lowUtilPct": 0.5}
        assert pillars["consistency"]["band"] == "very_poor"
        assert pillars["consistency"]["penalty"] == -5

        trend = pillars["trend"]
        assert len(trend["months"]) == 3
        assert all(m["monthStart"].endswith("-01") for m in trend["months"])
        assert trend["momentum"] in {
            "FLAT",
            "IMPROVING_MILD",
            "IMPROVING_STRONG",
            "DECLINING_MILD",
            "DECLINING_STRONG",
        }

        assert data["score"]["tier"] == "STRONG"
        assert data["overallScore"] == 25
        assert data["readyToExpand"] is True

    def test_default_range(self, test_client):
        response = test_client.get("/api/expansion-readiness/fleet-utilization")

        assert response.status_code == 200
        assert response.json()["range"] == "month"

    def test_idle_fleet_consistency_unknown(self, test_client, api_repository):
        response = test_client.get(
            "/api/expansion-readiness/fleet-utilization",
            params={"range": "90d", "company_id": "empty-co"},
        )

        assert response.status_code == 200
        assert response.json()["pillars"]["consistency"]["band"] == "unknown"

    def test_invalid_range(self, test_client):
        response = test_client.get(
            "/api/expansion-readiness/fleet-utilization", params={"range": "2y"}
        )

        assert response.status_code == 400

    def test_empty_range_is_rejected(self, test_client):
        response = test_client.get(
            "/api/expansion-readiness/fleet-utilization", params={"range": ""}
        )

        assert response.status_code == 400
        assert response.json()["details"]["range"] == ""


class TestHealthEndpoint:
    """GET /health"""

    def test_health(self, test_client):
        response = test_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["version"] == "1.0.0"
        assert "timestamp" in data

    def test_health_db_unreachable(self, test_client):
        from sqlalchemy.exc import OperationalError

        with patch(
            "routers.health.get_db_connection",
            side_effect=OperationalError("SELECT 1", {}, Exception("down")),
        ):
            response = test_client.get("/health/db")

        assert response.status_code == 200
        assert response.json()["fleet_db"]["status"] == "unhealthy"

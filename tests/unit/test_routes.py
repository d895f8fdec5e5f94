"""
Tests for API Routes.

Tests the Flask HTTP endpoints.
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest

from business_hours.core.exceptions import HolidaySourceUnavailableError


class TestHealthEndpoint:
    """Tests for health check endpoints."""

    def test_health_returns_healthy(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.get_json()["status"] == "healthy"

    def test_root_returns_healthy(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.get_json()["service"] == "business-hours"


class TestMetricsEndpoint:
    """Tests for the metrics endpoint."""

    def test_exposes_prometheus_text(self, client):
        client.get("/health")

        response = client.get("/metrics")

        assert response.status_code == 200
        assert response.mimetype == "text/plain"
        body = response.get_data(as_text=True)
        assert "# TYPE http_requests_total counter" in body
        assert "holiday_fetches_total" in body


@pytest.mark.usefixtures("stubbed_routes")
class TestBusinessHoursEndpoint:
    """Tests for /api/business-hours."""

    @pytest.mark.parametrize("query, expected", [
        ("hours=1&date=2025-10-03T22:00:00Z", "2025-10-06T14:00:00Z"),
        ("hours=1&date=2025-10-04T19:00:00Z", "2025-10-06T14:00:00Z"),
        ("days=1&hours=4&date=2025-10-07T20:00:00Z", "2025-10-09T15:00:00Z"),
        ("days=1&date=2025-10-05T23:00:00Z", "2025-10-06T22:00:00Z"),
        ("hours=8&date=2025-10-06T13:00:00Z", "2025-10-06T22:00:00Z"),
        ("days=1&date=2025-10-06T13:00:00Z", "2025-10-07T13:00:00Z"),
        ("days=1&date=2025-10-06T17:30:00Z", "2025-10-07T17:00:00Z"),
        ("hours=3&date=2025-10-06T16:30:00Z", "2025-10-06T20:30:00Z"),
        ("days=5&hours=4&date=2025-04-10T15:00:00Z", "2025-04-21T20:00:00Z"),
    ])
    def test_reference_cases(self, client, query, expected):
        response = client.get(f"/api/business-hours?{query}")

        assert response.status_code == 200
        assert response.get_json() == {"date": expected}

    def test_blank_value_counts_as_absent(self, client):
        response = client.get("/api/business-hours?days=&hours=1&date=2025-10-06T13:00:00Z")

        assert response.status_code == 200
        assert response.get_json() == {"date": "2025-10-06T14:00:00Z"}

    def test_requires_days_or_hours(self, client):
        response = client.get("/api/business-hours?date=2025-10-06T13:00:00Z")

        assert response.status_code == 400
        data = response.get_json()
        assert data["error"] == "InvalidParameters"
        assert "days" in data["message"]

    def test_blank_days_and_hours_rejected(self, client):
        response = client.get("/api/business-hours?days=&hours=")

        assert response.status_code == 400

    @pytest.mark.parametrize("query", [
        "days=-1",
        "hours=-2",
        "days=abc",
        "hours=1.5",
    ])
    def test_rejects_invalid_numbers(self, client, query):
        response = client.get(f"/api/business-hours?{query}")

        assert response.status_code == 400
        assert response.get_json()["error"] == "InvalidParameters"

    def test_rejects_date_without_z(self, client):
        response = client.get("/api/business-hours?hours=1&date=2025-10-06T13:00:00-05:00")

        assert response.status_code == 400
        assert "date" in response.get_json()["message"]

    def test_rejects_unparseable_date(self, client):
        response = client.get("/api/business-hours?hours=1&date=2025-02-30T10:00:00Z")

        assert response.status_code == 400
        assert response.get_json()["error"] == "InvalidParameters"


class TestBusinessHoursEndpointFailures:
    """Failure mapping for /api/business-hours."""

    @patch("business_hours.api.routes.BusinessDateService")
    def test_holiday_source_failure_returns_503(self, mock_service_class, client):
        mock_service = MagicMock()
        mock_service_class.return_value = mock_service
        mock_service.compute_business_date.side_effect = HolidaySourceUnavailableError(
            "failed to fetch holidays: 500", status_code=500
        )

        response = client.get("/api/business-hours?hours=1")

        assert response.status_code == 503
        assert response.get_json()["error"] == "ServiceUnavailable"

    @patch("business_hours.api.routes.BusinessDateService")
    def test_unexpected_error_returns_500(self, mock_service_class, client):
        mock_service = MagicMock()
        mock_service_class.return_value = mock_service
        mock_service.compute_business_date.side_effect = RuntimeError("boom")

        response = client.get("/api/business-hours?days=1")

        assert response.status_code == 500
        assert response.get_json()["error"] == "InternalError"

    @patch("business_hours.api.routes.BusinessDateService")
    def test_passes_parsed_query_to_service(self, mock_service_class, client):
        mock_service = MagicMock()
        mock_service_class.return_value = mock_service
        mock_service.compute_business_date.return_value = datetime(
            2025, 10, 6, 14, 0, tzinfo=timezone.utc
        )

        response = client.get("/api/business-hours?days=2")

        assert response.status_code == 200
        mock_service.compute_business_date.assert_called_once_with(
            start_utc=None,
            days=2,
            hours=0,
        )

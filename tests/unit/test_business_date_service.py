"""
Tests for the Business Date Service.

End-to-end computation with a stubbed holiday provider.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
from freezegun import freeze_time

from business_hours.core.business_time import format_utc_instant
from business_hours.core.exceptions import (
    HolidaySourceUnavailableError,
    InvalidDateError,
    ValidationError,
)
from business_hours.services.business_date import (
    BusinessDateService,
    parse_utc_instant,
)
from business_hours.services.holiday_provider import HolidayProvider
from business_hours.infrastructure.holiday_cache import HolidayCache


class TestParseUtcInstant:
    """Tests for parse_utc_instant."""

    def test_parses_z_suffix(self):
        assert parse_utc_instant("2025-10-06T13:00:00Z") == datetime(
            2025, 10, 6, 13, 0, tzinfo=timezone.utc
        )

    def test_parses_milliseconds(self):
        result = parse_utc_instant("2025-10-06T13:00:00.000Z")

        assert result == datetime(2025, 10, 6, 13, 0, tzinfo=timezone.utc)

    def test_no_offset_is_utc(self):
        result = parse_utc_instant("2025-10-06T13:00:00")

        assert result.utcoffset().total_seconds() == 0

    @pytest.mark.parametrize("value", ["", "   ", "not-a-date", "2025-13-01T00:00:00Z", "2025-10-06T25:00:00Z"])
    def test_invalid_values_raise(self, value):
        with pytest.raises(InvalidDateError):
            parse_utc_instant(value)


class TestBusinessDateService:
    """Tests for BusinessDateService.compute_business_date."""

    @pytest.mark.parametrize("start, days, hours, expected", [
        # Friday 17:00 + 1h -> Monday 09:00
        ("2025-10-03T22:00:00Z", 0, 1, "2025-10-06T14:00:00Z"),
        # Saturday 14:00 + 1h -> Monday 09:00
        ("2025-10-04T19:00:00Z", 0, 1, "2025-10-06T14:00:00Z"),
        # Tuesday 15:00 + 1 day + 4h -> Thursday 10:00
        ("2025-10-07T20:00:00Z", 1, 4, "2025-10-09T15:00:00Z"),
        # Sunday 18:00 + 1 day -> Monday 17:00
        ("2025-10-05T23:00:00Z", 1, 0, "2025-10-06T22:00:00Z"),
        # Monday 08:00 + 8h -> Monday 17:00
        ("2025-10-06T13:00:00Z", 0, 8, "2025-10-06T22:00:00Z"),
        # Monday 08:00 + 1 day -> Tuesday 08:00
        ("2025-10-06T13:00:00Z", 1, 0, "2025-10-07T13:00:00Z"),
        # Monday 12:30 -> 12:00, + 1 day -> Tuesday 12:00
        ("2025-10-06T17:30:00Z", 1, 0, "2025-10-07T17:00:00Z"),
        # Monday 11:30 + 3h -> Monday 15:30
        ("2025-10-06T16:30:00Z", 0, 3, "2025-10-06T20:30:00Z"),
        # Thursday 10 Apr 10:00 + 5 days over Holy Week + 4h -> Monday 21 Apr 15:00
        ("2025-04-10T15:00:00Z", 5, 4, "2025-04-21T20:00:00Z"),
    ])
    def test_reference_cases(self, service, start, days, hours, expected):
        result = service.compute_business_date(start, days=days, hours=hours)

        assert format_utc_instant(result) == expected

    def test_result_is_utc(self, service):
        result = service.compute_business_date("2025-10-06T13:00:00Z", hours=1)

        assert result.tzinfo == timezone.utc

    def test_days_are_applied_before_hours(self, service):
        """Friday 16:00 + 1 day + 2h: Monday 16:00, then Tuesday 09:00."""
        result = service.compute_business_date("2025-10-03T21:00:00Z", days=1, hours=2)

        assert format_utc_instant(result) == "2025-10-07T14:00:00Z"

    def test_only_normalizes_when_nothing_to_add(self, service):
        result = service.compute_business_date("2025-10-04T19:00:00Z")

        assert format_utc_instant(result) == "2025-10-03T22:00:00Z"

    def test_fractional_hours(self, service):
        result = service.compute_business_date("2025-10-06T13:00:00Z", hours=1.5)

        assert format_utc_instant(result) == "2025-10-06T14:30:00Z"

    @freeze_time("2025-10-06T15:00:00Z")
    def test_defaults_to_now(self, service):
        """Monday 10:00 local + 1h = 11:00 local."""
        result = service.compute_business_date(None, hours=1)

        assert format_utc_instant(result) == "2025-10-06T16:00:00Z"

    def test_invalid_start_raises(self, service):
        with pytest.raises(InvalidDateError):
            service.compute_business_date("yesterday", days=1)

    def test_negative_values_raise(self, service):
        with pytest.raises(ValidationError):
            service.compute_business_date("2025-10-06T13:00:00Z", days=-1)
        with pytest.raises(ValidationError):
            service.compute_business_date("2025-10-06T13:00:00Z", hours=-0.5)

    def test_holiday_source_failure_propagates(self, make_provider, calendar):
        provider = make_provider(error=HolidaySourceUnavailableError("down", status_code=503))
        service = BusinessDateService(holiday_provider=provider, calendar=calendar)

        with pytest.raises(HolidaySourceUnavailableError):
            service.compute_business_date("2025-10-06T13:00:00Z", hours=1)

    def test_holidays_fetched_once_per_computation(self, service, holiday_provider):
        service.compute_business_date("2025-10-06T13:00:00Z", days=2, hours=3)

        assert holiday_provider.calls == 1


class TestHolidayProvider:
    """Tests for HolidayProvider caching behaviour."""

    def test_uses_cache_between_calls(self):
        client = MagicMock()
        client.fetch_holidays.return_value = frozenset(["2025-01-01"])
        provider = HolidayProvider(client=client, cache=HolidayCache(ttl_seconds=3600))

        assert provider.get_holidays() == frozenset(["2025-01-01"])
        assert provider.get_holidays() == frozenset(["2025-01-01"])
        client.fetch_holidays.assert_called_once()

    def test_refreshes_after_ttl(self):
        client = MagicMock()
        client.fetch_holidays.side_effect = [frozenset(["2025-01-01"]), frozenset(["2025-12-25"])]
        provider = HolidayProvider(client=client, cache=HolidayCache(ttl_seconds=3600))

        with freeze_time("2025-10-06T08:00:00Z") as frozen:
            provider.get_holidays()
            frozen.tick(delta=timedelta(hours=1))
            result = provider.get_holidays()

        assert result == frozenset(["2025-12-25"])
        assert client.fetch_holidays.call_count == 2

"""
Test Configuration and Fixtures.

Provides shared fixtures for all tests.
"""

from typing import FrozenSet, Iterable, Optional
from unittest.mock import patch

import pytest
from flask import Flask
from flask.testing import FlaskClient

from business_hours.app import create_app
from business_hours.core.calendar import WorkingCalendar
from business_hours.services.business_date import BusinessDateService


# Colombian public holidays for 2025, as published by the catalog
COLOMBIA_HOLIDAYS_2025 = frozenset([
    "2025-01-01",
    "2025-01-06",
    "2025-03-24",
    "2025-04-17",
    "2025-04-18",
    "2025-05-01",
    "2025-06-02",
    "2025-06-23",
    "2025-06-30",
    "2025-07-20",
    "2025-08-07",
    "2025-08-18",
    "2025-10-13",
    "2025-11-03",
    "2025-11-17",
    "2025-12-08",
    "2025-12-25",
])


class StubHolidayProvider:
    """Holiday provider returning a fixed set and counting calls."""

    def __init__(
        self,
        holidays: Iterable[str] = (),
        error: Optional[Exception] = None,
    ) -> None:
        self.holidays = frozenset(holidays)
        self.error = error
        self.calls = 0

    def get_holidays(self) -> FrozenSet[str]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.holidays


@pytest.fixture
def calendar() -> WorkingCalendar:
    """Default Bogota working calendar."""
    return WorkingCalendar()


@pytest.fixture
def holidays() -> FrozenSet[str]:
    """Colombian holidays for 2025."""
    return COLOMBIA_HOLIDAYS_2025


@pytest.fixture
def no_holidays() -> FrozenSet[str]:
    """Empty holiday set."""
    return frozenset()


@pytest.fixture
def make_provider():
    """Factory for stub holiday providers."""
    return StubHolidayProvider


@pytest.fixture
def holiday_provider() -> StubHolidayProvider:
    """Provider serving the 2025 Colombian holidays."""
    return StubHolidayProvider(COLOMBIA_HOLIDAYS_2025)


@pytest.fixture
def service(holiday_provider: StubHolidayProvider, calendar: WorkingCalendar) -> BusinessDateService:
    """Business date service backed by the stub provider."""
    return BusinessDateService(holiday_provider=holiday_provider, calendar=calendar)


@pytest.fixture
def app() -> Flask:
    """Create test Flask application."""
    test_config = {
        "TESTING": True,
    }
    return create_app(test_config)


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Create test client."""
    return app.test_client()


@pytest.fixture
def stubbed_routes(holiday_provider: StubHolidayProvider, calendar: WorkingCalendar):
    """Make the API build its service on the stub provider."""
    with patch(
        "business_hours.api.routes.BusinessDateService",
        side_effect=lambda: BusinessDateService(
            holiday_provider=holiday_provider,
            calendar=calendar,
        ),
    ) as mock:
        yield mock

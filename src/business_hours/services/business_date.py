"""
Business Date Service.

Computes the instant reached by adding business days and business
hours to a start instant.
"""

from datetime import datetime, timezone
from typing import FrozenSet, Optional, Protocol

from business_hours.config import settings
from business_hours.core.business_time import (
    add_business_days,
    add_business_hours,
    normalize_backward_to_working_slot,
    to_utc,
)
from business_hours.core.calendar import WorkingCalendar, now_utc
from business_hours.core.exceptions import InvalidDateError, ValidationError
from business_hours.infrastructure.logging import get_logger, log_duration
from business_hours.infrastructure.metrics import get_metrics
from business_hours.services.holiday_provider import get_holiday_provider


logger = get_logger(__name__)


class HolidaySource(Protocol):
    def get_holidays(self) -> FrozenSet[str]:
        ...


def parse_utc_instant(value: str) -> datetime:
    """
    Parse an ISO-8601 instant.

    A trailing ``Z`` is accepted and a value without an offset is
    read as UTC.

    Raises:
        InvalidDateError: If the value is not a valid ISO-8601 instant.
    """
    if not isinstance(value, str) or not value.strip():
        raise InvalidDateError(value)

    text = value.strip()
    if text[-1] in "zZ":
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise InvalidDateError(value) from e

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class BusinessDateService:
    """
    Service adding business time to an instant.

    Order is fixed: normalize the start backward onto the working
    calendar, then add days, then add hours.
    """

    def __init__(
        self,
        holiday_provider: Optional[HolidaySource] = None,
        calendar: Optional[WorkingCalendar] = None,
    ) -> None:
        self._holiday_provider = holiday_provider or get_holiday_provider()
        self._calendar = calendar or settings.calendar.to_working_calendar()

    @property
    def calendar(self) -> WorkingCalendar:
        return self._calendar

    def resolve_start(self, start_utc: Optional[str]) -> datetime:
        """Start instant in the business timezone; now when not given."""
        start = parse_utc_instant(start_utc) if start_utc is not None else now_utc()
        return self._calendar.localize(start)

    @log_duration("compute_business_date")
    def compute_business_date(
        self,
        start_utc: Optional[str] = None,
        days: int = 0,
        hours: float = 0,
    ) -> datetime:
        """
        Add business days, then business hours, to a start instant.

        Args:
            start_utc: ISO-8601 UTC start instant, or None for now.
            days: Whole business days to add (>= 0).
            hours: Business hours to add (>= 0, may be fractional).

        Returns:
            The resulting instant in UTC.

        Raises:
            ValidationError: If days or hours is negative.
            InvalidDateError: If start_utc cannot be parsed.
            HolidaySourceUnavailableError: If the holiday catalog is unavailable.
        """
        if days < 0:
            raise ValidationError("days", "must be a non-negative integer")
        if hours < 0:
            raise ValidationError("hours", "must be non-negative")

        holidays = self._holiday_provider.get_holidays()
        start = self.resolve_start(start_utc)

        result = normalize_backward_to_working_slot(start, holidays, self._calendar)
        if days > 0:
            result = add_business_days(result, days, holidays, self._calendar)
        if hours > 0:
            result = add_business_hours(result, hours, holidays, self._calendar)

        result_utc = to_utc(result)

        get_metrics().business_dates_computed_total.inc()
        logger.info(
            "Business date computed",
            extra={"extra_fields": {
                "start": start.isoformat(),
                "days": days,
                "hours": hours,
                "result": result_utc.isoformat(),
                "holiday_count": len(holidays),
            }}
        )

        return result_utc


def compute_business_date(
    start_utc: Optional[str] = None,
    days: int = 0,
    hours: float = 0,
) -> datetime:
    """Compute a business date with the default provider and calendar."""
    return BusinessDateService().compute_business_date(start_utc, days, hours)

"""
Working calendar definition and day predicates.

A working day is a Monday-Friday date that is not in the holiday set.
All dates are evaluated in the calendar's business timezone.
Pure business logic with no external dependencies.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import AbstractSet, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from business_hours.core.exceptions import ConfigurationError


HolidaySet = AbstractSet[str]


def now_utc() -> datetime:
    """Get the current UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class WorkingCalendar:
    """
    Business timezone and daily working windows.

    Work happens in two segments per working day:
    [open_hour, lunch_start_hour) and [lunch_end_hour, close_hour).
    """
    timezone: str = "America/Bogota"
    open_hour: int = 8
    lunch_start_hour: int = 12
    lunch_end_hour: int = 13
    close_hour: int = 17

    def __post_init__(self) -> None:
        if not (
            0 <= self.open_hour
            < self.lunch_start_hour
            < self.lunch_end_hour
            < self.close_hour
            <= 23
        ):
            raise ConfigurationError(
                "working_hours",
                "Working hours must satisfy open < lunch start < lunch end < close, "
                f"got {self.open_hour}/{self.lunch_start_hour}/"
                f"{self.lunch_end_hour}/{self.close_hour}",
            )
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigurationError(
                "timezone",
                f"Unknown business timezone: {self.timezone}",
            ) from e

    @property
    def zone(self) -> ZoneInfo:
        """Business timezone."""
        return ZoneInfo(self.timezone)

    @property
    def open_time(self) -> time:
        return time(self.open_hour)

    @property
    def lunch_start_time(self) -> time:
        return time(self.lunch_start_hour)

    @property
    def lunch_end_time(self) -> time:
        return time(self.lunch_end_hour)

    @property
    def close_time(self) -> time:
        return time(self.close_hour)

    def localize(self, instant: datetime) -> datetime:
        """
        Express an instant in the business timezone.

        Naive datetimes are taken to already be business-local wall time.
        """
        if instant.tzinfo is None:
            return instant.replace(tzinfo=self.zone)
        return instant.astimezone(self.zone)

    def at_hour(self, instant: datetime, hour: int) -> datetime:
        """Same business-local date as ``instant``, at ``hour``:00:00.000."""
        return instant.replace(hour=hour, minute=0, second=0, microsecond=0)


DEFAULT_CALENDAR = WorkingCalendar()


def _local_date(
    value: Union[datetime, date],
    calendar: WorkingCalendar,
) -> date:
    if isinstance(value, datetime):
        return calendar.localize(value).date()
    return value


def to_ymd(
    value: Union[datetime, date],
    calendar: WorkingCalendar = DEFAULT_CALENDAR,
) -> str:
    """Business-local calendar date as ``YYYY-MM-DD``."""
    return _local_date(value, calendar).isoformat()


def is_weekend(
    value: Union[datetime, date],
    calendar: WorkingCalendar = DEFAULT_CALENDAR,
) -> bool:
    """
    Check if a date falls on a weekend in the business timezone.

    Args:
        value: The instant or date to check.
        calendar: Working calendar providing the business timezone.

    Returns:
        True on Saturday or Sunday.
    """
    # Saturday=5, Sunday=6
    return _local_date(value, calendar).weekday() >= 5


def is_working_day(
    value: Union[datetime, date],
    holidays: HolidaySet,
    calendar: WorkingCalendar = DEFAULT_CALENDAR,
) -> bool:
    """
    Check if a date is a working day (not weekend, not a holiday).

    Only the calendar date matters; the time of day is ignored.

    Args:
        value: The instant or date to check.
        holidays: Holiday dates as ``YYYY-MM-DD`` strings.
        calendar: Working calendar providing the business timezone.

    Returns:
        True if the date is a working day.
    """
    if is_weekend(value, calendar):
        return False
    return to_ymd(value, calendar) not in holidays

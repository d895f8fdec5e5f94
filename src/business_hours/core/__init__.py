"""Core package - Pure business logic with no external dependencies."""

from business_hours.core.business_time import (
    add_business_days,
    add_business_hours,
    format_utc_instant,
    normalize_backward_to_working_slot,
    to_utc,
)
from business_hours.core.calendar import (
    DEFAULT_CALENDAR,
    HolidaySet,
    WorkingCalendar,
    is_weekend,
    is_working_day,
    now_utc,
    to_ymd,
)
from business_hours.core.exceptions import (
    BusinessError,
    BusinessHoursError,
    ConfigurationError,
    ExternalServiceError,
    HolidaySourceUnavailableError,
    InfrastructureError,
    InvalidDateError,
    ValidationError,
)
from business_hours.core.holiday_parser import parse_holiday_document

__all__ = [
    # Business time
    "add_business_days",
    "add_business_hours",
    "format_utc_instant",
    "normalize_backward_to_working_slot",
    "to_utc",
    # Calendar
    "DEFAULT_CALENDAR",
    "HolidaySet",
    "WorkingCalendar",
    "is_weekend",
    "is_working_day",
    "now_utc",
    "to_ymd",
    # Holiday catalog
    "parse_holiday_document",
    # Exceptions
    "BusinessError",
    "BusinessHoursError",
    "ConfigurationError",
    "ExternalServiceError",
    "HolidaySourceUnavailableError",
    "InfrastructureError",
    "InvalidDateError",
    "ValidationError",
]

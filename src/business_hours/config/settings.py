"""
Application configuration.

Centralizes environment variables, constants, and settings
using dataclasses for type safety and immutability.
"""

import os
from dataclasses import dataclass, field

from business_hours.core.calendar import WorkingCalendar


DEFAULT_HOLIDAYS_URL = "https://content.capta.co/Recruitment/WorkingDays.json"


@dataclass(frozen=True)
class CalendarSettings:
    """Business timezone and working windows."""

    timezone: str = field(
        default_factory=lambda: os.environ.get("BUSINESS_TIMEZONE", "America/Bogota")
    )
    open_hour: int = field(
        default_factory=lambda: int(os.environ.get("WORK_START_HOUR", 8))
    )
    lunch_start_hour: int = field(
        default_factory=lambda: int(os.environ.get("LUNCH_START_HOUR", 12))
    )
    lunch_end_hour: int = field(
        default_factory=lambda: int(os.environ.get("LUNCH_END_HOUR", 13))
    )
    close_hour: int = field(
        default_factory=lambda: int(os.environ.get("WORK_END_HOUR", 17))
    )

    def to_working_calendar(self) -> WorkingCalendar:
        """Build the working calendar used by the business time functions."""
        return WorkingCalendar(
            timezone=self.timezone,
            open_hour=self.open_hour,
            lunch_start_hour=self.lunch_start_hour,
            lunch_end_hour=self.lunch_end_hour,
            close_hour=self.close_hour,
        )


@dataclass(frozen=True)
class HolidaySourceSettings:
    """Remote holiday catalog settings."""

    url: str = field(
        default_factory=lambda: os.environ.get("HOLIDAYS_URL", DEFAULT_HOLIDAYS_URL)
    )
    timeout_seconds: float = field(
        default_factory=lambda: float(os.environ.get("HOLIDAYS_TIMEOUT_SECONDS", 10))
    )
    cache_ttl_seconds: int = field(
        default_factory=lambda: int(os.environ.get("HOLIDAYS_CACHE_TTL_SECONDS", 3600))
    )

    @property
    def is_configured(self) -> bool:
        """Check if the holiday source is configured."""
        return bool(self.url)


@dataclass(frozen=True)
class Settings:
    """Main application settings."""

    calendar: CalendarSettings = field(default_factory=CalendarSettings)
    holidays: HolidaySourceSettings = field(default_factory=HolidaySourceSettings)
    port: int = field(default_factory=lambda: int(os.environ.get("PORT", 8080)))
    debug: bool = field(default_factory=lambda: os.environ.get("DEBUG", "false").lower() == "true")
    log_level: str = field(default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO").upper())


# Singleton settings instance
settings = Settings()

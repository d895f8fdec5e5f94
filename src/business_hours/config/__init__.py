"""Configuration package."""

from business_hours.config.settings import (
    CalendarSettings,
    HolidaySourceSettings,
    Settings,
    settings,
)

__all__ = [
    "CalendarSettings",
    "HolidaySourceSettings",
    "Settings",
    "settings",
]

"""
HTTP Client Package.

External service clients:
- Holiday catalog
"""

from business_hours.infrastructure.http.holidays_client import (
    get_holiday_client,
    HolidayClient,
)


__all__ = [
    "get_holiday_client",
    "HolidayClient",
]

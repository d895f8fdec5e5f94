"""
Services Layer.

Business logic orchestration:
- Holiday set retrieval and caching
- Business date computation
"""

from business_hours.services.business_date import (
    BusinessDateService,
    compute_business_date,
    parse_utc_instant,
)
from business_hours.services.holiday_provider import (
    HolidayProvider,
    get_holiday_provider,
)


__all__ = [
    "BusinessDateService",
    "compute_business_date",
    "parse_utc_instant",
    "HolidayProvider",
    "get_holiday_provider",
]

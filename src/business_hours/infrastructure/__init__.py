"""
Infrastructure Layer.

This layer contains all external dependencies and adapters:
- Logging configuration
- Metrics
- Holiday cache
- HTTP clients (holiday catalog)
"""

from business_hours.infrastructure.holiday_cache import (
    HolidayCache,
    HolidayCacheEntry,
)
from business_hours.infrastructure.logging import (
    get_logger,
    log_duration,
    log_request_context,
    logger,
    StructuredLogger,
)


__all__ = [
    "HolidayCache",
    "HolidayCacheEntry",
    "get_logger",
    "log_duration",
    "log_request_context",
    "logger",
    "StructuredLogger",
]

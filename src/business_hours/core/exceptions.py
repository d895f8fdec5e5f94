"""
Custom exceptions for the business-hours service.

Provides a hierarchy of business and infrastructure exceptions
for proper error handling and HTTP status code mapping.
"""

from typing import Any, Optional


class BusinessHoursError(Exception):
    """Base exception for all business-hours errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


# =============================================================================
# Business Errors (4xx)
# =============================================================================

class BusinessError(BusinessHoursError):
    """Base exception for business logic errors (typically 4xx)."""
    pass


class InvalidDateError(BusinessError):
    """Raised when a start instant cannot be parsed as an ISO-8601 instant."""

    def __init__(self, value: Any):
        super().__init__(
            f"Invalid ISO-8601 UTC instant: {value!r}",
            {"value": value}
        )
        self.value = value


class ValidationError(BusinessError):
    """Raised when request validation fails."""

    def __init__(self, field: str, message: str):
        super().__init__(
            f"Validation error on '{field}': {message}",
            {"field": field}
        )
        self.field = field


# =============================================================================
# Infrastructure Errors (5xx)
# =============================================================================

class InfrastructureError(BusinessHoursError):
    """Base exception for infrastructure errors (typically 5xx)."""
    pass


class ConfigurationError(InfrastructureError):
    """Raised when a configuration value is missing or inconsistent."""

    def __init__(self, config_name: str, message: Optional[str] = None):
        msg = message or f"Configuration missing: {config_name}"
        super().__init__(msg, {"config_name": config_name})
        self.config_name = config_name


class ExternalServiceError(InfrastructureError):
    """Raised when an external service call fails."""

    def __init__(
        self,
        service_name: str,
        message: str,
        status_code: Optional[int] = None,
        duration_ms: Optional[int] = None,
    ):
        super().__init__(
            f"{service_name} error: {message}",
            {
                "service_name": service_name,
                "status_code": status_code,
                "duration_ms": duration_ms,
            }
        )
        self.service_name = service_name
        self.status_code = status_code
        self.duration_ms = duration_ms


class HolidaySourceUnavailableError(ExternalServiceError):
    """Raised when the holiday catalog cannot be retrieved."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        duration_ms: Optional[int] = None,
    ):
        super().__init__("HolidaySource", message, status_code, duration_ms)

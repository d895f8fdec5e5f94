"""
Flask API Routes.

Defines all HTTP endpoints for the business-hours service.
"""

from typing import Any, Dict, Tuple

from flask import Blueprint, Response, request
from pydantic import ValidationError as PydanticValidationError

from business_hours import __version__
from business_hours.api.validation import BusinessHoursQuery
from business_hours.core.business_time import format_utc_instant
from business_hours.core.exceptions import (
    BusinessError,
    HolidaySourceUnavailableError,
)
from business_hours.infrastructure.logging import get_logger
from business_hours.infrastructure.metrics import metrics_endpoint
from business_hours.services import BusinessDateService


logger = get_logger(__name__)


api_bp = Blueprint("api", __name__)


def _error_response(
    error: str,
    message: str,
    status_code: int,
) -> Tuple[Dict[str, Any], int]:
    """Create standardized error response."""
    return {
        "error": error,
        "message": message,
    }, status_code


def _validation_message(e: PydanticValidationError) -> str:
    """First validation error as a readable message."""
    first = e.errors()[0]
    message = first.get("msg", "invalid value")
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"'{location}': {message}" if location else message


# ============================================================================
# Health Check
# ============================================================================

@api_bp.route("/health", methods=["GET"])
def health_check() -> Tuple[Dict[str, Any], int]:
    """
    Health check endpoint.

    Returns:
        Health status response.
    """
    return {
        "status": "healthy",
        "service": "business-hours",
        "version": __version__,
    }, 200


@api_bp.route("/", methods=["GET"])
def root() -> Tuple[Dict[str, Any], int]:
    """Root endpoint, same payload as /health."""
    return health_check()


@api_bp.route("/metrics", methods=["GET"])
def metrics() -> Response:
    """Prometheus metrics endpoint."""
    return metrics_endpoint()


# ============================================================================
# Business Hours
# ============================================================================

@api_bp.route("/api/business-hours", methods=["GET"])
def business_hours() -> Tuple[Dict[str, Any], int]:
    """
    Add business days and hours to a start instant.

    Query parameters:
        days: Business days to add (integer >= 0).
        hours: Business hours to add (integer >= 0).
        date: ISO-8601 UTC start instant ending in 'Z' (defaults to now).

    At least one of days or hours is required.

    Returns:
        ``{"date": "<UTC instant>"}`` on success.
    """
    try:
        query = BusinessHoursQuery.model_validate(request.args.to_dict())
    except PydanticValidationError as e:
        message = _validation_message(e)
        logger.warning(
            f"Invalid business-hours query: {message}",
            extra={"extra_fields": {"query": request.args.to_dict()}}
        )
        return _error_response("InvalidParameters", message, 400)

    try:
        service = BusinessDateService()
        result = service.compute_business_date(
            start_utc=query.date,
            days=query.days or 0,
            hours=query.hours or 0,
        )

    except BusinessError as e:
        logger.warning(
            f"Business error: {e.message}",
            extra={"extra_fields": {
                "error_type": type(e).__name__,
                **e.details,
            }}
        )
        return _error_response("InvalidParameters", e.message, 400)

    except HolidaySourceUnavailableError as e:
        logger.error(
            f"Holiday catalog unavailable: {e.message}",
            extra={"extra_fields": {
                "error_type": type(e).__name__,
                "status_code": e.status_code,
            }}
        )
        return _error_response(
            "ServiceUnavailable",
            "The holiday catalog could not be retrieved.",
            503,
        )

    except Exception as e:
        logger.exception(
            f"Unexpected error computing business date: {e}",
            extra={"extra_fields": {"error_type": type(e).__name__}}
        )
        return _error_response("InternalError", "Internal error", 500)

    return {"date": format_utc_instant(result)}, 200

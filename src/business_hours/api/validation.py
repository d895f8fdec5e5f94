"""
API Request Validation.

Uses Pydantic for query parameter validation.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class BusinessHoursQuery(BaseModel):
    """Query parameters for /api/business-hours."""

    days: Optional[int] = Field(
        default=None,
        ge=0,
        description="Business days to add",
    )
    hours: Optional[int] = Field(
        default=None,
        ge=0,
        description="Business hours to add",
    )
    date: Optional[str] = Field(
        default=None,
        description="ISO-8601 UTC start instant ending in 'Z'; defaults to now",
    )

    @field_validator("days", "hours", mode="before")
    @classmethod
    def blank_as_missing(cls, v: Any) -> Any:
        """Treat an empty query value as absent."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: Optional[str]) -> Optional[str]:
        """Require the UTC designator."""
        if v is None:
            return v
        if not v.endswith("Z"):
            raise ValueError("must be an ISO 8601 UTC instant ending in 'Z'")
        return v

    @model_validator(mode="after")
    def require_days_or_hours(self) -> "BusinessHoursQuery":
        if self.days is None and self.hours is None:
            raise ValueError("'days' or 'hours' is required")
        return self

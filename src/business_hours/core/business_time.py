"""
Business time calculation module.

Normalizes instants onto the working calendar and adds business
days and business hours to them.
Pure business logic with no external dependencies.
"""

import math
from datetime import datetime, timedelta, timezone

from business_hours.core.calendar import (
    DEFAULT_CALENDAR,
    HolidaySet,
    WorkingCalendar,
    is_working_day,
)


ONE_DAY = timedelta(days=1)


def _previous_working_day_at(
    instant: datetime,
    hour: int,
    holidays: HolidaySet,
    calendar: WorkingCalendar,
) -> datetime:
    """Step back at least one day to a working day, anchored at ``hour``."""
    current = calendar.at_hour(instant - ONE_DAY, hour)
    while not is_working_day(current, holidays, calendar):
        current = calendar.at_hour(current - ONE_DAY, hour)
    return current


def _next_working_day_at(
    instant: datetime,
    hour: int,
    holidays: HolidaySet,
    calendar: WorkingCalendar,
) -> datetime:
    """Step forward at least one day to a working day, anchored at ``hour``."""
    current = calendar.at_hour(instant + ONE_DAY, hour)
    while not is_working_day(current, holidays, calendar):
        current = current + ONE_DAY
    return current


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def normalize_backward_to_working_slot(
    instant: datetime,
    holidays: HolidaySet,
    calendar: WorkingCalendar = DEFAULT_CALENDAR,
) -> datetime:
    """
    Move an instant backward to the latest working instant at or before it.

    Rules, in order:
    - non-working date: previous working day at close
    - during lunch: lunch start, same day
    - at or after close: close, same day
    - before open: previous working day at close
    - inside a working segment: unchanged

    Args:
        instant: The instant to normalize.
        holidays: Holiday dates as ``YYYY-MM-DD`` strings.
        calendar: Working calendar.

    Returns:
        The normalized instant, in the business timezone.
    """
    local = calendar.localize(instant)

    if not is_working_day(local, holidays, calendar):
        return _previous_working_day_at(local, calendar.close_hour, holidays, calendar)

    t = local.time()

    if calendar.lunch_start_time <= t < calendar.lunch_end_time:
        return calendar.at_hour(local, calendar.lunch_start_hour)

    if t >= calendar.close_time:
        return calendar.at_hour(local, calendar.close_hour)

    if t < calendar.open_time:
        return _previous_working_day_at(local, calendar.close_hour, holidays, calendar)

    return local


def add_business_days(
    instant: datetime,
    days: int,
    holidays: HolidaySet,
    calendar: WorkingCalendar = DEFAULT_CALENDAR,
) -> datetime:
    """
    Add a number of business days to an instant.

    The time of day is preserved; only the date moves. Lunch and
    closing hours are not re-applied, so callers normalize first.

    Args:
        instant: The starting instant.
        days: Number of business days to add. Zero or less is a no-op.
        holidays: Holiday dates as ``YYYY-MM-DD`` strings.
        calendar: Working calendar.

    Returns:
        The resulting instant, in the business timezone.
    """
    current = calendar.localize(instant)
    if days <= 0:
        return current

    for _ in range(days):
        current = current + ONE_DAY
        while not is_working_day(current, holidays, calendar):
            current = current + ONE_DAY

    return current


def add_business_hours(
    instant: datetime,
    hours: float,
    holidays: HolidaySet,
    calendar: WorkingCalendar = DEFAULT_CALENDAR,
) -> datetime:
    """
    Add a (possibly fractional) number of business hours to an instant.

    Time is only consumed inside working segments; lunch, nights,
    weekends and holidays are skipped. Partial segments advance the
    clock by whole minutes, rounded to the nearest minute.

    Args:
        instant: The starting instant.
        hours: Number of business hours to add. Zero or less is a no-op.
        holidays: Holiday dates as ``YYYY-MM-DD`` strings.
        calendar: Working calendar.

    Returns:
        The resulting instant, in the business timezone.
    """
    current = calendar.localize(instant)
    if hours <= 0:
        return current

    remaining = float(hours)

    while remaining > 0:
        if not is_working_day(current, holidays, calendar):
            current = _next_working_day_at(current, calendar.open_hour, holidays, calendar)
            continue

        t = current.time()

        if t < calendar.open_time:
            current = calendar.at_hour(current, calendar.open_hour)
            continue

        if calendar.lunch_start_time <= t < calendar.lunch_end_time:
            current = calendar.at_hour(current, calendar.lunch_end_hour)
            continue

        if t >= calendar.close_time:
            current = _next_working_day_at(current, calendar.open_hour, holidays, calendar)
            continue

        if t < calendar.lunch_start_time:
            segment_end = calendar.at_hour(current, calendar.lunch_start_hour)
        else:
            segment_end = calendar.at_hour(current, calendar.close_hour)

        available = (segment_end - current).total_seconds() / 3600
        take = min(available, remaining)

        if take >= available:
            current = segment_end
        else:
            current = current + timedelta(minutes=_round_half_up(take * 60))
        remaining -= take

    return current


def to_utc(instant: datetime) -> datetime:
    """Convert an aware instant to UTC."""
    return instant.astimezone(timezone.utc)


def format_utc_instant(instant: datetime) -> str:
    """
    Serialize an instant as ISO-8601 UTC with second precision.

    Example: ``2025-10-06T14:00:00Z``.
    """
    return to_utc(instant).strftime("%Y-%m-%dT%H:%M:%SZ")

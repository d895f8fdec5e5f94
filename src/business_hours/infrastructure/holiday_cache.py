"""
Holiday Cache.

Time-to-live cache for the holiday set with single-flight refresh:
when the entry is missing or expired, concurrent callers share one
fetch instead of each hitting the remote source.
"""

import time
from dataclasses import dataclass
from threading import Event, Lock
from typing import Callable, FrozenSet, Iterable, Optional

from business_hours.infrastructure.logging import get_logger


logger = get_logger(__name__)


def epoch_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class HolidayCacheEntry:
    """A fetched holiday set and the time it was fetched."""
    fetched_at_ms: int
    holidays: FrozenSet[str]

    def is_fresh(self, now_ms: int, ttl_ms: int) -> bool:
        return now_ms - self.fetched_at_ms < ttl_ms


class _InFlightFetch:
    """Outcome of a fetch shared with the callers waiting on it."""

    def __init__(self) -> None:
        self.done = Event()
        self.holidays: Optional[FrozenSet[str]] = None
        self.error: Optional[BaseException] = None


class HolidayCache:
    """
    Holiday set cache with a time-to-live.

    The entry is replaced wholesale after each successful fetch and
    never mutated. Failed fetches leave the previous entry untouched
    and are never cached.
    """

    def __init__(
        self,
        ttl_seconds: float = 3600,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        """
        Initialize the cache.

        Args:
            ttl_seconds: How long a fetched holiday set may be reused.
            clock: Returns the current time in epoch milliseconds.
        """
        self._ttl_ms = int(ttl_seconds * 1000)
        self._clock = clock or epoch_ms
        self._entry: Optional[HolidayCacheEntry] = None
        self._in_flight: Optional[_InFlightFetch] = None
        self._lock = Lock()

    @property
    def entry(self) -> Optional[HolidayCacheEntry]:
        """Current cache entry, fresh or not."""
        return self._entry

    def get_or_fetch(self, fetch: Callable[[], Iterable[str]]) -> FrozenSet[str]:
        """
        Return the cached holiday set, fetching it when absent or expired.

        Only one fetch runs at a time. Callers arriving while a fetch is
        in flight wait for it and receive its result, or its exception.

        Args:
            fetch: Retrieves the holiday set from the source.

        Returns:
            The holiday set.
        """
        with self._lock:
            entry = self._entry
            if entry is not None and entry.is_fresh(self._clock(), self._ttl_ms):
                return entry.holidays

            in_flight = self._in_flight
            is_leader = in_flight is None
            if is_leader:
                in_flight = self._in_flight = _InFlightFetch()

        if not is_leader:
            logger.debug("Waiting for in-flight holiday fetch")
            in_flight.done.wait()
            if in_flight.error is not None:
                raise in_flight.error
            return in_flight.holidays

        fetched_at_ms = self._clock()
        try:
            holidays = frozenset(fetch())
        except BaseException as e:
            in_flight.error = e
            raise
        else:
            in_flight.holidays = holidays
            with self._lock:
                self._entry = HolidayCacheEntry(fetched_at_ms, holidays)
            logger.info(
                f"Holiday cache refreshed with {len(holidays)} dates",
                extra={"extra_fields": {"holiday_count": len(holidays)}}
            )
            return holidays
        finally:
            with self._lock:
                self._in_flight = None
            in_flight.done.set()

    def clear(self) -> None:
        """Drop the cached entry so the next lookup fetches again."""
        with self._lock:
            self._entry = None

"""
Holiday Provider.

Serves the current holiday set from the cache, refreshing it from
the remote catalog when it has expired.
"""

from typing import FrozenSet, Optional

from business_hours.config import settings
from business_hours.infrastructure.holiday_cache import HolidayCache
from business_hours.infrastructure.http import HolidayClient, get_holiday_client


class HolidayProvider:
    """
    Source of the current holiday set.

    Responsible for:
    - Reusing the cached set while it is fresh
    - Fetching and caching a new set once it expires
    - Propagating catalog failures (no stale fallback)
    """

    def __init__(
        self,
        client: Optional[HolidayClient] = None,
        cache: Optional[HolidayCache] = None,
    ) -> None:
        self._client = client or get_holiday_client()
        self._cache = cache or HolidayCache(ttl_seconds=settings.holidays.cache_ttl_seconds)

    @property
    def cache(self) -> HolidayCache:
        return self._cache

    def get_holidays(self) -> FrozenSet[str]:
        """
        Get the current holiday set.

        Returns:
            Holiday dates as ``YYYY-MM-DD`` strings; may be empty.

        Raises:
            HolidaySourceUnavailableError: If a refresh is needed and fails.
        """
        return self._cache.get_or_fetch(self._client.fetch_holidays)


# Global provider instance, shared so the cache outlives a single request
_holiday_provider: Optional[HolidayProvider] = None


def get_holiday_provider() -> HolidayProvider:
    """Get global holiday provider instance."""
    global _holiday_provider
    if _holiday_provider is None:
        _holiday_provider = HolidayProvider()
    return _holiday_provider

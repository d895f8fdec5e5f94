"""
Holiday Catalog HTTP Client.

Retrieves the published holiday catalog and parses it into a set
of ``YYYY-MM-DD`` dates.
"""

import time
from typing import Any, FrozenSet, Optional

import requests
from requests.adapters import HTTPAdapter

from business_hours.config import settings
from business_hours.core.exceptions import HolidaySourceUnavailableError
from business_hours.core.holiday_parser import parse_holiday_document
from business_hours.infrastructure.logging import get_logger, log_duration
from business_hours.infrastructure.metrics import get_metrics


logger = get_logger(__name__)


class HolidayClient:
    """
    Client for the remote holiday catalog.

    Failures are reported as HolidaySourceUnavailableError and are
    not retried: callers decide how to surface them.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Initialize the holiday client.

        Args:
            url: Holiday catalog URL.
            timeout: Request timeout in seconds.
            session: Pre-configured HTTP session.
        """
        self._url = url or settings.holidays.url
        self._timeout = timeout or settings.holidays.timeout_seconds
        self._session = session

    @property
    def url(self) -> str:
        return self._url

    @property
    def session(self) -> requests.Session:
        """Get or create the pooled HTTP session."""
        if self._session is None:
            self._session = requests.Session()

            adapter = HTTPAdapter(
                max_retries=0,
                pool_connections=4,
                pool_maxsize=4,
            )

            self._session.mount("http://", adapter)
            self._session.mount("https://", adapter)

            self._session.headers.update({
                "Accept": "application/json",
            })

        return self._session

    def fetch_document(self) -> Any:
        """
        Download and decode the holiday catalog.

        Returns:
            Decoded JSON document.

        Raises:
            HolidaySourceUnavailableError: If the catalog cannot be retrieved.
        """
        metrics = get_metrics()
        start = time.time()

        def _duration_ms() -> int:
            return int((time.time() - start) * 1000)

        try:
            response = self.session.get(self._url, timeout=self._timeout)
            response.raise_for_status()
            document = response.json()

        except requests.exceptions.Timeout as e:
            metrics.holiday_fetches_total.inc(status="timeout")
            logger.error(
                "Holiday catalog timeout",
                extra={"extra_fields": {
                    "url": self._url,
                    "timeout": self._timeout,
                }}
            )
            raise HolidaySourceUnavailableError(
                f"timeout after {self._timeout}s", duration_ms=_duration_ms()
            ) from e

        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            metrics.holiday_fetches_total.inc(status="http_error")
            logger.error(
                f"Holiday catalog HTTP error: {status_code}",
                extra={"extra_fields": {
                    "url": self._url,
                    "status_code": status_code,
                }}
            )
            raise HolidaySourceUnavailableError(
                f"failed to fetch holidays: {status_code}",
                status_code=status_code,
                duration_ms=_duration_ms(),
            ) from e

        except ValueError as e:
            metrics.holiday_fetches_total.inc(status="invalid_json")
            logger.error(
                "Holiday catalog is not valid JSON",
                extra={"extra_fields": {"url": self._url}}
            )
            raise HolidaySourceUnavailableError(
                f"invalid JSON: {e}", duration_ms=_duration_ms()
            ) from e

        except requests.exceptions.RequestException as e:
            metrics.holiday_fetches_total.inc(status="error")
            logger.error(
                f"Holiday catalog request failed: {e}",
                extra={"extra_fields": {
                    "url": self._url,
                    "error_type": type(e).__name__,
                }}
            )
            raise HolidaySourceUnavailableError(
                f"request failed: {e}", duration_ms=_duration_ms()
            ) from e

        metrics.holiday_fetches_total.inc(status="success")
        metrics.holiday_fetch_duration_seconds.observe(time.time() - start)
        return document

    @log_duration("fetch_holidays")
    def fetch_holidays(self) -> FrozenSet[str]:
        """
        Fetch the holiday catalog and extract its dates.

        An empty result is valid and means no known holidays.

        Returns:
            Holiday dates as ``YYYY-MM-DD`` strings.

        Raises:
            HolidaySourceUnavailableError: If the catalog cannot be retrieved.
        """
        holidays = parse_holiday_document(self.fetch_document())

        if not holidays:
            logger.warning(
                "Holiday catalog contained no recognisable dates",
                extra={"extra_fields": {"url": self._url}}
            )
        else:
            logger.info(
                f"Fetched {len(holidays)} holidays",
                extra={"extra_fields": {
                    "url": self._url,
                    "holiday_count": len(holidays),
                }}
            )

        return holidays

    def close(self) -> None:
        """Close the HTTP session."""
        if self._session:
            self._session.close()
            self._session = None

    def __enter__(self) -> "HolidayClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


# Global client instance
_holiday_client: Optional[HolidayClient] = None


def get_holiday_client() -> HolidayClient:
    """Get global holiday client instance."""
    global _holiday_client
    if _holiday_client is None:
        _holiday_client = HolidayClient()
    return _holiday_client

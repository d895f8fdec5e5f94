"""
Holiday catalog parsing.

The catalog is published as JSON in several shapes. Each shape is
handled by a strategy; every strategy whose precondition matches the
document contributes dates, and the contributions are merged.
"""

from typing import Any, FrozenSet, Iterable, Iterator, List, Optional, Set, Tuple


DATE_FIELDS: Tuple[str, ...] = ("date", "fecha")


def _date_part(value: str) -> Optional[str]:
    """Keep only the portion before the first ``T``."""
    date_part = value.split("T", 1)[0].strip()
    return date_part or None


def _dates_from_strings(items: List[Any]) -> Iterator[str]:
    for item in items:
        if isinstance(item, str):
            date_part = _date_part(item)
            if date_part:
                yield date_part


def _dates_from_objects(items: List[Any]) -> Iterator[str]:
    for item in items:
        if not isinstance(item, dict):
            continue
        for field_name in DATE_FIELDS:
            value = item.get(field_name)
            if isinstance(value, str):
                date_part = _date_part(value)
                if date_part:
                    yield date_part
                break


class HolidayShapeStrategy:
    """A recognised holiday document shape."""

    name = "base"

    def matches(self, document: Any) -> bool:
        raise NotImplementedError

    def extract(self, document: Any) -> Iterable[str]:
        raise NotImplementedError


class DateStringListStrategy(HolidayShapeStrategy):
    """``["2025-01-01", "2025-01-06T00:00:00", ...]``"""

    name = "date_strings"

    def matches(self, document: Any) -> bool:
        return isinstance(document, list)

    def extract(self, document: Any) -> Iterable[str]:
        return _dates_from_strings(document)


class DateObjectListStrategy(HolidayShapeStrategy):
    """``[{"date": "2025-01-01"}, {"fecha": "2025-01-06"}, ...]``"""

    name = "date_objects"

    def matches(self, document: Any) -> bool:
        return isinstance(document, list)

    def extract(self, document: Any) -> Iterable[str]:
        return _dates_from_objects(document)


class NestedListsStrategy(HolidayShapeStrategy):
    """``{"holidays": [...], "extra": [...]}`` with list values of either item shape."""

    name = "nested_lists"

    def matches(self, document: Any) -> bool:
        return isinstance(document, dict)

    def extract(self, document: Any) -> Iterable[str]:
        for value in document.values():
            if isinstance(value, list):
                yield from _dates_from_strings(value)
                yield from _dates_from_objects(value)


DEFAULT_STRATEGIES: Tuple[HolidayShapeStrategy, ...] = (
    DateStringListStrategy(),
    DateObjectListStrategy(),
    NestedListsStrategy(),
)


def parse_holiday_document(
    document: Any,
    strategies: Iterable[HolidayShapeStrategy] = DEFAULT_STRATEGIES,
) -> FrozenSet[str]:
    """
    Extract holiday dates from a decoded JSON document.

    Unrecognised items are skipped. A document with no recognisable
    dates yields an empty set, which is a valid result.

    Args:
        document: Decoded JSON (list, dict or anything else).
        strategies: Shape strategies, applied in order.

    Returns:
        Holiday dates as ``YYYY-MM-DD`` strings.
    """
    holidays: Set[str] = set()
    for strategy in strategies:
        if strategy.matches(document):
            holidays.update(strategy.extract(document))
    return frozenset(holidays)

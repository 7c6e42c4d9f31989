"""
Calendar helpers shared by the report store and the metrics engine.
"""
from datetime import date, timedelta
from typing import Iterable, Optional, TypeVar

T = TypeVar("T")


def in_range(day: date, start: Optional[date], end: Optional[date]) -> bool:
    """
    Check whether a date lies in an inclusive ``[start, end]`` range.

    A missing bound is open. An inverted range contains nothing.
    """
    if start is not None and day < start:
        return False
    if end is not None and day > end:
        return False
    return True


def last_n_days(today: date, days: int) -> list[date]:
    """The ``days`` calendar days ending at ``today``, oldest first."""
    return [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]


def weekday_label(day: date) -> str:
    """Short weekday name, e.g. ``Mon``."""
    return day.strftime("%a")


def group_by_day(items: Iterable[T], key) -> dict[date, list[T]]:
    grouped: dict[date, list[T]] = {}
    for item in items:
        grouped.setdefault(key(item), []).append(item)
    return grouped

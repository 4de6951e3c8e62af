"""Calendar period helpers shared by the time-based analyses."""

from __future__ import annotations

from datetime import date
from enum import Enum


class PeriodGranularity(str, Enum):
    """Supported time granularities for sales aggregations."""

    MONTH = "month"
    YEAR = "year"


def truncate_to_period(value: date, granularity: PeriodGranularity) -> date:
    """Return the first day of the period containing ``value``.

    Examples
    --------
    >>> truncate_to_period(date(2013, 7, 19), PeriodGranularity.MONTH)
    datetime.date(2013, 7, 1)
    >>> truncate_to_period(date(2013, 7, 19), PeriodGranularity.YEAR)
    datetime.date(2013, 1, 1)
    """

    if granularity is PeriodGranularity.MONTH:
        return date(value.year, value.month, 1)
    if granularity is PeriodGranularity.YEAR:
        return date(value.year, 1, 1)
    raise ValueError(f"Unsupported granularity: {granularity}")  # pragma: no cover


def months_between(start: date, end: date) -> int:
    """Number of calendar-month boundaries crossed from ``start`` to ``end``.

    Only the (year, month) pair of each date is used, so 2021-01-31 to
    2021-02-01 is one month and 2021-01-01 to 2021-01-31 is zero.

    Examples
    --------
    >>> months_between(date(2020, 12, 31), date(2022, 1, 1))
    13
    """

    return (end.year - start.year) * 12 + (end.month - start.month)

"""Cumulative analysis: running totals over period sales.

Equivalent to ``SUM(total_sales) OVER (ORDER BY order_date)`` and
``AVG(avg_price) OVER (ORDER BY order_date)`` over the monthly aggregates,
computed in one ordered pass with an accumulator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Mapping, Sequence

from warehouse_analytics.analyses.trends import PeriodSales, sales_over_time
from warehouse_analytics.foundation.aggregates import add_nullable
from warehouse_analytics.foundation.periods import PeriodGranularity
from warehouse_analytics.foundation.records import SalesRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunningTotal:
    """One period of the cumulative view.

    Attributes
    ----------
    period_start:
        First day of the period
    total_sales:
        Sales within this period alone
    running_total_sales:
        Sum of ``total_sales`` over this and every earlier period
    average_price:
        Mean unit price within this period
    moving_average_price:
        Mean of ``average_price`` over this and every earlier period that
        had a price; ``None`` until the first priced period
    """

    period_start: date
    total_sales: Decimal | None
    running_total_sales: Decimal | None
    average_price: Decimal | None = None
    moving_average_price: Decimal | None = None


def calculate_running_totals(period_sales: Sequence[PeriodSales]) -> list[RunningTotal]:
    """Compute running totals over period aggregates.

    Parameters
    ----------
    period_sales:
        Output of :func:`~warehouse_analytics.analyses.trends.sales_over_time`.
        Periods are sorted ascending before accumulating.

    Returns
    -------
    list[RunningTotal]
        One entry per input period, ascending.

    Raises
    ------
    ValueError
        If two entries share the same ``period_start``.

    Examples
    --------
    >>> from datetime import date
    >>> from decimal import Decimal
    >>> months = [
    ...     PeriodSales(date(2013, 1, 1), 2013, 1, Decimal("100"), 3),
    ...     PeriodSales(date(2013, 2, 1), 2013, 2, Decimal("50"), 2),
    ... ]
    >>> [r.running_total_sales for r in calculate_running_totals(months)]
    [Decimal('100'), Decimal('150')]
    """
    ordered = sorted(period_sales, key=lambda period: period.period_start)
    for previous, current in zip(ordered, ordered[1:]):
        if previous.period_start == current.period_start:
            raise ValueError(
                f"Duplicate period in running total input: {current.period_start}"
            )

    running_total: Decimal | None = None
    price_total = Decimal("0")
    price_count = 0
    results: list[RunningTotal] = []
    for period in ordered:
        running_total = add_nullable(running_total, period.total_sales)
        if period.average_price is not None:
            price_total += period.average_price
            price_count += 1
        moving_average_price = price_total / price_count if price_count else None
        results.append(
            RunningTotal(
                period_start=period.period_start,
                total_sales=period.total_sales,
                running_total_sales=running_total,
                average_price=period.average_price,
                moving_average_price=moving_average_price,
            )
        )
    return results


def running_sales_totals(
    sales: Iterable[SalesRecord | Mapping[str, Any]],
    granularity: PeriodGranularity = PeriodGranularity.MONTH,
) -> list[RunningTotal]:
    """Aggregate ``fact_sales`` per period, then accumulate."""

    periods = sales_over_time(sales, granularity)
    logger.debug(f"Computing running totals over {len(periods)} periods")
    return calculate_running_totals(periods)

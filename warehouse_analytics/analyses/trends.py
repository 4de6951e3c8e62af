"""Sales trends over time.

Aggregates the fact table by calendar month or year, answering:
- How much did we sell in each period?
- How many distinct customers bought in each period?
- How many customers placed their first order in each period?

Records without an ``order_date`` never contribute to any period.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Hashable, Iterable, Mapping

from warehouse_analytics.foundation.aggregates import add_nullable
from warehouse_analytics.foundation.periods import PeriodGranularity, truncate_to_period
from warehouse_analytics.foundation.records import SalesRecord, dated_records

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PeriodSales:
    """Sales aggregated over one calendar period.

    Attributes
    ----------
    period_start:
        First day of the period (DATETRUNC of the order date)
    year:
        Calendar year of the period
    month:
        Calendar month, or ``None`` for yearly aggregation
    total_sales:
        Sum of ``sales_amount``; ``None`` if every amount was null
    total_customers:
        Distinct non-null ``customer_key`` values seen in the period
    total_quantity:
        Sum of ``quantity``; ``None`` if no record carried a quantity
    average_price:
        Mean of the non-null unit prices in the period
    """

    period_start: date
    year: int
    month: int | None
    total_sales: Decimal | None
    total_customers: int
    total_quantity: int | None = None
    average_price: Decimal | None = None

    def __post_init__(self) -> None:
        if self.total_customers < 0:
            raise ValueError(
                f"Total customers cannot be negative: {self.total_customers}"
            )


@dataclass(frozen=True)
class PeriodAcquisition:
    """Customers acquired (first dated order) within one period."""

    period_start: date
    new_customers: int


def sales_over_time(
    sales: Iterable[SalesRecord | Mapping[str, Any]],
    granularity: PeriodGranularity = PeriodGranularity.MONTH,
) -> list[PeriodSales]:
    """Aggregate sales and distinct customers per period.

    Parameters
    ----------
    sales:
        Rows of ``fact_sales`` (records or raw mappings)
    granularity:
        ``PeriodGranularity.MONTH`` or ``PeriodGranularity.YEAR``

    Returns
    -------
    list[PeriodSales]
        One entry per period that has at least one dated record, in
        ascending period order. Periods without sales are not zero-filled.

    Examples
    --------
    >>> from datetime import date
    >>> from decimal import Decimal
    >>> rows = [
    ...     SalesRecord(date(2013, 1, 5), 1, 10, Decimal("50")),
    ...     SalesRecord(date(2013, 1, 20), 2, 11, Decimal("25")),
    ...     SalesRecord(date(2013, 3, 2), 1, 10, Decimal("40")),
    ... ]
    >>> [(p.month, p.total_sales, p.total_customers) for p in sales_over_time(rows)]
    [(1, Decimal('75'), 2), (3, Decimal('40'), 1)]
    """
    granularity = PeriodGranularity(granularity)

    buckets: dict[date, dict[str, Any]] = {}
    for record in dated_records(sales):
        period_start = truncate_to_period(record.order_date, granularity)
        bucket = buckets.setdefault(
            period_start,
            {
                "total_sales": None,
                "customers": set(),
                "total_quantity": None,
                "price_total": Decimal("0"),
                "price_count": 0,
            },
        )
        bucket["total_sales"] = add_nullable(bucket["total_sales"], record.sales_amount)
        if record.customer_key is not None:
            bucket["customers"].add(record.customer_key)
        if record.quantity is not None:
            bucket["total_quantity"] = (bucket["total_quantity"] or 0) + record.quantity
        if record.price is not None:
            bucket["price_total"] += record.price
            bucket["price_count"] += 1

    results: list[PeriodSales] = []
    for period_start in sorted(buckets):
        payload = buckets[period_start]
        average_price = None
        if payload["price_count"]:
            average_price = payload["price_total"] / payload["price_count"]
        results.append(
            PeriodSales(
                period_start=period_start,
                year=period_start.year,
                month=(
                    period_start.month
                    if granularity is PeriodGranularity.MONTH
                    else None
                ),
                total_sales=payload["total_sales"],
                total_customers=len(payload["customers"]),
                total_quantity=payload["total_quantity"],
                average_price=average_price,
            )
        )

    logger.debug(
        f"Aggregated sales into {len(results)} {granularity.value} periods"
    )
    return results


def new_customers_over_time(
    sales: Iterable[SalesRecord | Mapping[str, Any]],
    granularity: PeriodGranularity = PeriodGranularity.MONTH,
) -> list[PeriodAcquisition]:
    """Count customers by the period of their first dated order.

    Customers are identified by ``customer_key``; records without a key are
    ignored. Output is in ascending period order.
    """
    granularity = PeriodGranularity(granularity)

    first_orders: dict[Hashable, date] = {}
    for record in dated_records(sales):
        if record.customer_key is None:
            continue
        current = first_orders.get(record.customer_key)
        if current is None or record.order_date < current:
            first_orders[record.customer_key] = record.order_date

    counts: dict[date, int] = {}
    for first_order in first_orders.values():
        period_start = truncate_to_period(first_order, granularity)
        counts[period_start] = counts.get(period_start, 0) + 1

    return [
        PeriodAcquisition(period_start=period_start, new_customers=counts[period_start])
        for period_start in sorted(counts)
    ]

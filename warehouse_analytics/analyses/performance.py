"""Product performance: year-over-year and average benchmark comparison.

For every product and year, compares the year's sales against:
- the product's average yearly sales (``AVG(...) OVER (PARTITION BY product)``)
- the product's sales in its previous year with data (``LAG(...)``)

Partitions are processed as sorted sequences: group by product, sort by
year, then a single pass carries the previous value.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, Mapping, Sequence

from warehouse_analytics.foundation.aggregates import add_nullable, sql_avg
from warehouse_analytics.foundation.joins import left_join
from warehouse_analytics.foundation.records import (
    Product,
    SalesRecord,
    coerce_products,
    coerce_sales_records,
    dated_records,
)

logger = logging.getLogger(__name__)

ABOVE_AVG = "above avg"
BELOW_AVG = "below avg"
AT_AVG = "avg"

INCREASE = "increase"
DECREASE = "decrease"
NO_CHANGE = "no change"
# First year of a product has nothing to compare against
NO_PRIOR_YEAR = "no prior year"

AVG_CHANGE_LABELS = frozenset({ABOVE_AVG, BELOW_AVG, AT_AVG})
PY_CHANGE_LABELS = frozenset({INCREASE, DECREASE, NO_CHANGE, NO_PRIOR_YEAR})


@dataclass(frozen=True)
class YearlyProductSales:
    """Sales of one product in one calendar year."""

    year: int
    product_name: str | None
    current_sales: Decimal | None


@dataclass(frozen=True)
class ProductPerformance:
    """Year-over-year and benchmark comparison for one product-year.

    Attributes
    ----------
    year:
        Calendar year
    product_name:
        Product name (``None`` for sales without a matching product)
    current_sales:
        Sales of the product in ``year``
    avg_sales:
        Mean of ``current_sales`` over all years of the product
    diff_avg:
        ``current_sales - avg_sales``
    avg_change:
        "above avg", "below avg" or "avg"
    py_sales:
        Sales in the previous year present for the product
    diff_py:
        ``current_sales - py_sales``
    py_change:
        "increase", "decrease", "no change", or "no prior year" for the
        product's first year
    """

    year: int
    product_name: str | None
    current_sales: Decimal | None
    avg_sales: Decimal | None
    diff_avg: Decimal | None
    avg_change: str | None
    py_sales: Decimal | None
    diff_py: Decimal | None
    py_change: str | None

    def __post_init__(self) -> None:
        if self.avg_change is not None and self.avg_change not in AVG_CHANGE_LABELS:
            raise ValueError(f"Unknown avg_change label: {self.avg_change}")
        if self.py_change is not None and self.py_change not in PY_CHANGE_LABELS:
            raise ValueError(f"Unknown py_change label: {self.py_change}")


@dataclass(frozen=True)
class ProductRanking:
    """Position of a product in the sales ranking."""

    rank: int
    product_name: str | None
    total_sales: Decimal | None


def _difference(current: Decimal | None, other: Decimal | None) -> Decimal | None:
    if current is None or other is None:
        return None
    return current - other


def classify_avg_change(diff_avg: Decimal | None) -> str | None:
    """Label a difference from the product average."""

    if diff_avg is None:
        return None
    if diff_avg > 0:
        return ABOVE_AVG
    if diff_avg < 0:
        return BELOW_AVG
    return AT_AVG


def classify_py_change(py_sales: Decimal | None, diff_py: Decimal | None) -> str | None:
    """Label a difference from the previous year."""

    if py_sales is None:
        return NO_PRIOR_YEAR
    if diff_py is None:
        return None
    if diff_py > 0:
        return INCREASE
    if diff_py < 0:
        return DECREASE
    return NO_CHANGE


def _name_sort_key(name: str | None) -> tuple[bool, str]:
    # NULL names sort first, as in an ascending SQL Server ORDER BY
    return (name is not None, name or "")


def build_yearly_product_sales(
    sales: Iterable[SalesRecord | Mapping[str, Any]],
    products: Iterable[Product | Mapping[str, Any]],
) -> list[YearlyProductSales]:
    """Sum sales per (year, product_name).

    ``fact_sales`` is left-joined to ``dim_products`` on ``product_key``, so
    sales without a matching product are kept under ``product_name=None``.
    Records without an ``order_date`` are excluded.
    """
    records = dated_records(sales)
    catalogue = coerce_products(products)

    totals: dict[tuple[int, str | None], Decimal | None] = {}
    unmatched = 0
    for record, product in left_join(
        records,
        catalogue,
        lambda row: row.product_key,
        lambda row: row.product_key,
    ):
        if product is None:
            unmatched += 1
        key = (record.order_date.year, product.product_name if product else None)
        totals[key] = add_nullable(totals.get(key), record.sales_amount)

    if unmatched:
        logger.debug(f"{unmatched} sales records had no matching product")

    return [
        YearlyProductSales(year=year, product_name=name, current_sales=total)
        for (year, name), total in sorted(
            totals.items(), key=lambda item: (_name_sort_key(item[0][1]), item[0][0])
        )
    ]


def analyze_product_performance(
    yearly_sales: Sequence[YearlyProductSales],
) -> list[ProductPerformance]:
    """Compare each product-year against the product's average and prior year.

    Parameters
    ----------
    yearly_sales:
        One entry per (product, year); see :func:`build_yearly_product_sales`

    Returns
    -------
    list[ProductPerformance]
        Ordered by product name then year ascending.

    Examples
    --------
    >>> from decimal import Decimal
    >>> rows = [
    ...     YearlyProductSales(2021, "Bike", Decimal("100")),
    ...     YearlyProductSales(2022, "Bike", Decimal("150")),
    ...     YearlyProductSales(2023, "Bike", Decimal("120")),
    ... ]
    >>> [(r.year, r.py_sales, r.py_change) for r in analyze_product_performance(rows)]
    [(2021, None, 'no prior year'), (2022, Decimal('100'), 'increase'), (2023, Decimal('150'), 'decrease')]
    """
    partitions: dict[str | None, list[YearlyProductSales]] = {}
    for row in yearly_sales:
        partitions.setdefault(row.product_name, []).append(row)

    results: list[ProductPerformance] = []
    for name in sorted(partitions, key=_name_sort_key):
        rows = sorted(partitions[name], key=lambda row: row.year)
        avg_sales = sql_avg(row.current_sales for row in rows)

        previous: YearlyProductSales | None = None
        for row in rows:
            diff_avg = _difference(row.current_sales, avg_sales)
            py_sales = previous.current_sales if previous is not None else None
            diff_py = _difference(row.current_sales, py_sales)
            if previous is not None and py_sales is None:
                # Prior year exists but its total was NULL
                py_change = None
            else:
                py_change = classify_py_change(py_sales, diff_py)
            results.append(
                ProductPerformance(
                    year=row.year,
                    product_name=row.product_name,
                    current_sales=row.current_sales,
                    avg_sales=avg_sales,
                    diff_avg=diff_avg,
                    avg_change=classify_avg_change(diff_avg),
                    py_sales=py_sales,
                    diff_py=diff_py,
                    py_change=py_change,
                )
            )
            previous = row

    return results


def product_performance(
    sales: Iterable[SalesRecord | Mapping[str, Any]],
    products: Iterable[Product | Mapping[str, Any]],
) -> list[ProductPerformance]:
    """Yearly product sales followed by the year-over-year comparison."""

    return analyze_product_performance(build_yearly_product_sales(sales, products))


def top_products_by_sales(
    sales: Iterable[SalesRecord | Mapping[str, Any]],
    products: Iterable[Product | Mapping[str, Any]],
    n: int = 5,
) -> list[ProductRanking]:
    """Rank products by total sales across all dates.

    Ties on sales are broken by product name and every row gets its own
    rank, so tied products still receive consecutive ranks.
    Products whose total is ``None`` rank last.

    Raises
    ------
    ValueError
        If ``n`` is not positive.
    """
    if n <= 0:
        raise ValueError(f"n must be positive: {n}")

    totals: dict[str | None, Decimal | None] = {}
    for record, product in left_join(
        coerce_sales_records(sales),
        coerce_products(products),
        lambda row: row.product_key,
        lambda row: row.product_key,
    ):
        name = product.product_name if product else None
        totals[name] = add_nullable(totals.get(name), record.sales_amount)

    ordered = sorted(
        totals.items(),
        key=lambda item: (
            item[1] is None,
            -(item[1] or Decimal("0")),
            _name_sort_key(item[0]),
        ),
    )
    return [
        ProductRanking(rank=position, product_name=name, total_sales=total)
        for position, (name, total) in enumerate(ordered[:n], start=1)
    ]

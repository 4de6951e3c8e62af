"""Part-to-whole analysis: category contribution to overall sales."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, Mapping

from warehouse_analytics.config import PERCENTAGE_PRECISION, PERCENTAGE_SUFFIX
from warehouse_analytics.foundation.aggregates import add_nullable, sql_sum
from warehouse_analytics.foundation.joins import left_join
from warehouse_analytics.foundation.records import (
    Product,
    SalesRecord,
    coerce_products,
    coerce_sales_records,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategoryContribution:
    """Share of overall sales contributed by one product category.

    Attributes
    ----------
    category:
        Product category; ``None`` collects sales whose product is unknown
        or has no category
    total_sales:
        Sum of sales in the category
    overall_sales:
        Sum of sales across every category (same value on every row)
    percentage:
        ``total_sales / overall_sales * 100`` rounded to 2 decimal places,
        or ``None`` when ``overall_sales`` is zero or null
    percentage_of_total:
        ``percentage`` rendered as text with a ``" %"`` suffix, e.g. "30 %"
    """

    category: str | None
    total_sales: Decimal | None
    overall_sales: Decimal | None
    percentage: Decimal | None
    percentage_of_total: str | None


def calculate_percentage(
    part: Decimal | None, whole: Decimal | None
) -> Decimal | None:
    """Percentage of ``whole`` represented by ``part``, 2 decimal places.

    Returns ``None`` instead of dividing by zero.

    >>> calculate_percentage(Decimal("1"), Decimal("3"))
    Decimal('33.33')
    """

    if part is None or whole is None or whole == 0:
        return None
    return (part / whole * 100).quantize(PERCENTAGE_PRECISION, rounding=ROUND_HALF_UP)


def format_percentage(value: Decimal | None) -> str | None:
    """Render a percentage without trailing zeros plus the ``" %"`` suffix.

    >>> format_percentage(Decimal("30.00"))
    '30 %'
    >>> format_percentage(Decimal("12.50"))
    '12.5 %'
    """

    if value is None:
        return None
    text = format(value.normalize(), "f")
    if text == "-0":
        text = "0"
    return f"{text}{PERCENTAGE_SUFFIX}"


def calculate_category_contribution(
    sales: Iterable[SalesRecord | Mapping[str, Any]],
    products: Iterable[Product | Mapping[str, Any]],
) -> list[CategoryContribution]:
    """Compute each category's share of overall sales.

    ``fact_sales`` drives a left join to ``dim_products`` on ``product_key``:
    every sale is counted, those without a matching product under
    ``category=None``. Products that never sold do not appear.

    Returns
    -------
    list[CategoryContribution]
        Ordered by ``total_sales`` descending (null totals last), then by
        category name.

    Examples
    --------
    >>> from decimal import Decimal
    >>> sales = [
    ...     SalesRecord(None, 1, 10, Decimal("300")),
    ...     SalesRecord(None, 2, 10, Decimal("700")),
    ... ]
    >>> products = [
    ...     Product(1, "P1", "Helmet", "Accessories", Decimal("10")),
    ...     Product(2, "P2", "Road Bike", "Bikes", Decimal("500")),
    ... ]
    >>> [(c.category, c.percentage_of_total)
    ...  for c in calculate_category_contribution(sales, products)]
    [('Bikes', '70 %'), ('Accessories', '30 %')]
    """
    totals: dict[str | None, Decimal | None] = {}
    for record, product in left_join(
        coerce_sales_records(sales),
        coerce_products(products),
        lambda row: row.product_key,
        lambda row: row.product_key,
    ):
        category = product.category if product is not None else None
        totals[category] = add_nullable(totals.get(category), record.sales_amount)

    if not totals:
        return []

    overall_sales = sql_sum(totals.values())
    if overall_sales is None or overall_sales == 0:
        logger.warning(
            f"Overall sales is {overall_sales}; category percentages reported as null"
        )

    results = []
    for category, total in totals.items():
        percentage = calculate_percentage(total, overall_sales)
        results.append(
            CategoryContribution(
                category=category,
                total_sales=total,
                overall_sales=overall_sales,
                percentage=percentage,
                percentage_of_total=format_percentage(percentage),
            )
        )

    results.sort(
        key=lambda row: (
            row.total_sales is None,
            -(row.total_sales or Decimal("0")),
            row.category is not None,
            row.category or "",
        )
    )
    return results

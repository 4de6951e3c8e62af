"""Data segmentation: products by cost range, customers by lifetime value.

Both segmentations are ordered CASE chains. Conditions are evaluated top to
bottom and the first match wins, so overlapping boundaries (a product cost
of exactly 500 fits both "100-500" and "500-1000") resolve to the earlier
branch.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Hashable, Iterable, Mapping

from warehouse_analytics.config import DEFAULT_SEGMENTATION_CONFIG, SegmentationConfig
from warehouse_analytics.foundation.aggregates import add_nullable
from warehouse_analytics.foundation.joins import inner_join
from warehouse_analytics.foundation.periods import months_between
from warehouse_analytics.foundation.records import (
    Customer,
    Product,
    SalesRecord,
    coerce_customers,
    coerce_products,
    dated_records,
)

logger = logging.getLogger(__name__)

COST_BELOW_100 = "below 100"
COST_100_500 = "100-500"
COST_500_1000 = "500-1000"
COST_ABOVE_1000 = "above-1000"
COST_RANGES = (COST_BELOW_100, COST_100_500, COST_500_1000, COST_ABOVE_1000)

SEGMENT_VIP = "vip"
SEGMENT_REGULAR = "regular"
SEGMENT_NEW = "new"
CUSTOMER_SEGMENTS = (SEGMENT_VIP, SEGMENT_REGULAR, SEGMENT_NEW)


@dataclass(frozen=True)
class CostSegment:
    """Products falling into one cost range.

    Attributes
    ----------
    cost_range:
        One of ``COST_RANGES``
    total_products:
        Number of (product_id, product_name) groups in the range that have a
        product name
    distinct_products:
        Number of distinct product names in the range
    """

    cost_range: str
    total_products: int
    distinct_products: int

    def __post_init__(self) -> None:
        if self.cost_range not in COST_RANGES:
            raise ValueError(f"Unknown cost range: {self.cost_range}")
        if self.distinct_products > self.total_products:
            raise ValueError(
                f"Distinct products ({self.distinct_products}) cannot exceed "
                f"total products ({self.total_products})"
            )


@dataclass(frozen=True)
class CustomerLifetimeProfile:
    """Lifetime summary of one customer.

    Attributes
    ----------
    customer_id:
        Natural customer identifier
    total_sales:
        Sum of the customer's sales
    first_order_date:
        Earliest dated order
    last_order_date:
        Latest dated order
    lifespan_months:
        Calendar months between the first and last order
    segment:
        "vip", "regular" or "new"
    """

    customer_id: Hashable
    total_sales: Decimal | None
    first_order_date: date
    last_order_date: date
    lifespan_months: int
    segment: str

    def __post_init__(self) -> None:
        if self.segment not in CUSTOMER_SEGMENTS:
            raise ValueError(f"Unknown customer segment: {self.segment}")
        if self.lifespan_months < 0:
            raise ValueError(
                f"Lifespan cannot be negative: {self.lifespan_months} (customer_id={self.customer_id})"
            )


@dataclass(frozen=True)
class CustomerSegment:
    """Number of distinct customers in one lifetime segment."""

    segment: str
    total_customers: int

    def __post_init__(self) -> None:
        if self.segment not in CUSTOMER_SEGMENTS:
            raise ValueError(f"Unknown customer segment: {self.segment}")
        if self.total_customers < 0:
            raise ValueError(
                f"Total customers cannot be negative: {self.total_customers}"
            )


def classify_cost(total_cost: Decimal | None) -> str:
    """Assign a cost range label.

    A null cost fails every comparison and lands in the final branch.

    >>> classify_cost(Decimal("500"))
    '100-500'
    >>> classify_cost(Decimal("500.01"))
    '500-1000'
    """

    if total_cost is not None and total_cost < 100:
        return COST_BELOW_100
    if total_cost is not None and 100 <= total_cost <= 500:
        return COST_100_500
    if total_cost is not None and 500 <= total_cost <= 1000:
        return COST_500_1000
    return COST_ABOVE_1000


def segment_products_by_cost(
    products: Iterable[Product | Mapping[str, Any]],
) -> list[CostSegment]:
    """Count products per cost range.

    Products are grouped by (``product_id``, ``product_name``) with their
    costs summed before bucketing. Output is ordered by the number of
    distinct product names, descending.

    Examples
    --------
    >>> from decimal import Decimal
    >>> catalogue = [
    ...     Product(1, "P1", "Helmet", "Accessories", Decimal("40")),
    ...     Product(2, "P2", "Road Bike", "Bikes", Decimal("500")),
    ...     Product(3, "P3", "Frame", "Components", Decimal("450")),
    ... ]
    >>> [(s.cost_range, s.distinct_products) for s in segment_products_by_cost(catalogue)]
    [('100-500', 2), ('below 100', 1)]
    """
    costs: dict[tuple[Hashable, str | None], Decimal | None] = {}
    for product in coerce_products(products):
        key = (product.product_id, product.product_name)
        costs[key] = add_nullable(costs.get(key), product.cost)

    counts: Counter[str] = Counter()
    names: dict[str, set[str]] = {}
    for (_, name), total_cost in costs.items():
        cost_range = classify_cost(total_cost)
        names.setdefault(cost_range, set())
        if name is not None:
            counts[cost_range] += 1
            names[cost_range].add(name)

    segments = [
        CostSegment(
            cost_range=cost_range,
            total_products=counts[cost_range],
            distinct_products=len(members),
        )
        for cost_range, members in names.items()
    ]
    segments.sort(
        key=lambda segment: (
            -segment.distinct_products,
            COST_RANGES.index(segment.cost_range),
        )
    )
    return segments


def classify_customer(
    lifespan_months: int,
    total_sales: Decimal | None,
    config: SegmentationConfig | None = None,
) -> str:
    """Assign a lifetime segment label.

    >>> classify_customer(13, Decimal("6000"))
    'vip'
    >>> classify_customer(13, Decimal("4000"))
    'regular'
    >>> classify_customer(5, Decimal("100000"))
    'new'
    """

    config = config or DEFAULT_SEGMENTATION_CONFIG
    long_lived = lifespan_months > config.vip_min_lifespan_months
    if long_lived and total_sales is not None and total_sales > config.vip_min_total_sales:
        return SEGMENT_VIP
    if long_lived:
        return SEGMENT_REGULAR
    return SEGMENT_NEW


def build_customer_profiles(
    sales: Iterable[SalesRecord | Mapping[str, Any]],
    customers: Iterable[Customer | Mapping[str, Any]],
    config: SegmentationConfig | None = None,
) -> list[CustomerLifetimeProfile]:
    """Summarise each customer's lifetime and assign a segment.

    ``fact_sales`` is inner-joined to ``dim_customers`` on ``customer_key``:
    sales of unknown customers and customers without sales are dropped.
    Records without an ``order_date`` are excluded, as are customers whose
    ``customer_id`` is missing. Output is ordered by ``customer_id``.
    """
    config = config or DEFAULT_SEGMENTATION_CONFIG

    buckets: dict[Hashable, dict[str, Any]] = {}
    missing_ids = 0
    for record, customer in inner_join(
        dated_records(sales),
        coerce_customers(customers),
        lambda row: row.customer_key,
        lambda row: row.customer_key,
    ):
        if customer.customer_id is None:
            missing_ids += 1
            continue
        bucket = buckets.setdefault(
            customer.customer_id,
            {
                "total_sales": None,
                "first_order_date": record.order_date,
                "last_order_date": record.order_date,
            },
        )
        bucket["total_sales"] = add_nullable(bucket["total_sales"], record.sales_amount)
        bucket["first_order_date"] = min(bucket["first_order_date"], record.order_date)
        bucket["last_order_date"] = max(bucket["last_order_date"], record.order_date)

    if missing_ids:
        logger.debug(f"Excluded {missing_ids} joined sales rows without a customer_id")

    profiles: list[CustomerLifetimeProfile] = []
    for customer_id, payload in buckets.items():
        lifespan = months_between(payload["first_order_date"], payload["last_order_date"])
        profiles.append(
            CustomerLifetimeProfile(
                customer_id=customer_id,
                total_sales=payload["total_sales"],
                first_order_date=payload["first_order_date"],
                last_order_date=payload["last_order_date"],
                lifespan_months=lifespan,
                segment=classify_customer(lifespan, payload["total_sales"], config),
            )
        )

    profiles.sort(
        key=lambda profile: (type(profile.customer_id).__name__, profile.customer_id)
    )
    return profiles


def segment_customers(
    sales: Iterable[SalesRecord | Mapping[str, Any]],
    customers: Iterable[Customer | Mapping[str, Any]],
    config: SegmentationConfig | None = None,
) -> list[CustomerSegment]:
    """Count distinct customers per lifetime segment.

    Returns
    -------
    list[CustomerSegment]
        Only segments with at least one customer, ordered by customer count
        descending.

    Examples
    --------
    >>> from datetime import date
    >>> from decimal import Decimal
    >>> sales = [
    ...     SalesRecord(date(2011, 1, 10), 1, 100, Decimal("6000")),
    ...     SalesRecord(date(2012, 2, 10), 1, 100, Decimal("10")),
    ...     SalesRecord(date(2013, 5, 1), 1, 200, Decimal("75")),
    ... ]
    >>> customers = [Customer(100, "AW-100"), Customer(200, "AW-200")]
    >>> [(s.segment, s.total_customers) for s in segment_customers(sales, customers)]
    [('vip', 1), ('new', 1)]
    """
    profiles = build_customer_profiles(sales, customers, config)
    members: dict[str, set[Hashable]] = {}
    for profile in profiles:
        members.setdefault(profile.segment, set()).add(profile.customer_id)

    segments = [
        CustomerSegment(segment=segment, total_customers=len(ids))
        for segment, ids in members.items()
    ]
    segments.sort(
        key=lambda segment: (
            -segment.total_customers,
            CUSTOMER_SEGMENTS.index(segment.segment),
        )
    )
    return segments

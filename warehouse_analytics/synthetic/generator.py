from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
import math
import random
from typing import List, Optional, Sequence

from warehouse_analytics.foundation.records import Customer, Product, SalesRecord

DEFAULT_CATEGORIES = ("Accessories", "Bikes", "Clothing", "Components")


@dataclass(frozen=True)
class WarehouseScenario:
    """Configuration for the synthetic star-schema generator.

    Attributes
    ----------
    n_products: Number of rows in ``dim_products``.
    n_customers: Number of rows in ``dim_customers``.
    start: First possible order date.
    end: Last possible order date.
    orders_per_customer: Average number of sales lines per customer.
    mean_cost: Average product cost used to sample ``dim_products``.
    null_date_rate: Share of sales lines emitted without an ``order_date``.
    orphan_rate: Share of sales lines referencing unknown keys.
    categories: Product categories to draw from.
    seed: Optional RNG seed for reproducibility.
    """

    n_products: int = 20
    n_customers: int = 50
    start: date = date(2011, 1, 1)
    end: date = date(2013, 12, 31)
    orders_per_customer: float = 6.0
    mean_cost: float = 400.0
    null_date_rate: float = 0.0
    orphan_rate: float = 0.0
    categories: Sequence[str] = DEFAULT_CATEGORIES
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.n_products < 0 or self.n_customers < 0:
            raise ValueError("n_products and n_customers cannot be negative")
        if self.start > self.end:
            raise ValueError("start date must be <= end date")
        if not 0 <= self.null_date_rate <= 1:
            raise ValueError(f"null_date_rate must be in [0, 1]: {self.null_date_rate}")
        if not 0 <= self.orphan_rate <= 1:
            raise ValueError(f"orphan_rate must be in [0, 1]: {self.orphan_rate}")
        if not self.categories:
            raise ValueError("categories cannot be empty")


@dataclass(frozen=True)
class SyntheticWarehouse:
    sales: List[SalesRecord]
    products: List[Product]
    customers: List[Customer]


def _sample_amount(rng: random.Random, mean: float, variability: float = 0.6) -> Decimal:
    # Log-normal so amounts stay positive
    sigma = variability
    mu = math.log(max(mean, 0.01)) - 0.5 * sigma * sigma
    value = math.exp(rng.normalvariate(mu, sigma))
    return Decimal(str(round(max(value, 1.0), 0)))


def generate_products(
    n: int,
    *,
    categories: Sequence[str] = DEFAULT_CATEGORIES,
    mean_cost: float = 400.0,
    seed: Optional[int] = None,
) -> List[Product]:
    """Generate ``n`` products with log-normally distributed costs."""

    if n <= 0:
        return []
    rng = random.Random(seed)
    products: List[Product] = []
    for i in range(n):
        products.append(
            Product(
                product_key=i + 1,
                product_id=f"PRD-{i + 1:04d}",
                product_name=f"Product {i + 1}",
                category=rng.choice(list(categories)),
                cost=_sample_amount(rng, mean_cost),
            )
        )
    return products


def generate_customers(n: int, *, seed: Optional[int] = None) -> List[Customer]:
    """Generate ``n`` customers with a couple of demographic attributes."""

    if n <= 0:
        return []
    rng = random.Random(seed)
    countries = ("Australia", "Canada", "France", "Germany", "United States")
    customers: List[Customer] = []
    for i in range(n):
        customers.append(
            Customer(
                customer_key=i + 1,
                customer_id=f"AW{i + 1:08d}",
                attributes={
                    "country": rng.choice(countries),
                    "gender": rng.choice(("Male", "Female")),
                },
            )
        )
    return customers


def generate_warehouse(scenario: Optional[WarehouseScenario] = None) -> SyntheticWarehouse:
    """Generate a small fact table plus its two dimensions.

    Each customer gets a Poisson-like number of sales lines spread uniformly
    between ``scenario.start`` and ``scenario.end``. Sales amounts are the
    product cost times a margin factor.
    """

    scenario = scenario or WarehouseScenario()
    rng = random.Random(scenario.seed)
    products = generate_products(
        scenario.n_products,
        categories=scenario.categories,
        mean_cost=scenario.mean_cost,
        seed=rng.randrange(2**32),
    )
    customers = generate_customers(scenario.n_customers, seed=rng.randrange(2**32))

    total_days = (scenario.end - scenario.start).days + 1
    sales: List[SalesRecord] = []
    if not products:
        return SyntheticWarehouse(sales=sales, products=products, customers=customers)

    for customer in customers:
        lam = max(0.0, scenario.orders_per_customer)
        # Knuth's algorithm for a Poisson draw
        limit = math.exp(-lam)
        k = 0
        p = 1.0
        while p > limit:
            k += 1
            p *= rng.random()
        for _ in range(max(0, k - 1)):
            product = rng.choice(products)
            quantity = 1 + rng.randrange(3)
            price = (product.cost * Decimal(str(round(rng.uniform(1.1, 1.6), 2)))).quantize(
                Decimal("1")
            )
            order_date: Optional[date] = scenario.start + timedelta(
                days=rng.randrange(total_days)
            )
            if rng.random() < scenario.null_date_rate:
                order_date = None
            product_key = product.product_key
            customer_key = customer.customer_key
            if rng.random() < scenario.orphan_rate:
                product_key = -product_key
                customer_key = -customer_key
            sales.append(
                SalesRecord(
                    order_date=order_date,
                    product_key=product_key,
                    customer_key=customer_key,
                    sales_amount=price * quantity,
                    quantity=quantity,
                    price=price,
                )
            )

    return SyntheticWarehouse(sales=sales, products=products, customers=customers)

"""Foundational building blocks for the warehouse analyses.

This package exposes the typed warehouse rows, the calendar period helpers
and the join/aggregate primitives shared by every analysis.
"""

from .aggregates import add_nullable, sql_avg, sql_sum
from .joins import index_by, inner_join, left_join
from .periods import PeriodGranularity, months_between, truncate_to_period
from .records import (
    Customer,
    Product,
    SalesRecord,
    coerce_customers,
    coerce_products,
    coerce_sales_records,
    dated_records,
)

__all__ = [
    "Customer",
    "Product",
    "SalesRecord",
    "coerce_customers",
    "coerce_products",
    "coerce_sales_records",
    "dated_records",
    "PeriodGranularity",
    "months_between",
    "truncate_to_period",
    "index_by",
    "inner_join",
    "left_join",
    "add_nullable",
    "sql_avg",
    "sql_sum",
]

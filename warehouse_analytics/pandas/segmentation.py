"""Pandas DataFrame adapters for product and customer segmentation."""

from typing import Optional, Sequence

import pandas as pd  # type: ignore

from warehouse_analytics.analyses.segmentation import (
    CostSegment,
    CustomerLifetimeProfile,
    CustomerSegment,
    build_customer_profiles,
    segment_customers,
    segment_products_by_cost,
)
from warehouse_analytics.config import SegmentationConfig
from .tables import (
    dataframe_to_customers,
    dataframe_to_products,
    dataframe_to_sales_records,
)
from ._utils import results_to_dataframe

COST_SEGMENT_COLUMNS = ["cost_range", "total_products", "distinct_products"]
CUSTOMER_PROFILE_COLUMNS = [
    "customer_id",
    "total_sales",
    "first_order_date",
    "last_order_date",
    "lifespan_months",
    "segment",
]
CUSTOMER_SEGMENT_COLUMNS = ["segment", "total_customers"]


def cost_segments_to_dataframe(rows: Sequence[CostSegment]) -> pd.DataFrame:
    """Convert CostSegment results to a DataFrame."""
    return results_to_dataframe(rows, COST_SEGMENT_COLUMNS)


def customer_profiles_to_dataframe(
    rows: Sequence[CustomerLifetimeProfile],
) -> pd.DataFrame:
    """Convert CustomerLifetimeProfile results to a DataFrame."""
    return results_to_dataframe(rows, CUSTOMER_PROFILE_COLUMNS)


def customer_segments_to_dataframe(rows: Sequence[CustomerSegment]) -> pd.DataFrame:
    """Convert CustomerSegment results to a DataFrame."""
    return results_to_dataframe(rows, CUSTOMER_SEGMENT_COLUMNS)


def segment_products_by_cost_df(products_df: pd.DataFrame) -> pd.DataFrame:
    """Product counts per cost range from a ``dim_products`` DataFrame."""
    products = dataframe_to_products(products_df)
    return cost_segments_to_dataframe(segment_products_by_cost(products))


def customer_profiles_df(
    sales_df: pd.DataFrame,
    customers_df: pd.DataFrame,
    config: Optional[SegmentationConfig] = None,
) -> pd.DataFrame:
    """Per-customer lifetime profiles from DataFrames.

    Example:
        >>> profiles = customer_profiles_df(sales_df, customers_df)
        >>> profiles[profiles['segment'] == 'vip'].to_csv('vip.csv', index=False)
    """
    sales = dataframe_to_sales_records(sales_df)
    customers = dataframe_to_customers(customers_df)
    return customer_profiles_to_dataframe(
        build_customer_profiles(sales, customers, config)
    )


def segment_customers_df(
    sales_df: pd.DataFrame,
    customers_df: pd.DataFrame,
    config: Optional[SegmentationConfig] = None,
) -> pd.DataFrame:
    """Customer counts per lifetime segment from DataFrames."""
    sales = dataframe_to_sales_records(sales_df)
    customers = dataframe_to_customers(customers_df)
    return customer_segments_to_dataframe(segment_customers(sales, customers, config))

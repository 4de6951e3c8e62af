"""Pandas DataFrame adapters for the warehouse analyses."""

from .tables import (
    dataframe_to_sales_records,
    dataframe_to_products,
    dataframe_to_customers,
)
from .trends import (
    period_sales_to_dataframe,
    acquisitions_to_dataframe,
    running_totals_to_dataframe,
    sales_over_time_df,
    new_customers_over_time_df,
    running_sales_totals_df,
)
from .performance import (
    product_performance_to_dataframe,
    product_ranking_to_dataframe,
    category_contribution_to_dataframe,
    product_performance_df,
    top_products_by_sales_df,
    category_contribution_df,
)
from .segmentation import (
    cost_segments_to_dataframe,
    customer_profiles_to_dataframe,
    customer_segments_to_dataframe,
    segment_products_by_cost_df,
    customer_profiles_df,
    segment_customers_df,
)

__all__ = [
    # Input tables
    "dataframe_to_sales_records",
    "dataframe_to_products",
    "dataframe_to_customers",
    # Trends and running totals
    "period_sales_to_dataframe",
    "acquisitions_to_dataframe",
    "running_totals_to_dataframe",
    "sales_over_time_df",
    "new_customers_over_time_df",
    "running_sales_totals_df",
    # Product performance and category share
    "product_performance_to_dataframe",
    "product_ranking_to_dataframe",
    "category_contribution_to_dataframe",
    "product_performance_df",
    "top_products_by_sales_df",
    "category_contribution_df",
    # Segmentation
    "cost_segments_to_dataframe",
    "customer_profiles_to_dataframe",
    "customer_segments_to_dataframe",
    "segment_products_by_cost_df",
    "customer_profiles_df",
    "segment_customers_df",
]

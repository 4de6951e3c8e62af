"""Pandas DataFrame adapters for product performance and category share."""

from typing import Sequence

import pandas as pd  # type: ignore

from warehouse_analytics.analyses.contribution import (
    CategoryContribution,
    calculate_category_contribution,
)
from warehouse_analytics.analyses.performance import (
    ProductPerformance,
    ProductRanking,
    product_performance,
    top_products_by_sales,
)
from .tables import dataframe_to_products, dataframe_to_sales_records
from ._utils import results_to_dataframe

PRODUCT_PERFORMANCE_COLUMNS = [
    "year",
    "product_name",
    "current_sales",
    "avg_sales",
    "diff_avg",
    "avg_change",
    "py_sales",
    "diff_py",
    "py_change",
]
PRODUCT_RANKING_COLUMNS = ["rank", "product_name", "total_sales"]
CATEGORY_CONTRIBUTION_COLUMNS = [
    "category",
    "total_sales",
    "overall_sales",
    "percentage",
    "percentage_of_total",
]


def product_performance_to_dataframe(rows: Sequence[ProductPerformance]) -> pd.DataFrame:
    """Convert ProductPerformance results to a DataFrame."""
    return results_to_dataframe(rows, PRODUCT_PERFORMANCE_COLUMNS)


def product_ranking_to_dataframe(rows: Sequence[ProductRanking]) -> pd.DataFrame:
    """Convert ProductRanking results to a DataFrame."""
    return results_to_dataframe(rows, PRODUCT_RANKING_COLUMNS)


def category_contribution_to_dataframe(
    rows: Sequence[CategoryContribution],
) -> pd.DataFrame:
    """Convert CategoryContribution results to a DataFrame.

    ``percentage_of_total`` stays a string such as "30 %"; ``percentage``
    holds the numeric value.
    """
    return results_to_dataframe(rows, CATEGORY_CONTRIBUTION_COLUMNS)


def product_performance_df(
    sales_df: pd.DataFrame, products_df: pd.DataFrame
) -> pd.DataFrame:
    """Year-over-year product performance from DataFrames.

    Example:
        >>> perf = product_performance_df(sales_df, products_df)
        >>> perf[perf['py_change'] == 'decrease']
    """
    sales = dataframe_to_sales_records(sales_df)
    products = dataframe_to_products(products_df)
    return product_performance_to_dataframe(product_performance(sales, products))


def top_products_by_sales_df(
    sales_df: pd.DataFrame, products_df: pd.DataFrame, n: int = 5
) -> pd.DataFrame:
    """Top ``n`` products by total sales from DataFrames."""
    sales = dataframe_to_sales_records(sales_df)
    products = dataframe_to_products(products_df)
    return product_ranking_to_dataframe(top_products_by_sales(sales, products, n=n))


def category_contribution_df(
    sales_df: pd.DataFrame, products_df: pd.DataFrame
) -> pd.DataFrame:
    """Category share of overall sales from DataFrames."""
    sales = dataframe_to_sales_records(sales_df)
    products = dataframe_to_products(products_df)
    return category_contribution_to_dataframe(
        calculate_category_contribution(sales, products)
    )

"""Pandas DataFrame adapters for time-based analyses."""

from typing import Sequence

import pandas as pd  # type: ignore

from warehouse_analytics.analyses.cumulative import RunningTotal, running_sales_totals
from warehouse_analytics.analyses.trends import (
    PeriodAcquisition,
    PeriodSales,
    new_customers_over_time,
    sales_over_time,
)
from warehouse_analytics.foundation.periods import PeriodGranularity
from .tables import dataframe_to_sales_records
from ._utils import results_to_dataframe

PERIOD_SALES_COLUMNS = [
    "period_start",
    "year",
    "month",
    "total_sales",
    "total_customers",
    "total_quantity",
    "average_price",
]
PERIOD_ACQUISITION_COLUMNS = ["period_start", "new_customers"]
RUNNING_TOTAL_COLUMNS = [
    "period_start",
    "total_sales",
    "running_total_sales",
    "average_price",
    "moving_average_price",
]


def period_sales_to_dataframe(periods: Sequence[PeriodSales]) -> pd.DataFrame:
    """Convert PeriodSales results to a DataFrame, one row per period."""
    return results_to_dataframe(periods, PERIOD_SALES_COLUMNS)


def acquisitions_to_dataframe(periods: Sequence[PeriodAcquisition]) -> pd.DataFrame:
    """Convert PeriodAcquisition results to a DataFrame."""
    return results_to_dataframe(periods, PERIOD_ACQUISITION_COLUMNS)


def running_totals_to_dataframe(totals: Sequence[RunningTotal]) -> pd.DataFrame:
    """Convert RunningTotal results to a DataFrame."""
    return results_to_dataframe(totals, RUNNING_TOTAL_COLUMNS)


def sales_over_time_df(
    sales_df: pd.DataFrame,
    granularity: PeriodGranularity = PeriodGranularity.MONTH,
) -> pd.DataFrame:
    """Aggregate a ``fact_sales`` DataFrame per month or year.

    Example:
        >>> yearly = sales_over_time_df(sales_df, PeriodGranularity.YEAR)
        >>> yearly[['year', 'total_sales', 'total_customers']]
    """
    sales = dataframe_to_sales_records(sales_df)
    return period_sales_to_dataframe(sales_over_time(sales, granularity))


def new_customers_over_time_df(
    sales_df: pd.DataFrame,
    granularity: PeriodGranularity = PeriodGranularity.MONTH,
) -> pd.DataFrame:
    """Count first-time customers per period from a ``fact_sales`` DataFrame."""
    sales = dataframe_to_sales_records(sales_df)
    return acquisitions_to_dataframe(new_customers_over_time(sales, granularity))


def running_sales_totals_df(
    sales_df: pd.DataFrame,
    granularity: PeriodGranularity = PeriodGranularity.MONTH,
) -> pd.DataFrame:
    """Running totals of period sales from a ``fact_sales`` DataFrame."""
    sales = dataframe_to_sales_records(sales_df)
    return running_totals_to_dataframe(running_sales_totals(sales, granularity))

"""Tests for the pandas DataFrame adapters."""

from datetime import date
from decimal import Decimal

import numpy as np
import pandas as pd  # type: ignore
import pytest

from warehouse_analytics.pandas import (
    category_contribution_df,
    customer_profiles_df,
    dataframe_to_customers,
    dataframe_to_products,
    dataframe_to_sales_records,
    period_sales_to_dataframe,
    product_performance_df,
    running_sales_totals_df,
    sales_over_time_df,
    segment_customers_df,
    segment_products_by_cost_df,
    top_products_by_sales_df,
)
from warehouse_analytics.foundation.periods import PeriodGranularity


@pytest.fixture
def sales_df():
    return pd.DataFrame(
        {
            "order_date": pd.to_datetime(
                ["2021-03-05", "2022-06-10", "2023-01-20", "2022-06-25", None]
            ),
            "product_key": [1, 1, 1, 3, 3],
            "customer_key": [10, 10, 11, 11, 12],
            "sales_amount": [100.0, 150.0, 120.0, 30.0, 999.0],
        }
    )


@pytest.fixture
def products_df():
    return pd.DataFrame(
        {
            "product_key": [1, 2, 3],
            "product_id": ["BK-M100", "BK-R150", "HL-U509"],
            "product_name": ["Mountain-100", "Road-150", "Sport Helmet"],
            "category": ["Bikes", "Bikes", "Accessories"],
            "cost": [1200.0, 500.0, 35.0],
        }
    )


@pytest.fixture
def customers_df():
    return pd.DataFrame(
        {
            "customer_key": [10, 11, 12],
            "customer_id": ["AW00011000", "AW00011001", "AW00011002"],
            "country": ["Australia", "Canada", np.nan],
        }
    )


class TestInputTables:
    """Test DataFrame to record conversion."""

    def test_sales_nat_becomes_none(self, sales_df):
        records = dataframe_to_sales_records(sales_df)

        assert len(records) == 5
        assert records[0].order_date == date(2021, 3, 5)
        assert records[0].sales_amount == Decimal("100.0")
        assert records[4].order_date is None
        assert records[0].quantity is None

    def test_custom_column_names(self):
        df = pd.DataFrame(
            {
                "OrderDate": ["2013-01-05"],
                "ProductKey": [1],
                "CustomerKey": [2],
                "SalesAmount": [9.5],
            }
        )

        records = dataframe_to_sales_records(
            df,
            order_date_col="OrderDate",
            product_key_col="ProductKey",
            customer_key_col="CustomerKey",
            sales_amount_col="SalesAmount",
        )

        assert records[0].order_date == date(2013, 1, 5)
        assert records[0].product_key == 1
        assert records[0].sales_amount == Decimal("9.5")

    def test_missing_columns_raise_error(self):
        df = pd.DataFrame({"order_date": [], "product_key": []})
        with pytest.raises(ValueError, match="DataFrame missing required columns"):
            dataframe_to_sales_records(df)

    def test_empty_dataframe_returns_empty_list(self, sales_df):
        assert dataframe_to_sales_records(sales_df.iloc[0:0]) == []

    def test_products(self, products_df):
        products = dataframe_to_products(products_df)
        assert [p.product_name for p in products] == [
            "Mountain-100",
            "Road-150",
            "Sport Helmet",
        ]
        assert products[0].cost == Decimal("1200.0")

    def test_customers_keep_extra_columns(self, customers_df):
        customers = dataframe_to_customers(customers_df)

        assert customers[0].customer_id == "AW00011000"
        assert customers[0].attributes == {"country": "Australia"}
        assert customers[2].attributes == {"country": None}


class TestAnalysisDataFrames:
    """Test the DataFrame-in, DataFrame-out convenience functions."""

    def test_sales_over_time_df(self, sales_df):
        df = sales_over_time_df(sales_df, PeriodGranularity.YEAR)

        assert list(df["year"]) == [2021, 2022, 2023]
        assert list(df["total_sales"]) == [100.0, 180.0, 120.0]
        assert list(df["total_customers"]) == [1, 2, 1]

    def test_running_sales_totals_df(self, sales_df):
        df = running_sales_totals_df(sales_df)
        assert list(df["running_total_sales"]) == [100.0, 280.0, 400.0]

    def test_product_performance_df(self, sales_df, products_df):
        df = product_performance_df(sales_df, products_df)

        bikes = df[df["product_name"] == "Mountain-100"]
        assert list(bikes["year"]) == [2021, 2022, 2023]
        assert list(bikes["py_change"]) == ["no prior year", "increase", "decrease"]

    def test_top_products_by_sales_df(self, sales_df, products_df):
        df = top_products_by_sales_df(sales_df, products_df, n=1)
        assert df.iloc[0]["product_name"] == "Sport Helmet"
        assert df.iloc[0]["rank"] == 1

    def test_category_contribution_df(self, sales_df, products_df):
        df = category_contribution_df(sales_df, products_df)

        assert list(df.columns) == [
            "category",
            "total_sales",
            "overall_sales",
            "percentage",
            "percentage_of_total",
        ]
        assert list(df["category"]) == ["Accessories", "Bikes"]
        assert df.iloc[0]["percentage_of_total"] == "73.55 %"

    def test_segment_products_by_cost_df(self, products_df):
        df = segment_products_by_cost_df(products_df)
        assert list(df["cost_range"]) == ["below 100", "100-500", "above-1000"]

    def test_customer_profiles_df(self, sales_df, customers_df):
        df = customer_profiles_df(sales_df, customers_df)

        assert list(df["customer_id"]) == ["AW00011000", "AW00011001"]
        assert list(df["lifespan_months"]) == [15, 7]
        assert list(df["segment"]) == ["regular", "new"]

    def test_segment_customers_df(self, sales_df, customers_df):
        df = segment_customers_df(sales_df, customers_df)
        assert list(df["segment"]) == ["regular", "new"]
        assert list(df["total_customers"]) == [1, 1]

    def test_empty_results_keep_columns(self):
        df = period_sales_to_dataframe([])

        assert df.empty
        assert list(df.columns) == [
            "period_start",
            "year",
            "month",
            "total_sales",
            "total_customers",
            "total_quantity",
            "average_price",
        ]

"""Tests for warehouse records, periods, joins and aggregates."""

import logging
from datetime import date, datetime
from decimal import Decimal

import pytest

from warehouse_analytics.foundation import (
    Customer,
    PeriodGranularity,
    Product,
    SalesRecord,
    add_nullable,
    coerce_customers,
    coerce_products,
    coerce_sales_records,
    dated_records,
    index_by,
    inner_join,
    left_join,
    months_between,
    sql_avg,
    sql_sum,
    truncate_to_period,
)


class TestCoerceSalesRecords:
    """Test raw fact_sales rows are turned into SalesRecord objects."""

    def test_converts_mapping_values(self):
        """ISO dates and numeric strings are converted."""
        records = coerce_sales_records(
            [
                {
                    "order_date": "2013-01-05",
                    "product_key": 7,
                    "customer_key": 42,
                    "sales_amount": "49.99",
                    "quantity": "2",
                    "price": 24.995,
                }
            ]
        )

        assert records == [
            SalesRecord(
                order_date=date(2013, 1, 5),
                product_key=7,
                customer_key=42,
                sales_amount=Decimal("49.99"),
                quantity=2,
                price=Decimal("24.995"),
            )
        ]

    def test_datetime_is_truncated_to_date(self):
        """A datetime order_date keeps only its calendar date."""
        records = coerce_sales_records(
            [{"order_date": datetime(2013, 1, 5, 23, 59), "sales_amount": 1}]
        )
        assert records[0].order_date == date(2013, 1, 5)

    def test_missing_and_blank_values_become_none(self):
        """Absent or blank cells are kept as None instead of failing."""
        records = coerce_sales_records(
            [{"order_date": "", "product_key": " ", "sales_amount": None}]
        )

        record = records[0]
        assert record.order_date is None
        assert record.product_key is None
        assert record.customer_key is None
        assert record.sales_amount is None
        assert record.quantity is None

    def test_existing_records_pass_through(self):
        """SalesRecord inputs are returned unchanged."""
        record = SalesRecord(date(2013, 1, 1), 1, 1, Decimal("1"))
        assert coerce_sales_records([record]) == [record]

    def test_non_numeric_amount_raises_error(self):
        """A sales_amount that is not a number raises ValueError."""
        with pytest.raises(ValueError, match="sales_amount is not a valid number"):
            coerce_sales_records([{"sales_amount": "abc"}])

    def test_wrong_date_type_raises_error(self):
        """An order_date of an unsupported type raises TypeError."""
        with pytest.raises(TypeError, match="order_date must be"):
            coerce_sales_records([{"order_date": 20130105}])

    def test_invalid_date_string_raises_error(self):
        """An unparseable order_date string raises ValueError."""
        with pytest.raises(ValueError, match="order_date is not an ISO"):
            coerce_sales_records([{"order_date": "05/01/2013"}])

    def test_nan_amount_becomes_none(self):
        """A float NaN amount is treated as a missing value."""
        records = coerce_sales_records([{"sales_amount": float("nan")}])
        assert records[0].sales_amount is None

    def test_dated_records_drops_undated_rows(self, caplog):
        rows = [
            {"order_date": "2013-01-05", "product_key": 1, "sales_amount": 5},
            {"order_date": None, "product_key": 2, "sales_amount": 7},
            SalesRecord(None, 3, 1, Decimal("9")),
        ]

        with caplog.at_level(logging.DEBUG):
            result = dated_records(rows)

        assert [record.product_key for record in result] == [1]
        assert any(
            "Excluded 2 sales records without an order_date" in r.message
            for r in caplog.records
        )


class TestCoerceDimensions:
    """Test dim_products and dim_customers coercion."""

    def test_products(self):
        """Product rows keep their natural key and convert cost."""
        products = coerce_products(
            [
                {
                    "product_key": 1,
                    "product_id": "BK-M100",
                    "product_name": "Mountain-100",
                    "category": "Bikes",
                    "cost": "1200",
                }
            ]
        )
        assert products == [
            Product(1, "BK-M100", "Mountain-100", "Bikes", Decimal("1200"))
        ]

    def test_product_with_missing_cost(self):
        """A product without a cost keeps cost=None."""
        products = coerce_products([{"product_key": 1, "product_name": "Cap"}])
        assert products[0].cost is None
        assert products[0].category is None

    def test_customers_keep_demographics(self):
        """Columns other than the keys are carried into attributes."""
        customers = coerce_customers(
            [
                {
                    "customer_key": 1,
                    "customer_id": "AW00011000",
                    "country": "Australia",
                    "gender": "Male",
                }
            ]
        )
        assert customers == [
            Customer(1, "AW00011000", {"country": "Australia", "gender": "Male"})
        ]


class TestPeriods:
    """Test calendar helpers."""

    def test_truncate_to_month(self):
        assert truncate_to_period(date(2013, 7, 19), PeriodGranularity.MONTH) == date(
            2013, 7, 1
        )

    def test_truncate_to_year(self):
        assert truncate_to_period(date(2013, 7, 19), PeriodGranularity.YEAR) == date(
            2013, 1, 1
        )

    @pytest.mark.parametrize(
        "start, end, expected",
        [
            (date(2021, 1, 1), date(2021, 1, 31), 0),
            (date(2021, 1, 31), date(2021, 2, 1), 1),
            (date(2020, 12, 31), date(2022, 1, 1), 13),
            (date(2020, 1, 1), date(2021, 1, 31), 12),
        ],
    )
    def test_months_between_ignores_day_of_month(self, start, end, expected):
        """Month difference uses only the (year, month) pair."""
        assert months_between(start, end) == expected


class TestJoins:
    """Test SQL-style joins."""

    def test_left_join_keeps_unmatched_rows(self):
        """Unmatched and None-keyed left rows pair with None."""
        left = [("a", 1), ("b", 2), ("c", None)]
        right = [(1, "one")]

        pairs = list(left_join(left, right, lambda row: row[1], lambda row: row[0]))

        assert pairs == [(("a", 1), (1, "one")), (("b", 2), None), (("c", None), None)]

    def test_duplicate_right_keys_multiply_rows(self):
        """Each matching right row produces an output pair."""
        left = [("a", 1)]
        right = [(1, "x"), (1, "y")]

        pairs = list(inner_join(left, right, lambda row: row[1], lambda row: row[0]))

        assert [match[1] for _, match in pairs] == ["x", "y"]

    def test_inner_join_drops_unmatched(self):
        """Rows without a match on either side are dropped."""
        left = [("a", 1), ("b", 2)]
        right = [(2, "two"), (3, "three")]

        pairs = list(inner_join(left, right, lambda row: row[1], lambda row: row[0]))

        assert pairs == [(("b", 2), (2, "two"))]

    def test_none_keys_never_match(self):
        """None on both sides does not produce a match."""
        pairs = list(
            inner_join([None], [None], lambda row: row, lambda row: row)
        )
        assert pairs == []

    def test_index_by_skips_none(self):
        index = index_by([1, None, 1, 2], lambda row: row)
        assert index == {1: [1, 1], 2: [2]}


class TestAggregates:
    """Test null-aware SQL aggregates."""

    def test_sql_sum_skips_nulls(self):
        assert sql_sum([Decimal("1.5"), None, Decimal("2")]) == Decimal("3.5")

    def test_sql_sum_of_nothing_is_none(self):
        assert sql_sum([]) is None
        assert sql_sum([None, None]) is None

    def test_sql_avg(self):
        assert sql_avg([Decimal("1"), None, Decimal("3")]) == Decimal("2")
        assert sql_avg([None]) is None

    def test_add_nullable(self):
        assert add_nullable(None, None) is None
        assert add_nullable(None, Decimal("2")) == Decimal("2")
        assert add_nullable(Decimal("1"), Decimal("2")) == Decimal("3")

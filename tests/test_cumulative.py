"""Tests for running totals."""

from datetime import date
from decimal import Decimal

import pytest

from warehouse_analytics.analyses.cumulative import (
    calculate_running_totals,
    running_sales_totals,
)
from warehouse_analytics.analyses.trends import PeriodSales
from warehouse_analytics.foundation.periods import PeriodGranularity
from warehouse_analytics.foundation.records import SalesRecord


def _month(month, total, average_price=None):
    return PeriodSales(
        date(2013, month, 1), 2013, month, total, 1, average_price=average_price
    )


class TestCalculateRunningTotals:
    """Test the running total accumulator."""

    def test_running_total_is_prefix_sum(self):
        """Each running total equals the sum of all totals so far."""
        totals = [Decimal("100"), Decimal("50"), Decimal("25.5"), Decimal("0")]
        periods = [_month(i + 1, total) for i, total in enumerate(totals)]

        result = calculate_running_totals(periods)

        for i, row in enumerate(result):
            assert row.running_total_sales == sum(totals[: i + 1])
        assert [row.total_sales for row in result] == totals

    def test_non_negative_totals_never_decrease(self):
        periods = [_month(m, Decimal(m * 10)) for m in range(1, 13)]
        running = [row.running_total_sales for row in calculate_running_totals(periods)]
        assert running == sorted(running)

    def test_negative_total_decreases_running_total(self):
        """Returns recorded as negative sales pull the running total down."""
        periods = [_month(1, Decimal("100")), _month(2, Decimal("-30"))]
        result = calculate_running_totals(periods)
        assert result[1].running_total_sales == Decimal("70")

    def test_input_is_sorted_by_period(self):
        """Periods are accumulated in ascending date order."""
        periods = [_month(3, Decimal("3")), _month(1, Decimal("1")), _month(2, Decimal("2"))]

        result = calculate_running_totals(periods)

        assert [row.period_start.month for row in result] == [1, 2, 3]
        assert [row.running_total_sales for row in result] == [
            Decimal("1"),
            Decimal("3"),
            Decimal("6"),
        ]

    def test_duplicate_periods_raise_error(self):
        with pytest.raises(ValueError, match="Duplicate period"):
            calculate_running_totals([_month(1, Decimal("1")), _month(1, Decimal("2"))])

    def test_null_totals_contribute_nothing(self):
        """A period whose total is null leaves the running total unchanged."""
        periods = [_month(1, None), _month(2, Decimal("10")), _month(3, None)]

        result = calculate_running_totals(periods)

        assert [row.running_total_sales for row in result] == [
            None,
            Decimal("10"),
            Decimal("10"),
        ]

    def test_moving_average_price(self):
        """Moving average covers every earlier period with a price."""
        periods = [
            _month(1, Decimal("1"), Decimal("10")),
            _month(2, Decimal("1")),
            _month(3, Decimal("1"), Decimal("20")),
        ]

        result = calculate_running_totals(periods)

        assert [row.moving_average_price for row in result] == [
            Decimal("10"),
            Decimal("10"),
            Decimal("15"),
        ]

    def test_empty_input_returns_empty_list(self):
        assert calculate_running_totals([]) == []


class TestRunningSalesTotals:
    """Test the end-to-end running totals over fact_sales."""

    def test_from_sales_records(self, sales):
        """Null-dated rows are ignored and months accumulate in order."""
        result = running_sales_totals(sales)

        assert [row.period_start for row in result] == [
            date(2021, 3, 1),
            date(2022, 6, 1),
            date(2023, 1, 1),
            date(2023, 2, 1),
        ]
        assert [row.running_total_sales for row in result] == [
            Decimal("100"),
            Decimal("280"),
            Decimal("400"),
            Decimal("450"),
        ]

    def test_yearly_running_totals(self, sales):
        result = running_sales_totals(sales, PeriodGranularity.YEAR)
        assert [row.running_total_sales for row in result] == [
            Decimal("100"),
            Decimal("280"),
            Decimal("450"),
        ]

    def test_empty_sales(self):
        assert running_sales_totals([]) == []

    def test_null_date_injection_does_not_change_result(self, sales):
        injected = sales + [SalesRecord(None, 1, 10, Decimal("5000"))]
        assert running_sales_totals(injected) == running_sales_totals(sales)

"""Shared fixtures: a tiny hand-built star schema."""

from datetime import date
from decimal import Decimal

import pytest

from warehouse_analytics.foundation.records import Customer, Product, SalesRecord


@pytest.fixture
def products():
    return [
        Product(1, "BK-M100", "Mountain-100", "Bikes", Decimal("1200")),
        Product(2, "BK-R150", "Road-150", "Bikes", Decimal("500")),
        Product(3, "HL-U509", "Sport Helmet", "Accessories", Decimal("35")),
        Product(4, "LJ-0192", "Jersey", "Clothing", Decimal("100")),
    ]


@pytest.fixture
def customers():
    return [
        Customer(10, "AW00011000", {"country": "Australia"}),
        Customer(11, "AW00011001", {"country": "Canada"}),
        Customer(12, "AW00011002", {"country": "France"}),
        # No sales at all
        Customer(13, "AW00011003", {"country": "Germany"}),
    ]


@pytest.fixture
def sales():
    return [
        SalesRecord(date(2021, 3, 5), 1, 10, Decimal("100")),
        SalesRecord(date(2022, 6, 10), 1, 10, Decimal("150")),
        SalesRecord(date(2023, 1, 20), 1, 11, Decimal("120")),
        SalesRecord(date(2022, 6, 25), 3, 11, Decimal("30")),
        SalesRecord(None, 3, 12, Decimal("999")),
        # Unknown product and customer
        SalesRecord(date(2023, 2, 1), 99, 98, Decimal("50")),
    ]

"""Typed row definitions for the sales warehouse tables.

The warehouse exposes one fact table (``fact_sales``) and two dimension
tables (``dim_products`` and ``dim_customers``). Rows arrive from whatever
scan primitive the caller has (a database cursor, a CSV reader, a DataFrame)
as plain mappings. The coercion helpers in this module turn those mappings
into frozen records so that every downstream analysis works against one
consistent shape.

Missing values are kept as ``None`` rather than rejected: a row without a
join key simply fails to match during the join, and a row without an
``order_date`` is dropped by the time-based analyses. Only values of the
wrong *kind* (e.g. ``sales_amount="abc"``) raise.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Hashable, Iterable, Mapping, Optional

logger = logging.getLogger(__name__)

RowKey = Optional[Hashable]


@dataclass(frozen=True)
class SalesRecord:
    """A single line of the ``fact_sales`` table.

    Attributes
    ----------
    order_date:
        Calendar date of the order. ``None`` when the source row has no date;
        such rows are ignored by every time-based analysis.
    product_key:
        Surrogate key referencing :class:`Product`.
    customer_key:
        Surrogate key referencing :class:`Customer`.
    sales_amount:
        Sales value of the line. ``None`` is skipped by sums.
    quantity:
        Optional number of units sold.
    price:
        Optional unit price.
    """

    order_date: date | None
    product_key: RowKey
    customer_key: RowKey
    sales_amount: Decimal | None
    quantity: int | None = None
    price: Decimal | None = None


@dataclass(frozen=True)
class Product:
    """A single row of the ``dim_products`` table."""

    product_key: RowKey
    product_id: RowKey
    product_name: str | None
    category: str | None
    cost: Decimal | None
    subcategory: str | None = None


@dataclass(frozen=True)
class Customer:
    """A single row of the ``dim_customers`` table.

    Attributes
    ----------
    customer_key:
        Surrogate key used to join against ``fact_sales``.
    customer_id:
        Natural identifier. Segmentation groups by this value, never by
        ``customer_key``.
    attributes:
        Demographic columns (country, gender, birthdate, ...) carried
        through untouched.
    """

    customer_key: RowKey
    customer_id: RowKey
    attributes: Mapping[str, Any] = field(default_factory=dict)


_CUSTOMER_FIELDS = ("customer_key", "customer_id")


def _blank_to_none(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return value


def to_decimal(value: Any, *, field_name: str, row_index: int) -> Decimal | None:
    """Convert a numeric cell to ``Decimal``; blanks become ``None``."""

    value = _blank_to_none(value)
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise TypeError(
            f"{field_name} must be numeric",
            {"row_index": row_index, "value": value},
        )
    try:
        result = Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(
            f"{field_name} is not a valid number",
            {"row_index": row_index, "value": value},
        ) from exc
    if result.is_nan():
        return None
    return result


def to_date(value: Any, *, row_index: int) -> date | None:
    """Convert an order date cell to ``date``; blanks become ``None``."""

    value = _blank_to_none(value)
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00")).date()
        except ValueError as exc:
            raise ValueError(
                "order_date is not an ISO formatted date",
                {"row_index": row_index, "value": value},
            ) from exc
    raise TypeError(
        "order_date must be a date, datetime or ISO string",
        {"row_index": row_index, "value": value},
    )


def _to_int(value: Any, *, field_name: str, row_index: int) -> int | None:
    amount = to_decimal(value, field_name=field_name, row_index=row_index)
    if amount is None:
        return None
    return int(amount)


def coerce_sales_records(rows: Iterable[Mapping[str, Any]]) -> list[SalesRecord]:
    """Build :class:`SalesRecord` objects from raw ``fact_sales`` rows.

    Rows may omit any column; absent columns are read as ``None``.
    """

    records: list[SalesRecord] = []
    for idx, row in enumerate(rows):
        if isinstance(row, SalesRecord):
            records.append(row)
            continue
        records.append(
            SalesRecord(
                order_date=to_date(row.get("order_date"), row_index=idx),
                product_key=_blank_to_none(row.get("product_key")),
                customer_key=_blank_to_none(row.get("customer_key")),
                sales_amount=to_decimal(
                    row.get("sales_amount"), field_name="sales_amount", row_index=idx
                ),
                quantity=_to_int(
                    row.get("quantity"), field_name="quantity", row_index=idx
                ),
                price=to_decimal(row.get("price"), field_name="price", row_index=idx),
            )
        )
    return records


def dated_records(
    sales: Iterable[SalesRecord | Mapping[str, Any]],
) -> list[SalesRecord]:
    """Return the records carrying an ``order_date``."""

    records = coerce_sales_records(sales)
    dated = [record for record in records if record.order_date is not None]
    skipped = len(records) - len(dated)
    if skipped:
        logger.debug(f"Excluded {skipped} sales records without an order_date")
    return dated


def coerce_products(rows: Iterable[Mapping[str, Any]]) -> list[Product]:
    """Build :class:`Product` objects from raw ``dim_products`` rows."""

    products: list[Product] = []
    for idx, row in enumerate(rows):
        if isinstance(row, Product):
            products.append(row)
            continue
        name = _blank_to_none(row.get("product_name"))
        category = _blank_to_none(row.get("category"))
        subcategory = _blank_to_none(row.get("subcategory"))
        products.append(
            Product(
                product_key=_blank_to_none(row.get("product_key")),
                product_id=_blank_to_none(row.get("product_id")),
                product_name=None if name is None else str(name),
                category=None if category is None else str(category),
                cost=to_decimal(row.get("cost"), field_name="cost", row_index=idx),
                subcategory=None if subcategory is None else str(subcategory),
            )
        )
    return products


def coerce_customers(rows: Iterable[Mapping[str, Any]]) -> list[Customer]:
    """Build :class:`Customer` objects from raw ``dim_customers`` rows.

    Every column other than the two keys is kept in ``attributes``.
    """

    customers: list[Customer] = []
    for row in rows:
        if isinstance(row, Customer):
            customers.append(row)
            continue
        attributes = {
            str(key): value
            for key, value in row.items()
            if key not in _CUSTOMER_FIELDS
        }
        customers.append(
            Customer(
                customer_key=_blank_to_none(row.get("customer_key")),
                customer_id=_blank_to_none(row.get("customer_id")),
                attributes=attributes,
            )
        )
    return customers

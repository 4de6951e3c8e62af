"""Pandas DataFrame adapters for the warehouse input tables."""

from typing import Dict, List, Optional

import pandas as pd  # type: ignore

from warehouse_analytics.foundation.records import (
    Customer,
    Product,
    SalesRecord,
    coerce_customers,
    coerce_products,
    coerce_sales_records,
)
from ._utils import cell_to_python, require_columns


def _rows(df: pd.DataFrame, mapping: Dict[str, str], keep_extra: bool = False) -> List[dict]:
    """Rename mapped columns to their canonical names and clean every cell."""
    reverse = {source: target for target, source in mapping.items()}
    rows = []
    for record in df.to_dict("records"):
        row = {}
        for column, value in record.items():
            if column in reverse:
                row[reverse[column]] = cell_to_python(value)
            elif keep_extra:
                row[str(column)] = cell_to_python(value)
        rows.append(row)
    return rows


def dataframe_to_sales_records(
    sales_df: pd.DataFrame,
    order_date_col: str = "order_date",
    product_key_col: str = "product_key",
    customer_key_col: str = "customer_key",
    sales_amount_col: str = "sales_amount",
    quantity_col: Optional[str] = "quantity",
    price_col: Optional[str] = "price",
) -> List[SalesRecord]:
    """Convert a ``fact_sales`` DataFrame to SalesRecord objects.

    Args:
        sales_df: DataFrame with one row per sales line
        *_col: Column name mappings for flexibility. ``quantity_col`` and
            ``price_col`` are optional and ignored when absent.

    Returns:
        List of SalesRecord objects in DataFrame row order. NaN/NaT cells
        become None.

    Raises:
        ValueError: If a required column is missing

    Example:
        >>> sales_df = pd.read_csv('fact_sales.csv', parse_dates=['order_date'])
        >>> sales = dataframe_to_sales_records(sales_df)
    """
    mapping = {
        "order_date": order_date_col,
        "product_key": product_key_col,
        "customer_key": customer_key_col,
        "sales_amount": sales_amount_col,
    }
    require_columns(sales_df, list(mapping.values()))
    if quantity_col and quantity_col in sales_df.columns:
        mapping["quantity"] = quantity_col
    if price_col and price_col in sales_df.columns:
        mapping["price"] = price_col

    if sales_df.empty:
        return []
    return coerce_sales_records(_rows(sales_df, mapping))


def dataframe_to_products(
    products_df: pd.DataFrame,
    product_key_col: str = "product_key",
    product_id_col: str = "product_id",
    product_name_col: str = "product_name",
    category_col: str = "category",
    cost_col: str = "cost",
    subcategory_col: Optional[str] = "subcategory",
) -> List[Product]:
    """Convert a ``dim_products`` DataFrame to Product objects.

    Raises:
        ValueError: If a required column is missing
    """
    mapping = {
        "product_key": product_key_col,
        "product_id": product_id_col,
        "product_name": product_name_col,
        "category": category_col,
        "cost": cost_col,
    }
    require_columns(products_df, list(mapping.values()))
    if subcategory_col and subcategory_col in products_df.columns:
        mapping["subcategory"] = subcategory_col

    if products_df.empty:
        return []
    return coerce_products(_rows(products_df, mapping))


def dataframe_to_customers(
    customers_df: pd.DataFrame,
    customer_key_col: str = "customer_key",
    customer_id_col: str = "customer_id",
) -> List[Customer]:
    """Convert a ``dim_customers`` DataFrame to Customer objects.

    Every column besides the two keys is carried into ``attributes``.

    Raises:
        ValueError: If a key column is missing
    """
    mapping = {
        "customer_key": customer_key_col,
        "customer_id": customer_id_col,
    }
    require_columns(customers_df, list(mapping.values()))

    if customers_df.empty:
        return []
    return coerce_customers(_rows(customers_df, mapping, keep_extra=True))

"""Synthetic star-schema data for exercising the analyses.

Produces realistic-but-fake ``fact_sales``, ``dim_products`` and
``dim_customers`` tables without access to a real warehouse.
"""

from .generator import (
    SyntheticWarehouse,
    WarehouseScenario,
    generate_customers,
    generate_products,
    generate_warehouse,
)

__all__ = [
    "SyntheticWarehouse",
    "WarehouseScenario",
    "generate_customers",
    "generate_products",
    "generate_warehouse",
]

"""Descriptive analyses over the sales warehouse.

Each analysis is an independent, pure function over the fact and dimension
tables:

1. Sales trends over time (yearly / monthly totals, customer counts)
2. Cumulative analysis (running totals, moving average price)
3. Product performance (year-over-year and average benchmark)
4. Part-to-whole (category contribution)
5. Product cost-range segmentation
6. Customer lifetime segmentation
"""

from .contribution import CategoryContribution, calculate_category_contribution
from .cumulative import RunningTotal, calculate_running_totals, running_sales_totals
from .performance import (
    ProductPerformance,
    ProductRanking,
    YearlyProductSales,
    analyze_product_performance,
    build_yearly_product_sales,
    product_performance,
    top_products_by_sales,
)
from .segmentation import (
    CostSegment,
    CustomerLifetimeProfile,
    CustomerSegment,
    build_customer_profiles,
    classify_cost,
    classify_customer,
    segment_customers,
    segment_products_by_cost,
)
from .trends import (
    PeriodAcquisition,
    PeriodSales,
    new_customers_over_time,
    sales_over_time,
)

__all__ = [
    # Trends
    "PeriodAcquisition",
    "PeriodSales",
    "new_customers_over_time",
    "sales_over_time",
    # Cumulative
    "RunningTotal",
    "calculate_running_totals",
    "running_sales_totals",
    # Performance
    "ProductPerformance",
    "ProductRanking",
    "YearlyProductSales",
    "analyze_product_performance",
    "build_yearly_product_sales",
    "product_performance",
    "top_products_by_sales",
    # Part-to-whole
    "CategoryContribution",
    "calculate_category_contribution",
    # Segmentation
    "CostSegment",
    "CustomerLifetimeProfile",
    "CustomerSegment",
    "build_customer_profiles",
    "classify_cost",
    "classify_customer",
    "segment_customers",
    "segment_products_by_cost",
]

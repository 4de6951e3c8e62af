"""Sales warehouse analytics demo with synthetic data.

This example runs every analysis over a generated star schema:
1. Generate synthetic fact_sales, dim_products and dim_customers tables
2. Sales trends over time and running totals
3. Product year-over-year performance
4. Category contribution to overall sales
5. Product cost-range and customer lifetime segmentation
"""

from warehouse_analytics.analyses import (
    calculate_category_contribution,
    product_performance,
    running_sales_totals,
    sales_over_time,
    segment_customers,
    segment_products_by_cost,
)
from warehouse_analytics.foundation.periods import PeriodGranularity
from warehouse_analytics.pandas import product_performance_to_dataframe
from warehouse_analytics.synthetic import WarehouseScenario, generate_warehouse


def main():
    """Demonstrate the full set of warehouse analyses."""
    print("=" * 80)
    print("Sales Warehouse Analytics Demo")
    print("=" * 80)

    # Step 1: Generate synthetic data
    print("\n📊 Step 1: Generating synthetic warehouse...")
    warehouse = generate_warehouse(
        WarehouseScenario(n_products=25, n_customers=300, null_date_rate=0.01, seed=42)
    )
    print(
        f"✓ Generated {len(warehouse.sales):,} sales lines, "
        f"{len(warehouse.products)} products, {len(warehouse.customers)} customers"
    )

    # Step 2: Trends
    print("\n📈 Step 2: Yearly sales and running totals...")
    for period in sales_over_time(warehouse.sales, PeriodGranularity.YEAR):
        print(
            f"  {period.year}: sales={period.total_sales:>10} "
            f"customers={period.total_customers}"
        )
    running = running_sales_totals(warehouse.sales)
    if running:
        print(f"✓ Running total after {len(running)} months: {running[-1].running_total_sales}")

    # Step 3: Product performance
    print("\n🔧 Step 3: Product year-over-year performance...")
    perf_df = product_performance_to_dataframe(
        product_performance(warehouse.sales, warehouse.products)
    )
    print(perf_df.head(10).to_string(index=False))

    # Step 4: Category contribution
    print("\n🥧 Step 4: Category contribution...")
    for row in calculate_category_contribution(warehouse.sales, warehouse.products):
        print(f"  {row.category}: {row.total_sales} ({row.percentage_of_total})")

    # Step 5: Segmentation
    print("\n🧩 Step 5: Segmentation...")
    for segment in segment_products_by_cost(warehouse.products):
        print(f"  cost {segment.cost_range}: {segment.total_products} products")
    for segment in segment_customers(warehouse.sales, warehouse.customers):
        print(f"  {segment.segment}: {segment.total_customers} customers")

    print("\n" + "=" * 80)


if __name__ == "__main__":
    main()

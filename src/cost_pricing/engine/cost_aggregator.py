"""
Cost Aggregator - totals fixed costs and per-product variable/direct costs.
"""
import logging
from typing import Sequence

from .models import Product, FixedCostConfig, ProductCost, CostSummary

logger = logging.getLogger(__name__)


def cost_product(product: Product) -> ProductCost:
    """Unit and run cost of one product; direct costs are spread over safe units."""
    safe_units = product.safe_units
    direct_cost_per_unit = product.direct_cost_total / safe_units
    unit_cost = product.cost_per_unit + direct_cost_per_unit

    return ProductCost(
        product=product,
        safe_units=safe_units,
        direct_cost_per_unit=direct_cost_per_unit,
        unit_cost=unit_cost,
        product_cost=unit_cost * safe_units,
    )


def aggregate_costs(products: Sequence[Product], fixed_costs: FixedCostConfig) -> CostSummary:
    """Total fixed, variable and direct costs for the whole catalog."""
    actual_fixed_cost = fixed_costs.actual_fixed_cost
    product_costs = tuple(cost_product(p) for p in products)
    total_variable_and_direct_cost = sum(pc.product_cost for pc in product_costs)

    logger.debug(
        "Aggregated costs: fixed=%.2f variable+direct=%.2f over %d products",
        actual_fixed_cost, total_variable_and_direct_cost, len(product_costs),
    )

    return CostSummary(
        actual_fixed_cost=actual_fixed_cost,
        product_costs=product_costs,
        total_variable_and_direct_cost=total_variable_and_direct_cost,
        overall_total_cost=actual_fixed_cost + total_variable_and_direct_cost,
    )

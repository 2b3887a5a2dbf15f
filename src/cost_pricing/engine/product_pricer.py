"""
Product Pricer - final per-unit price, profit and diagnostics for every product.
"""
import logging
import math
from typing import Optional

from ..config.settings import FallbackPolicy
from .models import (
    Allocation,
    CalculationMethod,
    CostSummary,
    PercentageShare,
    PricingResult,
    ProductCost,
)
from .parsing import round_price

logger = logging.getLogger(__name__)

# Fallback rule names reported on PricingResult.fallback
FALLBACK_MARKUP = "markup"
FALLBACK_FLAT = "flat"
FALLBACK_ZERO_UNIT_MARKUP = "zero_unit_markup"
FALLBACK_ZERO_UNIT_FLAT = "zero_unit_flat"


def _margin_percent(revenue: float, total_cost: float) -> float:
    return (revenue - total_cost) / revenue * 100 if revenue > 0 else 0.0


def price_percentage_product(
    pc: ProductCost,
    share: PercentageShare,
    decimals: int = 2,
) -> PricingResult:
    """Price a product whose revenue is a fixed share of the company total."""
    safe_units = pc.safe_units
    price = round_price(share.revenue_share / safe_units, decimals)
    # round() strips float noise such as 10.000000000002 before ceil
    units_needed = math.ceil(round(share.revenue_share / price, 9)) if price > 0 else 0

    revenue = price * safe_units
    total_cost = pc.product_cost + share.fixed_share

    return PricingResult(
        name=pc.product.name,
        calculation_method=CalculationMethod.PERCENTAGE,
        price=price,
        units_needed=units_needed,
        profit_per_unit=(revenue - total_cost) / safe_units,
        percentage_revenue_achieved=_margin_percent(revenue, total_cost),
        allocated_fixed_cost_share=share.fixed_share,
        unit_cost=pc.unit_cost,
        revenue_share=share.revenue_share,
    )


def cost_plus_profit_per_unit(
    pc: ProductCost,
    allocation: Allocation,
    policy: FallbackPolicy,
) -> tuple[float, Optional[str]]:
    """
    Profit each unit must carry on top of its unit cost.

    Returns (profit_per_unit, fallback_rule_or_None). Fallback rules apply in
    order: non-positive or non-finite allocation, then a zero-unit product.
    """
    raw = allocation.per_unit_profit_cp + allocation.per_unit_fixed_cp

    if pc.safe_units > 0 and (not math.isfinite(raw) or raw <= 0):
        profit = pc.unit_cost * policy.cost_plus_markup
        if profit == 0:
            return policy.cost_plus_flat, FALLBACK_FLAT
        return profit, FALLBACK_MARKUP

    if pc.product.expected_units == 0:
        if pc.unit_cost > 0:
            return pc.unit_cost * policy.zero_unit_markup, FALLBACK_ZERO_UNIT_MARKUP
        return policy.zero_unit_flat, FALLBACK_ZERO_UNIT_FLAT

    return raw, None


def price_cost_plus_product(
    pc: ProductCost,
    allocation: Allocation,
    policy: FallbackPolicy,
    decimals: int = 2,
) -> PricingResult:
    """Price a product as unit cost plus its allocated profit and fixed-cost burden."""
    profit_per_unit, fallback = cost_plus_profit_per_unit(pc, allocation, policy)
    if fallback:
        logger.info("Cost-plus fallback '%s' applied to %s", fallback, pc.product.name or "(unnamed)")

    price = round_price(pc.unit_cost + profit_per_unit, decimals)
    fixed_share = allocation.per_unit_fixed_cp * pc.safe_units
    revenue = price * pc.safe_units
    total_cost = pc.product_cost + fixed_share

    return PricingResult(
        name=pc.product.name,
        calculation_method=CalculationMethod.COST_PLUS,
        price=price,
        units_needed=None,
        profit_per_unit=profit_per_unit,
        percentage_revenue_achieved=_margin_percent(revenue, total_cost),
        allocated_fixed_cost_share=fixed_share,
        unit_cost=pc.unit_cost,
        fallback=fallback,
    )


def price_products(
    costs: CostSummary,
    allocation: Allocation,
    policy: Optional[FallbackPolicy] = None,
    decimals: int = 2,
) -> list[PricingResult]:
    """Price every product in catalog order."""
    policy = policy or FallbackPolicy()
    results = []

    for index, pc in enumerate(costs.product_costs):
        if pc.product.is_percentage:
            results.append(price_percentage_product(pc, allocation.percentage_shares[index], decimals))
        else:
            results.append(price_cost_plus_product(pc, allocation, policy, decimals))

    return results

"""
Allocation Engine - splits fixed costs and the profit target between product groups.

Percentage-revenue products take a fixed slice of both revenue and fixed
cost; whatever profit and fixed cost they leave over is spread per unit
across the cost-plus group. The split is closed-form and runs once.
"""
import logging
from typing import Sequence

from .errors import PercentageSumMismatch, PricingValidationError
from .models import Product, CostSummary, RevenueTarget, PercentageShare, Allocation
from .parsing import round_half_up

logger = logging.getLogger(__name__)


def percentage_sum(products: Sequence[Product]) -> float:
    return sum(p.revenue_share_percent for p in products if p.is_percentage)


def check_percentage_sum(products: Sequence[Product], expected_total: float = 100.0):
    """Raise unless the percentage group's shares round to the expected total."""
    if not any(p.is_percentage for p in products):
        return

    actual = percentage_sum(products)
    if round_half_up(actual) != expected_total:
        raise PricingValidationError(PercentageSumMismatch(actual_sum=actual))


def allocate(
    products: Sequence[Product],
    costs: CostSummary,
    target: RevenueTarget,
) -> Allocation:
    """Compute every group-level figure the pricer needs."""
    fixed = costs.actual_fixed_cost
    revenue = target.overall_target_revenue

    shares: dict[int, PercentageShare] = {}
    profit_from_pct = 0.0
    total_units_cp = 0.0

    for index, (product, pc) in enumerate(zip(products, costs.product_costs)):
        if product.is_percentage:
            fraction = product.revenue_share_percent / 100
            share = PercentageShare(revenue_share=fraction * revenue, fixed_share=fraction * fixed)
            shares[index] = share
            profit_from_pct += share.revenue_share - pc.product_cost - share.fixed_share
        else:
            # Raw units: a cost-plus group of zero-unit products has no units at all
            total_units_cp += product.expected_units

    fixed_share_cp_total = fixed - sum(s.fixed_share for s in shares.values())
    profit_needed_from_cp = target.overall_profit - profit_from_pct

    if total_units_cp > 0:
        per_unit_profit_cp = profit_needed_from_cp / total_units_cp
        per_unit_fixed_cp = fixed_share_cp_total / total_units_cp
    else:
        per_unit_profit_cp = 0.0
        per_unit_fixed_cp = 0.0

    logger.debug(
        "Allocation: fixed to cost-plus=%.2f, profit from percentage=%.2f, needed from cost-plus=%.2f over %g units",
        fixed_share_cp_total, profit_from_pct, profit_needed_from_cp, total_units_cp,
    )

    return Allocation(
        percentage_shares=shares,
        fixed_share_cp_total=fixed_share_cp_total,
        profit_from_pct=profit_from_pct,
        profit_needed_from_cp=profit_needed_from_cp,
        total_units_cp=total_units_cp,
        per_unit_profit_cp=per_unit_profit_cp,
        per_unit_fixed_cp=per_unit_fixed_cp,
    )

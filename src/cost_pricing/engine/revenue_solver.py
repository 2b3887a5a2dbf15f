"""
Revenue Target Solver - turns total cost plus a profit policy into one revenue figure.
"""
import logging

from .errors import InvalidMargin, PricingValidationError
from .models import ProfitTarget, RevenueTarget, TargetMode

logger = logging.getLogger(__name__)

MARGIN_LIMIT = 100.0


def check_margin(profit_target: ProfitTarget):
    """Raise if a margin target sits at or above 100%."""
    if profit_target.mode == TargetMode.BY_MARGIN and profit_target.value >= MARGIN_LIMIT:
        raise PricingValidationError(InvalidMargin(percent=profit_target.value))


def solve_revenue_target(overall_total_cost: float, profit_target: ProfitTarget) -> RevenueTarget:
    """
    Solve the company-wide target revenue.

    Margin is profit over revenue, so revenue = cost / (1 - margin).
    Margins just under 100% give very large but finite revenue; only 100
    and above are rejected.
    """
    check_margin(profit_target)

    if profit_target.mode == TargetMode.BY_MARGIN:
        revenue = overall_total_cost / (1 - profit_target.value / 100)
        profit = revenue - overall_total_cost
    else:
        profit = profit_target.value
        revenue = overall_total_cost + profit

    logger.debug("Revenue target %.2f (profit %.2f) from cost %.2f", revenue, profit, overall_total_cost)
    return RevenueTarget(overall_target_revenue=revenue, overall_profit=profit)

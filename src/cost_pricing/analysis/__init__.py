"""Analysis subpackage - what-if scenarios, insights, single-product costing and tabular reports."""
from .scenarios import what_if, diff_aggregates, compare_scenarios, MetricDelta, ScenarioComparison
from .costing import cost_single_product, custom_price, CostingInput, CostingResult, CustomPrice, ExpenseItem
from .insights import (
    break_even_units,
    check_budget,
    compare_outcome_to_competitors,
    compare_to_competitor,
    product_margin,
    rank_by_margin,
    realized_margin,
)

__all__ = [
    'what_if', 'diff_aggregates', 'compare_scenarios', 'MetricDelta', 'ScenarioComparison',
    'break_even_units', 'check_budget', 'compare_outcome_to_competitors', 'compare_to_competitor',
    'product_margin', 'rank_by_margin', 'realized_margin',
    'cost_single_product', 'custom_price', 'CostingInput', 'CostingResult', 'CustomPrice', 'ExpenseItem',
]

"""
Tabular views of pricing outcomes for display and CSV export.
"""
import pandas as pd

from ..engine.models import AggregateResult, PricingOutcome
from .scenarios import diff_aggregates

RESULT_COLUMNS = [
    'Product', 'Method', 'Price', 'Unit Cost', 'Profit/Unit',
    'Units Needed', '% Revenue', 'Fixed Cost Share', 'Fallback',
]


def results_frame(outcome: PricingOutcome) -> pd.DataFrame:
    """One row per product, in catalog order."""
    rows = [{
        'Product': r.name,
        'Method': r.calculation_method.value,
        'Price': r.price,
        'Unit Cost': round(r.unit_cost, 2),
        'Profit/Unit': round(r.profit_per_unit, 2),
        'Units Needed': r.units_needed,
        '% Revenue': round(r.percentage_revenue_achieved, 2),
        'Fixed Cost Share': round(r.allocated_fixed_cost_share, 2),
        'Fallback': r.fallback or '',
    } for r in outcome.results]

    df = pd.DataFrame(rows, columns=RESULT_COLUMNS)
    df['Units Needed'] = df['Units Needed'].astype('Int64')
    return df


def aggregate_frame(aggregate: AggregateResult) -> pd.DataFrame:
    """Company totals as a two-column Metric/Value table."""
    return pd.DataFrame([
        {'Metric': 'Fixed Cost', 'Value': aggregate.actual_fixed_cost},
        {'Metric': 'Variable + Direct Cost', 'Value': aggregate.total_variable_and_direct_cost},
        {'Metric': 'Total Cost', 'Value': aggregate.overall_total_cost},
        {'Metric': 'Target Revenue', 'Value': aggregate.overall_target_revenue},
        {'Metric': 'Profit', 'Value': aggregate.overall_profit},
    ])


def scenario_frame(before: AggregateResult, after: AggregateResult) -> pd.DataFrame:
    """Before/after/delta per aggregate metric."""
    return pd.DataFrame([{
        'Metric': d.metric,
        'Before': d.before,
        'After': d.after,
        'Delta': d.delta,
    } for d in diff_aggregates(before, after)])

import pandas as pd
import pytest
import sys
import os

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from cost_pricing.analysis.report import RESULT_COLUMNS, aggregate_frame, results_frame, scenario_frame
from cost_pricing.engine import CalculationMethod, FixedCostConfig, Product, ProfitTarget, compute


@pytest.fixture(scope="module")
def outcome():
    products = [
        Product(name="A", revenue_share_percent=100, expected_units=10, cost_per_unit=5),
        Product(name="B", calculation_method=CalculationMethod.COST_PLUS, expected_units=0, cost_per_unit=10),
    ]
    return compute(products, FixedCostConfig.flat(1000), ProfitTarget.by_amount(200))


def test_results_frame(outcome):
    df = results_frame(outcome)

    assert list(df.columns) == RESULT_COLUMNS
    assert df['Product'].tolist() == ["A", "B"]
    assert df.loc[0, 'Units Needed'] == 10
    assert pd.isna(df.loc[1, 'Units Needed'])
    assert df.loc[0, 'Fallback'] == ''
    assert df.loc[1, 'Fallback'] != ''


def test_aggregate_frame(outcome):
    df = aggregate_frame(outcome.aggregate)
    values = dict(zip(df['Metric'], df['Value']))

    assert values['Total Cost'] == pytest.approx(outcome.aggregate.overall_total_cost)
    assert values['Profit'] == pytest.approx(200.0)


def test_scenario_frame(outcome):
    df = scenario_frame(outcome.aggregate, outcome.aggregate)

    assert list(df.columns) == ['Metric', 'Before', 'After', 'Delta']
    assert (df['Delta'] == 0).all()

import pytest
import sys
import os

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from cost_pricing.analysis.scenarios import compare_scenarios, diff_aggregates, what_if
from cost_pricing.engine import (
    FixedCostConfig,
    PercentageSumMismatch,
    PricingRequest,
    Product,
    ProfitTarget,
)


@pytest.fixture(scope="function")
def base():
    return PricingRequest(
        products=(Product(name="A", revenue_share_percent=100, expected_units=10, cost_per_unit=5),),
        fixed_costs=FixedCostConfig.flat(1000),
        profit_target=ProfitTarget.by_amount(200),
    )


def test_what_if_leaves_base_untouched(base):
    scenario = what_if(base, product_overrides={"A": {"cost_per_unit": 10}})

    assert base.products[0].cost_per_unit == 5
    assert scenario.products[0].cost_per_unit == 10
    assert scenario.fixed_costs is base.fixed_costs


def test_cost_change_moves_totals(base):
    scenario = what_if(base, product_overrides={"A": {"cost_per_unit": 10}})
    comparison = compare_scenarios(base, scenario)

    assert comparison.ok
    deltas = {d.metric: d for d in comparison.deltas}
    assert deltas["overall_total_cost"].delta == pytest.approx(50.0)
    assert deltas["overall_target_revenue"].delta == pytest.approx(50.0)
    assert deltas["overall_profit"].delta == pytest.approx(0.0)
    assert deltas["actual_fixed_cost"].delta_percent == pytest.approx(0.0)
    assert comparison.scenario.results[0].price == 130.00


def test_profit_target_swap(base):
    scenario = what_if(base, profit_target=ProfitTarget.by_margin(20))
    comparison = compare_scenarios(base, scenario)

    assert comparison.scenario.aggregate.overall_target_revenue == pytest.approx(1312.5)


def test_invalid_scenario_keeps_base_result(base):
    scenario = what_if(base, product_overrides={"A": {"revenue_share_percent": 90}})
    comparison = compare_scenarios(base, scenario)

    assert not comparison.ok
    assert comparison.scenario == PercentageSumMismatch(actual_sum=90)
    assert comparison.base.results[0].price == 125.00
    assert comparison.deltas == ()


def test_unknown_override_field_is_rejected(base):
    with pytest.raises(ValueError, match="name"):
        what_if(base, product_overrides={"A": {"name": "Renamed"}})


def test_delta_percent_of_zero_base_is_none(base):
    scenario = what_if(base, fixed_costs=FixedCostConfig.flat(0))
    comparison = compare_scenarios(scenario, base)
    fixed = {d.metric: d for d in comparison.deltas}["actual_fixed_cost"]

    assert fixed.before == 0
    assert fixed.delta_percent is None


def test_diff_aggregates_covers_every_metric(base):
    outcome = compare_scenarios(base, base).base
    assert [d.metric for d in diff_aggregates(outcome.aggregate, outcome.aggregate)] == [
        "actual_fixed_cost",
        "total_variable_and_direct_cost",
        "overall_total_cost",
        "overall_target_revenue",
        "overall_profit",
    ]

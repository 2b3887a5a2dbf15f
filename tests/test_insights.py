import pytest
import sys
import os

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from cost_pricing.analysis.insights import (
    BudgetStatus,
    CompetitorVerdict,
    break_even_units,
    check_budget,
    compare_outcome_to_competitors,
    compare_to_competitor,
    product_margin,
    rank_by_margin,
    realized_margin,
)
from cost_pricing.engine import CalculationMethod, FixedCostConfig, Product, ProfitTarget, compute

CP = CalculationMethod.COST_PLUS


@pytest.fixture(scope="module")
def outcome():
    products = [
        Product(name="B", calculation_method=CP, expected_units=10, cost_per_unit=10),
        Product(name="C", calculation_method=CP, expected_units=5, cost_per_unit=20),
    ]
    return compute(products, FixedCostConfig.flat(300), ProfitTarget.by_amount(150))


def test_break_even_units():
    assert break_even_units(90, 50, 400) == 10
    assert break_even_units(90, 50, 401) == 11


@pytest.mark.parametrize("price,unit_cost", [(50, 50), (40, 50)])
def test_break_even_never_reached(price, unit_cost):
    assert break_even_units(price, unit_cost, 400) is None


def test_product_margin():
    assert product_margin(125, 5) == pytest.approx(96.0)
    assert product_margin(0, 5) == 0.0


def test_realized_margin(outcome):
    assert realized_margin(outcome.aggregate) == pytest.approx(150 / 650 * 100)


def test_rank_by_margin(outcome):
    ranking = rank_by_margin(outcome)

    assert [i.name for i in ranking] == ["B", "C"]
    assert ranking[0].margin_percent == pytest.approx(75.0)
    assert ranking[1].margin_percent == pytest.approx(60.0)
    assert ranking[0].break_even_units == 10


def test_competitor_higher():
    comparison = compare_to_competitor("A", 110, 100)
    assert comparison.verdict == CompetitorVerdict.HIGHER
    assert comparison.difference == pytest.approx(10.0)
    assert comparison.message == "Your price is 10.0% higher"


def test_competitor_lower_and_equal():
    assert compare_to_competitor("A", 80, 100).message == "Your price is 20.0% lower"
    assert compare_to_competitor("A", 100, 100).verdict == CompetitorVerdict.EQUAL


def test_competitor_missing(outcome):
    comparisons = compare_outcome_to_competitors(outcome, {"B": 50})

    assert comparisons[0].verdict == CompetitorVerdict.LOWER
    assert comparisons[1].verdict == CompetitorVerdict.NO_DATA
    assert comparisons[1].message == "No competitor price entered"


@pytest.mark.parametrize("budget,revenue,status", [
    (2000, 1250, BudgetStatus.WITHIN),
    (1250, 1250, BudgetStatus.WITHIN),
    (1000, 1250, BudgetStatus.OVER),
    (0, 1250, BudgetStatus.NO_BUDGET),
    (500, 0, BudgetStatus.NO_QUOTE),
])
def test_check_budget(budget, revenue, status):
    check = check_budget(budget, revenue)
    assert check.status == status
    assert check.remaining == budget - revenue

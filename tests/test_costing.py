import pytest
import sys
import os

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from cost_pricing.analysis.costing import (
    CostingInput,
    CustomPrice,
    ExpenseItem,
    cost_single_product,
    custom_price,
)
from cost_pricing.engine.errors import InvalidCustomMargin


@pytest.fixture(scope="module")
def loaded():
    return cost_single_product(CostingInput(
        unit_cost=10,
        total_units=100,
        director_rate=0.10,
        staff_rate=0.05,
        accounting_rate=0.02,
        domain_rate=0.01,
        data_rate=0.02,
        airtime=30,
        other_cost=20,
        custom_expenses=(ExpenseItem("Courier", 50),),
        markup=0.25,
    ))


def test_direct_cost_is_unit_cost_times_units(loaded):
    assert loaded.direct_cost == pytest.approx(1000.0)


def test_operating_expenses_mix_rates_and_amounts(loaded):
    """100 + 50 + 20 + 10 + 20 from rates, 30 + 20 + 50 flat."""
    assert loaded.operating_expenses == pytest.approx(300.0)
    assert loaded.total_cost == pytest.approx(1300.0)
    assert loaded.cost_per_unit == pytest.approx(13.0)


def test_markup_on_total_cost(loaded):
    assert loaded.selling_price == pytest.approx(1625.0)
    assert loaded.net_profit == pytest.approx(325.0)


def test_breakdown_lists_standard_then_custom_expenses(loaded):
    labels = [item.name for item in loaded.expense_breakdown]
    assert labels == ["Director", "Staff/Admin", "Accounting", "Domain", "Data", "Airtime", "Other", "Courier"]
    assert loaded.expense_breakdown[0].amount == pytest.approx(100.0)


def test_zero_units_give_zero_cost_per_unit():
    result = cost_single_product(CostingInput(unit_cost=10, total_units=0, airtime=40))

    assert result.direct_cost == 0
    assert result.total_cost == pytest.approx(40.0)
    assert result.cost_per_unit == 0.0


def test_unusable_inputs_become_zero():
    inputs = CostingInput(unit_cost="abc", total_units=None, markup=float('nan'),
                          custom_expenses=(ExpenseItem("Bad", -5),))
    result = cost_single_product(inputs)

    assert inputs.unit_cost == 0
    assert result.total_cost == 0
    assert result.selling_price == 0


def test_custom_price_from_margin():
    price = custom_price(13, 0.35)

    assert isinstance(price, CustomPrice)
    assert price.price == pytest.approx(20.0)
    assert price.profit_per_unit == pytest.approx(7.0)


def test_custom_price_from_markup():
    price = custom_price(13, 0.5, use_margin=False)
    assert price.price == pytest.approx(19.5)
    assert price.profit_per_unit == pytest.approx(6.5)


@pytest.mark.parametrize("rate", [1, 1.0, 1.2])
def test_margin_of_one_or_more_is_an_error(rate):
    error = custom_price(13, rate)

    assert error == InvalidCustomMargin(margin=rate)
    assert error.to_dict()["code"] == "INVALID_CUSTOM_MARGIN"


def test_markup_of_one_or_more_is_allowed():
    assert custom_price(13, 1.5, use_margin=False).price == pytest.approx(32.5)

import math
import pytest
import sys
import os

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from cost_pricing.engine.errors import InvalidMargin, PricingValidationError
from cost_pricing.engine.models import ProfitTarget
from cost_pricing.engine.revenue_solver import solve_revenue_target


def test_margin_is_profit_over_revenue():
    target = solve_revenue_target(1000, ProfitTarget.by_margin(20))
    assert target.overall_target_revenue == pytest.approx(1250.0)
    assert target.overall_profit == pytest.approx(250.0)


def test_amount_adds_to_cost():
    target = solve_revenue_target(1050, ProfitTarget.by_amount(200))
    assert target.overall_target_revenue == pytest.approx(1250.0)
    assert target.overall_profit == 200


def test_zero_margin_revenue_equals_cost():
    target = solve_revenue_target(1234.5, ProfitTarget.by_margin(0))
    assert target.overall_target_revenue == pytest.approx(1234.5)
    assert target.overall_profit == pytest.approx(0.0)


@pytest.mark.parametrize("percent", [100, 100.0, 150])
def test_margin_at_or_above_100_fails(percent):
    with pytest.raises(PricingValidationError) as exc:
        solve_revenue_target(1000, ProfitTarget.by_margin(percent))
    assert exc.value.error == InvalidMargin(percent=percent)


def test_margin_just_below_100_is_large_but_finite():
    target = solve_revenue_target(1000, ProfitTarget.by_margin(99.999))
    assert math.isfinite(target.overall_target_revenue)
    assert target.overall_target_revenue > 1e7


def test_negative_amount_lowers_revenue():
    target = solve_revenue_target(1000, ProfitTarget.by_amount(-300))
    assert target.overall_target_revenue == pytest.approx(700.0)
    assert target.overall_profit == -300

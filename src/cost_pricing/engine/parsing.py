"""
Input coercion and request parsing.

Every number entering the engine passes through here exactly once, so the
allocation algebra never has to guard against strings, None or NaN.
The dict parsers accept the plain shape used by the form and snapshot
layers (camelCase keys, as saved by the web client) as well as snake_case.
"""
import math
from decimal import Context, Decimal, ROUND_HALF_UP
from typing import Any, Optional

# Wide enough to quantize any finite float to cents
_ROUNDING_CONTEXT = Context(prec=400)


def coerce_number(value: Any) -> float:
    """Parse a user-entered value to a finite float; anything unusable becomes 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def coerce_non_negative(value: Any) -> float:
    """Like coerce_number, but clamps negatives to 0 (costs, units, shares)."""
    return max(coerce_number(value), 0.0)


def round_half_up(value: float, places: int = 0) -> float:
    """Round half away from zero, as a cashier would (not banker's rounding)."""
    if not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP, context=_ROUNDING_CONTEXT))


def round_price(value: float, places: int = 2) -> float:
    """Finalize a monetary amount to `places` decimals."""
    return round_half_up(value, places)


def _pick(data: dict, *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def direct_cost_from_dict(data: dict):
    from .models import DirectCost
    return DirectCost(
        description=str(_pick(data, 'description', 'label', 'name', default='')),
        amount=_pick(data, 'amount', default=0),
    )


def product_from_dict(data: dict):
    """Build a Product from a form/snapshot row."""
    from .models import Product, CalculationMethod

    return Product(
        name=str(_pick(data, 'name', default='')),
        calculation_method=CalculationMethod.parse(
            _pick(data, 'calculation_method', 'calculationMethod', default='percentage')
        ),
        revenue_share_percent=_pick(data, 'revenue_share_percent', 'revenueSharePercent', 'percentage', default=0),
        cost_per_unit=_pick(data, 'cost_per_unit', 'costPerUnit', default=0),
        expected_units=_pick(data, 'expected_units', 'expectedUnits', default=0),
        direct_costs=tuple(
            direct_cost_from_dict(dc)
            for dc in (_pick(data, 'direct_costs', 'directCosts', default=[]) or [])
        ),
    )


def fixed_costs_from_dict(data: dict):
    """
    Build a FixedCostConfig.

    Accepts either {"total_monthly_cost", "breakdown", "use_breakdown"} or the
    saved snapshot shape {"totalCost", "individualCosts", "useBreakdown"}.
    """
    from .models import FixedCostConfig, FixedCostItem

    items = _pick(data, 'breakdown', 'individual_costs', 'individualCosts', default=[]) or []
    return FixedCostConfig(
        total_monthly_cost=_pick(data, 'total_monthly_cost', 'totalMonthlyCost', 'totalCost', default=0),
        breakdown=tuple(
            FixedCostItem(label=str(_pick(item, 'label', default='')), amount=_pick(item, 'amount', default=0))
            for item in items
        ),
        use_breakdown=bool(_pick(data, 'use_breakdown', 'useBreakdown', default=False)),
    )


def profit_target_from_dict(data: dict):
    """
    Build a ProfitTarget.

    Accepts {"mode": "by_margin"|"by_amount", "value"} or the snapshot shape
    {"useMargin", "targetMargin", "targetProfit"}.
    """
    from .models import ProfitTarget, TargetMode

    mode: Optional[str] = _pick(data, 'mode')
    if mode is not None:
        return ProfitTarget(mode=TargetMode.parse(mode), value=_pick(data, 'value', default=0))

    if _pick(data, 'use_margin', 'useMargin', default=False):
        return ProfitTarget.by_margin(_pick(data, 'target_margin', 'targetMargin', default=0))
    return ProfitTarget.by_amount(_pick(data, 'target_profit', 'targetProfit', default=0))


def request_from_dict(data: dict):
    """
    Build a PricingRequest from a plain payload.

    Nested form: {"products": [...], "fixed_costs": {...}, "profit_target": {...}}.
    Flat snapshot form: {"products": [...], "totalCost": ..., "useMargin": ..., ...}.
    """
    from .models import PricingRequest

    fixed = _pick(data, 'fixed_costs', 'fixedCosts')
    target = _pick(data, 'profit_target', 'profitTarget')

    return PricingRequest(
        products=tuple(product_from_dict(p) for p in (_pick(data, 'products', default=[]) or [])),
        fixed_costs=fixed_costs_from_dict(fixed if isinstance(fixed, dict) else data),
        profit_target=profit_target_from_dict(target if isinstance(target, dict) else data),
    )

"""
What-if scenarios - re-run the engine on a modified copy of a request and diff the totals.
"""
from dataclasses import dataclass, fields, replace
from typing import Optional, Union

from ..engine.errors import ValidationError
from ..engine.models import AggregateResult, FixedCostConfig, PricingOutcome, PricingRequest, ProfitTarget
from ..engine.pricing_engine import PricingEngine

# Product fields a what-if may change
PRODUCT_OVERRIDE_FIELDS = ('cost_per_unit', 'expected_units', 'revenue_share_percent', 'calculation_method')


@dataclass(frozen=True)
class MetricDelta:
    """Change in one aggregate metric between two runs."""
    metric: str
    before: float
    after: float

    @property
    def delta(self) -> float:
        return self.after - self.before

    @property
    def delta_percent(self) -> Optional[float]:
        if self.before == 0:
            return None
        return self.delta / abs(self.before) * 100


@dataclass(frozen=True)
class ScenarioComparison:
    """Base and hypothetical outcomes side by side."""
    base: Union[PricingOutcome, ValidationError]
    scenario: Union[PricingOutcome, ValidationError]
    deltas: tuple[MetricDelta, ...] = ()

    @property
    def ok(self) -> bool:
        return isinstance(self.base, PricingOutcome) and isinstance(self.scenario, PricingOutcome)


def what_if(
    request: PricingRequest,
    product_overrides: Optional[dict[str, dict]] = None,
    fixed_costs: Optional[FixedCostConfig] = None,
    profit_target: Optional[ProfitTarget] = None,
) -> PricingRequest:
    """
    Build a hypothetical copy of a request.

    Args:
        request: The base request (left untouched)
        product_overrides: Map of product name -> {field: new value}
        fixed_costs: Replacement fixed-cost config
        profit_target: Replacement profit target
    """
    product_overrides = product_overrides or {}
    products = []
    for product in request.products:
        changes = product_overrides.get(product.name, {})
        unknown = set(changes) - set(PRODUCT_OVERRIDE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot override {', '.join(sorted(unknown))} on product '{product.name}'")
        products.append(replace(product, **changes) if changes else product)

    return replace(
        request,
        products=tuple(products),
        fixed_costs=fixed_costs or request.fixed_costs,
        profit_target=profit_target or request.profit_target,
    )


def diff_aggregates(before: AggregateResult, after: AggregateResult) -> tuple[MetricDelta, ...]:
    """Per-metric deltas between two aggregate results."""
    return tuple(
        MetricDelta(metric=f.name, before=getattr(before, f.name), after=getattr(after, f.name))
        for f in fields(AggregateResult)
    )


def compare_scenarios(
    base: PricingRequest,
    scenario: PricingRequest,
    engine: Optional[PricingEngine] = None,
) -> ScenarioComparison:
    """Price both requests; deltas are only filled when both succeed."""
    engine = engine or PricingEngine()
    base_outcome = engine.compute(base)
    scenario_outcome = engine.compute(scenario)

    deltas = ()
    if isinstance(base_outcome, PricingOutcome) and isinstance(scenario_outcome, PricingOutcome):
        deltas = diff_aggregates(base_outcome.aggregate, scenario_outcome.aggregate)

    return ScenarioComparison(base=base_outcome, scenario=scenario_outcome, deltas=deltas)

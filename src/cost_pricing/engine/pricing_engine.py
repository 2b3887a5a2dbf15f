"""
Pricing Engine - the single entry point shared by setup, what-if and snapshot replay.

Pipeline (strictly forward, no shared state):
1. Cost aggregation     - fixed + per-product variable/direct costs
2. Revenue target       - total cost + profit policy → one revenue figure
3. Allocation           - split fixed cost and profit between product groups
4. Product pricing      - per-unit prices with fallbacks where the algebra degenerates

`validate` and `compute` return a ValidationError value instead of raising,
and never return partial results.
"""
import logging
from typing import Optional, Sequence, Union

from ..config.settings import get_settings, Settings
from .allocation import allocate, check_percentage_sum
from .cost_aggregator import aggregate_costs
from .errors import EmptyProductList, PricingValidationError, ValidationError
from .models import (
    AggregateResult,
    FixedCostConfig,
    PricingOutcome,
    PricingRequest,
    Product,
    ProfitTarget,
    TraceStep,
)
from .product_pricer import price_products
from .revenue_solver import check_margin, solve_revenue_target

logger = logging.getLogger(__name__)


class PricingEngine:
    """
    Stateless pricing engine.

    Holds only settings (rounding precision, fallback policy); every call
    receives its full input and returns a fresh outcome.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def _check(self, request: PricingRequest):
        """Run the cheap validations in the order a user would fix them."""
        if not request.products:
            raise PricingValidationError(EmptyProductList())
        check_percentage_sum(request.products, self.settings.percentage_total)
        check_margin(request.profit_target)

    def validate(self, request: PricingRequest) -> Optional[ValidationError]:
        """Return None when the request can be priced, else the first error found."""
        try:
            self._check(request)
        except PricingValidationError as e:
            logger.info("Pricing input rejected: %s", e.error.message)
            return e.error
        return None

    def compute(self, request: PricingRequest) -> Union[PricingOutcome, ValidationError]:
        """
        Price every product in the request.

        Args:
            request: PricingRequest with products, fixed costs and profit target

        Returns:
            PricingOutcome on success, or the ValidationError that stopped it
        """
        try:
            return self._compute(request)
        except PricingValidationError as e:
            logger.info("Pricing input rejected: %s", e.error.message)
            return e.error

    def _compute(self, request: PricingRequest) -> PricingOutcome:
        self._check(request)
        products = request.products
        trace = []

        costs = aggregate_costs(products, request.fixed_costs)
        trace.append(TraceStep("Fixed Costs", "Actual fixed cost", f"{costs.actual_fixed_cost:,.2f}"))
        trace.append(TraceStep(
            "Product Costs", "Variable and direct costs", f"{costs.total_variable_and_direct_cost:,.2f}"
        ))

        target = solve_revenue_target(costs.overall_total_cost, request.profit_target)
        trace.append(TraceStep(
            "Revenue Target",
            f"Total cost {costs.overall_total_cost:,.2f} with {request.profit_target.mode.value} "
            f"{request.profit_target.value:g}",
            f"{target.overall_target_revenue:,.2f}",
        ))

        allocation = allocate(products, costs, target)
        trace.append(TraceStep(
            "Allocation", "Fixed cost left for cost-plus products", f"{allocation.fixed_share_cp_total:,.2f}"
        ))
        trace.append(TraceStep(
            "Allocation", "Profit needed from cost-plus products", f"{allocation.profit_needed_from_cp:,.2f}"
        ))

        results = price_products(
            costs, allocation, self.settings.fallback, self.settings.price_decimals
        )

        warnings = []
        for result in results:
            if result.fallback:
                warnings.append(f"Cost-plus fallback '{result.fallback}' used for {result.name or '(unnamed)'}")
            trace.append(TraceStep("Price", result.name or "(unnamed)", f"{result.price:,.2f}"))

        aggregate = AggregateResult(
            actual_fixed_cost=costs.actual_fixed_cost,
            total_variable_and_direct_cost=costs.total_variable_and_direct_cost,
            overall_total_cost=costs.overall_total_cost,
            overall_target_revenue=target.overall_target_revenue,
            overall_profit=target.overall_profit,
        )

        return PricingOutcome(
            aggregate=aggregate,
            results=tuple(results),
            allocation=allocation,
            warnings=tuple(warnings),
            trace=tuple(trace),
        )


def _request(products, fixed_costs, profit_target) -> PricingRequest:
    return PricingRequest(products=tuple(products), fixed_costs=fixed_costs, profit_target=profit_target)


def validate(
    products: Sequence[Product],
    fixed_costs: FixedCostConfig,
    profit_target: ProfitTarget,
) -> Optional[ValidationError]:
    """Cheap pre-check; None means the input can be priced."""
    return PricingEngine().validate(_request(products, fixed_costs, profit_target))


def compute(
    products: Sequence[Product],
    fixed_costs: FixedCostConfig,
    profit_target: ProfitTarget,
) -> Union[PricingOutcome, ValidationError]:
    """Run the full pricing pipeline."""
    return PricingEngine().compute(_request(products, fixed_costs, profit_target))

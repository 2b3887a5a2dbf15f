"""
Data models for the pricing engine.

Inputs are frozen dataclasses built by the caller per invocation; numeric
fields are coerced once in __post_init__ so the pipeline only sees finite,
non-negative numbers.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .parsing import coerce_number, coerce_non_negative


class CalculationMethod(str, Enum):
    """How a product's price is derived."""
    PERCENTAGE = "percentage"
    COST_PLUS = "cost-plus"

    @classmethod
    def parse(cls, value) -> 'CalculationMethod':
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace('_', '-')
        if normalized in ('cost-plus', 'costplus'):
            return cls.COST_PLUS
        if normalized == 'percentage':
            return cls.PERCENTAGE
        raise ValueError(f"Unknown calculation method: {value!r}")


class TargetMode(str, Enum):
    """How the company-wide profit target is expressed."""
    BY_MARGIN = "by_margin"
    BY_AMOUNT = "by_amount"

    @classmethod
    def parse(cls, value) -> 'TargetMode':
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace('-', '_')
        if normalized in ('by_margin', 'margin'):
            return cls.BY_MARGIN
        if normalized in ('by_amount', 'amount'):
            return cls.BY_AMOUNT
        raise ValueError(f"Unknown profit target mode: {value!r}")


@dataclass(frozen=True)
class DirectCost:
    """An itemized, product-specific cost for the whole expected run."""
    description: str
    amount: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, 'amount', coerce_non_negative(self.amount))


@dataclass(frozen=True)
class Product:
    """One line of the catalog being priced."""
    name: str
    calculation_method: CalculationMethod = CalculationMethod.PERCENTAGE
    revenue_share_percent: float = 0.0
    cost_per_unit: float = 0.0
    expected_units: float = 0.0
    direct_costs: tuple[DirectCost, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'calculation_method', CalculationMethod.parse(self.calculation_method))
        object.__setattr__(self, 'revenue_share_percent', coerce_non_negative(self.revenue_share_percent))
        object.__setattr__(self, 'cost_per_unit', coerce_non_negative(self.cost_per_unit))
        object.__setattr__(self, 'expected_units', coerce_non_negative(self.expected_units))
        object.__setattr__(self, 'direct_costs', tuple(self.direct_costs or ()))

    @property
    def is_percentage(self) -> bool:
        return self.calculation_method == CalculationMethod.PERCENTAGE

    @property
    def safe_units(self) -> float:
        """Expected units for division purposes: 0 counts as 1."""
        return self.expected_units if self.expected_units > 0 else 1.0

    @property
    def direct_cost_total(self) -> float:
        return sum(dc.amount for dc in self.direct_costs)


@dataclass(frozen=True)
class FixedCostItem:
    """A labelled line of the fixed-cost breakdown."""
    label: str
    amount: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, 'amount', coerce_non_negative(self.amount))


@dataclass(frozen=True)
class FixedCostConfig:
    """Shared fixed costs, either as one flat total or an itemized breakdown."""
    total_monthly_cost: float = 0.0
    breakdown: tuple[FixedCostItem, ...] = ()
    use_breakdown: bool = False

    def __post_init__(self):
        object.__setattr__(self, 'total_monthly_cost', coerce_non_negative(self.total_monthly_cost))
        object.__setattr__(self, 'breakdown', tuple(self.breakdown or ()))

    @classmethod
    def flat(cls, total_monthly_cost: float) -> 'FixedCostConfig':
        return cls(total_monthly_cost=total_monthly_cost)

    @classmethod
    def itemized(cls, items) -> 'FixedCostConfig':
        return cls(breakdown=tuple(items), use_breakdown=True)

    @property
    def actual_fixed_cost(self) -> float:
        if self.use_breakdown:
            return sum(item.amount for item in self.breakdown)
        return self.total_monthly_cost


@dataclass(frozen=True)
class ProfitTarget:
    """Company-wide profit target: a margin percentage or an absolute amount."""
    mode: TargetMode
    value: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, 'mode', TargetMode.parse(self.mode))
        object.__setattr__(self, 'value', coerce_number(self.value))

    @classmethod
    def by_margin(cls, percent: float) -> 'ProfitTarget':
        return cls(mode=TargetMode.BY_MARGIN, value=percent)

    @classmethod
    def by_amount(cls, amount: float) -> 'ProfitTarget':
        return cls(mode=TargetMode.BY_AMOUNT, value=amount)


@dataclass(frozen=True)
class PricingRequest:
    """The immutable input struct a caller holds and hands to the engine."""
    products: tuple[Product, ...]
    fixed_costs: FixedCostConfig = field(default_factory=FixedCostConfig)
    profit_target: ProfitTarget = field(default_factory=lambda: ProfitTarget.by_amount(0))

    def __post_init__(self):
        object.__setattr__(self, 'products', tuple(self.products or ()))


@dataclass(frozen=True)
class ProductCost:
    """Per-product cost figures produced by the cost aggregator."""
    product: Product
    safe_units: float
    direct_cost_per_unit: float
    unit_cost: float
    product_cost: float


@dataclass(frozen=True)
class CostSummary:
    """Fixed plus variable/direct cost totals."""
    actual_fixed_cost: float
    product_costs: tuple[ProductCost, ...]
    total_variable_and_direct_cost: float
    overall_total_cost: float


@dataclass(frozen=True)
class RevenueTarget:
    """Single company-wide revenue figure and the profit it implies."""
    overall_target_revenue: float
    overall_profit: float


@dataclass(frozen=True)
class PercentageShare:
    """Revenue and fixed-cost entitlement of one percentage-revenue product."""
    revenue_share: float
    fixed_share: float


@dataclass(frozen=True)
class Allocation:
    """Closed-form split of fixed costs and profit between the two product groups."""
    percentage_shares: dict[int, PercentageShare]  # keyed by product position
    fixed_share_cp_total: float
    profit_from_pct: float
    profit_needed_from_cp: float
    total_units_cp: float
    per_unit_profit_cp: float
    per_unit_fixed_cp: float


@dataclass(frozen=True)
class TraceStep:
    """A single step in the pricing resolution trace."""
    step: str
    description: str
    value: Optional[str] = None


@dataclass(frozen=True)
class PricingResult:
    """Final price and diagnostics for one product."""
    name: str
    calculation_method: CalculationMethod
    price: float
    units_needed: Optional[int]  # PERCENTAGE only
    profit_per_unit: float
    percentage_revenue_achieved: float
    allocated_fixed_cost_share: float
    unit_cost: float
    revenue_share: Optional[float] = None
    fallback: Optional[str] = None


@dataclass(frozen=True)
class AggregateResult:
    """Company-level totals the prices were solved against."""
    actual_fixed_cost: float
    total_variable_and_direct_cost: float
    overall_total_cost: float
    overall_target_revenue: float
    overall_profit: float


@dataclass(frozen=True)
class PricingOutcome:
    """Complete result of a pricing calculation."""
    aggregate: AggregateResult
    results: tuple[PricingResult, ...]
    allocation: Allocation
    warnings: tuple[str, ...] = ()
    trace: tuple[TraceStep, ...] = ()

    def result_for(self, name: str) -> Optional[PricingResult]:
        """Look up a product result by name (first match)."""
        for result in self.results:
            if result.name == name:
                return result
        return None

    def get_trace_text(self) -> str:
        """Get human-readable trace as formatted text."""
        lines = []
        for t in self.trace:
            if t.value:
                lines.append(f"• {t.step}: {t.description} = {t.value}")
            else:
                lines.append(f"• {t.step}: {t.description}")
        return "\n".join(lines)

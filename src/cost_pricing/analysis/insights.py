"""
Pricing insights derived from an outcome: break-even, margins, competitors, budget.
"""
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..engine.models import AggregateResult, PricingOutcome, PricingResult


class CompetitorVerdict(str, Enum):
    NO_DATA = "no_data"
    HIGHER = "higher"
    LOWER = "lower"
    EQUAL = "equal"


class BudgetStatus(str, Enum):
    WITHIN = "within"
    OVER = "over"
    NO_QUOTE = "no_quote"
    NO_BUDGET = "no_budget"


@dataclass(frozen=True)
class ProductInsight:
    """Margin and break-even view of one priced product."""
    name: str
    price: float
    unit_cost: float
    margin_percent: float
    break_even_units: Optional[int]


@dataclass(frozen=True)
class CompetitorComparison:
    name: str
    your_price: float
    competitor_price: float
    difference: float
    difference_percent: float
    verdict: CompetitorVerdict

    @property
    def message(self) -> str:
        if self.verdict == CompetitorVerdict.NO_DATA:
            return "No competitor price entered"
        if self.verdict == CompetitorVerdict.HIGHER:
            return f"Your price is {self.difference_percent:.1f}% higher"
        if self.verdict == CompetitorVerdict.LOWER:
            return f"Your price is {abs(self.difference_percent):.1f}% lower"
        return "Prices are equal"


@dataclass(frozen=True)
class BudgetCheck:
    budget: float
    total_revenue: float
    remaining: float
    status: BudgetStatus


def product_margin(price: float, unit_cost: float) -> float:
    """Margin on price, in percent."""
    return (price - unit_cost) / price * 100 if price > 0 else 0.0


def break_even_units(price: float, unit_cost: float, fixed_cost: float) -> Optional[int]:
    """Units needed to cover `fixed_cost` at this contribution margin; None if it never does."""
    contribution = price - unit_cost
    if contribution <= 0:
        return None
    return math.ceil(round(fixed_cost / contribution, 9))


def realized_margin(aggregate: AggregateResult) -> float:
    """Overall profit over overall revenue, in percent."""
    revenue = aggregate.overall_target_revenue
    return aggregate.overall_profit / revenue * 100 if revenue > 0 else 0.0


def product_insight(result: PricingResult, fixed_cost: float) -> ProductInsight:
    return ProductInsight(
        name=result.name,
        price=result.price,
        unit_cost=result.unit_cost,
        margin_percent=product_margin(result.price, result.unit_cost),
        break_even_units=break_even_units(result.price, result.unit_cost, fixed_cost),
    )


def rank_by_margin(outcome: PricingOutcome) -> list[ProductInsight]:
    """
    Products from most to least profitable per unit of revenue.

    Break-even is measured against the whole fixed-cost pool, i.e. the
    units needed if this product alone had to carry the business.
    """
    fixed = outcome.aggregate.actual_fixed_cost
    insights = [product_insight(r, fixed) for r in outcome.results]
    return sorted(insights, key=lambda i: i.margin_percent, reverse=True)


def compare_to_competitor(name: str, your_price: float, competitor_price: float) -> CompetitorComparison:
    difference = your_price - competitor_price
    difference_percent = difference / competitor_price * 100 if competitor_price > 0 else 0.0

    if competitor_price <= 0:
        verdict = CompetitorVerdict.NO_DATA
    elif difference > 0:
        verdict = CompetitorVerdict.HIGHER
    elif difference < 0:
        verdict = CompetitorVerdict.LOWER
    else:
        verdict = CompetitorVerdict.EQUAL

    return CompetitorComparison(
        name=name,
        your_price=your_price,
        competitor_price=competitor_price,
        difference=difference,
        difference_percent=difference_percent,
        verdict=verdict,
    )


def compare_outcome_to_competitors(
    outcome: PricingOutcome,
    competitor_prices: dict[str, float],
) -> list[CompetitorComparison]:
    """Compare every priced product; missing competitor prices count as no data."""
    return [
        compare_to_competitor(r.name, r.price, float(competitor_prices.get(r.name, 0) or 0))
        for r in outcome.results
    ]


def check_budget(budget: float, total_revenue: float) -> BudgetCheck:
    """Does a client's budget cover the quoted revenue?"""
    remaining = budget - total_revenue
    if budget <= 0:
        status = BudgetStatus.NO_BUDGET
    elif total_revenue <= 0:
        status = BudgetStatus.NO_QUOTE
    elif remaining >= 0:
        status = BudgetStatus.WITHIN
    else:
        status = BudgetStatus.OVER

    return BudgetCheck(budget=budget, total_revenue=total_revenue, remaining=remaining, status=status)

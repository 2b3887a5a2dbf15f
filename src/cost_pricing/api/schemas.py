"""
Pydantic request models for the pricing API.

Numbers are accepted loosely (str, None) and coerced by the engine models,
matching what the web form sends.
"""
from pydantic import BaseModel, field_validator
from typing import Any, Dict, List, Optional

from ..analysis.costing import CostingInput, ExpenseItem
from ..engine.models import (
    CalculationMethod,
    DirectCost,
    FixedCostConfig,
    FixedCostItem,
    PricingRequest,
    Product,
    ProfitTarget,
    TargetMode,
)


class DirectCostIn(BaseModel):
    description: str = ""
    amount: Any = 0


class ProductIn(BaseModel):
    """Request model for one product row."""
    name: str = ""
    calculation_method: str = "percentage"
    revenue_share_percent: Any = 0
    cost_per_unit: Any = 0
    expected_units: Any = 0
    direct_costs: List[DirectCostIn] = []

    @field_validator("calculation_method")
    @classmethod
    def _known_method(cls, value: str) -> str:
        return CalculationMethod.parse(value).value

    def to_product(self) -> Product:
        return Product(
            name=self.name,
            calculation_method=self.calculation_method,
            revenue_share_percent=self.revenue_share_percent,
            cost_per_unit=self.cost_per_unit,
            expected_units=self.expected_units,
            direct_costs=tuple(DirectCost(dc.description, dc.amount) for dc in self.direct_costs),
        )


class FixedCostItemIn(BaseModel):
    label: str = ""
    amount: Any = 0


class FixedCostsIn(BaseModel):
    total_monthly_cost: Any = 0
    breakdown: List[FixedCostItemIn] = []
    use_breakdown: bool = False

    def to_config(self) -> FixedCostConfig:
        return FixedCostConfig(
            total_monthly_cost=self.total_monthly_cost,
            breakdown=tuple(FixedCostItem(i.label, i.amount) for i in self.breakdown),
            use_breakdown=self.use_breakdown,
        )


class ProfitTargetIn(BaseModel):
    mode: str = "by_amount"  # "by_margin" or "by_amount"
    value: Any = 0

    @field_validator("mode")
    @classmethod
    def _known_mode(cls, value: str) -> str:
        return TargetMode.parse(value).value

    def to_target(self) -> ProfitTarget:
        return ProfitTarget(mode=self.mode, value=self.value)


class PricingRequestIn(BaseModel):
    """Request model for validate/compute."""
    products: List[ProductIn] = []
    fixed_costs: FixedCostsIn = FixedCostsIn()
    profit_target: ProfitTargetIn = ProfitTargetIn()

    def to_request(self) -> PricingRequest:
        return PricingRequest(
            products=tuple(p.to_product() for p in self.products),
            fixed_costs=self.fixed_costs.to_config(),
            profit_target=self.profit_target.to_target(),
        )


class ProductOverrideIn(BaseModel):
    """Fields a what-if scenario may change on one product."""
    cost_per_unit: Optional[Any] = None
    expected_units: Optional[Any] = None
    revenue_share_percent: Optional[Any] = None
    calculation_method: Optional[str] = None

    @field_validator("calculation_method")
    @classmethod
    def _known_method(cls, value: Optional[str]) -> Optional[str]:
        return CalculationMethod.parse(value).value if value is not None else None


class WhatIfRequest(BaseModel):
    base: PricingRequestIn
    product_overrides: Dict[str, ProductOverrideIn] = {}
    fixed_costs: Optional[FixedCostsIn] = None
    profit_target: Optional[ProfitTargetIn] = None

    def product_overrides_dict(self) -> Dict[str, dict]:
        return {
            name: override.model_dump(exclude_none=True)
            for name, override in self.product_overrides.items()
        }


class InsightsRequest(BaseModel):
    request: PricingRequestIn
    competitor_prices: Optional[Dict[str, float]] = None
    client_budget: Optional[float] = None


class ExpenseItemIn(BaseModel):
    name: str = ""
    amount: Any = 0


class CostingIn(BaseModel):
    """Single-product costing form; rates are fractions (0.1 = 10%)."""
    unit_cost: Any = 0
    total_units: Any = 0
    director_rate: Any = 0
    staff_rate: Any = 0
    accounting_rate: Any = 0
    domain_rate: Any = 0
    data_rate: Any = 0
    airtime: Any = 0
    other_cost: Any = 0
    custom_expenses: List[ExpenseItemIn] = []
    markup: Any = 0
    custom_rate: Optional[Any] = None
    use_margin: bool = True

    def to_input(self) -> CostingInput:
        return CostingInput(
            unit_cost=self.unit_cost,
            total_units=self.total_units,
            director_rate=self.director_rate,
            staff_rate=self.staff_rate,
            accounting_rate=self.accounting_rate,
            domain_rate=self.domain_rate,
            data_rate=self.data_rate,
            airtime=self.airtime,
            other_cost=self.other_cost,
            custom_expenses=tuple(ExpenseItem(e.name, e.amount) for e in self.custom_expenses),
            markup=self.markup,
        )

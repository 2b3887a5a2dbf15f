"""
Single-product costing calculator.

Works outside the catalog pipeline: one product's direct cost is loaded with
operating expenses (some as rates on the direct cost, some as flat amounts)
and priced with a markup on the loaded total. Rates are fractions, so 0.1
means 10%.
"""
from dataclasses import dataclass
from typing import Union

from ..engine.errors import InvalidCustomMargin
from ..engine.parsing import coerce_non_negative, coerce_number


@dataclass(frozen=True)
class ExpenseItem:
    """A named operating expense amount."""
    name: str
    amount: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, 'amount', coerce_non_negative(self.amount))


@dataclass(frozen=True)
class CostingInput:
    """Everything the calculator needs for one product."""
    unit_cost: float = 0.0
    total_units: float = 0.0
    director_rate: float = 0.0
    staff_rate: float = 0.0
    accounting_rate: float = 0.0
    domain_rate: float = 0.0
    data_rate: float = 0.0
    airtime: float = 0.0
    other_cost: float = 0.0
    custom_expenses: tuple[ExpenseItem, ...] = ()
    markup: float = 0.0

    def __post_init__(self):
        for name in (
            'unit_cost', 'total_units', 'director_rate', 'staff_rate', 'accounting_rate',
            'domain_rate', 'data_rate', 'airtime', 'other_cost', 'markup',
        ):
            object.__setattr__(self, name, coerce_non_negative(getattr(self, name)))
        object.__setattr__(self, 'custom_expenses', tuple(self.custom_expenses or ()))


@dataclass(frozen=True)
class CostingResult:
    direct_cost: float
    operating_expenses: float
    total_cost: float
    cost_per_unit: float
    selling_price: float
    net_profit: float
    expense_breakdown: tuple[ExpenseItem, ...]


@dataclass(frozen=True)
class CustomPrice:
    """Per-unit price from a margin or markup rate on the loaded unit cost."""
    price: float
    profit_per_unit: float
    use_margin: bool


def cost_single_product(inputs: CostingInput) -> CostingResult:
    """Load direct cost with operating expenses and apply the markup."""
    direct_cost = inputs.unit_cost * inputs.total_units

    breakdown = (
        ExpenseItem('Director', direct_cost * inputs.director_rate),
        ExpenseItem('Staff/Admin', direct_cost * inputs.staff_rate),
        ExpenseItem('Accounting', direct_cost * inputs.accounting_rate),
        ExpenseItem('Domain', direct_cost * inputs.domain_rate),
        ExpenseItem('Data', direct_cost * inputs.data_rate),
        ExpenseItem('Airtime', inputs.airtime),
        ExpenseItem('Other', inputs.other_cost),
    ) + inputs.custom_expenses

    operating_expenses = sum(item.amount for item in breakdown)
    total_cost = direct_cost + operating_expenses
    selling_price = total_cost * (1 + inputs.markup)

    return CostingResult(
        direct_cost=direct_cost,
        operating_expenses=operating_expenses,
        total_cost=total_cost,
        cost_per_unit=total_cost / inputs.total_units if inputs.total_units > 0 else 0.0,
        selling_price=selling_price,
        net_profit=selling_price - total_cost,
        expense_breakdown=breakdown,
    )


def custom_price(
    cost_per_unit: float,
    rate: float,
    use_margin: bool = True,
) -> Union[CustomPrice, InvalidCustomMargin]:
    """
    Price one unit from a target margin (profit over price) or a markup (profit over cost).

    A margin of 1 or more has no finite price and comes back as InvalidCustomMargin.
    """
    cost_per_unit = coerce_non_negative(cost_per_unit)
    rate = coerce_number(rate)

    if use_margin:
        if rate >= 1:
            return InvalidCustomMargin(margin=rate)
        price = cost_per_unit / (1 - rate)
    else:
        price = cost_per_unit * (1 + rate)

    return CustomPrice(price=price, profit_per_unit=price - cost_per_unit, use_margin=use_margin)

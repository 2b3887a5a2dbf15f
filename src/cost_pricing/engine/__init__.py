"""Engine subpackage - cost allocation and pricing logic."""
from .pricing_engine import PricingEngine, validate, compute
from .models import (
    AggregateResult,
    CalculationMethod,
    DirectCost,
    FixedCostConfig,
    FixedCostItem,
    PricingOutcome,
    PricingRequest,
    PricingResult,
    Product,
    ProfitTarget,
    TargetMode,
)
from .errors import ValidationError, PercentageSumMismatch, InvalidMargin, EmptyProductList
from .parsing import request_from_dict

__all__ = [
    'PricingEngine', 'validate', 'compute', 'request_from_dict',
    'AggregateResult', 'CalculationMethod', 'DirectCost', 'FixedCostConfig', 'FixedCostItem',
    'PricingOutcome', 'PricingRequest', 'PricingResult', 'Product', 'ProfitTarget', 'TargetMode',
    'ValidationError', 'PercentageSumMismatch', 'InvalidMargin', 'EmptyProductList',
]

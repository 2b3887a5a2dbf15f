"""
Validation errors returned by the pricing engine.

Errors are plain values: `validate` and `compute` hand them back instead of
raising, and callers keep their previous results when they receive one.
"""
from dataclasses import dataclass, asdict


@dataclass(frozen=True)
class ValidationError:
    """Base class for every recoverable engine error."""

    code = "VALIDATION_ERROR"

    @property
    def message(self) -> str:
        return "Invalid pricing input."

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message, **asdict(self)}


@dataclass(frozen=True)
class PercentageSumMismatch(ValidationError):
    """Percentage-group revenue shares do not round to 100."""
    actual_sum: float

    code = "PERCENTAGE_SUM_MISMATCH"

    @property
    def message(self) -> str:
        return (
            "Total revenue percentages for percentage-based products must sum up to 100%. "
            f"Currently: {self.actual_sum:.2f}%."
        )


@dataclass(frozen=True)
class InvalidMargin(ValidationError):
    """Margin target at or above 100%."""
    percent: float

    code = "INVALID_MARGIN"

    @property
    def message(self) -> str:
        return f"Target margin must be less than 100%. Got {self.percent:g}%."


@dataclass(frozen=True)
class EmptyProductList(ValidationError):
    """No products supplied."""

    code = "EMPTY_PRODUCT_LIST"

    @property
    def message(self) -> str:
        return "Please add at least one product."


@dataclass(frozen=True)
class InvalidCustomMargin(ValidationError):
    """Single-product margin rate at or above 1 (100%)."""
    margin: float

    code = "INVALID_CUSTOM_MARGIN"

    @property
    def message(self) -> str:
        return f"Custom margin must be below 100%. Got {self.margin * 100:g}%."


class PricingValidationError(ValueError):
    """Raised inside the pipeline; carries the error value back to the entry point."""

    def __init__(self, error: ValidationError):
        super().__init__(error.message)
        self.error = error

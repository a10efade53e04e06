"""Result pattern for callers that prefer a value to an exception.

Forms that let a user edit amount and term want to show a validation message
next to the offending field instead of handling exceptions; ``try_calculate``
returns a ``Result`` whose ``error_type`` is the name of that field.
"""
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from .data_models import FeeConfig, LoanCostSummary, LoanLimits, LoanTerms
from .engine import calculate
from .errors import CalculationError

T = TypeVar('T')


@dataclass(frozen=True)
class Result(Generic[T]):
    """Represents the outcome of an operation.

    Attributes:
        success: Whether the operation succeeded.
        value: The return value on success, None on failure.
        error: Error message on failure, None on success.
        error_type: The input field the error relates to.
    """
    success: bool
    value: Optional[T] = None
    error: Optional[str] = None
    error_type: Optional[str] = None

    @classmethod
    def ok(cls, value: T) -> 'Result[T]':
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: str, error_type: str = None) -> 'Result[T]':
        return cls(success=False, error=error, error_type=error_type)

    def __bool__(self) -> bool:
        return self.success

    def unwrap(self) -> T:
        """Get the value, raising an exception if the operation failed.

        Raises:
            ValueError: If the operation failed.
        """
        if not self.success:
            raise ValueError(f"Result unwrap failed: {self.error}")
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value if self.success else default


def try_calculate(
    terms: LoanTerms,
    fee_config: FeeConfig,
    limits: Optional[LoanLimits] = None,
) -> 'Result[LoanCostSummary]':
    """Run ``calculate`` and capture a validation failure as a ``Result``."""
    try:
        return Result.ok(calculate(terms, fee_config, limits))
    except CalculationError as exc:
        return Result.fail(exc.message, exc.field)

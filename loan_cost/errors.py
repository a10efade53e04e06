"""Typed errors raised by the loan cost calculator."""


class CalculationError(ValueError):
    """Base exception for all calculation errors.

    ``field`` names the input that caused the failure so a form can show the
    message next to the right control.
    """

    field = None

    def __init__(self, message: str, **details):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self):
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


class InvalidPrincipal(CalculationError):
    """Raised when the principal is not a positive amount in whole cents."""

    field = "principal"


class InvalidTerm(CalculationError):
    """Raised when the term is not positive or exceeds the allowed maximum."""

    field = "term_days"


class InvalidRate(CalculationError):
    """Raised when the monthly rate is negative or above the allowed ceiling."""

    field = "monthly_rate"


class InvalidSalaryDay(CalculationError):
    """Raised when the salary day is outside 1-31."""

    field = "salary_day"


class InvalidFeeConfig(CalculationError):
    field = "fee_config"


class InvalidSettlementDate(CalculationError):
    field = "settlement_date"


class InvalidPayment(CalculationError):
    field = "previous_payments"


class InvalidStartDate(CalculationError):
    field = "start_date"

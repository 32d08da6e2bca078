"""Exception hierarchy for the financial engine."""


class FinanceError(ValueError):
    """Base exception for all engine errors."""


class InvalidTermError(FinanceError):
    """Raised when a loan term in months is zero or negative."""


class InvalidRateError(FinanceError):
    """Raised when an annual interest rate is negative."""


class InvalidUsefulLifeError(FinanceError):
    """Raised when an asset's useful life in years is zero or negative."""


class InvalidPaymentError(FinanceError):
    """Raised when a payment amount is zero or negative."""


class LoanClosedError(FinanceError):
    """Raised when a payment is recorded against a paid-off loan."""

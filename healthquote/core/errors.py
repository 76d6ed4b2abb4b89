"""Custom exceptions for healthquote.

The quote pipeline itself never raises: degenerate inputs produce empty
results. These exceptions cover the edges around it (catalog loading,
argument parsing and the quote flow controller).
"""

from typing import Any, Optional


class HealthQuoteError(Exception):
    """Base exception for all healthquote errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class CatalogError(HealthQuoteError):
    """Raised when catalog data cannot be turned into plans.

    Examples:
    - Unknown age bracket label in a price table
    - Unknown coparticipation or room type
    - Negative price
    - Duplicate plan id
    """

    def __init__(self, message: str, plan_id: Optional[str] = None):
        super().__init__(message, details={"plan_id": plan_id})
        self.plan_id = plan_id


class InvalidSelection(HealthQuoteError):
    """Raised when bracket counts cannot be parsed."""

    def __init__(self, message: str, raw: Optional[str] = None):
        super().__init__(message, details={"raw": raw})
        self.raw = raw


class UnknownCategory(HealthQuoteError):
    """Raised when a contracting category code is not recognized."""

    def __init__(self, code: str):
        super().__init__(
            f"Unknown contracting category: {code}",
            details={"code": code},
        )
        self.code = code


class InvalidTransition(HealthQuoteError):
    """Raised when a quote flow action is not valid from the current step.

    Examples:
    - Continuing to results with zero lives selected
    - Choosing a business tier before picking the business path
    """

    def __init__(
        self,
        message: str,
        current_step: Optional[str] = None,
        reason: Optional[str] = None,
    ):
        super().__init__(
            message,
            details={
                "current_step": current_step,
                "reason": reason,
            },
        )
        self.current_step = current_step
        self.reason = reason

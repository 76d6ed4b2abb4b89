"""Core types, errors, and configuration for healthquote."""

from healthquote.core.config import QuoteConfig
from healthquote.core.errors import (
    CatalogError,
    HealthQuoteError,
    InvalidSelection,
    InvalidTransition,
    UnknownCategory,
)
from healthquote.core.types import (
    AgeBracket,
    ContractingCategory,
    CopayFee,
    CoparticipationType,
    RoomType,
)

__all__ = [
    # Types
    "AgeBracket",
    "ContractingCategory",
    "CoparticipationType",
    "RoomType",
    "CopayFee",
    # Config
    "QuoteConfig",
    # Errors
    "HealthQuoteError",
    "CatalogError",
    "InvalidSelection",
    "UnknownCategory",
    "InvalidTransition",
]

"""healthquote - health plan quoting for brokers.

Given beneficiary counts per age bracket and a contracting category
(individual or a business tier), quotes every eligible plan, ranks the
results and groups coparticipation variants and operators for display.

Usage:
    from healthquote import BracketSelection, ContractingCategory, QuoteEngine

    engine = QuoteEngine()
    selection = BracketSelection.from_mapping({"0-18": 1, "29-33": 2})
    result = engine.quote(ContractingCategory.PF, selection)
    for group in result.operator_groups:
        print(group.operator, group.min_price)
"""

from healthquote.core.config import QuoteConfig
from healthquote.core.errors import HealthQuoteError
from healthquote.core.types import (
    AgeBracket,
    ContractingCategory,
    CoparticipationType,
    RoomType,
)
from healthquote.quoting.catalog import HealthPlan, PlanCatalog
from healthquote.quoting.engine import QuoteEngine, QuoteResult, run_quote
from healthquote.quoting.flow import QuoteFlow, can_advance
from healthquote.quoting.selection import BracketSelection

__version__ = "0.1.0"

__all__ = [
    # Types
    "AgeBracket",
    "ContractingCategory",
    "CoparticipationType",
    "RoomType",
    # Catalog
    "HealthPlan",
    "PlanCatalog",
    # Quoting
    "BracketSelection",
    "QuoteEngine",
    "QuoteResult",
    "run_quote",
    "QuoteFlow",
    "can_advance",
    # Config
    "QuoteConfig",
    # Errors
    "HealthQuoteError",
    # Version
    "__version__",
]

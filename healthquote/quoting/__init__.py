"""Quote calculation and plan grouping."""

from healthquote.quoting.catalog import HealthPlan, PlanCatalog
from healthquote.quoting.eligibility import filter_eligible
from healthquote.quoting.engine import EmptyReason, QuoteEngine, QuoteResult, run_quote
from healthquote.quoting.flow import (
    AdvanceBlock,
    QuoteFlow,
    QuoteStep,
    advance_block,
    can_advance,
)
from healthquote.quoting.grouping import (
    OperatorGroup,
    PlanGroup,
    group_by_operator,
    group_variants,
)
from healthquote.quoting.pricing import BracketDetail, CalculatedPlan, compute_price
from healthquote.quoting.ranking import WEIGHT_RULES, WeightRule, plan_weight, rank_plans
from healthquote.quoting.selection import BracketSelection, parse_bracket_assignments

__all__ = [
    "HealthPlan",
    "PlanCatalog",
    "BracketSelection",
    "parse_bracket_assignments",
    "filter_eligible",
    "BracketDetail",
    "CalculatedPlan",
    "compute_price",
    "WeightRule",
    "WEIGHT_RULES",
    "plan_weight",
    "rank_plans",
    "PlanGroup",
    "OperatorGroup",
    "group_variants",
    "group_by_operator",
    "EmptyReason",
    "QuoteResult",
    "QuoteEngine",
    "run_quote",
    "QuoteStep",
    "AdvanceBlock",
    "QuoteFlow",
    "advance_block",
    "can_advance",
]

"""Quote pipeline.

selection + category
    -> filter_eligible -> compute_price -> rank_plans
    -> group_variants -> group_by_operator

Every call rebuilds all outputs from scratch. Nothing is cached between
calls, so the engine is safe to share across callers.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Sequence

from healthquote.core.types import ContractingCategory
from healthquote.quoting.catalog import PlanCatalog
from healthquote.quoting.eligibility import filter_eligible
from healthquote.quoting.grouping import (
    OperatorGroup,
    PlanGroup,
    group_by_operator,
    group_variants,
)
from healthquote.quoting.pricing import CalculatedPlan, compute_price
from healthquote.quoting.ranking import WEIGHT_RULES, WeightRule, rank_plans
from healthquote.quoting.selection import BracketSelection

logger = logging.getLogger(__name__)


class EmptyReason(str, Enum):
    """Why a quote came back without plans."""

    NO_SELECTION = "no_selection"  # Nothing entered yet
    NO_ELIGIBLE_PLANS = "no_eligible_plans"  # Selection made, nothing sold for it


@dataclass
class QuoteResult:
    """Output of one pipeline run."""

    category: Optional[ContractingCategory]
    selection: BracketSelection
    plans: list[CalculatedPlan] = field(default_factory=list)
    plan_groups: list[PlanGroup] = field(default_factory=list)
    operator_groups: list[OperatorGroup] = field(default_factory=list)

    @property
    def total_lives(self) -> int:
        return self.selection.total_lives

    @property
    def is_solo_minor(self) -> bool:
        return self.selection.is_solo_minor

    @property
    def is_empty(self) -> bool:
        return not self.plans

    @property
    def empty_reason(self) -> Optional[EmptyReason]:
        if self.plans:
            return None
        if not self.selection.active_brackets():
            return EmptyReason.NO_SELECTION
        return EmptyReason.NO_ELIGIBLE_PLANS

    @property
    def large_group_note(self) -> bool:
        """30+ lives are quoted from the 2-29 table for reference only."""
        return self.category is ContractingCategory.PME_30

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "category": self.category.value if self.category else None,
            "selection": self.selection.to_dict(),
            "total_lives": self.total_lives,
            "is_solo_minor": self.is_solo_minor,
            "large_group_note": self.large_group_note,
            "empty_reason": self.empty_reason.value if self.empty_reason else None,
            "plans": [cp.to_dict() for cp in self.plans],
            "operator_groups": [group.to_dict() for group in self.operator_groups],
        }


def run_quote(
    catalog: PlanCatalog,
    category: Optional[ContractingCategory],
    selection: BracketSelection,
    rules: Sequence[WeightRule] = WEIGHT_RULES,
) -> QuoteResult:
    """Run the full pipeline. Never raises for any category/selection."""
    snapshot = selection.copy()
    result = QuoteResult(category=category, selection=snapshot)

    if not snapshot.active_brackets():
        logger.debug("[Quote] No active brackets, returning empty result")
        return result

    eligible = filter_eligible(catalog, category, snapshot)
    calculated = [compute_price(plan, snapshot) for plan in eligible]
    result.plans = rank_plans(calculated, rules)
    result.plan_groups = group_variants(result.plans)
    result.operator_groups = group_by_operator(result.plan_groups)

    logger.debug(
        f"[Quote] category={category.value if category else None} "
        f"lives={snapshot.total_lives} eligible={len(eligible)} "
        f"groups={len(result.plan_groups)} operators={len(result.operator_groups)}"
    )
    return result


class QuoteEngine:
    """Binds a catalog (and optionally a custom weight table) to the pipeline."""

    def __init__(
        self,
        catalog: Optional[PlanCatalog] = None,
        rules: Sequence[WeightRule] = WEIGHT_RULES,
    ):
        self.catalog = PlanCatalog.default() if catalog is None else catalog
        self.rules = tuple(rules)

    def quote(
        self,
        category: Optional[ContractingCategory],
        selection: BracketSelection,
    ) -> QuoteResult:
        return run_quote(self.catalog, category, selection, self.rules)

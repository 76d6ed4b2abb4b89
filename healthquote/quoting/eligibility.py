"""Eligibility filtering of catalog plans."""

from typing import Iterable, Optional

from healthquote.core.types import ContractingCategory
from healthquote.quoting.catalog import HealthPlan
from healthquote.quoting.selection import BracketSelection

# Operators that do not sell individual contracts to minors without an adult
# titleholder. Matched as lower-cased substrings of the operator name.
NO_SOLO_MINOR_PF_OPERATORS = ("fênix", "fenix")


def excludes_solo_minor(plan: HealthPlan) -> bool:
    """True if the plan's operator refuses individual minor-only contracts."""
    operator = plan.operator.lower()
    return any(term in operator for term in NO_SOLO_MINOR_PF_OPERATORS)


def filter_eligible(
    catalog: Iterable[HealthPlan],
    category: Optional[ContractingCategory],
    selection: BracketSelection,
) -> list[HealthPlan]:
    """Plans that may be quoted for ``category``, in catalog order.

    A missing category matches nothing. For individual contracts where every
    beneficiary is a minor, operators in NO_SOLO_MINOR_PF_OPERATORS are dropped.
    Business categories get no operator exclusion here; their solo-minor
    block lives in the flow validation.
    """
    if category is None:
        return []

    plans = [plan for plan in catalog if plan.is_eligible(category)]

    if category is ContractingCategory.PF and selection.is_solo_minor:
        plans = [plan for plan in plans if not excludes_solo_minor(plan)]

    return plans

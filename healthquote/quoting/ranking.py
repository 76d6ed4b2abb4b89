"""Ranking of calculated plans.

Plans are ordered by a curated "preferred to sell" weight first and by
total price second. The weight comes from WEIGHT_RULES, an ordered rule
table evaluated top to bottom where the first matching rule wins.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from healthquote.quoting.catalog import HealthPlan
from healthquote.quoting.pricing import CalculatedPlan

# Weight for plans no rule matches (lowest priority)
DEFAULT_WEIGHT = 100


@dataclass(frozen=True)
class WeightRule:
    """Assigns ``weight`` to plans whose operator contains any of
    ``operator_terms`` and, when ``name_term`` is set, whose product name
    contains it. Matching is on lower-cased names.
    """

    operator_terms: tuple[str, ...]
    weight: int
    name_term: Optional[str] = None

    def matches(self, plan: HealthPlan) -> bool:
        operator = plan.operator.lower()
        if not any(term in operator for term in self.operator_terms):
            return False
        return self.name_term is None or self.name_term in plan.name.lower()


AMHEMED = ("amhemed",)
GNDI = ("gndi", "notredame")

WEIGHT_RULES: tuple[WeightRule, ...] = (
    WeightRule(AMHEMED, 10, "ideal"),
    WeightRule(AMHEMED, 11, "amhe+"),
    WeightRule(AMHEMED, 12, "plus"),
    WeightRule(AMHEMED, 19),
    WeightRule(GNDI, 20, "nosso"),
    WeightRule(GNDI, 21, "notrelife"),
    WeightRule(GNDI, 22, "200"),
    WeightRule(GNDI, 23, "400"),
    WeightRule(GNDI, 29),
    WeightRule(("eva",), 30),
    WeightRule(("fênix", "fenix"), 40),
    WeightRule(("unimed",), 50),
    WeightRule(("amil",), 60),
)


def plan_weight(plan: HealthPlan, rules: Sequence[WeightRule] = WEIGHT_RULES) -> int:
    """Priority weight of a plan. Lower sorts first."""
    for rule in rules:
        if rule.matches(plan):
            return rule.weight
    return DEFAULT_WEIGHT


def rank_plans(
    plans: Iterable[CalculatedPlan],
    rules: Sequence[WeightRule] = WEIGHT_RULES,
) -> list[CalculatedPlan]:
    """Order plans by (weight, total price).

    ``sorted`` is stable, so input order breaks any remaining ties.
    """
    return sorted(plans, key=lambda cp: (plan_weight(cp.plan, rules), cp.total_price))

"""Grouping of ranked plans for display.

Two levels:
- PlanGroup: coparticipation variants of one product (same operator,
  name and room type)
- OperatorGroup: every PlanGroup of one operator, for the accordion view

Both keep first-seen order from the ranked input.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from healthquote.quoting.pricing import CalculatedPlan


@dataclass
class PlanGroup:
    """Variants of the same product, in rank order."""

    key: tuple[str, str, str]
    variants: list[CalculatedPlan] = field(default_factory=list)

    @property
    def operator(self) -> str:
        return self.key[0]

    @property
    def name(self) -> str:
        return self.key[1]

    @property
    def room_type(self) -> str:
        return self.key[2]

    @property
    def base(self) -> CalculatedPlan:
        """First variant seen, used for shared display data."""
        return self.variants[0]

    @property
    def min_price(self) -> float:
        return min(variant.total_price for variant in self.variants)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "operator": self.operator,
            "name": self.name,
            "type": self.room_type,
            "variants": [variant.to_dict() for variant in self.variants],
        }


@dataclass
class OperatorGroup:
    """All product groups of one operator."""

    operator: str
    logo_color: str
    groups: list[PlanGroup] = field(default_factory=list)

    def all_variants(self) -> list[CalculatedPlan]:
        return [variant for group in self.groups for variant in group.variants]

    @property
    def min_price(self) -> Optional[float]:
        """Cheapest total across every variant, computed on access."""
        variants = self.all_variants()
        if not variants:
            return None
        return min(variant.total_price for variant in variants)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "operator": self.operator,
            "logo_color": self.logo_color,
            "min_price": self.min_price,
            "groups": [group.to_dict() for group in self.groups],
        }


def group_variants(ranked: Iterable[CalculatedPlan]) -> list[PlanGroup]:
    """Group plans by (operator, name, room type), keeping first-seen order.

    No limit on how many variants a group may hold.
    """
    groups: dict[tuple[str, str, str], PlanGroup] = {}
    for calculated in ranked:
        key = calculated.plan.variant_key
        if key not in groups:
            groups[key] = PlanGroup(key=key)
        groups[key].variants.append(calculated)
    return list(groups.values())


def group_by_operator(plan_groups: Iterable[PlanGroup]) -> list[OperatorGroup]:
    """Group product groups by operator, keeping first-seen order."""
    operators: dict[str, OperatorGroup] = {}
    for group in plan_groups:
        existing = operators.get(group.operator)
        if existing is None:
            existing = OperatorGroup(
                operator=group.operator,
                logo_color=group.base.plan.logo_color,
            )
            operators[group.operator] = existing
        existing.groups.append(group)
    return list(operators.values())

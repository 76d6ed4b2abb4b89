"""Per-plan price calculation from bracket counts."""

from dataclasses import dataclass, field
from typing import Any

from healthquote.core.types import AgeBracket
from healthquote.quoting.catalog import HealthPlan
from healthquote.quoting.selection import BracketSelection


@dataclass(frozen=True)
class BracketDetail:
    """Cost of one active bracket within a plan quote."""

    bracket: AgeBracket
    count: int
    unit_price: float
    subtotal: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "bracket": self.bracket.value,
            "count": self.count,
            "unit_price": self.unit_price,
            "subtotal": self.subtotal,
        }


@dataclass(frozen=True)
class CalculatedPlan:
    """A plan priced for a specific selection."""

    plan: HealthPlan
    total_price: float
    details: tuple[BracketDetail, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "plan_id": self.plan.id,
            "operator": self.plan.operator,
            "name": self.plan.name,
            "type": self.plan.room_type.value,
            "coparticipation_type": self.plan.coparticipation.value,
            "total_price": self.total_price,
            "details": [detail.to_dict() for detail in self.details],
        }


def compute_price(plan: HealthPlan, selection: BracketSelection) -> CalculatedPlan:
    """Price ``plan`` for every active bracket of ``selection``.

    Brackets the plan does not price count as 0 and the plan is kept.
    """
    details = []
    for bracket, count in selection.active_brackets():
        unit_price = plan.price_for(bracket)
        details.append(
            BracketDetail(
                bracket=bracket,
                count=count,
                unit_price=unit_price,
                subtotal=unit_price * count,
            )
        )

    total = sum((detail.subtotal for detail in details), 0.0)
    return CalculatedPlan(plan=plan, total_price=total, details=tuple(details))

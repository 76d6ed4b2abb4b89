"""Helpers for side-by-side plan comparison and the price summary table."""

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence

from healthquote.core.types import CoparticipationType
from healthquote.quoting.grouping import PlanGroup
from healthquote.quoting.pricing import CalculatedPlan


def split_variants(
    group: PlanGroup,
) -> tuple[Optional[CalculatedPlan], Optional[CalculatedPlan]]:
    """Return the (full, non-full) variants of a group.

    Non-full covers both partial and no coparticipation. Either side is None
    when the group has no such variant.
    """
    full = None
    non_full = None
    for variant in group.variants:
        if variant.plan.coparticipation is CoparticipationType.FULL:
            full = full or variant
        else:
            non_full = non_full or variant
    return full, non_full


def comparison_pair(group: PlanGroup) -> Optional[tuple[CalculatedPlan, CalculatedPlan]]:
    """Both variants of a product when it has a full and a non-full one."""
    full, non_full = split_variants(group)
    if full is None or non_full is None:
        return None
    return full, non_full


@dataclass(frozen=True)
class SummaryRow:
    """One product line of the price summary table."""

    operator: str
    name: str
    room_type: str
    logo_color: str
    non_full_price: Optional[float]
    full_price: Optional[float]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "operator": self.operator,
            "name": self.name,
            "type": self.room_type,
            "logo_color": self.logo_color,
            "non_full_price": self.non_full_price,
            "full_price": self.full_price,
        }


def summary_rows(groups: Iterable[PlanGroup]) -> list[SummaryRow]:
    """Price summary, one row per product group, in group order."""
    rows = []
    for group in groups:
        full, non_full = split_variants(group)
        rows.append(
            SummaryRow(
                operator=group.operator,
                name=group.name,
                room_type=group.room_type,
                logo_color=group.base.plan.logo_color,
                non_full_price=non_full.total_price if non_full else None,
                full_price=full.total_price if full else None,
            )
        )
    return rows


def aligned_copay_rows(plans: Sequence[CalculatedPlan]) -> list[tuple[str, list[Optional[str]]]]:
    """Copay fees lined up by service for a comparison table.

    Services appear in first-seen order across ``plans``. Each row holds one
    value per plan, None where that plan does not list the service.
    """
    services = list(
        dict.fromkeys(fee.service for cp in plans for fee in cp.plan.copay_fees)
    )
    lookups = [{fee.service: fee.value for fee in cp.plan.copay_fees} for cp in plans]
    return [(service, [lookup.get(service) for lookup in lookups]) for service in services]

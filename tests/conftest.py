"""Pytest fixtures for healthquote tests."""

from typing import Callable, Iterable, Optional

import pytest

from healthquote.core.types import (
    AgeBracket,
    ContractingCategory,
    CopayFee,
    CoparticipationType,
    RoomType,
)
from healthquote.quoting.catalog import HealthPlan, PlanCatalog
from healthquote.quoting.engine import QuoteEngine
from healthquote.quoting.selection import BracketSelection

PF = ContractingCategory.PF
BUSINESS = frozenset({
    ContractingCategory.PME_1,
    ContractingCategory.PME_2,
    ContractingCategory.PME_30,
})
EVERYONE = frozenset(ContractingCategory)


def _make_plan(
    plan_id: str,
    operator: str,
    name: str,
    prices: dict[str, float],
    categories: Iterable[ContractingCategory] = EVERYONE,
    room_type: RoomType = RoomType.WARD,
    coparticipation: CoparticipationType = CoparticipationType.FULL,
    logo_color: str = "bg-gray-400",
    copay_fees: Optional[Iterable[CopayFee]] = None,
) -> HealthPlan:
    return HealthPlan(
        id=plan_id,
        operator=operator,
        name=name,
        room_type=room_type,
        coparticipation=coparticipation,
        prices={AgeBracket(k): v for k, v in prices.items()},
        categories=frozenset(categories),
        logo_color=logo_color,
        copay_fees=tuple(copay_fees or ()),
    )


@pytest.fixture
def make_plan() -> Callable[..., HealthPlan]:
    """Factory for ad-hoc plans."""
    return _make_plan


@pytest.fixture
def sample_plans() -> list[HealthPlan]:
    """A small catalog with one plan per ranking tier.

    Weights: Amhemed Ideal 10, GNDI Smart 200 22, Fênix 40, Unimed 50, Acme 100.
    """
    return [
        _make_plan(
            "amhemed-ideal-full", "Amhemed", "Ideal",
            {"0-18": 200.0, "29-33": 300.0, "59+": 900.0},
            logo_color="bg-blue-900",
            copay_fees=[CopayFee("Consultas", "R$ 25,00"), CopayFee("Terapias", "R$ 20,00")],
        ),
        _make_plan(
            "amhemed-ideal-partial", "Amhemed", "Ideal",
            {"0-18": 250.0, "29-33": 350.0, "59+": 1000.0},
            coparticipation=CoparticipationType.PARTIAL,
            logo_color="bg-blue-900",
            copay_fees=[CopayFee("Terapias", "R$ 15,00")],
        ),
        _make_plan(
            "unimed-basico", "Unimed Sorocaba", "Básico",
            {"0-18": 100.0, "29-33": 150.0, "59+": 500.0},
            logo_color="bg-[#009CA6]",
        ),
        _make_plan(
            "fenix-bronze-full", "Fênix Saúde", "Bronze",
            {"0-18": 80.0, "29-33": 120.0},
            logo_color="bg-amber-600",
        ),
        _make_plan(
            "fenix-bronze-none", "Fênix Saúde", "Bronze",
            {"0-18": 110.0, "29-33": 160.0, "59+": 700.0},
            coparticipation=CoparticipationType.NONE,
            logo_color="bg-amber-600",
        ),
        _make_plan(
            "gndi-smart-200", "NotreDame Intermédica", "Smart 200",
            {"0-18": 150.0, "29-33": 220.0, "59+": 800.0},
            categories=BUSINESS,
            logo_color="bg-orange-500",
        ),
        _make_plan(
            "acme-top", "Acme Saúde", "Top",
            {"0-18": 50.0, "29-33": 60.0, "59+": 100.0},
            room_type=RoomType.PRIVATE,
            coparticipation=CoparticipationType.NONE,
        ),
    ]


@pytest.fixture
def sample_catalog(sample_plans: list[HealthPlan]) -> PlanCatalog:
    """Catalog built from sample_plans."""
    return PlanCatalog(sample_plans)


@pytest.fixture
def default_catalog() -> PlanCatalog:
    """The built-in reference catalog."""
    return PlanCatalog.default()


@pytest.fixture
def engine(sample_catalog: PlanCatalog) -> QuoteEngine:
    """Engine over the sample catalog."""
    return QuoteEngine(sample_catalog)


@pytest.fixture
def family_selection() -> BracketSelection:
    """One child and one adult."""
    return BracketSelection.from_mapping({"0-18": 1, "29-33": 1})


@pytest.fixture
def minor_selection() -> BracketSelection:
    """A single minor with no adult."""
    return BracketSelection.from_mapping({"0-18": 1})


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's environment out of config-dependent tests."""
    monkeypatch.delenv("HEALTHQUOTE_CATALOG", raising=False)
    monkeypatch.delenv("HEALTHQUOTE_RESULTS_DIR", raising=False)
    monkeypatch.delenv("HEALTHQUOTE_CURRENCY", raising=False)
    monkeypatch.delenv("HEALTHQUOTE_DEBUG", raising=False)

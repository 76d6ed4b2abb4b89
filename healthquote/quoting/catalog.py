"""Health plan catalog.

Plans are read-only reference data built once at startup. The built-in
catalog covers the operators sold in the Sorocaba region:
- Amhemed
- NotreDame Intermédica (GNDI)
- Eva Saúde
- Fênix Saúde
- Unimed Sorocaba
- Amil

A catalog can also be loaded from a JSON file holding a list of plan dicts.
"""

import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Iterator, Optional

from healthquote.core.errors import CatalogError
from healthquote.core.types import (
    AgeBracket,
    ContractingCategory,
    CopayFee,
    CoparticipationType,
    RoomType,
)

logger = logging.getLogger(__name__)

# Price multipliers relative to the 0-18 bracket. The 59+ bracket may not
# exceed six times the first one.
BRACKET_FACTORS = {
    AgeBracket.AGE_0_18: 1.00,
    AgeBracket.AGE_19_23: 1.25,
    AgeBracket.AGE_24_28: 1.45,
    AgeBracket.AGE_29_33: 1.60,
    AgeBracket.AGE_34_38: 1.75,
    AgeBracket.AGE_39_43: 2.05,
    AgeBracket.AGE_44_48: 2.45,
    AgeBracket.AGE_49_53: 3.00,
    AgeBracket.AGE_54_58: 3.75,
    AgeBracket.AGE_59_PLUS: 6.00,
}

ALL_CATEGORIES = frozenset(ContractingCategory)
BUSINESS_CATEGORIES = frozenset(c for c in ContractingCategory if c.is_business)


def build_price_table(base: float, omit: Iterable[AgeBracket] = ()) -> dict[AgeBracket, float]:
    """Derive a full price table from the 0-18 price.

    Brackets in ``omit`` are left out, meaning the plan does not offer them.
    """
    skipped = set(omit)
    return {
        bracket: round(base * factor, 2)
        for bracket, factor in BRACKET_FACTORS.items()
        if bracket not in skipped
    }


@dataclass(frozen=True)
class HealthPlan:
    """A health plan in the catalog.

    Everything after ``categories`` is display metadata. The quote
    pipeline passes it through untouched.
    """

    id: str
    operator: str
    name: str
    room_type: RoomType
    coparticipation: CoparticipationType
    prices: dict[AgeBracket, float]
    categories: frozenset[ContractingCategory]
    logo_color: str = "bg-gray-400"
    hospitals: tuple[str, ...] = ()
    description: str = ""
    coverage: str = ""
    grace_periods: tuple[str, ...] = ()
    copay_fees: tuple[CopayFee, ...] = ()

    def price_for(self, bracket: AgeBracket) -> float:
        """Unit monthly price for a bracket, 0 when the bracket is not offered."""
        return self.prices.get(bracket) or 0.0

    def is_eligible(self, category: ContractingCategory) -> bool:
        return category in self.categories

    @property
    def variant_key(self) -> tuple[str, str, str]:
        """Identity shared by the coparticipation variants of one product."""
        return (self.operator, self.name, self.room_type.value)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "operator": self.operator,
            "name": self.name,
            "type": self.room_type.value,
            "coparticipation_type": self.coparticipation.value,
            "logo_color": self.logo_color,
            "prices": {bracket.value: price for bracket, price in self.prices.items()},
            # Enum order keeps the output stable
            "categories": [c.value for c in ContractingCategory if c in self.categories],
            "hospitals": list(self.hospitals),
            "description": self.description,
            "coverage": self.coverage,
            "grace_periods": list(self.grace_periods),
            "copay_fees": [fee.to_dict() for fee in self.copay_fees],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HealthPlan":
        """Create from dictionary.

        Raises:
            CatalogError: If a field is missing or holds an unknown value.
        """
        if not isinstance(data, dict):
            raise CatalogError(f"Plan record must be an object, got {type(data).__name__}")
        plan_id = data.get("id")
        if not plan_id:
            raise CatalogError("Plan is missing an id")

        if not isinstance(data.get("prices", {}), dict):
            raise CatalogError(f"Plan {plan_id} prices must be an object", plan_id=plan_id)
        for list_field in ("categories", "hospitals", "grace_periods", "copay_fees"):
            if not isinstance(data.get(list_field, []), list):
                raise CatalogError(f"Plan {plan_id} {list_field} must be a list", plan_id=plan_id)

        try:
            room_type = RoomType(data["type"])
            coparticipation = CoparticipationType(data["coparticipation_type"])
            categories = frozenset(ContractingCategory(c) for c in data["categories"])
            prices = {AgeBracket(k): float(v) for k, v in data.get("prices", {}).items()}
            copay_fees = tuple(CopayFee.from_dict(f) for f in data.get("copay_fees", []))
            operator = str(data["operator"])
            name = str(data["name"])
        except KeyError as e:
            raise CatalogError(f"Plan {plan_id} is missing field {e}", plan_id=plan_id)
        except (TypeError, ValueError) as e:
            raise CatalogError(f"Plan {plan_id} has an invalid value: {e}", plan_id=plan_id)

        # NaN would make the (weight, total) ranking depend on catalog order
        if not all(math.isfinite(price) for price in prices.values()):
            raise CatalogError(f"Plan {plan_id} has a non-finite price", plan_id=plan_id)
        if any(price < 0 for price in prices.values()):
            raise CatalogError(f"Plan {plan_id} has a negative price", plan_id=plan_id)

        return cls(
            id=str(plan_id),
            operator=operator,
            name=name,
            room_type=room_type,
            coparticipation=coparticipation,
            prices=prices,
            categories=categories,
            logo_color=data.get("logo_color", "bg-gray-400"),
            hospitals=tuple(data.get("hospitals", [])),
            description=data.get("description", ""),
            coverage=data.get("coverage", ""),
            grace_periods=tuple(data.get("grace_periods", [])),
            copay_fees=copay_fees,
        )


# Shared display metadata
FULL_COPAY_FEES = (
    CopayFee("Consultas eletivas", "R$ 25,00"),
    CopayFee("Pronto-socorro", "R$ 40,00"),
    CopayFee("Exames simples", "R$ 10,00"),
    CopayFee("Exames especiais", "R$ 60,00"),
    CopayFee("Terapias", "R$ 20,00"),
)

THERAPY_COPAY_FEES = (CopayFee("Terapias", "R$ 20,00"),)

STANDARD_GRACE_PERIODS = (
    "Urgência e emergência: 24 horas",
    "Consultas e exames simples: 30 dias",
    "Exames especiais: 180 dias",
    "Internações e cirurgias: 180 dias",
    "Parto a termo: 300 dias",
)

REGIONAL_COVERAGE = "Regional (Sorocaba e região)"


def _copay_for(coparticipation: CoparticipationType) -> tuple[CopayFee, ...]:
    if coparticipation is CoparticipationType.FULL:
        return FULL_COPAY_FEES
    if coparticipation is CoparticipationType.PARTIAL:
        return THERAPY_COPAY_FEES
    return ()


def _plan(
    plan_id: str,
    operator: str,
    name: str,
    room_type: RoomType,
    coparticipation: CoparticipationType,
    base_price: float,
    categories: frozenset[ContractingCategory],
    logo_color: str,
    hospitals: tuple[str, ...],
    description: str,
    omit: Iterable[AgeBracket] = (),
    coverage: str = REGIONAL_COVERAGE,
) -> HealthPlan:
    return HealthPlan(
        id=plan_id,
        operator=operator,
        name=name,
        room_type=room_type,
        coparticipation=coparticipation,
        prices=build_price_table(base_price, omit=omit),
        categories=categories,
        logo_color=logo_color,
        hospitals=hospitals,
        description=description,
        coverage=coverage,
        grace_periods=STANDARD_GRACE_PERIODS,
        copay_fees=_copay_for(coparticipation),
    )


def default_plans() -> list[HealthPlan]:
    """The built-in reference catalog, in catalog order."""
    full = CoparticipationType.FULL
    partial = CoparticipationType.PARTIAL
    none = CoparticipationType.NONE
    ward = RoomType.WARD
    private = RoomType.PRIVATE
    pf_only = frozenset({ContractingCategory.PF})

    amhemed_hospitals = ("Hospital Amhemed Sorocaba", "Pronto Atendimento Amhemed Centro")
    gndi_hospitals = ("Hospital GNDI Sorocaba", "Centro Clínico GNDI Campolim")
    eva_hospitals = ("Hospital Evangélico de Sorocaba",)
    fenix_hospitals = ("Hospital Fênix Votorantim", "Clínica Fênix Sorocaba")
    unimed_hospitals = ("Hospital Unimed Sorocaba", "Hospital Santa Lucinda", "GPACI")
    amil_hospitals = ("Hospital Samaritano Sorocaba", "Rede Amil One Day")

    return [
        # Amhemed
        _plan("amhemed-ideal-enf-full", "Amhemed", "Ideal", ward, full, 129.90, pf_only,
              "bg-blue-900", amhemed_hospitals, "Entrada com rede própria"),
        _plan("amhemed-ideal-enf-partial", "Amhemed", "Ideal", ward, partial, 159.90, pf_only,
              "bg-blue-900", amhemed_hospitals, "Entrada com rede própria"),
        _plan("amhemed-ideal-enf-full-pme", "Amhemed", "Ideal", ward, full, 112.40,
              BUSINESS_CATEGORIES, "bg-blue-900", amhemed_hospitals, "Entrada com rede própria"),
        _plan("amhemed-ideal-enf-partial-pme", "Amhemed", "Ideal", ward, partial, 139.50,
              BUSINESS_CATEGORIES, "bg-blue-900", amhemed_hospitals, "Entrada com rede própria"),
        _plan("amhemed-amhe-plus-apt-full", "Amhemed", "Amhe+", private, full, 189.00,
              ALL_CATEGORIES, "bg-blue-900", amhemed_hospitals, "Apartamento com rede própria"),
        # NotreDame Intermédica
        _plan("gndi-nosso-plano-enf-full", "NotreDame Intermédica (GNDI)", "Nosso Plano", ward,
              full, 145.30, pf_only, "bg-orange-500", gndi_hospitals, "Rede própria GNDI"),
        _plan("gndi-nosso-plano-enf-none", "NotreDame Intermédica (GNDI)", "Nosso Plano", ward,
              none, 178.60, pf_only, "bg-orange-500", gndi_hospitals, "Rede própria GNDI"),
        _plan("gndi-smart-200-enf-full", "NotreDame Intermédica (GNDI)", "Smart 200", ward,
              full, 131.70, BUSINESS_CATEGORIES, "bg-orange-500", gndi_hospitals,
              "Linha empresarial Smart"),
        _plan("gndi-smart-200-enf-none", "NotreDame Intermédica (GNDI)", "Smart 200", ward,
              none, 162.20, BUSINESS_CATEGORIES, "bg-orange-500", gndi_hospitals,
              "Linha empresarial Smart"),
        _plan("gndi-smart-400-apt-full", "NotreDame Intermédica (GNDI)", "Smart 400", private,
              full, 176.80, frozenset({ContractingCategory.PME_2, ContractingCategory.PME_30}),
              "bg-orange-500", gndi_hospitals, "Linha empresarial Smart com apartamento"),
        # Eva: no 59+ table published yet
        _plan("eva-essencial-enf-full", "Eva Saúde", "Essencial", ward, full, 118.50,
              ALL_CATEGORIES, "bg-green-600", eva_hospitals, "Plano regional Eva",
              omit=(AgeBracket.AGE_59_PLUS,)),
        _plan("eva-essencial-enf-partial", "Eva Saúde", "Essencial", ward, partial, 141.90,
              ALL_CATEGORIES, "bg-green-600", eva_hospitals, "Plano regional Eva",
              omit=(AgeBracket.AGE_59_PLUS,)),
        # Fênix
        _plan("fenix-bronze-enf-full", "Fênix Saúde", "Bronze", ward, full, 99.80,
              ALL_CATEGORIES, "bg-amber-600", fenix_hospitals, "Opção econômica regional"),
        _plan("fenix-bronze-enf-none", "Fênix Saúde", "Bronze", ward, none, 127.40,
              ALL_CATEGORIES, "bg-amber-600", fenix_hospitals, "Opção econômica regional"),
        # Unimed
        _plan("unimed-basico-enf-full", "Unimed Sorocaba", "Básico", ward, full, 214.60,
              frozenset({ContractingCategory.PF, ContractingCategory.PME_2,
                         ContractingCategory.PME_30}),
              "bg-[#009CA6]", unimed_hospitals, "Rede Unimed regional"),
        _plan("unimed-especial-apt-none", "Unimed Sorocaba", "Especial", private, none, 298.10,
              frozenset({ContractingCategory.PME_2, ContractingCategory.PME_30}),
              "bg-[#009CA6]", unimed_hospitals, "Rede Unimed com apartamento",
              coverage="Estadual"),
        # Amil
        _plan("amil-bronze-enf-full", "Amil", "Bronze SP", ward, full, 168.90,
              BUSINESS_CATEGORIES, "bg-blue-600", amil_hospitals, "Rede nacional Amil",
              coverage="Nacional"),
    ]


class PlanCatalog:
    """Read-only collection of health plans, kept in catalog order."""

    def __init__(self, plans: Optional[Iterable[HealthPlan]] = None):
        self._plans: tuple[HealthPlan, ...] = tuple(default_plans() if plans is None else plans)
        seen: set[str] = set()
        for plan in self._plans:
            if plan.id in seen:
                raise CatalogError(f"Duplicate plan id: {plan.id}", plan_id=plan.id)
            seen.add(plan.id)
        self._by_id = {plan.id: plan for plan in self._plans}

    @classmethod
    def default(cls) -> "PlanCatalog":
        """The built-in reference catalog."""
        return cls()

    @classmethod
    def from_dicts(cls, records: Iterable[dict[str, Any]]) -> "PlanCatalog":
        """Build a catalog from plan dictionaries."""
        return cls(HealthPlan.from_dict(record) for record in records)

    @classmethod
    def from_file(cls, path: Path | str) -> "PlanCatalog":
        """Load a catalog from a JSON file containing a list of plans.

        Raises:
            CatalogError: If the file is missing, not JSON, or holds bad plans.
        """
        path = Path(path)
        try:
            with open(path, encoding="utf-8") as f:
                records = json.load(f)
        except OSError as e:
            raise CatalogError(f"Cannot read catalog {path}: {e}")
        except json.JSONDecodeError as e:
            raise CatalogError(f"Catalog {path} is not valid JSON: {e}")

        if not isinstance(records, list):
            raise CatalogError(f"Catalog {path} must contain a list of plans")

        catalog = cls.from_dicts(records)
        logger.info(f"Loaded {len(catalog)} plans from {path}")
        return catalog

    @property
    def plans(self) -> tuple[HealthPlan, ...]:
        return self._plans

    def __iter__(self) -> Iterator[HealthPlan]:
        return iter(self._plans)

    def __len__(self) -> int:
        return len(self._plans)

    def get_plan(self, plan_id: str) -> Optional[HealthPlan]:
        """Get a specific plan."""
        return self._by_id.get(plan_id)

    def list_plans(self, category: Optional[ContractingCategory] = None) -> list[dict[str, Any]]:
        """List plans as dictionaries, optionally only those sold in ``category``."""
        return [
            plan.to_dict()
            for plan in self._plans
            if category is None or plan.is_eligible(category)
        ]

    def operators(self) -> list[str]:
        """Operator names in first-seen catalog order."""
        return list(dict.fromkeys(plan.operator for plan in self._plans))

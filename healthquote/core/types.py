"""Core type definitions for healthquote."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from healthquote.core.errors import UnknownCategory


class AgeBracket(str, Enum):
    """Age brackets used as pricing tiers.

    Declaration order is the display order. Calculation does not depend on it.
    """

    AGE_0_18 = "0-18"  # Youngest bracket (minors)
    AGE_19_23 = "19-23"
    AGE_24_28 = "24-28"
    AGE_29_33 = "29-33"
    AGE_34_38 = "34-38"
    AGE_39_43 = "39-43"
    AGE_44_48 = "44-48"
    AGE_49_53 = "49-53"
    AGE_54_58 = "54-58"
    AGE_59_PLUS = "59+"


YOUNGEST_BRACKET = AgeBracket.AGE_0_18


class ContractingCategory(str, Enum):
    """How the plan is contracted."""

    PF = "PF"  # Individual (pessoa física)
    PME_1 = "PME_1"  # Business, single life
    PME_2 = "PME_2"  # Business, 2-29 lives
    PME_30 = "PME_30"  # Business, 30+ lives (quoted from the 2-29 table)

    @property
    def is_business(self) -> bool:
        """True for every business (PME) tier."""
        return self is not ContractingCategory.PF

    @property
    def title(self) -> str:
        """Broker-facing title."""
        return CATEGORY_TITLES[self]


def parse_category(code: str) -> ContractingCategory:
    """Resolve a category code such as ``"pme_2"`` (case-insensitive).

    Raises:
        UnknownCategory: If the code is not a known category.
    """
    try:
        return ContractingCategory(code.strip().upper())
    except ValueError:
        raise UnknownCategory(code)


CATEGORY_TITLES = {
    ContractingCategory.PF: "Pessoa Física",
    ContractingCategory.PME_1: "CNPJ / MEI (1 Vida)",
    ContractingCategory.PME_2: "CNPJ / MEI (2-29 Vidas)",
    ContractingCategory.PME_30: "CNPJ / MEI (+30 Vidas)",
}


class CoparticipationType(str, Enum):
    """Cost-sharing scheme of a plan."""

    FULL = "full"  # Fee on every service
    PARTIAL = "partial"  # Fee on therapy services only
    NONE = "none"  # No fees

    @property
    def label(self) -> str:
        """Broker-facing label."""
        return COPARTICIPATION_LABELS[self]


COPARTICIPATION_LABELS = {
    CoparticipationType.FULL: "Com Coparticipação",
    CoparticipationType.PARTIAL: "Sem Copart. (exceto terapias)",
    CoparticipationType.NONE: "Sem Coparticipação",
}


class RoomType(str, Enum):
    """Hospital accommodation."""

    WARD = "Enfermaria"
    PRIVATE = "Apartamento"


@dataclass(frozen=True)
class CopayFee:
    """A coparticipation fee for one service, as printed by the operator."""

    service: str
    value: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"service": self.service, "value": self.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CopayFee":
        """Create from dictionary."""
        return cls(service=str(data["service"]), value=str(data["value"]))

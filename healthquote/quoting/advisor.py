"""Read-only context handed to the chat assistant.

The assistant sees the broker's selection and the top ranked plans. It never
feeds anything back into the quote.
"""

from dataclasses import dataclass
from typing import Any, Sequence

from healthquote.core.types import RoomType
from healthquote.quoting.engine import QuoteResult
from healthquote.quoting.pricing import CalculatedPlan
from healthquote.quoting.selection import BracketSelection

DEFAULT_TOP_N = 3

SYSTEM_INSTRUCTION_TEMPLATE = """\
Você é um consultor especialista em planos de saúde, focado na região de Sorocaba - SP.

Contexto atual do usuário:
- Perfil Familiar/Empresarial: {selection}
- Tipo de contratação: {category}
- Planos disponíveis para o tipo de contratação selecionado - Top {top_n} cotados:
{plans}

Regras de Negócio Importantes:
1. Amhemed e Fênix costumam ser opções mais econômicas.
2. Unimed Sorocaba é referência em rede credenciada, mas costuma ser mais cara.
3. GNDI (NotreDame) tem rede própria forte.
4. Se for PJ (CNPJ/MEI), destaque que os preços costumam ser menores que Pessoa Física.
5. Para grupos grandes (+30 vidas), mencione a possibilidade de negociação especial.

Se o usuário perguntar "qual o melhor", pondere entre preço e qualidade.
Seja conciso, amigável e profissional. Responda em Markdown simples."""


def selection_summary(selection: BracketSelection) -> str:
    """e.g. ``"2x pessoas (0-18 anos), 1x pessoas (29-33 anos)"``."""
    return ", ".join(
        f"{count}x pessoas ({bracket.value} anos)"
        for bracket, count in selection.active_brackets()
    )


def top_plan_lines(plans: Sequence[CalculatedPlan], top_n: int = DEFAULT_TOP_N) -> list[str]:
    """One line per plan for the first ``top_n`` ranked plans."""
    lines = []
    for cp in plans[:top_n]:
        room = "" if cp.plan.room_type is RoomType.WARD else f" ({cp.plan.room_type.value})"
        lines.append(f"- {cp.plan.operator} {cp.plan.name}{room}: R$ {cp.total_price:.2f}")
    return lines


@dataclass(frozen=True)
class AdvisorContext:
    """Snapshot of a quote for the chat assistant."""

    category: str
    selection: str
    top_plans: tuple[str, ...]
    top_n: int

    def system_instruction(self) -> str:
        return SYSTEM_INSTRUCTION_TEMPLATE.format(
            selection=self.selection or "nenhuma vida selecionada",
            category=self.category,
            top_n=self.top_n,
            plans="\n".join(self.top_plans) or "- nenhum plano disponível",
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "category": self.category,
            "selection": self.selection,
            "top_plans": list(self.top_plans),
            "top_n": self.top_n,
        }


def build_advisor_context(result: QuoteResult, top_n: int = DEFAULT_TOP_N) -> AdvisorContext:
    """Build the assistant snapshot from a quote result."""
    return AdvisorContext(
        category=result.category.title if result.category else "",
        selection=selection_summary(result.selection),
        top_plans=tuple(top_plan_lines(result.plans, top_n)),
        top_n=top_n,
    )

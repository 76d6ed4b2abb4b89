"""Output formatting utilities for CLI commands."""

import json
from typing import Any, Callable, Optional

from rich.console import Console
from rich.table import Table

from healthquote.quoting.comparison import summary_rows
from healthquote.quoting.engine import QuoteResult

console = Console()

DEFAULT_CURRENCY = "BRL"

CURRENCY_SYMBOLS = {
    "BRL": "R$",
    "USD": "US$",
    "EUR": "€",
}


def format_money(value: Optional[float], currency: str = DEFAULT_CURRENCY) -> str:
    """Format a price with Brazilian separators, e.g. ``R$ 1.234,56``.

    Unknown currency codes are printed as the code itself.
    """
    if value is None:
        return "Indisponível"
    text = f"{value:,.2f}"
    symbol = CURRENCY_SYMBOLS.get(currency, currency)
    return f"{symbol} " + text.replace(",", "_").replace(".", ",").replace("_", ".")


class OutputFormatter:
    """Handles consistent output formatting across CLI commands."""

    def __init__(self, format_type: str = "table"):
        """Initialize formatter.

        Args:
            format_type: Output format - 'json' or 'table'.
        """
        self.format_type = format_type

    @property
    def is_json(self) -> bool:
        """Check if output should be JSON."""
        return self.format_type == "json"

    def output(self, data: Any, table_fn: Callable[[], None]) -> None:
        """Output data in the configured format.

        Args:
            data: Data to output (used directly for JSON).
            table_fn: Function to call for table output (no args).
        """
        if self.is_json:
            self.print_json(data)
        else:
            table_fn()

    def print_json(self, data: Any) -> None:
        """Print data as JSON."""
        print(json.dumps(data, indent=2, ensure_ascii=False))


def build_plans_table(result: QuoteResult, currency: str = DEFAULT_CURRENCY) -> Table:
    """Ranked plans with their bracket breakdown."""
    table = Table(title="Planos cotados", show_lines=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Operadora", style="cyan")
    table.add_column("Plano")
    table.add_column("Acomodação")
    table.add_column("Coparticipação")
    table.add_column("Total mensal", justify="right", style="bold")

    for index, cp in enumerate(result.plans, start=1):
        table.add_row(
            str(index),
            cp.plan.operator,
            cp.plan.name,
            cp.plan.room_type.value,
            cp.plan.coparticipation.label,
            format_money(cp.total_price, currency),
        )
    return table


def build_summary_table(result: QuoteResult, currency: str = DEFAULT_CURRENCY) -> Table:
    """One row per product with its non-full and full coparticipation price."""
    table = Table(title="Resumo Geral de Preços")
    table.add_column("Operadora / Plano", style="cyan")
    table.add_column("Sem Coparticipação (ou Parcial)", justify="right")
    table.add_column("Com Coparticipação", justify="right")

    for row in summary_rows(result.plan_groups):
        table.add_row(
            f"{row.operator} {row.name} ({row.room_type})",
            format_money(row.non_full_price, currency),
            format_money(row.full_price, currency),
        )
    return table


def build_operator_table(result: QuoteResult, currency: str = DEFAULT_CURRENCY) -> Table:
    """Accordion summary: each operator with its products and starting price."""
    table = Table(title="Operadoras")
    table.add_column("Operadora", style="cyan")
    table.add_column("Produtos")
    table.add_column("A partir de", justify="right", style="bold")

    for group in result.operator_groups:
        products = ", ".join(f"{g.name} ({g.room_type})" for g in group.groups)
        table.add_row(group.operator, products, format_money(group.min_price, currency))
    return table

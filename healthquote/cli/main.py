"""CLI entrypoint for healthquote.

Commands:
- inspect-plans: Display the plan catalog
- quote: Quote a selection for a contracting category
- check: Check whether a selection may be quoted for a category
- advisor-context: Show the snapshot handed to the chat assistant
"""

import argparse
import logging
import sys
from typing import Optional

from dotenv import load_dotenv

from healthquote.cli.arguments import (
    add_bracket_arg,
    add_catalog_arg,
    add_category_arg,
    add_format_arg,
    positive_int,
)
from healthquote.cli.formatting import (
    OutputFormatter,
    build_operator_table,
    build_plans_table,
    build_summary_table,
    console,
)
from healthquote.core.config import QuoteConfig
from healthquote.core.errors import HealthQuoteError
from healthquote.core.types import parse_category

# Load .env file from current directory
load_dotenv()

logger = logging.getLogger(__name__)


def _load_catalog(args: argparse.Namespace, config: QuoteConfig):
    from healthquote.quoting.catalog import PlanCatalog

    path = args.catalog or config.catalog_path
    if path:
        return PlanCatalog.from_file(path)
    return PlanCatalog.default()


def _log_level(args: argparse.Namespace, config: QuoteConfig) -> int:
    """DEBUG under --verbose or HEALTHQUOTE_DEBUG, otherwise WARNING."""
    return logging.DEBUG if args.verbose or config.debug else logging.WARNING


def inspect_plans_command(args: argparse.Namespace, config: QuoteConfig) -> int:
    """Display the plan catalog.

    Args:
        args: Command line arguments.
        config: Validated runtime configuration.

    Returns:
        Exit code.
    """
    catalog = _load_catalog(args, config)
    category = parse_category(args.category) if args.category else None
    plans = catalog.list_plans(category)

    def table() -> None:
        from rich.table import Table

        title = f"Catálogo ({category.title})" if category else "Catálogo de planos"
        tbl = Table(title=title)
        tbl.add_column("ID", style="dim")
        tbl.add_column("Operadora", style="cyan")
        tbl.add_column("Plano")
        tbl.add_column("Acomodação")
        tbl.add_column("Copart.")
        tbl.add_column("Categorias")
        for plan in plans:
            tbl.add_row(
                plan["id"],
                plan["operator"],
                plan["name"],
                plan["type"],
                plan["coparticipation_type"],
                ", ".join(plan["categories"]),
            )
        console.print(tbl)

    OutputFormatter(args.format).output(plans, table)
    return 0


def quote_command(args: argparse.Namespace, config: QuoteConfig) -> int:
    """Quote a selection.

    Args:
        args: Command line arguments.
        config: Validated runtime configuration.

    Returns:
        Exit code.
    """
    from healthquote.quoting.engine import QuoteEngine
    from healthquote.quoting.flow import advance_block
    from healthquote.quoting.selection import parse_bracket_assignments
    from healthquote.storage.json_writer import QuoteExportWriter

    category = parse_category(args.category)
    selection = parse_bracket_assignments(args.bracket)

    block = advance_block(category, selection)
    if block is not None:
        print(f"Error: {block.message}")
        if block.suggested_categories:
            codes = ", ".join(c.value for c in block.suggested_categories)
            print(f"Try category: {codes}")
        return 1

    engine = QuoteEngine(_load_catalog(args, config))
    result = engine.quote(category, selection)
    formatter = OutputFormatter(args.format)

    def table() -> None:
        console.print(f"[bold]{category.title}[/bold] - {result.total_lives} vida(s)")
        if result.large_group_note:
            console.print(
                "[yellow]Nota: valores baseados na tabela de 2 a 29 vidas, "
                "apenas para referência.[/yellow]"
            )
        if result.is_empty:
            console.print("Nenhum plano disponível para esta seleção.")
            return
        if args.by_operator:
            console.print(build_operator_table(result, config.currency))
        else:
            console.print(build_plans_table(result, config.currency))
        console.print(build_summary_table(result, config.currency))

    formatter.output(result.to_dict(), table)

    if args.save:
        writer = QuoteExportWriter(config.results_dir)
        path = writer.write_quote(result)
        # Keep stdout parseable in JSON mode
        if formatter.is_json:
            print(f"Saved quote to {path}", file=sys.stderr)
        else:
            console.print(f"Saved quote to {path}")

    return 0


def check_command(args: argparse.Namespace, config: QuoteConfig) -> int:
    """Check whether a selection can move on to results.

    Returns:
        0 when clear, 1 when blocked.
    """
    from healthquote.quoting.flow import advance_block
    from healthquote.quoting.selection import parse_bracket_assignments

    category = parse_category(args.category)
    selection = parse_bracket_assignments(args.bracket)
    block = advance_block(category, selection)

    verdict = {
        "category": category.value,
        "total_lives": selection.total_lives,
        "is_solo_minor": selection.is_solo_minor,
        "can_advance": block is None,
        "block": block.value if block else None,
        "message": block.message if block else None,
        "suggested_categories": [c.value for c in block.suggested_categories] if block else [],
    }

    def table() -> None:
        if block is None:
            print(f"OK: {selection.total_lives} vida(s) em {category.title}")
        else:
            print(f"Blocked ({block.value}): {block.message}")

    OutputFormatter(args.format).output(verdict, table)
    return 0 if block is None else 1


def advisor_context_command(args: argparse.Namespace, config: QuoteConfig) -> int:
    """Show the snapshot handed to the chat assistant.

    Returns:
        Exit code.
    """
    from healthquote.quoting.advisor import build_advisor_context
    from healthquote.quoting.engine import QuoteEngine
    from healthquote.quoting.selection import parse_bracket_assignments

    top_n = args.top if args.top is not None else config.advisor_top_n
    category = parse_category(args.category)
    selection = parse_bracket_assignments(args.bracket)

    result = QuoteEngine(_load_catalog(args, config)).quote(category, selection)
    context = build_advisor_context(result, top_n=top_n)

    OutputFormatter(args.format).output(
        context.to_dict(),
        lambda: print(context.system_instruction()),
    )
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="healthquote",
        description="Health plan quoting for brokers",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # inspect-plans command
    inspect_parser = subparsers.add_parser(
        "inspect-plans",
        help="Display the plan catalog",
    )
    add_category_arg(inspect_parser, required=False)
    add_catalog_arg(inspect_parser)
    add_format_arg(inspect_parser)

    # quote command
    quote_parser = subparsers.add_parser(
        "quote",
        help="Quote a selection for a contracting category",
    )
    add_category_arg(quote_parser)
    add_bracket_arg(quote_parser)
    add_catalog_arg(quote_parser)
    add_format_arg(quote_parser)
    quote_parser.add_argument(
        "--by-operator",
        action="store_true",
        help="Group results by operator with starting prices",
    )
    quote_parser.add_argument(
        "--save",
        action="store_true",
        help="Export the quote as JSON to the results directory",
    )

    # check command
    check_parser = subparsers.add_parser(
        "check",
        help="Check whether a selection can be quoted for a category",
    )
    add_category_arg(check_parser)
    add_bracket_arg(check_parser)
    add_format_arg(check_parser)

    # advisor-context command
    advisor_parser = subparsers.add_parser(
        "advisor-context",
        help="Show the context the chat assistant receives",
    )
    add_category_arg(advisor_parser)
    add_bracket_arg(advisor_parser)
    add_catalog_arg(advisor_parser)
    add_format_arg(advisor_parser)
    advisor_parser.add_argument(
        "--top",
        "-n",
        type=positive_int,
        default=None,
        help="Number of ranked plans to include (default: 3)",
    )

    args = parser.parse_args(argv)

    config = QuoteConfig()
    logging.basicConfig(level=_log_level(args, config))

    if args.command is None:
        parser.print_help()
        return 0

    try:
        config.validate()
    except ValueError as e:
        print(f"Error: invalid configuration: {e}")
        return 1

    commands = {
        "inspect-plans": inspect_plans_command,
        "quote": quote_command,
        "check": check_command,
        "advisor-context": advisor_context_command,
    }

    try:
        return commands[args.command](args, config)
    except HealthQuoteError as e:
        logger.debug(f"Command {args.command} failed: {e.to_dict()}")
        print(f"Error: {e.message}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

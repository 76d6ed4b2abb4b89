"""Shared argument builders for CLI commands."""

import argparse

from healthquote.core.types import AgeBracket, ContractingCategory


def add_format_arg(parser: argparse.ArgumentParser) -> None:
    """Add --format argument for output format selection."""
    parser.add_argument(
        "--format",
        "-f",
        choices=["table", "json"],
        default="table",
        help="Output format (default: table)",
    )


def add_category_arg(parser: argparse.ArgumentParser, required: bool = True) -> None:
    """Add --category argument for the contracting category."""
    codes = ", ".join(c.value for c in ContractingCategory)
    parser.add_argument(
        "--category",
        "-c",
        type=str,
        required=required,
        default=None,
        help=f"Contracting category ({codes})",
    )


def add_bracket_arg(parser: argparse.ArgumentParser) -> None:
    """Add repeatable --bracket argument for beneficiary counts."""
    labels = ", ".join(b.value for b in AgeBracket)
    parser.add_argument(
        "--bracket",
        "-b",
        action="append",
        default=[],
        metavar="BRACKET=COUNT",
        help=f"Beneficiaries in an age bracket, repeatable (brackets: {labels})",
    )


def add_catalog_arg(parser: argparse.ArgumentParser) -> None:
    """Add --catalog argument for a JSON catalog file."""
    parser.add_argument(
        "--catalog",
        type=str,
        default=None,
        help="JSON catalog file (default: $HEALTHQUOTE_CATALOG or built-in catalog)",
    )


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number

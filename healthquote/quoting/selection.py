"""Beneficiary counts per age bracket."""

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Union

from healthquote.core.errors import InvalidSelection
from healthquote.core.types import YOUNGEST_BRACKET, AgeBracket

BracketKey = Union[AgeBracket, str]


def _zero_counts() -> dict[AgeBracket, int]:
    return {bracket: 0 for bracket in AgeBracket}


def parse_bracket(key: BracketKey) -> AgeBracket:
    """Resolve a bracket label ("29-33") or enum member to an AgeBracket."""
    if isinstance(key, AgeBracket):
        return key
    try:
        return AgeBracket(str(key).strip())
    except ValueError:
        valid = [b.value for b in AgeBracket]
        raise InvalidSelection(f"Unknown age bracket: {key!r}. Valid: {valid}", raw=str(key))


@dataclass
class BracketSelection:
    """How many beneficiaries fall into each age bracket.

    Every bracket is always present, defaulting to 0.
    """

    counts: dict[AgeBracket, int] = field(default_factory=_zero_counts)

    def __post_init__(self) -> None:
        counts = _zero_counts()
        for key, value in self.counts.items():
            # bool is an int subclass but never a head count
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidSelection(
                    f"Count for {key} must be an integer, got {value!r}", raw=repr(value)
                )
            counts[parse_bracket(key)] = value
        if any(value < 0 for value in counts.values()):
            raise InvalidSelection("Bracket counts must be non-negative")
        self.counts = counts

    @classmethod
    def from_mapping(cls, mapping: Mapping[BracketKey, int]) -> "BracketSelection":
        """Build from a mapping keyed by bracket labels or enum members."""
        return cls(counts=dict(mapping))

    def count(self, bracket: BracketKey) -> int:
        """Count for a single bracket."""
        return self.counts[parse_bracket(bracket)]

    @property
    def total_lives(self) -> int:
        """Total number of beneficiaries."""
        return sum(self.counts.values())

    @property
    def is_empty(self) -> bool:
        return self.total_lives == 0

    @property
    def is_solo_minor(self) -> bool:
        """True when every selected beneficiary is a minor (no adult titleholder)."""
        total = self.total_lives
        return total > 0 and self.counts[YOUNGEST_BRACKET] == total

    def active_brackets(self) -> list[tuple[AgeBracket, int]]:
        """Brackets with a positive count, in bracket order."""
        return [(bracket, count) for bracket, count in self.counts.items() if count > 0]

    def increment(self, bracket: BracketKey) -> None:
        self.counts[parse_bracket(bracket)] += 1

    def decrement(self, bracket: BracketKey) -> None:
        """Remove one beneficiary from a bracket, never going below zero."""
        key = parse_bracket(bracket)
        self.counts[key] = max(0, self.counts[key] - 1)

    def reset(self) -> None:
        self.counts = _zero_counts()

    def copy(self) -> "BracketSelection":
        return BracketSelection(counts=dict(self.counts))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {bracket.value: count for bracket, count in self.counts.items()}


def parse_bracket_assignments(assignments: Iterable[str]) -> BracketSelection:
    """Parse CLI-style assignments such as ``["0-18=2", "29-33=1"]``.

    Repeated brackets add up.
    """
    counts = _zero_counts()
    for raw in assignments:
        label, sep, value = raw.partition("=")
        if not sep:
            raise InvalidSelection(f"Expected BRACKET=COUNT, got {raw!r}", raw=raw)
        try:
            count = int(value)
        except ValueError:
            raise InvalidSelection(f"Count must be an integer in {raw!r}", raw=raw)
        if count < 0:
            raise InvalidSelection(f"Count must be non-negative in {raw!r}", raw=raw)
        counts[parse_bracket(label)] += count
    return BracketSelection(counts=counts)

"""Quote flow: stage transitions and the checks that gate the results page.

Stages:
    type-selection -> lives-selection (business only) -> bracket-input -> results

The validation predicates are plain functions so any caller can apply the
same rules. QuoteFlow is a small stateful controller built on top of them.
"""

import logging
from enum import Enum
from typing import Optional

from healthquote.core.errors import InvalidTransition
from healthquote.core.types import AgeBracket, ContractingCategory
from healthquote.quoting.engine import QuoteEngine, QuoteResult
from healthquote.quoting.selection import BracketSelection

logger = logging.getLogger(__name__)


class QuoteStep(str, Enum):
    """Stages of the quote flow."""

    TYPE_SELECTION = "type-selection"
    LIVES_SELECTION = "lives-selection"
    BRACKET_INPUT = "bracket-input"
    RESULTS = "results"


class AdvanceBlock(str, Enum):
    """Reasons the broker cannot move on to results."""

    NO_LIVES = "no_lives"
    SOLO_MINOR_BUSINESS = "solo_minor_business"
    SINGLE_LIFE_LIMIT = "single_life_limit"
    SMALL_GROUP_MINIMUM = "small_group_minimum"

    @property
    def message(self) -> str:
        return BLOCK_MESSAGES[self]

    @property
    def suggested_categories(self) -> tuple[ContractingCategory, ...]:
        """Categories the broker can switch to that would clear the block."""
        return BLOCK_SUGGESTIONS.get(self, ())


BLOCK_MESSAGES = {
    AdvanceBlock.NO_LIVES: "Selecione ao menos uma vida para continuar.",
    AdvanceBlock.SOLO_MINOR_BUSINESS: (
        "É necessário um titular adulto: planos empresariais não podem ser "
        "contratados exclusivamente para menores de idade."
    ),
    AdvanceBlock.SINGLE_LIFE_LIMIT: (
        'A modalidade "1 Vida" é exclusiva para o titular do CNPJ. Selecione '
        "apenas 1 vida ou altere para a modalidade de 2 a 29 vidas."
    ),
    AdvanceBlock.SMALL_GROUP_MINIMUM: (
        'Para "2 a 29 vidas", é necessário incluir ao menos 2 beneficiários.'
    ),
}

BLOCK_SUGGESTIONS = {
    AdvanceBlock.SINGLE_LIFE_LIMIT: (ContractingCategory.PME_2,),
    AdvanceBlock.SMALL_GROUP_MINIMUM: (ContractingCategory.PME_1, ContractingCategory.PF),
}


def advance_block(
    category: Optional[ContractingCategory],
    selection: BracketSelection,
) -> Optional[AdvanceBlock]:
    """First reason blocking the move to results, or None if clear.

    The solo-minor block is checked before the life-count limits so the
    broker sees it first.
    """
    total = selection.total_lives
    if category is None or total == 0:
        return AdvanceBlock.NO_LIVES
    if category.is_business and selection.is_solo_minor:
        return AdvanceBlock.SOLO_MINOR_BUSINESS
    if category is ContractingCategory.PME_1 and total > 1:
        return AdvanceBlock.SINGLE_LIFE_LIMIT
    if category is ContractingCategory.PME_2 and total < 2:
        return AdvanceBlock.SMALL_GROUP_MINIMUM
    return None


def can_advance(category: Optional[ContractingCategory], selection: BracketSelection) -> bool:
    """True when the selection may be shown as results for ``category``."""
    return advance_block(category, selection) is None


class QuoteFlow:
    """Controller for one broker's quote session."""

    def __init__(self, engine: Optional[QuoteEngine] = None):
        self.engine = engine or QuoteEngine()
        self.step = QuoteStep.TYPE_SELECTION
        self.category: Optional[ContractingCategory] = None
        self.selection = BracketSelection()

    def _require(self, *steps: QuoteStep, action: str) -> None:
        if self.step not in steps:
            raise InvalidTransition(
                f"Cannot {action} from step {self.step.value}",
                current_step=self.step.value,
            )

    def _enter(self, step: QuoteStep) -> None:
        logger.debug(f"[Flow] {self.step.value} -> {step.value}")
        self.step = step

    @property
    def block(self) -> Optional[AdvanceBlock]:
        return advance_block(self.category, self.selection)

    @property
    def can_advance(self) -> bool:
        return self.block is None

    def choose_individual(self) -> None:
        """Start an individual (PF) quote."""
        self._require(QuoteStep.TYPE_SELECTION, action="choose individual")
        self.category = ContractingCategory.PF
        self.selection.reset()
        self._enter(QuoteStep.BRACKET_INPUT)

    def choose_business(self) -> None:
        """Start a business quote; the lives tier is picked next."""
        self._require(QuoteStep.TYPE_SELECTION, action="choose business")
        self._enter(QuoteStep.LIVES_SELECTION)

    def select_category(self, category: ContractingCategory) -> None:
        """Pick a business tier. Clears any counts entered before."""
        self._require(QuoteStep.LIVES_SELECTION, action="select a business tier")
        if not category.is_business:
            raise InvalidTransition(
                f"{category.value} is not a business tier",
                current_step=self.step.value,
            )
        self.category = category
        self.selection.reset()
        self._enter(QuoteStep.BRACKET_INPUT)

    def switch_category(self, category: ContractingCategory) -> None:
        """Change category while keeping the counts already entered."""
        self._require(QuoteStep.BRACKET_INPUT, action="switch category")
        self.category = category

    def increment(self, bracket: AgeBracket | str) -> None:
        self._require(QuoteStep.BRACKET_INPUT, action="change counts")
        self.selection.increment(bracket)

    def decrement(self, bracket: AgeBracket | str) -> None:
        self._require(QuoteStep.BRACKET_INPUT, action="change counts")
        self.selection.decrement(bracket)

    def continue_to_results(self) -> QuoteResult:
        """Move to results and return the quote.

        Raises:
            InvalidTransition: If the selection is blocked for the category.
        """
        self._require(QuoteStep.BRACKET_INPUT, action="show results")
        block = self.block
        if block is not None:
            raise InvalidTransition(
                block.message,
                current_step=self.step.value,
                reason=block.value,
            )
        self._enter(QuoteStep.RESULTS)
        return self.quote()

    def go_back(self) -> None:
        """Return to the previous stage."""
        if self.step is QuoteStep.RESULTS:
            self._enter(QuoteStep.BRACKET_INPUT)
        elif self.step is QuoteStep.BRACKET_INPUT:
            if self.category is ContractingCategory.PF:
                self.category = None
                self._enter(QuoteStep.TYPE_SELECTION)
            else:
                self._enter(QuoteStep.LIVES_SELECTION)
        elif self.step is QuoteStep.LIVES_SELECTION:
            self._enter(QuoteStep.TYPE_SELECTION)
        else:
            raise InvalidTransition(
                "Already at the first step",
                current_step=self.step.value,
            )

    def quote(self) -> QuoteResult:
        """Quote the current category and selection."""
        return self.engine.quote(self.category, self.selection)

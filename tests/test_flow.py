"""Tests for quote flow validation and the flow controller."""

import pytest

from healthquote.core.errors import InvalidTransition
from healthquote.core.types import ContractingCategory
from healthquote.quoting.engine import QuoteEngine
from healthquote.quoting.flow import (
    AdvanceBlock,
    QuoteFlow,
    QuoteStep,
    advance_block,
    can_advance,
)
from healthquote.quoting.selection import BracketSelection

PF = ContractingCategory.PF
PME_1 = ContractingCategory.PME_1
PME_2 = ContractingCategory.PME_2
PME_30 = ContractingCategory.PME_30


def _selection(**counts: int) -> BracketSelection:
    labels = {"minor": "0-18", "adult": "29-33", "senior": "59+"}
    return BracketSelection.from_mapping({labels[k]: v for k, v in counts.items()})


class TestAdvanceBlock:
    """Tests for the results-page guard."""

    @pytest.mark.parametrize("category", list(ContractingCategory))
    def test_zero_lives_blocked(self, category: ContractingCategory):
        """Test that no category accepts an empty selection."""
        assert advance_block(category, BracketSelection()) is AdvanceBlock.NO_LIVES

    def test_no_category_blocked(self):
        """Test that a selection without a category cannot advance."""
        assert advance_block(None, _selection(adult=1)) is AdvanceBlock.NO_LIVES

    def test_pme_1_with_two_lives(self):
        """Test the single-life limit and its suggested fix."""
        block = advance_block(PME_1, _selection(adult=2))

        assert block is AdvanceBlock.SINGLE_LIFE_LIMIT
        assert block.suggested_categories == (PME_2,)
        assert "1 Vida" in block.message

    def test_pme_1_with_one_adult(self):
        """Test that one adult is fine for PME_1."""
        assert can_advance(PME_1, _selection(adult=1))

    @pytest.mark.parametrize(
        "selection,expected",
        [
            (_selection(adult=1), AdvanceBlock.SMALL_GROUP_MINIMUM),
            (_selection(adult=2), None),
            (_selection(minor=1, adult=1), None),
        ],
    )
    def test_pme_2_needs_two_lives(self, selection: BracketSelection, expected):
        """Test the 2-29 minimum."""
        assert advance_block(PME_2, selection) is expected

    def test_small_group_suggestions(self):
        """Test the categories offered when PME_2 has one life."""
        block = advance_block(PME_2, _selection(adult=1))
        assert block.suggested_categories == (PME_1, PF)

    @pytest.mark.parametrize("category", [PME_1, PME_2, PME_30])
    def test_business_solo_minor(self, category: ContractingCategory):
        """Test that business contracts need an adult titleholder."""
        assert advance_block(category, _selection(minor=1)) is AdvanceBlock.SOLO_MINOR_BUSINESS
        assert advance_block(category, _selection(minor=3)) is AdvanceBlock.SOLO_MINOR_BUSINESS

    def test_solo_minor_reported_before_life_limits(self):
        """Test block precedence for PME_1 with two minors."""
        assert advance_block(PME_1, _selection(minor=2)) is AdvanceBlock.SOLO_MINOR_BUSINESS

    def test_pf_solo_minor_allowed(self):
        """Test that individuals may quote for minors only."""
        assert can_advance(PF, _selection(minor=1))

    def test_pme_30_has_no_count_limit(self):
        """Test that 30+ lives accepts small selections for reference."""
        assert can_advance(PME_30, _selection(adult=1))
        assert can_advance(PME_30, _selection(adult=40, senior=5))

    def test_blocks_without_suggestions(self):
        """Test that only count limits suggest another category."""
        assert AdvanceBlock.NO_LIVES.suggested_categories == ()
        assert AdvanceBlock.SOLO_MINOR_BUSINESS.suggested_categories == ()


@pytest.fixture
def flow(engine: QuoteEngine) -> QuoteFlow:
    """Flow over the sample catalog."""
    return QuoteFlow(engine)


class TestQuoteFlow:
    """Tests for QuoteFlow transitions."""

    def test_starts_at_type_selection(self, flow: QuoteFlow):
        """Test the initial state."""
        assert flow.step is QuoteStep.TYPE_SELECTION
        assert flow.category is None
        assert flow.selection.is_empty
        assert not flow.can_advance

    def test_individual_path(self, flow: QuoteFlow):
        """Test PF straight to bracket input and on to results."""
        flow.choose_individual()
        assert flow.step is QuoteStep.BRACKET_INPUT
        assert flow.category is PF

        flow.increment("0-18")
        flow.increment("29-33")
        result = flow.continue_to_results()

        assert flow.step is QuoteStep.RESULTS
        assert result.plans[0].plan.id == "amhemed-ideal-full"

    def test_business_path(self, flow: QuoteFlow):
        """Test the business path through the lives tier."""
        flow.choose_business()
        assert flow.step is QuoteStep.LIVES_SELECTION

        flow.select_category(PME_2)
        flow.increment("29-33")
        flow.increment("29-33")
        result = flow.continue_to_results()

        assert result.category is PME_2
        assert "gndi-smart-200" in [cp.plan.id for cp in result.plans]

    def test_select_category_rejects_pf(self, flow: QuoteFlow):
        """Test that the lives tier must be a business category."""
        flow.choose_business()
        with pytest.raises(InvalidTransition):
            flow.select_category(PF)

    def test_select_category_resets_counts(self, flow: QuoteFlow):
        """Test that picking a tier starts from an empty selection."""
        flow.choose_business()
        flow.select_category(PME_2)
        flow.increment("29-33")
        flow.go_back()
        flow.select_category(PME_30)

        assert flow.selection.is_empty

    def test_blocked_continue_raises(self, flow: QuoteFlow):
        """Test that a blocked selection stays on bracket input."""
        flow.choose_business()
        flow.select_category(PME_1)
        flow.increment("29-33")
        flow.increment("29-33")

        with pytest.raises(InvalidTransition) as exc_info:
            flow.continue_to_results()

        assert exc_info.value.reason == AdvanceBlock.SINGLE_LIFE_LIMIT.value
        assert exc_info.value.current_step == QuoteStep.BRACKET_INPUT.value
        assert flow.step is QuoteStep.BRACKET_INPUT

    def test_switch_category_keeps_counts(self, flow: QuoteFlow):
        """Test the suggested-category shortcut."""
        flow.choose_business()
        flow.select_category(PME_1)
        flow.increment("29-33")
        flow.increment("29-33")
        flow.switch_category(PME_2)

        assert flow.selection.total_lives == 2
        assert flow.can_advance

    def test_continue_with_no_lives(self, flow: QuoteFlow):
        """Test that results need at least one life."""
        flow.choose_individual()
        with pytest.raises(InvalidTransition) as exc_info:
            flow.continue_to_results()
        assert exc_info.value.reason == AdvanceBlock.NO_LIVES.value

    def test_decrement_floors_at_zero(self, flow: QuoteFlow):
        """Test that counts never go negative."""
        flow.choose_individual()
        flow.decrement("0-18")
        assert flow.selection.count("0-18") == 0

    def test_counts_only_editable_on_bracket_input(self, flow: QuoteFlow):
        """Test that counts cannot change from the first step."""
        with pytest.raises(InvalidTransition):
            flow.increment("0-18")

    def test_go_back_from_results(self, flow: QuoteFlow):
        """Test results back to bracket input with counts intact."""
        flow.choose_individual()
        flow.increment("29-33")
        flow.continue_to_results()
        flow.go_back()

        assert flow.step is QuoteStep.BRACKET_INPUT
        assert flow.selection.total_lives == 1

    def test_go_back_individual(self, flow: QuoteFlow):
        """Test that PF goes back to type selection and drops the category."""
        flow.choose_individual()
        flow.go_back()

        assert flow.step is QuoteStep.TYPE_SELECTION
        assert flow.category is None

    def test_go_back_business(self, flow: QuoteFlow):
        """Test that business goes back through the lives tier."""
        flow.choose_business()
        flow.select_category(PME_2)
        flow.go_back()
        assert flow.step is QuoteStep.LIVES_SELECTION
        flow.go_back()
        assert flow.step is QuoteStep.TYPE_SELECTION

    def test_go_back_from_first_step(self, flow: QuoteFlow):
        """Test that the first step has nowhere to go back to."""
        with pytest.raises(InvalidTransition):
            flow.go_back()

    def test_choose_twice_rejected(self, flow: QuoteFlow):
        """Test that the contract type is chosen once per pass."""
        flow.choose_individual()
        with pytest.raises(InvalidTransition):
            flow.choose_business()

"""Tests for comparison and summary helpers."""

from healthquote.core.types import ContractingCategory, CoparticipationType
from healthquote.quoting.catalog import PlanCatalog
from healthquote.quoting.comparison import (
    aligned_copay_rows,
    comparison_pair,
    split_variants,
    summary_rows,
)
from healthquote.quoting.engine import run_quote


def _groups(catalog: PlanCatalog, selection):
    return run_quote(catalog, ContractingCategory.PF, selection).plan_groups


class TestSplitVariants:
    """Tests for split_variants and comparison_pair."""

    def test_full_and_partial(self, sample_catalog: PlanCatalog, family_selection):
        """Test a product with both variants."""
        amhemed = _groups(sample_catalog, family_selection)[0]

        full, non_full = split_variants(amhemed)

        assert full.plan.coparticipation is CoparticipationType.FULL
        assert non_full.plan.coparticipation is CoparticipationType.PARTIAL
        assert comparison_pair(amhemed) == (full, non_full)

    def test_none_counts_as_non_full(self, sample_catalog: PlanCatalog, family_selection):
        """Test that no coparticipation lands on the non-full side."""
        fenix = _groups(sample_catalog, family_selection)[1]

        full, non_full = split_variants(fenix)

        assert full.plan.id == "fenix-bronze-full"
        assert non_full.plan.id == "fenix-bronze-none"

    def test_single_variant_has_no_pair(self, sample_catalog: PlanCatalog, family_selection):
        """Test that a lone variant cannot be compared."""
        unimed = _groups(sample_catalog, family_selection)[2]

        assert split_variants(unimed) == (unimed.variants[0], None)
        assert comparison_pair(unimed) is None


class TestSummaryRows:
    """Tests for the price summary table rows."""

    def test_rows(self, sample_catalog: PlanCatalog, family_selection):
        """Test one row per product with both price columns."""
        rows = summary_rows(_groups(sample_catalog, family_selection))

        assert [(r.operator, r.non_full_price, r.full_price) for r in rows] == [
            ("Amhemed", 600.0, 500.0),
            ("Fênix Saúde", 270.0, 200.0),
            ("Unimed Sorocaba", None, 250.0),
            ("Acme Saúde", 110.0, None),
        ]

    def test_to_dict(self, sample_catalog: PlanCatalog, family_selection):
        """Test serialized rows."""
        row = summary_rows(_groups(sample_catalog, family_selection))[3]

        assert row.to_dict() == {
            "operator": "Acme Saúde",
            "name": "Top",
            "type": "Apartamento",
            "logo_color": "bg-gray-400",
            "non_full_price": 110.0,
            "full_price": None,
        }


class TestAlignedCopayRows:
    """Tests for aligned_copay_rows."""

    def test_alignment(self, sample_catalog: PlanCatalog, family_selection):
        """Test fees lined up by service with gaps as None."""
        full, partial = _groups(sample_catalog, family_selection)[0].variants

        rows = aligned_copay_rows([full, partial])

        assert rows == [
            ("Consultas", ["R$ 25,00", None]),
            ("Terapias", ["R$ 20,00", "R$ 15,00"]),
        ]

    def test_no_fees(self, sample_catalog: PlanCatalog, family_selection):
        """Test plans without any listed fee."""
        unimed = _groups(sample_catalog, family_selection)[2]
        assert aligned_copay_rows(unimed.variants) == []

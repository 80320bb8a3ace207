"""Tests for contingency table module."""
import math

import pytest

from dgsea.data import Deg, Pathway, PathwayGene
from dgsea.enrichment import ContingencyRow, ContingencyTableBuilder, build_table, contingency_frame
from dgsea.utils import InvalidArgumentError


class TestContingencyRow:
    """Tests for ContingencyRow."""

    def test_sums(self):
        """Marginal sums should be derived from the four counts."""
        row = ContingencyRow("hsa1", "Test", 12, 34, 10, 20)
        assert row.in_pathway_total == 46
        assert row.not_in_pathway_total == 30
        assert row.total_significant == 22
        assert row.total_not_significant == 54
        assert row.total_degs == 76

    def test_to_dict_includes_sums(self):
        """Dictionary form should contain counts and sums."""
        row = ContingencyRow("hsa1", "Test", 1, 2, 3, 4).to_dict()
        assert row["pathway_id"] == "hsa1"
        assert row["in_pathway_total"] == 3
        assert row["total_degs"] == 10


class TestContingencyTableBuilder:
    """Tests for ContingencyTableBuilder."""

    def test_all_degs_in_one_pathway(self):
        """Three DEGs in one pathway with an extra unmatched gene."""
        degs = [Deg("pA", 1.0, 0.001), Deg("pB", 1.0, 0.5), Deg("pC", 1.0, 0.005)]
        pathway_genes = [
            PathwayGene("hsaP", i, symbol, f"ENSG{i}")
            for i, symbol in enumerate(["pA", "pB", "pC", "pD"], start=1)
        ]
        rows = build_table(degs, [Pathway("hsaP", "P")], pathway_genes, 0.01)

        assert len(rows) == 1
        row = rows[0]
        assert row.in_pathway_significant == 2
        assert row.in_pathway_not_significant == 1
        assert row.in_pathway_total == 3
        assert row.not_in_pathway_significant == 0
        assert row.not_in_pathway_not_significant == 0
        assert row.total_degs == 3

    def test_small_dataset(self, small_degs, small_pathways, small_pathway_genes):
        """Rows should follow pathway order with the expected counts."""
        rows = build_table(small_degs, small_pathways, small_pathway_genes)
        counts = [
            (r.in_pathway_significant, r.in_pathway_not_significant,
             r.not_in_pathway_significant, r.not_in_pathway_not_significant)
            for r in rows
        ]
        assert [r.pathway_id for r in rows] == ["hsa00001", "hsa00002", "hsa00003"]
        assert counts == [(2, 1, 0, 1), (1, 0, 1, 2), (0, 0, 2, 2)]

    def test_counts_sum_to_total_degs(self, small_degs, small_pathways, small_pathway_genes):
        """Every row should partition all DEGs."""
        for row in build_table(small_degs, small_pathways, small_pathway_genes):
            assert row.total_degs == len(small_degs)

    def test_threshold_is_inclusive(self, small_degs, small_pathways, small_pathway_genes):
        """A DEG exactly at the threshold should count as significant."""
        rows = build_table(small_degs, small_pathways, small_pathway_genes, 0.04)
        assert rows[0].in_pathway_significant == 3

    def test_nan_pvalue_not_significant(self):
        """A NaN adjusted p-value should be read as 1.0."""
        builder = ContingencyTableBuilder([], [], [], 0.01)
        assert not builder.is_significant(Deg("A", 1.0, math.nan))
        assert builder.is_significant(Deg("A", 1.0, 0.01))

    def test_invalid_threshold(self, small_degs, small_pathways, small_pathway_genes):
        """Thresholds outside [0, 1] should be rejected."""
        with pytest.raises(InvalidArgumentError):
            ContingencyTableBuilder(small_degs, small_pathways, small_pathway_genes, 1.5)

    def test_rejects_none_inputs(self, small_degs, small_pathways, small_pathway_genes):
        """None inputs should raise an input-validation error."""
        with pytest.raises(InvalidArgumentError):
            ContingencyTableBuilder(None, small_pathways, small_pathway_genes)
        with pytest.raises(InvalidArgumentError):
            ContingencyTableBuilder(small_degs, None, small_pathway_genes)
        with pytest.raises(InvalidArgumentError):
            ContingencyTableBuilder(small_degs, small_pathways, None)

    def test_empty_pathways(self, small_degs, small_pathway_genes):
        """No pathways should give no rows."""
        assert build_table(small_degs, [], small_pathway_genes) == []

    def test_to_frame(self, small_degs, small_pathways, small_pathway_genes):
        """DataFrame should have one row per pathway."""
        builder = ContingencyTableBuilder(small_degs, small_pathways, small_pathway_genes)
        df = builder.to_frame()
        assert len(df) == 3
        assert list(df["total_degs"]) == [4, 4, 4]

    def test_empty_frame(self):
        """No rows should give an empty DataFrame."""
        assert contingency_frame([]).empty

"""Tests for export utilities."""
import pandas as pd

from dgsea.data import (
    enrichment_summary_frame,
    format_contingency_table,
    write_contingency_table,
    write_enrichment_summary,
)
from dgsea.enrichment import ContingencyRow, compute_enrichment


class TestEnrichmentSummary:
    """Tests for the enrichment summary writer."""

    def test_frame_columns(self, small_degs, small_pathways, small_pathway_genes):
        """Summary should have the documented columns in order."""
        results = compute_enrichment(small_pathways, small_degs, small_pathway_genes)
        df = enrichment_summary_frame(results)
        assert list(df.columns) == [
            "pathway", "observed", "expected", "enrichment_score", "p_value", "adjusted_p_value"
        ]
        assert list(df["pathway"]) == ["Cell cycle", "p53 signaling pathway", "Orphan pathway"]

    def test_write(self, tmp_path, small_degs, small_pathways, small_pathway_genes):
        """Written summary should read back with one row per pathway."""
        results = compute_enrichment(small_pathways, small_degs, small_pathway_genes)
        path = write_enrichment_summary(results, tmp_path / "summary.tsv")
        df = pd.read_csv(path, sep="\t")
        assert len(df) == 3
        assert df.loc[0, "observed"] == 3

    def test_empty(self):
        """No results should give an empty frame with headers."""
        df = enrichment_summary_frame([])
        assert df.empty
        assert "pathway" in df.columns


class TestContingencyText:
    """Tests for the contingency table text format."""

    def test_format(self):
        """Each table should show the grid, sums and legend."""
        row = ContingencyRow("hsa04110", "Cell cycle", 12, 34, 10, 20)
        text = format_contingency_table([row])

        assert "Cell cycle (hsa04110)" in text
        assert "C\t | 12\t | 34\t | 46" in text
        assert "C*\t | 10\t | 20\t | 30" in text
        assert "Sum\t | 22\t | 54\t | 76" in text
        assert text.endswith("..pathway.")

    def test_multiple_tables(self):
        """One block per row, in order."""
        rows = [
            ContingencyRow("hsa1", "First", 1, 0, 0, 0),
            ContingencyRow("hsa2", "Second", 0, 1, 0, 0),
        ]
        text = format_contingency_table(rows)
        assert text.index("First (hsa1)") < text.index("Second (hsa2)")

    def test_write(self, tmp_path):
        """Table should be written as text."""
        path = write_contingency_table([ContingencyRow("hsa1", "First", 1, 2, 3, 4)], tmp_path / "table.txt")
        assert "First (hsa1)" in path.read_text()

"""Tests for data loading module."""
import math

import pytest

from dgsea.data import (
    Deg,
    Pathway,
    PathwayGene,
    create_sample_data,
    load_dataset,
    load_degs,
    load_pathway_genes,
    load_pathways,
)
from dgsea.utils import FailureKind, ParseError


class TestLoadDegs:
    """Tests for load_degs."""

    def test_csv(self, write_file):
        """Should parse symbol, fold change and adjusted p-value."""
        path = write_file("degs.csv", ["TP53,2.5,0.001", " BRCA1 , -1.5 , 0.2 "])
        degs = load_degs(path)
        assert degs == [Deg("TP53", 2.5, 0.001), Deg("BRCA1", -1.5, 0.2)]

    def test_tab_separated(self, write_file):
        """Tab should be used for .tsv files."""
        path = write_file("degs.tsv", ["TP53\t2.5\t0.001"])
        assert load_degs(path) == [Deg("TP53", 2.5, 0.001)]

    def test_explicit_separator(self, write_file):
        """An explicit separator should override the suffix."""
        path = write_file("degs.csv", ["TP53;2.5;0.001"])
        assert load_degs(path, sep=";") == [Deg("TP53", 2.5, 0.001)]

    def test_extra_columns_ignored(self, write_file):
        """Columns past the third should be ignored."""
        path = write_file("degs.csv", ["TP53,2.5,0.001,extra"])
        assert load_degs(path)[0].gene_symbol == "TP53"

    def test_nan_values(self, write_file):
        """NaN text should parse to float NaN."""
        path = write_file("degs.csv", ["TP53,NaN,NaN"])
        deg = load_degs(path)[0]
        assert math.isnan(deg.log_fold_change)
        assert math.isnan(deg.adjusted_p_value)

    def test_too_few_columns(self, write_file):
        """Rows with fewer than three columns should be rejected."""
        path = write_file("degs.csv", ["TP53,2.5"])
        with pytest.raises(ParseError, match="Expected at least 3 columns"):
            load_degs(path)

    def test_non_numeric(self, write_file):
        """Non-numeric fold changes should be rejected."""
        path = write_file("degs.csv", ["TP53,high,0.01"])
        with pytest.raises(ParseError, match="numeric") as excinfo:
            load_degs(path)
        assert excinfo.value.kind == FailureKind.PARSE

    def test_missing_file(self, tmp_path):
        """A missing file should raise ParseError."""
        with pytest.raises(ParseError, match="Error reading DEG file"):
            load_degs(tmp_path / "missing.csv")

    def test_empty_file(self, tmp_path):
        """An empty file should give no records."""
        path = tmp_path / "empty.csv"
        path.write_text("")
        assert load_degs(path) == []


class TestLoadPathways:
    """Tests for load_pathways and load_pathway_genes."""

    def test_pathways(self, write_file):
        """Should parse pathway id and description."""
        path = write_file("pathways.tsv", ["hsa04110\tCell cycle", "hsa04115\tp53 signaling pathway"])
        assert load_pathways(path) == [
            Pathway("hsa04110", "Cell cycle"),
            Pathway("hsa04115", "p53 signaling pathway"),
        ]

    def test_pathway_genes(self, write_file):
        """Should parse the four pathway-gene columns."""
        path = write_file("genes.csv", ["hsa04110,7157,TP53,ENSG00000141510"])
        assert load_pathway_genes(path) == [
            PathwayGene("hsa04110", 7157, "TP53", "ENSG00000141510")
        ]

    def test_pathway_genes_bad_entrez(self, write_file):
        """A non-integer Entrez id should be rejected."""
        path = write_file("genes.csv", ["hsa04110,abc,TP53,ENSG00000141510"])
        with pytest.raises(ParseError):
            load_pathway_genes(path)

    def test_pathway_genes_too_few_columns(self, write_file):
        """Pathway-gene rows need four columns."""
        path = write_file("genes.csv", ["hsa04110,7157,TP53"])
        with pytest.raises(ParseError, match="Expected at least 4 columns"):
            load_pathway_genes(path)

    def test_load_dataset(self, input_files):
        """Should load all three files."""
        degs, pathways, pathway_genes = load_dataset(*input_files)
        assert len(degs) == 10
        assert len(pathways) == 2
        assert len(pathway_genes) == 49


class TestCreateSampleData:
    """Tests for create_sample_data."""

    def test_shapes(self):
        """Should generate the requested sizes."""
        degs, pathways, pathway_genes = create_sample_data(
            n_degs=30, n_pathways=5, genes_per_pathway=10, random_state=1
        )
        assert len(degs) == 30
        assert len(pathways) == 5
        assert len(pathway_genes) == 50
        assert len({d.gene_symbol for d in degs}) == 30

    def test_reproducible(self):
        """The same seed should give the same data."""
        assert create_sample_data(random_state=7) == create_sample_data(random_state=7)

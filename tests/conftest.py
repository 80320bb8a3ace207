"""Shared pytest fixtures for DGSEA tests."""
import matplotlib
matplotlib.use("Agg")

import pytest

from dgsea.data import Deg, Pathway, PathwayGene


def _pathway_gene(pathway_id, entrez_id, symbol):
    return PathwayGene(pathway_id, entrez_id, symbol, f"ENSG{entrez_id:011d}")


@pytest.fixture
def small_degs():
    """Four DEGs, two of them significant at 0.01."""
    return [
        Deg("TP53", 2.5, 0.001),
        Deg("BRCA1", -1.5, 0.005),
        Deg("EGFR", 0.8, 0.2),
        Deg("MYC", -3.0, 0.04),
    ]


@pytest.fixture
def small_pathways():
    """Three pathways; hsa00003 has no gene associations."""
    return [
        Pathway("hsa00001", "Cell cycle"),
        Pathway("hsa00002", "p53 signaling pathway"),
        Pathway("hsa00003", "Orphan pathway"),
    ]


@pytest.fixture
def small_pathway_genes():
    """Ten pathway-gene rows over two pathways."""
    return [
        _pathway_gene("hsa00001", 7157, "TP53"),
        _pathway_gene("hsa00001", 672, "BRCA1"),
        _pathway_gene("hsa00001", 4609, "MYC"),
        _pathway_gene("hsa00001", 1017, "CDK2"),
        _pathway_gene("hsa00001", 1019, "CDK4"),
        _pathway_gene("hsa00002", 7157, "TP53"),
        _pathway_gene("hsa00002", 1026, "CDKN1A"),
        _pathway_gene("hsa00002", 4193, "MDM2"),
        _pathway_gene("hsa00002", 581, "BAX"),
        _pathway_gene("hsa00002", 355, "FAS"),
    ]


@pytest.fixture
def share_degs():
    """DEGs with log-fold changes 1, 2, 3 and 4."""
    return [
        Deg("g1", 1.0, 0.001),
        Deg("g2", 2.0, 0.001),
        Deg("g3", 3.0, 0.001),
        Deg("g4", 4.0, 0.001),
    ]


@pytest.fixture
def share_pathway_genes():
    """One gene per pathway, matching share_degs."""
    return [
        _pathway_gene("hsa10", 1, "g1"),
        _pathway_gene("hsa11", 2, "g2"),
        _pathway_gene("hsa12", 3, "g3"),
        _pathway_gene("hsa14", 4, "g4"),
    ]


@pytest.fixture
def write_file(tmp_path):
    """Write lines to a file under tmp_path and return its path."""
    def _write(name, lines):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n")
        return path
    return _write


@pytest.fixture
def input_files(write_file):
    """DEG, pathway and pathway-gene CSV files with one clearly enriched pathway."""
    degs = [f"G{i},{(-1) ** i * (i + 1) / 2},0.001" for i in range(8)]
    degs += ["X1,0.2,0.5", "X2,-0.3,0.3"]

    pathways = ["hsa01,Enriched pathway", "hsa02,Background pathway"]

    pathway_genes = [f"hsa01,{100 + i},G{i},ENSG{100 + i:011d}" for i in range(8)]
    pathway_genes += [f"hsa02,{200 + i},B{i},ENSG{200 + i:011d}" for i in range(40)]
    pathway_genes += ["hsa02,1,X1,ENSG00000000001"]

    return (
        write_file("degs.csv", degs),
        write_file("pathways.csv", pathways),
        write_file("pathway_genes.csv", pathway_genes),
    )

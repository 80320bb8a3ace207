"""
Input records for differential gene set enrichment analysis.

All records are immutable once constructed. Gene symbols are matched with
exact, case-sensitive string equality; whitespace is trimmed by the loaders.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Deg:
    """
    A differentially expressed gene.

    Attributes:
        gene_symbol: Gene symbol (e.g. 'TP53')
        log_fold_change: Log fold change of expression
        adjusted_p_value: Adjusted p-value of the differential expression test
    """
    gene_symbol: str
    log_fold_change: float
    adjusted_p_value: float


@dataclass(frozen=True)
class Pathway:
    """
    A biological pathway.

    Attributes:
        pathway_id: Identifier joining to PathwayGene (e.g. 'hsa04110')
        description: Human-readable pathway name
    """
    pathway_id: str
    description: str


@dataclass(frozen=True)
class PathwayGene:
    """
    Association of one gene with one pathway.

    Attributes:
        pathway_id: Pathway identifier
        entrez_gene_id: Entrez gene id
        gene_symbol: Gene symbol, matched against Deg.gene_symbol
        ensembl_gene_id: Ensembl gene id
    """
    pathway_id: str
    entrez_gene_id: int
    gene_symbol: str
    ensembl_gene_id: str

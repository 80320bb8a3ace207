"""
Enrichment analysis of differentially expressed genes over pathways.

Key Components:
    - DatasetIndex: Gene and pathway lookups built once per dataset
    - EnrichmentEngine: Hypergeometric enrichment with multiple testing correction
    - ContingencyTableBuilder: 2x2 tables of significance against pathway membership
    - FoldChangeShareDistributor: Share of average |log fold change| per pathway

Example Usage:
    >>> from dgsea.enrichment import compute_enrichment, select_top_enriched
    >>>
    >>> results = compute_enrichment(pathways, degs, pathway_genes)
    >>> top = select_top_enriched(results, max_pathways=10)
"""

from .indexer import DatasetIndex, build_gene_index, build_pathway_index
from .analysis import (
    EnrichmentConfig,
    EnrichmentResult,
    EnrichmentEngine,
    compute_enrichment,
    hypergeometric_pmf,
    hypergeometric_upper_tail,
    run_enrichment_analysis,
    select_top_enriched
)
from .contingency import (
    ContingencyRow,
    ContingencyTableBuilder,
    build_table,
    contingency_frame
)
from .fold_change import (
    FoldChangeShareDistributor,
    most_influential_pathways,
    percentages_for_pathways
)

__all__ = [
    'DatasetIndex',
    'build_gene_index',
    'build_pathway_index',
    'EnrichmentConfig',
    'EnrichmentResult',
    'EnrichmentEngine',
    'compute_enrichment',
    'hypergeometric_pmf',
    'hypergeometric_upper_tail',
    'run_enrichment_analysis',
    'select_top_enriched',
    'ContingencyRow',
    'ContingencyTableBuilder',
    'build_table',
    'contingency_frame',
    'FoldChangeShareDistributor',
    'most_influential_pathways',
    'percentages_for_pathways'
]

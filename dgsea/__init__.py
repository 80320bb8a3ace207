"""
DGSEA: Differential Gene Set Enrichment Analysis

A Python package that tests pathways for over-representation of
differentially expressed genes, tabulates DEG significance against pathway
membership and distributes the average log-fold-change over pathways.
"""

__version__ = "0.1.0"
__author__ = "DGSEA Team"

# Core module imports
from .data.records import Deg, Pathway, PathwayGene
from .data.loaders import load_degs, load_pathways, load_pathway_genes, load_dataset, create_sample_data
from .enrichment.indexer import DatasetIndex
from .enrichment.analysis import (
    EnrichmentConfig,
    EnrichmentEngine,
    EnrichmentResult,
    compute_enrichment,
    run_enrichment_analysis,
    select_top_enriched
)
from .enrichment.contingency import ContingencyRow, ContingencyTableBuilder, build_table
from .enrichment.fold_change import FoldChangeShareDistributor, percentages_for_pathways
from .utils.errors import DgseaError, FailureKind, Outcome
from .visualization.plots import ChartConfig, plot_enrichment_bar_chart, plot_enrichment_dot_plot

# Convenience aliases
enrich = compute_enrichment
contingency_table = build_table

__all__ = [
    'Deg',
    'Pathway',
    'PathwayGene',
    'load_degs',
    'load_pathways',
    'load_pathway_genes',
    'load_dataset',
    'create_sample_data',
    'DatasetIndex',
    'EnrichmentConfig',
    'EnrichmentEngine',
    'EnrichmentResult',
    'compute_enrichment',
    'enrich',
    'run_enrichment_analysis',
    'select_top_enriched',
    'ContingencyRow',
    'ContingencyTableBuilder',
    'build_table',
    'contingency_table',
    'FoldChangeShareDistributor',
    'percentages_for_pathways',
    'DgseaError',
    'FailureKind',
    'Outcome',
    'ChartConfig',
    'plot_enrichment_bar_chart',
    'plot_enrichment_dot_plot'
]

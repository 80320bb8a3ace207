"""
Input records, loading and export utilities for DGSEA.
"""

from .records import Deg, Pathway, PathwayGene
from .loaders import (
    load_degs,
    load_pathways,
    load_pathway_genes,
    load_dataset,
    create_sample_data
)
from .exporters import (
    enrichment_summary_frame,
    write_enrichment_summary,
    format_contingency_table,
    write_contingency_table
)

__all__ = [
    'Deg',
    'Pathway',
    'PathwayGene',
    'load_degs',
    'load_pathways',
    'load_pathway_genes',
    'load_dataset',
    'create_sample_data',
    'enrichment_summary_frame',
    'write_enrichment_summary',
    'format_contingency_table',
    'write_contingency_table'
]

"""
Lookup structures shared by the enrichment, contingency and fold-change
computations.

A DatasetIndex is built once per loaded dataset so that per-pathway
queries do not rescan the full DEG and pathway-gene lists.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Sequence, Tuple

from ..data.records import Deg, PathwayGene

logger = logging.getLogger(__name__)


def build_gene_index(degs: Sequence[Deg]) -> Dict[str, Deg]:
    """Map gene symbol to DEG record. The last record wins on duplicates."""
    gene_to_deg: Dict[str, Deg] = {}
    for deg in degs:
        if deg.gene_symbol in gene_to_deg:
            logger.debug(f"Duplicate DEG gene symbol '{deg.gene_symbol}', keeping last")
        gene_to_deg[deg.gene_symbol] = deg
    return gene_to_deg


def build_pathway_index(pathway_genes: Sequence[PathwayGene]) -> Dict[str, List[PathwayGene]]:
    """Map pathway id to its gene associations, in input order."""
    pathway_to_genes: Dict[str, List[PathwayGene]] = {}
    for gene in pathway_genes:
        pathway_to_genes.setdefault(gene.pathway_id, []).append(gene)
    return pathway_to_genes


@dataclass(frozen=True)
class DatasetIndex:
    """
    Read-only lookups over one loaded dataset.

    Attributes:
        gene_to_deg: Gene symbol -> DEG record
        pathway_to_genes: Pathway id -> pathway-gene rows
        total_degs: Number of DEG records (duplicates included)
        total_pathway_genes: Number of pathway-gene rows

    Example:
        >>> index = DatasetIndex.from_records(degs, pathway_genes)
        >>> index.genes_for('hsa04110')
        >>> index.is_deg('TP53')
    """
    gene_to_deg: Dict[str, Deg]
    pathway_to_genes: Dict[str, List[PathwayGene]]
    total_degs: int
    total_pathway_genes: int
    _symbols: Dict[str, FrozenSet[str]] = field(default_factory=dict, repr=False)

    @classmethod
    def from_records(cls,
                     degs: Sequence[Deg],
                     pathway_genes: Sequence[PathwayGene]) -> "DatasetIndex":
        pathway_to_genes = build_pathway_index(pathway_genes)
        symbols = {
            pathway_id: frozenset(gene.gene_symbol for gene in genes)
            for pathway_id, genes in pathway_to_genes.items()
        }
        index = cls(
            gene_to_deg=build_gene_index(degs),
            pathway_to_genes=pathway_to_genes,
            total_degs=len(degs),
            total_pathway_genes=len(pathway_genes),
            _symbols=symbols
        )
        logger.debug(f"Indexed {len(index.gene_to_deg)} DEG symbols and "
                     f"{len(pathway_to_genes)} pathways")
        return index

    def genes_for(self, pathway_id: str) -> Tuple[PathwayGene, ...]:
        """Pathway-gene rows of a pathway; empty for an unknown id."""
        return tuple(self.pathway_to_genes.get(pathway_id, ()))

    def symbols_for(self, pathway_id: str) -> FrozenSet[str]:
        """Distinct gene symbols associated with a pathway."""
        return self._symbols.get(pathway_id, frozenset())

    def has_pathway(self, pathway_id: str) -> bool:
        return pathway_id in self.pathway_to_genes

    def is_deg(self, gene_symbol: str) -> bool:
        return gene_symbol in self.gene_to_deg

    def matched_degs(self, pathway_id: str) -> List[Deg]:
        """DEG record of every pathway-gene row whose symbol is a DEG."""
        return [
            self.gene_to_deg[gene.gene_symbol]
            for gene in self.pathway_to_genes.get(pathway_id, ())
            if gene.gene_symbol in self.gene_to_deg
        ]

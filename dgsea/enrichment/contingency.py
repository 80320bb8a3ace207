"""
2x2 contingency tables of DEG significance against pathway membership.

For every pathway the DEGs are split by two aspects: whether their gene
symbol is associated with the pathway (C / C*) and whether their adjusted
p-value is at or below the significance threshold (D / D*):

              | D  | D*  | Sum
    C         | 12 | 34  | 46
    C*        | 10 | 20  | 30
    Sum       | 22 | 54  | 76
"""

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from .indexer import DatasetIndex
from ..data.records import Deg, Pathway, PathwayGene
from ..utils.helpers import require_not_none, safe_probability, validate_threshold

logger = logging.getLogger(__name__)

DEFAULT_SIGNIFICANCE_THRESHOLD = 0.01


@dataclass(frozen=True)
class ContingencyRow:
    """
    Count data of one pathway's 2x2 table.

    Attributes:
        pathway_id: Pathway identifier
        description: Pathway description
        in_pathway_significant: Significant DEGs in the pathway (C, D)
        in_pathway_not_significant: Non-significant DEGs in the pathway (C, D*)
        not_in_pathway_significant: Significant DEGs outside the pathway (C*, D)
        not_in_pathway_not_significant: Non-significant DEGs outside (C*, D*)
    """
    pathway_id: str
    description: str
    in_pathway_significant: int
    in_pathway_not_significant: int
    not_in_pathway_significant: int
    not_in_pathway_not_significant: int

    @property
    def in_pathway_total(self) -> int:
        return self.in_pathway_significant + self.in_pathway_not_significant

    @property
    def not_in_pathway_total(self) -> int:
        return self.not_in_pathway_significant + self.not_in_pathway_not_significant

    @property
    def total_significant(self) -> int:
        return self.in_pathway_significant + self.not_in_pathway_significant

    @property
    def total_not_significant(self) -> int:
        return self.in_pathway_not_significant + self.not_in_pathway_not_significant

    @property
    def total_degs(self) -> int:
        return self.in_pathway_total + self.not_in_pathway_total

    def to_dict(self) -> Dict[str, Any]:
        """Convert row to dictionary format, sums included."""
        row = asdict(self)
        row.update({
            'in_pathway_total': self.in_pathway_total,
            'not_in_pathway_total': self.not_in_pathway_total,
            'total_significant': self.total_significant,
            'total_not_significant': self.total_not_significant,
            'total_degs': self.total_degs
        })
        return row


class ContingencyTableBuilder:
    """
    Builds one 2x2 contingency table per pathway.

    A DEG counts as "in pathway" when its gene symbol appears among the
    pathway's gene associations, and as significant when its adjusted
    p-value (NaN read as 1.0) is at or below the threshold.

    Attributes:
        degs: Differentially expressed genes
        pathways: Pathways, in output order
        index: DatasetIndex over the DEGs and pathway-gene rows
        significance_threshold: Adjusted p-value threshold

    Example:
        >>> builder = ContingencyTableBuilder(degs, pathways, pathway_genes, 0.01)
        >>> rows = builder.build_table()
        >>> print(format_contingency_table(rows))
    """

    def __init__(self,
                 degs: Sequence[Deg],
                 pathways: Sequence[Pathway],
                 pathway_genes: Sequence[PathwayGene],
                 significance_threshold: float = DEFAULT_SIGNIFICANCE_THRESHOLD):
        require_not_none(degs, 'degs')
        require_not_none(pathways, 'pathways')
        require_not_none(pathway_genes, 'pathway_genes')

        self.degs = list(degs)
        self.pathways = list(pathways)
        self.index = DatasetIndex.from_records(degs, pathway_genes)
        self.significance_threshold = validate_threshold(significance_threshold)

        self._significant = [self.is_significant(deg) for deg in self.degs]

    def is_significant(self, deg: Deg) -> bool:
        return safe_probability(deg.adjusted_p_value) <= self.significance_threshold

    def build_row(self, pathway: Pathway) -> ContingencyRow:
        """Count DEGs of one pathway; unmatched pathways give zero in-pathway counts."""
        symbols = self.index.symbols_for(pathway.pathway_id)
        if not symbols:
            logger.debug(f"Pathway {pathway.pathway_id} has no gene associations")

        total_degs = len(self.degs)
        total_significant = sum(self._significant)

        in_pathway_total = 0
        in_pathway_significant = 0
        for deg, significant in zip(self.degs, self._significant):
            if deg.gene_symbol in symbols:
                in_pathway_total += 1
                in_pathway_significant += significant

        not_in_pathway_total = total_degs - in_pathway_total
        not_in_pathway_significant = total_significant - in_pathway_significant

        return ContingencyRow(
            pathway_id=pathway.pathway_id,
            description=pathway.description,
            in_pathway_significant=in_pathway_significant,
            in_pathway_not_significant=in_pathway_total - in_pathway_significant,
            not_in_pathway_significant=not_in_pathway_significant,
            not_in_pathway_not_significant=not_in_pathway_total - not_in_pathway_significant
        )

    def build_table(self) -> List[ContingencyRow]:
        """Build one ContingencyRow per pathway, in pathway order."""
        logger.info(f"Building contingency tables for {len(self.pathways)} pathways "
                    f"(threshold {self.significance_threshold})")
        return [self.build_row(pathway) for pathway in self.pathways]

    def to_frame(self) -> pd.DataFrame:
        """Contingency counts of all pathways as a DataFrame."""
        return contingency_frame(self.build_table())


def build_table(degs: Sequence[Deg],
                pathways: Sequence[Pathway],
                pathway_genes: Sequence[PathwayGene],
                significance_threshold: float = DEFAULT_SIGNIFICANCE_THRESHOLD
                ) -> List[ContingencyRow]:
    """Build one 2x2 contingency row per pathway, in pathway order."""
    return ContingencyTableBuilder(
        degs, pathways, pathway_genes, significance_threshold
    ).build_table()


def contingency_frame(rows: Optional[Sequence[ContingencyRow]]) -> pd.DataFrame:
    """Convert contingency rows, sums included, to a DataFrame."""
    return pd.DataFrame([row.to_dict() for row in rows or []])

"""
Share of differential expression per pathway.

Each pathway's average absolute log-fold-change over its matched DEGs is
scaled into a percentage of the sum of these averages over the selected
pathways. A high percentage means the pathway's genes change a lot on
average compared with the other selected pathways.
"""

import logging
import math
from typing import Dict, List, Optional, Sequence

from .indexer import DatasetIndex
from ..data.records import Deg, PathwayGene
from ..utils.errors import InvalidArgumentError, PathwayNotFoundError
from ..utils.helpers import require_items, validate_max_count

logger = logging.getLogger(__name__)


def _require_unique(pathway_ids: Sequence[str]) -> None:
    seen = set()
    duplicates = []
    for pathway_id in pathway_ids:
        if pathway_id in seen and pathway_id not in duplicates:
            duplicates.append(pathway_id)
        seen.add(pathway_id)

    if duplicates:
        raise InvalidArgumentError(f"Duplicate pathway ids: {', '.join(duplicates)}")


class FoldChangeShareDistributor:
    """
    Distributes 100% over pathways by average absolute log-fold-change.

    Attributes:
        index: DatasetIndex over the DEGs and pathway-gene rows

    Example:
        >>> distributor = FoldChangeShareDistributor(degs, pathway_genes)
        >>> ids = ['hsa04110', 'hsa04115']
        >>> percentages = distributor.percentages_for_pathways(ids)
        >>> top = distributor.top_influential(1, percentages, ids)
    """

    def __init__(self, degs: Sequence[Deg], pathway_genes: Sequence[PathwayGene]):
        require_items(degs, 'degs')
        require_items(pathway_genes, 'pathway_genes')
        self.index = DatasetIndex.from_records(degs, pathway_genes)

    def average_abs_log_fold_change(self, pathway_id: str) -> float:
        """
        Mean |log fold change| of the DEGs matched by a pathway's genes.

        Args:
            pathway_id: Pathway identifier

        Returns:
            The average, or 0.0 if none of the pathway's genes is a DEG

        Raises:
            PathwayNotFoundError: If the id has no pathway-gene rows
        """
        if not self.index.has_pathway(pathway_id):
            raise PathwayNotFoundError(pathway_id)

        total = 0.0
        matched = 0
        for deg in self.index.matched_degs(pathway_id):
            if math.isnan(deg.log_fold_change):
                logger.warning(f"Skipping NaN log fold change of {deg.gene_symbol}")
                continue
            total += abs(deg.log_fold_change)
            matched += 1

        return total / matched if matched else 0.0

    def percentages_for_pathways(self, pathway_ids: Sequence[str]) -> List[float]:
        """
        Percentage of the summed averages taken by each pathway.

        Args:
            pathway_ids: Pathway ids, at least one

        Returns:
            One percentage per id, in input order. Pathways with an average
            of 0.0 get 0.0, so an all-zero selection yields all zeros.

        Raises:
            InvalidArgumentError: If pathway_ids is None, empty or has duplicates
            PathwayNotFoundError: If an id has no pathway-gene rows
        """
        require_items(pathway_ids, 'pathway_ids')
        _require_unique(pathway_ids)

        averages = [self.average_abs_log_fold_change(pathway_id) for pathway_id in pathway_ids]
        total = sum(averages)

        percentages = [0.0 if average == 0.0 else average / total * 100
                       for average in averages]

        logger.debug(f"Distributed fold-change share over {len(pathway_ids)} pathways")
        return percentages

    def shares_for_pathways(self, pathway_ids: Sequence[str]) -> Dict[str, float]:
        """Pathway id -> percentage, in input order."""
        return dict(zip(pathway_ids, self.percentages_for_pathways(pathway_ids)))

    @staticmethod
    def top_influential(max_count: int,
                        percentages: Sequence[float],
                        pathway_ids: Sequence[str]) -> Dict[str, float]:
        """
        Keep the `max_count` pathways with the highest percentage.

        Ties keep their input order.

        Args:
            max_count: Number of pathways to keep, at least 1
            percentages: Percentages, aligned with pathway_ids
            pathway_ids: Pathway ids

        Returns:
            Pathway id -> percentage, highest percentage first

        Raises:
            InvalidArgumentError: If max_count < 1, the inputs differ in length
                or pathway_ids has duplicates
        """
        validate_max_count(max_count)
        if len(percentages) != len(pathway_ids):
            raise InvalidArgumentError(
                f"Got {len(percentages)} percentages for {len(pathway_ids)} pathway ids"
            )
        _require_unique(pathway_ids)

        ranked = sorted(zip(pathway_ids, percentages), key=lambda pair: pair[1], reverse=True)
        return dict(ranked[:max_count])


def percentages_for_pathways(pathway_ids: Sequence[str],
                             degs: Sequence[Deg],
                             pathway_genes: Sequence[PathwayGene]) -> List[float]:
    """One fold-change percentage per pathway id, in input order."""
    return FoldChangeShareDistributor(degs, pathway_genes).percentages_for_pathways(pathway_ids)


def most_influential_pathways(degs: Sequence[Deg],
                              pathway_genes: Sequence[PathwayGene],
                              pathway_ids: Sequence[str],
                              max_count: Optional[int] = None) -> Dict[str, float]:
    """
    Fold-change share of the most influential pathways.

    Args:
        degs: Differentially expressed genes
        pathway_genes: Pathway-gene associations
        pathway_ids: Pathways to distribute the share over
        max_count: Number of pathways to keep; all when None

    Returns:
        Pathway id -> percentage, highest percentage first
    """
    distributor = FoldChangeShareDistributor(degs, pathway_genes)
    percentages = distributor.percentages_for_pathways(pathway_ids)
    if max_count is None:
        max_count = len(pathway_ids)
    return distributor.top_influential(max_count, percentages, pathway_ids)

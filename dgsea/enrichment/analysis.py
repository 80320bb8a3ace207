"""
Pathway enrichment analysis of differentially expressed genes.

For every pathway the number of DEGs among its gene associations is
compared with the number expected under a uniform random draw, scored as
a standardized residual, and tested with an upper-tail hypergeometric
test. P-values are corrected for the number of pathways tested.

Classes:
    EnrichmentConfig: Configuration dataclass for enrichment analysis
    EnrichmentResult: Container dataclass for one pathway's result
    EnrichmentEngine: Per-pathway enrichment calculator

Functions:
    hypergeometric_pmf: Hypergeometric point probability
    hypergeometric_upper_tail: P(X >= k) for the hypergeometric distribution
    compute_enrichment: One result per pathway, in pathway order
    select_top_enriched: Significant results ranked by enrichment score
    run_enrichment_analysis: Convenience function returning a DataFrame
"""

import logging
import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd
from scipy import stats
from statsmodels.stats.multitest import multipletests

from .indexer import DatasetIndex
from ..data.records import Deg, Pathway, PathwayGene
from ..utils.helpers import clean_pvalues, require_not_none, safe_probability, validate_max_count

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnrichmentConfig:
    """
    Configuration for enrichment analysis.

    Attributes:
        significance_cutoff: Adjusted p-value below which a pathway is
            selected for charts (default: 0.05)
        max_pathways: Number of top pathways shown in charts (default: 20)
        correction_method: Multiple testing correction method passed to
            statsmodels' multipletests (default: 'bonferroni')

    Example:
        >>> config = EnrichmentConfig(
        ...     significance_cutoff=0.01,
        ...     max_pathways=10
        ... )
        >>> engine = EnrichmentEngine(pathways, degs, pathway_genes, config=config)
    """
    significance_cutoff: float = 0.05
    max_pathways: int = 20
    correction_method: str = "bonferroni"


@dataclass(frozen=True)
class EnrichmentResult:
    """
    Container for a single pathway's enrichment result.

    Attributes:
        pathway_id: Pathway identifier
        enrichment_score: (observed - expected) / sqrt(expected); negative
            values indicate under-representation
        p_value: Upper-tail hypergeometric p-value
        adjusted_p_value: P-value corrected for the number of pathways
        description: Pathway description
        observed: Number of pathway-gene rows whose symbol is a DEG
        expected: Number of DEGs expected in the pathway by chance
        pathway_size: Number of pathway-gene rows of the pathway

    Example:
        >>> result = EnrichmentResult(
        ...     pathway_id='hsa04110',
        ...     enrichment_score=2.5,
        ...     p_value=0.001,
        ...     adjusted_p_value=0.01,
        ...     description='Cell cycle'
        ... )
    """
    pathway_id: str
    enrichment_score: float
    p_value: float
    adjusted_p_value: float
    description: str = ""
    observed: int = 0
    expected: float = 0.0
    pathway_size: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary format."""
        return asdict(self)


def hypergeometric_pmf(k, sample_size: int, successes: int, population: int):
    """
    Hypergeometric probability C(K,k) * C(N-K, n-k) / C(N,n).

    Values of k outside the support (k > K, k > n or n - k > N - K) have
    probability 0.

    Args:
        k: Number of observed successes (scalar or array)
        sample_size: Number of draws n
        successes: Number of successes in the population K
        population: Population size N

    Returns:
        Probability for each k. NaN when there are more draws or more
        successes than population members.
    """
    k = np.asarray(k)
    if sample_size > population or successes > population:
        return np.full(k.shape, np.nan)

    return stats.hypergeom.pmf(k, population, successes, sample_size)


def hypergeometric_upper_tail(observed: int,
                              sample_size: int,
                              successes: int,
                              population: int) -> float:
    """
    Probability of drawing at least `observed` successes.

    Sums the hypergeometric probabilities for k = observed..sample_size.
    Terms with k > successes are zero, and observed > sample_size gives an
    empty sum of 0.0. A NaN sum, as produced by an empty population,
    collapses to 1.0.

    Args:
        observed: Observed successes
        sample_size: Number of draws (genes in the pathway)
        successes: Successes in the population (total DEGs)
        population: Population size (total pathway-gene rows)

    Returns:
        Upper-tail p-value in [0, 1]

    Example:
        >>> hypergeometric_upper_tail(2, sample_size=3, successes=4, population=10)
        0.3333...
    """
    k = np.arange(observed, sample_size + 1)
    p_value = float(np.sum(hypergeometric_pmf(k, sample_size, successes, population)))

    if math.isnan(p_value):
        return 1.0
    return min(max(p_value, 0.0), 1.0)


class EnrichmentEngine:
    """
    Per-pathway enrichment calculator.

    Observed and expected DEG counts are taken from the pathway-gene table:
    the gene universe is the number of pathway-gene rows and the expected
    count of a pathway is its share of that universe times the number of
    DEGs.

    Attributes:
        pathways: Pathways to test, in output order
        index: DatasetIndex over the DEGs and pathway-gene rows
        config: EnrichmentConfig instance

    Example:
        >>> engine = EnrichmentEngine(pathways, degs, pathway_genes)
        >>> results = engine.compute_enrichment()
        >>> top = select_top_enriched(results, max_pathways=10)
    """

    def __init__(self,
                 pathways: Sequence[Pathway],
                 degs: Sequence[Deg],
                 pathway_genes: Sequence[PathwayGene],
                 config: Optional[EnrichmentConfig] = None):
        require_not_none(pathways, 'pathways')
        require_not_none(degs, 'degs')
        require_not_none(pathway_genes, 'pathway_genes')

        self.pathways = list(pathways)
        self.index = DatasetIndex.from_records(degs, pathway_genes)
        self.config = config or EnrichmentConfig()

        if self.index.total_degs > self.index.total_pathway_genes:
            logger.warning(
                f"Number of DEGs ({self.index.total_degs}) exceeds the number of "
                f"pathway-gene rows ({self.index.total_pathway_genes})"
            )

    def observed_count(self, pathway_id: str) -> int:
        """Pathway-gene rows of the pathway whose symbol is any DEG."""
        return sum(1 for gene in self.index.genes_for(pathway_id)
                   if self.index.is_deg(gene.gene_symbol))

    def expected_count(self, pathway_size: int) -> float:
        """DEGs expected in a pathway of `pathway_size` rows by chance."""
        if self.index.total_pathway_genes == 0:
            return 0.0
        return self.index.total_degs / self.index.total_pathway_genes * pathway_size

    @staticmethod
    def enrichment_score(observed: int, expected: float) -> float:
        """Standardized residual (observed - expected) / sqrt(expected)."""
        if expected <= 0 or observed == 0:
            return 0.0
        return (observed - expected) / math.sqrt(expected)

    def hypergeometric_test(self, observed: int, pathway_size: int) -> float:
        """
        Upper-tail hypergeometric p-value for one pathway.

        Uses the pathway-gene rows as population, the DEGs as successes in
        the population and the pathway's rows as the sample.

        Args:
            observed: DEGs observed in the pathway
            pathway_size: Pathway-gene rows of the pathway

        Returns:
            P-value, 1.0 when nothing was observed
        """
        if observed == 0:
            return 1.0

        return hypergeometric_upper_tail(
            observed=observed,
            sample_size=pathway_size,
            successes=self.index.total_degs,
            population=self.index.total_pathway_genes
        )

    def multiple_testing_correction(self,
                                    pvalues: Sequence[float],
                                    method: Optional[str] = None) -> np.ndarray:
        """
        Correct p-values for the number of tests.

        NaN p-values are treated as 1.0 before correction.

        Args:
            pvalues: Raw p-values
            method: statsmodels multipletests method, defaults to the
                configured correction method

        Returns:
            Adjusted p-values in the input order
        """
        pvalues = clean_pvalues(pvalues)
        if len(pvalues) == 0:
            return pvalues

        method = method or self.config.correction_method
        _, adjusted, _, _ = multipletests(pvalues, method=method)

        logger.debug("Applied %s correction to %d p-values", method, len(pvalues))
        return np.minimum(adjusted, 1.0)

    def compute_enrichment(self) -> List[EnrichmentResult]:
        """
        Compute one enrichment result per pathway, in pathway order.

        Returns:
            List of EnrichmentResult; pathways without any observed DEG get
            score 0 and p-value 1.0
        """
        logger.info(f"Running enrichment analysis for {len(self.pathways)} pathways")

        rows = []
        for pathway in self.pathways:
            pathway_size = len(self.index.genes_for(pathway.pathway_id))
            observed = self.observed_count(pathway.pathway_id)
            expected = self.expected_count(pathway_size)
            score = self.enrichment_score(observed, expected)
            p_value = safe_probability(self.hypergeometric_test(observed, pathway_size))
            rows.append((pathway, observed, expected, score, p_value, pathway_size))

        adjusted = self.multiple_testing_correction([row[4] for row in rows])

        results = [
            EnrichmentResult(
                pathway_id=pathway.pathway_id,
                enrichment_score=score,
                p_value=p_value,
                adjusted_p_value=safe_probability(float(adj_p)),
                description=pathway.description,
                observed=observed,
                expected=expected,
                pathway_size=pathway_size
            )
            for (pathway, observed, expected, score, p_value, pathway_size), adj_p
            in zip(rows, adjusted)
        ]

        n_significant = sum(1 for r in results
                            if r.adjusted_p_value < self.config.significance_cutoff)
        logger.info(f"{n_significant} of {len(results)} pathways have adjusted p-value "
                    f"below {self.config.significance_cutoff}")
        return results


def compute_enrichment(pathways: Sequence[Pathway],
                       degs: Sequence[Deg],
                       pathway_genes: Sequence[PathwayGene],
                       config: Optional[EnrichmentConfig] = None) -> List[EnrichmentResult]:
    """Compute one EnrichmentResult per pathway, preserving pathway order."""
    return EnrichmentEngine(pathways, degs, pathway_genes, config=config).compute_enrichment()


def select_top_enriched(results: Sequence[EnrichmentResult],
                        max_pathways: int = 20,
                        significance_cutoff: float = 0.05) -> List[EnrichmentResult]:
    """
    Select significant results ranked by enrichment score.

    Keeps results whose adjusted p-value is not NaN and strictly below
    `significance_cutoff`, sorts them by enrichment score (highest first,
    ties in input order) and returns at most `max_pathways` of them.

    Args:
        results: Enrichment results
        max_pathways: Maximum number of results to return (at least 1)
        significance_cutoff: Adjusted p-value cutoff

    Returns:
        Selected results
    """
    validate_max_count(max_pathways, 'max_pathways')

    significant = [r for r in results
                   if not math.isnan(r.adjusted_p_value)
                   and r.adjusted_p_value < significance_cutoff]
    significant.sort(key=lambda r: r.enrichment_score, reverse=True)

    logger.debug(f"Selected {min(len(significant), max_pathways)} of "
                 f"{len(significant)} significant pathways")
    return significant[:max_pathways]


def run_enrichment_analysis(pathways: Sequence[Pathway],
                            degs: Sequence[Deg],
                            pathway_genes: Sequence[PathwayGene],
                            config: Optional[EnrichmentConfig] = None) -> pd.DataFrame:
    """
    Run enrichment analysis and return all results as a DataFrame.

    Args:
        pathways: Pathways to test
        degs: Differentially expressed genes
        pathway_genes: Pathway-gene associations
        config: Optional EnrichmentConfig

    Returns:
        DataFrame with one row per pathway, in pathway order

    Example:
        >>> df = run_enrichment_analysis(pathways, degs, pathway_genes)
        >>> df[df['adjusted_p_value'] < 0.05]
    """
    results = compute_enrichment(pathways, degs, pathway_genes, config=config)
    columns = list(EnrichmentResult.__dataclass_fields__)
    return pd.DataFrame([r.to_dict() for r in results], columns=columns)

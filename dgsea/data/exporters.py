"""
Writers for enrichment summaries and contingency tables.
"""

import logging
from pathlib import Path
from typing import Sequence, Union

import pandas as pd

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = {
    'description': 'pathway',
    'observed': 'observed',
    'expected': 'expected',
    'enrichment_score': 'enrichment_score',
    'p_value': 'p_value',
    'adjusted_p_value': 'adjusted_p_value'
}

TABLE_TEMPLATE = """
{description} ({pathway_id})
\t | D\t | D*\t | Sum
----------------------
C\t | {in_pathway_significant}\t | {in_pathway_not_significant}\t | {in_pathway_total}
C*\t | {not_in_pathway_significant}\t | {not_in_pathway_not_significant}\t | {not_in_pathway_total}
Sum\t | {total_significant}\t | {total_not_significant}\t | {total_degs}
"""

TABLE_LEGEND = "\nD=is.. D*=is not.., Significant deg C=in.. C*=not in.., ..pathway."


def enrichment_summary_frame(results: Sequence) -> pd.DataFrame:
    """
    Build the delimited enrichment summary.

    Parameters:
    -----------
    results : Sequence[EnrichmentResult]
        Enrichment results, one per pathway

    Returns:
    --------
    pd.DataFrame
        Columns pathway, observed, expected, enrichment_score, p_value,
        adjusted_p_value
    """

    df = pd.DataFrame([r.to_dict() for r in results], columns=list(SUMMARY_COLUMNS))
    return df.rename(columns=SUMMARY_COLUMNS)


def write_enrichment_summary(
    results: Sequence,
    output_path: Union[str, Path],
    sep: str = '\t'
) -> Path:
    """Write the enrichment summary of all pathways to a delimited file."""
    output_path = Path(output_path)
    enrichment_summary_frame(results).to_csv(output_path, sep=sep, index=False)
    logger.info(f"Enrichment summary written to {output_path}")
    return output_path


def format_contingency_table(rows: Sequence) -> str:
    """
    Render contingency rows as text, one 2x2 grid per pathway.

    Parameters:
    -----------
    rows : Sequence[ContingencyRow]
        Rows to render

    Returns:
    --------
    str
        Text table followed by a legend line
    """

    output = ''.join(TABLE_TEMPLATE.format(**row.to_dict()) for row in rows)
    return output + TABLE_LEGEND


def write_contingency_table(rows: Sequence, output_path: Union[str, Path]) -> Path:
    """Write the rendered contingency tables to a text file."""
    output_path = Path(output_path)
    output_path.write_text(format_contingency_table(rows))
    logger.info(f"Contingency table written to {output_path}")
    return output_path

"""
Data loading utilities for DEG, pathway and pathway-gene files.

Input files are headerless delimited text. Comma is used for `.csv` files
and tab for `.tsv`/`.txt` files unless a separator is given explicitly.
"""

import logging
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

import numpy as np
import pandas as pd

from .records import Deg, Pathway, PathwayGene
from ..utils.errors import ParseError

logger = logging.getLogger(__name__)

# Minimum number of columns per file kind
DEG_COLUMNS = 3
PATHWAY_COLUMNS = 2
PATHWAY_GENE_COLUMNS = 4


def _guess_separator(filepath: Path) -> str:
    if filepath.suffix.lower() in ['.tsv', '.txt', '.tab']:
        return '\t'
    return ','


def _read_table(
    filepath: Union[str, Path],
    kind: str,
    min_columns: int,
    sep: Optional[str] = None
) -> pd.DataFrame:
    """
    Read a delimited file as trimmed strings and check its column count.

    Parameters:
    -----------
    filepath : str or Path
        File to read
    kind : str
        File kind used in error messages ('DEG', 'Pathway', 'PathwayGene')
    min_columns : int
        Minimum number of columns every row must have
    sep : str, optional
        Field separator. Guessed from the file suffix when None.

    Returns:
    --------
    pd.DataFrame
        The first `min_columns` columns, whitespace-trimmed
    """

    filepath = Path(filepath)
    sep = sep or _guess_separator(filepath)

    try:
        df = pd.read_csv(
            filepath,
            sep=sep,
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True
        )
    except pd.errors.EmptyDataError:
        logger.warning(f"{kind} file is empty: {filepath}")
        return pd.DataFrame(columns=range(min_columns))
    except (OSError, pd.errors.ParserError, UnicodeDecodeError) as e:
        raise ParseError(f"Error reading {kind} file: {e}") from e

    if df.shape[1] < min_columns or df.iloc[:, :min_columns].isna().any().any():
        raise ParseError(
            f"Invalid {kind} file format. Expected at least {min_columns} columns."
        )

    df = df.iloc[:, :min_columns]
    df = df.apply(lambda column: column.str.strip())

    logger.info(f"Loaded {len(df)} {kind} rows from {filepath}")
    return df


def _convert(kind: str, converter: Callable, values: pd.Series) -> list:
    try:
        return [converter(value) for value in values]
    except ValueError as e:
        raise ParseError(f"Error parsing numeric values in {kind} file: {e}") from e


def load_degs(filepath: Union[str, Path], sep: Optional[str] = None) -> List[Deg]:
    """
    Load differentially expressed genes.

    Columns: gene symbol, log fold change, adjusted p-value.

    Parameters:
    -----------
    filepath : str or Path
        Path to the DEG file
    sep : str, optional
        Field separator

    Returns:
    --------
    List[Deg]
        One record per row, in file order
    """

    df = _read_table(filepath, 'DEG', DEG_COLUMNS, sep)
    log_fold_changes = _convert('DEG', float, df[1])
    adjusted_p_values = _convert('DEG', float, df[2])

    return [
        Deg(symbol, lfc, padj)
        for symbol, lfc, padj in zip(df[0], log_fold_changes, adjusted_p_values)
    ]


def load_pathways(filepath: Union[str, Path], sep: Optional[str] = None) -> List[Pathway]:
    """
    Load pathway descriptions.

    Columns: pathway id, description.

    Parameters:
    -----------
    filepath : str or Path
        Path to the pathway description file
    sep : str, optional
        Field separator

    Returns:
    --------
    List[Pathway]
        One record per row, in file order
    """

    df = _read_table(filepath, 'Pathway', PATHWAY_COLUMNS, sep)
    return [Pathway(pathway_id, description) for pathway_id, description in zip(df[0], df[1])]


def load_pathway_genes(
    filepath: Union[str, Path],
    sep: Optional[str] = None
) -> List[PathwayGene]:
    """
    Load pathway-gene associations.

    Columns: pathway id, Entrez gene id, gene symbol, Ensembl gene id.

    Parameters:
    -----------
    filepath : str or Path
        Path to the pathway-gene file
    sep : str, optional
        Field separator

    Returns:
    --------
    List[PathwayGene]
        One record per row, in file order
    """

    df = _read_table(filepath, 'PathwayGene', PATHWAY_GENE_COLUMNS, sep)
    entrez_ids = _convert('PathwayGene', int, df[1])

    return [
        PathwayGene(pathway_id, entrez_id, symbol, ensembl_id)
        for pathway_id, entrez_id, symbol, ensembl_id
        in zip(df[0], entrez_ids, df[2], df[3])
    ]


def load_dataset(
    degs_path: Union[str, Path],
    pathways_path: Union[str, Path],
    pathway_genes_path: Union[str, Path],
    sep: Optional[str] = None
) -> Tuple[List[Deg], List[Pathway], List[PathwayGene]]:
    """Load the three input files of one analysis."""
    return (
        load_degs(degs_path, sep),
        load_pathways(pathways_path, sep),
        load_pathway_genes(pathway_genes_path, sep)
    )


def create_sample_data(
    n_degs: int = 50,
    n_pathways: int = 20,
    genes_per_pathway: int = 30,
    n_background_genes: int = 1000,
    enriched_pathways: int = 2,
    random_state: Optional[int] = 42
) -> Tuple[List[Deg], List[Pathway], List[PathwayGene]]:
    """
    Create a synthetic enrichment dataset for testing and demonstration.

    The first `enriched_pathways` pathways draw most of their genes from
    the DEG list, the rest draw uniformly from the background.

    Parameters:
    -----------
    n_degs : int
        Number of DEGs to generate
    n_pathways : int
        Number of pathways
    genes_per_pathway : int
        Number of gene associations per pathway
    n_background_genes : int
        Size of the gene universe the DEGs are drawn from
    enriched_pathways : int
        Number of pathways over-represented in the DEGs
    random_state : int, optional
        Random seed for reproducibility

    Returns:
    --------
    Tuple[List[Deg], List[Pathway], List[PathwayGene]]
        DEGs, pathways and pathway-gene associations
    """

    rng = np.random.RandomState(random_state)

    gene_symbols = [f"GENE{i:05d}" for i in range(n_background_genes)]
    deg_symbols = [str(s) for s in rng.choice(gene_symbols, size=n_degs, replace=False)]
    other_symbols = sorted(set(gene_symbols) - set(deg_symbols))

    degs = [
        Deg(symbol, float(rng.normal(0, 2)), float(rng.uniform(0, 0.05)))
        for symbol in deg_symbols
    ]

    pathways = []
    pathway_genes = []
    for p in range(n_pathways):
        pathway_id = f"hsa{p:05d}"
        pathways.append(Pathway(pathway_id, f"Synthetic pathway {p}"))

        if p < enriched_pathways:
            n_from_degs = min(int(genes_per_pathway * 0.8), len(deg_symbols))
            members = [str(s) for s in rng.choice(deg_symbols, size=n_from_degs, replace=False)]
            members += [str(s) for s in rng.choice(other_symbols, size=genes_per_pathway - n_from_degs,
                                                   replace=False)]
        else:
            members = [str(s) for s in rng.choice(gene_symbols, size=genes_per_pathway, replace=False)]

        for symbol in members:
            entrez_id = int(symbol[4:]) + 1
            pathway_genes.append(
                PathwayGene(pathway_id, entrez_id, symbol, f"ENSG{entrez_id:011d}")
            )

    logger.info(f"Generated synthetic data: {len(degs)} DEGs, {len(pathways)} pathways, "
                f"{len(pathway_genes)} pathway-gene rows")

    return degs, pathways, pathway_genes

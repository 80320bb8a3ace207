"""
DGSEA command-line interface.

Sub-commands:
    enrich_bar_chart            Bar chart of the top enriched pathways
    enrich_dot_chart            Dot plot of the top enriched pathways
    perc_lfc_per_pathway_chart  Bar chart of fold-change share per pathway
    con_table                   2x2 contingency table per pathway
    enrichment_table            Delimited enrichment summary of all pathways

Every sub-command takes the DEG, pathway description and pathway-gene
files as its first three positional arguments.
"""

import argparse
import logging
import sys
from typing import List, Optional

import matplotlib.pyplot as plt

from . import __version__
from .data.exporters import format_contingency_table, write_contingency_table, write_enrichment_summary
from .data.loaders import load_dataset
from .enrichment.analysis import EnrichmentConfig, compute_enrichment, select_top_enriched
from .enrichment.contingency import DEFAULT_SIGNIFICANCE_THRESHOLD, build_table
from .enrichment.fold_change import FoldChangeShareDistributor
from .utils.errors import InvalidArgumentError, Outcome
from .utils.helpers import validate_max_count, validate_threshold
from .visualization.plots import (
    IMAGE_FORMATS,
    ChartConfig,
    plot_enrichment_bar_chart,
    plot_enrichment_dot_plot,
    plot_fold_change_share
)

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(levelname)s:%(name)s:%(message)s'


def configure_logging(verbosity: int) -> None:
    """Set the root log level from the number of -v flags."""
    if verbosity <= 1:
        level = logging.ERROR
    elif verbosity == 2:
        level = logging.WARNING
    elif verbosity == 3:
        level = logging.INFO
    else:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)


def _split(value: str, sep: str) -> List[str]:
    return [item.strip() for item in value.split(sep) if item.strip()]


def _load(args: argparse.Namespace):
    validate_threshold(args.pval, '--pval')
    return load_dataset(args.degs, args.pathways, args.pathway_genes, sep=args.sep)


def _chart_config(args: argparse.Namespace, **kwargs) -> ChartConfig:
    return ChartConfig(
        title=args.title,
        x_label=args.x_axis_label,
        y_label=args.y_axis_label,
        colors=tuple(_split(args.color_manual, ';')) if args.color_manual else (),
        image_format=args.image_format,
        **kwargs
    )


def _top_enriched(args: argparse.Namespace):
    validate_max_count(args.max_n_pathways, '--max-n-pathways')
    degs, pathways, pathway_genes = _load(args)
    config = EnrichmentConfig(max_pathways=args.max_n_pathways)
    results = compute_enrichment(pathways, degs, pathway_genes, config=config)
    top = select_top_enriched(results, config.max_pathways, config.significance_cutoff)
    return top, pathways


def run_enrich_bar_chart(args: argparse.Namespace) -> None:
    config = _chart_config(args)
    top, pathways = _top_enriched(args)
    output_file = args.output_file or f"pathway_enrichment_bar_chart.{config.image_format}"

    fig, _ = plot_enrichment_bar_chart(top, pathways, config=config, save_path=output_file)
    plt.close(fig)
    print(f"Bar chart saved at: {output_file}")


def run_enrich_dot_chart(args: argparse.Namespace) -> None:
    config = _chart_config(args, dot_size=args.dot_size, dot_transparency=args.dot_transparency)
    top, pathways = _top_enriched(args)
    output_file = args.output_file or f"pathway_enrichment_dot_plot.{config.image_format}"

    fig, _ = plot_enrichment_dot_plot(top, pathways, config=config, save_path=output_file)
    plt.close(fig)
    print(f"Dot plot saved at: {output_file}")


def run_perc_lfc_chart(args: argparse.Namespace) -> None:
    validate_max_count(args.max_n_pathways, '--max-n-pathways')
    config = _chart_config(args)
    degs, pathways, pathway_genes = _load(args)

    if args.pathway_ids:
        pathway_ids = _split(args.pathway_ids, ',')
    else:
        pathway_ids = list(dict.fromkeys(p.pathway_id for p in pathways))

    distributor = FoldChangeShareDistributor(degs, pathway_genes)
    percentages = distributor.percentages_for_pathways(pathway_ids)
    shares = distributor.top_influential(args.max_n_pathways, percentages, pathway_ids)

    fig, _ = plot_fold_change_share(shares, pathways, config=config, save_path=args.output)
    plt.close(fig)


def run_con_table(args: argparse.Namespace) -> None:
    degs, pathways, pathway_genes = _load(args)
    rows = build_table(degs, pathways, pathway_genes, args.pval)

    if args.output == 'print':
        print(format_contingency_table(rows))
    elif args.output_file:
        write_contingency_table(rows, args.output_file)
    else:
        raise InvalidArgumentError(
            "No output file path provided. Use '--output-file' to specify the file."
        )


def run_enrichment_table(args: argparse.Namespace) -> None:
    degs, pathways, pathway_genes = _load(args)
    results = compute_enrichment(pathways, degs, pathway_genes)
    write_enrichment_summary(results, args.output_file)


def _common_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument('degs', metavar='DEGS',
                        help='DEG file, columns: gene symbol, log-fold change, adjusted p-value')
    parser.add_argument('pathways', metavar='PATHWAYS',
                        help='Pathway description file, columns: pathway id, description')
    parser.add_argument('pathway_genes', metavar='PATHWAY_GENES',
                        help='Pathway-gene file, columns: pathway id, Entrez gene id, '
                             'gene symbol, Ensembl gene id')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Increase logging verbosity (repeat up to 4 times)')
    parser.add_argument('--pval', type=float, default=DEFAULT_SIGNIFICANCE_THRESHOLD,
                        help='Adjusted p-value threshold for significant DEGs '
                             '(default: %(default)s)')
    parser.add_argument('--sep', default=None,
                        help='Field separator of the input files '
                             '(default: comma for .csv, tab for .tsv/.txt)')
    return parser


def _chart_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument('--title', '-t', default=None, help='Title of the chart')
    parser.add_argument('--x-axis-label', default=None, help='X-axis label of the chart')
    parser.add_argument('--y-axis-label', default=None, help='Y-axis label of the chart')
    parser.add_argument('--image-format', choices=IMAGE_FORMATS, default='png',
                        help='Image format of the output image (default: %(default)s)')
    parser.add_argument('--color-manual', default=None,
                        help="Colors separated by ';', e.g. 'red;#00FF00;0x0000FF'. "
                             "Cycled if too few; invalid colors are ignored")
    parser.add_argument('--max-n-pathways', type=int, default=20,
                        help='Max number of pathways in the chart (default: %(default)s)')
    return parser


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='dgsea',
        description='Differential gene set enrichment analysis of DEGs over pathways.'
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')
    subparsers.required = True

    common = _common_parser()
    chart = _chart_parser()

    bar = subparsers.add_parser(
        'enrich_bar_chart', parents=[common, chart],
        help='Save a bar chart of the top enriched pathways')
    bar.add_argument('--output-file', default=None,
                     help='Output image path (default: pathway_enrichment_bar_chart.<format>)')
    bar.set_defaults(func=run_enrich_bar_chart)

    dot = subparsers.add_parser(
        'enrich_dot_chart', parents=[common, chart],
        help='Save a dot plot of the top enriched pathways')
    dot.add_argument('--output-file', default=None,
                     help='Output image path (default: pathway_enrichment_dot_plot.<format>)')
    dot.add_argument('--dot-size', type=float, default=30.0,
                     help='Dot size (default: %(default)s)')
    dot.add_argument('--dot-transparency', type=float, default=1.0,
                     help='Dot opacity between 0.0 and 1.0 (default: %(default)s)')
    dot.set_defaults(func=run_enrich_dot_chart)

    perc = subparsers.add_parser(
        'perc_lfc_per_pathway_chart', parents=[common, chart],
        help='Save a bar chart of each pathway\'s share of average |log fold change|')
    perc.add_argument('output', metavar='OUTPUT', help='Output image path')
    perc.add_argument('--pathway-ids', default=None,
                      help='Comma-separated pathway ids of interest (default: all pathways)')
    perc.set_defaults(func=run_perc_lfc_chart)

    con = subparsers.add_parser(
        'con_table', parents=[common],
        help='Print or store a 2x2 contingency table per pathway')
    con.add_argument('--output', choices=['file', 'print'], default='file',
                     help='Write the table to a file or print it (default: %(default)s)')
    con.add_argument('--output-file', default=None, help='File to write the table to')
    con.set_defaults(func=run_con_table)

    table = subparsers.add_parser(
        'enrichment_table', parents=[common],
        help='Write the enrichment summary of all pathways')
    table.add_argument('--output-file', default='pathway_enrichment_summary.tsv',
                       help='Output path (default: %(default)s)')
    table.set_defaults(func=run_enrichment_table)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI and return the exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        outcome = Outcome.capture(args.func, args)
    except OSError as e:
        logger.error(f"Failed to write output: {e}")
        return 1

    if not outcome.ok:
        logger.error(outcome.message)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())

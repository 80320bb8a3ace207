"""
Chart functions for DGSEA results.

This module draws enrichment bar charts, enrichment dot plots and the
fold-change share bar chart. Chart styling is passed as an immutable
ChartConfig; every function returns the figure and axes and optionally
saves the figure.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

import matplotlib.colors as mcolors
import matplotlib.pyplot as plt
import seaborn as sns

from ..data.records import Pathway
from ..utils.errors import DegenerateDataError, InvalidArgumentError

logger = logging.getLogger(__name__)

# Cycled when no (valid) colors are given
DEFAULT_COLORS = ('red', 'blue', 'green', 'orange', 'black')

IMAGE_FORMATS = ('png', 'jpg')

DEFAULT_DPI = 100
DEFAULT_FONTSIZE = {
    'title': 12,
    'label': 10,
    'tick': 9,
    'legend': 8,
}

_HEX_DIGITS = re.compile(r'^[0-9a-fA-F]{6}$')


@dataclass(frozen=True)
class ChartConfig:
    """
    Styling options shared by all charts.

    Attributes:
        title: Chart title; a chart-specific default is used when None
        x_label: X-axis label; a chart-specific default is used when None
        y_label: Y-axis label; a chart-specific default is used when None
        colors: Color strings cycled over the plotted items
        image_format: 'png' or 'jpg'
        figsize: Figure size in inches
        dpi: Resolution of saved images
        dot_size: Marker area of dot plots, must be positive
        dot_transparency: Marker opacity of dot plots, between 0 and 1

    Example:
        >>> config = ChartConfig(title='Top pathways', colors=('red', '#00FF00'))
        >>> fig, ax = plot_enrichment_bar_chart(results, config=config)
    """
    title: Optional[str] = None
    x_label: Optional[str] = None
    y_label: Optional[str] = None
    colors: Tuple[str, ...] = ()
    image_format: str = 'png'
    figsize: Tuple[float, float] = (10, 10)
    dpi: int = DEFAULT_DPI
    dot_size: float = 30.0
    dot_transparency: float = 1.0

    def __post_init__(self):
        if self.image_format not in IMAGE_FORMATS:
            raise InvalidArgumentError(
                f"Invalid image format '{self.image_format}'. Use 'png' or 'jpg'."
            )
        if self.dot_size <= 0:
            raise InvalidArgumentError("Dot size must be positive.")
        if not 0 <= self.dot_transparency <= 1:
            raise InvalidArgumentError("Transparency must be between 0 and 1.")
        if self.dpi <= 0:
            raise InvalidArgumentError("dpi must be positive.")


def _to_matplotlib_color(color: str) -> Optional[str]:
    """Translate a user color to a hex string, None if it is not a color."""
    value = color.strip()
    if value.lower().startswith('0x'):
        value = '#' + value[2:]
    elif _HEX_DIGITS.match(value):
        value = '#' + value

    if not mcolors.is_color_like(value):
        return None
    return mcolors.to_hex(value)


def resolve_colors(colors: Optional[Sequence[str]], n: int) -> List[str]:
    """
    Resolve user colors into `n` matplotlib colors.

    Parameters
    ----------
    colors : sequence of str, optional
        Color names ('red'), '#RRGGBB', 'RRGGBB' or '0xRRGGBB'. Invalid
        entries are logged and ignored.
    n : int
        Number of colors needed. Valid colors are cycled if too few.

    Returns
    -------
    list of str
        Hex colors; the default palette if no valid color was given.
    """
    valid = []
    for color in colors or ():
        resolved = _to_matplotlib_color(color)
        if resolved is None:
            logger.warning(f"Given color is neither hexadecimal nor a known color name: {color}")
        else:
            valid.append(resolved)

    palette = valid or [mcolors.to_hex(c) for c in DEFAULT_COLORS]
    return [palette[i % len(palette)] for i in range(n)]


def _apply_base_style(ax: plt.Axes, grid: bool = True) -> None:
    sns.despine(ax=ax)
    if grid:
        ax.grid(True, alpha=0.3, linestyle='--', linewidth=0.5)


def _new_axes(config: ChartConfig, ax: Optional[plt.Axes]) -> Tuple[plt.Figure, plt.Axes]:
    if ax is not None:
        return ax.get_figure(), ax
    with sns.axes_style('whitegrid'):
        fig, ax = plt.subplots(figsize=config.figsize)
    return fig, ax


def _save_figure(fig: plt.Figure,
                 save_path: Optional[Union[str, Path]],
                 config: ChartConfig) -> None:
    if not save_path:
        return
    fig.savefig(save_path, format=config.image_format, dpi=config.dpi, bbox_inches='tight')
    logger.info(f"Chart was saved to file: {save_path}")


def _descriptions(pathways: Optional[Sequence[Pathway]]) -> Dict[str, str]:
    return {p.pathway_id: p.description for p in pathways or ()}


def _label(pathway_id: str, description: str, descriptions: Mapping[str, str]) -> str:
    return descriptions.get(pathway_id) or description or pathway_id


def plot_enrichment_bar_chart(
    results: Sequence,
    pathways: Optional[Sequence[Pathway]] = None,
    config: Optional[ChartConfig] = None,
    save_path: Optional[Union[str, Path]] = None,
    ax: Optional[plt.Axes] = None
) -> Tuple[plt.Figure, plt.Axes]:
    """
    Horizontal bar chart of enrichment scores.

    Parameters
    ----------
    results : sequence of EnrichmentResult
        Results to plot, typically from select_top_enriched. The first
        result is drawn at the top.
    pathways : sequence of Pathway, optional
        Used to label bars with pathway descriptions.
    config : ChartConfig, optional
        Chart styling.
    save_path : str or Path, optional
        Path to save the figure.
    ax : plt.Axes, optional
        Existing axes to plot on.

    Returns
    -------
    fig : plt.Figure
    ax : plt.Axes

    Raises
    ------
    DegenerateDataError
        If there are no results to plot.
    """
    config = config or ChartConfig()
    if not results:
        raise DegenerateDataError("No enrichment results to plot in bar chart")

    descriptions = _descriptions(pathways)
    labels = [_label(r.pathway_id, r.description, descriptions) for r in results]
    scores = [r.enrichment_score for r in results]
    colors = resolve_colors(config.colors, len(results))

    fig, ax = _new_axes(config, ax)

    positions = range(len(results) - 1, -1, -1)
    ax.barh(list(positions), scores, color=colors, edgecolor='white', linewidth=0.5)
    ax.set_yticks(list(positions))
    ax.set_yticklabels(labels, fontsize=DEFAULT_FONTSIZE['tick'])
    ax.axvline(0, color='grey', linewidth=0.8)

    ax.set_xlabel(config.x_label or 'Enrichment Score', fontsize=DEFAULT_FONTSIZE['label'])
    ax.set_ylabel(config.y_label or 'Pathway', fontsize=DEFAULT_FONTSIZE['label'])
    ax.set_title(config.title or f'Top {len(results)} Pathway Enrichment',
                 fontsize=DEFAULT_FONTSIZE['title'], fontweight='bold')

    _apply_base_style(ax)
    _save_figure(fig, save_path, config)

    return fig, ax


def plot_enrichment_dot_plot(
    results: Sequence,
    pathways: Optional[Sequence[Pathway]] = None,
    config: Optional[ChartConfig] = None,
    save_path: Optional[Union[str, Path]] = None,
    ax: Optional[plt.Axes] = None
) -> Tuple[plt.Figure, plt.Axes]:
    """
    Dot plot of adjusted p-value against enrichment score.

    Each pathway is a separate labelled series; a pathway description that
    was already plotted is skipped.

    Parameters
    ----------
    results : sequence of EnrichmentResult
        Results to plot.
    pathways : sequence of Pathway, optional
        Used to label series with pathway descriptions.
    config : ChartConfig, optional
        Chart styling, including dot size and transparency.
    save_path : str or Path, optional
        Path to save the figure.
    ax : plt.Axes, optional
        Existing axes to plot on.

    Returns
    -------
    fig : plt.Figure
    ax : plt.Axes

    Raises
    ------
    DegenerateDataError
        If there are no results to plot.
    """
    config = config or ChartConfig()
    if not results:
        raise DegenerateDataError("No enrichment results to plot in dot plot")

    descriptions = _descriptions(pathways)
    colors = resolve_colors(config.colors, len(results))

    fig, ax = _new_axes(config, ax)

    plotted = set()
    for result, color in zip(results, colors):
        name = _label(result.pathway_id, result.description, descriptions)
        if name in plotted:
            logger.error(f"Series with the name '{name}' already exists. Skipping.")
            continue
        plotted.add(name)
        ax.scatter(result.adjusted_p_value, result.enrichment_score,
                   s=config.dot_size, alpha=config.dot_transparency,
                   color=color, edgecolors='black', linewidths=0.5, label=name)

    ax.set_xlabel(config.x_label or 'Adjusted P-Value', fontsize=DEFAULT_FONTSIZE['label'])
    ax.set_ylabel(config.y_label or 'Enrichment Score', fontsize=DEFAULT_FONTSIZE['label'])
    ax.set_title(config.title or f'Pathway Enrichment Dot Plot (Top {len(results)})',
                 fontsize=DEFAULT_FONTSIZE['title'], fontweight='bold')
    ax.legend(loc='center left', bbox_to_anchor=(1.02, 0.5),
              fontsize=DEFAULT_FONTSIZE['legend'], frameon=False)

    _apply_base_style(ax)
    _save_figure(fig, save_path, config)

    return fig, ax


def plot_fold_change_share(
    shares: Mapping[str, float],
    pathways: Optional[Sequence[Pathway]] = None,
    config: Optional[ChartConfig] = None,
    save_path: Optional[Union[str, Path]] = None,
    ax: Optional[plt.Axes] = None
) -> Tuple[plt.Figure, plt.Axes]:
    """
    Bar chart of each pathway's share of average absolute log-fold-change.

    Parameters
    ----------
    shares : mapping of str to float
        Pathway id -> percentage, e.g. from
        FoldChangeShareDistributor.top_influential. Bars keep this order.
    pathways : sequence of Pathway, optional
        Used to label bars with pathway descriptions.
    config : ChartConfig, optional
        Chart styling.
    save_path : str or Path, optional
        Path to save the figure.
    ax : plt.Axes, optional
        Existing axes to plot on.

    Returns
    -------
    fig : plt.Figure
    ax : plt.Axes

    Raises
    ------
    DegenerateDataError
        If there are no pathways to plot.
    """
    config = config or ChartConfig()
    if not shares:
        raise DegenerateDataError("No pathway shares to plot")

    descriptions = _descriptions(pathways)
    labels = [_label(pathway_id, '', descriptions) for pathway_id in shares]
    colors = resolve_colors(config.colors, len(shares))

    fig, ax = _new_axes(config, ax)

    ax.bar(range(len(shares)), list(shares.values()), color=colors,
           edgecolor='white', linewidth=0.5)
    ax.set_xticks(range(len(shares)))
    ax.set_xticklabels(labels, rotation=45, ha='right', fontsize=DEFAULT_FONTSIZE['tick'])

    ax.set_xlabel(config.x_label or 'Pathway', fontsize=DEFAULT_FONTSIZE['label'])
    ax.set_ylabel(config.y_label or 'Share of average |log fold change| (%)',
                  fontsize=DEFAULT_FONTSIZE['label'])
    ax.set_title(config.title or 'Average log-fold-change share per pathway',
                 fontsize=DEFAULT_FONTSIZE['title'], fontweight='bold')

    _apply_base_style(ax)
    _save_figure(fig, save_path, config)

    return fig, ax

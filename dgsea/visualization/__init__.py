"""
Visualization functions for DGSEA results.
"""

from .plots import (
    ChartConfig,
    resolve_colors,
    plot_enrichment_bar_chart,
    plot_enrichment_dot_plot,
    plot_fold_change_share
)

__all__ = [
    'ChartConfig',
    'resolve_colors',
    'plot_enrichment_bar_chart',
    'plot_enrichment_dot_plot',
    'plot_fold_change_share'
]

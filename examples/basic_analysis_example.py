#!/usr/bin/env python3
"""
Basic Analysis Example for DGSEA

This example demonstrates how to use the dgsea package to:
1. Generate a synthetic DEG and pathway dataset
2. Run pathway enrichment analysis
3. Build contingency tables
4. Distribute the average log-fold-change over pathways
5. Visualize results
"""

import matplotlib.pyplot as plt
import sys
import os

# Add the package to Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from dgsea.data import create_sample_data, format_contingency_table
from dgsea.enrichment import (
    ContingencyTableBuilder,
    FoldChangeShareDistributor,
    run_enrichment_analysis,
    compute_enrichment,
    select_top_enriched
)
from dgsea.visualization import (
    ChartConfig,
    plot_enrichment_bar_chart,
    plot_enrichment_dot_plot,
    plot_fold_change_share
)


def main():
    """Run basic analysis example."""

    print("=== DGSEA Analysis Example ===")
    print()

    # Step 1: Generate synthetic data
    print("1. Generating synthetic enrichment data...")
    degs, pathways, pathway_genes = create_sample_data(
        n_degs=50,
        n_pathways=20,
        genes_per_pathway=30,
        enriched_pathways=2,
        random_state=42
    )

    print(f"   DEGs: {len(degs)}")
    print(f"   Pathways: {len(pathways)}")
    print(f"   Pathway-gene rows: {len(pathway_genes)}")
    print()

    # Step 2: Enrichment analysis
    print("2. Running enrichment analysis...")
    summary = run_enrichment_analysis(pathways, degs, pathway_genes)
    print(summary[['pathway_id', 'observed', 'expected', 'enrichment_score',
                   'adjusted_p_value']].to_string(index=False))

    results = compute_enrichment(pathways, degs, pathway_genes)
    top = select_top_enriched(results, max_pathways=5)
    print(f"\n   Significant pathways: {len(top)}")
    for result in top:
        print(f"     {result.pathway_id}: score={result.enrichment_score:.2f}, "
              f"adj. p={result.adjusted_p_value:.2e}")
    print()

    # Step 3: Contingency tables
    print("3. Building contingency tables (threshold 0.01)...")
    builder = ContingencyTableBuilder(degs, pathways[:2], pathway_genes, significance_threshold=0.01)
    print(format_contingency_table(builder.build_table()))
    print()

    # Step 4: Fold-change share
    print("4. Distributing average |log fold change| over pathways...")
    pathway_ids = [p.pathway_id for p in pathways]
    distributor = FoldChangeShareDistributor(degs, pathway_genes)
    percentages = distributor.percentages_for_pathways(pathway_ids)
    shares = distributor.top_influential(5, percentages, pathway_ids)
    for pathway_id, share in shares.items():
        print(f"     {pathway_id}: {share:.1f}%")
    print()

    # Step 5: Visualization
    print("5. Creating visualizations...")

    if top:
        fig1, _ = plot_enrichment_bar_chart(top, pathways, config=ChartConfig(figsize=(8, 6)))
        fig1.savefig('pathway_enrichment_bar_chart.png', dpi=150, bbox_inches='tight')
        print("   Saved: pathway_enrichment_bar_chart.png")

        fig2, _ = plot_enrichment_dot_plot(
            top, pathways, config=ChartConfig(figsize=(8, 6), dot_size=60, dot_transparency=0.8)
        )
        fig2.savefig('pathway_enrichment_dot_plot.png', dpi=150, bbox_inches='tight')
        print("   Saved: pathway_enrichment_dot_plot.png")
    else:
        print("   No significant pathways to chart")

    fig3, _ = plot_fold_change_share(shares, pathways, config=ChartConfig(figsize=(8, 6)))
    fig3.savefig('fold_change_share.png', dpi=150, bbox_inches='tight')
    print("   Saved: fold_change_share.png")

    plt.close('all')  # Close figures to free memory

    print("\nExample completed successfully!")
    print("\nNext steps:")
    print("- Replace synthetic data with real DEG and KEGG pathway files")
    print("- Run the same analysis from the command line with `dgsea`")


if __name__ == "__main__":
    main()

"""
Visualization module for the email network analysis.
Handles creation of plots and charts.
"""

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns

from email_network.config import RESULTS_DIR


def plot_degree_histogram(degree, output_dir):
    """Histogram of node degrees (log-scaled counts)"""
    fig, ax = plt.subplots(figsize=(8, 6))
    sns.histplot(list(degree.values()), bins=50, color='steelblue', ax=ax)
    ax.set_yscale('log')
    ax.set_xlabel('Degree')
    ax.set_ylabel('Count')
    ax.set_title('Degree Centrality Distribution')
    ax.grid(True, alpha=0.3)

    plot_file = Path(output_dir) / "degree_histogram.png"
    fig.tight_layout()
    fig.savefig(plot_file, dpi=150)
    plt.close(fig)
    return plot_file


def plot_betweenness_histogram(betweenness, output_dir):
    """Histogram of normalized betweenness scores"""
    fig, ax = plt.subplots(figsize=(8, 6))
    sns.histplot(list(betweenness.values()), bins=50, color='firebrick', ax=ax)
    ax.set_xlabel('Betweenness (normalized)')
    ax.set_ylabel('Count')
    ax.set_title('Betweenness Centrality Distribution')
    ax.grid(True, alpha=0.3)

    plot_file = Path(output_dir) / "betweenness_histogram.png"
    fig.tight_layout()
    fig.savefig(plot_file, dpi=150)
    plt.close(fig)
    return plot_file


def plot_closeness_vs_degree(degree, closeness, output_dir):
    """Scatter of closeness against degree for the nodes that have a closeness score"""
    nodes = [n for n in closeness if n in degree]
    x = np.array([degree[n] for n in nodes], dtype=float)
    y = np.array([closeness[n] for n in nodes], dtype=float)

    fig, ax = plt.subplots(figsize=(8, 6))
    ax.scatter(x, y, s=10, alpha=0.6, color='seagreen')
    ax.set_xlabel('Degree')
    ax.set_ylabel('Closeness Centrality')
    ax.set_title('Closeness vs Degree')
    ax.grid(True, alpha=0.3)

    plot_file = Path(output_dir) / "closeness_vs_degree.png"
    fig.tight_layout()
    fig.savefig(plot_file, dpi=150)
    plt.close(fig)
    return plot_file


def plot_clusters(features, assignment, output_dir):
    """Normalized degree vs closeness, coloured by k-means cluster"""
    nodes = [n for n in features if n in assignment]
    x = [features[n][0] for n in nodes]
    y = [features[n][1] for n in nodes]
    hue = [f"Cluster {assignment[n]}" for n in nodes]

    fig, ax = plt.subplots(figsize=(8, 6))
    sns.scatterplot(x=x, y=y, hue=hue, s=20, palette='tab10', ax=ax)
    ax.set_xlabel('Degree (normalized)')
    ax.set_ylabel('Closeness (normalized)')
    ax.set_title('K-Means Clusters: Closeness vs Degree')
    ax.grid(True, alpha=0.3)

    plot_file = Path(output_dir) / "clusters.png"
    fig.tight_layout()
    fig.savefig(plot_file, dpi=150)
    plt.close(fig)
    return plot_file


def create_visualizations(results, output_dir=RESULTS_DIR):
    """
    Create all plots for one analysis run.

    Args:
        results: Output of analysis.run_analysis
        output_dir: Directory for the PNG files

    Returns:
        list: Paths of the plots that were written
    """
    print("\n" + "=" * 80)
    print("CREATING VISUALIZATIONS")
    print("=" * 80)

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    sns.set_style("whitegrid")

    written = []
    try:
        written.append(plot_degree_histogram(results['degree'], output_dir))
        written.append(plot_closeness_vs_degree(results['degree'], results['closeness'], output_dir))
        written.append(plot_betweenness_histogram(results['betweenness'], output_dir))
        written.append(plot_clusters(results['features'], results['assignment'], output_dir))
    except Exception as e:
        print(f"\n⚠ Could not create visualizations: {e}")

    for plot_file in written:
        print(f"   ✓ Saved visualization to {plot_file}")
    return written

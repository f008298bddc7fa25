"""
Results handling module for the email network analysis.
Handles result tables, console summaries and file saving.
"""

from datetime import datetime
from pathlib import Path

import numpy as np
import pandas as pd

from email_network.config import RESULTS_DIR, RESULTS_FILE_NAME, SUMMARY_FILE_NAME

METRIC_TITLES = {
    'degree': 'Degree Centrality',
    'closeness': 'Closeness Centrality',
    'betweenness': 'Betweenness Centrality',
}


def log_message(message, file=None):
    """Print and optionally write message to file"""
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    formatted_msg = f"[{timestamp}] {message}"
    print(formatted_msg)
    if file:
        file.write(formatted_msg + "\n")


def format_label(node, mapping=None):
    """'Node 12 (a@enron.com) [folder]', or 'Node 12' without an identity."""
    if mapping and node in mapping:
        email, folder = mapping[node]
        return f"Node {node} ({email}) [{folder}]"
    return f"Node {node}"


def create_results_dataframe(degree, closeness, betweenness, assignment, mapping=None):
    """
    Create the per-node results dataframe.

    Closeness, betweenness and cluster are only known for the analysed
    subset and are left empty (NaN / <NA>) elsewhere.
    """
    results_df = pd.DataFrame({'node': list(degree)})
    results_df['degree'] = results_df['node'].map(degree).astype(int)
    results_df['closeness'] = results_df['node'].map(closeness).astype(float)
    results_df['betweenness'] = results_df['node'].map(betweenness).astype(float)
    results_df['cluster'] = results_df['node'].map(assignment).astype('Int64')

    if mapping:
        results_df['email'] = results_df['node'].map(lambda n: mapping[n][0] if n in mapping else '')
        results_df['folder'] = results_df['node'].map(lambda n: mapping[n][1] if n in mapping else '')

    results_df = results_df.sort_values(['degree', 'node'], ascending=[False, True]).reset_index(drop=True)
    results_df.insert(0, 'rank', range(1, len(results_df) + 1))
    return results_df


def top_nodes(results_df, metric, top_k):
    """Rows with the top_k highest values of metric (nodes without a score are ignored)."""
    ranked = results_df.dropna(subset=[metric])
    return ranked.sort_values([metric, 'node'], ascending=[False, True]).head(top_k)


def _format_score(metric, value):
    if metric == 'degree':
        return f"{int(value)} connections"
    return f"{value:.5f}"


def print_top_nodes(results_df, metric, top_k, mapping=None):
    """Print a ranked table for one centrality metric"""
    title = METRIC_TITLES.get(metric, metric)
    print(f"\nTop {top_k} by {title}:")
    print("   " + "-" * 76)
    for i, row in enumerate(top_nodes(results_df, metric, top_k).itertuples(index=False), 1):
        score = getattr(row, metric)
        print(f"   {i:>2}. {format_label(row.node, mapping)}: {_format_score(metric, score)}")


def print_component_leaders(leaders, top_k, mapping=None):
    """Print the highest-degree node of the first top_k components"""
    print(f"\nComponent Leaders by Degree ({len(leaders):,} components):")
    print("   " + "-" * 76)
    for i, (component, leader, leader_degree) in enumerate(leaders[:top_k], 1):
        print(f"   Component {i} ({len(component):,} nodes) -> {format_label(leader, mapping)}, Degree: {leader_degree}")


def print_cluster_summary(assignment, centroids, mapping=None, max_members=20):
    """Print size, centroid and members of every k-means cluster"""
    print(f"\nK-Means Clustering ({len(centroids)} clusters):")
    for cluster_id, (centroid, size) in enumerate(centroids):
        if centroid is None:
            print(f"   Cluster {cluster_id}: empty")
            continue

        centre = ", ".join(f"{value:.3f}" for value in centroid)
        print(f"   Cluster {cluster_id}: {size:,} nodes, centroid (degree, closeness, betweenness) = ({centre})")
        members = sorted(node for node, c in assignment.items() if c == cluster_id)
        for node in members[:max_members]:
            print(f"     {format_label(node, mapping)}")
        if len(members) > max_members:
            print(f"     ... and {len(members) - max_members:,} more")


def save_results(results_df, metrics, leaders, centroids, run_config, output_dir=RESULTS_DIR, mapping=None):
    """
    Save the per-node results CSV and the text summary.

    Returns:
        tuple: (results_file, summary_file) paths
    """
    print("\n" + "=" * 80)
    print("SAVING RESULTS")
    print("=" * 80)

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    results_file = output_dir / RESULTS_FILE_NAME
    summary_file = output_dir / SUMMARY_FILE_NAME

    print(f"\n1. Saving per-node results to {results_file}...")
    results_df.to_csv(results_file, index=False)
    print(f"   ✓ Saved {len(results_df):,} nodes")

    print(f"\n2. Creating summary report in {summary_file}...")
    top_k = run_config['top_k_display']
    with open(summary_file, 'w') as f:
        f.write("=" * 80 + "\n")
        f.write("EMAIL NETWORK CENTRALITY & CLUSTERING SUMMARY\n")
        f.write("=" * 80 + "\n")
        f.write(f"\nAnalysis Date: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")

        f.write("\n" + "-" * 80 + "\n")
        f.write("GRAPH PROPERTIES\n")
        f.write("-" * 80 + "\n")
        f.write(f"Nodes (with at least one edge): {metrics['nodes']:,}\n")
        f.write(f"Edge pairs (parallel edges included): {metrics['edge_pairs']:,}\n")
        f.write(f"Distinct undirected edges: {metrics['distinct_edges']:,}\n")
        f.write(f"Self-loops: {metrics['self_loops']:,}\n")
        f.write(f"Density: {metrics['density']:.6f}\n")
        f.write(f"\nConnected components: {metrics['component_count']:,}\n")
        f.write(f"  Largest component: {metrics['lcc_size']:,} nodes ({metrics['lcc_fraction']:.2%})\n")
        f.write(f"  Second largest component: {metrics['second_component_size']:,} nodes\n")
        f.write(f"\nDegree statistics:\n")
        f.write(f"  Mean: {metrics['degree_mean']:.2f}\n")
        f.write(f"  Median: {metrics['degree_median']:.2f}\n")
        f.write(f"  Max: {metrics['degree_max']}\n")

        f.write("\n" + "-" * 80 + "\n")
        f.write("PARAMETERS\n")
        f.write("-" * 80 + "\n")
        f.write(f"Closeness/betweenness sources: top {run_config['top_n']:,} nodes by degree\n")
        f.write(f"K-means: k={run_config['k_clusters']}, iterations={run_config['max_iters']}, seed={run_config['seed']}\n")

        for metric, title in METRIC_TITLES.items():
            values = results_df[metric].dropna().to_numpy(dtype=float)
            f.write("\n" + "-" * 80 + "\n")
            f.write(f"TOP {top_k} BY {title.upper()}\n")
            f.write("-" * 80 + "\n")
            if values.size:
                f.write(f"Mean: {np.mean(values):.6f}  Median: {np.median(values):.6f}  Max: {np.max(values):.6f}\n")
            for i, row in enumerate(top_nodes(results_df, metric, top_k).itertuples(index=False), 1):
                f.write(f"{i:>2}. {format_label(row.node, mapping)}: {_format_score(metric, getattr(row, metric))}\n")

        f.write("\n" + "-" * 80 + "\n")
        f.write("COMPONENT LEADERS BY DEGREE\n")
        f.write("-" * 80 + "\n")
        for i, (component, leader, leader_degree) in enumerate(leaders[:top_k], 1):
            f.write(f"Component {i} ({len(component):,} nodes): {format_label(leader, mapping)}, Degree: {leader_degree}\n")

        f.write("\n" + "-" * 80 + "\n")
        f.write("K-MEANS CLUSTERS (normalized degree, closeness, betweenness)\n")
        f.write("-" * 80 + "\n")
        for cluster_id, (centroid, size) in enumerate(centroids):
            if centroid is None:
                f.write(f"Cluster {cluster_id}: empty\n")
            else:
                centre = ", ".join(f"{value:.4f}" for value in centroid)
                f.write(f"Cluster {cluster_id}: {size:,} nodes, centroid ({centre})\n")

        f.write("\n" + "=" * 80 + "\n")
        f.write("END OF SUMMARY\n")
        f.write("=" * 80 + "\n")

    print("   ✓ Summary saved")
    return results_file, summary_file

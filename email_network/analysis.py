"""
Email Network Centrality & Role Clustering

This script loads an undirected email communication network and:
1. Computes degree centrality for every node
2. Finds connected components and their highest-degree leaders
3. Computes closeness and betweenness (Brandes) for the top-N nodes by degree
4. Normalizes (degree, closeness, betweenness) and groups nodes with k-means

Outputs:
  - node_metrics.csv: per-node scores and cluster ids
  - analysis_summary.txt: graph properties, ranked tables, clusters
  - Plots: degree/betweenness histograms, closeness vs degree, clusters
"""

import argparse
import sys
import time
from datetime import datetime
from pathlib import Path

from email_network.centrality import compute_betweenness, compute_closeness, compute_degree, select_top_nodes
from email_network.clustering import (
    build_feature_vectors,
    cluster_centroids,
    kmeans,
    normalize_features,
    validate_kmeans_params,
)
from email_network.config import CONFIG, EDGES_FILE, MAPPING_FILE, RESULTS_DIR
from email_network.data_loader import load_edge_list, load_identity_mapping
from email_network.graph import build_graph, component_leaders, compute_graph_metrics, find_components, index_graph
from email_network.results_handler import (
    create_results_dataframe,
    log_message,
    print_cluster_summary,
    print_component_leaders,
    print_top_nodes,
    save_results,
)
from email_network.visualization import create_visualizations


def run_analysis(edges, run_config=None, progress=False):
    """
    Run the full centrality and clustering pipeline on an edge list.

    Args:
        edges: List of (u, v) node pairs
        run_config: Overrides for CONFIG keys (top_n, k_clusters, max_iters, n_jobs, seed)
        progress: Show tqdm progress bars for the per-source passes

    Returns:
        dict: graph metrics, component data, centrality scores, normalized
              features, cluster assignment and centroids
    """
    run_config = {**CONFIG, **(run_config or {})}

    print("\n" + "=" * 80)
    print("PHASE 1: GRAPH CONSTRUCTION")
    print("=" * 80)
    graph = index_graph(build_graph(edges))
    degree = compute_degree(graph)
    components = find_components(graph)
    leaders = component_leaders(components, degree)
    metrics = compute_graph_metrics(edges, components, degree)
    print("✓ Graph built:")
    print(f"  - Nodes: {metrics['nodes']:,}")
    print(f"  - Edge pairs: {metrics['edge_pairs']:,}")
    print(f"  - Density: {metrics['density']:.6f}")
    print(f"  - Connected components: {metrics['component_count']:,} (largest: {metrics['lcc_size']:,} nodes)")

    print("\n" + "=" * 80)
    print("PHASE 2: CENTRALITY ANALYSIS")
    print("=" * 80)
    top_nodes = select_top_nodes(degree, run_config['top_n'])
    validate_kmeans_params(len(top_nodes), run_config['k_clusters'], run_config['max_iters'])
    print(f"\nComputing closeness and betweenness for the top {len(top_nodes):,} nodes by degree...")

    start_time = time.time()
    closeness = compute_closeness(graph, top_nodes, n_jobs=run_config['n_jobs'], progress=progress)
    print(f"   ✓ Closeness computed in {time.time() - start_time:.1f} seconds")

    start_time = time.time()
    betweenness = compute_betweenness(graph, top_nodes, n_jobs=run_config['n_jobs'], progress=progress)
    print(f"   ✓ Betweenness computed in {time.time() - start_time:.1f} seconds")

    print("\n" + "=" * 80)
    print("PHASE 3: K-MEANS CLUSTERING")
    print("=" * 80)
    features = normalize_features(build_feature_vectors(degree, closeness, betweenness, top_nodes))
    k = run_config['k_clusters']
    assignment = kmeans(features, k, run_config['max_iters'], rng=run_config['seed'])
    centroids = cluster_centroids(features, assignment, k)
    print(f"✓ Assigned {len(assignment):,} nodes to {k} clusters ({run_config['max_iters']} iterations)")

    return {
        'config': run_config,
        'metrics': metrics,
        'degree': degree,
        'components': components,
        'leaders': leaders,
        'top_nodes': top_nodes,
        'closeness': closeness,
        'betweenness': betweenness,
        'features': features,
        'assignment': assignment,
        'centroids': centroids,
    }


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Centrality and k-means role clustering of an undirected email network."
    )
    parser.add_argument(
        "--edges",
        type=Path,
        default=EDGES_FILE,
        help=f"Tab-separated edge list (default: {EDGES_FILE})",
    )
    parser.add_argument(
        "--mapping",
        type=Path,
        default=MAPPING_FILE,
        help=f"CSV mapping node id -> email, folder; skipped if missing (default: {MAPPING_FILE})",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=RESULTS_DIR,
        help=f"Directory to write CSVs, summary and figures (default: {RESULTS_DIR})",
    )
    parser.add_argument("--header-lines", type=int, default=CONFIG['header_lines'],
                        help="Leading lines of the edge list to skip")
    parser.add_argument("--top-n", type=int, default=CONFIG['top_n'],
                        help="Closeness/betweenness sources: top-N nodes by degree")
    parser.add_argument("--clusters", type=int, default=CONFIG['k_clusters'],
                        help="Number of k-means clusters")
    parser.add_argument("--max-iters", type=int, default=CONFIG['max_iters'],
                        help="k-means iterations")
    parser.add_argument("--top-k", type=int, default=CONFIG['top_k_display'],
                        help="Rows per ranked table")
    parser.add_argument("--jobs", type=int, default=CONFIG['n_jobs'],
                        help="Worker processes for closeness/betweenness")
    parser.add_argument("--seed", type=int, default=CONFIG['seed'],
                        help="k-means initialisation seed")
    parser.add_argument("--no-plots", action="store_true",
                        help="Skip figure generation")
    return parser.parse_args(argv)


def main(argv=None):
    """Main execution function"""
    args = parse_args(argv)
    run_config = {
        'header_lines': args.header_lines,
        'top_n': args.top_n,
        'k_clusters': args.clusters,
        'max_iters': args.max_iters,
        'top_k_display': args.top_k,
        'n_jobs': args.jobs,
        'seed': args.seed,
        'make_plots': not args.no_plots,
    }

    print("\n" + "=" * 80)
    print("EMAIL NETWORK CENTRALITY & ROLE CLUSTERING")
    print("=" * 80)
    log_message("Execution started")
    start_time = time.time()

    try:
        edges = load_edge_list(args.edges, header_lines=args.header_lines)
        mapping = load_identity_mapping(args.mapping) if args.mapping.exists() else {}
        if not mapping:
            print("[INFO] No identity mapping loaded, nodes are shown by id")
        results = run_analysis(edges, run_config, progress=True)
    except (OSError, ValueError) as e:
        print(f"[ERROR] {e}")
        return 1

    top_k = run_config['top_k_display']
    results_df = create_results_dataframe(
        results['degree'], results['closeness'], results['betweenness'], results['assignment'], mapping
    )
    for metric in ('degree', 'closeness', 'betweenness'):
        print_top_nodes(results_df, metric, top_k, mapping)
    print_component_leaders(results['leaders'], top_k, mapping)
    print_cluster_summary(results['assignment'], results['centroids'], mapping)

    save_results(
        results_df,
        results['metrics'],
        results['leaders'],
        results['centroids'],
        results['config'],
        output_dir=args.output_dir,
        mapping=mapping,
    )
    if run_config['make_plots']:
        create_visualizations(results, output_dir=args.output_dir)

    elapsed = time.time() - start_time
    print("\n" + "=" * 80)
    print("ANALYSIS COMPLETE")
    print("=" * 80)
    log_message(f"Execution completed in {elapsed:.1f} seconds")
    print(f"✓ Results saved to: {args.output_dir}/")
    print(f"  Finished: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

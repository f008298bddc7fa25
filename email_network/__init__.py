"""
Centrality and role clustering for undirected email communication networks.
"""

from email_network.centrality import compute_betweenness, compute_closeness, compute_degree, select_top_nodes
from email_network.clustering import ClusteringConfigError, kmeans, normalize_features
from email_network.graph import GraphInputError, build_graph, find_components

__all__ = [
    "ClusteringConfigError",
    "GraphInputError",
    "build_graph",
    "compute_betweenness",
    "compute_closeness",
    "compute_degree",
    "find_components",
    "kmeans",
    "normalize_features",
    "select_top_nodes",
]

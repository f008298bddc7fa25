"""
Clustering module for the email network analysis.
Builds per-node feature vectors, normalizes them and groups nodes with
k-means.
"""

from typing import Dict, Hashable, Iterable, List, Optional, Tuple

import numpy as np


class ClusteringConfigError(ValueError):
    """Raised for an invalid cluster count or iteration budget."""


def build_feature_vectors(degree, closeness, betweenness, nodes: Iterable[Hashable]) -> Dict[Hashable, Tuple[float, float, float]]:
    """
    Assemble (degree, closeness, betweenness) for each node.
    Scores missing for a node default to 0.
    """
    features = {}
    for node in nodes:
        features[node] = (
            float(degree.get(node, 0)),
            float(closeness.get(node, 0.0)),
            float(betweenness.get(node, 0.0)),
        )
    return features


def normalize_features(features: Dict[Hashable, tuple]) -> Dict[Hashable, tuple]:
    """
    Scale every dimension to [0, 1] by its maximum across all nodes.

    A dimension whose maximum is <= 0 is left as is. The mapping is updated
    in place and returned.
    """
    if not features:
        return features

    nodes = list(features)
    values = np.asarray([features[node] for node in nodes], dtype=np.float64)
    maxima = values.max(axis=0)
    scale = np.where(maxima > 0, maxima, 1.0)
    scaled = values / scale

    for node, row in zip(nodes, scaled.tolist()):
        features[node] = tuple(row)
    return features


def validate_kmeans_params(n_points, k, max_iters):
    """Raise ClusteringConfigError unless 1 <= k <= n_points and max_iters >= 1."""
    if isinstance(k, bool) or not isinstance(k, (int, np.integer)):
        raise ClusteringConfigError(f"k must be an integer, got {k!r}")
    if k < 1:
        raise ClusteringConfigError(f"k must be at least 1, got {k}")
    if k > n_points:
        raise ClusteringConfigError(
            f"k={k} exceeds the number of distinct nodes ({n_points}); "
            f"cannot choose {k} distinct initial centroids"
        )
    if isinstance(max_iters, bool) or not isinstance(max_iters, (int, np.integer)) or max_iters < 1:
        raise ClusteringConfigError(f"max_iters must be a positive integer, got {max_iters!r}")


def kmeans(features: Dict[Hashable, tuple], k: int, max_iters: int, rng=None) -> Dict[Hashable, int]:
    """
    Partition nodes into k clusters by k-means on their feature vectors.

    Initial centroids are the vectors of k distinct nodes drawn without
    replacement. Every iteration assigns each node to its nearest centroid
    (Euclidean; ties go to the lowest index) and moves each centroid to the
    mean of its members. A centroid with no members keeps its position.
    The full max_iters budget is always used.

    Args:
        features: node -> feature vector
        k: Number of clusters, 1 <= k <= len(features)
        max_iters: Number of assignment/update rounds
        rng: numpy Generator, int seed, or None for fresh entropy

    Returns:
        dict: node -> cluster id in [0, k)

    Raises:
        ClusteringConfigError: If k or max_iters is out of range
    """
    validate_kmeans_params(len(features), k, max_iters)
    rng = np.random.default_rng(rng)

    nodes = list(features)
    points = np.asarray([features[node] for node in nodes], dtype=np.float64)
    centroids = points[rng.choice(len(nodes), size=k, replace=False)].copy()

    labels = np.zeros(len(nodes), dtype=np.int64)
    for _ in range(max_iters):
        # Assignment step
        distances = np.sqrt(((points[:, None, :] - centroids[None, :, :]) ** 2).sum(axis=2))
        labels = distances.argmin(axis=1)

        # Update step
        counts = np.bincount(labels, minlength=k)
        sums = np.zeros_like(centroids)
        np.add.at(sums, labels, points)
        occupied = counts > 0
        centroids[occupied] = sums[occupied] / counts[occupied, None]

    return dict(zip(nodes, labels.tolist()))


def cluster_centroids(features: Dict[Hashable, tuple], assignment: Dict[Hashable, int], k: int) -> List[Tuple[Optional[tuple], int]]:
    """Mean feature vector and member count of each cluster (None when empty)."""
    members = [[] for _ in range(k)]
    for node, cluster_id in assignment.items():
        members[cluster_id].append(features[node])

    summary = []
    for vectors in members:
        if vectors:
            summary.append((tuple(np.mean(vectors, axis=0).tolist()), len(vectors)))
        else:
            summary.append((None, 0))
    return summary

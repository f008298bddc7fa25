"""
Centrality module for the email network analysis.
Computes degree, closeness and betweenness centrality.

Closeness and betweenness run one BFS per source node, so they are only
computed for a caller-supplied subset (usually the top-N nodes by degree).
Sources can be spread over a process pool; partial results are reduced in
the parent process.
"""

from multiprocessing import Pool
from typing import Dict, Hashable, Iterable, List, Tuple

import numpy as np
from tqdm import tqdm

from email_network.graph import IndexedGraph, as_indexed_graph, frontier_edges, hop_distances


def compute_degree(edges) -> Dict[Hashable, int]:
    """
    Degree of every node: the number of adjacency entries, counting
    parallel edges separately.

    Args:
        edges: Edge list, adjacency mapping or IndexedGraph

    Returns:
        dict: node -> degree
    """
    graph = as_indexed_graph(edges)
    return dict(zip(graph.nodes, graph.degrees().tolist()))


def select_top_nodes(degree: Dict[Hashable, int], n: int) -> List[Hashable]:
    """Return the n highest-degree nodes (ties broken by smaller node id)."""
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    ranked = sorted(degree, key=lambda node: (-degree[node], node))
    return ranked[:n]


def _split_sources(sources: List[Hashable], n_chunks: int) -> List[List[Hashable]]:
    n_chunks = max(1, min(n_chunks, len(sources)))
    bounds = np.linspace(0, len(sources), n_chunks + 1).astype(int)
    return [sources[start:end] for start, end in zip(bounds[:-1], bounds[1:])]


def _run_sources(worker, graph: IndexedGraph, sources: List[Hashable], n_jobs: int, progress: bool) -> list:
    """Run worker over all sources, in-process or on a Pool of n_jobs workers."""
    if n_jobs <= 1 or len(sources) < 2:
        return [worker((graph, sources, progress))]

    chunks = _split_sources(sources, n_jobs)
    with Pool(processes=len(chunks)) as pool:
        return pool.map(worker, [(graph, chunk, False) for chunk in chunks])


# ---------------------------------------------------------------------------
# Closeness
# ---------------------------------------------------------------------------

def _closeness_for_sources(args) -> Dict[Hashable, float]:
    graph, sources, progress = args
    scores = {}
    for source in tqdm(sources, desc="   Closeness", disable=not progress, leave=False):
        if source not in graph:
            scores[source] = 0.0
            continue

        dist = hop_distances(graph, graph.index[source])
        reached = dist[dist >= 0]
        total_distance = int(reached.sum())
        if total_distance > 0:
            scores[source] = (reached.size - 1) / total_distance
        else:
            scores[source] = 0.0
    return scores


def compute_closeness(edges, node_subset: Iterable[Hashable], n_jobs: int = 1, progress: bool = False) -> Dict[Hashable, float]:
    """
    Closeness centrality for each node of node_subset.

    score = (reachable - 1) / sum of hop distances, measured over the
    source's own reachable set only; 0.0 when the distance sum is 0
    (isolated or unknown nodes).

    Args:
        edges: Edge list, adjacency mapping or IndexedGraph
        node_subset: Nodes to score
        n_jobs: Worker processes (1 = run in-process)
        progress: Show a tqdm progress bar

    Returns:
        dict: node -> closeness
    """
    graph = as_indexed_graph(edges)
    sources = list(dict.fromkeys(node_subset))

    closeness = {}
    for partial in _run_sources(_closeness_for_sources, graph, sources, n_jobs, progress):
        closeness.update(partial)
    return closeness


# ---------------------------------------------------------------------------
# Betweenness (Brandes)
# ---------------------------------------------------------------------------

def _source_dependencies(graph: IndexedGraph, source: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    One Brandes pass from source.

    The BFS runs level by level; each level keeps the (predecessor,
    successor) adjacency entries that lie on shortest paths. Dependencies
    are then accumulated from the deepest level back to the source.

    Returns:
        tuple: (delta, dist) dense arrays; delta[source] is 0
    """
    n = graph.number_of_nodes
    dist = np.full(n, -1, dtype=np.int64)
    sigma = np.zeros(n, dtype=np.float64)
    dist[source] = 0
    sigma[source] = 1.0

    levels = []
    frontier = np.array([source], dtype=np.int64)
    depth = 0
    while frontier.size:
        pred, succ = frontier_edges(graph, frontier)
        frontier = np.unique(succ[dist[succ] < 0])
        dist[frontier] = depth + 1

        on_path = dist[succ] == depth + 1
        pred, succ = pred[on_path], succ[on_path]
        np.add.at(sigma, succ, sigma[pred])
        levels.append((pred, succ))
        depth += 1

    delta = np.zeros(n, dtype=np.float64)
    for pred, succ in reversed(levels):
        if succ.size == 0:
            continue
        coeff = np.divide(
            1.0 + delta[succ],
            sigma[succ],
            out=np.zeros(succ.size, dtype=np.float64),
            where=sigma[succ] > 0,
        )
        np.add.at(delta, pred, sigma[pred] * coeff)

    delta[source] = 0.0
    return delta, dist


def _betweenness_for_sources(args) -> Tuple[np.ndarray, np.ndarray]:
    graph, sources, progress = args
    totals = np.zeros(graph.number_of_nodes, dtype=np.float64)
    reached = np.zeros(graph.number_of_nodes, dtype=bool)
    for source in tqdm(sources, desc="   Betweenness", disable=not progress, leave=False):
        if source not in graph:
            continue
        delta, dist = _source_dependencies(graph, graph.index[source])
        totals += delta
        reached |= dist >= 0
    return totals, reached


def compute_betweenness(edges, node_subset: Iterable[Hashable], n_jobs: int = 1, progress: bool = False) -> Dict[Hashable, float]:
    """
    Betweenness centrality accumulated from the sources in node_subset
    (Brandes' algorithm), divided by the maximum score.

    Scores cover every node reached from at least one source plus the
    sources themselves. If the maximum is 0 all scores stay 0.

    Args:
        edges: Edge list, adjacency mapping or IndexedGraph
        node_subset: Source nodes
        n_jobs: Worker processes (1 = run in-process)
        progress: Show a tqdm progress bar

    Returns:
        dict: node -> betweenness in [0, 1]
    """
    graph = as_indexed_graph(edges)
    sources = list(dict.fromkeys(node_subset))

    totals = np.zeros(graph.number_of_nodes, dtype=np.float64)
    reached = np.zeros(graph.number_of_nodes, dtype=bool)
    for partial_totals, partial_reached in _run_sources(_betweenness_for_sources, graph, sources, n_jobs, progress):
        totals += partial_totals
        reached |= partial_reached

    max_val = totals.max() if totals.size else 0.0
    if max_val > 0:
        totals /= max_val

    betweenness = {graph.nodes[i]: score for i, score in zip(np.flatnonzero(reached).tolist(), totals[reached].tolist())}
    for source in sources:
        if source not in graph:
            betweenness[source] = 0.0
    return betweenness

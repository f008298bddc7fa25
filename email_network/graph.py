"""
Graph module for the email network analysis.
Handles adjacency construction, the indexed (CSR) graph used by every
traversal, connected components and graph-level metrics.
"""

from collections.abc import Mapping
from typing import Dict, Hashable, List, Sequence, Set, Tuple

import networkx as nx
import numpy as np


class GraphInputError(ValueError):
    """Raised when an edge is not a pair of hashable node identifiers."""


def build_graph(edges: Sequence[Tuple[Hashable, Hashable]]) -> Dict[Hashable, List[Hashable]]:
    """
    Build an undirected adjacency mapping from a list of node pairs.

    Every pair adds one entry in each direction, so repeated pairs are kept
    as parallel edges and a self-loop (u, u) adds u to its own list twice.
    Keys appear in first-seen order.

    Args:
        edges: Sequence of (u, v) node pairs

    Returns:
        dict: node -> list of neighbor nodes
    """
    graph = {}
    for position, pair in enumerate(edges):
        if isinstance(pair, (str, bytes)):
            raise GraphInputError(f"Edge #{position} is not a node pair: {pair!r}")
        try:
            u, v = pair
        except (TypeError, ValueError):
            raise GraphInputError(f"Edge #{position} is not a node pair: {pair!r}") from None
        if u is None or v is None:
            raise GraphInputError(f"Edge #{position} has a missing endpoint: {pair!r}")
        try:
            graph.setdefault(u, []).append(v)
            graph.setdefault(v, []).append(u)
        except TypeError:
            raise GraphInputError(f"Edge #{position} has an unhashable endpoint: {pair!r}") from None
    return graph


class IndexedGraph:
    """
    Compact renumbering of an adjacency mapping.

    Node i of the graph is ``nodes[i]``; its neighbors are
    ``indices[indptr[i]:indptr[i + 1]]`` in adjacency-list order.
    """

    def __init__(self, nodes: List[Hashable], indptr: np.ndarray, indices: np.ndarray):
        self.nodes = nodes
        self.index = {node: i for i, node in enumerate(nodes)}
        self.indptr = indptr
        self.indices = indices

    @property
    def number_of_nodes(self) -> int:
        return len(self.nodes)

    @property
    def number_of_entries(self) -> int:
        return int(self.indptr[-1])

    def degrees(self) -> np.ndarray:
        return np.diff(self.indptr)

    def __contains__(self, node) -> bool:
        return node in self.index

    def __len__(self) -> int:
        return len(self.nodes)


def index_graph(graph: Mapping) -> IndexedGraph:
    """Renumber an adjacency mapping into an IndexedGraph (key order is kept)."""
    nodes = list(graph)
    index = {node: i for i, node in enumerate(nodes)}

    counts = np.fromiter((len(graph[node]) for node in nodes), dtype=np.int64, count=len(nodes))
    indptr = np.zeros(len(nodes) + 1, dtype=np.int64)
    np.cumsum(counts, out=indptr[1:])

    indices = np.fromiter(
        (index[nbr] for node in nodes for nbr in graph[node]),
        dtype=np.int64,
        count=int(indptr[-1]),
    )
    return IndexedGraph(nodes, indptr, indices)


def as_indexed_graph(source) -> IndexedGraph:
    """Accept an IndexedGraph, an adjacency mapping or an edge list."""
    if isinstance(source, IndexedGraph):
        return source
    if isinstance(source, Mapping):
        return index_graph(source)
    return index_graph(build_graph(source))


def frontier_edges(graph: IndexedGraph, frontier: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Gather every adjacency entry leaving the frontier.

    Returns:
        tuple: (src, dst) arrays, one element per adjacency entry
    """
    starts = graph.indptr[frontier]
    counts = graph.indptr[frontier + 1] - starts
    total = int(counts.sum())
    if total == 0:
        empty = np.empty(0, dtype=np.int64)
        return empty, empty

    src = np.repeat(frontier, counts)
    # Position of each entry inside its own neighbor run
    offsets = np.arange(total, dtype=np.int64) - np.repeat(np.cumsum(counts) - counts, counts)
    dst = graph.indices[np.repeat(starts, counts) + offsets]
    return src, dst


def hop_distances(graph: IndexedGraph, source: int) -> np.ndarray:
    """BFS hop distance from source to every node; -1 where unreachable."""
    dist = np.full(graph.number_of_nodes, -1, dtype=np.int64)
    dist[source] = 0
    frontier = np.array([source], dtype=np.int64)
    depth = 0
    while frontier.size:
        _, dst = frontier_edges(graph, frontier)
        frontier = np.unique(dst[dist[dst] < 0])
        depth += 1
        dist[frontier] = depth
    return dist


def find_components(edges) -> List[Set[Hashable]]:
    """
    Find connected components by breadth-first search.

    Start nodes are tried in graph key order; each unvisited start grows one
    component. Components are returned in discovery order.

    Args:
        edges: Edge list, adjacency mapping or IndexedGraph

    Returns:
        list: One set of nodes per connected component
    """
    graph = as_indexed_graph(edges)
    visited = np.zeros(graph.number_of_nodes, dtype=bool)
    components = []

    for start in range(graph.number_of_nodes):
        if visited[start]:
            continue

        visited[start] = True
        frontier = np.array([start], dtype=np.int64)
        members = [frontier]
        while frontier.size:
            _, dst = frontier_edges(graph, frontier)
            frontier = np.unique(dst[~visited[dst]])
            visited[frontier] = True
            members.append(frontier)

        components.append({graph.nodes[i] for i in np.concatenate(members).tolist()})

    return components


def component_leaders(components: List[Set[Hashable]], degree: Dict[Hashable, int]) -> List[Tuple[Set[Hashable], Hashable, int]]:
    """
    Pick the highest-degree node of every component.

    Ties go to the smallest node id.

    Returns:
        list: (component, leader, leader_degree) in component order
    """
    leaders = []
    for component in components:
        leader = min(component, key=lambda node: (-degree.get(node, 0), node))
        leaders.append((component, leader, degree.get(leader, 0)))
    return leaders


def to_networkx(edges) -> nx.Graph:
    """Simple undirected networkx view of an edge list (parallel edges collapse)."""
    G = nx.Graph()
    G.add_edges_from(edges)
    return G


def compute_graph_metrics(edges, components: List[Set[Hashable]], degree: Dict[Hashable, int]) -> dict:
    """
    Compute graph-level integrity metrics.

    Args:
        edges: Original edge list (parallel edges included)
        components: Output of find_components
        degree: Output of compute_degree

    Returns:
        dict: Node/edge counts, density, component and degree statistics
    """
    G = to_networkx(edges)
    component_sizes = sorted((len(c) for c in components), reverse=True)
    degrees = np.fromiter(degree.values(), dtype=np.float64, count=len(degree))

    if len(component_sizes) == 0:
        lcc_size = 0
        lcc_fraction = 0.0
    else:
        lcc_size = component_sizes[0]
        lcc_fraction = lcc_size / G.number_of_nodes() if G.number_of_nodes() > 0 else 0.0

    metrics = {
        'nodes': G.number_of_nodes(),
        'edge_pairs': len(edges),
        'distinct_edges': G.number_of_edges(),
        'self_loops': nx.number_of_selfloops(G),
        'density': nx.density(G) if G.number_of_nodes() > 1 else 0.0,
        'component_count': len(component_sizes),
        'lcc_size': lcc_size,
        'lcc_fraction': lcc_fraction,
        'second_component_size': component_sizes[1] if len(component_sizes) > 1 else 0,
        'degree_mean': float(np.mean(degrees)) if degrees.size else 0.0,
        'degree_median': float(np.median(degrees)) if degrees.size else 0.0,
        'degree_max': int(np.max(degrees)) if degrees.size else 0,
    }
    return metrics

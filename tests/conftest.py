import matplotlib

matplotlib.use("Agg")

import networkx as nx
import pytest


@pytest.fixture
def chain_edges():
    return [(1, 2), (2, 3), (3, 4)]


@pytest.fixture
def disconnected_edges():
    return [(1, 2), (2, 3), (10, 11)]


@pytest.fixture
def karate_edges():
    return list(nx.karate_club_graph().edges())


@pytest.fixture
def two_community_edges():
    """Two dense 5-cliques joined by a single bridge edge (4, 5)."""
    left = [(u, v) for u in range(5) for v in range(u + 1, 5)]
    right = [(u, v) for u in range(5, 10) for v in range(u + 1, 10)]
    return left + right + [(4, 5)]


@pytest.fixture
def edge_file(tmp_path):
    path = tmp_path / "edges.txt"
    path.write_text(
        "# Directed graph (each unordered pair of nodes is saved once)\n"
        "# Email network\n"
        "# Nodes: 5 Edges: 4\n"
        "# FromNodeId\tToNodeId\n"
        "0\t1\n"
        "1\t2\n"
        "2\t0\n"
        "3\t4\n"
    )
    return path


@pytest.fixture
def mapping_file(tmp_path):
    path = tmp_path / "email_to_node.csv"
    path.write_text(
        "node_id,email,folder\n"
        "0,kenneth.lay@enron.com,lay-k\n"
        "1,jeff.skilling@enron.com,skilling-j\n"
        "2,andrew.fastow@enron.com,fastow-a\n"
        "3,sherron.watkins@enron.com,watkins-s\n"
        "4,vince.kaminski@enron.com,kaminski-v\n"
    )
    return path

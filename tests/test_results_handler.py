import pandas as pd

from email_network.results_handler import (
    create_results_dataframe,
    format_label,
    print_cluster_summary,
    print_component_leaders,
    print_top_nodes,
    save_results,
    top_nodes,
)

MAPPING = {1: ("a@enron.com", "inbox"), 2: ("b@enron.com", "sent")}


def _results_df():
    degree = {1: 1, 2: 2, 3: 2, 4: 1}
    closeness = {2: 0.75, 3: 0.75}
    betweenness = {2: 1.0, 3: 0.5}
    assignment = {2: 0, 3: 1}
    return create_results_dataframe(degree, closeness, betweenness, assignment, MAPPING)


def test_format_label() -> None:
    assert format_label(1, MAPPING) == "Node 1 (a@enron.com) [inbox]"
    assert format_label(9, MAPPING) == "Node 9"
    assert format_label(9) == "Node 9"


def test_create_results_dataframe_columns_and_ranking() -> None:
    results_df = _results_df()

    assert list(results_df.columns) == ['rank', 'node', 'degree', 'closeness', 'betweenness', 'cluster', 'email', 'folder']
    assert results_df['node'].tolist() == [2, 3, 1, 4]
    assert results_df['rank'].tolist() == [1, 2, 3, 4]
    assert pd.isna(results_df.loc[results_df['node'] == 1, 'closeness']).all()
    assert pd.isna(results_df.loc[results_df['node'] == 4, 'cluster']).all()
    assert results_df.loc[results_df['node'] == 2, 'email'].item() == "b@enron.com"


def test_top_nodes_ignores_unscored_nodes() -> None:
    ranked = top_nodes(_results_df(), 'betweenness', 10)

    assert ranked['node'].tolist() == [2, 3]


def test_print_tables(capsys) -> None:
    results_df = _results_df()

    print_top_nodes(results_df, 'degree', 2, MAPPING)
    print_component_leaders([({1, 2, 3, 4}, 2, 2)], 5, MAPPING)
    print_cluster_summary({2: 0, 3: 1}, [((1.0, 1.0, 1.0), 1), (None, 0)], MAPPING)

    out = capsys.readouterr().out
    assert "Top 2 by Degree Centrality" in out
    assert "1. Node 2 (b@enron.com) [sent]: 2 connections" in out
    assert "Component 1 (4 nodes) -> Node 2 (b@enron.com) [sent], Degree: 2" in out
    assert "Cluster 1: empty" in out


def test_save_results_writes_csv_and_summary(tmp_path) -> None:
    results_df = _results_df()
    metrics = {
        'nodes': 4, 'edge_pairs': 3, 'distinct_edges': 3, 'self_loops': 0, 'density': 0.5,
        'component_count': 1, 'lcc_size': 4, 'lcc_fraction': 1.0, 'second_component_size': 0,
        'degree_mean': 1.5, 'degree_median': 1.5, 'degree_max': 2,
    }
    run_config = {'top_k_display': 3, 'top_n': 2, 'k_clusters': 2, 'max_iters': 10, 'seed': 0}

    results_file, summary_file = save_results(
        results_df, metrics, [({1, 2, 3, 4}, 2, 2)], [((1.0, 1.0, 1.0), 1), ((0.5, 1.0, 0.5), 1)],
        run_config, output_dir=tmp_path / "out", mapping=MAPPING,
    )

    saved = pd.read_csv(results_file)
    assert len(saved) == 4
    summary = summary_file.read_text()
    assert "Connected components: 1" in summary
    assert "TOP 3 BY BETWEENNESS CENTRALITY" in summary
    assert "Component 1 (4 nodes): Node 2 (b@enron.com) [sent], Degree: 2" in summary
    assert "Cluster 1: 1 nodes, centroid (0.5000, 1.0000, 0.5000)" in summary

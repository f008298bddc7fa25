import pytest

from email_network.data_loader import load_edge_list, load_identity_mapping


def test_load_edge_list_skips_header(edge_file) -> None:
    edges = load_edge_list(edge_file)

    assert edges == [(0, 1), (1, 2), (2, 0), (3, 4)]


def test_load_edge_list_reports_and_skips_malformed_lines(tmp_path, capsys) -> None:
    path = tmp_path / "edges.txt"
    path.write_text(
        "0\t1\n"
        "1\tx\n"
        "2\n"
        "3\t4\t5\n"
        "-1\t2\n"
        "\n"
        "# trailing comment\n"
        "5 6\n"
    )

    edges = load_edge_list(path, header_lines=0)

    assert edges == [(0, 1), (5, 6)]
    assert "[WARN] Skipped 4 malformed lines" in capsys.readouterr().out


def test_load_edge_list_missing_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_edge_list(tmp_path / "missing.txt")


def test_load_identity_mapping(mapping_file) -> None:
    mapping = load_identity_mapping(mapping_file)

    assert len(mapping) == 5
    assert mapping[0] == ("kenneth.lay@enron.com", "lay-k")
    assert mapping[4] == ("vince.kaminski@enron.com", "kaminski-v")


def test_load_identity_mapping_drops_invalid_ids(tmp_path, capsys) -> None:
    path = tmp_path / "mapping.csv"
    path.write_text(
        "node_id,email,folder\n"
        "7,a@enron.com,a-folder\n"
        "abc,b@enron.com,b-folder\n"
        "1.5,c@enron.com,c-folder\n"
        " 8 , d@enron.com , d-folder\n"
    )

    mapping = load_identity_mapping(path)

    assert mapping == {7: ("a@enron.com", "a-folder"), 8: ("d@enron.com", "d-folder")}
    assert "[WARN] Dropped 2 rows" in capsys.readouterr().out


def test_load_identity_mapping_requires_three_columns(tmp_path) -> None:
    path = tmp_path / "mapping.csv"
    path.write_text("node_id,email\n1,a@enron.com\n")

    with pytest.raises(ValueError):
        load_identity_mapping(path)


def test_load_identity_mapping_missing_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_identity_mapping(tmp_path / "missing.csv")


def test_load_identity_mapping_ignores_extra_fields(tmp_path, capsys) -> None:
    path = tmp_path / "mapping.csv"
    path.write_text(
        "node_id,email,folder\n"
        "0,a@enron.com,a-folder\n"
        "1,b@enron.com,b-folder,extra\n"
    )

    mapping = load_identity_mapping(path)

    assert mapping == {0: ("a@enron.com", "a-folder"), 1: ("b@enron.com", "b-folder")}
    assert "[WARN]" not in capsys.readouterr().out


def test_load_identity_mapping_drops_short_rows(tmp_path, capsys) -> None:
    path = tmp_path / "mapping.csv"
    path.write_text(
        "node_id,email,folder\n"
        "0,a@enron.com,a-folder\n"
        "1,b@enron.com\n"
    )

    mapping = load_identity_mapping(path)

    assert mapping == {0: ("a@enron.com", "a-folder")}
    assert "[WARN] Dropped 1 rows" in capsys.readouterr().out

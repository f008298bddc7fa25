"""
Data loading module for the email network analysis.
Handles loading of the edge list and the node -> email identity mapping.
"""

from pathlib import Path
from typing import Dict, List, Tuple

import pandas as pd

from email_network.config import CONFIG


def _parse_node_id(token: str) -> int:
    value = int(token)
    if value < 0:
        raise ValueError(f"negative node id: {token}")
    return value


def load_edge_list(path, header_lines: int = CONFIG['header_lines']) -> List[Tuple[int, int]]:
    """
    Load an undirected edge list (SNAP format: one "u<TAB>v" pair per line).

    The first header_lines lines are skipped. Lines that are not exactly
    two non-negative integers are counted, reported and skipped.

    Args:
        path: Path to the edge list file
        header_lines: Number of leading lines to ignore

    Returns:
        list: (u, v) node pairs in file order
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Edge list not found at {path}")

    print(f"[INFO] Loading edges from {path}...")
    edges = []
    malformed = 0
    with open(path, 'r') as f:
        for line_number, line in enumerate(f, 1):
            if line_number <= header_lines:
                continue
            stripped = line.strip()
            if not stripped or stripped.startswith('#'):
                continue

            parts = stripped.split()
            if len(parts) != 2:
                malformed += 1
                continue
            try:
                edges.append((_parse_node_id(parts[0]), _parse_node_id(parts[1])))
            except ValueError:
                malformed += 1

    if malformed:
        print(f"[WARN] Skipped {malformed:,} malformed lines in {path}")
    print(f"✓ Loaded {len(edges):,} edges")
    return edges


def load_identity_mapping(path) -> Dict[int, Tuple[str, str]]:
    """
    Load the node id -> (email, folder) lookup used for presentation.

    The CSV has a header row; the first three fields of each row are read as
    node id, email address and mailbox folder, and any further fields are
    ignored. Rows with a non-integer id or without an email and folder are
    dropped.

    Args:
        path: Path to the mapping CSV

    Returns:
        dict: node id -> (email, folder)
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Mapping file not found at {path}")

    print(f"[INFO] Loading identity mapping from {path}...")
    df = pd.read_csv(
        path,
        dtype=str,
        keep_default_na=False,
        skipinitialspace=True,
        engine='python',
        on_bad_lines=lambda fields: fields[:3],
    )
    if df.shape[1] < 3:
        raise ValueError(f"{path.name} must have at least 3 columns (node id, email, folder), got {list(df.columns)}")

    id_col, email_col, folder_col = df.columns[:3]
    emails = df[email_col].fillna('').str.strip()
    folders = df[folder_col].fillna('').str.strip()
    ids = pd.to_numeric(df[id_col].fillna('').str.strip(), errors='coerce')
    valid = ids.notna() & (ids >= 0) & (ids == ids.round()) & (emails != '') & (folders != '')

    dropped = int((~valid).sum())
    if dropped:
        print(f"[WARN] Dropped {dropped:,} rows with an invalid node id or missing fields in {path}")

    mapping = {}
    for node_id, email, folder in zip(ids[valid], emails[valid], folders[valid]):
        mapping[int(node_id)] = (email, folder)

    print(f"✓ Loaded {len(mapping):,} identities")
    return mapping

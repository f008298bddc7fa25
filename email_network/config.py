"""
Configuration module for the email network analysis.
Contains all paths, directories, and configuration parameters.
"""

from pathlib import Path

# Set up paths
DATA_DIR = Path("data")
EDGES_FILE = DATA_DIR / "email-Enron.txt"
MAPPING_FILE = DATA_DIR / "email_to_node.csv"

# Output files - created on first write, never at import
RESULTS_DIR = Path("results")
RESULTS_FILE_NAME = "node_metrics.csv"
SUMMARY_FILE_NAME = "analysis_summary.txt"

# Configuration
CONFIG = {
    'header_lines': 4,  # SNAP edge lists start with four '#' comment lines
    'top_n': 1000,  # Closeness/betweenness sources: top-N nodes by degree
    'k_clusters': 5,
    'max_iters': 100,  # k-means always runs the full budget
    'top_k_display': 10,  # Rows per ranked table
    'n_jobs': 1,  # >1 spreads BFS sources over a process pool
    'seed': None,  # k-means initialisation seed (None = fresh entropy)
    'make_plots': True,
}

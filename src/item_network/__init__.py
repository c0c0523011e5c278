"""Item co-occurrence network and degree centrality for shopping records."""

from item_network.centrality import (
    calculate_degree_centrality,
    calculate_seasonal_degree_centrality,
    label_scores,
)
from item_network.graph_builder import build_graph
from item_network.records import load_records, records_from_rows

__version__ = "0.1.0"

__all__ = [
    "build_graph",
    "calculate_degree_centrality",
    "calculate_seasonal_degree_centrality",
    "label_scores",
    "load_records",
    "records_from_rows",
]

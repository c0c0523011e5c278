"""
Degree centrality over the item network, overall and per season.

Every score is degree / (N - 1), where degree is in + out edges and N is
the node count of the full graph. Graphs with fewer than two nodes score
0.0 everywhere. All outputs follow graph.nodes order so callers can zip
scores with items positionally.
"""

import logging
from typing import Dict, List, Optional, Sequence

import networkx as nx
import numpy as np
import pandas as pd

from item_network.config import COMPARISON_FIELD, SEASON_FIELD
from item_network.graph_builder import create_edges

log = logging.getLogger(__name__)


def node_degrees(graph: nx.DiGraph) -> np.ndarray:
    """In + out degree of each node, in graph.nodes order."""
    return np.fromiter(
        (degree for _, degree in graph.degree()),
        dtype=float,
        count=graph.number_of_nodes(),
    )


def normalize_degrees(degrees: np.ndarray, node_count: int) -> np.ndarray:
    """
    Scale raw degrees into [0, 1] by the maximum possible degree.

    With node_count <= 1 there is no other node to connect to and
    every score is 0.0.
    """
    degrees = np.asarray(degrees, dtype=float)
    if node_count <= 1:
        return np.zeros_like(degrees)
    return degrees / (node_count - 1)


def calculate_degree_centrality(graph: nx.DiGraph) -> Dict[int, float]:
    """
    Degree centrality of every node in the graph.

    Unlike nx.degree_centrality, a single-node graph scores 0.0
    rather than 1.0.

    Args:
        graph (nx.DiGraph): Item network from build_graph()

    Returns:
        dict: node handle -> score, in graph.nodes order
    """
    scores = normalize_degrees(node_degrees(graph), graph.number_of_nodes())
    return dict(zip(graph.nodes, scores.tolist()))


def season_graph(graph: nx.DiGraph,
                 season_records: pd.DataFrame,
                 item_nodes: Dict[str, int],
                 field: str = COMPARISON_FIELD,
                 strategy: Optional[str] = None) -> nx.DiGraph:
    """
    Same node universe as `graph`, edges re-derived from a record subset.

    The relatedness rule is the one used for the full graph; only the
    records it is applied to change.
    """
    restricted = nx.DiGraph()
    restricted.add_nodes_from(graph.nodes(data=True))
    if not season_records.empty:
        create_edges(restricted, season_records, item_nodes, field=field, strategy=strategy)
    return restricted


def calculate_seasonal_degree_centrality(graph: nx.DiGraph,
                                         records: pd.DataFrame,
                                         item_nodes: Dict[str, int],
                                         seasons: Optional[Sequence[str]] = None,
                                         field: str = COMPARISON_FIELD,
                                         strategy: Optional[str] = None) -> Dict[str, List[float]]:
    """
    Degree centrality per season, with edges restricted to that season.

    For each season S, only records whose season equals S are paired.
    Scores are still normalised by the node count of the full graph, so
    an item bought only in other seasons scores 0.0 under S.

    Args:
        graph (nx.DiGraph): Item network built from all records
        records (pd.DataFrame): The records the graph was built from
        item_nodes (dict): item identifier -> node handle
        seasons (Sequence[str]): Seasons to score. Defaults to the
            distinct season values in first-seen order. Seasons with no
            records get an all-zero vector.
        field (str): Column deciding relatedness
        strategy (str): Edge derivation strategy

    Returns:
        dict: season -> list of scores aligned with graph.nodes
    """
    if seasons is None:
        seasons = records[SEASON_FIELD].unique().tolist()

    node_count = graph.number_of_nodes()
    seasonal = {}
    for season in seasons:
        season_records = records[records[SEASON_FIELD] == season]
        restricted = season_graph(graph, season_records, item_nodes, field=field, strategy=strategy)
        scores = normalize_degrees(node_degrees(restricted), node_count)
        seasonal[season] = scores.tolist()

        log.debug(
            f"  {season:<10}: {len(season_records):,} records, "
            f"{restricted.number_of_edges():,} edges"
        )

    log.info(f"  Seasons scored : {len(seasonal)}")
    return seasonal


def label_scores(graph: nx.DiGraph, scores: Dict[int, float]) -> Dict[str, float]:
    """Re-key node scores by item identifier, keeping graph order."""
    return {graph.nodes[node]["item"]: scores[node] for node in graph.nodes}

"""
Item co-occurrence graph construction.

Nodes are distinct item_purchased values, numbered in the order they first
appear in the records. Two records are related when they share the same
non-blank COMPARISON_FIELD value (the product category); every related
pair of records links the two items they bought.

Edges are stored once per item pair, oriented from the lower node handle
to the higher one. The graph is therefore a plain edge set: re-inserting
a pair is a no-op, a pair never appears in both directions, and a node's
in + out degree equals the number of distinct items it is related to.
"""

import logging
from itertools import combinations
from typing import Dict, Iterator, Optional, Set, Tuple

import networkx as nx
import pandas as pd

from item_network.config import COMPARISON_FIELD, EDGE_STRATEGIES, ITEM_FIELD, PIPELINE_CONFIG

log = logging.getLogger(__name__)

NodePair = Tuple[int, int]


def _is_blank(value) -> bool:
    return pd.isna(value) or str(value).strip() == ""


def _require_columns(records: pd.DataFrame, *columns: str) -> None:
    missing = set(columns) - set(records.columns)
    if missing:
        raise ValueError(f"Missing columns: {missing}")


def create_nodes(graph: nx.DiGraph, records: pd.DataFrame) -> Dict[str, int]:
    """
    Add one node per distinct item, in first-seen record order.

    Args:
        graph (nx.DiGraph): Graph to add nodes to
        records (pd.DataFrame): Record table with an item_purchased column

    Returns:
        dict: item identifier -> node handle
    """
    _require_columns(records, ITEM_FIELD)

    item_nodes = {}
    for item in records[ITEM_FIELD]:
        if item in item_nodes:
            continue
        handle = len(item_nodes)
        graph.add_node(handle, item=item)
        item_nodes[item] = handle

    return item_nodes


def add_item_edge(graph: nx.DiGraph, u: int, v: int) -> bool:
    """
    Insert the edge between two item nodes unless it already exists.

    The edge always runs from the lower handle to the higher one.
    Self-edges are refused.

    Returns:
        bool: True if a new edge was added
    """
    if u == v:
        return False
    if u > v:
        u, v = v, u
    if graph.has_edge(u, v):
        return False
    graph.add_edge(u, v)
    return True


def _pairwise_pairs(items: list, keys: list, item_nodes: Dict[str, int]) -> Iterator[NodePair]:
    # Reference scan: every record pair i < j, O(R²)
    n = len(items)
    for i in range(n):
        if _is_blank(keys[i]):
            continue
        for j in range(i + 1, n):
            if keys[j] == keys[i]:
                yield item_nodes[items[i]], item_nodes[items[j]]


def _bucket_pairs(records: pd.DataFrame, field: str, item_nodes: Dict[str, int]) -> Iterator[NodePair]:
    blank = records[field].map(_is_blank).astype(bool)
    keyed = records[~blank]
    for _, bucket in keyed.groupby(field, sort=False):
        handles = list(dict.fromkeys(item_nodes[item] for item in bucket[ITEM_FIELD]))
        yield from combinations(handles, 2)


def related_node_pairs(records: pd.DataFrame,
                       item_nodes: Dict[str, int],
                       field: str = COMPARISON_FIELD,
                       strategy: Optional[str] = None) -> Set[NodePair]:
    """
    Canonical node pairs linked by at least one related record pair.

    Both strategies return the same set. "pairwise" compares every pair
    of records; "bucket" groups records by `field` first and pairs the
    distinct items inside each group, which is near-linear when
    categories are small.

    Args:
        records (pd.DataFrame): Record table
        item_nodes (dict): item identifier -> node handle
        field (str): Column deciding relatedness
        strategy (str): "bucket" or "pairwise"

    Returns:
        set: (low handle, high handle) tuples, self-pairs excluded
    """
    strategy = strategy or PIPELINE_CONFIG["edge_strategy"]
    if strategy not in EDGE_STRATEGIES:
        raise ValueError(f"Unknown edge strategy {strategy!r}; expected one of {EDGE_STRATEGIES}")
    _require_columns(records, ITEM_FIELD, field)

    if strategy == "pairwise":
        raw_pairs = _pairwise_pairs(
            records[ITEM_FIELD].tolist(), records[field].tolist(), item_nodes
        )
    else:
        raw_pairs = _bucket_pairs(records, field, item_nodes)

    return {(min(u, v), max(u, v)) for u, v in raw_pairs if u != v}


def create_edges(graph: nx.DiGraph,
                 records: pd.DataFrame,
                 item_nodes: Dict[str, int],
                 field: str = COMPARISON_FIELD,
                 strategy: Optional[str] = None) -> int:
    """
    Link the items of every related record pair.

    Returns:
        int: Number of edges newly added to the graph
    """
    added = 0
    for u, v in sorted(related_node_pairs(records, item_nodes, field=field, strategy=strategy)):
        added += add_item_edge(graph, u, v)
    return added


def build_graph(records: pd.DataFrame,
                field: str = COMPARISON_FIELD,
                strategy: Optional[str] = None) -> Tuple[nx.DiGraph, Dict[str, int]]:
    """
    Build the item co-occurrence graph for a record set.

    Args:
        records (pd.DataFrame): Typed record table
        field (str): Column deciding relatedness
        strategy (str): Edge derivation strategy, see related_node_pairs()

    Returns:
        tuple: (graph, item_nodes)
               graph      : nx.DiGraph, nodes carry an `item` attribute
               item_nodes : item identifier -> node handle
    """
    graph = nx.DiGraph()
    item_nodes = create_nodes(graph, records)
    n_edges = create_edges(graph, records, item_nodes, field=field, strategy=strategy)

    log.info(f"  Nodes    : {graph.number_of_nodes():,} items")
    log.info(f"  Edges    : {n_edges:,} item pairs sharing a {field}")
    if graph.number_of_nodes() > 1:
        log.info(f"  Density  : {nx.density(graph):.4f}")

    return graph, item_nodes

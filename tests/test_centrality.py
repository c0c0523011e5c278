import networkx as nx
import numpy as np
import pytest

from item_network.centrality import (
    calculate_degree_centrality,
    calculate_seasonal_degree_centrality,
    label_scores,
    node_degrees,
    normalize_degrees,
    season_graph,
)
from item_network.graph_builder import build_graph
from item_network.records import records_from_rows


class TestNormalizeDegrees:

    def test_divides_by_n_minus_one(self):
        scores = normalize_degrees(np.array([1.0, 2.0, 1.0]), 3)
        assert scores.tolist() == [0.5, 1.0, 0.5]

    @pytest.mark.parametrize("node_count", [0, 1])
    def test_degenerate_graphs_score_zero(self, node_count):
        scores = normalize_degrees(np.zeros(node_count), node_count)
        assert scores.tolist() == [0.0] * node_count


class TestDegreeCentrality:
    """Global degree centrality."""

    def test_centrality(self, shirt_and_pants):
        graph, item_nodes = build_graph(shirt_and_pants)
        degree_centrality = calculate_degree_centrality(graph)

        # Only two items and they are connected: 1 / (2 - 1)
        assert degree_centrality[item_nodes["Shirt"]] == 1.0
        assert degree_centrality[item_nodes["Pants"]] == 1.0

    def test_hub_outranks_leaves(self, chain_records):
        graph, item_nodes = build_graph(chain_records)
        scores = calculate_degree_centrality(graph)

        assert scores[item_nodes["B"]] == 1.0
        assert scores[item_nodes["A"]] == 0.5
        assert scores[item_nodes["C"]] == 0.5
        assert scores[item_nodes["B"]] > scores[item_nodes["A"]]

    def test_single_node_scores_zero(self, row_factory):
        records = records_from_rows([
            row_factory("Shirt", "Clothing"),
            row_factory("Shirt", "Clothing"),
        ])
        graph, item_nodes = build_graph(records)
        assert calculate_degree_centrality(graph) == {item_nodes["Shirt"]: 0.0}

    def test_empty_graph(self):
        assert calculate_degree_centrality(nx.DiGraph()) == {}

    def test_scores_within_unit_interval(self, row_factory):
        rows = [
            row_factory(f"item{i % 9}", ["Clothing", "Footwear", ""][i % 3])
            for i in range(40)
        ]
        graph, _ = build_graph(records_from_rows(rows))
        scores = calculate_degree_centrality(graph)

        assert graph.number_of_nodes() >= 2
        assert all(0.0 <= s <= 1.0 for s in scores.values())

    def test_matches_networkx_for_two_or_more_nodes(self, chain_records):
        graph, _ = build_graph(chain_records)
        assert calculate_degree_centrality(graph) == pytest.approx(nx.degree_centrality(graph))

    def test_follows_graph_node_order(self, chain_records):
        graph, _ = build_graph(chain_records)
        assert list(calculate_degree_centrality(graph)) == list(graph.nodes)

    def test_label_scores(self, chain_records):
        graph, _ = build_graph(chain_records)
        labelled = label_scores(graph, calculate_degree_centrality(graph))
        assert labelled == {"A": 0.5, "B": 1.0, "C": 0.5}
        assert list(labelled) == ["A", "B", "C"]


class TestSeasonalDegreeCentrality:
    """Degree centrality with edges restricted to one season."""

    def test_disjoint_seasons(self, seasonal_records):
        graph, item_nodes = build_graph(seasonal_records)
        seasonal = calculate_seasonal_degree_centrality(graph, seasonal_records, item_nodes)

        assert list(seasonal) == ["Spring", "Winter"]
        order = [graph.nodes[n]["item"] for n in graph.nodes]
        winter = dict(zip(order, seasonal["Winter"]))
        spring = dict(zip(order, seasonal["Spring"]))

        assert winter["Shirt"] == 0.0
        assert winter["Pants"] == 0.0
        # normalised by the full node universe: 1 / (4 - 1)
        assert winter["Boots"] == pytest.approx(1 / 3)
        assert spring["Shirt"] == pytest.approx(1 / 3)
        assert spring["Boots"] == 0.0

    def test_vectors_align_with_node_order(self, seasonal_records):
        graph, item_nodes = build_graph(seasonal_records)
        seasonal = calculate_seasonal_degree_centrality(graph, seasonal_records, item_nodes)

        for scores in seasonal.values():
            assert len(scores) == graph.number_of_nodes()

    def test_season_without_records_is_all_zero(self, seasonal_records):
        graph, item_nodes = build_graph(seasonal_records)
        seasonal = calculate_seasonal_degree_centrality(
            graph, seasonal_records, item_nodes,
            seasons=["Spring", "Summer", "Fall", "Winter"],
        )

        assert list(seasonal) == ["Spring", "Summer", "Fall", "Winter"]
        assert seasonal["Summer"] == [0.0] * graph.number_of_nodes()
        assert seasonal["Fall"] == [0.0] * graph.number_of_nodes()

    def test_cross_season_pairs_are_not_linked(self, row_factory):
        # Shirt and Pants share a category, but never within one season
        records = records_from_rows([
            row_factory("Shirt", "Clothing", season="Spring"),
            row_factory("Pants", "Clothing", season="Winter"),
        ])
        graph, item_nodes = build_graph(records)
        seasonal = calculate_seasonal_degree_centrality(graph, records, item_nodes)

        assert calculate_degree_centrality(graph) == {0: 1.0, 1: 1.0}
        assert seasonal == {"Spring": [0.0, 0.0], "Winter": [0.0, 0.0]}

    def test_seasonal_never_exceeds_global(self, row_factory):
        seasons = ["Spring", "Summer", "Fall", "Winter"]
        rows = [
            row_factory(f"item{i % 7}", ["Clothing", "Footwear"][i % 2], season=seasons[i % 4])
            for i in range(30)
        ]
        records = records_from_rows(rows)
        graph, item_nodes = build_graph(records)
        overall = list(calculate_degree_centrality(graph).values())
        seasonal = calculate_seasonal_degree_centrality(graph, records, item_nodes)

        for scores in seasonal.values():
            assert all(0.0 <= s <= g for s, g in zip(scores, overall))

    def test_empty_records(self):
        records = records_from_rows([])
        graph, item_nodes = build_graph(records)
        assert calculate_seasonal_degree_centrality(graph, records, item_nodes) == {}
        assert calculate_seasonal_degree_centrality(
            graph, records, item_nodes, seasons=["Spring"]
        ) == {"Spring": []}

    @pytest.mark.parametrize("strategy", ["bucket", "pairwise"])
    def test_strategies_agree(self, seasonal_records, strategy):
        graph, item_nodes = build_graph(seasonal_records)
        seasonal = calculate_seasonal_degree_centrality(
            graph, seasonal_records, item_nodes, strategy=strategy
        )
        assert seasonal["Spring"] == pytest.approx([1 / 3, 1 / 3, 0.0, 0.0])

    def test_season_graph_keeps_node_universe(self, seasonal_records):
        graph, item_nodes = build_graph(seasonal_records)
        winter = seasonal_records[seasonal_records["season"] == "Winter"]
        restricted = season_graph(graph, winter, item_nodes)

        assert list(restricted.nodes(data=True)) == list(graph.nodes(data=True))
        assert list(restricted.edges) == [(item_nodes["Boots"], item_nodes["Sandals"])]
        assert node_degrees(restricted).tolist() == [0.0, 0.0, 1.0, 1.0]

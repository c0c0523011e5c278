"""Tables, console summary, CSV export and heatmap for centrality results."""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import matplotlib.pyplot as plt
import networkx as nx
import pandas as pd
import seaborn as sns

from item_network.centrality import node_degrees
from item_network.config import DARK_BG, MUTED, PIPELINE_CONFIG, SURFACE, TEXT

log = logging.getLogger(__name__)

TABLE_COLUMNS = ("item", "degree", "degree_centrality")


# ─────────────────────────────────────────────────────────────────
# 1. TABLES
# ─────────────────────────────────────────────────────────────────

def build_centrality_table(graph: nx.DiGraph,
                           global_scores: Dict[int, float],
                           seasonal_scores: Dict[str, List[float]]) -> pd.DataFrame:
    """
    One row per item, in graph.nodes order.

    Columns: item, degree, degree_centrality, then one column per
    season holding that season's score. A season named like one of
    the fixed columns raises ValueError.

    Args:
        graph (nx.DiGraph): Item network
        global_scores (dict): node handle -> score
        seasonal_scores (dict): season -> scores aligned with graph.nodes

    Returns:
        pd.DataFrame: Centrality table indexed by node handle
    """
    clashes = [season for season in seasonal_scores if season in TABLE_COLUMNS]
    if clashes:
        raise ValueError(f"Season names clash with table columns: {clashes}")

    nodes = list(graph.nodes)
    table = pd.DataFrame(
        {
            "item": [graph.nodes[node]["item"] for node in nodes],
            "degree": node_degrees(graph).astype(int),
            "degree_centrality": [global_scores[node] for node in nodes],
        },
        index=pd.Index(nodes, name="node"),
    )
    for season, scores in seasonal_scores.items():
        table[season] = scores
    return table


def seasonal_long_format(table: pd.DataFrame, seasons: Sequence[str]) -> pd.DataFrame:
    """Melt the per-season columns into (season, item, centrality) rows."""
    return (
        table[["item", *seasons]]
        .melt(id_vars="item", var_name="season", value_name="centrality")
        [["season", "item", "centrality"]]
    )


# ─────────────────────────────────────────────────────────────────
# 2. CONSOLE
# ─────────────────────────────────────────────────────────────────

def print_centrality_summary(table: pd.DataFrame,
                             seasons: Sequence[str],
                             top_n: Optional[int] = None) -> None:
    """
    Print every item's global and seasonal scores, then the top hubs.

    Args:
        table (pd.DataFrame): Output of build_centrality_table()
        seasons (Sequence[str]): Season columns to print
        top_n (int): Number of hub items to list at the end
    """
    if top_n is None:
        top_n = PIPELINE_CONFIG["top_n"]

    for row in table.itertuples(index=False):
        print(f"Item '{row.item}': Degree Centrality: {row.degree_centrality:.4f}")

    for season in seasons:
        print(f"Season {season}:")
        for item, score in zip(table["item"], table[season]):
            print(f"  Item '{item}': Seasonal Degree Centrality: {score:.4f}")

    if table.empty or top_n <= 0:
        return

    print("\n" + "=" * 60)
    print(f"  TOP {top_n} HUB ITEMS")
    print("=" * 60)
    hubs = table.nlargest(top_n, "degree_centrality")
    print(hubs[["item", "degree", "degree_centrality"]].to_string(index=False))


# ─────────────────────────────────────────────────────────────────
# 3. FILES
# ─────────────────────────────────────────────────────────────────

def save_outputs(table: pd.DataFrame,
                 seasons: Sequence[str],
                 output_dir: Path) -> Dict[str, Path]:
    """
    Write the wide item table and the long seasonal table as CSV.

    Returns:
        dict: output name -> written path
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    paths = {
        "item_centrality": output_dir / "item_centrality.csv",
        "seasonal_centrality": output_dir / "seasonal_centrality.csv",
    }

    table.to_csv(paths["item_centrality"])
    seasonal_long_format(table, seasons).to_csv(paths["seasonal_centrality"], index=False)

    log.info(f"  Saved: {paths['item_centrality'].name}      ({len(table):,} items)")
    log.info(f"  Saved: {paths['seasonal_centrality'].name}  ({len(seasons)} seasons)")
    return paths


def plot_seasonal_heatmap(table: pd.DataFrame,
                          seasons: Sequence[str],
                          save_path: Path,
                          top_n: Optional[int] = None) -> None:
    """
    Heatmap of seasonal centrality for the top items.

    Rows are the top_n items by global centrality, columns are seasons.

    Args:
        table (pd.DataFrame): Output of build_centrality_table()
        seasons (Sequence[str]): Season columns to plot
        save_path (Path): Output PNG path
        top_n (int): Number of items to show
    """
    if top_n is None:
        top_n = PIPELINE_CONFIG["top_n"]

    top_items = table if table.empty else table.nlargest(top_n, "degree_centrality")
    if top_items.empty or not seasons:
        log.warning("  Nothing to plot, skipping seasonal heatmap")
        return
    matrix = top_items.set_index("item")[list(seasons)]

    fig, ax = plt.subplots(figsize=PIPELINE_CONFIG["heatmap_size"])
    fig.patch.set_facecolor(DARK_BG)
    ax.set_facecolor(SURFACE)

    sns.heatmap(
        matrix,
        ax=ax,
        cmap="YlOrRd",
        vmin=0.0,
        vmax=1.0,
        annot=True,
        fmt=".2f",
        linewidths=0.5,
        linecolor=DARK_BG,
        cbar_kws={"label": "Degree centrality"},
    )

    cbar = ax.collections[0].colorbar
    cbar.ax.yaxis.label.set_color(TEXT)
    cbar.ax.tick_params(colors=MUTED)

    ax.set_xlabel("Season", color=MUTED, fontsize=10)
    ax.set_ylabel("")
    ax.set_title(
        f"Seasonal Degree Centrality: Top {len(matrix)} Items\n"
        "Share of other items each item co-occurs with, per season",
        color=TEXT, fontsize=13, fontweight="bold", pad=15
    )
    ax.tick_params(colors=MUTED)
    for label in ax.get_xticklabels() + ax.get_yticklabels():
        label.set_color(TEXT)
        label.set_fontsize(8)

    save_path.parent.mkdir(parents=True, exist_ok=True)
    plt.tight_layout()
    plt.savefig(save_path, dpi=150, bbox_inches="tight", facecolor=DARK_BG)
    plt.close(fig)
    log.info(f"  Saved: {save_path.name}")

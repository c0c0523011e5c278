"""
End-to-end item network pipeline and command line entry point.

    python -m item_network shopping_trends.csv --output-dir data/processed
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from item_network.centrality import (
    calculate_degree_centrality,
    calculate_seasonal_degree_centrality,
    label_scores,
)
from item_network.config import EDGE_STRATEGIES, PIPELINE_CONFIG, SEASONS, configure_logging, get_file_paths
from item_network.graph_builder import build_graph
from item_network.records import load_records
from item_network.report import (
    build_centrality_table,
    plot_seasonal_heatmap,
    print_centrality_summary,
    save_outputs,
)

log = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────
# 1. MAIN PIPELINE
# ─────────────────────────────────────────────────────────────────

def run_centrality_pipeline(source,
                            output_dir: Optional[Path] = None,
                            report_dir: Optional[Path] = None,
                            seasons: Optional[Sequence[str]] = None,
                            strategy: Optional[str] = None,
                            make_plots: bool = True,
                            top_n: Optional[int] = None) -> Dict[str, Any]:
    """
    Orchestrates the full item network pipeline.

    Steps:
        1. Load typed records from the injected source
        2. Build the item co-occurrence graph
        3. Compute global degree centrality
        4. Compute seasonal degree centrality
        5. Print the summary and write CSV / PNG outputs

    Args:
        source: CSV path, open text handle or buffer
        output_dir (Path): Where CSVs go. None falls back to
            ITEM_NETWORK_OUTPUT_DIR, and skips CSVs if that is unset too.
        report_dir (Path): Where the heatmap goes, same fallback rules
        seasons (Sequence[str]): Fixed season list; defaults to the
            seasons present in the data
        strategy (str): Edge derivation strategy, "bucket" or "pairwise"
        make_plots (bool): Render the seasonal heatmap
        top_n (int): Hub items shown in the summary and heatmap

    Returns:
        dict: {
            'records'             : typed record table,
            'graph'               : item network,
            'item_nodes'          : item -> node handle,
            'degree_centrality'   : node handle -> score,
            'item_centrality'     : item -> score,
            'seasonal_centrality' : season -> scores in node order,
            'table'               : per-item centrality table,
            'outputs'             : name -> written path
        }
    """
    paths = get_file_paths(output_dir, report_dir)

    print("\n" + "=" * 60)
    print("  ITEM NETWORK CENTRALITY PIPELINE")
    print("=" * 60)

    print("\n[1/5] Loading records ...")
    records = load_records(source)

    print("\n[2/5] Building item co-occurrence graph ...")
    graph, item_nodes = build_graph(records, strategy=strategy)

    print("\n[3/5] Computing degree centrality ...")
    degree_centrality = calculate_degree_centrality(graph)

    print("\n[4/5] Computing seasonal degree centrality ...")
    seasonal_centrality = calculate_seasonal_degree_centrality(
        graph, records, item_nodes, seasons=seasons, strategy=strategy
    )
    season_names = list(seasonal_centrality)

    table = build_centrality_table(graph, degree_centrality, seasonal_centrality)

    print("\n[5/5] Reporting ...")
    print_centrality_summary(table, season_names, top_n=top_n)

    outputs = {}
    if paths["output_dir"] is not None:
        outputs.update(save_outputs(table, season_names, paths["output_dir"]))
    if make_plots and paths["report_dir"] is not None:
        heatmap_path = paths["report_dir"] / "seasonal_centrality_heatmap.png"
        plot_seasonal_heatmap(table, season_names, heatmap_path, top_n=top_n)
        if heatmap_path.exists():
            outputs["seasonal_heatmap"] = heatmap_path

    return {
        "records":             records,
        "graph":               graph,
        "item_nodes":          item_nodes,
        "degree_centrality":   degree_centrality,
        "item_centrality":     label_scores(graph, degree_centrality),
        "seasonal_centrality": seasonal_centrality,
        "table":               table,
        "outputs":             outputs,
    }


# ─────────────────────────────────────────────────────────────────
# 2. ENTRY POINT
# ─────────────────────────────────────────────────────────────────

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="item-network",
        description="Degree centrality of purchased items, overall and by season",
    )
    parser.add_argument("input", type=Path, help="CSV in the shopping_trends layout")
    parser.add_argument("--output-dir", type=Path, default=None)
    parser.add_argument("--report-dir", type=Path, default=None)
    parser.add_argument("--seasons", nargs="+", default=None,
                        help="Score exactly these seasons, in this order")
    parser.add_argument("--calendar-seasons", action="store_true",
                        help="Score Spring, Summer, Fall and Winter, present or not")
    parser.add_argument("--strategy", choices=EDGE_STRATEGIES,
                        default=PIPELINE_CONFIG["edge_strategy"])
    parser.add_argument("--top-n", type=int, default=PIPELINE_CONFIG["top_n"])
    parser.add_argument("--no-plots", action="store_true")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)

    try:
        run_centrality_pipeline(
            args.input,
            output_dir=args.output_dir,
            report_dir=args.report_dir,
            seasons=list(SEASONS) if args.calendar_seasons else args.seasons,
            strategy=args.strategy,
            make_plots=not args.no_plots,
            top_n=args.top_n,
        )
    except Exception as e:
        log.error(f"Pipeline failed: {e}", exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

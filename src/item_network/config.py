"""Pipeline constants, parse defaults, paths and logging setup."""

import logging
import os
from pathlib import Path
from typing import Dict, Optional, Union

# ─────────────────────────────────────────────────────────────────
# 1. RECORD LAYOUT
# ─────────────────────────────────────────────────────────────────
ITEM_FIELD = "item_purchased"
SEASON_FIELD = "season"

# Two records are related when they share the same non-blank value in
# this column. Every edge in the item network comes from this rule.
COMPARISON_FIELD = "category"

# Positional column layout of shopping_trends.csv.
# name -> (kind, default used when the value is missing or unparseable)
FIELD_SPECS = {
    "customer_id":              ("int",   0),
    "age":                      ("int",   0),
    "gender":                   ("str",   ""),
    "item_purchased":           ("str",   ""),
    "category":                 ("str",   ""),
    "purchase_amount":          ("int",   0),
    "location":                 ("str",   ""),
    "size":                     ("str",   ""),
    "color":                    ("str",   ""),
    "season":                   ("str",   "Unknown"),
    "review_rating":            ("float", 0.0),
    "subscription_status":      ("bool",  False),
    "shipping_type":            ("str",   ""),
    "discount_applied":         ("bool",  False),
    "promo_code_used":          ("bool",  False),
    "previous_purchases":       ("int",   0),
    "payment_method":           ("str",   ""),
    "preferred_payment_method": ("str",   ""),
    "frequency_of_purchases":   ("str",   ""),
}

FIELD_DEFAULTS = {name: default for name, (_, default) in FIELD_SPECS.items()}

# Calendar order, used when the caller asks for a fixed season list
SEASONS = ("Spring", "Summer", "Fall", "Winter")


# ─────────────────────────────────────────────────────────────────
# 2. TUNING PARAMETERS
# ─────────────────────────────────────────────────────────────────
PIPELINE_CONFIG = {
    # "bucket" groups records by COMPARISON_FIELD before pairing.
    # "pairwise" is the reference O(R²) scan over every record pair;
    # fine for a few thousand rows, quadratic beyond that.
    "edge_strategy": "bucket",

    # Number of hub items listed in the console summary and heatmap
    "top_n": 10,

    # Encoding passed to pandas when reading from a path
    "encoding": "utf-8",

    "heatmap_size": (10, 7),
}

EDGE_STRATEGIES = ("bucket", "pairwise")


# ─────────────────────────────────────────────────────────────────
# 3. THEME
# ─────────────────────────────────────────────────────────────────
DARK_BG = "#0d0f14"
SURFACE = "#13161e"
TEXT = "#e2e8f0"
MUTED = "#94a3b8"


# ─────────────────────────────────────────────────────────────────
# 4. PATHS & LOGGING
# ─────────────────────────────────────────────────────────────────
def get_file_paths(output_dir: Optional[Union[str, Path]] = None,
                   report_dir: Optional[Union[str, Path]] = None) -> Dict[str, Optional[Path]]:
    """
    Resolve output locations from arguments, then the environment.

    ITEM_NETWORK_OUTPUT_DIR and ITEM_NETWORK_REPORT_DIR are consulted
    for anything not passed explicitly. A location that stays None
    means the corresponding artefacts are not written.
    """
    output_dir = output_dir or os.getenv("ITEM_NETWORK_OUTPUT_DIR")
    report_dir = report_dir or os.getenv("ITEM_NETWORK_REPORT_DIR")

    return {
        "output_dir": Path(output_dir) if output_dir else None,
        "report_dir": Path(report_dir) if report_dir else None,
    }


def configure_logging(verbose: bool = False) -> None:
    """Console logging for the CLI; DEBUG when verbose."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(levelname)-8s  %(message)s",
        datefmt="%H:%M:%S",
    )
    # basicConfig leaves the level alone once the root logger has handlers
    logging.getLogger().setLevel(level)

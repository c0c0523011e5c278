"""
Typed shopping records from CSV sources or in-memory rows.

Columns are mapped by position, not by header name, so any file in the
shopping_trends.csv layout loads regardless of how its header is spelled.
Values that are missing or fail to parse take the default configured in
FIELD_SPECS; the graph code downstream never sees a parse error.
"""

import logging
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

import numpy as np
import pandas as pd

from item_network.config import FIELD_SPECS, PIPELINE_CONFIG

log = logging.getLogger(__name__)

RECORD_FIELDS = tuple(FIELD_SPECS)

_INT64_MAX = int(np.iinfo(np.int64).max)

_BOOL_TOKENS = {
    "true": True, "yes": True, "1": True,
    "false": False, "no": False, "0": False,
}


def _parse_int(values: pd.Series) -> pd.Series:
    """Parsed values of the cells holding plain unsigned digits within int64."""
    stripped = values.str.strip()
    digits = stripped[stripped.str.fullmatch(r"[0-9]+").astype(bool)]
    # Python ints, so oversized values are caught before the int64 cast
    numbers = digits.map(int)
    return numbers[(numbers <= _INT64_MAX).astype(bool)].astype("int64")


def _coerce_int(values: pd.Series, default: int) -> pd.Series:
    result = pd.Series(default, index=values.index, dtype="int64")
    parsed = _parse_int(values)
    result.loc[parsed.index] = parsed
    return result


def _coerce_float(values: pd.Series, default: float) -> pd.Series:
    numbers = pd.to_numeric(values.str.strip(), errors="coerce")
    return numbers.fillna(default).astype(float)


def _coerce_bool(values: pd.Series, default: bool) -> pd.Series:
    return values.str.strip().str.lower().map(
        lambda token: _BOOL_TOKENS.get(token, default)
    ).astype(bool)


def _coerce_str(values: pd.Series, default: str) -> pd.Series:
    stripped = values.str.strip()
    return stripped.mask(stripped == "", default)


_COERCERS = {
    "int": _coerce_int,
    "float": _coerce_float,
    "bool": _coerce_bool,
    "str": _coerce_str,
}


def _count_defaulted(raw: pd.Series, kind: str) -> int:
    stripped = raw.str.strip()
    if kind == "str":
        return int((stripped == "").sum())
    if kind == "bool":
        return int((~stripped.str.lower().isin(_BOOL_TOKENS)).sum())
    if kind == "int":
        return len(raw) - len(_parse_int(raw))
    return int(pd.to_numeric(stripped, errors="coerce").isna().sum())


def coerce_records(raw: pd.DataFrame,
                   defaults: Optional[Mapping[str, Any]] = None) -> pd.DataFrame:
    """
    Coerce a table of raw values into typed record columns.

    Args:
        raw (pd.DataFrame): One column per field in RECORD_FIELDS.
            Cells may be strings, numbers, None or NaN.
        defaults (Mapping): Per-field overrides of the configured
            defaults.

    Returns:
        pd.DataFrame: Typed records with exactly RECORD_FIELDS as columns
    """
    defaults = dict(defaults or {})
    unknown = set(defaults) - set(RECORD_FIELDS)
    if unknown:
        raise ValueError(f"Unknown record fields in defaults: {sorted(unknown)}")

    raw = raw.reindex(columns=list(RECORD_FIELDS))
    raw = raw.astype(object).where(raw.notna(), "").astype(str)

    records = pd.DataFrame(index=pd.RangeIndex(len(raw)))
    for name, (kind, default) in FIELD_SPECS.items():
        default = defaults.get(name, default)
        column = raw[name].reset_index(drop=True)

        n_defaulted = _count_defaulted(column, kind)
        if n_defaulted:
            log.debug(f"  {name:<26}: {n_defaulted:,} values defaulted to {default!r}")

        records[name] = _COERCERS[kind](column, default)

    return records


def load_records(source,
                 defaults: Optional[Mapping[str, Any]] = None,
                 encoding: Optional[str] = None) -> pd.DataFrame:
    """
    Read shopping records from a CSV source.

    The first row is a header and is skipped. Columns map onto
    RECORD_FIELDS by position: extra trailing columns are dropped,
    missing trailing columns are filled with defaults. Rows with more
    fields than the header are skipped.

    Args:
        source: Path (str or Path), open text handle, or buffer
        defaults (Mapping): Per-field default overrides
        encoding (str): File encoding when source is a path

    Returns:
        pd.DataFrame: Typed record table

    Raises:
        FileNotFoundError: If source is a path that does not exist
    """
    if isinstance(source, (str, Path)):
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"Input not found: {path}")
        log.info(f"Loading {path.name} ...")
        source = path

    raw = pd.read_csv(
        source,
        dtype=str,
        keep_default_na=False,
        on_bad_lines="warn",
        encoding=encoding or PIPELINE_CONFIG["encoding"],
    )

    n_columns = raw.shape[1]
    if n_columns != len(RECORD_FIELDS):
        log.warning(
            f"  Expected {len(RECORD_FIELDS)} columns, found {n_columns}; "
            "mapping by position"
        )
    raw = raw.iloc[:, : len(RECORD_FIELDS)].copy()
    raw.columns = list(RECORD_FIELDS[: raw.shape[1]])

    records = coerce_records(raw, defaults=defaults)

    log.info(f"  Records  : {len(records):,}")
    log.info(f"  Items    : {records['item_purchased'].nunique():,} distinct")
    log.info(f"  Seasons  : {records['season'].nunique():,} distinct")
    return records


def records_from_rows(rows: Iterable[Mapping[str, Any]],
                      defaults: Optional[Mapping[str, Any]] = None) -> pd.DataFrame:
    """Typed record table from an in-memory sequence of field mappings."""
    rows = [dict(row) for row in rows]
    # object dtype keeps ints beside None from being upcast to "41.0"
    raw = pd.DataFrame(rows, columns=list(RECORD_FIELDS), dtype=object)
    return coerce_records(raw, defaults=defaults)

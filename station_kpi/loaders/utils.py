"""
Shared utilities for data ingestion: header detection, month normalisation,
numeric coercion.
"""

import logging
from typing import Any

import pandas as pd

logger = logging.getLogger(__name__)


def normalise_month(val: Any) -> str | None:
    """Convert an Excel serial number, datetime or date string to 'YYYY-MM'.

    Excel serial numbers use the 1899-12-30 epoch. Returns None for
    unparseable values.
    """
    if val is None:
        return None
    if isinstance(val, (int, float)):
        try:
            ts = pd.Timestamp("1899-12-30") + pd.Timedelta(days=int(val))
        except (ValueError, OverflowError):
            logger.warning("Could not convert serial number %s to month", val)
            return None
        return ts.strftime("%Y-%m")
    try:
        return pd.Timestamp(val).strftime("%Y-%m")
    except (ValueError, TypeError):
        logger.warning("Could not parse month value: %s", val)
        return None


def find_header_row(
    sheet,
    signature: set[str],
    max_rows: int = 20,
    min_matches: int = 2,
) -> int | None:
    """Scan an openpyxl sheet for the row containing signature strings.

    Returns the 1-based row index where at least min_matches cells match
    values in `signature` (case-insensitive), or None if not found within
    `max_rows`.
    """
    signature = {s.lower() for s in signature}
    for row_idx in range(1, max_rows + 1):
        matches = 0
        for cell in sheet[row_idx]:
            if cell.value is not None and str(cell.value).strip().lower() in signature:
                matches += 1
        if matches >= min_matches:
            return row_idx
    return None


def safe_float(val: Any) -> float | None:
    """Coerce a value to float, returning None for non-numeric values."""
    if val is None:
        return None
    if isinstance(val, str):
        # Skip formula strings and text labels
        val = val.strip()
        if val.startswith("=") or not val:
            return None
        # Handle percentage strings like "78%"
        if val.endswith("%"):
            try:
                return float(val[:-1])
            except ValueError:
                return None
        try:
            return float(val)
        except ValueError:
            return None
    try:
        return float(val)
    except (ValueError, TypeError):
        return None

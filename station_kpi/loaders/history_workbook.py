"""
Loader for recorded monthly metric values.

The source workbook holds one long-format table on its first sheet (or the
sheet named "history"):

    participant_id | metric_id | month | value

The header row may sit below a title block; it is located by scanning for the
column names. `month` cells may be dates, Excel serial numbers, or strings
such as "2026-05".
"""

import logging
from typing import Sequence

import openpyxl
import pandas as pd

from ..history import record_value
from ..models import Participant
from .utils import find_header_row, normalise_month, safe_float

logger = logging.getLogger(__name__)

_COLUMNS = ["participant_id", "metric_id", "month", "value"]


def load_history_workbook(path: str, sheet_name: str = "history") -> pd.DataFrame:
    """Load recorded metric values from Excel.

    Returns
    -------
    DataFrame with columns:
        participant_id, metric_id, month ('YYYY-MM'), value (float)

    Raises
    ------
    ValueError if no header row with the expected column names is found.
    """
    try:
        wb = openpyxl.load_workbook(path, data_only=True, read_only=False)
    except Exception:
        logger.exception("Failed to open history workbook: %s", path)
        raise

    if sheet_name not in wb.sheetnames:
        logger.warning("Sheet '%s' not found, using '%s'", sheet_name, wb.sheetnames[0])
        sheet_name = wb.sheetnames[0]
    ws = wb[sheet_name]

    header_row = find_header_row(ws, set(_COLUMNS), min_matches=len(_COLUMNS))
    if header_row is None:
        wb.close()
        raise ValueError(f"No header row with columns {_COLUMNS} found in {path}")

    col_map: dict[str, int] = {}
    for cell in ws[header_row]:
        if cell.value is None:
            continue
        label = str(cell.value).strip().lower()
        if label in _COLUMNS:
            col_map[label] = cell.column

    rows = []
    skipped = 0
    for row_idx in range(header_row + 1, ws.max_row + 1):
        participant_id = ws.cell(row=row_idx, column=col_map["participant_id"]).value
        metric_id = ws.cell(row=row_idx, column=col_map["metric_id"]).value
        if participant_id is None and metric_id is None:
            continue

        month = normalise_month(ws.cell(row=row_idx, column=col_map["month"]).value)
        value = safe_float(ws.cell(row=row_idx, column=col_map["value"]).value)
        if participant_id is None or metric_id is None or month is None or value is None:
            skipped += 1
            continue

        rows.append({
            "participant_id": str(participant_id).strip(),
            "metric_id": str(metric_id).strip(),
            "month": month,
            "value": value,
        })

    wb.close()

    if skipped:
        logger.warning("Skipped %d unparseable rows in %s", skipped, path)

    df = pd.DataFrame(rows, columns=_COLUMNS)
    df["value"] = pd.to_numeric(df["value"], errors="coerce")

    logger.info("Loaded %d history rows from %s", len(df), path)
    return df


def apply_history_frame(
    participants: Sequence[Participant],
    frame: pd.DataFrame,
) -> list[Participant]:
    """Fold loaded values into participants' histories, oldest month first.

    Each row is recorded with the append-or-overwrite month rule, dated the
    first day of its month. Rows for unknown participants or metrics are
    ignored.
    """
    if frame.empty:
        return list(participants)

    ordered = frame.sort_values("month", kind="stable")
    by_participant = {pid: group for pid, group in ordered.groupby("participant_id", sort=False)}

    updated = []
    for participant in participants:
        group = by_participant.get(participant.id)
        if group is None:
            updated.append(participant)
            continue

        values: dict[str, list[tuple[str, float]]] = {}
        for row in group.itertuples(index=False):
            values.setdefault(row.metric_id, []).append((row.month, float(row.value)))

        def _apply(metric):
            for month, value in values.get(metric.id, []):
                metric = record_value(metric, value, f"{month}-01")
            return metric

        updated.append(participant.map_metrics(_apply))

    known = {p.id for p in participants}
    unknown = set(by_participant) - known
    if unknown:
        logger.warning("Ignoring history for unknown participants: %s", sorted(unknown))

    return updated

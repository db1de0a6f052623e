"""Data ingestion loaders for recorded metric values."""

from .history_workbook import apply_history_frame, load_history_workbook

__all__ = [
    "load_history_workbook",
    "apply_history_frame",
]

"""
Monthly history handling: month keys, month synchronisation, and the
append-or-overwrite rule for recording new values.

A participant's current values are a pure function of (history, active month).
sync_to_month recomputes them from history every time the active month
changes; there is no separately stored "current" state to drift.
"""

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Iterable

from .config import HISTORY_MAX_LENGTH
from .models import HistorySample, Metric, Participant

logger = logging.getLogger(__name__)


def month_key(timestamp: str | date | datetime) -> str:
    """Return the 'YYYY-MM' month identifier of a timestamp."""
    if isinstance(timestamp, (date, datetime)):
        return timestamp.strftime("%Y-%m")
    return str(timestamp).strip()[:7]


def find_month_sample(metric: Metric, month: str) -> HistorySample | None:
    """Return the history sample recorded for month, or None."""
    for sample in metric.history:
        if sample.timestamp.startswith(month):
            return sample
    return None


def sync_metric_to_month(metric: Metric, month: str) -> Metric:
    sample = find_month_sample(metric, month)
    return metric.with_value(sample.value if sample is not None else 0)


def sync_to_month(participant: Participant, month: str) -> Participant:
    """Return a copy of participant with every current value set to month's sample.

    Metrics with no sample for the month read 0. History is carried over
    untouched, so applying this twice with the same month is a no-op.
    """
    return participant.map_metrics(lambda metric: sync_metric_to_month(metric, month))


def record_value(
    metric: Metric,
    value: float,
    timestamp: str | date | datetime,
    max_length: int = HISTORY_MAX_LENGTH,
) -> Metric:
    """Record value for the timestamp's month and make it the current value.

    A sample already present for the same month is replaced, never
    duplicated. History stays sorted by timestamp and keeps at most
    max_length samples, dropping the oldest first.

    A sample older than everything a full history keeps is not recorded, and
    the metric is returned unchanged.
    """
    if isinstance(timestamp, (date, datetime)):
        timestamp = timestamp.isoformat()
    month = month_key(timestamp)

    sample = HistorySample(timestamp=timestamp, value=value)
    kept = [s for s in metric.history if s.month != month]
    kept.append(sample)
    kept.sort(key=lambda s: s.timestamp)

    if len(kept) > max_length:
        kept = kept[-max_length:]
        if sample not in kept:
            logger.warning(
                "Not recording %s for '%s': older than the last %d months kept",
                month, metric.id, max_length,
            )
            return metric

    return replace(metric, current_value=value, history=tuple(kept))


def available_months(participants: Iterable[Participant]) -> list[str]:
    """Distinct 'YYYY-MM' months found in any history, newest first."""
    months: set[str] = set()
    for participant in participants:
        for _, metric in participant.iter_metrics():
            months.update(sample.month for sample in metric.history)
    return sorted(months, reverse=True)

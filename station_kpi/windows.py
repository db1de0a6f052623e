"""
Reporting-window aggregation: quarterly and yearly effective values.

Window values are averaged from a baseline metric's history. The baseline is
passed in explicitly (normally the participant as it was seeded) because the
monthly synchroniser overwrites current values, and averaging an already
synchronised copy would aggregate twice.
"""

import logging

from .config import ONE_DECIMAL_UNITS, WINDOW_SAMPLE_COUNTS
from .models import Metric, Participant, ReportingWindow

logger = logging.getLogger(__name__)


def aggregate_metric_value(metric: Metric, window: ReportingWindow) -> float:
    """Return a metric's effective value for a reporting window.

    Rules
    -----
    - monthly, or no history: current_value unchanged
    - quarterly: mean of the last 3 history samples
    - yearly: mean of the last 12 history samples
    - result rounded to 1 decimal for percentage/score/minutes units,
      2 decimals otherwise
    """
    window = ReportingWindow(window)
    if window is ReportingWindow.MONTHLY or not metric.history:
        return metric.current_value

    count = WINDOW_SAMPLE_COUNTS[window.value]
    window_slice = metric.history[-count:]
    if not window_slice:
        return metric.current_value

    average = sum(s.value for s in window_slice) / len(window_slice)
    digits = 1 if metric.unit in ONE_DECIMAL_UNITS else 2
    return round(average, digits)


def snapshot_for_window(
    participant: Participant,
    window: ReportingWindow,
    baseline: Participant | None = None,
) -> Participant:
    """Return participant with every current value replaced by its window value.

    Parameters
    ----------
    participant : Participant to display.
    window : Reporting window.
    baseline : Read-only seeded copy of the participant. Each metric is
               aggregated from the baseline metric with the same id; metrics
               missing from the baseline use the participant's own metric.
               None means the participant is its own baseline.

    Returns
    -------
    The participant itself for monthly, otherwise a new Participant.
    """
    window = ReportingWindow(window)
    if window is ReportingWindow.MONTHLY:
        return participant

    source = baseline if baseline is not None else participant
    baseline_metrics = {metric.id: metric for _, metric in source.iter_metrics()}

    def _aggregate(metric: Metric) -> Metric:
        reference = baseline_metrics.get(metric.id, metric)
        return metric.with_value(aggregate_metric_value(reference, window))

    return participant.map_metrics(_aggregate)

"""
Linear-regression forecasting for single metrics and the station composite.

Every forecast fits an ordinary least-squares line over x = 0..n-1 and
projects x = n. Series shorter than two points produce None ("not enough
data"), never 0.
"""

import logging
from typing import Sequence

import numpy as np

from .models import (
    ForecastPoint,
    HistorySample,
    Metric,
    Participant,
    RegressionLine,
    StationForecast,
)
from .scoring import participant_score, round_half_up

logger = logging.getLogger(__name__)


def linear_regression(values: Sequence[float]) -> RegressionLine | None:
    """Least-squares slope and intercept of values against their index.

    Returns None when fewer than two values are given.
    """
    n = len(values)
    if n < 2:
        return None

    x = np.arange(n, dtype=float)
    y = np.asarray(values, dtype=float)

    sum_x = x.sum()
    sum_y = y.sum()
    sum_xy = (x * y).sum()
    sum_xx = (x * x).sum()

    slope = (n * sum_xy - sum_x * sum_y) / (n * sum_xx - sum_x * sum_x)
    intercept = (sum_y - slope * sum_x) / n
    return RegressionLine(slope=float(slope), intercept=float(intercept))


def forecast_next(values: Sequence[float]) -> float | None:
    """Project the next point of a series, rounded to 2 decimals."""
    line = linear_regression(values)
    if line is None:
        return None
    return round(line.predict(len(values)), 2)


def forecast_metric(metric: Metric) -> float | None:
    """Forecast a metric's next monthly value from its history."""
    return forecast_next(metric.history_values())


def forecast_points(metric: Metric) -> list[ForecastPoint]:
    """Chart series: one point per history sample plus the projected point.

    The projected point is omitted when there is no forecast.
    """
    points = [
        ForecastPoint(index=i, value=sample.value)
        for i, sample in enumerate(metric.history)
    ]
    forecast = forecast_metric(metric)
    if forecast is not None:
        points.append(ForecastPoint(index=len(points), value=forecast, is_forecast=True))
    return points


def _snapshot_at_index(participant: Participant, index: int) -> Participant | None:
    """Participant with values taken from history[index], None if any is missing."""
    if any(index >= len(metric.history) for _, metric in participant.iter_metrics()):
        return None
    return participant.map_metrics(lambda m: m.with_value(m.history[index].value))


def station_score_history(participants: Sequence[Participant]) -> list[HistorySample]:
    """Station-wide composite score per shared history index.

    For each index, participants whose every metric has a sample at that
    index contribute their composite score; the step value is the rounded
    mean across contributors. Participants with categories but no metrics
    contribute a score of 0 at every step. Steps where no participant with
    metrics contributes are skipped. The step timestamp comes from the first
    such contributor's first metric.
    """
    scoreable = [p for p in participants if p.categories]
    lengths = [len(m.history) for p in scoreable for _, m in p.iter_metrics()]
    if not lengths:
        return []

    series: list[HistorySample] = []
    for index in range(max(lengths)):
        scores = []
        timestamp = None
        for participant in scoreable:
            snapshot = _snapshot_at_index(participant, index)
            if snapshot is None:
                continue
            scores.append(participant_score(snapshot))
            first = next(participant.iter_metrics(), None)
            if timestamp is None and first is not None:
                timestamp = first[1].history[index].timestamp

        if timestamp is not None:
            series.append(
                HistorySample(timestamp=timestamp, value=round_half_up(sum(scores) / len(scores)))
            )

    return series


def forecast_station(participants: Sequence[Participant]) -> StationForecast:
    """Station composite-score history and its projected next value."""
    if not participants:
        logger.warning("No participants given; station forecast unavailable")
        return StationForecast()

    history = station_score_history(participants)
    forecast = forecast_next([sample.value for sample in history])

    logger.info(
        "Built station score history with %d steps (forecast=%s)", len(history), forecast
    )
    return StationForecast(history=tuple(history), forecast=forecast)

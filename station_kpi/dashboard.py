"""
Dashboard-ready output functions.

These are the primary entry points for a front end. Each function returns
plain dicts or DataFrames suitable for rendering score cards, ranking tables,
alert lists, and forecast charts.
"""

import logging
from typing import Mapping, Sequence

import pandas as pd

from .competition import rank_participants
from .config import ALERT_THRESHOLD, AMBER_THRESHOLD, GREEN_THRESHOLD
from .forecast import forecast_station
from .models import Participant, ReportingWindow
from .scoring import category_score, metric_score, participant_score
from .windows import snapshot_for_window

logger = logging.getLogger(__name__)


def classify_score(score: float | None) -> str:
    """Return 'green', 'amber', 'red', or 'grey' for a missing score.

    green >= 90, amber >= 75, red otherwise.
    """
    if score is None or pd.isna(score):
        return "grey"
    if score >= GREEN_THRESHOLD:
        return "green"
    if score >= AMBER_THRESHOLD:
        return "amber"
    return "red"


def get_participant_overview(
    participant: Participant,
    window: ReportingWindow = ReportingWindow.MONTHLY,
    baseline: Participant | None = None,
) -> dict:
    """Single entry point a front end would call to populate one participant's cards.

    Returns
    -------
    Dict with structure:
    {
        "participant_id": "manager_1",
        "name": "...",
        "window": "quarterly",
        "overall": {"score": 88, "rag": "amber"},
        "categories": [
            {"id": ..., "name": ..., "weight": 40, "score": 92, "rag": "green",
             "metrics": [{"id": ..., "value": ..., "target": ..., "score": ..., "rag": ...}]},
        ],
    }
    """
    window = ReportingWindow(window)
    snapshot = snapshot_for_window(participant, window, baseline)
    overall = participant_score(snapshot)

    categories = []
    for category in snapshot.categories:
        score = category_score(category)
        metrics = []
        for metric in category.metrics:
            m_score = metric_score(metric)
            metrics.append({
                "id": metric.id,
                "name": metric.name,
                "value": metric.current_value,
                "target": metric.target,
                "unit": metric.unit,
                "score": m_score,
                "rag": classify_score(m_score),
            })
        categories.append({
            "id": category.id,
            "name": category.name,
            "weight": category.weight,
            "score": score,
            "rag": classify_score(score),
            "metrics": metrics,
        })

    return {
        "participant_id": participant.id,
        "name": participant.name,
        "window": window.value,
        "overall": {"score": overall, "rag": classify_score(overall)},
        "categories": categories,
    }


def get_score_table(
    participants: Sequence[Participant],
    window: ReportingWindow = ReportingWindow.MONTHLY,
    baselines: Mapping[str, Participant] | None = None,
) -> pd.DataFrame:
    """Executive rollup: one row per participant.

    Returns
    -------
    DataFrame with columns:
        participant_id, name, role, department, score, rag
    """
    columns = ["participant_id", "name", "role", "department", "score", "rag"]
    if not participants:
        logger.warning("No participants, returning empty score table")
        return pd.DataFrame(columns=columns)

    baselines = baselines or {}
    rows = []
    for participant in participants:
        snapshot = snapshot_for_window(participant, window, baselines.get(participant.id))
        score = participant_score(snapshot)
        rows.append({
            "participant_id": participant.id,
            "name": participant.name,
            "role": participant.role,
            "department": participant.department,
            "score": score,
            "rag": classify_score(score),
        })

    df = pd.DataFrame(rows, columns=columns)
    logger.info("Built score table with %d rows", len(df))
    return df


def get_competition_table(participants: Sequence[Participant], month: str) -> pd.DataFrame:
    """Ranking for a month's competition.

    Returns
    -------
    DataFrame with columns:
        rank, participant_id, name, score
    Unscoreable participants are absent.
    """
    ranking = rank_participants(participants, month)
    df = pd.DataFrame(
        [
            {"rank": i, "participant_id": r.participant_id, "name": r.name, "score": r.score}
            for i, r in enumerate(ranking, start=1)
        ],
        columns=["rank", "participant_id", "name", "score"],
    )
    return df


def get_station_forecast_summary(participants: Sequence[Participant]) -> dict:
    """Station composite-score series with the next-month projection.

    Returns
    -------
    Dict with structure:
    {
        "history": DataFrame(timestamp, score),
        "forecast": 91.5 or None,
        "latest": 90 or None,
    }
    """
    station = forecast_station(participants)
    history = pd.DataFrame(
        [{"timestamp": s.timestamp, "score": s.value} for s in station.history],
        columns=["timestamp", "score"],
    )
    latest = station.history[-1].value if station.history else None
    return {
        "history": history,
        "forecast": station.forecast,
        "latest": latest,
    }


def get_alerts(participants: Sequence[Participant], threshold: float = ALERT_THRESHOLD) -> list[dict]:
    """Metrics scoring below threshold, lowest score first."""
    alerts = []
    for participant in participants:
        for _, metric in participant.iter_metrics():
            score = metric_score(metric)
            if score < threshold:
                alerts.append({
                    "id": f"alert_{participant.id}_{metric.id}",
                    "participant_id": participant.id,
                    "participant_name": participant.name,
                    "metric_id": metric.id,
                    "metric_name": metric.name,
                    "score": score,
                })

    alerts.sort(key=lambda a: a["score"])
    logger.info("Raised %d alerts below score %s", len(alerts), threshold)
    return alerts


def peer_average(
    participants: Sequence[Participant],
    participant_id: str,
    metric_id: str,
) -> float | None:
    """Mean current value of metric_id across other participants of the same role.

    Returns None if the participant is unknown or no peer tracks the metric.
    """
    target = next((p for p in participants if p.id == participant_id), None)
    if target is None:
        return None

    values = [
        metric.current_value
        for peer in participants
        if peer.id != participant_id and peer.role == target.role
        for _, metric in peer.iter_metrics()
        if metric.id == metric_id
    ]
    if not values:
        return None
    return sum(values) / len(values)

"""
Participant construction from role templates.

Builds the immutable Category/Metric structure a new participant starts with,
combining ROLE_TEMPLATES (weights, membership, seed values) with
METRIC_REGISTRY (names, targets, units, polarity).
"""

import logging
from typing import Mapping, Sequence

from .config import METRIC_REGISTRY, ROLE_TEMPLATES, ROLES
from .models import Category, HistorySample, Metric, Participant

logger = logging.getLogger(__name__)


def build_metric(
    metric_id: str,
    seed_value: float,
    history: Sequence[HistorySample] = (),
) -> Metric:
    """Instantiate a registered metric.

    The current value is the last history sample when history is given,
    otherwise the seed value.
    """
    registry = METRIC_REGISTRY[metric_id]
    history = tuple(sorted(history, key=lambda s: s.timestamp))
    current = history[-1].value if history else seed_value
    return Metric(
        id=metric_id,
        name=registry["name"],
        current_value=current,
        target=registry["target"],
        lower_is_better=registry["lower_is_better"],
        unit=registry["unit"],
        history=history,
    )


def build_participant(
    participant_id: str,
    name: str,
    role: str,
    department: str = "",
    histories: Mapping[str, Sequence[HistorySample]] | None = None,
) -> Participant:
    """Create a participant with the categories of role's template.

    Parameters
    ----------
    participant_id : Unique participant id.
    name : Display name.
    role : Key of ROLE_TEMPLATES (e.g. "RAMP").
    department : Free-text department label.
    histories : Optional metric id -> history samples. Metrics appearing in
                several categories share the same history.

    Raises
    ------
    KeyError if role is not a known template.
    """
    if role not in ROLE_TEMPLATES:
        raise KeyError(f"Unknown role '{role}'. Expected one of {sorted(ROLES)}")

    histories = histories or {}
    categories = []
    for entry in ROLE_TEMPLATES[role]:
        metrics = tuple(
            build_metric(metric_id, seed, histories.get(metric_id, ()))
            for metric_id, seed in entry["metrics"]
        )
        categories.append(
            Category(id=entry["id"], name=entry["name"], weight=entry["weight"], metrics=metrics)
        )

    return Participant(
        id=participant_id,
        name=name,
        categories=tuple(categories),
        role=role,
        department=department,
    )


def template_seed_values(role: str) -> dict[str, float]:
    """Metric id -> seed value for every metric in role's template."""
    seeds: dict[str, float] = {}
    for entry in ROLE_TEMPLATES[role]:
        for metric_id, seed in entry["metrics"]:
            seeds.setdefault(metric_id, seed)
    return seeds

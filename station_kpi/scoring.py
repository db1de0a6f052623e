"""
Score computation functions — pure functions with no side effects.

Provides the metric score calculator, the unweighted category average, and
the weight-biased participant composite.
"""

import logging
import math
from typing import Iterable

from .config import (
    SCORE_CEILING,
    SCORE_FLOOR,
    ZERO_TARGET_BONUS_SCORE,
    ZERO_TARGET_FAIL_SCORE,
    ZERO_TARGET_NEUTRAL_SCORE,
)
from .models import Category, Metric, Participant

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 always rounding up (87.5 -> 88)."""
    return int(math.floor(value + 0.5))


def metric_score_for_value(metric: Metric, value: float) -> int:
    """Score an arbitrary value against a metric's target and polarity.

    Logic
    -----
    - target == 0:
        lower_is_better   125 if value == 0, else 0
        higher_is_better  125 if value > 0, else 100
    - otherwise:
        lower_is_better   (2 - value / target) * 100
        higher_is_better  (value / target) * 100
      clamped to [0, 150] and rounded.
    """
    target = metric.target
    if target == 0:
        if metric.lower_is_better:
            return ZERO_TARGET_BONUS_SCORE if value == 0 else ZERO_TARGET_FAIL_SCORE
        return ZERO_TARGET_BONUS_SCORE if value > 0 else ZERO_TARGET_NEUTRAL_SCORE

    if metric.lower_is_better:
        raw = (2 - value / target) * 100
    else:
        raw = (value / target) * 100

    return round_half_up(max(SCORE_FLOOR, min(raw, SCORE_CEILING)))


def metric_score(metric: Metric) -> int:
    """Return the 0-150 score of a metric's current value (100 = on target)."""
    return metric_score_for_value(metric, metric.current_value)


def category_score(category: Category) -> int:
    """Unweighted mean of metric scores, 0 for a category with no metrics."""
    if not category.metrics:
        return 0
    scores = [metric_score(metric) for metric in category.metrics]
    return round_half_up(sum(scores) / len(scores))


def overall_score(categories: Iterable[Category]) -> int:
    """Weight-biased sum of category scores.

    Each category contributes category_score * weight / 100. Weights that do
    not total 100 skew the result; nothing here clamps or rejects them (see
    weights_are_balanced for the caller-side check).
    """
    categories = list(categories)
    if not categories:
        return 0
    total = sum(category_score(c) * (c.weight / 100) for c in categories)
    return round_half_up(total)


def participant_score(participant: Participant) -> int:
    return overall_score(participant.categories)


def weights_total(categories: Iterable[Category]) -> float:
    return sum(c.weight for c in categories)


def weights_are_balanced(categories: Iterable[Category], tolerance: float = 1e-9) -> bool:
    """True when category weights sum to 100 (within tolerance)."""
    total = weights_total(categories)
    balanced = abs(total - 100) <= tolerance
    if not balanced:
        logger.warning("Category weights sum to %.2f, expected 100", total)
    return balanced

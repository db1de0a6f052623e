"""
Monthly competition: per-month composite scores and participant ranking.

Scoring for a month is all-or-nothing. A participant with any metric lacking
a sample for the month is unscoreable (None) and drops out of the ranking
rather than being scored at zero.
"""

import logging
from typing import Sequence

from .history import find_month_sample, sync_to_month
from .models import CompetitionResult, Participant
from .scoring import participant_score

logger = logging.getLogger(__name__)


def snapshot_for_month(participant: Participant, month: str) -> Participant | None:
    """Return participant with every value fixed to month's sample.

    Returns None if any metric in any category has no sample for month.
    """
    for _, metric in participant.iter_metrics():
        if find_month_sample(metric, month) is None:
            return None
    # Every metric has a sample, so the month sync never falls back to 0.
    return sync_to_month(participant, month)


def score_for_month(participant: Participant, month: str) -> int | None:
    """Composite score computed strictly from month's samples, or None."""
    snapshot = snapshot_for_month(participant, month)
    if snapshot is None:
        return None
    return participant_score(snapshot)


def rank_participants(participants: Sequence[Participant], month: str) -> list[CompetitionResult]:
    """Rank scoreable participants for month, best first.

    Ties are broken by participant id ascending, so the ranking does not
    depend on the order participants are passed in.
    """
    results = []
    for participant in participants:
        score = score_for_month(participant, month)
        if score is None:
            logger.debug("Participant %s unscoreable for %s", participant.id, month)
            continue
        results.append(CompetitionResult(participant.id, participant.name, score))

    results.sort(key=lambda r: (-r.score, r.participant_id))

    if not results:
        logger.warning("No participant has complete data for %s", month)
    else:
        logger.info("Built competition ranking for %s with %d entries", month, len(results))
    return results


def winner_snapshot(
    participants: Sequence[Participant],
    month: str,
) -> tuple[CompetitionResult, Participant] | None:
    """First-ranked result and its month snapshot, or None if nobody qualifies."""
    ranking = rank_participants(participants, month)
    if not ranking:
        return None
    winner = ranking[0]
    for participant in participants:
        if participant.id == winner.participant_id:
            return winner, snapshot_for_month(participant, month)
    return None

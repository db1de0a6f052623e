"""
Dashboard state transitions.

The dashboard state is an immutable DashboardState; every user action is a
small frozen dataclass, and reduce(state, action) returns the next state. The
scoring, window and history functions are called from here as stateless
helpers.

Baselines are the participants exactly as they were created (seeded history
included). They are captured once and never synchronised, so quarterly and
yearly windows always aggregate untouched history.
"""

import logging
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping, Sequence

import numpy as np

from .history import available_months, record_value, sync_to_month
from .models import Participant, ReportingWindow
from .simulator import generate_participant
from .templates import build_participant
from .windows import snapshot_for_window

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardState:
    participants: tuple[Participant, ...] = ()
    baselines: Mapping[str, Participant] = field(default_factory=lambda: MappingProxyType({}))
    selected_participant_id: str | None = None
    active_month: str | None = None
    reporting_window: ReportingWindow = ReportingWindow.MONTHLY

    def get_participant(self, participant_id: str | None) -> Participant | None:
        for participant in self.participants:
            if participant.id == participant_id:
                return participant
        return None

    @property
    def selected_participant(self) -> Participant | None:
        return self.get_participant(self.selected_participant_id)

    def participant_for_display(self, participant_id: str) -> Participant | None:
        """Participant as shown under the current reporting window."""
        participant = self.get_participant(participant_id)
        if participant is None:
            return None
        return snapshot_for_window(
            participant, self.reporting_window, self.baselines.get(participant_id)
        )


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class SelectParticipant:
    participant_id: str


@dataclass(frozen=True)
class SetActiveMonth:
    month: str  # 'YYYY-MM'


@dataclass(frozen=True)
class SetReportingWindow:
    window: ReportingWindow


@dataclass(frozen=True)
class AddParticipant:
    """Add a participant from role's template, seeded with simulated history.

    History ends at end_month, falling back to the active month and then the
    newest month on record. With none of these the participant starts with
    seed values and no history.
    """
    participant_id: str
    name: str
    role: str
    department: str = ""
    end_month: str | None = None
    seed: int | None = None


@dataclass(frozen=True)
class DeleteParticipant:
    participant_id: str


@dataclass(frozen=True)
class RecordMetricValue:
    category_id: str
    metric_id: str
    value: float
    timestamp: str  # ISO date or datetime, supplied by the caller


@dataclass(frozen=True)
class UpdateMetricTarget:
    metric_id: str
    target: float


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _freeze(baselines: Mapping[str, Participant]) -> Mapping[str, Participant]:
    return MappingProxyType(dict(baselines))


def _replace_participant(
    participants: tuple[Participant, ...],
    updated: Participant,
) -> tuple[Participant, ...]:
    return tuple(updated if p.id == updated.id else p for p in participants)


def _sync_selected(state: DashboardState) -> DashboardState:
    """Recompute the selected participant's current values for the active month."""
    participant = state.selected_participant
    if participant is None or state.active_month is None:
        return state
    synced = sync_to_month(participant, state.active_month)
    return replace(state, participants=_replace_participant(state.participants, synced))


def _participant_from_template(state: DashboardState, action: AddParticipant) -> Participant:
    end_month = action.end_month or state.active_month
    if end_month is None:
        months = available_months(state.participants)
        end_month = months[0] if months else None
    if end_month is None:
        return build_participant(
            action.participant_id, action.name, action.role, action.department
        )
    rng = np.random.default_rng(action.seed) if action.seed is not None else None
    return generate_participant(
        action.participant_id,
        action.name,
        action.role,
        action.department,
        end_month=end_month,
        rng=rng,
    )


def initial_state(
    participants: Sequence[Participant],
    active_month: str | None = None,
    reporting_window: ReportingWindow = ReportingWindow.MONTHLY,
) -> DashboardState:
    """Build the starting state, capturing each participant as its baseline.

    The first participant is selected and synchronised to active_month.
    """
    participants = tuple(participants)
    state = DashboardState(
        participants=participants,
        baselines=_freeze({p.id: p for p in participants}),
        selected_participant_id=participants[0].id if participants else None,
        active_month=active_month,
        reporting_window=ReportingWindow(reporting_window),
    )
    return _sync_selected(state)


# ---------------------------------------------------------------------------
# Reducer
# ---------------------------------------------------------------------------
def reduce(state: DashboardState, action) -> DashboardState:
    """Return the state that results from applying action to state.

    Unknown participants, metrics and action types leave the state unchanged.
    """
    if isinstance(action, SelectParticipant):
        if state.get_participant(action.participant_id) is None:
            logger.warning("Cannot select unknown participant '%s'", action.participant_id)
            return state
        return _sync_selected(replace(state, selected_participant_id=action.participant_id))

    if isinstance(action, SetActiveMonth):
        return _sync_selected(replace(state, active_month=action.month))

    if isinstance(action, SetReportingWindow):
        return replace(state, reporting_window=ReportingWindow(action.window))

    if isinstance(action, AddParticipant):
        if state.get_participant(action.participant_id) is not None:
            logger.warning("Participant '%s' already exists", action.participant_id)
            return state
        participant = _participant_from_template(state, action)
        baselines = dict(state.baselines)
        baselines[participant.id] = participant
        new_state = replace(
            state,
            participants=state.participants + (participant,),
            baselines=_freeze(baselines),
            selected_participant_id=participant.id,
        )
        logger.info("Added participant '%s' with role %s", participant.id, action.role)
        return _sync_selected(new_state)

    if isinstance(action, DeleteParticipant):
        remaining = tuple(p for p in state.participants if p.id != action.participant_id)
        if len(remaining) == len(state.participants):
            logger.warning("Cannot delete unknown participant '%s'", action.participant_id)
            return state
        baselines = {k: v for k, v in state.baselines.items() if k != action.participant_id}
        selected = state.selected_participant_id
        if selected == action.participant_id:
            selected = remaining[0].id if remaining else None
        new_state = replace(
            state,
            participants=remaining,
            baselines=_freeze(baselines),
            selected_participant_id=selected,
        )
        return _sync_selected(new_state)

    if isinstance(action, RecordMetricValue):
        return _record_metric_value(state, action)

    if isinstance(action, UpdateMetricTarget):
        def _retarget(metric):
            if metric.id != action.metric_id:
                return metric
            return replace(metric, target=action.target)

        return replace(
            state,
            participants=tuple(p.map_metrics(_retarget) for p in state.participants),
        )

    logger.warning("Ignoring unknown action %r", action)
    return state


def _record_metric_value(state: DashboardState, action: RecordMetricValue) -> DashboardState:
    participant = state.selected_participant
    if participant is None:
        logger.warning("No participant selected; value for '%s' not recorded", action.metric_id)
        return state

    timestamp = action.timestamp
    found = False
    categories = []
    for category in participant.categories:
        if category.id != action.category_id:
            categories.append(category)
            continue
        metrics = []
        for metric in category.metrics:
            if metric.id == action.metric_id:
                metric = record_value(metric, action.value, timestamp)
                found = True
            metrics.append(metric)
        categories.append(replace(category, metrics=tuple(metrics)))

    if not found:
        logger.warning(
            "Metric '%s' not found in category '%s' of participant '%s'",
            action.metric_id, action.category_id, participant.id,
        )
        return state

    updated = replace(participant, categories=tuple(categories))
    return replace(state, participants=_replace_participant(state.participants, updated))

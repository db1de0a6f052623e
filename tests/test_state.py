"""Tests for dashboard state transitions."""

import logging

from conftest import make_metric
from station_kpi.config import ROLE_TEMPLATES
from station_kpi.history import find_month_sample
from station_kpi.models import ReportingWindow
from station_kpi.state import (
    AddParticipant,
    DeleteParticipant,
    RecordMetricValue,
    SelectParticipant,
    SetActiveMonth,
    SetReportingWindow,
    UpdateMetricTarget,
    initial_state,
    reduce,
)


def _roster(make_participant):
    first = make_participant("p1", make_metric("x", value=1, history={"2026-08": 80, "2026-09": 90}))
    second = make_participant("p2", make_metric("x", value=2, history={"2026-08": 70, "2026-09": 60}))
    return [first, second]


class TestInitialState:

    def test_selects_and_syncs_first(self, make_participant):
        state = initial_state(_roster(make_participant), active_month="2026-09")
        assert state.selected_participant_id == "p1"
        assert state.selected_participant.find_metric("x").current_value == 90
        # other participants are left as they are
        assert state.get_participant("p2").find_metric("x").current_value == 2

    def test_baselines_captured(self, make_participant):
        roster = _roster(make_participant)
        state = initial_state(roster, active_month="2026-09")
        assert state.baselines["p1"] is roster[0]
        assert set(state.baselines) == {"p1", "p2"}

    def test_empty(self):
        state = initial_state([])
        assert state.selected_participant is None


class TestSelectionAndMonth:

    def test_select_syncs_new_participant(self, make_participant):
        state = initial_state(_roster(make_participant), active_month="2026-08")
        state = reduce(state, SelectParticipant("p2"))
        assert state.selected_participant_id == "p2"
        assert state.selected_participant.find_metric("x").current_value == 70

    def test_select_unknown_is_noop(self, make_participant, caplog):
        state = initial_state(_roster(make_participant), active_month="2026-08")
        with caplog.at_level(logging.WARNING):
            assert reduce(state, SelectParticipant("nobody")) is state
        assert "nobody" in caplog.text

    def test_month_change_resyncs_selected_only(self, make_participant):
        state = initial_state(_roster(make_participant), active_month="2026-08")
        state = reduce(state, SetActiveMonth("2026-09"))
        assert state.active_month == "2026-09"
        assert state.selected_participant.find_metric("x").current_value == 90
        assert state.get_participant("p2").find_metric("x").current_value == 2

    def test_month_without_samples_reads_zero(self, make_participant):
        state = initial_state(_roster(make_participant), active_month="2026-08")
        state = reduce(state, SetActiveMonth("2025-01"))
        assert state.selected_participant.find_metric("x").current_value == 0

    def test_month_change_keeps_baseline(self, make_participant):
        roster = _roster(make_participant)
        state = initial_state(roster, active_month="2026-08")
        state = reduce(state, SetActiveMonth("2026-09"))
        assert state.baselines["p1"] is roster[0]


class TestReportingWindow:

    def test_window_display_uses_baseline(self, make_participant):
        state = initial_state(_roster(make_participant), active_month="2026-08")
        state = reduce(state, SetReportingWindow(ReportingWindow.QUARTERLY))
        displayed = state.participant_for_display("p1")
        assert displayed.find_metric("x").current_value == 85.0
        # stored state is not aggregated
        assert state.selected_participant.find_metric("x").current_value == 80

    def test_accepts_string(self, make_participant):
        state = initial_state(_roster(make_participant))
        state = reduce(state, SetReportingWindow("yearly"))
        assert state.reporting_window is ReportingWindow.YEARLY

    def test_display_unknown(self, make_participant):
        assert initial_state(_roster(make_participant)).participant_for_display("zz") is None


class TestAddDelete:

    def test_add_from_template(self, make_participant):
        state = initial_state(_roster(make_participant), active_month="2026-09")
        state = reduce(state, AddParticipant("p3", "Gamma", "RAMP", "Ramp Ops"))
        added = state.get_participant("p3")
        assert state.selected_participant_id == "p3"
        assert [c.id for c in added.categories] == [c["id"] for c in ROLE_TEMPLATES["RAMP"]]
        assert state.baselines["p3"].id == "p3"
        for _, metric in added.iter_metrics():
            assert len(metric.history) == 12
            assert metric.history[-1].month == "2026-09"
            assert metric.current_value == find_month_sample(metric, "2026-09").value

    def test_add_history_ends_at_requested_month(self, make_participant):
        state = initial_state(_roster(make_participant), active_month="2026-09")
        state = reduce(state, AddParticipant("p3", "Gamma", "SAFETY", end_month="2026-06", seed=5))
        added = state.get_participant("p3")
        assert all(m.history[-1].month == "2026-06" for _, m in added.iter_metrics())
        # active month lies past the seeded history
        assert all(m.current_value == 0 for _, m in added.iter_metrics())

    def test_add_with_seed_is_reproducible(self, make_participant):
        state = initial_state(_roster(make_participant), active_month="2026-09")
        action = AddParticipant("p3", "Gamma", "TECHNICAL", seed=11)
        assert reduce(state, action).get_participant("p3") == reduce(state, action).get_participant("p3")

    def test_add_without_any_month_uses_seed_values(self):
        state = reduce(initial_state([]), AddParticipant("p1", "Alpha", "SUPPORT"))
        metric = state.get_participant("p1").find_metric("roster_efficiency")
        assert metric.history == ()
        assert metric.current_value == 95

    def test_add_duplicate_is_noop(self, make_participant):
        state = initial_state(_roster(make_participant))
        assert reduce(state, AddParticipant("p1", "Again", "RAMP")) is state

    def test_delete_selected_reselects_first(self, make_participant):
        state = initial_state(_roster(make_participant), active_month="2026-09")
        state = reduce(state, DeleteParticipant("p1"))
        assert [p.id for p in state.participants] == ["p2"]
        assert state.selected_participant_id == "p2"
        assert "p1" not in state.baselines
        assert state.selected_participant.find_metric("x").current_value == 60

    def test_delete_other_keeps_selection(self, make_participant):
        state = initial_state(_roster(make_participant))
        state = reduce(state, DeleteParticipant("p2"))
        assert state.selected_participant_id == "p1"

    def test_delete_last(self, make_participant):
        state = initial_state(_roster(make_participant)[:1])
        state = reduce(state, DeleteParticipant("p1"))
        assert state.participants == ()
        assert state.selected_participant_id is None

    def test_delete_unknown_is_noop(self, make_participant):
        state = initial_state(_roster(make_participant))
        assert reduce(state, DeleteParticipant("zz")) is state


class TestMetricUpdates:

    def test_record_value_overwrites_month(self, make_participant):
        state = initial_state(_roster(make_participant), active_month="2026-09")
        state = reduce(state, RecordMetricValue("core", "x", 99, "2026-09-20T12:00:00"))
        metric = state.selected_participant.find_metric("x")
        assert metric.current_value == 99
        assert len(metric.history) == 2
        assert find_month_sample(metric, "2026-09").value == 99
        # baseline history is untouched
        assert find_month_sample(state.baselines["p1"].find_metric("x"), "2026-09").value == 90

    def test_record_value_is_deterministic(self, make_participant):
        state = initial_state(_roster(make_participant), active_month="2026-09")
        action = RecordMetricValue("core", "x", 5, "2026-10-02")
        assert reduce(state, action).participants == reduce(state, action).participants
        metric = reduce(state, action).selected_participant.find_metric("x")
        assert metric.history[-1].timestamp == "2026-10-02"

    def test_record_unknown_metric_is_noop(self, make_participant):
        state = initial_state(_roster(make_participant))
        assert reduce(state, RecordMetricValue("core", "nope", 5, "2026-09-01")) is state
        assert reduce(state, RecordMetricValue("other", "x", 5, "2026-09-01")) is state

    def test_update_target_applies_to_all(self, make_participant):
        state = initial_state(_roster(make_participant))
        state = reduce(state, UpdateMetricTarget("x", 50))
        assert all(p.find_metric("x").target == 50 for p in state.participants)

    def test_unknown_action_is_noop(self, make_participant):
        state = initial_state(_roster(make_participant))
        assert reduce(state, object()) is state

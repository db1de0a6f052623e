"""Tests for dashboard-ready outputs."""

import math

import pytest

from conftest import make_metric
from station_kpi.dashboard import (
    classify_score,
    get_alerts,
    get_competition_table,
    get_participant_overview,
    get_score_table,
    get_station_forecast_summary,
    peer_average,
)
from station_kpi.models import ReportingWindow


@pytest.mark.parametrize(
    "score, band",
    [(150, "green"), (90, "green"), (89, "amber"), (75, "amber"), (74, "red"), (0, "red")],
)
def test_classify_score(score, band):
    assert classify_score(score) == band


def test_classify_missing_score():
    assert classify_score(None) == "grey"
    assert classify_score(math.nan) == "grey"


class TestParticipantOverview:

    def test_monthly(self, two_month_participant):
        overview = get_participant_overview(two_month_participant)
        assert overview["window"] == "monthly"
        assert overview["overall"] == {"score": 112, "rag": "green"}
        speed = overview["categories"][0]
        assert speed["score"] == 98
        assert [m["score"] for m in speed["metrics"]] == [95, 100]

    def test_quarterly(self, two_month_participant):
        overview = get_participant_overview(two_month_participant, ReportingWindow.QUARTERLY)
        # otp 95 -> 95, turnaround 42/40 -> 95, spills 0.5 against target 0 -> 0
        assert overview["categories"][0]["score"] == 95
        assert overview["categories"][1]["score"] == 0
        assert overview["overall"] == {"score": 48, "rag": "red"}


class TestScoreTable:

    def test_rows(self, two_month_participant, make_participant):
        other = make_participant("p2", make_metric("x", value=80, target=100), name="Beta")
        table = get_score_table([two_month_participant, other])
        assert list(table["participant_id"]) == ["p1", "p2"]
        assert list(table["score"]) == [112, 80]
        assert list(table["rag"]) == ["green", "amber"]

    def test_empty(self):
        table = get_score_table([])
        assert table.empty
        assert "score" in table.columns


class TestCompetitionTable:

    def test_ranks(self, make_participant):
        participants = [
            make_participant("a", make_metric("x", target=100, history={"2026-05": 90})),
            make_participant("b", make_metric("x", target=100, history={"2026-05": 110})),
            make_participant("c", make_metric("x", target=100, history={"2026-04": 130})),
        ]
        table = get_competition_table(participants, "2026-05")
        assert list(table["rank"]) == [1, 2]
        assert list(table["participant_id"]) == ["b", "a"]

    def test_empty(self, make_participant):
        table = get_competition_table([], "2026-05")
        assert table.empty
        assert list(table.columns) == ["rank", "participant_id", "name", "score"]


class TestStationForecastSummary:

    def test_summary(self, make_participant):
        alpha = make_participant(
            "a", make_metric("x", target=100, history={"2026-01": 80, "2026-02": 90})
        )
        summary = get_station_forecast_summary([alpha])
        assert list(summary["history"]["score"]) == [80, 90]
        assert summary["latest"] == 90
        assert summary["forecast"] == 100

    def test_not_enough_data(self):
        summary = get_station_forecast_summary([])
        assert summary["history"].empty
        assert summary["latest"] is None
        assert summary["forecast"] is None


def test_alerts_sorted_lowest_first(two_month_participant, make_participant):
    weak = make_participant("p2", make_metric("x", value=50, target=100))
    alerts = get_alerts([two_month_participant, weak])
    assert [(a["participant_id"], a["metric_id"], a["score"]) for a in alerts] == [("p2", "x", 50)]
    assert alerts[0]["id"] == "alert_p2_x"


def test_alerts_threshold(two_month_participant):
    alerts = get_alerts([two_month_participant], threshold=100)
    assert [a["metric_id"] for a in alerts] == ["otp"]


class TestPeerAverage:

    def test_same_role_only(self, make_participant):
        target = make_participant("t", make_metric("x", value=1), role="RAMP")
        peer_a = make_participant("a", make_metric("x", value=10), role="RAMP")
        peer_b = make_participant("b", make_metric("x", value=20), role="RAMP")
        other_role = make_participant("c", make_metric("x", value=1000), role="SAFETY")
        assert peer_average([target, peer_a, peer_b, other_role], "t", "x") == 15

    def test_no_peers(self, make_participant):
        target = make_participant("t", make_metric("x", value=1), role="RAMP")
        assert peer_average([target], "t", "x") is None
        assert peer_average([target], "missing", "x") is None

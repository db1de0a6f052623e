"""Shared fixtures for the station KPI tests."""

import pytest

from station_kpi.models import Category, HistorySample, Metric, Participant


def make_metric(
    metric_id: str = "m",
    value: float = 0,
    target: float = 100,
    lower_is_better: bool = False,
    unit: str = "percentage",
    history: dict[str, float] | None = None,
) -> Metric:
    """Metric with history given as {'YYYY-MM': value}."""
    samples = tuple(
        HistorySample(timestamp=f"{month}-01T00:00:00", value=v)
        for month, v in sorted((history or {}).items())
    )
    return Metric(
        id=metric_id,
        name=metric_id.replace("_", " ").title(),
        current_value=value,
        target=target,
        lower_is_better=lower_is_better,
        unit=unit,
        history=samples,
    )


@pytest.fixture
def two_month_participant() -> Participant:
    """Participant with two 50/50 categories and samples for 2026-08 and 2026-09."""
    speed = Category(
        id="speed",
        name="Speed",
        weight=50,
        metrics=(
            make_metric("otp", value=95, target=100, history={"2026-08": 90, "2026-09": 100}),
            make_metric(
                "turnaround", value=40, target=40, lower_is_better=True, unit="minutes",
                history={"2026-08": 44, "2026-09": 40},
            ),
        ),
    )
    safety = Category(
        id="safety",
        name="Safety",
        weight=50,
        metrics=(
            make_metric(
                "spills", value=0, target=0, lower_is_better=True, unit="incidents",
                history={"2026-08": 1, "2026-09": 0},
            ),
        ),
    )
    return Participant(id="p1", name="Alpha", categories=(speed, safety), role="RAMP")


@pytest.fixture
def make_participant():
    """Factory: participant with one 100%-weight category of given metrics."""

    def _make(participant_id: str, *metrics: Metric, name: str | None = None, role: str = "RAMP"):
        category = Category(id="core", name="Core", weight=100, metrics=tuple(metrics))
        return Participant(
            id=participant_id,
            name=name or participant_id.title(),
            categories=(category,),
            role=role,
        )

    return _make

"""
Station KPI — End-to-end scoring pipeline.

Generates (or loads) participant history, runs every engine stage, and prints
smoke-test summaries.

Usage:
    python main.py
    python main.py path/to/metric_history.xlsx
"""

import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent))

from station_kpi.competition import winner_snapshot
from station_kpi.config import HISTORY_WORKBOOK_FILE, STATION_NAME
from station_kpi.dashboard import (
    get_alerts,
    get_competition_table,
    get_participant_overview,
    get_score_table,
    get_station_forecast_summary,
)
from station_kpi.forecast import forecast_metric
from station_kpi.history import available_months
from station_kpi.loaders import apply_history_frame, load_history_workbook
from station_kpi.models import ReportingWindow
from station_kpi.scoring import weights_are_balanced
from station_kpi.simulator import generate_participants
from station_kpi.state import SetActiveMonth, SetReportingWindow, initial_state, reduce

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def main(workbook_path: str | None = None) -> None:
    """Run the full scoring pipeline and print smoke-test outputs."""

    print("=" * 70)
    print(f"  {STATION_NAME.upper()} — Performance Scoring Engine")
    print("  Pipeline Smoke Test")
    print("=" * 70)
    print()

    # ------------------------------------------------------------------
    # 1. Participants
    # ------------------------------------------------------------------
    print("[ 1 ] PARTICIPANTS")
    print("-" * 40)

    participants = generate_participants(seed=42)
    if workbook_path is None and HISTORY_WORKBOOK_FILE.exists():
        workbook_path = str(HISTORY_WORKBOOK_FILE)
    if workbook_path:
        frame = load_history_workbook(workbook_path)
        participants = apply_history_frame(participants, frame)
        print(f"\nApplied {len(frame)} recorded values from {workbook_path}")

    for p in participants:
        balanced = weights_are_balanced(p.categories)
        print(f"  {p.id:10s} | {p.role:10s} | {p.name:18s} | weights ok: {balanced}")

    months = available_months(participants)
    print(f"\nAvailable months: {months}")

    # ------------------------------------------------------------------
    # 2. State transitions
    # ------------------------------------------------------------------
    print("\n")
    print("[ 2 ] STATE TRANSITIONS")
    print("-" * 40)

    state = initial_state(participants, active_month=months[0] if months else None)
    selected = state.selected_participant
    print(f"\nSelected: {selected.name if selected else None}, active month: {state.active_month}")

    if len(months) > 1:
        state = reduce(state, SetActiveMonth(months[1]))
        print(f"Switched active month to {state.active_month}")

    for window in ReportingWindow:
        windowed = reduce(state, SetReportingWindow(window))
        overview = get_participant_overview(
            windowed.selected_participant,
            windowed.reporting_window,
            windowed.baselines.get(windowed.selected_participant_id),
        )
        print(f"  {window.value:10s} overall: {overview['overall']}")

    # ------------------------------------------------------------------
    # 3. Dashboard outputs
    # ------------------------------------------------------------------
    print("\n")
    print("[ 3 ] DASHBOARD OUTPUTS")
    print("-" * 40)

    print("\nScore table (quarterly):")
    table = get_score_table(participants, ReportingWindow.QUARTERLY, state.baselines)
    print(table.to_string(index=False))

    alerts = get_alerts(participants)
    print(f"\nAlerts: {len(alerts)} metrics below threshold")
    for alert in alerts[:5]:
        print(f"  {alert['participant_name']:18s} | {alert['metric_name']:30s} | {alert['score']}")

    # ------------------------------------------------------------------
    # 4. Forecasts
    # ------------------------------------------------------------------
    print("\n")
    print("[ 4 ] FORECASTS")
    print("-" * 40)

    first = participants[0]
    for _, metric in list(first.iter_metrics())[:3]:
        print(f"  {metric.name:30s} next: {forecast_metric(metric)}")

    station = get_station_forecast_summary(participants)
    print(f"\nStation latest: {station['latest']}, forecast: {station['forecast']}")

    # ------------------------------------------------------------------
    # 5. Competition
    # ------------------------------------------------------------------
    print("\n")
    print("[ 5 ] COMPETITION")
    print("-" * 40)

    if months:
        month = months[0]
        print(f"\nRanking for {month}:")
        print(get_competition_table(participants, month).to_string(index=False))

        winner = winner_snapshot(participants, month)
        if winner is not None:
            result, _ = winner
            print(f"\nWinner: {result.name} ({result.score})")
        else:
            logger.warning("No winner for %s", month)

    print("\n" + "=" * 70)
    print("  Pipeline complete.")
    print("=" * 70)


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else None)

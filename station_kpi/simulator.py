"""
Simulated data generator for the station KPI dashboard.

Generates a roster of participants with twelve months of history per metric.
All values are synthetic. No real operational data is used.
"""

import logging

import numpy as np
import pandas as pd

from .config import METRIC_REGISTRY
from .models import HistorySample, Participant
from .templates import build_participant, template_seed_values

logger = logging.getLogger(__name__)

# Seed for reproducibility
_RNG = np.random.default_rng(42)

# ---------------------------------------------------------------------------
# Demo roster
# ---------------------------------------------------------------------------
_ROSTER = [
    ("manager_1", "A. Algarni", "Baggage Sortation", "PASSENGER"),
    ("manager_2", "M. Alghamdi", "Dispatch & Roster Partner", "SUPPORT"),
    ("manager_3", "R. Al-Zamzamie", "Hajj & Umrah Ramp", "RAMP"),
    ("manager_4", "S. Olfat", "Ramp Operations", "RAMP"),
    ("manager_5", "O. Alodaini", "Passenger Services FAL", "PASSENGER"),
    ("manager_6", "R. Algadi", "Passenger Services DOME", "PASSENGER"),
    ("manager_7", "H. Alshumrani", "Technical Services", "TECHNICAL"),
    ("manager_8", "K. Aljehani", "Safety & Quality", "SAFETY"),
]


def generate_history(
    seed_value: float,
    lower_is_better: bool,
    end_month: str,
    n_months: int = 12,
    rng: np.random.Generator | None = None,
) -> tuple[HistorySample, ...]:
    """Generate one sample per month ending at end_month.

    A random walk moving up to +/-5% of the seed value per step.
    Lower-is-better metrics move opposite to the draw.
    """
    rng = rng if rng is not None else _RNG
    months = pd.period_range(end=pd.Period(end_month, freq="M"), periods=n_months, freq="M")

    samples = []
    value = float(seed_value)
    for month in months:
        fluctuation = (rng.random() - 0.5) * (seed_value * 0.1)
        value = value - fluctuation if lower_is_better else value + fluctuation
        samples.append(HistorySample(
            timestamp=month.to_timestamp().strftime("%Y-%m-%d"),
            value=round(value, 2),
        ))
    return tuple(samples)


def generate_participant(
    participant_id: str,
    name: str,
    role: str,
    department: str = "",
    end_month: str = "2026-09",
    n_months: int = 12,
    rng: np.random.Generator | None = None,
) -> Participant:
    """Build a participant from role's template with simulated history."""
    histories = {
        metric_id: generate_history(
            seed,
            METRIC_REGISTRY[metric_id]["lower_is_better"],
            end_month,
            n_months,
            rng,
        )
        for metric_id, seed in template_seed_values(role).items()
    }
    return build_participant(participant_id, name, role, department, histories)


def generate_participants(
    end_month: str = "2026-09",
    n_months: int = 12,
    seed: int | None = None,
) -> list[Participant]:
    """Generate the demo roster, one participant per entry across all roles."""
    rng = np.random.default_rng(seed) if seed is not None else _RNG
    participants = [
        generate_participant(pid, name, role, department, end_month, n_months, rng)
        for pid, name, department, role in _ROSTER
    ]
    logger.info("Generated %d participants with %d months of history", len(participants), n_months)
    return participants

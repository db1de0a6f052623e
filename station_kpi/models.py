"""
Immutable domain types: metrics, categories, participants, reporting windows.

All containers are frozen dataclasses holding tuples, so every transform in
the engine builds a new object with dataclasses.replace rather than editing
history or category structures in place.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterator


class ReportingWindow(Enum):
    """Time granularity used to derive a metric's effective value."""

    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


@dataclass(frozen=True)
class HistorySample:
    timestamp: str  # ISO date or datetime string
    value: float

    @property
    def month(self) -> str:
        """Calendar month of the sample as 'YYYY-MM'."""
        return self.timestamp[:7]


@dataclass(frozen=True)
class Metric:
    id: str
    name: str
    current_value: float
    target: float
    lower_is_better: bool = False
    unit: str = "percentage"
    history: tuple[HistorySample, ...] = ()

    def with_value(self, value: float) -> "Metric":
        return replace(self, current_value=value)

    def history_values(self) -> list[float]:
        return [sample.value for sample in self.history]


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    weight: float  # percentage of the participant total
    metrics: tuple[Metric, ...] = ()


@dataclass(frozen=True)
class Participant:
    id: str
    name: str
    categories: tuple[Category, ...] = ()
    role: str = ""
    department: str = ""

    def iter_metrics(self) -> Iterator[tuple[Category, Metric]]:
        """Yield (category, metric) pairs in display order."""
        for category in self.categories:
            for metric in category.metrics:
                yield category, metric

    def find_metric(self, metric_id: str) -> Metric | None:
        for _, metric in self.iter_metrics():
            if metric.id == metric_id:
                return metric
        return None

    def map_metrics(self, fn) -> "Participant":
        """Return a copy with fn(metric) applied to every metric."""
        categories = tuple(
            replace(category, metrics=tuple(fn(metric) for metric in category.metrics))
            for category in self.categories
        )
        return replace(self, categories=categories)


@dataclass(frozen=True)
class RegressionLine:
    slope: float
    intercept: float

    def predict(self, x: float) -> float:
        return self.slope * x + self.intercept


@dataclass(frozen=True)
class ForecastPoint:
    index: int
    value: float
    is_forecast: bool = False


@dataclass(frozen=True)
class StationForecast:
    history: tuple[HistorySample, ...] = field(default_factory=tuple)
    forecast: float | None = None


@dataclass(frozen=True)
class CompetitionResult:
    participant_id: str
    name: str
    score: int

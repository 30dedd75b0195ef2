"""History range, query window and time-series point models."""

from dataclasses import dataclass, field
from enum import StrEnum


class HistoryRange(StrEnum):
    DAY_24H = "24h"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @property
    def label(self) -> str:
        """Human-readable label for range selectors."""
        return RANGE_LABELS[self]


RANGE_LABELS: dict[HistoryRange, str] = {
    HistoryRange.DAY_24H: "24 h",
    HistoryRange.WEEK: "Week",
    HistoryRange.MONTH: "Month",
    HistoryRange.YEAR: "Year",
}


@dataclass(frozen=True)
class HistoryPoint:
    time: str  # RFC3339, as returned by InfluxDB
    value: float


@dataclass(frozen=True)
class QueryWindow:
    """Flux range bounds as relative durations, e.g. start="-14d", stop="-7d".

    stop=None means the window is open and ends at "now".
    """

    start: str
    stop: str | None = None

    @property
    def is_open(self) -> bool:
        return self.stop is None


@dataclass(frozen=True)
class HistorySeries:
    temperature: list[HistoryPoint] = field(default_factory=list)
    pressure: list[HistoryPoint] = field(default_factory=list)

"""Chart geometry models for the history view."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class AxisBounds:
    min: float
    max: float


@dataclass(frozen=True)
class ChartPoint:
    time: str
    value: float
    x: float  # 0..1 across the series
    y: float  # 0..1 against the series' own axis


@dataclass(frozen=True)
class ChartSeries:
    name: str
    unit: str
    axis: AxisBounds | None  # None when the series is empty
    points: list[ChartPoint] = field(default_factory=list)


@dataclass(frozen=True)
class HistoryChart:
    title: str
    subtitle: str
    series: list[ChartSeries]

    @property
    def is_empty(self) -> bool:
        return all(not s.points for s in self.series)

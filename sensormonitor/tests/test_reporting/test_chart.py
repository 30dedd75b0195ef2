"""Tests for history chart geometry."""

import pytest

from sensormonitor.models.chart import AxisBounds
from sensormonitor.models.history import HistoryPoint, HistoryRange, HistorySeries
from sensormonitor.reporting.chart import axis_bounds, build_history_chart, build_series


def _points(*values: float) -> list[HistoryPoint]:
    return [HistoryPoint(f"2024-01-01T00:{i:02d}:00Z", v) for i, v in enumerate(values)]


class TestAxisBounds:
    def test_padded_by_five_percent(self):
        bounds = axis_bounds([10.0, 20.0])
        assert bounds.min == pytest.approx(9.5)
        assert bounds.max == pytest.approx(20.5)

    def test_flat_series(self):
        assert axis_bounds([5.0, 5.0]) == AxisBounds(min=4.0, max=6.0)

    def test_empty(self):
        assert axis_bounds([]) is None


class TestBuildSeries:
    def test_normalized_coordinates(self):
        series = build_series("Temperature", "°C", _points(10.0, 15.0, 20.0))
        xs = [p.x for p in series.points]
        ys = [p.y for p in series.points]
        assert xs == [0.0, 0.5, 1.0]
        assert all(0.0 <= y <= 1.0 for y in ys)
        assert ys[1] == pytest.approx(0.5)
        assert ys[0] < ys[1] < ys[2]

    def test_single_point(self):
        series = build_series("Pressure", "hPa", _points(1000.0))
        assert series.points[0].x == 0.0
        assert series.points[0].y == pytest.approx(0.5)

    def test_empty_series(self):
        series = build_series("Pressure", "hPa", [])
        assert series.axis is None
        assert series.points == []


class TestBuildHistoryChart:
    def test_independent_axes(self):
        chart = build_history_chart(
            HistorySeries(
                temperature=_points(20.0, 22.0),
                pressure=_points(1000.0, 1010.0),
            ),
            HistoryRange.WEEK,
            "Last week",
        )
        temperature, pressure = chart.series
        assert temperature.name == "Temperature"
        assert pressure.unit == "hPa"
        assert temperature.axis.max < pressure.axis.min
        assert chart.subtitle == "Week · Last week"
        assert not chart.is_empty

    def test_empty_chart(self):
        chart = build_history_chart(HistorySeries(), HistoryRange.DAY_24H, "Yesterday")
        assert chart.is_empty
        assert all(s.axis is None for s in chart.series)

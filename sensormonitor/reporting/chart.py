"""Two overlaid line series with independent Y axes."""

from sensormonitor.models.chart import AxisBounds, ChartPoint, ChartSeries, HistoryChart
from sensormonitor.models.history import HistoryPoint, HistoryRange, HistorySeries

AXIS_PADDING = 0.05
FLAT_SERIES_PADDING = 1.0

TEMPERATURE_SERIES = ("Temperature", "°C")
PRESSURE_SERIES = ("Pressure", "hPa")


def axis_bounds(values: list[float]) -> AxisBounds | None:
    """Min/max padded by 5% of the span, or ±1 around a flat series."""
    if not values:
        return None
    lo, hi = min(values), max(values)
    if lo == hi:
        return AxisBounds(min=lo - FLAT_SERIES_PADDING, max=hi + FLAT_SERIES_PADDING)
    pad = (hi - lo) * AXIS_PADDING
    return AxisBounds(min=lo - pad, max=hi + pad)


def build_series(name: str, unit: str, points: list[HistoryPoint]) -> ChartSeries:
    axis = axis_bounds([p.value for p in points])
    if axis is None:
        return ChartSeries(name=name, unit=unit, axis=None)

    span = axis.max - axis.min
    last = len(points) - 1
    chart_points = [
        ChartPoint(
            time=p.time,
            value=p.value,
            x=i / last if last else 0.0,
            y=(p.value - axis.min) / span,
        )
        for i, p in enumerate(points)
    ]
    return ChartSeries(name=name, unit=unit, axis=axis, points=chart_points)


def build_history_chart(
    series: HistorySeries,
    history_range: HistoryRange,
    label: str,
) -> HistoryChart:
    return HistoryChart(
        title="Sensor history",
        subtitle=f"{history_range.label} · {label}",
        series=[
            build_series(*TEMPERATURE_SERIES, series.temperature),
            build_series(*PRESSURE_SERIES, series.pressure),
        ],
    )

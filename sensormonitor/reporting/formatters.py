"""Output formatters for measurement cards and history listings."""

import json
from dataclasses import asdict

from sensormonitor.models.chart import HistoryChart
from sensormonitor.models.history import HistoryPoint
from sensormonitor.models.measurement import Measurement

UNAVAILABLE = "Unavailable"


def format_temperature(value: float | None) -> str:
    return UNAVAILABLE if value is None else f"{value:.1f} °C"


def format_pressure(value: float | None) -> str:
    return UNAVAILABLE if value is None else f"{value:.1f} hPa"


def measurement_card(m: Measurement) -> dict:
    """Display fields for the latest-measurement card."""
    return {
        "device_id": m.device_id,
        "temperature": format_temperature(m.temperature_c),
        "pressure": format_pressure(m.pressure_hpa),
        "updated": m.timestamp,
    }


def format_measurement_text(m: Measurement) -> str:
    """Plain text card for the terminal."""
    card = measurement_card(m)
    return "\n".join([
        f"=== {card['device_id']} ===",
        f"Temperature: {card['temperature']}",
        f"Pressure: {card['pressure']}",
        f"Updated: {card['updated']}",
    ])


def format_points_text(points: list[HistoryPoint], limit: int = 20) -> str:
    """The last ``limit`` points, one per line."""
    if not points:
        return "No data in this period"
    return "\n".join(f"{p.time}  →  {p.value}" for p in points[-limit:])


def format_chart_json(chart: HistoryChart) -> str:
    return json.dumps(asdict(chart), indent=2)

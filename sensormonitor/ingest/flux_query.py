"""Flux query construction for single-measurement history lookups."""

from sensormonitor.models.history import QueryWindow

TIME_COLUMN = "_time"
VALUE_COLUMN = "_value"


def _flux_string(value: str) -> str:
    """Quote a value as a Flux string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def build_flux_query(bucket: str, measurement: str, window: QueryWindow) -> str:
    """Select one measurement within ``window``, keeping only time and value."""
    range_args = f"start: {window.start}"
    if window.stop is not None:
        range_args += f", stop: {window.stop}"

    return "\n".join([
        f"from(bucket: {_flux_string(bucket)})",
        f"  |> range({range_args})",
        f"  |> filter(fn: (r) => r._measurement == {_flux_string(measurement)})",
        f'  |> keep(columns: ["{TIME_COLUMN}", "{VALUE_COLUMN}"])',
    ])

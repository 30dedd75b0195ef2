"""Latest measurement snapshot shown on the dashboard card."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Measurement:
    """Snapshot composed from the newest point of each series.

    temperature_c / pressure_hpa are None when the series had no data.
    timestamp is the RFC3339 time of the newest point used, or NO_DATA.
    """

    device_id: str
    temperature_c: float | None
    pressure_hpa: float | None
    timestamp: str

    @property
    def has_data(self) -> bool:
        return self.temperature_c is not None or self.pressure_hpa is not None

"""Measurement history and latest-snapshot lookups backed by InfluxDB."""

import asyncio
import logging

from sensormonitor.config.schema import MonitorConfig
from sensormonitor.ingest.csv_parser import parse_history_csv
from sensormonitor.ingest.flux_query import build_flux_query
from sensormonitor.ingest.influx_client import InfluxClient
from sensormonitor.ingest.window import window_for
from sensormonitor.models.common import NO_DATA
from sensormonitor.models.history import (
    HistoryPoint,
    HistoryRange,
    HistorySeries,
    QueryWindow,
)
from sensormonitor.models.measurement import Measurement

logger = logging.getLogger(__name__)


class InfluxRepository:
    def __init__(
        self,
        client: InfluxClient,
        bucket: str,
        temperature_measurement: str,
        pressure_measurement: str,
        device_id: str,
    ):
        self.client = client
        self.bucket = bucket
        self.temperature_measurement = temperature_measurement
        self.pressure_measurement = pressure_measurement
        self.device_id = device_id

    @classmethod
    def from_config(cls, config: MonitorConfig, client: InfluxClient) -> "InfluxRepository":
        return cls(
            client=client,
            bucket=config.influx.bucket,
            temperature_measurement=config.sensor.temperature_measurement,
            pressure_measurement=config.sensor.pressure_measurement,
            device_id=config.sensor.device_id,
        )

    async def get_measurement_history(
        self, measurement: str, window: QueryWindow
    ) -> list[HistoryPoint]:
        """Points for one measurement within ``window``.

        A non-2xx response and an empty series both come back as [].
        """
        flux = build_flux_query(self.bucket, measurement, window)
        csv_text = await self.client.query_csv(flux)
        if csv_text is None:
            return []
        points = parse_history_csv(csv_text)
        logger.info("Parsed %d history points for %s", len(points), measurement)
        return points

    async def get_history(
        self, history_range: HistoryRange, period_offset: int = 0
    ) -> HistorySeries:
        """Temperature and pressure for one period, fetched concurrently."""
        window = window_for(history_range, period_offset)
        temperature, pressure = await asyncio.gather(
            self.get_measurement_history(self.temperature_measurement, window),
            self.get_measurement_history(self.pressure_measurement, window),
        )
        return HistorySeries(temperature=temperature, pressure=pressure)

    async def get_latest_measurement(self) -> Measurement:
        """Snapshot from the newest point of each series in the last 24 h."""
        series = await self.get_history(HistoryRange.DAY_24H, 0)
        return latest_measurement(self.device_id, series)


def latest_measurement(device_id: str, series: HistorySeries) -> Measurement:
    temperature = series.temperature[-1] if series.temperature else None
    pressure = series.pressure[-1] if series.pressure else None

    times = [p.time for p in (temperature, pressure) if p is not None]
    # RFC3339 UTC strings from one server compare correctly as text
    timestamp = max(times) if times else NO_DATA

    return Measurement(
        device_id=device_id,
        temperature_c=temperature.value if temperature else None,
        pressure_hpa=pressure.value if pressure else None,
        timestamp=timestamp,
    )

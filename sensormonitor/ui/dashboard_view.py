"""View model for the main dashboard card: latest temperature and pressure."""

from sensormonitor.ingest.influx_repo import InfluxRepository
from sensormonitor.models.measurement import Measurement
from sensormonitor.ui.view_model import StateListener, ViewModel


class DashboardViewModel(ViewModel[Measurement]):
    error_message = "Failed to load data"

    def __init__(
        self,
        repository: InfluxRepository,
        refresh_interval: float | None = None,
        on_change: StateListener | None = None,
    ):
        super().__init__(refresh_interval=refresh_interval, on_change=on_change)
        self.repository = repository

    async def _load(self) -> Measurement:
        return await self.repository.get_latest_measurement()

"""View model for the history screen: range selection and period paging."""

import asyncio
import logging

from sensormonitor.ingest.influx_repo import InfluxRepository
from sensormonitor.ingest.window import period_label, window_for
from sensormonitor.models.history import HistoryRange, HistorySeries, QueryWindow
from sensormonitor.ui.view_model import StateListener, ViewModel

logger = logging.getLogger(__name__)


class HistoryViewModel(ViewModel[HistorySeries]):
    """Range and period selection for the history chart.

    period_offset is 0 for the current period and -n for n periods back;
    it never goes above 0. Auto-refresh runs only while viewing the
    current period.
    """

    error_message = "Failed to load history data"

    def __init__(
        self,
        repository: InfluxRepository,
        refresh_interval: float | None = None,
        on_change: StateListener | None = None,
        initial_range: HistoryRange = HistoryRange.DAY_24H,
        initial_offset: int = 0,
    ):
        super().__init__(refresh_interval=refresh_interval, on_change=on_change)
        self.repository = repository
        self._selected_range = initial_range
        self._period_offset = min(initial_offset, 0)

    @property
    def selected_range(self) -> HistoryRange:
        return self._selected_range

    @property
    def period_offset(self) -> int:
        return self._period_offset

    @property
    def can_go_next(self) -> bool:
        return self._period_offset < 0

    @property
    def period_label(self) -> str:
        return period_label(self._selected_range, self._period_offset)

    @property
    def window(self) -> QueryWindow:
        return window_for(self._selected_range, self._period_offset)

    def select_range(self, history_range: HistoryRange) -> asyncio.Task:
        self._selected_range = history_range
        self._period_offset = 0
        return self._navigate()

    def go_to_previous_period(self) -> asyncio.Task:
        self._period_offset -= 1
        return self._navigate()

    def go_to_next_period(self) -> asyncio.Task | None:
        """Step one period forward. No-op (returns None) at the present."""
        if not self.can_go_next:
            return None
        self._period_offset += 1
        return self._navigate()

    def _navigate(self) -> asyncio.Task:
        logger.info(
            "History range=%s offset=%d (%s)",
            self._selected_range.value, self._period_offset, self.period_label,
        )
        task = self.refresh()
        self._sync_auto_refresh()
        return task

    def _should_auto_refresh(self) -> bool:
        return self._period_offset == 0

    async def _load(self) -> HistorySeries:
        return await self.repository.get_history(
            self._selected_range, self._period_offset
        )

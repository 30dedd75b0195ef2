"""Base view model: latest-wins refreshes and a cancellable auto-refresh timer."""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Generic, TypeVar

from sensormonitor.ui.state import Error, Loading, Success, UiState

logger = logging.getLogger(__name__)

T = TypeVar("T")

StateListener = Callable[[UiState], None]


class ViewModel(ABC, Generic[T]):
    """Holds the UI state of one screen.

    Every refresh takes a new generation number. A result is published only
    if its generation is still the latest, and a superseded fetch is
    cancelled. Must be driven from within a running event loop.
    """

    error_message = "Failed to load data"

    def __init__(
        self,
        refresh_interval: float | None = None,
        on_change: StateListener | None = None,
    ):
        if refresh_interval is not None and refresh_interval <= 0:
            raise ValueError(f"refresh_interval must be positive, got {refresh_interval}")
        self.refresh_interval = refresh_interval
        self._on_change = on_change
        self._state: UiState = Loading()
        self._generation = 0
        self._fetch_task: asyncio.Task | None = None
        self._timer_task: asyncio.Task | None = None
        self._closed = False

    @property
    def state(self) -> UiState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def auto_refresh_active(self) -> bool:
        return self._timer_task is not None and not self._timer_task.done()

    @abstractmethod
    async def _load(self) -> T:
        """Fetch the data shown on this screen."""

    def _should_auto_refresh(self) -> bool:
        return True

    def _set_state(self, state: UiState) -> None:
        self._state = state
        if self._on_change is not None:
            self._on_change(state)

    def start(self) -> asyncio.Task:
        """Initial load plus auto-refresh if configured."""
        task = self.refresh()
        self._sync_auto_refresh()
        return task

    def refresh(self) -> asyncio.Task:
        """Enter Loading and start a fetch, superseding any in flight."""
        if self._closed:
            raise RuntimeError(f"{type(self).__name__} is closed")
        self._generation += 1
        if self._fetch_task is not None and not self._fetch_task.done():
            self._fetch_task.cancel()
        self._set_state(Loading())
        self._fetch_task = asyncio.get_running_loop().create_task(
            self._run(self._generation)
        )
        return self._fetch_task

    async def _run(self, generation: int) -> None:
        try:
            data = await self._load()
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("%s refresh failed", type(self).__name__)
            result: UiState = Error(self.error_message)
        else:
            result = Success(data)

        if generation != self._generation:
            logger.debug(
                "Discarding stale result (generation %d, latest %d)",
                generation, self._generation,
            )
            return
        self._set_state(result)

    def _sync_auto_refresh(self) -> None:
        """Start or stop the timer to match the current view."""
        wanted = (
            self.refresh_interval is not None
            and not self._closed
            and self._should_auto_refresh()
        )
        if wanted and not self.auto_refresh_active:
            self._timer_task = asyncio.get_running_loop().create_task(
                self._auto_refresh_loop()
            )
        elif not wanted:
            self._stop_auto_refresh()

    def _stop_auto_refresh(self) -> None:
        if self._timer_task is not None:
            self._timer_task.cancel()
            self._timer_task = None

    async def _auto_refresh_loop(self) -> None:
        if self.refresh_interval is None:
            return
        while True:
            await asyncio.sleep(self.refresh_interval)
            logger.debug("%s auto-refresh tick", type(self).__name__)
            # wait() does not raise if the fetch is superseded and cancelled
            await asyncio.wait({self.refresh()})

    async def close(self) -> None:
        """Stop the timer and any in-flight fetch."""
        self._closed = True
        tasks = [t for t in (self._timer_task, self._fetch_task) if t is not None]
        self._timer_task = None
        self._fetch_task = None
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

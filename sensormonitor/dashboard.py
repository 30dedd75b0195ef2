"""Sensor dashboard: FastAPI backend exposing the latest card and history chart."""

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import asdict

import httpx
from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware

from sensormonitor.config.schema import MonitorConfig
from sensormonitor.ingest.flux_query import build_flux_query
from sensormonitor.ingest.influx_client import InfluxClient
from sensormonitor.ingest.influx_repo import InfluxRepository
from sensormonitor.ingest.window import period_label, window_for
from sensormonitor.models.history import HistoryRange
from sensormonitor.reporting.chart import build_history_chart
from sensormonitor.reporting.formatters import measurement_card
from sensormonitor.ui.dashboard_view import DashboardViewModel
from sensormonitor.ui.history_view import HistoryViewModel
from sensormonitor.ui.state import Error, Success, state_kind

logger = logging.getLogger(__name__)


def create_app(
    config: MonitorConfig, http_client: httpx.AsyncClient | None = None
) -> FastAPI:
    """Build the dashboard app. View models live for the app's lifetime."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = InfluxClient.from_config(config.influx, http_client=http_client)
        repository = InfluxRepository.from_config(config, client)
        interval = config.refresh.interval_seconds
        dashboard = DashboardViewModel(repository, refresh_interval=interval)
        history = HistoryViewModel(repository, refresh_interval=interval)

        app.state.client = client
        app.state.dashboard = dashboard
        app.state.history = history

        dashboard.start()
        history.start()
        logger.info(
            "Dashboard started: influx=%s bucket=%s refresh=%ds",
            config.influx.base_url, config.influx.bucket, interval,
        )
        try:
            yield
        finally:
            await dashboard.close()
            await history.close()
            await client.aclose()
            logger.info("Dashboard stopped")

    app = FastAPI(title="Sensor Monitor Dashboard", version="0.1.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Latest measurement ──────────────────────────────────────────

    @app.get("/api/latest")
    async def get_latest(request: Request):
        """Latest temperature/pressure card."""
        return _dashboard_payload(request.app.state.dashboard)

    @app.post("/api/latest/refresh")
    async def refresh_latest(request: Request):
        dashboard: DashboardViewModel = request.app.state.dashboard
        await asyncio.wait({dashboard.refresh()})
        return _dashboard_payload(dashboard)

    # ── History ─────────────────────────────────────────────────────

    @app.get("/api/history")
    async def get_history(request: Request):
        """Selected range, period and chart for the history screen."""
        return _history_payload(request.app.state.history)

    @app.post("/api/history/range/{history_range}")
    async def select_range(history_range: HistoryRange, request: Request):
        history: HistoryViewModel = request.app.state.history
        await asyncio.wait({history.select_range(history_range)})
        return _history_payload(history)

    @app.post("/api/history/previous")
    async def previous_period(request: Request):
        history: HistoryViewModel = request.app.state.history
        await asyncio.wait({history.go_to_previous_period()})
        return _history_payload(history)

    @app.post("/api/history/next")
    async def next_period(request: Request):
        history: HistoryViewModel = request.app.state.history
        task = history.go_to_next_period()
        if task is not None:
            await asyncio.wait({task})
        return _history_payload(history)

    @app.post("/api/history/refresh")
    async def refresh_history(request: Request):
        history: HistoryViewModel = request.app.state.history
        await asyncio.wait({history.refresh()})
        return _history_payload(history)

    # ── Diagnostics ─────────────────────────────────────────────────

    @app.get("/api/window")
    def get_window(
        history_range: HistoryRange = Query(HistoryRange.DAY_24H, alias="range"),
        offset: int = Query(0, le=0),
    ):
        """Flux window and query for a range/offset, without querying."""
        window = window_for(history_range, offset)
        return {
            "range": history_range.value,
            "offset": offset,
            "label": period_label(history_range, offset),
            "start": window.start,
            "stop": window.stop,
            "flux": {
                "temperature": build_flux_query(
                    config.influx.bucket, config.sensor.temperature_measurement, window
                ),
                "pressure": build_flux_query(
                    config.influx.bucket, config.sensor.pressure_measurement, window
                ),
            },
        }

    @app.get("/api/health")
    async def get_health(request: Request):
        client: InfluxClient = request.app.state.client
        return {
            "influx_ok": await client.ping(),
            "base_url": config.influx.base_url,
            "bucket": config.influx.bucket,
            "device_id": config.sensor.device_id,
        }

    return app


def _dashboard_payload(dashboard: DashboardViewModel) -> dict:
    state = dashboard.state
    return {
        "state": state_kind(state),
        "card": measurement_card(state.data) if isinstance(state, Success) else None,
        "message": state.message if isinstance(state, Error) else None,
        "auto_refresh": dashboard.auto_refresh_active,
    }


def _history_payload(history: HistoryViewModel) -> dict:
    state = history.state
    chart = None
    if isinstance(state, Success):
        chart = asdict(
            build_history_chart(state.data, history.selected_range, history.period_label)
        )
    return {
        "range": history.selected_range.value,
        "range_label": history.selected_range.label,
        "offset": history.period_offset,
        "label": history.period_label,
        "can_go_next": history.can_go_next,
        "state": state_kind(state),
        "chart": chart,
        "message": state.message if isinstance(state, Error) else None,
        "auto_refresh": history.auto_refresh_active,
    }

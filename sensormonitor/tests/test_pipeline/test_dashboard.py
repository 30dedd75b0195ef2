"""Tests for the dashboard API."""

import httpx
import pytest
from fastapi.testclient import TestClient

from sensormonitor.config.schema import MonitorConfig
from sensormonitor.dashboard import create_app


def _transport(temp_csv: str, pressure_csv: str, status: int = 200) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/health":
            return httpx.Response(200, json={"status": "pass"})
        body = request.content.decode()
        text = temp_csv if "Laki/temp" in body else pressure_csv
        return httpx.Response(status, text=text)

    return httpx.MockTransport(handler)


@pytest.fixture
def api(monitor_config: MonitorConfig, temp_csv: str, pressure_csv: str):
    http_client = httpx.AsyncClient(transport=_transport(temp_csv, pressure_csv))
    with TestClient(create_app(monitor_config, http_client=http_client)) as client:
        yield client


class TestLatest:
    def test_refresh_returns_card(self, api: TestClient):
        data = api.post("/api/latest/refresh").json()
        assert data["state"] == "success"
        assert data["card"] == {
            "device_id": "pico-01",
            "temperature": "21.6 °C",
            "pressure": "1007.2 hPa",
            "updated": "2024-01-01T00:20:00Z",
        }
        assert data["auto_refresh"] is True

    def test_error_status_means_unavailable(self, monitor_config: MonitorConfig):
        http_client = httpx.AsyncClient(transport=_transport("", "", status=500))
        with TestClient(create_app(monitor_config, http_client=http_client)) as client:
            data = client.post("/api/latest/refresh").json()
        assert data["state"] == "success"
        assert data["card"]["temperature"] == "Unavailable"
        assert data["card"]["updated"] == "No data"

    def test_transport_failure_is_error(self, monitor_config: MonitorConfig):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        with TestClient(create_app(monitor_config, http_client=http_client)) as client:
            data = client.post("/api/latest/refresh").json()
        assert data["state"] == "error"
        assert data["message"] == "Failed to load data"
        assert data["card"] is None


class TestHistory:
    def test_refresh_returns_chart(self, api: TestClient):
        data = api.post("/api/history/refresh").json()
        assert data["state"] == "success"
        assert data["range"] == "24h"
        assert data["offset"] == 0
        assert data["label"] == "Today (last 24 h)"
        temperature, pressure = data["chart"]["series"]
        assert len(temperature["points"]) == 3
        assert len(pressure["points"]) == 3
        assert temperature["axis"]["max"] < pressure["axis"]["min"]

    def test_previous_then_next(self, api: TestClient):
        data = api.post("/api/history/previous").json()
        assert data["offset"] == -1
        assert data["label"] == "Yesterday"
        assert data["can_go_next"] is True
        assert data["auto_refresh"] is False

        data = api.post("/api/history/next").json()
        assert data["offset"] == 0
        assert data["can_go_next"] is False
        assert data["auto_refresh"] is True

    def test_next_at_present_stays(self, api: TestClient):
        data = api.post("/api/history/next").json()
        assert data["offset"] == 0

    def test_select_range_resets_offset(self, api: TestClient):
        api.post("/api/history/previous")
        data = api.post("/api/history/range/week").json()
        assert data["range"] == "week"
        assert data["range_label"] == "Week"
        assert data["offset"] == 0
        assert data["label"] == "This week"

    def test_unknown_range(self, api: TestClient):
        assert api.post("/api/history/range/decade").status_code == 422


class TestWindow:
    def test_week_previous(self, api: TestClient):
        data = api.get("/api/window", params={"range": "week", "offset": -1}).json()
        assert data["start"] == "-14d"
        assert data["stop"] == "-7d"
        assert data["label"] == "Last week"
        assert "range(start: -14d, stop: -7d)" in data["flux"]["temperature"]
        assert 'r._measurement == "Laki/pressure"' in data["flux"]["pressure"]

    def test_default_is_open_day(self, api: TestClient):
        data = api.get("/api/window").json()
        assert data["start"] == "-24h"
        assert data["stop"] is None

    def test_future_offset_rejected(self, api: TestClient):
        assert api.get("/api/window", params={"offset": 1}).status_code == 422


class TestHealth:
    def test_health(self, api: TestClient):
        data = api.get("/api/health").json()
        assert data["influx_ok"] is True
        assert data["bucket"] == "sensors"

"""Tests for Flux query construction."""

from sensormonitor.ingest.flux_query import build_flux_query
from sensormonitor.models.history import QueryWindow


class TestBuildFluxQuery:
    def test_open_window(self):
        flux = build_flux_query("sensors", "Laki/temp", QueryWindow(start="-24h"))
        assert flux == (
            'from(bucket: "sensors")\n'
            "  |> range(start: -24h)\n"
            '  |> filter(fn: (r) => r._measurement == "Laki/temp")\n'
            '  |> keep(columns: ["_time", "_value"])'
        )

    def test_closed_window(self):
        flux = build_flux_query("sensors", "Laki/pressure", QueryWindow("-14d", "-7d"))
        assert "range(start: -14d, stop: -7d)" in flux
        assert 'r._measurement == "Laki/pressure"' in flux

    def test_quotes_escaped(self):
        flux = build_flux_query('my"bucket', 'a\\b"c', QueryWindow(start="-1h"))
        assert 'from(bucket: "my\\"bucket")' in flux
        assert 'r._measurement == "a\\\\b\\"c"' in flux

"""CLI entry point for the sensor monitor."""

import argparse
import asyncio
import logging
from dataclasses import replace

from pydantic import BaseModel

from sensormonitor.config.defaults import DEFAULT_CONFIG_PATH
from sensormonitor.config.loader import (
    get_config_value,
    load_config,
    redacted_config,
    redacted_json,
)
from sensormonitor.config.schema import MonitorConfig
from sensormonitor.ingest.flux_query import build_flux_query
from sensormonitor.ingest.influx_client import InfluxClient
from sensormonitor.ingest.influx_repo import InfluxRepository
from sensormonitor.ingest.window import period_label, window_for
from sensormonitor.models.history import HistoryRange
from sensormonitor.reporting.chart import (
    PRESSURE_SERIES,
    TEMPERATURE_SERIES,
    build_history_chart,
)
from sensormonitor.reporting.formatters import (
    format_chart_json,
    format_measurement_text,
    format_points_text,
)
from sensormonitor.ui.dashboard_view import DashboardViewModel
from sensormonitor.ui.history_view import HistoryViewModel
from sensormonitor.ui.state import Error, Success, UiState

RANGE_CHOICES = [r.value for r in HistoryRange]


def _offset(value: str) -> int:
    offset = int(value)
    if offset > 0:
        raise argparse.ArgumentTypeError("offset must be 0 or negative")
    return offset


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return number


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="sensormonitor",
        description="PicoW temperature and pressure monitor",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG_PATH, help="Config YAML path"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Debug logging"
    )

    sub = parser.add_subparsers(dest="command")

    # latest
    sub.add_parser("latest", help="Show the latest measurement")

    # history
    history_p = sub.add_parser("history", help="Show one period of history")
    history_p.add_argument("--range", dest="history_range", choices=RANGE_CHOICES, default="24h")
    history_p.add_argument("--offset", type=_offset, default=0, help="0 = current, -1 = previous")
    history_p.add_argument(
        "--series", choices=["temp", "pressure", "both"], default="both"
    )
    history_p.add_argument("--json", action="store_true", help="Print chart geometry as JSON")

    # window
    window_p = sub.add_parser("window", help="Print the Flux query for a period")
    window_p.add_argument("--range", dest="history_range", choices=RANGE_CHOICES, default="24h")
    window_p.add_argument("--offset", type=_offset, default=0)

    # watch
    watch_p = sub.add_parser("watch", help="Print the latest measurement on every refresh")
    watch_p.add_argument("--interval", type=_positive_int, help="Refresh interval in seconds")

    # config show / get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Print one config value")
    get_p.add_argument("key", help="Dotted key, e.g. influx.bucket")

    # serve
    serve_p = sub.add_parser("serve", help="Run the dashboard API")
    serve_p.add_argument("--host")
    serve_p.add_argument("--port", type=int)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "latest":
        return asyncio.run(_cmd_latest(config))
    elif args.command == "history":
        return asyncio.run(_cmd_history(config, args))
    elif args.command == "window":
        return _cmd_window(config, args)
    elif args.command == "watch":
        return _cmd_watch(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    elif args.command == "serve":
        return _cmd_serve(config, args)
    else:
        parser.print_help()
        return 1


def _report_error(state: UiState) -> int:
    message = state.message if isinstance(state, Error) else "No result"
    print(f"Error: {message}")
    return 1


async def _cmd_latest(config: MonitorConfig) -> int:
    async with InfluxClient.from_config(config.influx) as client:
        view = DashboardViewModel(InfluxRepository.from_config(config, client))
        await view.refresh()
        await view.close()

    if not isinstance(view.state, Success):
        return _report_error(view.state)
    print(format_measurement_text(view.state.data))
    return 0


async def _cmd_history(config: MonitorConfig, args) -> int:
    history_range = HistoryRange(args.history_range)
    async with InfluxClient.from_config(config.influx) as client:
        view = HistoryViewModel(
            InfluxRepository.from_config(config, client),
            initial_range=history_range,
            initial_offset=args.offset,
        )
        await view.refresh()
        await view.close()

    if not isinstance(view.state, Success):
        return _report_error(view.state)

    series = view.state.data
    if args.json:
        chart = build_history_chart(series, history_range, view.period_label)
        if args.series != "both":
            name = TEMPERATURE_SERIES[0] if args.series == "temp" else PRESSURE_SERIES[0]
            chart = replace(chart, series=[s for s in chart.series if s.name == name])
        print(format_chart_json(chart))
        return 0

    print(f"{history_range.label} · {view.period_label}")
    if args.series in ("temp", "both"):
        print("Temperature (°C)")
        print(format_points_text(series.temperature))
    if args.series in ("pressure", "both"):
        print("Pressure (hPa)")
        print(format_points_text(series.pressure))
    return 0


def _cmd_window(config: MonitorConfig, args) -> int:
    history_range = HistoryRange(args.history_range)
    window = window_for(history_range, args.offset)
    print(f"# {history_range.label} · {period_label(history_range, args.offset)}")
    print(f"# start={window.start} stop={window.stop or 'now'}")
    print(build_flux_query(
        config.influx.bucket, config.sensor.temperature_measurement, window
    ))
    return 0


def _cmd_watch(config: MonitorConfig, args) -> int:
    interval = args.interval if args.interval is not None else config.refresh.interval_seconds

    def _print_state(state: UiState) -> None:
        if isinstance(state, Success):
            print(format_measurement_text(state.data))
        elif isinstance(state, Error):
            print(f"Error: {state.message}")

    async def _watch() -> None:
        async with InfluxClient.from_config(config.influx) as client:
            view = DashboardViewModel(
                InfluxRepository.from_config(config, client),
                refresh_interval=interval,
                on_change=_print_state,
            )
            view.start()
            try:
                await asyncio.Event().wait()
            finally:
                await view.close()

    print(f"Watching {config.sensor.device_id} every {interval}s (Ctrl-C to stop)")
    try:
        asyncio.run(_watch())
    except KeyboardInterrupt:
        print("Stopped")
    return 0


def _cmd_config(config: MonitorConfig, args) -> int:
    if args.config_command == "show":
        print(redacted_json(config))
        return 0
    elif args.config_command == "get":
        try:
            value = get_config_value(redacted_config(config), args.key)
        except KeyError as e:
            print(f"Error: {e.args[0]}")
            return 1
        if isinstance(value, BaseModel):
            value = value.model_dump_json(indent=2)
        print(value)
        return 0
    else:
        print("Use: config show | config get KEY")
        return 1


def _cmd_serve(config: MonitorConfig, args) -> int:
    import uvicorn

    from sensormonitor.dashboard import create_app

    host = args.host or config.dashboard.host
    port = args.port or config.dashboard.port
    uvicorn.run(create_app(config), host=host, port=port)
    return 0

"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field


class InfluxConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = "http://localhost:8086"
    org: str = ""
    bucket: str = "sensors"
    token: str = ""
    timeout_seconds: float = Field(default=30.0, gt=0.0)


class SensorConfig(BaseModel):
    model_config = {"extra": "forbid"}

    device_id: str = "pico-01"
    temperature_measurement: str = "Laki/temp"
    pressure_measurement: str = "Laki/pressure"


class RefreshConfig(BaseModel):
    model_config = {"extra": "forbid"}

    interval_seconds: int = Field(default=60, ge=1)


class DashboardConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "127.0.0.1"
    port: int = Field(default=8777, ge=1, le=65535)


class MonitorConfig(BaseModel):
    model_config = {"extra": "forbid"}

    influx: InfluxConfig = InfluxConfig()
    sensor: SensorConfig = SensorConfig()
    refresh: RefreshConfig = RefreshConfig()
    dashboard: DashboardConfig = DashboardConfig()

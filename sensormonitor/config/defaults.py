"""Default config location and environment overrides."""

DEFAULT_CONFIG_PATH = "config/sensormonitor.yaml"

# Environment variable -> (section, key). Applied on top of the YAML file.
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "INFLUX_BASE_URL": ("influx", "base_url"),
    "INFLUX_ORG": ("influx", "org"),
    "INFLUX_BUCKET": ("influx", "bucket"),
    "INFLUX_TOKEN": ("influx", "token"),
}

REDACTED = "***"

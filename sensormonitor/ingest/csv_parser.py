"""Tolerant parser for InfluxDB annotated CSV query responses."""

import logging
import math

from sensormonitor.ingest.flux_query import TIME_COLUMN, VALUE_COLUMN
from sensormonitor.models.history import HistoryPoint

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "#"


def _split(line: str) -> list[str]:
    return [field.strip() for field in line.split(",")]


def _parse_value(raw: str) -> float | None:
    # float() accepts digit separators ("1_000"); CSV numbers never carry them.
    if "_" in raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def parse_history_csv(
    text: str,
    time_column: str = TIME_COLUMN,
    value_column: str = VALUE_COLUMN,
) -> list[HistoryPoint]:
    """Extract (time, value) points from a CSV payload.

    Annotation lines (``#...``) and blank lines are skipped. The first line
    naming both columns is the header; column positions are taken from it.
    Rows with a missing time or a non-finite value are dropped, which also
    drops the repeated header lines of multi-table responses.

    Never raises; returns an empty list when nothing usable is found.
    """
    lines = [
        line.strip()
        for line in text.splitlines()
        if line.strip() and not line.strip().startswith(COMMENT_PREFIX)
    ]
    if not lines:
        logger.debug("No non-comment lines in CSV")
        return []

    header_index = None
    for i, line in enumerate(lines):
        fields = _split(line)
        if time_column in fields and value_column in fields:
            header_index = i
            break

    if header_index is None:
        logger.warning(
            "No header with %s / %s columns in CSV response", time_column, value_column
        )
        return []

    header = _split(lines[header_index])
    time_idx = header.index(time_column)
    value_idx = header.index(value_column)

    points: list[HistoryPoint] = []
    dropped = 0
    for line in lines[header_index + 1:]:
        fields = _split(line)
        if max(time_idx, value_idx) >= len(fields):
            dropped += 1
            continue
        time = fields[time_idx]
        value = _parse_value(fields[value_idx])
        if not time or value is None:
            dropped += 1
            continue
        points.append(HistoryPoint(time=time, value=value))

    if dropped:
        logger.debug("Dropped %d malformed CSV rows", dropped)
    return points

"""Translate a history range and period offset into a Flux time window."""

from sensormonitor.models.history import HistoryRange, QueryWindow

# (length of one period, Flux duration unit). Month and year are calendar
# approximations.
RANGE_UNITS: dict[HistoryRange, tuple[int, str]] = {
    HistoryRange.DAY_24H: (24, "h"),
    HistoryRange.WEEK: (7, "d"),
    HistoryRange.MONTH: (30, "d"),
    HistoryRange.YEAR: (365, "d"),
}


def _duration_ago(amount: int, unit: str) -> str:
    return f"-{amount}{unit}"


def window_for(history_range: HistoryRange, period_offset: int) -> QueryWindow:
    """Return the Flux window for one period of ``history_range``.

    Offset 0 is the current period and yields an open window ending now.
    Offset -n yields the closed window n whole periods back. Positive
    offsets never point into the future; they are treated as 0.
    """
    length, unit = RANGE_UNITS[history_range]
    n = -period_offset
    if n <= 0:
        return QueryWindow(start=_duration_ago(length, unit))
    return QueryWindow(
        start=_duration_ago(length * (n + 1), unit),
        stop=_duration_ago(length * n, unit),
    )


_PERIOD_NAMES: dict[HistoryRange, tuple[str, str, str]] = {
    # (current, previous, older)
    HistoryRange.DAY_24H: ("Today (last 24 h)", "Yesterday", "{n} days ago (24 h)"),
    HistoryRange.WEEK: ("This week", "Last week", "{n} weeks ago"),
    HistoryRange.MONTH: ("This month", "Last month", "{n} months ago"),
    HistoryRange.YEAR: ("This year", "Last year", "{n} years ago"),
}


def period_label(history_range: HistoryRange, period_offset: int) -> str:
    """Human-readable name for the selected period, e.g. "Last week"."""
    current, previous, older = _PERIOD_NAMES[history_range]
    if period_offset >= 0:
        return current
    if period_offset == -1:
        return previous
    return older.format(n=-period_offset)

"""Presentation helpers: day/night sections, waking-hours filter and text tables."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime, time, timedelta

from .models import Period, PlanetaryHour
from .timeutil import ensure_utc

__all__ = [
    "DAY_SECTION",
    "NIGHT_SECTION",
    "filter_waking",
    "format_row",
    "group_by_period",
    "render_table",
]

DAY_SECTION = "Day Hours"
NIGHT_SECTION = "Night Hours"

_HEADERS = ("#", "Planet", "Start", "End", "")


def group_by_period(hours: Iterable[PlanetaryHour]) -> dict[str, tuple[PlanetaryHour, ...]]:
    """Split hours into the ``Day Hours`` and ``Night Hours`` sections."""

    items = tuple(hours)
    return {
        DAY_SECTION: tuple(hour for hour in items if hour.period is Period.DAY),
        NIGHT_SECTION: tuple(hour for hour in items if hour.period is Period.NIGHT),
    }


def _waking_window(moment: datetime, start_hour: int, end_hour: int) -> tuple[datetime, datetime]:
    local_day = moment.date()
    tz = moment.tzinfo
    opens = datetime.combine(local_day, time(start_hour), tzinfo=tz)
    if end_hour >= 24:
        closes = datetime.combine(local_day + timedelta(days=1), time(0), tzinfo=tz)
    else:
        closes = datetime.combine(local_day, time(end_hour), tzinfo=tz)
    return ensure_utc(opens), ensure_utc(closes)


def filter_waking(
    hours: Iterable[PlanetaryHour], start: int = 6, end: int = 22
) -> tuple[PlanetaryHour, ...]:
    """Keep hours overlapping the local waking window ``[start:00, end:00)``.

    The window is taken on the local date of each hour's start and of its
    end, so a night hour crossing into the morning is kept when it reaches
    the next day's window.
    """

    if not 0 <= start < end <= 24:
        raise ValueError(f"waking window must satisfy 0 <= start < end <= 24, got {start}..{end}")

    kept: list[PlanetaryHour] = []
    for hour in hours:
        hour_start = ensure_utc(hour.start)
        hour_end = ensure_utc(hour.end)
        for anchor in (hour.start, hour.end):
            opens, closes = _waking_window(anchor, start, end)
            if hour_start < closes and hour_end > opens:
                kept.append(hour)
                break
    return tuple(kept)


def format_row(hour: PlanetaryHour, time_format: str = "%H:%M") -> tuple[str, ...]:
    return (
        str(hour.period_hour),
        f"{hour.planet.symbol} {hour.planet.value}",
        hour.start.strftime(time_format),
        hour.end.strftime(time_format),
        "Now" if hour.is_current else "",
    )


def _table(rows: Sequence[tuple[str, ...]]) -> list[str]:
    widths = [len(column) for column in _HEADERS]
    for row in rows:
        for idx, cell in enumerate(row):
            widths[idx] = max(widths[idx], len(cell))

    header_line = " | ".join(header.ljust(widths[idx]) for idx, header in enumerate(_HEADERS))
    divider = "-+-".join("-" * widths[idx] for idx in range(len(_HEADERS)))
    body = [" | ".join(cell.ljust(widths[idx]) for idx, cell in enumerate(row)) for row in rows]
    return [header_line.rstrip(), divider, *(line.rstrip() for line in body)]


def render_table(hours: Iterable[PlanetaryHour], time_format: str = "%H:%M") -> str:
    """Render hours as a plain-text table with one section per period."""

    lines: list[str] = []
    for title, section in group_by_period(hours).items():
        if not section:
            continue
        if lines:
            lines.append("")
        lines.append(title)
        lines.extend(_table([format_row(hour, time_format) for hour in section]))
    return "\n".join(lines)

"""Timezone and instant helpers shared by the engine and the solar providers.

All interval arithmetic in this package happens on UTC instants. Adding a
``timedelta`` to an aware datetime whose ``tzinfo`` is a :class:`ZoneInfo`
performs wall-clock arithmetic, and subtracting two datetimes that share the
same ``tzinfo`` ignores their offsets, so both silently drift by the DST
shift on transition days. The helpers below keep conversions in one place.
"""

from __future__ import annotations

import datetime as _dt
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import InvalidTimezoneError

__all__ = [
    "ensure_utc",
    "resolve_timezone",
    "local_midnight",
    "local_date",
    "day_window",
]


def ensure_utc(moment: _dt.datetime) -> _dt.datetime:
    """Return ``moment`` converted to UTC; naive values are taken as UTC."""

    if moment.tzinfo is None or moment.tzinfo.utcoffset(moment) is None:
        return moment.replace(tzinfo=_dt.UTC)
    return moment.astimezone(_dt.UTC)


@lru_cache(maxsize=64)
def resolve_timezone(name: str | ZoneInfo) -> ZoneInfo:
    """Return the :class:`ZoneInfo` for an IANA identifier."""

    if isinstance(name, ZoneInfo):
        return name
    if not isinstance(name, str) or not name.strip():
        raise InvalidTimezoneError(f"Unknown timezone: {name!r}")
    try:
        return ZoneInfo(name.strip())
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        raise InvalidTimezoneError(f"Unknown timezone: {name}") from exc


def local_midnight(day: _dt.date, tz: ZoneInfo) -> _dt.datetime:
    """Return the UTC instant of 00:00 local time on ``day``."""

    return _dt.datetime.combine(day, _dt.time(0), tzinfo=tz).astimezone(_dt.UTC)


def local_date(moment: _dt.datetime, tz: ZoneInfo) -> _dt.date:
    """Return the calendar date of ``moment`` as observed in ``tz``."""

    return ensure_utc(moment).astimezone(tz).date()


def day_window(day: _dt.date, tz: ZoneInfo) -> tuple[_dt.datetime, _dt.datetime]:
    """Return the half-open UTC window covering local calendar ``day``."""

    return local_midnight(day, tz), local_midnight(day + _dt.timedelta(days=1), tz)

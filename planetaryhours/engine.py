"""Planetary hour engine.

Splits sunrise-to-sunset and sunset-to-next-sunrise into twelve equal
temporal hours each and assigns rulers in Chaldean order starting from the
day ruler. All arithmetic runs on UTC instants; results are expressed in the
requested timezone.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace
from datetime import date, datetime, timedelta
from functools import lru_cache
from zoneinfo import ZoneInfo

from .errors import InvalidCoordinateError, NoSolarEventError
from .models import GeoLocation, Period, Planet, PlanetaryDaySchedule, PlanetaryHour
from .rulers import day_ruler_for, hour_ruler
from .solar import SolarTimeProvider, get_provider
from .timeutil import ensure_utc, local_date, resolve_timezone

__all__ = ["compute_day", "find_current", "LocationLike"]

LOG = logging.getLogger(__name__)

LocationLike = GeoLocation | Sequence[float]

_HOURS_PER_PERIOD = 12
_ONE_DAY = timedelta(days=1)


@lru_cache(maxsize=1)
def _default_provider() -> SolarTimeProvider:
    return get_provider()


def _coerce_location(location: LocationLike) -> GeoLocation:
    if isinstance(location, GeoLocation):
        return location
    try:
        latitude, longitude = location
    except (TypeError, ValueError) as exc:
        raise InvalidCoordinateError(f"Expected (latitude, longitude), got {location!r}") from exc
    return GeoLocation.from_coordinates(latitude, longitude)


def _coerce_day(day: date | datetime, tz: ZoneInfo) -> date:
    if isinstance(day, datetime):
        return local_date(day, tz)
    return day


def _seam(anchor: datetime, span: timedelta, index: int) -> datetime:
    # Each seam is derived from the anchor directly so rounding never accumulates.
    return anchor + span * index / _HOURS_PER_PERIOD


def _period_hours(
    *,
    period: Period,
    start: datetime,
    end: datetime,
    first_index: int,
    ruler: Planet,
    reference: datetime | None,
    tz: ZoneInfo,
) -> list[PlanetaryHour]:
    span = end - start
    hours: list[PlanetaryHour] = []
    for offset in range(_HOURS_PER_PERIOD):
        hour_start = _seam(start, span, offset)
        hour_end = end if offset == _HOURS_PER_PERIOD - 1 else _seam(start, span, offset + 1)
        hour_index = first_index + offset
        hours.append(
            PlanetaryHour(
                hour_index=hour_index,
                planet=hour_ruler(ruler, hour_index),
                period=period,
                start=hour_start.astimezone(tz),
                end=hour_end.astimezone(tz),
                is_current=reference is not None and hour_start <= reference < hour_end,
            )
        )
    return hours


def compute_day(
    location: LocationLike,
    day: date | datetime,
    timezone: str | ZoneInfo,
    reference: datetime,
    *,
    provider: SolarTimeProvider | None = None,
) -> PlanetaryDaySchedule:
    """Return the 24 planetary hours beginning at sunrise on ``day``.

    Parameters
    ----------
    location:
        Observer position. Raw ``(latitude, longitude)`` pairs are validated
        and rejected with :class:`~planetaryhours.errors.InvalidCoordinateError`
        when out of range.
    day:
        Local calendar date in ``timezone`` whose sunrise opens the cycle.
        A datetime is reduced to its date in ``timezone``; naive values are
        read as UTC, like ``reference``.
    timezone:
        IANA zone used for the date window, the returned instants and the
        date gate on ``reference``.
    reference:
        Instant used only to flag the current hour. An hour is current when
        it contains ``reference`` and ``reference`` falls on ``day`` locally.
    provider:
        Solar time source; defaults to Swiss Ephemeris.

    Raises
    ------
    NoSolarEventError
        When sunrise or sunset does not exist for the date (polar regions).
    """

    geo = _coerce_location(location)
    tz = resolve_timezone(timezone)
    query_day = _coerce_day(day, tz)
    source = provider if provider is not None else _default_provider()

    today = source.sunrise_sunset(geo, query_day, tz)
    tomorrow = source.sunrise_sunset(geo, query_day + _ONE_DAY, tz)

    sunrise = ensure_utc(today.sunrise)
    sunset = ensure_utc(today.sunset)
    next_sunrise = ensure_utc(tomorrow.sunrise)

    if not sunrise < sunset < next_sunrise:
        raise NoSolarEventError(
            f"No standard day/night division on {query_day.isoformat()}: "
            f"sunrise={sunrise.isoformat()} sunset={sunset.isoformat()} "
            f"next_sunrise={next_sunrise.isoformat()}",
            latitude=geo.latitude,
            day=query_day,
        )

    ruler = day_ruler_for(query_day)
    day_span = sunset - sunrise
    night_span = next_sunrise - sunset
    if LOG.isEnabledFor(logging.DEBUG):
        LOG.debug(
            "planetary day %s at (%.4f, %.4f) %s: sunrise=%s sunset=%s next_sunrise=%s "
            "day=%s night=%s day_hour=%s night_hour=%s ruler=%s",
            query_day,
            geo.latitude,
            geo.longitude,
            tz.key,
            sunrise,
            sunset,
            next_sunrise,
            day_span,
            night_span,
            day_span / _HOURS_PER_PERIOD,
            night_span / _HOURS_PER_PERIOD,
            ruler.value,
        )

    moment = ensure_utc(reference)
    gated = moment if local_date(moment, tz) == query_day else None

    hours = _period_hours(
        period=Period.DAY,
        start=sunrise,
        end=sunset,
        first_index=1,
        ruler=ruler,
        reference=gated,
        tz=tz,
    ) + _period_hours(
        period=Period.NIGHT,
        start=sunset,
        end=next_sunrise,
        first_index=_HOURS_PER_PERIOD + 1,
        ruler=ruler,
        reference=gated,
        tz=tz,
    )

    return PlanetaryDaySchedule(
        day=query_day,
        timezone=tz.key,
        location=geo,
        sunrise=sunrise.astimezone(tz),
        sunset=sunset.astimezone(tz),
        next_sunrise=next_sunrise.astimezone(tz),
        day_ruler=ruler,
        hours=tuple(hours),
    )


def find_current(
    location: LocationLike,
    reference: datetime,
    timezone: str | ZoneInfo,
    *,
    provider: SolarTimeProvider | None = None,
) -> PlanetaryHour | None:
    """Return the planetary hour containing ``reference``, or ``None``.

    Starts from the local calendar date of ``reference``. Before that day's
    sunrise the previous day's night hours apply, so the search steps at
    most one day backward or forward before giving up.
    """

    geo = _coerce_location(location)
    tz = resolve_timezone(timezone)
    moment = ensure_utc(reference)
    query_day = local_date(moment, tz)

    schedule = compute_day(geo, query_day, tz, moment, provider=provider)
    hour = schedule.hour_at(moment)

    if hour is None:
        if moment < ensure_utc(schedule[0].start):
            step = -_ONE_DAY
        else:
            step = _ONE_DAY
        LOG.debug(
            "reference %s outside planetary day %s; checking %s",
            moment.isoformat(),
            query_day.isoformat(),
            (query_day + step).isoformat(),
        )
        schedule = compute_day(geo, query_day + step, tz, moment, provider=provider)
        hour = schedule.hour_at(moment)

    if hour is None:
        LOG.info("no planetary hour contains %s within one day of %s", moment, query_day)
        return None
    return hour if hour.is_current else replace(hour, is_current=True)

"""Sunrise and sunset from Swiss Ephemeris ``rise_trans``."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from zoneinfo import ZoneInfo

from ..ephemeris.swe import from_julian_day, init_ephe, julian_day, swe
from ..errors import NoSolarEventError, SolarProviderError
from ..models import GeoLocation
from ..timeutil import day_window
from .base import SolarDay

__all__ = ["SwissEphemerisSolarProvider"]

LOG = logging.getLogger(__name__)

# swe.rise_trans reports circumpolar bodies with this status.
_CIRCUMPOLAR = -2


class SwissEphemerisSolarProvider:
    """Solar time provider backed by pyswisseph.

    Events use the Sun's upper limb with standard atmospheric refraction,
    matching the conventional published sunrise and sunset times.
    """

    def __init__(
        self,
        *,
        ephemeris_path: str | None = None,
        pressure_hpa: float = 0.0,
        temperature_c: float = 0.0,
    ) -> None:
        self._ephemeris_path = ephemeris_path
        self._pressure_hpa = pressure_hpa
        self._temperature_c = temperature_c

    def _next_event(self, jd_ut: float, event: str, location: GeoLocation) -> float:
        module = swe()
        rsmi = module.CALC_RISE if event == "rise" else module.CALC_SET
        flags = init_ephe(self._ephemeris_path)
        geopos = (float(location.longitude), float(location.latitude), float(location.altitude))
        try:
            status, tret = module.rise_trans(
                jd_ut,
                module.SUN,
                rsmi,
                geopos,
                self._pressure_hpa,
                self._temperature_c,
                flags,
            )
        except module.Error as exc:
            raise SolarProviderError(f"Swiss Ephemeris could not compute sun {event}: {exc}") from exc

        event_jd = tret[0] if tret else 0.0
        if status == _CIRCUMPOLAR or event_jd == 0.0:
            raise NoSolarEventError(
                f"No sun{event} at latitude {location.latitude:.4f}",
                latitude=location.latitude,
            )
        if status != 0:
            raise SolarProviderError(f"Swiss Ephemeris returned status {status} for sun {event}")
        return float(event_jd)

    def sunrise_sunset(
        self, location: GeoLocation, day: date, timezone: ZoneInfo
    ) -> SolarDay:
        window_start, window_end = day_window(day, timezone)

        sunrise_jd = self._next_event(julian_day(window_start), "rise", location)
        sunrise = from_julian_day(sunrise_jd)
        if not window_start <= sunrise < window_end:
            raise NoSolarEventError(
                f"No sunrise on {day.isoformat()} at latitude {location.latitude:.4f}",
                latitude=location.latitude,
                day=day,
            )

        sunset = from_julian_day(self._next_event(sunrise_jd, "set", location))
        if sunset - sunrise >= timedelta(days=1):
            raise NoSolarEventError(
                f"No sunset after sunrise on {day.isoformat()} "
                f"at latitude {location.latitude:.4f}",
                latitude=location.latitude,
                day=day,
            )

        LOG.debug(
            "swiss sunrise=%s sunset=%s for %s at (%s, %s)",
            sunrise.isoformat(),
            sunset.isoformat(),
            day.isoformat(),
            location.latitude,
            location.longitude,
        )
        return SolarDay(sunrise=sunrise.astimezone(timezone), sunset=sunset.astimezone(timezone))

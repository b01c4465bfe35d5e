"""Sunrise and sunset from the Skyfield almanac."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from pathlib import Path
from zoneinfo import ZoneInfo

from ..errors import NoSolarEventError, SolarProviderError
from ..models import GeoLocation
from ..timeutil import day_window, local_midnight
from .base import SolarDay

LOG = logging.getLogger(__name__)

try:
    from skyfield import almanac
    from skyfield.api import Loader, wgs84
except ImportError:
    LOG.info("skyfield unavailable", extra={"provider": "skyfield"}, exc_info=True)
    almanac = None
    Loader = None
    wgs84 = None

__all__ = ["SkyfieldSolarProvider"]


class SkyfieldSolarProvider:
    """Solar time provider backed by a JPL kernel through Skyfield."""

    def __init__(self, *, kernel: str = "de421.bsp", data_dir: str | Path | None = None) -> None:
        if Loader is None:
            raise SolarProviderError("skyfield not installed; install the 'skyfield' extra")
        directory = Path(data_dir).expanduser() if data_dir else Path.home() / ".skyfield"
        loader = Loader(str(directory))
        try:
            self._ts = loader.timescale()
            self._eph = loader(kernel)
        except (OSError, ValueError) as exc:
            raise SolarProviderError(f"Skyfield kernel {kernel!r} unavailable: {exc}") from exc

    def sunrise_sunset(
        self, location: GeoLocation, day: date, timezone: ZoneInfo
    ) -> SolarDay:
        window_start, window_end = day_window(day, timezone)
        search_end = local_midnight(day + timedelta(days=2), timezone)

        observer = wgs84.latlon(
            location.latitude, location.longitude, elevation_m=location.altitude
        )
        is_up = almanac.sunrise_sunset(self._eph, observer)
        times, events = almanac.find_discrete(
            self._ts.from_datetime(window_start),
            self._ts.from_datetime(search_end),
            is_up,
        )
        transitions = [(t.utc_datetime(), bool(up)) for t, up in zip(times, events)]

        sunrise = next(
            (moment for moment, up in transitions if up and window_start <= moment < window_end),
            None,
        )
        if sunrise is None:
            raise NoSolarEventError(
                f"No sunrise on {day.isoformat()} at latitude {location.latitude:.4f}",
                latitude=location.latitude,
                day=day,
            )
        sunset = next(
            (moment for moment, up in transitions if not up and moment > sunrise),
            None,
        )
        if sunset is None or sunset - sunrise >= timedelta(days=1):
            raise NoSolarEventError(
                f"No sunset after sunrise on {day.isoformat()} "
                f"at latitude {location.latitude:.4f}",
                latitude=location.latitude,
                day=day,
            )

        LOG.debug("skyfield sunrise=%s sunset=%s for %s", sunrise, sunset, day)
        return SolarDay(sunrise=sunrise.astimezone(timezone), sunset=sunset.astimezone(timezone))

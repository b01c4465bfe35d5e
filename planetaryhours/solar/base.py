"""Solar time provider contract."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol, runtime_checkable
from zoneinfo import ZoneInfo

from ..models import GeoLocation

__all__ = ["SolarDay", "SolarTimeProvider"]


@dataclass(frozen=True)
class SolarDay:
    """Sunrise and the following sunset for one local calendar date."""

    sunrise: datetime
    sunset: datetime


@runtime_checkable
class SolarTimeProvider(Protocol):
    """Anything able to report sunrise and sunset for a local date.

    ``sunrise`` is the first sunrise within local ``day`` in ``timezone`` and
    ``sunset`` the first sunset after it. Implementations raise
    :class:`~planetaryhours.errors.NoSolarEventError` when either does not
    exist and :class:`~planetaryhours.errors.SolarProviderError` when the
    backend itself fails.
    """

    def sunrise_sunset(
        self, location: GeoLocation, day: date, timezone: ZoneInfo
    ) -> SolarDay: ...

"""Planetary hours: unequal temporal hours and their Chaldean rulers."""

from __future__ import annotations

from .engine import compute_day, find_current
from .errors import (
    InvalidCoordinateError,
    InvalidTimezoneError,
    NoSolarEventError,
    PlanetaryHoursError,
    SolarProviderError,
)
from .models import GeoLocation, Period, Planet, PlanetaryDaySchedule, PlanetaryHour
from .rulers import (
    CHALDEAN_ORDER,
    DAY_RULERS,
    PLANETARY_DAYS,
    PLANETARY_HOUR_TABLE,
    PlanetaryDay,
    day_ruler,
    day_ruler_for,
    hour_ruler,
    hour_sequence,
)
from .solar import SolarDay, SolarTimeProvider, SwissEphemerisSolarProvider, get_provider

__version__ = "0.3.0"

__all__ = [
    "__version__",
    "compute_day",
    "find_current",
    "GeoLocation",
    "Period",
    "Planet",
    "PlanetaryHour",
    "PlanetaryDaySchedule",
    "PlanetaryDay",
    "CHALDEAN_ORDER",
    "DAY_RULERS",
    "PLANETARY_DAYS",
    "PLANETARY_HOUR_TABLE",
    "day_ruler",
    "day_ruler_for",
    "hour_ruler",
    "hour_sequence",
    "SolarDay",
    "SolarTimeProvider",
    "SwissEphemerisSolarProvider",
    "get_provider",
    "PlanetaryHoursError",
    "InvalidCoordinateError",
    "InvalidTimezoneError",
    "NoSolarEventError",
    "SolarProviderError",
]

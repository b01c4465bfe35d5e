"""Typed containers produced by the planetary hour engine."""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, overload

from .errors import InvalidCoordinateError
from .timeutil import ensure_utc

__all__ = [
    "Planet",
    "Period",
    "GeoLocation",
    "PlanetaryHour",
    "PlanetaryDaySchedule",
]


class Planet(str, Enum):
    """The seven classical planets."""

    SATURN = "Saturn"
    JUPITER = "Jupiter"
    MARS = "Mars"
    SUN = "Sun"
    VENUS = "Venus"
    MERCURY = "Mercury"
    MOON = "Moon"

    @property
    def symbol(self) -> str:
        return _PLANET_SYMBOLS[self]

    def __str__(self) -> str:
        return self.value


_PLANET_SYMBOLS: dict[Planet, str] = {
    Planet.SATURN: "♄",
    Planet.JUPITER: "♃",
    Planet.MARS: "♂",
    Planet.SUN: "☉",
    Planet.VENUS: "♀",
    Planet.MERCURY: "☿",
    Planet.MOON: "☽",
}


class Period(str, Enum):
    """Half of the planetary day an hour belongs to."""

    DAY = "day"
    NIGHT = "night"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class GeoLocation:
    """Validated observer location.

    Construction fails with :class:`InvalidCoordinateError` instead of
    substituting a default position.
    """

    latitude: float
    longitude: float
    altitude: float = 0.0

    def __post_init__(self) -> None:
        for label, value, limit in (
            ("latitude", self.latitude, 90.0),
            ("longitude", self.longitude, 180.0),
        ):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidCoordinateError(f"{label} must be a number, got {value!r}")
            if not math.isfinite(value):
                raise InvalidCoordinateError(f"{label} must be finite, got {value!r}")
            if not -limit <= value <= limit:
                raise InvalidCoordinateError(
                    f"{label} {value} outside [-{limit:g}, {limit:g}]"
                )
        if isinstance(self.altitude, bool) or not isinstance(self.altitude, (int, float)):
            raise InvalidCoordinateError(f"altitude must be a number, got {self.altitude!r}")
        if not math.isfinite(self.altitude):
            raise InvalidCoordinateError(f"altitude must be finite, got {self.altitude!r}")

    @classmethod
    def from_coordinates(
        cls, latitude: Any, longitude: Any, altitude: Any = 0.0
    ) -> GeoLocation:
        """Parse loosely typed coordinates (strings, ints) into a location."""

        try:
            lat = float(latitude)
            lon = float(longitude)
            alt = float(altitude)
        except (TypeError, ValueError) as exc:
            raise InvalidCoordinateError(
                f"Coordinates must be numeric: ({latitude!r}, {longitude!r})"
            ) from exc
        return cls(latitude=lat, longitude=lon, altitude=alt)


@dataclass(frozen=True)
class PlanetaryHour:
    """A single planetary hour covering ``[start, end)``."""

    hour_index: int
    planet: Planet
    period: Period
    start: datetime
    end: datetime
    is_current: bool = False

    def __post_init__(self) -> None:
        if not 1 <= self.hour_index <= 24:
            raise ValueError(f"hour_index must be within 1..24, got {self.hour_index}")
        if not self.start < self.end:
            raise ValueError(
                f"hour {self.hour_index} start {self.start.isoformat()} "
                f"is not before end {self.end.isoformat()}"
            )

    @property
    def period_hour(self) -> int:
        """Position within its period, 1..12."""
        return self.hour_index if self.hour_index <= 12 else self.hour_index - 12

    @property
    def is_day(self) -> bool:
        return self.period is Period.DAY

    @property
    def duration(self) -> timedelta:
        return ensure_utc(self.end) - ensure_utc(self.start)

    def contains(self, instant: datetime) -> bool:
        """Return ``True`` when ``instant`` lies in ``[start, end)``."""

        moment = ensure_utc(instant)
        return ensure_utc(self.start) <= moment < ensure_utc(self.end)

    def to_payload(self) -> dict[str, object]:
        return {
            "hour": self.hour_index,
            "planet": self.planet.value,
            "period": self.period.value,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "is_current": self.is_current,
        }


@dataclass(frozen=True)
class PlanetaryDaySchedule(Sequence[PlanetaryHour]):
    """The 24 planetary hours from ``sunrise`` to ``next_sunrise``.

    Behaves as a read-only sequence ordered by ``hour_index``.
    """

    day: date
    timezone: str
    location: GeoLocation
    sunrise: datetime
    sunset: datetime
    next_sunrise: datetime
    day_ruler: Planet
    hours: tuple[PlanetaryHour, ...]

    @overload
    def __getitem__(self, index: int) -> PlanetaryHour: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[PlanetaryHour, ...]: ...

    def __getitem__(self, index):
        return self.hours[index]

    def __len__(self) -> int:
        return len(self.hours)

    def __iter__(self) -> Iterator[PlanetaryHour]:
        return iter(self.hours)

    @property
    def day_hours(self) -> tuple[PlanetaryHour, ...]:
        return tuple(hour for hour in self.hours if hour.period is Period.DAY)

    @property
    def night_hours(self) -> tuple[PlanetaryHour, ...]:
        return tuple(hour for hour in self.hours if hour.period is Period.NIGHT)

    @property
    def current(self) -> PlanetaryHour | None:
        return next((hour for hour in self.hours if hour.is_current), None)

    def hour_at(self, instant: datetime) -> PlanetaryHour | None:
        """Return the hour containing ``instant``, ignoring the date gate."""

        return next((hour for hour in self.hours if hour.contains(instant)), None)

    def to_payload(self) -> dict[str, object]:
        return {
            "date": self.day.isoformat(),
            "timezone": self.timezone,
            "latitude": self.location.latitude,
            "longitude": self.location.longitude,
            "sunrise": self.sunrise.isoformat(),
            "sunset": self.sunset.isoformat(),
            "next_sunrise": self.next_sunrise.isoformat(),
            "day_ruler": self.day_ruler.value,
            "hours": [hour.to_payload() for hour in self.hours],
        }

"""Exception types raised by the planetary hour engine and its providers."""

from __future__ import annotations

__all__ = [
    "PlanetaryHoursError",
    "InvalidCoordinateError",
    "InvalidTimezoneError",
    "NoSolarEventError",
    "SolarProviderError",
]


class PlanetaryHoursError(RuntimeError):
    """Base class for all planetary hour failures."""


class InvalidCoordinateError(PlanetaryHoursError, ValueError):
    """Raised when latitude or longitude is out of range or not finite."""


class InvalidTimezoneError(PlanetaryHoursError, ValueError):
    """Raised when a timezone identifier is not a known IANA zone."""


class NoSolarEventError(PlanetaryHoursError):
    """Raised when no sunrise or sunset exists for a location and date.

    This is the polar day / polar night case. Callers are expected to show
    that no standard day/night division applies rather than retry.
    """

    def __init__(self, message: str, *, latitude: float | None = None, day=None) -> None:
        super().__init__(message)
        self.latitude = latitude
        self.day = day


class SolarProviderError(PlanetaryHoursError):
    """Raised when a solar time backend is unavailable or fails."""

"""Day rulers, the Chaldean order and planetary-day correspondences."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, Tuple

from .models import Planet

__all__ = [
    "CHALDEAN_ORDER",
    "WEEKDAY_NAMES",
    "DAY_RULERS",
    "PLANETARY_DAYS",
    "PLANETARY_HOUR_TABLE",
    "PlanetaryDay",
    "day_of_week",
    "day_ruler",
    "day_ruler_for",
    "hour_ruler",
    "hour_sequence",
]


CHALDEAN_ORDER: Tuple[Planet, ...] = (
    Planet.SATURN,
    Planet.JUPITER,
    Planet.MARS,
    Planet.SUN,
    Planet.VENUS,
    Planet.MERCURY,
    Planet.MOON,
)

# Indexed by day of week with 0 = Sunday.
WEEKDAY_NAMES: Tuple[str, ...] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

DAY_RULERS: Tuple[Planet, ...] = (
    Planet.SUN,
    Planet.MOON,
    Planet.MARS,
    Planet.MERCURY,
    Planet.JUPITER,
    Planet.VENUS,
    Planet.SATURN,
)


@dataclass(frozen=True)
class PlanetaryDay:
    """Planetary day ruler and ritual themes."""

    weekday: str
    ruler: Planet
    themes: Tuple[str, ...]

    def to_payload(self) -> dict[str, object]:
        return {
            "weekday": self.weekday,
            "ruler": self.ruler.value,
            "symbol": self.ruler.symbol,
            "themes": list(self.themes),
        }


def day_of_week(day: date) -> int:
    """Return the day of week for ``day`` with 0 = Sunday .. 6 = Saturday."""

    return (day.weekday() + 1) % 7


def day_ruler(dow: int) -> Planet:
    """Return the planet ruling day-of-week ``dow`` (0 = Sunday)."""

    if isinstance(dow, bool) or not isinstance(dow, int) or not 0 <= dow <= 6:
        raise ValueError(f"day of week must be an integer in 0..6, got {dow!r}")
    return DAY_RULERS[dow]


def day_ruler_for(day: date) -> Planet:
    return day_ruler(day_of_week(day))


def hour_ruler(ruler: Planet, hour_index: int) -> Planet:
    """Return the ruler of ``hour_index`` (1..24) on a day ruled by ``ruler``.

    Hour 1 belongs to the day ruler; later hours step through the Chaldean
    order, so hours 8, 15 and 22 return to the day ruler.
    """

    if not 1 <= hour_index <= 24:
        raise ValueError(f"hour_index must be within 1..24, got {hour_index}")
    start = CHALDEAN_ORDER.index(Planet(ruler))
    return CHALDEAN_ORDER[(start + hour_index - 1) % len(CHALDEAN_ORDER)]


def hour_sequence(ruler: Planet) -> Tuple[Planet, ...]:
    """Return the 24 hour rulers for a day ruled by ``ruler``."""

    try:
        planet = Planet(ruler)
    except ValueError as exc:
        raise ValueError(f"Unknown day ruler: {ruler}") from exc
    return tuple(hour_ruler(planet, hour) for hour in range(1, 25))


PLANETARY_DAYS: Tuple[PlanetaryDay, ...] = (
    PlanetaryDay("Sunday", Planet.SUN, ("vitality", "clarity", "leadership")),
    PlanetaryDay("Monday", Planet.MOON, ("intuition", "care", "rhythm")),
    PlanetaryDay("Tuesday", Planet.MARS, ("courage", "initiative", "protection")),
    PlanetaryDay("Wednesday", Planet.MERCURY, ("communication", "study", "commerce")),
    PlanetaryDay("Thursday", Planet.JUPITER, ("abundance", "teaching", "blessing")),
    PlanetaryDay("Friday", Planet.VENUS, ("relationships", "art", "harmonising")),
    PlanetaryDay("Saturday", Planet.SATURN, ("boundaries", "structure", "ancestor work")),
)


# Reference table for cross-checks; the engine derives rulers with hour_ruler().
PLANETARY_HOUR_TABLE: Dict[str, Tuple[Planet, ...]] = {
    day.weekday: hour_sequence(day.ruler) for day in PLANETARY_DAYS
}

"""Swiss Ephemeris access helpers."""

from __future__ import annotations

from .swe import from_julian_day, has_swe, init_ephe, julian_day, reset_swe, swe

__all__ = ["swe", "has_swe", "reset_swe", "init_ephe", "julian_day", "from_julian_day"]

"""Solar time providers consumed by the planetary hour engine."""

from __future__ import annotations

from ..config.settings import Settings
from .base import SolarDay, SolarTimeProvider
from .swiss import SwissEphemerisSolarProvider

__all__ = [
    "SolarDay",
    "SolarTimeProvider",
    "SwissEphemerisSolarProvider",
    "get_provider",
]


def get_provider(settings: Settings | None = None) -> SolarTimeProvider:
    """Return the solar time provider selected by ``settings``."""

    cfg = (settings or Settings()).solar
    if cfg.provider == "skyfield":
        from .skyfield import SkyfieldSolarProvider

        return SkyfieldSolarProvider(kernel=cfg.skyfield_kernel, data_dir=cfg.skyfield_data_dir)
    return SwissEphemerisSolarProvider(
        ephemeris_path=cfg.ephemeris_path,
        pressure_hpa=cfg.pressure_hpa,
        temperature_c=cfg.temperature_c,
    )

"""Configuration helpers exposed at :mod:`planetaryhours.config`."""

from __future__ import annotations

from .settings import (
    DisplayCfg,
    LocationCfg,
    LoggingCfg,
    Settings,
    SolarCfg,
    config_path,
    default_settings,
    get_config_home,
    load_settings,
    save_settings,
)

__all__ = [
    "Settings",
    "SolarCfg",
    "LocationCfg",
    "DisplayCfg",
    "LoggingCfg",
    "config_path",
    "get_config_home",
    "default_settings",
    "load_settings",
    "save_settings",
]

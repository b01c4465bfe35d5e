"""Configuration models and helpers for planetary hour settings."""

from __future__ import annotations

import os
from copy import deepcopy
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from ..timeutil import resolve_timezone

CURRENT_SETTINGS_SCHEMA_VERSION = 2

# -------------------- Settings Schema --------------------


class SolarCfg(BaseModel):
    """Solar time provider selection."""

    provider: Literal["swiss", "skyfield"] = "swiss"
    ephemeris_path: Optional[str] = None
    pressure_hpa: float = Field(default=0.0, ge=0.0)
    temperature_c: float = 0.0
    skyfield_kernel: str = "de421.bsp"
    skyfield_data_dir: Optional[str] = None


class LocationCfg(BaseModel):
    """Default observer used when the CLI is called without coordinates."""

    latitude: Optional[float] = Field(default=None, ge=-90.0, le=90.0)
    longitude: Optional[float] = Field(default=None, ge=-180.0, le=180.0)
    altitude: float = 0.0
    timezone: Optional[str] = None

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        resolve_timezone(value)
        return value

    @model_validator(mode="after")
    def _paired_coordinates(self) -> "LocationCfg":
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be configured together")
        return self

    @property
    def is_complete(self) -> bool:
        return self.latitude is not None and self.timezone is not None


class DisplayCfg(BaseModel):
    """Presentation defaults for tables."""

    time_format: str = "%H:%M"
    waking_start: int = Field(default=6, ge=0, le=23)
    waking_end: int = Field(default=22, ge=1, le=24)

    @model_validator(mode="after")
    def _ordered_window(self) -> "DisplayCfg":
        if self.waking_end <= self.waking_start:
            raise ValueError("waking_end must be after waking_start")
        return self


class LoggingCfg(BaseModel):
    level: str = "INFO"


class Settings(BaseModel):
    """Top-level settings model persisted on disk."""

    schema_version: int = Field(
        default=CURRENT_SETTINGS_SCHEMA_VERSION,
        ge=1,
        description="Version marker for persisted configuration payloads.",
    )
    solar: SolarCfg = Field(default_factory=SolarCfg)
    location: LocationCfg = Field(default_factory=LocationCfg)
    display: DisplayCfg = Field(default_factory=DisplayCfg)
    logging: LoggingCfg = Field(default_factory=LoggingCfg)


CONFIG_FILENAME = "config.yaml"


def get_config_home() -> Path:
    """Return the directory where settings should be stored."""

    if os.name == "nt" and "PLANETARYHOURS_HOME" not in os.environ:
        base = Path(os.environ.get("LOCALAPPDATA", str(Path.home() / "AppData" / "Local")))
        return base / "PlanetaryHours"
    return Path(os.environ.get("PLANETARYHOURS_HOME", str(Path.home() / ".planetaryhours")))


def config_path() -> Path:
    """Return the full path to the configuration file, creating directories as needed."""

    home = get_config_home()
    home.mkdir(parents=True, exist_ok=True)
    return home / CONFIG_FILENAME


def default_settings() -> Settings:
    return Settings()


def save_settings(settings: Settings, path: Optional[Path] = None) -> Path:
    """Persist the given settings to disk as YAML."""

    target_path = Path(path) if path else config_path()
    target_path.parent.mkdir(parents=True, exist_ok=True)
    data = settings.model_dump()
    with target_path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(data, handle, sort_keys=False, allow_unicode=True)
    return target_path


def _coerce_schema_version(raw: object) -> int:
    try:
        value = int(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 1
    return max(1, value)


def _upgrade_settings_payload(
    data: dict[str, object], *, schema_version: int
) -> tuple[dict[str, object], bool]:
    """Apply upgrades required for older settings payloads."""

    upgraded = deepcopy(data)
    version = max(1, schema_version)
    changed = False

    if version < 2:
        # v1 files carry no marker; the layout is otherwise unchanged.
        version = 2
        changed = True

    if upgraded.get("schema_version") != version:
        upgraded["schema_version"] = version
        changed = True

    return upgraded, changed


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from disk, creating defaults if missing."""

    source_path = Path(path) if path else config_path()
    if not source_path.exists():
        settings = default_settings()
        save_settings(settings, source_path)
        return settings
    with source_path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}
    if not isinstance(raw, dict):
        raw = {}
    schema_version = _coerce_schema_version(raw.get("schema_version"))
    data, upgraded = _upgrade_settings_payload(raw, schema_version=schema_version)
    settings = Settings(**data)
    if upgraded:
        save_settings(settings, source_path)
    return settings

"""Lazy Swiss Ephemeris loader and Julian day conversions."""

from __future__ import annotations

import importlib
import importlib.util
import logging
import os
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

from ..errors import SolarProviderError

__all__ = ["swe", "reset_swe", "has_swe", "init_ephe", "julian_day", "from_julian_day"]

LOG = logging.getLogger(__name__)

_EPHE_SUFFIXES: tuple[str, ...] = (".se1", ".se2", ".se3", ".se4", ".se5")

_swe_mod: Any | None = None
_configured_path: str | None = None
_configured_flags: int | None = None


def _load_swe() -> Any:
    global _swe_mod
    if _swe_mod is None:
        try:
            _swe_mod = importlib.import_module("swisseph")
        except ImportError as exc:
            raise SolarProviderError(
                "Swiss Ephemeris not available. Install pyswisseph (package: 'pyswisseph')."
            ) from exc
    return _swe_mod


class _SweProxy:
    """Proxy object exposing Swiss Ephemeris attributes lazily."""

    def __call__(self) -> Any:
        return _load_swe()

    def __getattr__(self, item: str) -> Any:
        return getattr(_load_swe(), item)


swe = _SweProxy()


def reset_swe() -> None:
    """For tests: force reload of swisseph and its path on next use."""
    global _swe_mod, _configured_path, _configured_flags
    _swe_mod = None
    _configured_path = None
    _configured_flags = None


def has_swe() -> bool:
    """Return ``True`` if pyswisseph is importable."""

    if _swe_mod is not None:
        return True
    return importlib.util.find_spec("swisseph") is not None


def _has_ephemeris_files(root: Path) -> bool:
    try:
        return any(
            entry.is_file() and entry.suffix.lower() in _EPHE_SUFFIXES
            for entry in root.iterdir()
        )
    except OSError:
        return False


def init_ephe(path: str | None = None) -> int:
    """Point Swiss Ephemeris at ``path`` and return the calculation flags.

    Falls back to the built-in Moshier ephemeris when no ``.se*`` data files
    are found, which is precise to well under a second for sunrise work.
    """

    global _configured_path, _configured_flags

    resolved = path or os.environ.get("SE_EPHE_PATH")
    if _configured_flags is not None and resolved == _configured_path:
        return _configured_flags

    module = swe()
    candidate = Path(resolved).expanduser() if resolved else None
    if candidate is not None and candidate.is_dir() and _has_ephemeris_files(candidate):
        module.set_ephe_path(str(candidate))
        flags = int(module.FLG_SWIEPH)
        LOG.info("Ephemeris runtime mode: swiss (path=%s)", candidate)
    else:
        module.set_ephe_path(None)
        flags = int(module.FLG_MOSEPH)
        if resolved:
            LOG.info("Ephemeris runtime mode: moshier (path=%s - Swiss data missing)", resolved)
        else:
            LOG.debug("Ephemeris runtime mode: moshier")

    _configured_path = resolved
    _configured_flags = flags
    return flags


def julian_day(moment: datetime) -> float:
    """Return the UT Julian day for a timezone-aware ``moment``."""

    if moment.tzinfo is None or moment.tzinfo.utcoffset(moment) is None:
        raise ValueError("datetime must be timezone-aware")
    moment_utc = moment.astimezone(UTC)
    hour = (
        moment_utc.hour
        + moment_utc.minute / 60.0
        + moment_utc.second / 3600.0
        + moment_utc.microsecond / 3.6e9
    )
    module = swe()
    return module.julday(moment_utc.year, moment_utc.month, moment_utc.day, hour, module.GREG_CAL)


def from_julian_day(jd_ut: float) -> datetime:
    """Convert a UT Julian day back to an aware UTC datetime, to the microsecond."""

    module = swe()
    year, month, day, hour = module.revjul(jd_ut, module.GREG_CAL)
    base = datetime(year, month, day, tzinfo=UTC)
    return base + timedelta(microseconds=round(hour * 3.6e9))

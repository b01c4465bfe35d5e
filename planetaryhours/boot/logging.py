"""Logging setup for the planetary hours command line."""

from __future__ import annotations

import logging
import os
from typing import Any

__all__ = ["configure_logging", "resolve_level"]

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def resolve_level(value: str | int | None, default: int = logging.INFO) -> int:
    """Translate a level name or number into a ``logging`` level.

    Unknown names map to ``default``.
    """

    if value is None:
        return default
    if isinstance(value, int):
        return value
    candidate = value.strip()
    if candidate.isdigit():
        return int(candidate)
    resolved = logging.getLevelName(candidate.upper()) if candidate else None
    return resolved if isinstance(resolved, int) else default


def configure_logging(level: str | int | None = None, **kwargs: Any) -> int:
    """Configure the root logger and return the level applied.

    ``LOG_LEVEL`` in the environment wins over ``level``, which usually comes
    from the ``logging.level`` setting. Extra keyword arguments go to
    :func:`logging.basicConfig`.
    """

    effective = resolve_level(os.environ.get("LOG_LEVEL") or level)
    kwargs.setdefault("format", _FORMAT)
    kwargs.setdefault("datefmt", _DATEFMT)
    kwargs.setdefault("force", True)
    logging.basicConfig(level=effective, **kwargs)
    return effective

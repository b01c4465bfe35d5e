"""Entry point for ``python -m planetaryhours.cli``."""

from __future__ import annotations

from . import main

if __name__ == "__main__":  # pragma: no cover
    main()

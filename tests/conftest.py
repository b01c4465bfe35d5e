"""Pytest configuration for planetary hour tests."""

from __future__ import annotations

from datetime import date, datetime, time
from zoneinfo import ZoneInfo

import pytest

from planetaryhours.errors import NoSolarEventError
from planetaryhours.models import GeoLocation
from planetaryhours.solar import SolarDay

MONTICELLO = GeoLocation(latitude=37.8714, longitude=-109.3425)
DENVER = "America/Denver"


class StubSolarProvider:
    """Solar provider returning fixed local sunrise/sunset times per date."""

    def __init__(self, table: dict[date, tuple[time, time] | None], tz: str = DENVER) -> None:
        self._table = table
        self._tz = ZoneInfo(tz)
        self.calls: list[date] = []

    def sunrise_sunset(self, location: GeoLocation, day: date, timezone: ZoneInfo) -> SolarDay:
        self.calls.append(day)
        try:
            entry = self._table[day]
        except KeyError as exc:
            raise AssertionError(f"unexpected date {day!r}") from exc
        if entry is None:
            raise NoSolarEventError(f"no sunrise on {day}", latitude=location.latitude, day=day)
        rise, set_ = entry
        return SolarDay(
            sunrise=datetime.combine(day, rise, tzinfo=self._tz),
            sunset=datetime.combine(day, set_, tzinfo=self._tz),
        )


def local(day: date, clock: time, tz: str = DENVER) -> datetime:
    return datetime.combine(day, clock, tzinfo=ZoneInfo(tz))


@pytest.fixture
def monticello_provider() -> StubSolarProvider:
    # 2024-06-16 is a Sunday.
    return StubSolarProvider(
        {
            date(2024, 6, 15): (time(6, 23, 50), time(20, 4, 40)),
            date(2024, 6, 16): (time(6, 24), time(20, 5)),
            date(2024, 6, 17): (time(6, 24, 30), time(20, 5, 20)),
            date(2024, 6, 18): (time(6, 24, 50), time(20, 5, 40)),
        }
    )


@pytest.fixture(autouse=True)
def _isolated_config_home(tmp_path, monkeypatch):
    monkeypatch.setenv("PLANETARYHOURS_HOME", str(tmp_path / "config-home"))
    monkeypatch.delenv("LOG_LEVEL", raising=False)

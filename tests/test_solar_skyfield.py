"""Skyfield provider tests against fixed almanac transitions."""

from __future__ import annotations

import importlib
from datetime import UTC, date, datetime, time, timedelta
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from planetaryhours import (
    GeoLocation,
    NoSolarEventError,
    Planet,
    SolarProviderError,
    SolarTimeProvider,
    compute_day,
    get_provider,
)
from planetaryhours.config import Settings

from .conftest import DENVER, MONTICELLO, local

skyfield_provider = importlib.import_module("planetaryhours.solar.skyfield")

SUNDAY = date(2024, 6, 16)
OSLO = "Europe/Oslo"
TROMSO = GeoLocation(latitude=69.6492, longitude=18.9553)


def _utc(day: date, clock: time, tz: str = DENVER) -> datetime:
    return local(day, clock, tz).astimezone(UTC)


class _Time:
    def __init__(self, moment: datetime) -> None:
        self._moment = moment

    def utc_datetime(self) -> datetime:
        return self._moment


class _Timescale:
    def from_datetime(self, moment: datetime) -> datetime:
        return moment


class _Almanac:
    """Replays a fixed list of ``(utc_instant, sun_is_up)`` transitions."""

    def __init__(self, transitions: list[tuple[datetime, bool]]) -> None:
        self.transitions = transitions
        self.searches: list[tuple[datetime, datetime]] = []

    def sunrise_sunset(self, eph, observer):
        return (eph, observer)

    def find_discrete(self, start, end, is_up):
        self.searches.append((start, end))
        inside = [(moment, up) for moment, up in self.transitions if start <= moment < end]
        return [_Time(moment) for moment, _ in inside], [int(up) for _, up in inside]


class _Wgs84:
    @staticmethod
    def latlon(latitude, longitude, elevation_m=0.0):
        return (latitude, longitude, elevation_m)


class _Loader:
    directories: list[str] = []
    kernels: list[str] = []

    def __init__(self, directory: str) -> None:
        self.directories.append(directory)

    def timescale(self) -> _Timescale:
        return _Timescale()

    def __call__(self, kernel: str):
        self.kernels.append(kernel)
        return {"kernel": kernel}


@pytest.fixture
def install_almanac(monkeypatch):
    monkeypatch.setattr(_Loader, "directories", [])
    monkeypatch.setattr(_Loader, "kernels", [])
    monkeypatch.setattr(skyfield_provider, "Loader", _Loader)
    monkeypatch.setattr(skyfield_provider, "wgs84", _Wgs84)

    def install(transitions):
        fake = _Almanac(transitions)
        monkeypatch.setattr(skyfield_provider, "almanac", fake)
        return fake

    return install


@pytest.fixture
def monticello_transitions():
    monday = SUNDAY + timedelta(days=1)
    return [
        (_utc(SUNDAY, time(6, 24)), True),
        (_utc(SUNDAY, time(20, 5)), False),
        (_utc(monday, time(6, 24, 30)), True),
        (_utc(monday, time(20, 5, 20)), False),
    ]


def test_normal_day(install_almanac, monticello_transitions):
    fake = install_almanac(monticello_transitions)
    provider = skyfield_provider.SkyfieldSolarProvider()

    solar = provider.sunrise_sunset(MONTICELLO, SUNDAY, ZoneInfo(DENVER))

    assert solar.sunrise == local(SUNDAY, time(6, 24))
    assert solar.sunset == local(SUNDAY, time(20, 5))
    assert solar.sunrise.tzinfo == ZoneInfo(DENVER)
    assert fake.searches == [
        (_utc(SUNDAY, time(0)), _utc(SUNDAY + timedelta(days=2), time(0)))
    ]
    assert isinstance(provider, SolarTimeProvider)


def test_schedule_from_skyfield(install_almanac, monticello_transitions):
    install_almanac(monticello_transitions)
    provider = skyfield_provider.SkyfieldSolarProvider()

    schedule = compute_day(
        MONTICELLO, SUNDAY, DENVER, local(SUNDAY, time(12)), provider=provider
    )

    assert schedule.day_ruler is Planet.SUN
    assert schedule[0].start == local(SUNDAY, time(6, 24))
    assert schedule[23].end == local(SUNDAY + timedelta(days=1), time(6, 24, 30))
    assert schedule.current.hour_index == 5


def test_sun_up_at_midnight(install_almanac):
    # Late spring in the far north: the Sun dips below the horizon for about an hour.
    monday = SUNDAY + timedelta(days=1)
    install_almanac(
        [
            (_utc(SUNDAY, time(0, 40), OSLO), False),
            (_utc(SUNDAY, time(1, 55), OSLO), True),
            (_utc(monday, time(0, 35), OSLO), False),
            (_utc(monday, time(2, 0), OSLO), True),
        ]
    )
    provider = skyfield_provider.SkyfieldSolarProvider()

    solar = provider.sunrise_sunset(TROMSO, SUNDAY, ZoneInfo(OSLO))

    assert solar.sunrise == local(SUNDAY, time(1, 55), OSLO)
    assert solar.sunset == local(monday, time(0, 35), OSLO)


def test_polar_day_or_night_has_no_sunrise(install_almanac):
    install_almanac([])
    provider = skyfield_provider.SkyfieldSolarProvider()

    with pytest.raises(NoSolarEventError) as excinfo:
        provider.sunrise_sunset(TROMSO, SUNDAY, ZoneInfo(OSLO))

    assert excinfo.value.day == SUNDAY
    assert excinfo.value.latitude == TROMSO.latitude


def test_sunrise_after_local_day_is_rejected(install_almanac):
    monday = SUNDAY + timedelta(days=1)
    install_almanac(
        [
            (_utc(SUNDAY, time(23, 50), OSLO), False),
            (_utc(monday, time(0, 30), OSLO), True),
        ]
    )
    provider = skyfield_provider.SkyfieldSolarProvider()

    with pytest.raises(NoSolarEventError):
        provider.sunrise_sunset(TROMSO, SUNDAY, ZoneInfo(OSLO))


@pytest.mark.parametrize(
    "transitions",
    [
        [(_utc(SUNDAY, time(10), OSLO), True)],
        [
            (_utc(SUNDAY, time(10), OSLO), True),
            (_utc(SUNDAY + timedelta(days=1), time(10), OSLO), False),
        ],
    ],
    ids=["no-sunset", "sunset-a-day-later"],
)
def test_sunset_within_a_day_required(install_almanac, transitions):
    install_almanac(transitions)
    provider = skyfield_provider.SkyfieldSolarProvider()

    with pytest.raises(NoSolarEventError):
        provider.sunrise_sunset(TROMSO, SUNDAY, ZoneInfo(OSLO))


def test_get_provider_selects_skyfield(install_almanac, tmp_path):
    install_almanac([])
    settings = Settings(
        solar={
            "provider": "skyfield",
            "skyfield_kernel": "de440s.bsp",
            "skyfield_data_dir": str(tmp_path),
        }
    )

    provider = get_provider(settings)

    assert isinstance(provider, skyfield_provider.SkyfieldSolarProvider)
    assert _Loader.directories == [str(tmp_path)]
    assert _Loader.kernels == ["de440s.bsp"]


def test_missing_library_reported(monkeypatch):
    monkeypatch.setattr(skyfield_provider, "Loader", None)

    with pytest.raises(SolarProviderError, match="skyfield"):
        skyfield_provider.SkyfieldSolarProvider()


def test_unavailable_kernel_reported(monkeypatch):
    class _OfflineLoader(_Loader):
        def __call__(self, kernel: str):
            raise OSError(f"cannot download {kernel}")

    monkeypatch.setattr(skyfield_provider, "Loader", _OfflineLoader)

    with pytest.raises(SolarProviderError, match="de421.bsp"):
        skyfield_provider.SkyfieldSolarProvider()


def test_london_equinox_with_cached_kernel():
    pytest.importorskip("skyfield")
    data_dir = Path.home() / ".skyfield"
    if not (data_dir / "de421.bsp").exists():
        pytest.skip("de421.bsp not cached locally")

    provider = skyfield_provider.SkyfieldSolarProvider(data_dir=data_dir)
    tz = ZoneInfo("Europe/London")
    solar = provider.sunrise_sunset(GeoLocation(51.5074, -0.1278), date(2024, 3, 20), tz)
    assert solar.sunrise.astimezone(tz).hour == 6
    assert solar.sunset.astimezone(tz).hour == 18

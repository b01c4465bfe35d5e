"""Typer application for the planetary hours command line."""

from __future__ import annotations

import json
from datetime import UTC, date, datetime
from pathlib import Path
from typing import Optional

import typer

from ..boot import configure_logging
from ..config import Settings, load_settings
from ..display import filter_waking, render_table
from ..engine import compute_day, find_current
from ..errors import PlanetaryHoursError
from ..models import GeoLocation
from ..rulers import PLANETARY_DAYS, PLANETARY_HOUR_TABLE
from ..solar import get_provider
from ..timeutil import resolve_timezone

app = typer.Typer(help="Planetary hours for a place and date.", no_args_is_help=True)

_LAT = typer.Option(None, "--lat", "--latitude", help="Latitude in decimal degrees.")
_LON = typer.Option(None, "--lon", "--longitude", help="Longitude in decimal degrees.")
_TZ = typer.Option(None, "--tz", "--timezone", help="IANA timezone, e.g. America/Denver.")
_AT = typer.Option(
    None,
    "--at",
    help="Reference instant (ISO-8601). Naive values are local to --tz. Defaults to now.",
)
_JSON = typer.Option(False, "--json", help="Emit JSON instead of a table.")
_CONFIG = typer.Option(None, "--config", help="Settings file to use.")


def _settings(path: Optional[Path]) -> Settings:
    settings = load_settings(path)
    configure_logging(settings.logging.level)
    return settings


def _fail(message: str) -> typer.Exit:
    typer.echo(f"error: {message}", err=True)
    return typer.Exit(code=2)


def _observer(
    settings: Settings,
    latitude: Optional[float],
    longitude: Optional[float],
    timezone: Optional[str],
) -> tuple[GeoLocation, str]:
    cfg = settings.location
    lat = latitude if latitude is not None else cfg.latitude
    lon = longitude if longitude is not None else cfg.longitude
    tz = timezone or cfg.timezone
    if lat is None or lon is None or tz is None:
        raise _fail("latitude, longitude and timezone are required (options or settings)")
    altitude = cfg.altitude if latitude is None else 0.0
    return GeoLocation.from_coordinates(lat, lon, altitude), tz


def _reference(raw: Optional[str], timezone: str) -> datetime:
    if raw is None:
        return datetime.now(UTC)
    try:
        moment = datetime.fromisoformat(raw)
    except ValueError as exc:
        raise typer.BadParameter(f"Invalid instant '{raw}'. Expected ISO-8601.") from exc
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=resolve_timezone(timezone))
    return moment


@app.command("day")
def day_command(
    latitude: Optional[float] = _LAT,
    longitude: Optional[float] = _LON,
    timezone: Optional[str] = _TZ,
    on: Optional[str] = typer.Option(
        None, "--date", help="Calendar date (YYYY-MM-DD). Defaults to the reference date."
    ),
    at: Optional[str] = _AT,
    waking: bool = typer.Option(
        False, "--waking", help="Only show hours overlapping the configured waking window."
    ),
    json_output: bool = _JSON,
    config: Optional[Path] = _CONFIG,
) -> None:
    """Print the 24 planetary hours of a day."""

    settings = _settings(config)
    try:
        location, tz = _observer(settings, latitude, longitude, timezone)
        reference = _reference(at, tz)
        if on is None:
            query_day = reference.astimezone(resolve_timezone(tz)).date()
        else:
            try:
                query_day = date.fromisoformat(on)
            except ValueError as exc:
                raise typer.BadParameter(f"Invalid date '{on}'. Expected YYYY-MM-DD.") from exc
        schedule = compute_day(
            location, query_day, tz, reference, provider=get_provider(settings)
        )
    except PlanetaryHoursError as exc:
        raise _fail(str(exc)) from exc

    hours = tuple(schedule)
    if waking:
        hours = filter_waking(hours, settings.display.waking_start, settings.display.waking_end)

    if json_output:
        payload = schedule.to_payload()
        payload["hours"] = [hour.to_payload() for hour in hours]
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    fmt = settings.display.time_format
    typer.echo(
        f"{schedule.day.isoformat()} ({schedule.day_ruler.symbol} {schedule.day_ruler.value} day) "
        f"sunrise {schedule.sunrise.strftime(fmt)}, sunset {schedule.sunset.strftime(fmt)}, "
        f"next sunrise {schedule.next_sunrise.strftime(fmt)} [{schedule.timezone}]"
    )
    typer.echo(render_table(hours, fmt))


@app.command("now")
def now_command(
    latitude: Optional[float] = _LAT,
    longitude: Optional[float] = _LON,
    timezone: Optional[str] = _TZ,
    at: Optional[str] = _AT,
    json_output: bool = _JSON,
    config: Optional[Path] = _CONFIG,
) -> None:
    """Print the planetary hour in effect at the reference instant."""

    settings = _settings(config)
    try:
        location, tz = _observer(settings, latitude, longitude, timezone)
        reference = _reference(at, tz)
        hour = find_current(location, reference, tz, provider=get_provider(settings))
    except PlanetaryHoursError as exc:
        raise _fail(str(exc)) from exc

    if hour is None:
        raise _fail(f"no planetary hour found for {reference.isoformat()}")

    if json_output:
        typer.echo(json.dumps(hour.to_payload(), indent=2, ensure_ascii=False))
        return

    fmt = settings.display.time_format
    typer.echo(
        f"{hour.planet.symbol} {hour.planet.value} hour "
        f"({hour.period.value} hour {hour.period_hour}) "
        f"{hour.start.strftime(fmt)}-{hour.end.strftime(fmt)}"
    )


@app.command("rulers")
def rulers_command(json_output: bool = _JSON) -> None:
    """Print the weekday rulers and their 24-hour sequences."""

    if json_output:
        payload = [
            {**day.to_payload(), "hours": [p.value for p in PLANETARY_HOUR_TABLE[day.weekday]]}
            for day in PLANETARY_DAYS
        ]
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    for day in PLANETARY_DAYS:
        sequence = " ".join(p.symbol for p in PLANETARY_HOUR_TABLE[day.weekday])
        typer.echo(
            f"{day.weekday:<9} {day.ruler.symbol} {day.ruler.value:<8} "
            f"{', '.join(day.themes):<40} {sequence}"
        )

"""CLI entry point for moon track summaries.

    uv run lunartrack --latitude 40.4168 --longitude -3.7038 --when "2024-06-21 22:00"
"""

import logging
from datetime import datetime

import click
from dotenv import load_dotenv
from pytz import utc

load_dotenv()

from lunartrack.compute import (  # noqa: E402
    TrackError,
    compute_track,
    default_provider,
    resolve_config,
    to_utc,
)
from lunartrack.ephemeris import cardinal_direction  # noqa: E402
from lunartrack.i18n import t  # noqa: E402
from lunartrack.models import ObserverLocation, TrackConfig, TrackPoint  # noqa: E402
from lunartrack.segments import segment  # noqa: E402


def _format_point(point: TrackPoint | None, lang: str) -> str:
    if point is None:
        return t("none", lang)
    return (
        f"{point.timestamp.strftime('%Y-%m-%d %H:%M UTC')}  "
        f"alt {point.altitude_deg:5.1f}°  "
        f"az {point.azimuth_deg:5.1f}° ({cardinal_direction(point.azimuth_deg, lang)})"
    )


@click.command()
@click.option(
    "--latitude", "-lat", type=float, required=True, help="Observer latitude in degrees"
)
@click.option(
    "--longitude",
    "-lon",
    type=float,
    required=True,
    help="Observer longitude in degrees",
)
@click.option(
    "--when",
    "-t",
    type=click.DateTime(formats=["%Y-%m-%d %H:%M", "%Y-%m-%dT%H:%M", "%Y-%m-%dT%H:%M:%S"]),
    default=None,
    help="Window center in UTC (default: now)",
)
@click.option(
    "--interval",
    "-i",
    type=float,
    default=TrackConfig.interval_minutes,
    show_default=True,
    help="Sampling interval in minutes",
)
@click.option(
    "--window",
    "-w",
    type=float,
    default=TrackConfig.window_hours_each_side,
    show_default=True,
    help="Hours sampled on each side of the center",
)
@click.option(
    "--lang",
    type=click.Choice(["en", "es"]),
    default="en",
    show_default=True,
    help="Label language",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def main(
    latitude: float,
    longitude: float,
    when: datetime | None,
    interval: float,
    window: float,
    lang: str,
    verbose: bool,
) -> None:
    """Print when the moon rises, culminates, and sets around a given time."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    center = to_utc(when) if when is not None else datetime.now(utc)
    location = ObserverLocation(latitude_deg=latitude, longitude_deg=longitude)
    config = TrackConfig(interval_minutes=interval, window_hours_each_side=window)

    try:
        config = resolve_config(config)
        provider = default_provider()
        track = compute_track(center, location, config, provider=provider)
    except TrackError as exc:
        raise click.ClickException(str(exc)) from exc

    runs = segment(track.points)

    click.echo(
        f"{t('label_window', lang)}: {track.points[0].timestamp:%Y-%m-%d %H:%M} → "
        f"{track.points[-1].timestamp:%Y-%m-%d %H:%M} UTC ({len(track.points)} samples)"
    )
    click.echo(f"{t('label_rise', lang)}: {_format_point(track.rise_point, lang)}")
    click.echo(f"{t('label_transit', lang)}: {_format_point(track.transit_point, lang)}")
    click.echo(f"{t('label_set', lang)}: {_format_point(track.set_point, lang)}")

    illumination = getattr(provider, "illumination", None)
    if illumination is not None:
        moon = illumination(center, lang)
        click.echo(f"{t('label_phase', lang)}: {moon.phase_name} ({moon.fraction * 100:.1f}%)")

    click.echo(
        f"{t('label_runs', lang)}: "
        + t("runs_summary", lang).format(
            above=len(runs.above_runs), below=len(runs.below_runs)
        )
    )

"""Track computation layer: sampling the position provider and assembling a Track."""

import logging
import math
from collections.abc import Mapping
from dataclasses import replace
from datetime import datetime, timedelta
from functools import lru_cache
from typing import Any, Protocol

from pytz import utc

from lunartrack.events import find_rise_point, find_set_point, find_transit_point
from lunartrack.models import (
    BodyPosition,
    ObserverLocation,
    Track,
    TrackConfig,
    TrackPoint,
)

logger = logging.getLogger(__name__)

# datetime resolution; shorter steps cannot give strictly increasing timestamps
_MIN_STEP_SECONDS = 1e-6


class TrackError(Exception):
    """Track computation failure."""


class InvalidConfiguration(TrackError):
    """Non-positive sampling interval or window."""


class PositionComputationFailed(TrackError):
    """Position provider failure at a given sample."""

    def __init__(self, timestamp: datetime, reason: str = "") -> None:
        self.timestamp = timestamp
        message = f"Position computation failed at {timestamp.isoformat()}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class PositionProvider(Protocol):
    """Anything that can place the body in the observer's sky."""

    def position_at(self, when: datetime, location: ObserverLocation) -> BodyPosition: ...


@lru_cache(maxsize=1)
def default_provider() -> PositionProvider:
    """Process-wide skyfield moon provider, built on first use."""
    from lunartrack.ephemeris import SkyfieldMoonProvider

    return SkyfieldMoonProvider()


def to_utc(when: datetime) -> datetime:
    """Interpret naive datetimes as UTC and convert aware ones to UTC."""
    if when.tzinfo is None:
        return utc.localize(when)
    return when.astimezone(utc)


def resolve_config(config: TrackConfig | Mapping[str, Any] | None) -> TrackConfig:
    """Fill a partial configuration with defaults and validate it.

    Raises:
        InvalidConfiguration: On a non-positive interval or window, an
            interval below one microsecond, or an unknown override key.
    """
    if config is None:
        resolved = TrackConfig()
    elif isinstance(config, TrackConfig):
        resolved = config
    else:
        try:
            resolved = replace(TrackConfig(), **dict(config))
        except TypeError as exc:
            raise InvalidConfiguration(str(exc)) from exc

    if not resolved.interval_minutes > 0:
        raise InvalidConfiguration(
            f"interval_minutes must be positive, got {resolved.interval_minutes}"
        )
    if resolved.interval_minutes * 60 < _MIN_STEP_SECONDS:
        raise InvalidConfiguration(
            f"interval_minutes must be at least one microsecond, got {resolved.interval_minutes}"
        )
    if not resolved.window_hours_each_side > 0:
        raise InvalidConfiguration(
            f"window_hours_each_side must be positive, got {resolved.window_hours_each_side}"
        )
    return resolved


def normalize_azimuth(azimuth_deg: float) -> float:
    """Wrap an azimuth into [0, 360)."""
    normalized = azimuth_deg % 360.0
    # tiny negatives round up to exactly 360.0
    return 0.0 if normalized >= 360.0 else normalized


def expected_sample_count(config: TrackConfig) -> int:
    """Number of samples the sampler produces for a valid configuration."""
    return math.floor(2 * config.window_hours_each_side * 60 / config.interval_minutes) + 1


def sample_points(
    center_time: datetime,
    location: ObserverLocation,
    config: TrackConfig,
    provider: PositionProvider,
) -> tuple[TrackPoint, ...]:
    """Query the provider at a fixed cadence across the window around center_time.

    Samples run from center - window to center + window inclusive. Timestamps
    are computed as start + i * interval rather than by accumulation, so
    rounding to whole microseconds never drifts or drops the last sample.

    Args:
        center_time: Window center. Naive values are taken as UTC.
        location: Observer location, passed through to the provider.
        config: Sampling configuration (validated here).
        provider: Position source, called once per sample.

    Returns:
        Tuple of TrackPoint in strictly increasing timestamp order.

    Raises:
        InvalidConfiguration: On a non-positive interval or window.
        PositionComputationFailed: If any provider call raises. No partial
            result is returned.
    """
    config = resolve_config(config)
    center = to_utc(center_time)
    step_seconds = config.interval_minutes * 60
    window = timedelta(hours=config.window_hours_each_side)
    start = center - window
    end = center + window

    points: list[TrackPoint] = []
    for i in range(expected_sample_count(config)):
        when = start + timedelta(seconds=i * step_seconds)
        try:
            position = provider.position_at(when, location)
        except Exception as exc:
            logger.warning("Position provider failed at %s: %s", when.isoformat(), exc)
            raise PositionComputationFailed(when, str(exc)) from exc
        points.append(
            TrackPoint(
                timestamp=when,
                altitude_deg=float(position.altitude_deg),
                azimuth_deg=normalize_azimuth(float(position.azimuth_deg)),
            )
        )

    logger.debug(
        "Sampled %d points from %s to %s every %s min",
        len(points),
        start.isoformat(),
        end.isoformat(),
        config.interval_minutes,
    )
    return tuple(points)


def compute_track(
    center_time: datetime,
    location: ObserverLocation,
    config: TrackConfig | Mapping[str, Any] | None = None,
    *,
    provider: PositionProvider | None = None,
) -> Track:
    """Top-level entry point: sample the window and detect rise, set, and transit.

    Args:
        center_time: Window center. Naive values are taken as UTC.
        location: Observer location.
        config: TrackConfig, a mapping of field overrides, or None for defaults.
        provider: Position source. Defaults to the skyfield moon provider.

    Returns:
        Freshly computed Track.

    Raises:
        InvalidConfiguration: On a non-positive interval or window.
        PositionComputationFailed: On any provider failure.
    """
    resolved = resolve_config(config)
    if provider is None:
        provider = default_provider()
    points = sample_points(center_time, location, resolved, provider)
    return Track(
        points=points,
        rise_point=find_rise_point(points),
        set_point=find_set_point(points),
        transit_point=find_transit_point(points),
    )

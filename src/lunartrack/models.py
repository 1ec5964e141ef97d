"""Data model definitions: explicit boundaries between provider, compute, and render layers."""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal


@dataclass(frozen=True)
class ObserverLocation:
    """Where the sky is seen from. Owned by the caller, never mutated."""

    latitude_deg: float  # Latitude (decimal degrees, -90..90)
    longitude_deg: float  # Longitude (decimal degrees, -180..180)


@dataclass(frozen=True)
class BodyPosition:
    """Raw provider output for one instant."""

    altitude_deg: float  # Angle above the horizon (degrees)
    azimuth_deg: float  # Compass bearing (0=N, 90=E, 180=S, 270=W)
    distance_km: float  # Distance from the observer (km)
    parallactic_angle_rad: float  # Parallactic angle (radians)


@dataclass(frozen=True)
class TrackPoint:
    """A single sample of the body's topocentric position."""

    timestamp: datetime  # UTC datetime (with tzinfo=utc)
    altitude_deg: float  # Altitude (degrees)
    azimuth_deg: float  # Azimuth (degrees, 0..360)

    @property
    def above_horizon(self) -> bool:
        return self.altitude_deg > 0


@dataclass(frozen=True)
class TrackConfig:
    """Sampling cadence and window. Override only the fields you need."""

    interval_minutes: float = 10.0
    window_hours_each_side: float = 12.0


@dataclass(frozen=True)
class Track:
    """Sampled trajectory plus the events found in it."""

    points: tuple[TrackPoint, ...]  # Strictly increasing timestamps
    rise_point: TrackPoint | None  # First below → above transition (post-transition sample)
    set_point: TrackPoint | None  # First above → below transition (pre-transition sample)
    transit_point: TrackPoint | None  # Highest above-horizon sample


@dataclass(frozen=True)
class HorizonRuns:
    """Maximal same-visibility runs. Input to solid/dashed polyline rendering."""

    above_runs: tuple[tuple[TrackPoint, ...], ...]
    below_runs: tuple[tuple[TrackPoint, ...], ...]


@dataclass(frozen=True)
class HorizonCrossing:
    """One rise or set transition found in a sampled sequence."""

    kind: Literal["rise", "set"]
    point: TrackPoint  # Same convention as Track.rise_point / Track.set_point


@dataclass(frozen=True)
class MoonIllumination:
    """Illuminated fraction and phase of the moon at one instant."""

    fraction: float  # Illuminated fraction of the disc (0..1)
    phase: float  # Phase cycle position (0=new, 0.5=full, 1=new)
    angle_rad: float  # Position angle of the bright limb (radians)
    phase_name: str  # Localized phase label


@dataclass(frozen=True)
class MoonTimes:
    """Moonrise and moonset within one UTC day."""

    rise: datetime | None  # First moonrise of the day, if any
    set: datetime | None  # First moonset of the day, if any
    always_up: bool  # No crossing and the moon stays above the horizon
    always_down: bool  # No crossing and the moon stays below the horizon


@dataclass(frozen=True)
class LunarData:
    """Everything a display panel shows about the moon at one instant."""

    position: BodyPosition
    illumination: MoonIllumination
    times: MoonTimes
    calculated_at: datetime  # UTC wall-clock time of the computation

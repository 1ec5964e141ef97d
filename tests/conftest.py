from datetime import datetime, timedelta

import pytest
from pytz import utc

from lunartrack.models import BodyPosition, ObserverLocation, TrackPoint

T0 = utc.localize(datetime(2024, 6, 21, 18, 0))

# Madrid, matching the default location of the web front end
MADRID = ObserverLocation(latitude_deg=40.4168, longitude_deg=-3.7038)


class ScriptedProvider:
    """Fake position provider returning altitudes from a script.

    Altitudes are looked up by whole intervals since `start`; azimuth sweeps
    15° per step so every sample is distinguishable.
    """

    def __init__(self, altitudes, start=T0, step=timedelta(hours=1), fail_at=None):
        self.altitudes = list(altitudes)
        self.start = start
        self.step = step
        self.fail_at = fail_at
        self.calls: list[tuple[datetime, ObserverLocation]] = []

    def position_at(self, when, location):
        self.calls.append((when, location))
        if self.fail_at is not None and when == self.fail_at:
            raise RuntimeError("ephemeris unavailable")
        index = int((when - self.start) / self.step)
        return BodyPosition(
            altitude_deg=self.altitudes[index],
            azimuth_deg=(index * 15.0) % 360.0,
            distance_km=384400.0,
            parallactic_angle_rad=0.0,
        )


class ConstantProvider:
    """Fake provider that always reports the same position."""

    def __init__(self, altitude_deg=10.0, azimuth_deg=180.0):
        self.altitude_deg = altitude_deg
        self.azimuth_deg = azimuth_deg
        self.calls = 0

    def position_at(self, when, location):
        self.calls += 1
        return BodyPosition(
            altitude_deg=self.altitude_deg,
            azimuth_deg=self.azimuth_deg,
            distance_km=384400.0,
            parallactic_angle_rad=0.0,
        )


def make_points(altitudes, start=T0, step=timedelta(hours=1)):
    return tuple(
        TrackPoint(timestamp=start + step * i, altitude_deg=alt, azimuth_deg=90.0)
        for i, alt in enumerate(altitudes)
    )


@pytest.fixture
def scenario_provider():
    """A single hourly pass peaking at 15° four hours after T0."""
    return ScriptedProvider([-5, -1, 2, 8, 15, 8, 2, -1, -5])

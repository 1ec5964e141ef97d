"""Skyfield-backed moon ephemeris: the default position provider."""

import logging
import math
import os
from datetime import date, datetime, timedelta
from pathlib import Path

from pytz import utc
from skyfield import almanac
from skyfield.api import Loader, wgs84

from lunartrack.compute import normalize_azimuth, to_utc
from lunartrack.i18n import t
from lunartrack.models import (
    BodyPosition,
    LunarData,
    MoonIllumination,
    MoonTimes,
    ObserverLocation,
)

logger = logging.getLogger(__name__)

_DEFAULT_DATA_DIR = Path.home() / ".cache" / "lunartrack"
_DEFAULT_EPHEMERIS = "de421.bsp"

# Upper bounds of each phase bucket, as a fraction of the synodic cycle
_PHASE_BUCKETS: tuple[tuple[float, str], ...] = (
    (0.0625, "phase_new"),
    (0.1875, "phase_waxing_crescent"),
    (0.3125, "phase_first_quarter"),
    (0.4375, "phase_waxing_gibbous"),
    (0.5625, "phase_full"),
    (0.6875, "phase_waning_gibbous"),
    (0.8125, "phase_last_quarter"),
    (0.9375, "phase_waning_crescent"),
)

_DIRECTIONS = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")


def phase_name(phase: float, lang: str = "en") -> str:
    """Map a phase cycle position (0=new, 0.5=full) to a localized name."""
    for upper, key in _PHASE_BUCKETS:
        if phase < upper:
            return t(key, lang)
    return t("phase_new", lang)


def cardinal_direction(azimuth_deg: float, lang: str = "en") -> str:
    """Nearest of the eight compass points for an azimuth."""
    # halves round up: 22.5 is NE, not N
    index = math.floor(normalize_azimuth(azimuth_deg) / 45 + 0.5) % 8
    return t(f"dir_{_DIRECTIONS[index]}", lang)


def parallactic_angle(hour_angle_rad: float, dec_rad: float, latitude_rad: float) -> float:
    """Parallactic angle (radians) from hour angle, declination, and latitude."""
    return math.atan2(
        math.sin(hour_angle_rad),
        math.tan(latitude_rad) * math.cos(dec_rad)
        - math.sin(dec_rad) * math.cos(hour_angle_rad),
    )


def bright_limb_angle(
    sun_ra_rad: float, sun_dec_rad: float, moon_ra_rad: float, moon_dec_rad: float
) -> float:
    """Position angle (radians) of the moon's bright limb, measured from north through east."""
    d_ra = sun_ra_rad - moon_ra_rad
    return math.atan2(
        math.cos(sun_dec_rad) * math.sin(d_ra),
        math.sin(sun_dec_rad) * math.cos(moon_dec_rad)
        - math.cos(sun_dec_rad) * math.sin(moon_dec_rad) * math.cos(d_ra),
    )


class SkyfieldMoonProvider:
    """Topocentric moon positions from a JPL kernel via skyfield.

    The kernel is downloaded into data_dir on first use and reused afterwards.
    """

    def __init__(
        self, data_dir: str | Path | None = None, ephemeris: str | None = None
    ) -> None:
        data_dir = Path(
            data_dir or os.environ.get("LUNARTRACK_DATA_DIR") or _DEFAULT_DATA_DIR
        )
        ephemeris = ephemeris or os.environ.get("LUNARTRACK_EPHEMERIS") or _DEFAULT_EPHEMERIS
        data_dir.mkdir(parents=True, exist_ok=True)
        logger.debug("Loading %s from %s", ephemeris, data_dir)

        loader = Loader(str(data_dir))
        self._ts = loader.timescale()
        self._eph = loader(ephemeris)
        self._earth = self._eph["earth"]
        self._moon = self._eph["moon"]
        self._sun = self._eph["sun"]

    def position_at(self, when: datetime, location: ObserverLocation) -> BodyPosition:
        """Apparent alt/az of the moon seen from location at when."""
        t_ = self._ts.from_datetime(to_utc(when))
        ground = self._earth + wgs84.latlon(
            latitude_degrees=location.latitude_deg,
            longitude_degrees=location.longitude_deg,
        )
        # topocentric: the moon's parallax is about a degree, so observe from the surface
        apparent = ground.at(t_).observe(self._moon).apparent()
        alt, az, distance = apparent.altaz()
        ha, dec, _ = apparent.hadec()
        return BodyPosition(
            altitude_deg=float(alt.degrees),
            azimuth_deg=normalize_azimuth(float(az.degrees)),
            distance_km=float(distance.km),
            parallactic_angle_rad=parallactic_angle(
                float(ha.radians),
                float(dec.radians),
                math.radians(location.latitude_deg),
            ),
        )

    def illumination(self, when: datetime, lang: str = "en") -> MoonIllumination:
        """Illuminated fraction, phase, and bright-limb angle at when."""
        t_ = self._ts.from_datetime(to_utc(when))
        fraction = float(almanac.fraction_illuminated(self._eph, "moon", t_))
        phase = float(almanac.moon_phase(self._eph, t_).degrees) / 360.0

        observer = self._earth.at(t_)
        sun_ra, sun_dec, _ = observer.observe(self._sun).apparent().radec(epoch="date")
        moon_ra, moon_dec, _ = observer.observe(self._moon).apparent().radec(epoch="date")
        angle = bright_limb_angle(
            float(sun_ra.radians),
            float(sun_dec.radians),
            float(moon_ra.radians),
            float(moon_dec.radians),
        )
        return MoonIllumination(
            fraction=fraction,
            phase=phase,
            angle_rad=angle,
            phase_name=phase_name(phase, lang),
        )

    def times(self, day: date | datetime, location: ObserverLocation) -> MoonTimes:
        """Moonrise and moonset during the UTC day containing day.

        Crossings are found with skyfield's almanac search, so they are
        interpolated instants rather than samples. When the moon neither rises
        nor sets, always_up or always_down tells which side of the horizon it
        stayed on.
        """
        if isinstance(day, datetime):
            day = to_utc(day).date()
        midnight = utc.localize(datetime(day.year, day.month, day.day))
        t0 = self._ts.from_datetime(midnight)
        t1 = self._ts.from_datetime(midnight + timedelta(days=1))

        topos = wgs84.latlon(
            latitude_degrees=location.latitude_deg,
            longitude_degrees=location.longitude_deg,
        )
        crossing_times, crossing_kinds = almanac.find_discrete(
            t0, t1, almanac.risings_and_settings(self._eph, self._moon, topos)
        )

        rise: datetime | None = None
        set_: datetime | None = None
        for when, kind in zip(crossing_times.utc_datetime(), crossing_kinds):
            # 1 = rising, 0 = setting
            if int(kind) == 1 and rise is None:
                rise = when
            elif int(kind) == 0 and set_ is None:
                set_ = when

        always_up = always_down = False
        if rise is None and set_ is None:
            up = self.position_at(midnight, location).altitude_deg > 0
            always_up, always_down = up, not up
        return MoonTimes(rise=rise, set=set_, always_up=always_up, always_down=always_down)

    def lunar_data(
        self, when: datetime, location: ObserverLocation, lang: str = "en"
    ) -> LunarData:
        """Position, illumination, and the day's rise/set for one instant."""
        return LunarData(
            position=self.position_at(when, location),
            illumination=self.illumination(when, lang),
            times=self.times(when, location),
            calculated_at=datetime.now(utc),
        )

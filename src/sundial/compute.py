"""Astronomy computation layer — skyfield sun ephemeris, illumination sampling, and the render pipeline."""

from __future__ import annotations

import logging
import math
from datetime import datetime
from pathlib import Path
from typing import Protocol

import numpy as np
from pytz import timezone, utc
from skyfield import almanac
from skyfield.api import Loader, wgs84
from timezonefinder import TimezoneFinder

from sundial.compose import compose
from sundial.geometry import revs
from sundial.models import (
    Coordinate,
    DialInfo,
    IlluminationSeries,
    Scene,
    SunPosition,
    SunTimes,
    Waiting,
)

logger = logging.getLogger(__name__)

DAY_MS = 24 * 60 * 60 * 1000
DEFAULT_SLICES = 72

# Sun altitude thresholds (degrees)
_CIVIL_TWILIGHT = -6.0
_SUNRISE = -0.8333  # refraction + solar disc upper limb

_tf = TimezoneFinder()


class OracleError(Exception):
    """Ephemeris load or query failure."""


class AstronomyOracle(Protocol):
    def position(self, instant: float, lat: float, lng: float) -> SunPosition: ...

    def times(self, instant: float, lat: float, lng: float) -> SunTimes: ...


class SkyfieldOracle:
    """Sun position and daily events from a JPL ephemeris via skyfield.

    The ephemeris is fetched into `data_dir` on first use if it is missing.
    """

    def __init__(self, data_dir: Path, ephemeris: str = "de421.bsp"):
        loader = Loader(str(data_dir))
        try:
            self._eph = loader(ephemeris)
        except (OSError, ValueError) as e:
            raise OracleError(f"Cannot load ephemeris {ephemeris}: {e}") from e
        self._ts = loader.timescale()
        self._earth = self._eph["earth"]
        self._sun = self._eph["sun"]
        logger.info("Loaded ephemeris %s from %s", ephemeris, data_dir)

    def _time(self, instant: float):
        return self._ts.from_datetime(datetime.fromtimestamp(instant / 1000.0, tz=utc))

    @staticmethod
    def _ms(t) -> float:
        return t.utc_datetime().timestamp() * 1000.0

    def _observer(self, lat: float, lng: float):
        return self._earth + wgs84.latlon(latitude_degrees=lat, longitude_degrees=lng)

    def position(self, instant: float, lat: float, lng: float) -> SunPosition:
        """Apparent topocentric altitude/azimuth of the sun (no refraction)."""
        observer = self._observer(lat, lng).at(self._time(instant))
        alt, az, _ = observer.observe(self._sun).apparent().altaz()
        return SunPosition(altitude=float(alt.radians), azimuth=float(az.radians))

    def times(self, instant: float, lat: float, lng: float) -> SunTimes:
        """Daily sun events around `instant`.

        ``solar_noon`` is the upper meridian transit nearest to `instant`.
        Morning events are searched in the 12 hours before it, evening events
        in the 12 hours after. Events that do not happen (polar day or night)
        are NaN.

        Raises:
            OracleError: When no meridian transit is found.
        """
        observer = self._observer(lat, lng)
        transits = almanac.find_transits(
            observer,
            self._sun,
            self._time(instant - DAY_MS),
            self._time(instant + DAY_MS),
        )
        noons = [self._ms(t) for t in transits]
        if not noons:
            raise OracleError(f"No solar transit found: lat={lat}, lng={lng}")
        noon = min(noons, key=lambda m: abs(m - instant))

        half = DAY_MS / 2
        morning = (noon - half, noon)
        evening = (noon, noon + half)
        return {
            "solar_noon": noon,
            "nadir": noon - half,
            "dawn": self._rising(observer, *morning, _CIVIL_TWILIGHT),
            "sunrise": self._rising(observer, *morning, _SUNRISE),
            "sunset": self._setting(observer, *evening, _SUNRISE),
            "dusk": self._setting(observer, *evening, _CIVIL_TWILIGHT),
        }

    def _rising(self, observer, start: float, end: float, horizon_deg: float) -> float:
        real = self._crossings(almanac.find_risings, observer, start, end, horizon_deg)
        return real[-1] if real else math.nan

    def _setting(self, observer, start: float, end: float, horizon_deg: float) -> float:
        real = self._crossings(almanac.find_settings, observer, start, end, horizon_deg)
        return real[0] if real else math.nan

    def _crossings(
        self, find, observer, start: float, end: float, horizon_deg: float
    ) -> list[float]:
        times, flags = find(
            observer,
            self._sun,
            self._time(start),
            self._time(end),
            horizon_degrees=horizon_deg,
        )
        # flag False: the sun only grazed the threshold without crossing it
        return [self._ms(t) for t, ok in zip(times, flags) if ok]


def sample_illumination(
    location: Coordinate,
    anchor: float,
    oracle: AstronomyOracle,
    slice_count: int = DEFAULT_SLICES,
) -> IlluminationSeries:
    """Sun altitude (degrees) at the midpoint of each of `slice_count` day slices.

    Slice i covers [anchor + i/N day, anchor + (i+1)/N day) and sits at the
    same angular span of the dial, angle 0 being the anchor.

    Args:
        location: Observer; missing components count as 0.
        anchor: Start of the sampled day (ms), normally solar noon.
        oracle: Astronomy oracle. Its errors propagate.
        slice_count: Number of slices.

    Returns:
        Tuple of `slice_count` altitudes in chronological order.
    """
    probes = anchor + (np.arange(slice_count) + 0.5) / slice_count * DAY_MS
    return tuple(
        math.degrees(oracle.position(float(t), location.lat, location.lng).altitude)
        for t in probes
    )


def dial_info(
    instant: float,
    location: Coordinate,
    oracle: AstronomyOracle,
    times: SunTimes | None = None,
) -> DialInfo:
    """Normalize the current instant and dawn/dusk into day fractions from solar noon.

    Dawn and dusk fractions are left unwrapped and unclamped; near the poles
    they may be NaN.
    """
    if times is None:
        times = oracle.times(instant, location.lat, location.lng)
    noon = times["solar_noon"]
    return DialInfo(
        day_percent=revs((instant - noon) / DAY_MS),
        dawn_percent=(times["dawn"] - noon) / DAY_MS,
        dusk_percent=(times["dusk"] - noon) / DAY_MS,
        sun_angle=oracle.position(instant, location.lat, location.lng).altitude,
    )


def render(
    instant: float,
    location: Coordinate | None,
    oracle: AstronomyOracle,
    slice_count: int = DEFAULT_SLICES,
    times: SunTimes | None = None,
) -> Scene | Waiting:
    """Top-level entry point: (instant, location) → Scene.

    Args:
        instant: Current time in ms since the Unix epoch.
        location: Observer, or None while the device location is unknown.
        oracle: Astronomy oracle.
        slice_count: Number of illumination slices on the dial.
        times: Precomputed oracle.times() for this instant and location.

    Returns:
        Waiting when location is None (the oracle is not queried), else the Scene.
    """
    if location is None:
        return Waiting()
    if times is None:
        times = oracle.times(instant, location.lat, location.lng)
    # Ring and indicator share one solar-noon origin.
    info = dial_info(instant, location, oracle, times)
    series = sample_illumination(location, times["solar_noon"], oracle, slice_count)
    logger.debug(
        "dial lat=%.4f lng=%.4f day=%.4f dawn=%.4f dusk=%.4f",
        location.lat,
        location.lng,
        info.day_percent,
        info.dawn_percent,
        info.dusk_percent,
    )
    return compose(info, series)


def local_event_times(location: Coordinate, times: SunTimes) -> dict[str, str]:
    """Dawn, solar noon and dusk as local "HH:MM" strings.

    Uses the timezone at the location, UTC when none is found (open sea).
    Events that do not occur are rendered as "--:--".
    """
    tz_str = _tf.timezone_at(lat=location.lat, lng=location.lng)
    local_tz = timezone(tz_str) if tz_str else utc
    labels: dict[str, str] = {}
    for name in ("dawn", "solar_noon", "dusk"):
        ms = times.get(name, math.nan)
        if math.isnan(ms):
            labels[name] = "--:--"
            continue
        local_dt = datetime.fromtimestamp(ms / 1000.0, tz=utc).astimezone(local_tz)
        labels[name] = local_dt.strftime("%H:%M")
    return labels

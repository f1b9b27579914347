import math

import pytest

from sundial.compute import DAY_MS
from sundial.models import SunPosition

# 2024-06-21 12:00:00 UTC
NOON_MS = 1718971200000.0


class FakeOracle:
    """Sun peaking at 60° at NOON_MS, bottoming out at -60° twelve hours away."""

    def __init__(self, noon: float = NOON_MS, peak_deg: float = 60.0):
        self.noon = noon
        self.peak_deg = peak_deg
        self.position_calls: list[tuple[float, float, float]] = []
        self.times_calls = 0

    def altitude_deg(self, instant: float) -> float:
        phase = (instant - self.noon) / DAY_MS * 2 * math.pi
        return self.peak_deg * math.cos(phase)

    def position(self, instant, lat, lng):
        self.position_calls.append((instant, lat, lng))
        return SunPosition(altitude=math.radians(self.altitude_deg(instant)), azimuth=0.0)

    def times(self, instant, lat, lng):
        self.times_calls += 1
        return {
            "solar_noon": self.noon,
            "nadir": self.noon - DAY_MS / 2,
            "dawn": self.noon - DAY_MS / 3,
            "sunrise": self.noon - DAY_MS / 4,
            "sunset": self.noon + DAY_MS / 4,
            "dusk": self.noon + DAY_MS / 3,
        }


class PolarNightOracle(FakeOracle):
    """Sun never climbs above -10°: dawn and dusk do not occur."""

    def altitude_deg(self, instant):
        return -10.0 - 5.0 * math.cos((instant - self.noon) / DAY_MS * 2 * math.pi)

    def times(self, instant, lat, lng):
        times = super().times(instant, lat, lng)
        for name in ("dawn", "sunrise", "sunset", "dusk"):
            times[name] = math.nan
        return times


class FailingOracle:
    def position(self, instant, lat, lng):
        raise RuntimeError("ephemeris offline")

    def times(self, instant, lat, lng):
        raise RuntimeError("ephemeris offline")


@pytest.fixture
def oracle():
    return FakeOracle()

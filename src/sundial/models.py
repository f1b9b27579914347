"""Data model definitions — explicit boundaries between input, compute, and render layers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterator, Union

# Event name → instant (ms since Unix epoch). NaN when the event does not occur.
SunTimes = dict[str, float]

# Chronological sun altitudes (degrees), one per dial slice.
IlluminationSeries = tuple[float, ...]


@dataclass(frozen=True)
class Coordinate:
    """Observer position. Either component may be missing (None)."""

    latitude: float | None = None  # Decimal degrees, north positive
    longitude: float | None = None  # Decimal degrees, east positive

    @property
    def lat(self) -> float:
        return self.latitude or 0.0

    @property
    def lng(self) -> float:
        return self.longitude or 0.0

    @classmethod
    def from_geolocation(cls, payload: Any) -> Coordinate | None:
        """Parse a browser geolocation payload.

        Returns None while the browser has not answered yet and when the
        payload carries an ``error`` entry instead of ``coords``.
        """
        if not isinstance(payload, dict):
            return None
        coords = payload.get("coords")
        if not isinstance(coords, dict):
            return None
        lat = coords.get("latitude")
        lng = coords.get("longitude")
        return cls(
            latitude=None if lat is None else float(lat),
            longitude=None if lng is None else float(lng),
        )


@dataclass(frozen=True)
class SunPosition:
    """Topocentric sun position returned by the astronomy oracle."""

    altitude: float  # Radians above the horizon (negative below)
    azimuth: float  # Radians from north, eastward


@dataclass(frozen=True)
class DialInfo:
    """Per-render dial state derived from the oracle."""

    day_percent: float  # Fraction of the day elapsed since solar noon, in [0, 1)
    dawn_percent: float  # (dawn - solar noon) / day, not wrapped
    dusk_percent: float  # (dusk - solar noon) / day, not wrapped
    sun_angle: float  # Current sun altitude (radians)


@dataclass(frozen=True)
class RGBColor:
    """Channels are floats in [0, 255]; rounding is left to the drawing surface."""

    r: float
    g: float
    b: float

    @property
    def css(self) -> str:
        return f"rgb({self.r},{self.g},{self.b})"


@dataclass(frozen=True)
class Transform:
    """Rotate about the dial center, then translate the local origin out to the rim.

    Local coordinates use the SVG convention: y grows downward, so a local
    point (0, -d) lies d units further out from the center.
    """

    rotate_deg: float  # Clockwise rotation about (cx, cy)
    cx: float
    cy: float
    radius: float  # Distance of the local origin from the center

    @property
    def svg(self) -> str:
        return (
            f"rotate({self.rotate_deg:.4f} {self.cx:g} {self.cy:g})"
            f" translate({self.cx:g} {self.cy - self.radius:.4f})"
        )

    def apply(self, x: float = 0.0, y: float = 0.0) -> tuple[float, float]:
        """Map a local point into dial coordinates."""
        dx = x
        dy = y - self.radius
        theta = math.radians(self.rotate_deg)
        cos_t = math.cos(theta)
        sin_t = math.sin(theta)
        return (
            self.cx + dx * cos_t - dy * sin_t,
            self.cy + dx * sin_t + dy * cos_t,
        )


@dataclass(frozen=True)
class Wedge:
    """Annular sector between two radii and two angle fractions."""

    r0: float  # Inner radius
    r1: float  # Outer radius
    a0: float  # Start angle (fraction of a revolution, reduced to [0, 1))
    a1: float  # End angle; a1 - a0 is the span, never negative
    fill: RGBColor
    path: str  # SVG path data in dial coordinates
    fill_rule: str = "nonzero"

    @property
    def span(self) -> float:
        return self.a1 - self.a0

    @property
    def area(self) -> float:
        return self.span * math.pi * (self.r1**2 - self.r0**2)


@dataclass(frozen=True)
class Disk:
    """Filled circle. Positioned by (cx, cy), or by a transform when given."""

    cx: float
    cy: float
    r: float
    fill: RGBColor | str
    stroke: str | None = None
    transform: Transform | None = None


@dataclass(frozen=True)
class Mark:
    """Short radial tick drawn from the local origin outward."""

    length: float
    transform: Transform
    stroke: str = "currentColor"

    @property
    def endpoints(self) -> tuple[tuple[float, float], tuple[float, float]]:
        return self.transform.apply(0.0, -self.length), self.transform.apply(0.0, 0.0)


Primitive = Union[Wedge, Disk, Mark]


@dataclass(frozen=True)
class Scene:
    """The sole input to renderers. Regenerated in full on every tick."""

    background: tuple[Wedge | Disk, ...]  # Illumination ring; clipped to the dial
    marks: tuple[Mark, ...]  # Solar noon, dawn, dusk ticks
    indicator: Disk  # Current sun position and color
    dots: tuple[Disk, ...] = ()  # Look-ahead dots on the rim
    size: float = 100.0  # Drawing surface is size × size

    @property
    def elements(self) -> Iterator[Primitive]:
        """All primitives, back to front."""
        yield from self.background
        yield from self.dots
        yield from self.marks
        yield self.indicator


@dataclass(frozen=True)
class Waiting:
    """Placeholder returned while no location is available."""

    message: str = "waiting for location"

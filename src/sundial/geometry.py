"""Dial geometry — angle fractions and radii → drawing primitives.

Coordinate system (SVG convention, viewBox="0 0 100 100"):
  center (50, 50), outer radius 45
  angle 0 points up ("12 o'clock") and increases clockwise
  angles are fractions of one revolution, reduced modulo 1 before use
"""

from __future__ import annotations

import math

from sundial.models import Disk, Mark, RGBColor, Transform, Wedge

CX = 50.0
CY = 50.0
RADIUS = 45.0


def revs(a: float) -> float:
    """Reduce an angle fraction to [0, 1). NaN stays NaN."""
    a = a % 1.0
    # -1e-17 % 1.0 rounds up to 1.0
    return 0.0 if a >= 1.0 else a


def polar_point(a: float, r: float) -> tuple[float, float]:
    """Dial coordinates of the point at angle fraction `a` and radius `r`."""
    theta = revs(a) * 2 * math.pi
    return CX + math.sin(theta) * r, CY - math.cos(theta) * r


def _fmt(x: float, y: float) -> str:
    return f"{x:.4f} {y:.4f}"


def _ring_path(r0: float, r1: float) -> str:
    # Two closed circles; even-odd fill leaves the inner one empty.
    parts = []
    for r in (r1, r0):
        top = _fmt(CX, CY - r)
        bottom = _fmt(CX, CY + r)
        parts.append(f"M {top} A {r:g} {r:g} 0 1 1 {bottom} A {r:g} {r:g} 0 1 1 {top} Z")
    return " ".join(parts)


def wedge(
    r0: float, r1: float, a0: float, a1: float, fill: RGBColor
) -> Wedge | Disk:
    """Annular sector from angle `a0` to `a1` between radii `r0` and `r1`.

    A span of a full revolution or more returns a full-circle primitive: a
    Disk when r0 is 0, otherwise a ring Wedge with even-odd fill. A span of
    zero yields a zero-area wedge. A span that wraps past angle 0 (a1 < a0)
    is reduced modulo one revolution.
    """
    span = a1 - a0
    if span >= 1.0:
        if r0 <= 0:
            return Disk(cx=CX, cy=CY, r=r1, fill=fill)
        return Wedge(
            r0=r0,
            r1=r1,
            a0=0.0,
            a1=1.0,
            fill=fill,
            path=_ring_path(r0, r1),
            fill_rule="evenodd",
        )

    span = revs(span)
    start = revs(a0)
    end = start + span

    a0r0 = polar_point(start, r0)
    a1r0 = polar_point(end, r0)
    a0r1 = polar_point(start, r1)
    a1r1 = polar_point(end, r1)

    large = "1" if span >= 0.5 else "0"
    path = (
        f"M {_fmt(*a1r0)}"
        f" A {r0:g} {r0:g} 0 {large} 0 {_fmt(*a0r0)}"
        f" L {_fmt(*a0r1)}"
        f" A {r1:g} {r1:g} 0 {large} 1 {_fmt(*a1r1)}"
        " Z"
    )
    return Wedge(r0=r0, r1=r1, a0=start, a1=end, fill=fill, path=path)


def place_at(a: float, r: float) -> Transform:
    """Rotate+translate that puts a local origin at angle `a`, radius `r`."""
    return Transform(rotate_deg=revs(a) * 360.0, cx=CX, cy=CY, radius=r)


def radial_mark(a: float, length: float = 3.0, offset_from_rim: float = 0.0) -> Mark:
    """Radial tick of `length` running outward from the rim at angle `a`."""
    return Mark(length=length, transform=place_at(a, RADIUS - offset_from_rim))

"""Dial composer — DialInfo + illumination series → Scene."""

from __future__ import annotations

import math
from typing import Sequence

from sundial.colors import altitude_to_color
from sundial.geometry import RADIUS, place_at, radial_mark, wedge
from sundial.models import DialInfo, Disk, Scene

_FACE_STROKE = "currentColor"
_INDICATOR_RADIUS = 2.0
_DOT_RADIUS = 0.5
_TICK_LENGTH = 3.0

# Rim dots marking where the sun will be 4 and 8 hours from now.
_LOOKAHEAD = (4 / 24, 8 / 24)


def compose(info: DialInfo, series: Sequence[float]) -> Scene:
    """Build the full dial scene, back to front.

    Args:
        info: Current dial state (day fraction, dawn/dusk fractions, sun altitude).
        series: Sun altitudes in degrees, one per slice, starting at solar noon.

    Returns:
        Scene with the clipped illumination ring, the look-ahead dots, the
        noon/dawn/dusk ticks and the sun indicator.
    """
    n = len(series)
    background = tuple(
        wedge(0.0, RADIUS, i / n, (i + 1) / n, altitude_to_color(alt))
        for i, alt in enumerate(series)
    )

    dots = tuple(
        Disk(
            cx=0.0,
            cy=0.0,
            r=_DOT_RADIUS,
            fill=_FACE_STROKE,
            transform=place_at(info.day_percent + ahead, RADIUS),
        )
        for ahead in _LOOKAHEAD
    )

    marks = tuple(
        radial_mark(a, length=_TICK_LENGTH)
        for a in (0.0, info.dawn_percent, info.dusk_percent)
    )

    indicator = Disk(
        cx=0.0,
        cy=0.0,
        r=_INDICATOR_RADIUS,
        fill=altitude_to_color(math.degrees(info.sun_angle)),
        stroke=_FACE_STROKE,
        transform=place_at(info.day_percent, RADIUS),
    )

    return Scene(background=background, marks=marks, indicator=indicator, dots=dots)

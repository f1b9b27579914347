import math

import pytest

from sundial.colors import DAY, NIGHT, altitude_to_color
from sundial.compose import compose
from sundial.geometry import CX, CY, RADIUS
from sundial.models import DialInfo, Wedge


def _info(**overrides):
    values = dict(
        day_percent=0.25, dawn_percent=-0.3, dusk_percent=0.3, sun_angle=math.radians(30)
    )
    values.update(overrides)
    return DialInfo(**values)


def test_ring_has_one_wedge_per_sample():
    series = [10.0, 0.0, -10.0, 3.0]
    scene = compose(_info(), series)
    assert len(scene.background) == 4
    for i, (w, alt) in enumerate(zip(scene.background, series)):
        assert isinstance(w, Wedge)
        assert (w.r0, w.r1) == (0.0, RADIUS)
        assert w.a0 == pytest.approx(i / 4)
        assert w.a1 == pytest.approx((i + 1) / 4)
        assert w.fill == altitude_to_color(alt)


def test_ring_covers_the_full_circle():
    scene = compose(_info(), [0.0] * 72)
    assert sum(w.span for w in scene.background) == pytest.approx(1.0)


def test_marks_at_noon_dawn_and_dusk():
    scene = compose(_info(dawn_percent=-0.3, dusk_percent=0.3), [0.0] * 8)
    angles = [m.transform.rotate_deg for m in scene.marks]
    assert angles == pytest.approx([0.0, 0.7 * 360, 0.3 * 360])
    assert all(m.transform.radius == RADIUS for m in scene.marks)


def test_indicator_placed_at_day_percent():
    scene = compose(_info(day_percent=0.25), [0.0] * 8)
    ind = scene.indicator
    assert ind.transform.apply() == pytest.approx((CX + RADIUS, CY))
    assert ind.r == 2.0
    assert ind.stroke == "currentColor"


def test_indicator_color_follows_sun_altitude():
    assert compose(_info(sun_angle=math.radians(30)), [0.0]).indicator.fill == DAY
    assert compose(_info(sun_angle=math.radians(-30)), [0.0]).indicator.fill == NIGHT
    mid = compose(_info(sun_angle=0.0), [0.0]).indicator.fill
    assert mid == altitude_to_color(0.0)


def test_lookahead_dots():
    scene = compose(_info(day_percent=0.0), [0.0] * 8)
    assert [d.transform.rotate_deg for d in scene.dots] == pytest.approx([60.0, 120.0])


def test_elements_back_to_front():
    scene = compose(_info(), [1.0, 2.0])
    elements = list(scene.elements)
    assert elements[:2] == list(scene.background)
    assert elements[-1] is scene.indicator
    assert len(elements) == 2 + 2 + 3 + 1


def test_polar_nan_fractions_do_not_raise():
    scene = compose(_info(dawn_percent=math.nan, dusk_percent=math.nan), [-20.0] * 8)
    assert math.isnan(scene.marks[1].transform.rotate_deg)
    assert scene.marks[0].transform.rotate_deg == 0.0


def test_compose_is_fresh_per_call():
    info = _info()
    assert compose(info, [1.0]) == compose(info, [1.0])
    assert compose(info, [1.0]) is not compose(info, [1.0])

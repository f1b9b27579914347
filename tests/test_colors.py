import pytest

from sundial.colors import DAY, NIGHT, altitude_to_color, altitude_to_illumination


def test_reference_colors_at_twilight_bounds():
    assert altitude_to_color(-6) == NIGHT
    assert altitude_to_color(6) == DAY


def test_horizon_is_midpoint():
    c = altitude_to_color(0)
    assert c.r == pytest.approx((NIGHT.r + DAY.r) / 2)
    assert c.g == pytest.approx((NIGHT.g + DAY.g) / 2)
    assert c.b == pytest.approx((NIGHT.b + DAY.b) / 2)


def test_clamped_outside_twilight_band():
    for alt in (-90, -45, -6.0001, -7):
        assert altitude_to_color(alt) == NIGHT
    for alt in (6.0001, 20, 90):
        assert altitude_to_color(alt) == DAY


def test_monotonic_per_channel():
    alts = [-6 + i * 0.25 for i in range(49)]
    colors = [altitude_to_color(a) for a in alts]
    for prev, cur in zip(colors, colors[1:]):
        # Day is redder and greener than night, but less blue
        assert cur.r >= prev.r
        assert cur.g >= prev.g
        assert cur.b <= prev.b


def test_illumination_ramp():
    assert altitude_to_illumination(-6) == 0.0
    assert altitude_to_illumination(3) == pytest.approx(0.75)
    assert altitude_to_illumination(12) == 1.0


def test_channels_not_rounded():
    c = altitude_to_color(1)
    assert c.r != round(c.r)
    assert c.css == f"rgb({c.r},{c.g},{c.b})"

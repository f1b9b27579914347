"""Sun altitude → day/night dial color."""

from sundial.models import RGBColor

NIGHT = RGBColor(20, 15, 97)
DAY = RGBColor(252, 223, 3)

# Civil twilight boundary: -6° is full night, +6° full day.
_TWILIGHT_DEG = 6.0


def altitude_to_illumination(altitude_deg: float) -> float:
    """Linear ramp from 0 at -6° to 1 at +6°, clamped outside."""
    return min(1.0, max(0.0, (altitude_deg / _TWILIGHT_DEG + 1) / 2))


def altitude_to_color(altitude_deg: float) -> RGBColor:
    """Interpolate between the night and day reference colors.

    Args:
        altitude_deg: Sun altitude in degrees.

    Returns:
        RGBColor with unrounded float channels.
    """
    illum = altitude_to_illumination(altitude_deg)
    return RGBColor(
        r=illum * DAY.r + (1 - illum) * NIGHT.r,
        g=illum * DAY.g + (1 - illum) * NIGHT.g,
        b=illum * DAY.b + (1 - illum) * NIGHT.b,
    )

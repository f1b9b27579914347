"""SVG sundial renderer.

Produces a standalone <svg> string, and a self-contained HTML page for
embedding via st.components.v1.html(). Uses viewBox="0 0 100 100" with CSS
width/height 100% so the browser handles all scaling.

Coordinate system (matches geometry.py):
  center (50, 50), dial radius 45, y grows downward
"""

from __future__ import annotations

import html

from sundial.models import Disk, Mark, RGBColor, Scene, Wedge

_BG = "#0d1b35"
_FACE_COLOR = "#e8d5a3"
_CLIP_ID = "dial-clip"


def _paint(value: RGBColor | str) -> str:
    return value.css if isinstance(value, RGBColor) else value


def _wedge_svg(w: Wedge) -> str:
    rule = f' fill-rule="{w.fill_rule}"' if w.fill_rule != "nonzero" else ""
    return f'<path d="{w.path}" fill="{w.fill.css}"{rule}/>'


def _disk_svg(d: Disk) -> str:
    stroke = f' stroke="{d.stroke}" stroke-width="0.5"' if d.stroke else ""
    circle = f'<circle r="{d.r:g}" fill="{_paint(d.fill)}"{stroke}'
    if d.transform is None:
        return f'{circle} cx="{d.cx:.4f}" cy="{d.cy:.4f}"/>'
    return f'<g transform="{d.transform.svg}">{circle}/></g>'


def _mark_svg(m: Mark) -> str:
    return (
        f'<g transform="{m.transform.svg}">'
        f'<line x1="0" y1="{-m.length:g}" x2="0" y2="0"'
        f' stroke="{m.stroke}" stroke-width="0.5"/></g>'
    )


def render_svg(scene: Scene) -> str:
    """Return the dial as an <svg> element string.

    The illumination ring is clipped to the dial circle; the look-ahead
    dots, the noon/dawn/dusk ticks and the sun indicator are drawn on top
    without clipping.

    Args:
        scene: Fully composed dial scene.

    Returns:
        SVG markup.
    """
    half = scene.size / 2
    ring_svg = "\n    ".join(
        _wedge_svg(p) if isinstance(p, Wedge) else _disk_svg(p)
        for p in scene.background
    )
    dots_svg = "\n  ".join(_disk_svg(d) for d in scene.dots)
    marks_svg = "\n  ".join(_mark_svg(m) for m in scene.marks)

    return f"""<svg class="sundial" viewBox="0 0 {scene.size:g} {scene.size:g}" xmlns="http://www.w3.org/2000/svg">
  <defs>
    <clipPath id="{_CLIP_ID}"><circle cx="{half:g}" cy="{half:g}" r="{half:g}"/></clipPath>
  </defs>
  <g shape-rendering="crispEdges" clip-path="url(#{_CLIP_ID})">
    {ring_svg}
  </g>
  {dots_svg}
  {marks_svg}
  {_disk_svg(scene.indicator)}
</svg>"""


def render_svg_html(scene: Scene, caption: str = "") -> str:
    """Return a self-contained HTML page with the dial SVG.

    Args:
        scene: Fully composed dial scene.
        caption: Optional text shown under the dial (HTML-escaped).

    Returns:
        HTML string suitable for st.components.v1.html().
    """
    caption_html = (
        f'<p class="caption">{html.escape(caption)}</p>' if caption else ""
    )
    return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<style>
* {{ margin: 0; padding: 0; box-sizing: border-box; }}
html, body {{
    width: 100%;
    height: 100%;
    background: {_BG};
    color: {_FACE_COLOR};
    overflow: hidden;
}}
body {{
    display: flex;
    flex-direction: column;
    align-items: center;
    justify-content: center;
}}
svg.sundial {{
    display: block;
    width: min(100vw, 90vh);
    height: min(100vw, 90vh);
}}
.caption {{
    font-family: sans-serif;
    font-size: 0.85rem;
    letter-spacing: 0.05em;
    opacity: 0.8;
}}
</style>
</head>
<body>
{render_svg(scene)}
{caption_html}
</body>
</html>"""

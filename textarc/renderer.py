"""SVG and PNG preview rendering for curved text.

Renders a top-down view of the X/Z plane: the observer sits at the
canvas center and -Z (straight ahead) points up. Each glyph is drawn
as its footprint -- width along the arc tangent, extrusion depth
pointing away from the observer -- starting at its anchor, with the
character itself rotated to the tangent.

Guides (optional):
- dashed circle of the arc radius
- observer marker at the origin
- ray towards the angular offset the text is centered on
"""

from __future__ import annotations

import math
from xml.sax.saxutils import escape

import structlog

from .config import check_hex_color
from .curve import CurvedText

logger = structlog.get_logger(__name__)

# Default stroke palette (cool neutral)
DEFAULT_COLORS = ["#2D3748", "#4A5568", "#718096", "#A0AEC0", "#CBD5E0"]

# Arc radius as a fraction of the canvas size
ARC_FRACTION = 0.40

# Minimum drawn glyph depth in pixels, so flat glyphs stay visible
MIN_DEPTH_PX = 2.0


def _hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Convert a hex color string to (r, g, b) tuple."""
    h = hex_color.lstrip("#")
    return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))


def _luminance(hex_color: str) -> float:
    """Relative luminance in [0, 1] (Rec. 601 weights)."""
    r, g, b = _hex_to_rgb(hex_color)
    return (0.299 * r + 0.587 * g + 0.114 * b) / 255.0


def render_svg(
    curved: CurvedText,
    size: int = 512,
    colors: list[str] | None = None,
    show_guides: bool = True,
) -> str:
    """Render a curved text as a top-down SVG preview.

    Args:
        curved: Output of curve_text.
        size: Output size in pixels (width = height).
        colors: Stroke palette; first color outlines glyphs, second draws guides.
        show_guides: Draw the arc circle, observer and offset ray.

    Returns:
        Complete SVG document as a string.

    Raises:
        ValueError: If a palette entry is not a "#RRGGBB" color.
    """
    palette = [check_hex_color(c) for c in (colors or DEFAULT_COLORS)]
    outline = palette[0]
    guide = palette[1] if len(palette) > 1 else palette[0]
    fill = curved.material.color

    # Light glyphs get a dark backdrop so they stay visible
    background = "#1A202C" if _luminance(fill) > 0.6 else "white"

    cx = size / 2.0
    cy = size / 2.0
    scale = size * ARC_FRACTION / curved.radius

    def to_px(x: float, z: float) -> tuple[float, float]:
        return (cx + x * scale, cy + z * scale)

    svg_parts: list[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'viewBox="0 0 {size} {size}" '
        f'width="{size}" height="{size}">',
        f'  <rect width="{size}" height="{size}" fill="{background}"/>',
    ]

    if show_guides:
        arc_r = curved.radius * scale
        svg_parts.append(
            f'  <circle cx="{cx:.1f}" cy="{cy:.1f}" r="{arc_r:.1f}" '
            f'fill="none" stroke="{guide}" stroke-width="1.0" '
            f'stroke-dasharray="6,4" class="arc-guide"/>'
        )
        ox, oy = to_px(curved.radius * math.sin(curved.offset), -curved.radius * math.cos(curved.offset))
        svg_parts.append(
            f'  <line x1="{cx:.1f}" y1="{cy:.1f}" x2="{ox:.1f}" y2="{oy:.1f}" '
            f'stroke="{guide}" stroke-width="1.0" class="offset-ray"/>'
        )
        svg_parts.append(
            f'  <circle cx="{cx:.1f}" cy="{cy:.1f}" r="4.0" '
            f'fill="{guide}" class="observer"/>'
        )

    depth = max(curved.extrusion_depth * scale, MIN_DEPTH_PX)
    font_px = max(size * 0.03, 6.0)
    for glyph in curved.glyphs:
        theta = glyph.placement.angle
        x, _, z = glyph.placement.position
        width = glyph.metric.width * scale

        # Tangent (direction of increasing angle) and outward normal, in pixels
        tx, ty = math.cos(theta), math.sin(theta)
        nx, ny = math.sin(theta), -math.cos(theta)

        ax, ay = to_px(x, z)
        corners = [
            (ax, ay),
            (ax + tx * width, ay + ty * width),
            (ax + tx * width + nx * depth, ay + ty * width + ny * depth),
            (ax + nx * depth, ay + ny * depth),
        ]
        points_str = " ".join(f"{px:.1f},{py:.1f}" for px, py in corners)
        svg_parts.append(
            f'  <polygon points="{points_str}" '
            f'fill="{fill}" '
            f'stroke="{outline}" '
            f'stroke-width="0.5" '
            f'class="glyph"/>'
        )

        # Label just inside the arc, centered on the glyph footprint
        lx = ax + tx * width / 2.0 - nx * font_px
        ly = ay + ty * width / 2.0 - ny * font_px
        svg_parts.append(
            f'  <text x="{lx:.1f}" y="{ly:.1f}" '
            f'font-size="{font_px:.1f}" font-family="sans-serif" '
            f'text-anchor="middle" fill="{fill}" '
            f'transform="rotate({math.degrees(theta):.2f} {lx:.1f} {ly:.1f})">'
            f"{escape(glyph.char)}</text>"
        )

    svg_parts.append("</svg>")
    svg_content = "\n".join(svg_parts)

    logger.debug(
        "svg_rendered",
        glyphs=len(curved.glyphs),
        size=size,
        guides=show_guides,
    )

    return svg_content


def render_png(
    curved: CurvedText,
    size: int = 512,
    colors: list[str] | None = None,
    show_guides: bool = True,
) -> bytes:
    """Render a curved text preview as a PNG image.

    Generates SVG first, then converts to PNG via CairoSVG.

    Returns:
        PNG image bytes.
    """
    import cairosvg

    svg = render_svg(curved, size, colors, show_guides=show_guides)
    png_bytes = cairosvg.svg2png(
        bytestring=svg.encode("utf-8"),
        output_width=size,
        output_height=size,
    )

    logger.debug("png_rendered", glyphs=len(curved.glyphs), size=size, bytes=len(png_bytes))
    return png_bytes

"""Arc layout for curved text.

Places a sequence of glyphs along a circular arc of a given radius,
centered on an angular offset, each glyph facing the arc's center.

Layout algorithm:
1. Span: sum (width + padding) / radius over all glyphs
2. Start the running angle at -span / 2 + offset
3. For each glyph, anchor it at the running angle (leading edge of its
   slot), orient it towards the origin, then advance by its own slot

Angles are measured from the -Z axis (straight ahead of an observer at
the origin) towards +X, so a glyph at angle t sits at
(r sin t, 0, -r cos t).

Both passes are needed: the start angle depends on the span of the
whole sequence, so nothing can be placed until every width is known.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

import structlog

from .config import LayoutConfig
from .metrics import GlyphMetric
from .quaternion import Quaternion

logger = structlog.get_logger(__name__)

# Canonical front of a glyph before orientation is applied
FORWARD = (0.0, 0.0, -1.0)


@dataclass(frozen=True)
class Transform:
    """Rigid transform of a placed glyph.

    Attributes:
        rotation: Orientation quaternion.
        translation: (x, y, z) position.
    """

    rotation: Quaternion
    translation: tuple[float, float, float]


@dataclass(frozen=True)
class Placement:
    """Where one glyph goes on the arc.

    Attributes:
        angle: Angle (radians) of the glyph anchor on the arc.
        position: (x, y, z) anchor position; y is always 0.
        orientation: Rotation taking FORWARD onto the inward direction.
    """

    angle: float
    position: tuple[float, float, float]
    orientation: Quaternion

    @property
    def transform(self) -> Transform:
        return Transform(rotation=self.orientation, translation=self.position)


@dataclass(frozen=True)
class ArcLayout:
    """Result of laying out a whole sequence.

    Attributes:
        total_span: Angle consumed by all slots.
        start_angle: Running angle before the first glyph.
        end_angle: Running angle after the last glyph.
        placements: One placement per glyph, in input order.
    """

    total_span: float
    start_angle: float
    end_angle: float
    placements: list[Placement] = field(default_factory=list)


def _check_radius(radius: float) -> None:
    if not math.isfinite(radius) or radius <= 0:
        raise ValueError(f"Radius must be a finite value > 0, got {radius}")


def compute_span(glyphs: Sequence[GlyphMetric], radius: float) -> float:
    """Total angle (radians) a glyph sequence occupies on the arc.

    Args:
        glyphs: Glyph metrics in display order.
        radius: Arc radius, > 0.

    Returns:
        Sum of (width + padding) / radius; 0.0 for an empty sequence.

    Raises:
        ValueError: If radius is not positive.
    """
    _check_radius(radius)
    span = 0.0
    for glyph in glyphs:
        span += glyph.slot_angle(radius)
    return span


def _place_one(angle: float, radius: float) -> Placement:
    """Anchor a glyph at `angle` and orient it towards the origin."""
    x = radius * math.sin(angle)
    z = -radius * math.cos(angle)

    # The radial direction through the anchor; radius > 0 keeps it non-zero
    length = math.hypot(x, z)
    inward = (x / length, 0.0, z / length)

    return Placement(
        angle=angle,
        position=(x, 0.0, z),
        orientation=Quaternion.from_to(FORWARD, inward),
    )


def place_glyphs(
    glyphs: Sequence[GlyphMetric],
    radius: float,
    offset: float,
    total_span: float,
) -> list[Placement]:
    """Place each glyph on the arc, centering the sequence on `offset`.

    Each glyph is anchored at the leading edge of its angular slot, not
    at the slot center, so glyphs are evenly spaced by slot width.

    Args:
        glyphs: Glyph metrics in display order.
        radius: Arc radius, > 0.
        offset: Angle (radians) the middle of the sequence is aligned to.
        total_span: Output of compute_span for the same glyphs and radius.

    Returns:
        Placements in input order.

    Raises:
        ValueError: If radius is not positive.
    """
    _check_radius(radius)

    placements: list[Placement] = []
    current_angle = -total_span / 2.0 + offset

    for glyph in glyphs:
        # Per-glyph increment: widths vary, so this cannot come from the total
        increment = glyph.slot_angle(radius)
        placements.append(_place_one(current_angle, radius))
        current_angle += increment

    return placements


def layout_arc(glyphs: Sequence[GlyphMetric], config: LayoutConfig) -> ArcLayout:
    """Run the span and placement passes for one glyph sequence."""
    total_span = compute_span(glyphs, config.radius)
    placements = place_glyphs(glyphs, config.radius, config.offset, total_span)

    layout = ArcLayout(
        total_span=total_span,
        start_angle=-total_span / 2.0 + config.offset,
        end_angle=total_span / 2.0 + config.offset,
        placements=placements,
    )

    logger.debug(
        "arc_laid_out",
        glyphs=len(placements),
        radius=config.radius,
        offset=config.offset,
        total_span=round(total_span, 6),
    )
    return layout

"""Curve a string along an arc.

curve_text ties the pieces together:
1. Measure every character with a glyph source (once per character)
2. Drop characters the source cannot produce
3. Compute the total span, then place each surviving glyph
4. Hand each placed glyph to the optional effect provider
5. Translate the container by the configured y_position

Dropping a character never aborts the string; the caller can inspect
CurvedText.dropped to report it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import structlog

from .config import CurveConfiguration, MaterialSpec
from .glyphs import GlyphBlock, GlyphSource, GlyphUnavailableError, PillowGlyphSource
from .layout import Placement, layout_arc
from .metrics import GlyphMetric

logger = structlog.get_logger(__name__)


@dataclass
class CurvedGlyph:
    """A character placed on the arc.

    Attributes:
        index: Position of the character in the input string.
        char: The character.
        block: Measured glyph bounds.
        metric: Width and padding used for layout.
        placement: Position and orientation relative to the container.
        effect: Whatever the effect provider returned, or None.
    """

    index: int
    char: str
    block: GlyphBlock
    metric: GlyphMetric
    placement: Placement
    effect: Any = None

    @property
    def name(self) -> str:
        return f"char_{self.index}"


@dataclass
class CurvedText:
    """A string laid out along an arc.

    Glyph placements are relative to the container; `position` is the
    container's own translation.
    """

    text: str
    radius: float
    offset: float
    total_span: float
    position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    glyphs: list[CurvedGlyph] = field(default_factory=list)
    dropped: list[tuple[int, str]] = field(default_factory=list)
    material: MaterialSpec = field(default_factory=MaterialSpec)
    extrusion_depth: float = 0.0

    def world_position(self, glyph: CurvedGlyph) -> tuple[float, float, float]:
        """Glyph anchor position including the container translation."""
        x, y, z = glyph.placement.position
        cx, cy, cz = self.position
        return (x + cx, y + cy, z + cz)


def curve_text(
    text: str,
    configuration: CurveConfiguration | None = None,
    glyph_source: GlyphSource | None = None,
) -> CurvedText:
    """Lay a string out along an arc facing the origin.

    Args:
        text: Text to curve. Each character becomes one glyph.
        configuration: Layout, styling and material settings.
        glyph_source: Measures characters. Defaults to PillowGlyphSource.

    Returns:
        CurvedText with one CurvedGlyph per character the source could
        produce, in display order.

    Raises:
        ValueError: If the configuration or font cannot be used.
    """
    config = configuration or CurveConfiguration()
    source = glyph_source or PillowGlyphSource()
    style = config.glyph_style

    blocks: list[tuple[int, GlyphBlock]] = []
    dropped: list[tuple[int, str]] = []
    for index, char in enumerate(text):
        try:
            block = source.generate(char, style)
        except GlyphUnavailableError as e:
            logger.info("glyph_dropped", index=index, char=char, reason=e.reason)
            dropped.append((index, char))
            continue
        blocks.append((index, block))

    metrics = [GlyphMetric(width=block.width, padding=config.letter_padding) for _, block in blocks]
    layout = layout_arc(metrics, config.layout_config)

    curved = CurvedText(
        text=text,
        radius=config.radius,
        offset=config.offset,
        total_span=layout.total_span,
        position=(0.0, config.y_position, 0.0),
        dropped=dropped,
        material=config.material,
        extrusion_depth=config.extrusion_depth,
    )

    for (index, block), metric, placement in zip(blocks, metrics, layout.placements):
        glyph = CurvedGlyph(
            index=index,
            char=block.char,
            block=block,
            metric=metric,
            placement=placement,
        )
        if config.effect_provider is not None:
            glyph.effect = config.effect_provider(glyph, placement.transform)
        curved.glyphs.append(glyph)

    logger.debug(
        "text_curved",
        chars=len(text),
        placed=len(curved.glyphs),
        dropped=len(dropped),
        total_span=round(layout.total_span, 6),
    )
    return curved

"""Glyph sources: measure single characters for the arc layout.

A glyph source turns one character plus a GlyphStyle into a GlyphBlock,
an axis-aligned bounding box in world units. The layout only uses the
box's extent along X; height and depth are kept for scene export and
preview rendering.

Two sources are provided:
- PillowGlyphSource measures the ink box of a FreeType font via Pillow
- TableGlyphSource looks widths up in a fixed table

A source that cannot produce a character raises GlyphUnavailableError,
which curve_text turns into "skip this character".
"""

from __future__ import annotations

import functools
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

import structlog
from PIL import Image, ImageDraw, ImageFont

from .config import GlyphStyle

logger = structlog.get_logger(__name__)

# Pixel size fonts are rasterized at for measurement
DEFAULT_RESOLUTION = 256

# Private-use code point no font maps; it renders as the missing-glyph box
UNMAPPED_CODEPOINT = "\U0010FFFD"


class GlyphUnavailableError(LookupError):
    """A glyph source cannot produce a block for a character."""

    def __init__(self, char: str, reason: str):
        super().__init__(f"Glyph unavailable for {char!r}: {reason}")
        self.char = char
        self.reason = reason


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box given by its minimum and maximum corners."""

    minimum: tuple[float, float, float]
    maximum: tuple[float, float, float]

    @property
    def extents(self) -> tuple[float, float, float]:
        return tuple(hi - lo for lo, hi in zip(self.minimum, self.maximum))


@dataclass(frozen=True)
class GlyphBlock:
    """One measured character."""

    char: str
    bounds: BoundingBox

    @property
    def width(self) -> float:
        """Extent along the layout axis."""
        return self.bounds.extents[0]


class GlyphSource(Protocol):
    def generate(self, char: str, style: GlyphStyle) -> GlyphBlock: ...


def _box_for(width: float, height: float, depth: float, alignment: str) -> BoundingBox:
    """Place a width x height x depth box on X according to the alignment.

    The glyph baseline sits on y=0 and the extrusion goes back along -Z.
    """
    if alignment == "left" or alignment == "natural":
        x0 = 0.0
    elif alignment == "right":
        x0 = -width
    else:
        x0 = -width / 2.0
    return BoundingBox(
        minimum=(x0, 0.0, -depth),
        maximum=(x0 + width, height, 0.0),
    )


def _check_char(char: str) -> None:
    if len(char) != 1:
        raise GlyphUnavailableError(char, "expected a single character")
    if not char.isprintable():
        raise GlyphUnavailableError(char, "character is not printable")


@functools.lru_cache(maxsize=32)
def _load_font(font: str | None, resolution: int) -> ImageFont.FreeTypeFont:
    """Load (and cache) a FreeType font at the given pixel size.

    Raises:
        ValueError: If the font file cannot be read.
    """
    if font is None:
        return ImageFont.load_default(size=resolution)
    try:
        return ImageFont.truetype(font, size=resolution)
    except OSError as e:
        raise ValueError(f"Cannot load font '{font}': {e}") from e


def _signature(font: ImageFont.FreeTypeFont, char: str) -> tuple:
    """Ink box plus rasterized pixels of `char`, for comparing rendered glyphs."""
    bbox = font.getbbox(char)
    size = (max(1, math.ceil(bbox[2])), max(1, math.ceil(bbox[3])))
    image = Image.new("L", size, 0)
    ImageDraw.Draw(image).text((0, 0), char, font=font, fill=255)
    return tuple(bbox), image.tobytes()


@functools.lru_cache(maxsize=32)
def _missing_glyph_signature(font: str | None, resolution: int) -> tuple:
    """Signature of the font's fallback glyph, drawn for unmapped characters."""
    return _signature(_load_font(font, resolution), UNMAPPED_CODEPOINT)


class PillowGlyphSource:
    """Measure glyphs with Pillow's FreeType bindings.

    The ink box of each character is measured at `resolution` pixels
    per em and scaled so that one em equals `style.font_size` world units.

    Characters the font has no glyph for come out as the font's fallback
    glyph (usually an empty box). Those are detected by comparing against
    the rendering of an unmapped code point and reported as unavailable.
    Whitespace is exempt: its ink is empty anyway.
    """

    def __init__(self, resolution: int = DEFAULT_RESOLUTION):
        if resolution <= 0:
            raise ValueError(f"Resolution must be > 0, got {resolution}")
        self.resolution = resolution

    def generate(self, char: str, style: GlyphStyle) -> GlyphBlock:
        _check_char(char)
        font = _load_font(style.font, self.resolution)

        if not char.isspace():
            if _signature(font, char) == _missing_glyph_signature(style.font, self.resolution):
                raise GlyphUnavailableError(char, "font has no glyph for character")

        left, top, right, bottom = font.getbbox(char)
        scale = style.font_size / self.resolution
        width = max(0.0, (right - left) * scale)
        height = max(0.0, (bottom - top) * scale)

        logger.debug("glyph_measured", char=char, width=round(width, 6), font=style.font)
        return GlyphBlock(
            char=char,
            bounds=_box_for(width, height, style.extrusion_depth, style.alignment),
        )


class TableGlyphSource:
    """Fixed glyph widths, for deterministic layouts and tests.

    Widths are given for a font of `reference_size` and scaled linearly
    to the requested font size.
    """

    def __init__(
        self,
        widths: Mapping[str, float],
        default_width: float | None = None,
        reference_size: float = 1.0,
        height: float = 0.7,
    ):
        if reference_size <= 0:
            raise ValueError(f"Reference size must be > 0, got {reference_size}")
        for char, width in widths.items():
            if width < 0:
                raise ValueError(f"Width for {char!r} must be >= 0, got {width}")
        if default_width is not None and default_width < 0:
            raise ValueError(f"Default width must be >= 0, got {default_width}")
        self.widths = dict(widths)
        self.default_width = default_width
        self.reference_size = reference_size
        self.height = height

    def generate(self, char: str, style: GlyphStyle) -> GlyphBlock:
        _check_char(char)
        width = self.widths.get(char, self.default_width)
        if width is None:
            raise GlyphUnavailableError(char, "no width in table")

        scale = style.font_size / self.reference_size
        return GlyphBlock(
            char=char,
            bounds=_box_for(
                width * scale,
                self.height * scale,
                style.extrusion_depth,
                style.alignment,
            ),
        )

"""Configuration for curved text.

CurveConfiguration is the user-facing bundle: layout parameters, the
styling passed through to glyph sources, and material settings. Layout
parameters are clamped here, at the boundary, so the layout itself never
sees a non-positive radius or a negative padding.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import structlog

logger = structlog.get_logger(__name__)

# Layout defaults
DEFAULT_RADIUS = 3.0
MIN_RADIUS = 0.01  # Smallest radius accepted after clamping
DEFAULT_LETTER_PADDING = 0.02

# Styling defaults (world units)
DEFAULT_FONT_SIZE = 0.12
DEFAULT_EXTRUSION_DEPTH = 0.03
DEFAULT_COLOR = "#FFFFFF"

ALIGNMENTS = ("left", "center", "right", "justified", "natural")
LINE_BREAK_MODES = (
    "word_wrapping",
    "char_wrapping",
    "clipping",
    "truncating_head",
    "truncating_tail",
    "truncating_middle",
)

HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


def check_hex_color(color: str) -> str:
    """Return `color` unchanged if it is "#RRGGBB", else raise ValueError."""
    if not isinstance(color, str) or not HEX_COLOR.match(color):
        raise ValueError(f"Invalid color '{color}'. Expected #RRGGBB")
    return color


@dataclass(frozen=True)
class LayoutConfig:
    """Parameters of one arc layout.

    Attributes:
        radius: Arc radius (> 0).
        offset: Angle (radians) the middle of the text is centered on.
    """

    radius: float
    offset: float = 0.0

    def __post_init__(self) -> None:
        if not math.isfinite(self.radius) or self.radius <= 0:
            raise ValueError(f"Radius must be a finite value > 0, got {self.radius}")
        if not math.isfinite(self.offset):
            raise ValueError(f"Offset must be finite, got {self.offset}")


@dataclass(frozen=True)
class GlyphStyle:
    """Styling bundle handed to glyph sources.

    Only the width of the resulting glyph bounds feeds the layout; the
    rest is passed through for whatever builds the glyph geometry.
    """

    font_size: float = DEFAULT_FONT_SIZE
    font: str | None = None
    extrusion_depth: float = DEFAULT_EXTRUSION_DEPTH
    container_frame: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
    alignment: str = "center"
    line_break_mode: str = "char_wrapping"


@dataclass(frozen=True)
class MaterialSpec:
    """Surface material applied to every glyph."""

    color: str = DEFAULT_COLOR
    roughness: float = 0.0
    is_metallic: bool = False


@dataclass(frozen=True)
class CurveConfiguration:
    """Everything that controls how a string is curved.

    Attributes:
        font_size: Glyph height in world units.
        font: Path to a TrueType/OpenType font, or None for the default font.
        extrusion_depth: Glyph depth in world units.
        color: Material color as "#RRGGBB".
        roughness: Material roughness in [0, 1].
        is_metallic: Whether the material is metallic.
        radius: Arc radius; clamped to at least MIN_RADIUS.
        offset: Angle (radians) the text is centered on.
        y_position: Vertical translation of the whole text container.
        letter_padding: Spacing after each glyph; clamped to >= 0.
        container_frame: (x, y, width, height) frame passed to glyph sources.
        alignment: Horizontal alignment inside the container frame.
        line_break_mode: Line-break strategy passed to glyph sources.
        effect_provider: Optional callable invoked once per placed glyph
            with (curved_glyph, transform); a non-None return value is
            stored on the glyph as its effect.
    """

    font_size: float = DEFAULT_FONT_SIZE
    font: str | None = None
    extrusion_depth: float = DEFAULT_EXTRUSION_DEPTH
    color: str = DEFAULT_COLOR
    roughness: float = 0.0
    is_metallic: bool = False
    radius: float = DEFAULT_RADIUS
    offset: float = 0.0
    y_position: float = 0.0
    letter_padding: float = DEFAULT_LETTER_PADDING
    container_frame: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)
    alignment: str = "center"
    line_break_mode: str = "char_wrapping"
    effect_provider: Callable[[Any, Any], Any] | None = None

    def __post_init__(self) -> None:
        if not math.isfinite(self.radius):
            raise ValueError(f"Radius must be finite, got {self.radius}")
        if self.radius < MIN_RADIUS:
            logger.warning("radius_clamped", requested=self.radius, radius=MIN_RADIUS)
            object.__setattr__(self, "radius", MIN_RADIUS)

        if not math.isfinite(self.letter_padding):
            raise ValueError(f"Letter padding must be finite, got {self.letter_padding}")
        if self.letter_padding < 0:
            logger.warning("letter_padding_clamped", requested=self.letter_padding, letter_padding=0.0)
            object.__setattr__(self, "letter_padding", 0.0)

        if not math.isfinite(self.offset):
            raise ValueError(f"Offset must be finite, got {self.offset}")
        if not math.isfinite(self.y_position):
            raise ValueError(f"y_position must be finite, got {self.y_position}")
        if not math.isfinite(self.font_size) or self.font_size <= 0:
            raise ValueError(f"Font size must be a finite value > 0, got {self.font_size}")
        if not math.isfinite(self.extrusion_depth) or self.extrusion_depth < 0:
            raise ValueError(f"Extrusion depth must be a finite value >= 0, got {self.extrusion_depth}")
        if not 0.0 <= self.roughness <= 1.0:
            raise ValueError(f"Roughness must be in [0, 1], got {self.roughness}")
        check_hex_color(self.color)
        if len(self.container_frame) != 4 or not all(math.isfinite(v) for v in self.container_frame):
            raise ValueError("Container frame must be four finite values (x, y, width, height)")

        if self.alignment not in ALIGNMENTS:
            valid = ", ".join(ALIGNMENTS)
            raise ValueError(f"Unknown alignment '{self.alignment}'. Valid alignments: {valid}")
        if self.line_break_mode not in LINE_BREAK_MODES:
            valid = ", ".join(LINE_BREAK_MODES)
            raise ValueError(
                f"Unknown line break mode '{self.line_break_mode}'. Valid modes: {valid}"
            )

    @property
    def layout_config(self) -> LayoutConfig:
        return LayoutConfig(radius=self.radius, offset=self.offset)

    @property
    def glyph_style(self) -> GlyphStyle:
        return GlyphStyle(
            font_size=self.font_size,
            font=self.font,
            extrusion_depth=self.extrusion_depth,
            container_frame=tuple(self.container_frame),
            alignment=self.alignment,
            line_break_mode=self.line_break_mode,
        )

    @property
    def material(self) -> MaterialSpec:
        return MaterialSpec(
            color=self.color,
            roughness=self.roughness,
            is_metallic=self.is_metallic,
        )

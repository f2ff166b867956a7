"""Glyph metrics consumed by the arc layout.

A GlyphMetric is the only thing the layout knows about a character:
its width along the layout axis and the padding that follows it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class GlyphMetric:
    """Width and trailing padding of one glyph, in world units.

    Attributes:
        width: Extent of the glyph along the layout axis (>= 0).
        padding: Spacing reserved after the glyph (>= 0).
    """

    width: float
    padding: float = 0.0

    def __post_init__(self) -> None:
        if not math.isfinite(self.width) or self.width < 0:
            raise ValueError(f"Glyph width must be a finite value >= 0, got {self.width}")
        if not math.isfinite(self.padding) or self.padding < 0:
            raise ValueError(f"Glyph padding must be a finite value >= 0, got {self.padding}")

    @property
    def advance(self) -> float:
        """Arc length occupied by the glyph slot."""
        return self.width + self.padding

    def slot_angle(self, radius: float) -> float:
        """Angle (radians) of the slot on an arc of the given radius."""
        return self.advance / radius

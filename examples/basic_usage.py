#!/usr/bin/env python3
"""Basic usage example for textarc.

Demonstrates curving a string around an observer, inspecting the
placements, attaching a per-glyph effect and rendering a preview.

Usage:
    python examples/basic_usage.py
"""

import json
import math
import os
import sys

# Add parent directory to path for direct script execution
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from textarc.config import CurveConfiguration
from textarc.curve import curve_text
from textarc.layout import FORWARD
from textarc.renderer import render_png, render_svg
from textarc.scene import to_scene


def example_basic_layout():
    """Curve a short string straight ahead of the observer."""
    print("=" * 60)
    print("Example 1: Basic Curved Text")
    print("=" * 60)

    curved = curve_text("Hello, arc")
    print(f"  Glyphs placed: {len(curved.glyphs)}")
    print(f"  Total span:    {curved.total_span:.4f} rad ({math.degrees(curved.total_span):.1f} deg)")

    for glyph in curved.glyphs[:3]:
        x, y, z = glyph.placement.position
        print(f"  {glyph.char!r}: angle={glyph.placement.angle:+.4f}  pos=({x:+.3f}, {y:.3f}, {z:+.3f})")
    print()


def example_offset_and_radius():
    """Move the text to the observer's right and further away."""
    print("=" * 60)
    print("Example 2: Offset and Radius")
    print("=" * 60)

    config = CurveConfiguration(radius=4.0, offset=math.pi / 2, y_position=1.35)
    curved = curve_text("to the right", config)
    middle = (curved.glyphs[0].placement.angle + curved.glyphs[-1].placement.angle) / 2
    print(f"  Radius:        {curved.radius}")
    print(f"  Middle angle:  {middle:.3f} rad (offset {config.offset:.3f})")
    print(f"  Container:     {curved.position}")

    # Every glyph faces the observer at the origin
    glyph = curved.glyphs[0]
    facing = glyph.placement.orientation.rotate(FORWARD)
    print(f"  First glyph faces: ({facing[0]:+.3f}, {facing[1]:+.3f}, {facing[2]:+.3f})")
    print()


def example_effects():
    """Attach an orbit description to every glyph."""
    print("=" * 60)
    print("Example 3: Per-Glyph Effects")
    print("=" * 60)

    def orbit(glyph, transform):
        return {
            "name": f"orbit_{glyph.name}",
            "duration": 300,
            "axis": [0, 1, 0],
            "start": list(transform.translation),
        }

    curved = curve_text("orbit", CurveConfiguration(effect_provider=orbit))
    scene = to_scene(curved)
    print(f"  Children:      {len(scene['children'])}")
    print(f"  First effect:  {scene['children'][0]['effect']['name']}")
    print(f"  Scene JSON:    {len(json.dumps(scene))} chars")
    print()


def example_dropped_chars():
    """Characters that cannot be measured are skipped, not fatal."""
    print("=" * 60)
    print("Example 4: Dropped Characters")
    print("=" * 60)

    curved = curve_text("tab\there")
    print(f"  Input length:  {len(curved.text)}")
    print(f"  Placed:        {len(curved.glyphs)}")
    print(f"  Dropped:       {curved.dropped}")
    print()


def example_preview():
    """Render top-down previews."""
    print("=" * 60)
    print("Example 5: Preview Rendering")
    print("=" * 60)

    curved = curve_text("preview", CurveConfiguration(color="#2B6CB0", radius=1.0))
    svg = render_svg(curved, size=256)
    png = render_png(curved, size=512)
    print(f"  SVG length:    {len(svg)} chars")
    print(f"  PNG size:      {len(png)} bytes")
    print()


if __name__ == "__main__":
    example_basic_layout()
    example_offset_and_radius()
    example_effects()
    example_dropped_chars()
    example_preview()
    print("All examples completed successfully.")

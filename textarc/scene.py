"""Scene export for curved text.

Flattens a CurvedText into a plain dict: one container node carrying
the material and the vertical translation, one child node per glyph
carrying its local position and orientation. Every value is a float,
int, str, bool, list, dict or None, so the result can go straight to
json.dumps.

Orientations are exported as [x, y, z, w].
"""

from __future__ import annotations

from typing import Any

from .curve import CurvedText

_JSON_SCALARS = (str, int, float, bool, type(None))


def _plain(value: Any) -> Any:
    """Reduce an effect value to something JSON can encode."""
    if isinstance(value, _JSON_SCALARS):
        return value
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    return str(value)


def to_scene(curved: CurvedText, name: str = "curved_text") -> dict:
    """Build the scene description of a curved text."""
    material = curved.material
    children = []
    for glyph in curved.glyphs:
        placement = glyph.placement
        children.append(
            {
                "name": glyph.name,
                "char": glyph.char,
                "index": glyph.index,
                "angle": placement.angle,
                "position": list(placement.position),
                "orientation": placement.orientation.as_xyzw(),
                "width": glyph.metric.width,
                "effect": _plain(glyph.effect),
            }
        )

    return {
        "name": name,
        "text": curved.text,
        "position": list(curved.position),
        "radius": curved.radius,
        "offset": curved.offset,
        "total_span": curved.total_span,
        "material": {
            "color": material.color,
            "roughness": material.roughness,
            "is_metallic": material.is_metallic,
        },
        "children": children,
        "dropped": [{"index": index, "char": char} for index, char in curved.dropped],
    }

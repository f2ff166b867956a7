"""Unit quaternions for glyph orientation.

Quaternions are stored scalar-first (w, x, y, z). Rotation of a vector
uses the expanded form v' = v + 2w(u x v) + 2u x (u x v), where u is
the vector part, which avoids building a rotation matrix.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

# Below this, 1 + dot(source, target) is treated as an antiparallel pair
ANTIPARALLEL_EPSILON = 1e-9


def _as_unit(vector) -> np.ndarray:
    """Convert to a float array and normalize, rejecting zero vectors."""
    arr = np.asarray(vector, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"Expected a 3-component vector, got shape {arr.shape}")
    norm = np.linalg.norm(arr)
    if norm <= 1e-15:
        raise ValueError("Cannot orient towards a zero-length vector")
    return arr / norm


def _orthogonal_axis(vector: np.ndarray) -> np.ndarray:
    """Pick a unit axis perpendicular to a unit vector.

    Horizontal vectors get the vertical (Y) axis so that half turns in
    the layout plane keep glyphs upright.
    """
    up = np.array([0.0, 1.0, 0.0])
    if abs(float(np.dot(vector, up))) < 1e-9:
        return up
    for candidate in ((1.0, 0.0, 0.0), (0.0, 0.0, 1.0)):
        axis = np.cross(vector, candidate)
        norm = np.linalg.norm(axis)
        if norm > 1e-6:
            return axis / norm
    raise ValueError("Cannot find an axis orthogonal to a zero vector")


@dataclass(frozen=True)
class Quaternion:
    """A rotation quaternion, scalar-first.

    Attributes:
        w: Scalar part.
        x: X component of the vector part.
        y: Y component of the vector part.
        z: Z component of the vector part.
    """

    w: float = 1.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def from_array(cls, arr) -> Quaternion:
        """Build from a (w, x, y, z) sequence."""
        w, x, y, z = (float(v) for v in arr)
        return cls(w, x, y, z)

    @classmethod
    def from_axis_angle(cls, axis, angle: float) -> Quaternion:
        """Rotation of `angle` radians about `axis` (right-hand rule)."""
        unit = _as_unit(axis)
        half = angle / 2.0
        s = np.sin(half)
        return cls(float(np.cos(half)), *(float(c) for c in unit * s))

    @classmethod
    def from_to(cls, source, target) -> Quaternion:
        """Minimal rotation taking direction `source` onto direction `target`.

        Both inputs are normalized first. For opposite directions the
        result is a half turn about an axis perpendicular to `source`.

        Raises:
            ValueError: If either vector has zero length.
        """
        a = _as_unit(source)
        b = _as_unit(target)
        dot = float(np.dot(a, b))

        if 1.0 + dot < ANTIPARALLEL_EPSILON:
            return cls.from_axis_angle(_orthogonal_axis(a), np.pi)

        # q = (1 + a.b, a x b) normalized is the half-angle rotation a -> b
        q = np.concatenate(([1.0 + dot], np.cross(a, b)))
        return cls.from_array(q).normalized()

    def as_array(self) -> np.ndarray:
        """Components as a (w, x, y, z) numpy array."""
        return np.array([self.w, self.x, self.y, self.z], dtype=float)

    def as_xyzw(self) -> list[float]:
        """Components in (x, y, z, w) order, as used by glTF and most engines."""
        return [self.x, self.y, self.z, self.w]

    @property
    def norm(self) -> float:
        return float(np.linalg.norm(self.as_array()))

    def normalized(self) -> Quaternion:
        n = self.norm
        if n <= 1e-15:
            raise ValueError("Cannot normalize a zero quaternion")
        return Quaternion.from_array(self.as_array() / n)

    def rotate(self, vector) -> tuple[float, float, float]:
        """Rotate a 3D vector by this quaternion."""
        v = np.asarray(vector, dtype=float)
        u = np.array([self.x, self.y, self.z], dtype=float)
        t = 2.0 * np.cross(u, v)
        rotated = v + self.w * t + np.cross(u, t)
        return (float(rotated[0]), float(rotated[1]), float(rotated[2]))

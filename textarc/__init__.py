"""textarc -- curved 3D text layout along a circular arc.

Lays out a sequence of independently-sized glyph blocks along an arc
around an observer standing at the origin. Every glyph gets a position
and an orientation quaternion so that its front face points back at the
center of curvature, and the whole string is centered on a chosen
angular offset.

The layout itself is a pure two-pass computation (span, then placement).
Glyph measurement, scene export, preview rendering and the HTTP service
are thin layers around it.
"""

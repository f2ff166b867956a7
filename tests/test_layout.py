"""Tests for the arc layout (span calculation and glyph placement)."""

import math

import pytest

from textarc.config import LayoutConfig
from textarc.layout import FORWARD, ArcLayout, Placement, compute_span, layout_arc, place_glyphs
from textarc.metrics import GlyphMetric

TWO_GLYPHS = [GlyphMetric(0.1, 0.02), GlyphMetric(0.08, 0.02)]


def _mixed_glyphs() -> list[GlyphMetric]:
    widths = [0.07, 0.11, 0.03, 0.09, 0.0, 0.12, 0.05]
    return [GlyphMetric(w, 0.02) for w in widths]


class TestComputeSpan:
    def test_empty_sequence_is_zero(self):
        assert compute_span([], 3.0) == 0.0

    def test_worked_example(self):
        span = compute_span(TWO_GLYPHS, 3.0)
        assert span == pytest.approx(0.12 / 3 + 0.10 / 3)
        assert span == pytest.approx(0.073333, abs=1e-6)

    def test_span_is_sum_of_slots(self):
        glyphs = _mixed_glyphs()
        expected = sum((g.width + g.padding) / 2.5 for g in glyphs)
        assert compute_span(glyphs, 2.5) == pytest.approx(expected)

    def test_span_non_decreasing_when_appending(self):
        glyphs = _mixed_glyphs()
        spans = [compute_span(glyphs[:n], 3.0) for n in range(len(glyphs) + 1)]
        assert spans == sorted(spans)

    def test_span_scales_inversely_with_radius(self):
        assert compute_span(TWO_GLYPHS, 6.0) == pytest.approx(compute_span(TWO_GLYPHS, 3.0) / 2)

    def test_zero_width_glyph_still_takes_padding(self):
        assert compute_span([GlyphMetric(0.0, 0.03)], 3.0) == pytest.approx(0.01)

    @pytest.mark.parametrize("radius", [0.0, -1.0, float("nan")])
    def test_rejects_non_positive_radius(self, radius):
        with pytest.raises(ValueError, match="Radius"):
            compute_span(TWO_GLYPHS, radius)


class TestPlaceGlyphs:
    def test_empty_sequence_yields_no_placements(self):
        assert place_glyphs([], 3.0, 0.0, 0.0) == []

    def test_worked_example_angles(self):
        span = compute_span(TWO_GLYPHS, 3.0)
        first, second = place_glyphs(TWO_GLYPHS, 3.0, 0.0, span)
        assert first.angle == pytest.approx(-0.036667, abs=1e-6)
        assert second.angle == pytest.approx(0.003333, abs=1e-6)
        assert second.angle - first.angle == pytest.approx(0.04)

    def test_worked_example_positions(self):
        span = compute_span(TWO_GLYPHS, 3.0)
        for placement in place_glyphs(TWO_GLYPHS, 3.0, 0.0, span):
            x, y, z = placement.position
            assert x == pytest.approx(3.0 * math.sin(placement.angle))
            assert y == 0.0
            assert z == pytest.approx(-3.0 * math.cos(placement.angle))

    def test_single_zero_glyph_sits_on_offset(self):
        glyphs = [GlyphMetric(0.0, 0.0)]
        span = compute_span(glyphs, 4.0)
        assert span == 0.0
        (placement,) = place_glyphs(glyphs, 4.0, 0.7, span)
        assert placement.angle == pytest.approx(0.7)
        assert placement.position == pytest.approx((4.0 * math.sin(0.7), 0.0, -4.0 * math.cos(0.7)))

    def test_same_length_and_order_as_input(self):
        glyphs = _mixed_glyphs()
        placements = place_glyphs(glyphs, 3.0, 0.2, compute_span(glyphs, 3.0))
        assert len(placements) == len(glyphs)
        angles = [p.angle for p in placements]
        assert angles == sorted(angles)

    def test_each_glyph_advances_by_its_own_slot(self):
        glyphs = _mixed_glyphs()
        placements = place_glyphs(glyphs, 3.0, 0.0, compute_span(glyphs, 3.0))
        for glyph, here, nxt in zip(glyphs, placements, placements[1:]):
            assert nxt.angle - here.angle == pytest.approx(glyph.slot_angle(3.0))

    def test_zero_width_glyph_advances_by_padding(self):
        glyphs = [GlyphMetric(0.0, 0.06), GlyphMetric(0.1, 0.0)]
        first, second = place_glyphs(glyphs, 3.0, 0.0, compute_span(glyphs, 3.0))
        assert second.angle - first.angle == pytest.approx(0.02)

    def test_orientation_is_unit_quaternion(self):
        glyphs = _mixed_glyphs()
        for placement in place_glyphs(glyphs, 1.5, 1.1, compute_span(glyphs, 1.5)):
            assert placement.orientation.norm == pytest.approx(1.0, abs=1e-5)

    @pytest.mark.parametrize("offset", [0.0, 0.5, -1.2, math.pi / 2, 3.0, -math.pi])
    def test_every_glyph_faces_the_origin(self, offset):
        glyphs = _mixed_glyphs()
        radius = 2.0
        for placement in place_glyphs(glyphs, radius, offset, compute_span(glyphs, radius)):
            x, _, z = placement.position
            length = math.hypot(x, z)
            facing = placement.orientation.rotate(FORWARD)
            assert facing == pytest.approx((x / length, 0.0, z / length), abs=1e-6)

    def test_glyph_straight_ahead_is_not_rotated(self):
        (placement,) = place_glyphs([GlyphMetric(0.0, 0.0)], 3.0, 0.0, 0.0)
        assert placement.position == pytest.approx((0.0, 0.0, -3.0))
        q = placement.orientation
        assert (q.w, q.x, q.y, q.z) == pytest.approx((1.0, 0.0, 0.0, 0.0))

    def test_glyph_behind_observer_stays_upright(self):
        (placement,) = place_glyphs([GlyphMetric(0.0, 0.0)], 3.0, math.pi, 0.0)
        q = placement.orientation
        assert q.x == pytest.approx(0.0, abs=1e-9)
        assert q.z == pytest.approx(0.0, abs=1e-9)
        assert placement.orientation.rotate((0.0, 1.0, 0.0)) == pytest.approx((0.0, 1.0, 0.0))

    def test_rotation_is_about_vertical_axis(self):
        glyphs = _mixed_glyphs()
        for placement in place_glyphs(glyphs, 3.0, 0.4, compute_span(glyphs, 3.0)):
            assert placement.orientation.rotate((0.0, 1.0, 0.0)) == pytest.approx((0.0, 1.0, 0.0), abs=1e-9)

    def test_deterministic(self):
        glyphs = _mixed_glyphs()
        span = compute_span(glyphs, 3.0)
        assert place_glyphs(glyphs, 3.0, 0.3, span) == place_glyphs(glyphs, 3.0, 0.3, span)
        assert compute_span(glyphs, 3.0) == span

    def test_rejects_non_positive_radius(self):
        with pytest.raises(ValueError, match="Radius"):
            place_glyphs(TWO_GLYPHS, 0.0, 0.0, 0.0)

    def test_transform_matches_placement(self):
        (placement,) = place_glyphs([GlyphMetric(0.1, 0.0)], 3.0, 0.25, 0.1 / 3.0)
        transform = placement.transform
        assert transform.translation == placement.position
        assert transform.rotation == placement.orientation


class TestLayoutArc:
    def test_returns_arc_layout(self):
        layout = layout_arc(TWO_GLYPHS, LayoutConfig(radius=3.0))
        assert isinstance(layout, ArcLayout)
        assert all(isinstance(p, Placement) for p in layout.placements)

    def test_centering_around_offset(self):
        glyphs = _mixed_glyphs()
        offset = 0.8
        layout = layout_arc(glyphs, LayoutConfig(radius=3.0, offset=offset))
        span = layout.total_span

        assert layout.placements[0].angle == pytest.approx(-span / 2 + offset)
        last = layout.placements[-1].angle + glyphs[-1].slot_angle(3.0)
        assert last == pytest.approx(span / 2 + offset)
        assert layout.start_angle == pytest.approx(-span / 2 + offset)
        assert layout.end_angle == pytest.approx(last)

    def test_empty_layout(self):
        layout = layout_arc([], LayoutConfig(radius=1.0, offset=0.5))
        assert layout.total_span == 0.0
        assert layout.placements == []
        assert layout.start_angle == layout.end_angle == 0.5

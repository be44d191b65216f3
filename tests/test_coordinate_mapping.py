"""
Tests for display → canvas coordinate mapping.

Covers:
- Per-axis scaling between displayed and intrinsic size
- Display offsets (letterboxing)
- Degenerate display rectangles
- Position extraction from mouse-like and touch-like events
"""
import pytest
from PyQt5.QtCore import QPointF

from models.transform import Vec2
from utils.coordinate_transforms import display_to_canvas, event_position, map_event_to_canvas


CANVAS = (960, 540)


class FakeMouseEvent:
    def __init__(self, x, y):
        self._pos = QPointF(x, y)

    def localPos(self):
        return self._pos


class FakeTouchPoint:
    def __init__(self, x, y):
        self._pos = QPointF(x, y)

    def pos(self):
        return self._pos


class FakeTouchEvent:
    def __init__(self, *points):
        self._points = [FakeTouchPoint(x, y) for x, y in points]

    def touchPoints(self):
        return self._points


# ══════════════════════════════════════════════════════════════════════════
# Pure mapping
# ══════════════════════════════════════════════════════════════════════════

class TestDisplayToCanvas:

    def test_identity_when_displayed_at_native_size(self):
        assert display_to_canvas(123, 45, (0, 0, 960, 540), CANVAS) == Vec2(123, 45)

    def test_half_size_display_doubles(self):
        assert display_to_canvas(240, 135, (0, 0, 480, 270), CANVAS) == Vec2(480, 270)

    def test_offset_is_removed_before_scaling(self):
        assert display_to_canvas(340, 185, (100, 50, 480, 270), CANVAS) == Vec2(480, 270)

    def test_axes_scale_independently(self):
        # Stretched display: 2x horizontally, 0.5x vertically
        result = display_to_canvas(960, 540, (0, 0, 1920, 270), CANVAS)
        assert result.x == pytest.approx(480)
        assert result.y == pytest.approx(1080)

    def test_points_outside_are_not_clamped(self):
        result = display_to_canvas(-10, 600, (0, 0, 960, 540), CANVAS)
        assert (result.x, result.y) == (-10, 600)

    def test_zero_size_display_uses_unit_scale(self):
        assert display_to_canvas(30, 40, (10, 10, 0, 0), CANVAS) == Vec2(20, 30)


# ══════════════════════════════════════════════════════════════════════════
# Events
# ══════════════════════════════════════════════════════════════════════════

class TestEventPosition:

    def test_mouse_event_uses_local_pos(self):
        assert event_position(FakeMouseEvent(12.5, 7)) == Vec2(12.5, 7)

    def test_touch_event_uses_first_point(self):
        assert event_position(FakeTouchEvent((5, 6), (100, 100))) == Vec2(5, 6)

    def test_map_event_to_canvas(self):
        result = map_event_to_canvas(FakeMouseEvent(240, 135), (0, 0, 480, 270), CANVAS)
        assert result == Vec2(480, 270)

    def test_map_touch_event_to_canvas(self):
        result = map_event_to_canvas(FakeTouchEvent((100, 100)), (50, 50, 480, 270), CANVAS)
        assert result == Vec2(100, 100)

"""
Tests for overlay placement and transform math.

Covers:
- Placement fit (80% of canvas, width first then height) and centering
- Handle hit-boxes and hit-test priority
- Drag clamping inside the canvas
- Aspect-locked resize from each corner with the opposite corner anchored
- Minimum size clamp and rejection of off-canvas candidates
- Handle objects and BboxMode dispatch
"""
import random

import pytest
from PIL import Image
from PyQt5.QtCore import Qt

from components.transform_widgets import BboxMode, CornerHandle, CenterHandle
from constants import HANDLE_SIZE, HANDLE_NAMES
from models.overlay import Overlay, place_overlay


CANVAS_W, CANVAS_H = 960, 540


def make_overlay(x=380, y=170, width=200, height=200):
    return Overlay(
        image=Image.new('RGBA', (int(width), int(height))),
        x=x, y=y, width=width, height=height, aspect_ratio=width / height,
    )


def assert_on_canvas(overlay):
    assert overlay.x >= 0
    assert overlay.y >= 0
    assert overlay.x + overlay.width <= CANVAS_W
    assert overlay.y + overlay.height <= CANVAS_H


# ══════════════════════════════════════════════════════════════════════════
# Placement
# ══════════════════════════════════════════════════════════════════════════

class TestPlacement:

    def test_small_image_keeps_native_size_and_centers(self, red_square):
        overlay = place_overlay(red_square, CANVAS_W, CANVAS_H)
        assert (overlay.width, overlay.height) == (200, 200)
        assert (overlay.x, overlay.y) == (380, 170)
        assert overlay.aspect_ratio == 1

    def test_800x400_fits_within_80_percent(self):
        overlay = place_overlay(Image.new('RGBA', (800, 400)), CANVAS_W, CANVAS_H)
        assert overlay.width <= 768
        assert overlay.height <= 432
        assert overlay.aspect_ratio == 2.0
        assert overlay.width / overlay.height == pytest.approx(2.0)
        assert overlay.width == pytest.approx(768)
        assert overlay.height == pytest.approx(384)

    def test_wide_image_shrinks_by_width(self, wide_image):
        overlay = place_overlay(wide_image, CANVAS_W, CANVAS_H)
        assert overlay.width == pytest.approx(768)
        assert overlay.height == pytest.approx(192)
        assert overlay.x == pytest.approx(96)
        assert overlay.y == pytest.approx(174)

    def test_tall_image_shrinks_by_height(self, tall_image):
        overlay = place_overlay(tall_image, CANVAS_W, CANVAS_H)
        assert overlay.height == pytest.approx(432)
        assert overlay.width == pytest.approx(129.6)
        assert overlay.aspect_ratio == pytest.approx(0.3)
        assert_on_canvas(overlay)

    def test_placed_overlay_keeps_source_image(self, red_square):
        overlay = place_overlay(red_square, CANVAS_W, CANVAS_H)
        assert overlay.image is red_square


# ══════════════════════════════════════════════════════════════════════════
# Hit testing
# ══════════════════════════════════════════════════════════════════════════

class TestHitTesting:

    def test_handle_rects_centered_on_corners(self):
        rects = make_overlay().handle_rects()
        assert list(rects) == list(HANDLE_NAMES)
        top_left = rects['topLeft']
        assert (top_left.x, top_left.y) == (380 - HANDLE_SIZE / 2, 170 - HANDLE_SIZE / 2)
        assert top_left.width == top_left.height == HANDLE_SIZE
        bottom_right = rects['bottomRight']
        assert (bottom_right.x, bottom_right.y) == (575, 365)

    @pytest.mark.parametrize('point, expected', [
        ((380, 170), 'topLeft'),
        ((584, 170), 'topRight'),
        ((376, 372), 'bottomLeft'),
        ((580, 370), 'bottomRight'),
        ((480, 270), None),
        ((10, 10), None),
    ])
    def test_handle_at(self, point, expected):
        assert make_overlay().handle_at(*point) == expected

    def test_contains_inclusive_bounds(self):
        overlay = make_overlay()
        assert overlay.contains(380, 170)
        assert overlay.contains(580, 370)
        assert not overlay.contains(581, 370)


# ══════════════════════════════════════════════════════════════════════════
# Drag
# ══════════════════════════════════════════════════════════════════════════

class TestDrag:

    def test_drag_translates(self):
        moved = make_overlay().dragged(10, -20, CANVAS_W, CANVAS_H)
        assert (moved.x, moved.y) == (390, 150)
        assert (moved.width, moved.height) == (200, 200)

    def test_drag_clamps_to_canvas(self):
        overlay = make_overlay()
        assert overlay.dragged(10000, 10000, CANVAS_W, CANVAS_H).x == CANVAS_W - 200
        assert overlay.dragged(10000, 10000, CANVAS_W, CANVAS_H).y == CANVAS_H - 200
        assert overlay.dragged(-10000, -10000, CANVAS_W, CANVAS_H).x == 0
        assert overlay.dragged(-10000, -10000, CANVAS_W, CANVAS_H).y == 0

    def test_drag_returns_new_instance(self):
        overlay = make_overlay()
        moved = overlay.dragged(5, 5, CANVAS_W, CANVAS_H)
        assert moved is not overlay
        assert overlay.x == 380


# ══════════════════════════════════════════════════════════════════════════
# Resize
# ══════════════════════════════════════════════════════════════════════════

class TestResize:

    def test_bottom_right_grows_from_top_left_anchor(self):
        resized = make_overlay().resized('bottomRight', 50, 0, CANVAS_W, CANVAS_H)
        assert (resized.x, resized.y) == (380, 170)
        assert (resized.width, resized.height) == (250, 250)

    def test_top_left_keeps_bottom_right_fixed(self):
        resized = make_overlay().resized('topLeft', -50, -50, CANVAS_W, CANVAS_H)
        assert (resized.width, resized.height) == (250, 250)
        assert resized.x + resized.width == 580
        assert resized.y + resized.height == 370

    def test_top_right_keeps_bottom_left_fixed(self):
        resized = make_overlay().resized('topRight', 40, 0, CANVAS_W, CANVAS_H)
        assert resized.x == 380
        assert resized.y + resized.height == 370
        assert resized.width == 240

    def test_bottom_left_keeps_top_right_fixed(self):
        resized = make_overlay().resized('bottomLeft', 30, 0, CANVAS_W, CANVAS_H)
        assert resized.x + resized.width == 580
        assert resized.y == 170
        assert resized.width == 170

    def test_huge_negative_delta_clamps_to_minimum(self):
        resized = make_overlay().resized('bottomRight', -1000, 0, CANVAS_W, CANVAS_H)
        assert resized.width == 2 * HANDLE_SIZE
        assert resized.height > 0

    def test_off_canvas_candidate_rejected(self):
        overlay = make_overlay()
        assert overlay.resized('bottomRight', 400, 0, CANVAS_W, CANVAS_H) is overlay

    def test_rejected_candidate_keeps_last_accepted(self):
        start = make_overlay()
        accepted = start.resized('bottomRight', 100, 0, CANVAS_W, CANVAS_H)
        result = start.resized('bottomRight', 400, 0, CANVAS_W, CANVAS_H, current=accepted)
        assert result is accepted

    def test_aspect_ratio_preserved(self):
        overlay = place_overlay(Image.new('RGBA', (800, 400)), CANVAS_W, CANVAS_H)
        for dx in (-300, -10, 0, 5, 50):
            for handle in HANDLE_NAMES:
                resized = overlay.resized(handle, dx, 0, CANVAS_W, CANVAS_H)
                assert resized.width / resized.height == pytest.approx(overlay.aspect_ratio)

    def test_random_gestures_stay_on_canvas(self):
        rng = random.Random(1234)
        start = make_overlay()
        current = start
        for _ in range(300):
            dx, dy = rng.uniform(-800, 800), rng.uniform(-800, 800)
            if rng.random() < 0.5:
                current = start.dragged(dx, dy, CANVAS_W, CANVAS_H)
            else:
                handle = rng.choice(HANDLE_NAMES)
                current = start.resized(handle, dx, dy, CANVAS_W, CANVAS_H, current=current)
            assert_on_canvas(current)
            start = current


# ══════════════════════════════════════════════════════════════════════════
# Handles and modes
# ══════════════════════════════════════════════════════════════════════════

class TestHandles:

    def test_bbox_mode_prefers_corner_over_body(self):
        mode = BboxMode()
        handle_type, handle = mode.get_handle_at_pos(382, 172, make_overlay())
        assert handle_type == 'topLeft'
        assert isinstance(handle, CornerHandle)

    def test_bbox_mode_body_hit(self):
        handle_type, handle = BboxMode().get_handle_at_pos(480, 270, make_overlay())
        assert handle_type == 'center'
        assert isinstance(handle, CenterHandle)

    def test_bbox_mode_miss(self):
        assert BboxMode().get_handle_at_pos(5, 5, make_overlay()) == (None, None)

    def test_corner_handle_drag_resizes(self):
        overlay = make_overlay()
        resized = CornerHandle('bottomRight').drag(overlay, 20, 0, (CANVAS_W, CANVAS_H))
        assert resized.width == 220

    def test_center_handle_drag_moves(self):
        moved = CenterHandle().drag(make_overlay(), 15, 5, (CANVAS_W, CANVAS_H))
        assert (moved.x, moved.y) == (395, 175)

    @pytest.mark.parametrize('corner, cursor', [
        ('topLeft', Qt.SizeFDiagCursor),
        ('bottomRight', Qt.SizeFDiagCursor),
        ('topRight', Qt.SizeBDiagCursor),
        ('bottomLeft', Qt.SizeBDiagCursor),
    ])
    def test_corner_cursors(self, corner, cursor):
        assert CornerHandle(corner).get_cursor() == cursor

    def test_center_cursor(self):
        assert CenterHandle().get_cursor() == Qt.SizeAllCursor

"""
Tests for the pointer gesture state machine.

Covers:
- Stroke gestures on an empty canvas and outside the overlay
- Overlay drag and corner resize with accumulated deltas
- Release / leave handling and stray releases
- Cursor selection for hover points
"""
import pytest
from PyQt5.QtCore import Qt

from constants import LABEL_INITIAL, LABEL_DRAWING, LABEL_IMAGE_PLACED
from models.transform import Vec2
from services.interaction_controller import InteractionController, InteractionState
from conftest import solid_image


def labels(session):
    return [s.label for s in session.history.snapshots]


@pytest.fixture
def overlay_controller(session_with_overlay):
    """Controller over a session whose 200x200 overlay sits at (380, 170)"""
    return InteractionController(session_with_overlay)


# ══════════════════════════════════════════════════════════════════════════
# Strokes
# ══════════════════════════════════════════════════════════════════════════

class TestStrokeGestures:

    def test_press_on_empty_canvas_starts_stroke(self, controller):
        assert controller.pointer_down(Vec2(100, 100)) == InteractionState.STROKING
        assert controller.session.is_stroking

    def test_release_commits_drawing(self, controller, session):
        controller.pointer_down(Vec2(100, 100))
        controller.pointer_move(Vec2(150, 120))
        controller.pointer_move(Vec2(200, 100))
        snapshot = controller.pointer_up(Vec2(200, 100))
        assert snapshot.label == LABEL_DRAWING
        assert controller.state == InteractionState.IDLE
        assert len(session.history) == 2

    def test_leave_commits_like_release(self, controller, session):
        controller.pointer_down(Vec2(100, 100))
        controller.pointer_move(Vec2(120, 100))
        controller.pointer_leave()
        assert labels(session) == [LABEL_INITIAL, LABEL_DRAWING]
        assert controller.state == InteractionState.IDLE

    def test_stray_release_is_noop(self, controller, session):
        assert controller.pointer_up(Vec2(10, 10)) is None
        assert len(session.history) == 1

    def test_move_without_press_does_nothing(self, controller, session):
        controller.pointer_move(Vec2(10, 10))
        assert controller.state == InteractionState.IDLE
        assert not session.is_stroking

    def test_stroke_outside_overlay_flattens_it(self, overlay_controller):
        session = overlay_controller.session
        overlay_controller.pointer_down(Vec2(20, 20))
        assert not session.has_overlay
        overlay_controller.pointer_move(Vec2(40, 20))
        overlay_controller.pointer_up()
        assert labels(session) == [LABEL_INITIAL, LABEL_IMAGE_PLACED, LABEL_DRAWING]

    def test_stroke_points_are_not_clamped(self, controller, session):
        controller.pointer_down(Vec2(-30, 50))
        controller.pointer_move(Vec2(30, 50))
        controller.pointer_up()
        assert session.base_image().getpixel((0, 50)) == (0, 0, 0, 255)

    def test_missed_release_ends_previous_stroke(self, controller, session):
        controller.pointer_down(Vec2(100, 100))
        controller.pointer_move(Vec2(110, 100))
        controller.pointer_down(Vec2(300, 300))
        assert labels(session) == [LABEL_INITIAL, LABEL_DRAWING]
        assert controller.state == InteractionState.STROKING


# ══════════════════════════════════════════════════════════════════════════
# Overlay gestures
# ══════════════════════════════════════════════════════════════════════════

class TestOverlayGestures:

    def test_press_inside_overlay_starts_drag(self, overlay_controller):
        assert overlay_controller.pointer_down(Vec2(480, 270)) == InteractionState.OVERLAY_DRAGGING
        assert overlay_controller.gesture_active

    def test_press_on_corner_starts_resize(self, overlay_controller):
        assert overlay_controller.pointer_down(Vec2(580, 370)) == InteractionState.OVERLAY_RESIZING
        assert overlay_controller.drag_context.handle_type == 'bottomRight'

    def test_drag_applies_accumulated_delta(self, overlay_controller):
        session = overlay_controller.session
        overlay_controller.pointer_down(Vec2(480, 270))
        overlay_controller.pointer_move(Vec2(485, 275))
        overlay_controller.pointer_move(Vec2(490, 280))
        assert (session.overlay.x, session.overlay.y) == (390, 180)

    def test_drag_never_commits(self, overlay_controller):
        session = overlay_controller.session
        overlay_controller.pointer_down(Vec2(480, 270))
        overlay_controller.pointer_move(Vec2(500, 300))
        assert overlay_controller.pointer_up(Vec2(500, 300)) is None
        assert len(session.history) == 1
        assert session.has_overlay
        assert overlay_controller.state == InteractionState.IDLE

    def test_drag_clamped_to_canvas(self, overlay_controller):
        session = overlay_controller.session
        overlay_controller.pointer_down(Vec2(480, 270))
        overlay_controller.pointer_move(Vec2(5000, -5000))
        assert (session.overlay.x, session.overlay.y) == (760, 0)

    def test_resize_keeps_aspect_and_anchor(self, overlay_controller):
        session = overlay_controller.session
        overlay_controller.pointer_down(Vec2(380, 170))
        overlay_controller.pointer_move(Vec2(330, 140))
        overlay = session.overlay
        assert overlay.width == overlay.height == 250
        assert (overlay.x + overlay.width, overlay.y + overlay.height) == (580, 370)

    def test_rejected_resize_keeps_last_accepted(self, overlay_controller):
        session = overlay_controller.session
        overlay_controller.pointer_down(Vec2(580, 370))
        overlay_controller.pointer_move(Vec2(680, 370))
        accepted = session.overlay
        overlay_controller.pointer_move(Vec2(1200, 370))
        assert session.overlay == accepted
        assert accepted.width == 300

    def test_overlay_flattened_mid_gesture_ends_it(self, overlay_controller):
        session = overlay_controller.session
        overlay_controller.pointer_down(Vec2(480, 270))
        session.place()
        overlay_controller.pointer_move(Vec2(500, 300))
        assert overlay_controller.state == InteractionState.IDLE
        assert not session.has_overlay

    def test_overlay_replaced_mid_gesture_ends_it(self, overlay_controller):
        session = overlay_controller.session
        overlay_controller.pointer_down(Vec2(480, 270))
        green = solid_image(100, 50, (0, 255, 0, 255))
        replacement = session.place_image(green)
        overlay_controller.pointer_move(Vec2(500, 300))
        # The new image is left where it was placed
        assert overlay_controller.state == InteractionState.IDLE
        assert session.overlay is replacement
        assert session.overlay.image is green
        assert labels(session) == [LABEL_INITIAL, LABEL_IMAGE_PLACED]

    def test_drag_survives_many_moves(self, overlay_controller):
        session = overlay_controller.session
        overlay_controller.pointer_down(Vec2(480, 270))
        for step in range(1, 5):
            overlay_controller.pointer_move(Vec2(480 + step * 10, 270))
        assert overlay_controller.state == InteractionState.OVERLAY_DRAGGING
        assert session.overlay.x == 420


# ══════════════════════════════════════════════════════════════════════════
# Cursors
# ══════════════════════════════════════════════════════════════════════════

class TestCursors:

    def test_cross_without_overlay(self, controller):
        assert controller.cursor_for(Vec2(10, 10)) == Qt.CrossCursor

    @pytest.mark.parametrize('point, cursor', [
        ((380, 170), Qt.SizeFDiagCursor),
        ((580, 170), Qt.SizeBDiagCursor),
        ((480, 270), Qt.SizeAllCursor),
        ((10, 10), Qt.CrossCursor),
    ])
    def test_hover_cursor(self, overlay_controller, point, cursor):
        assert overlay_controller.cursor_for(Vec2(*point)) == cursor

    def test_cursor_follows_active_gesture(self, overlay_controller):
        overlay_controller.pointer_down(Vec2(380, 170))
        assert overlay_controller.cursor_for(Vec2(10, 10)) == Qt.SizeFDiagCursor

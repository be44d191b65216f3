"""Coordinate transformation utilities for canvas input.

Provides conversion between the two coordinate systems the editor uses:
- Display space: widget pixels where the canvas is shown (possibly scaled)
- Canvas space: intrinsic raster pixels (top-left origin, Y-down)

All functions are pure; they never touch widget or session state.
"""
from models.transform import Vec2


def event_position(event):
	"""Extract the pointer position of a mouse or touch event.
	
	Touch events use their first touch point so mouse and touch input are
	handled uniformly.
	
	Args:
		event: QMouseEvent, QTouchEvent, or any object exposing
			touchPoints() / localPos() / pos()
		
	Returns:
		Vec2: Position in the event's widget coordinates
	"""
	touch_points = event.touchPoints() if hasattr(event, 'touchPoints') else None
	if touch_points:
		pos = touch_points[0].pos()
	elif hasattr(event, 'localPos'):
		pos = event.localPos()
	else:
		pos = event.pos()
	return Vec2(pos.x(), pos.y())


def display_to_canvas(display_x, display_y, display_rect, canvas_size):
	"""Convert a display-space point to canvas pixel coordinates.
	
	Each axis is scaled independently by intrinsic/displayed size, matching
	a canvas stretched to fill its display rectangle.
	
	Args:
		display_x, display_y: Point in display pixels
		display_rect: (left, top, width, height) of the displayed canvas
		canvas_size: (width, height) of the intrinsic raster
		
	Returns:
		Vec2: Point in canvas pixels (not clamped)
	"""
	left, top, shown_w, shown_h = display_rect
	canvas_w, canvas_h = canvas_size
	scale_x = canvas_w / shown_w if shown_w else 1.0
	scale_y = canvas_h / shown_h if shown_h else 1.0
	return Vec2((display_x - left) * scale_x, (display_y - top) * scale_y)


def map_event_to_canvas(event, display_rect, canvas_size):
	"""Convert a mouse/touch event straight to canvas pixel coordinates.
	
	Args:
		event: Mouse or touch event
		display_rect: (left, top, width, height) of the displayed canvas
		canvas_size: (width, height) of the intrinsic raster
		
	Returns:
		Vec2: Point in canvas pixels
	"""
	pos = event_position(event)
	return display_to_canvas(pos.x, pos.y, display_rect, canvas_size)

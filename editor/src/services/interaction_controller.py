"""Interaction controller - pointer gesture state machine.

Decides, per pointer-down, whether a gesture is a freehand stroke, an overlay
drag or an overlay resize, and routes moves and releases accordingly. This is
the only code that changes the pending overlay's geometry before it is
flattened.

States:
- IDLE: no button held
- STROKING: drawing a freehand stroke
- OVERLAY_DRAGGING: moving the overlay
- OVERLAY_RESIZING: resizing the overlay from a corner
"""

import logging
from enum import Enum

from PyQt5.QtCore import Qt

from components.transform_widgets import DragContext
from constants import HANDLE_NAMES


class InteractionState(Enum):
	IDLE = 'idle'
	STROKING = 'stroking'
	OVERLAY_DRAGGING = 'overlay_dragging'
	OVERLAY_RESIZING = 'overlay_resizing'


class InteractionController:
	"""Routes canvas-space pointer events to strokes or overlay transforms"""
	
	def __init__(self, session, transform_mode=None):
		"""
		Args:
			session: CanvasSession receiving strokes and overlay updates
			transform_mode: Handle set used for hit-testing (defaults to the
				renderer's, so what is drawn is what is hit)
		"""
		self.session = session
		self.transform_mode = transform_mode or session.renderer.transform_mode
		self.state = InteractionState.IDLE
		self.drag_context = None
		# Overlay this controller last saw or produced during a gesture
		self._gesture_overlay = None
		self._logger = logging.getLogger('InteractionController')
	
	@property
	def gesture_active(self):
		"""True while an overlay drag/resize is in progress"""
		return self.state in (InteractionState.OVERLAY_DRAGGING, InteractionState.OVERLAY_RESIZING)
	
	def pointer_down(self, pos):
		"""Pick the gesture for a pointer-down at a canvas point.
		
		Args:
			pos: Vec2 in canvas pixels
			
		Returns:
			InteractionState: The state entered
		"""
		if self.state != InteractionState.IDLE:
			# Missed release (e.g. button let go outside the window)
			self.pointer_up()
		
		overlay = self.session.overlay
		if overlay is not None:
			handle_type, handle = self.transform_mode.get_handle_at_pos(pos.x, pos.y, overlay)
			if handle_type in HANDLE_NAMES:
				self.drag_context = DragContext('resize', pos, overlay, handle_type, handle)
				self._gesture_overlay = overlay
				self.state = InteractionState.OVERLAY_RESIZING
				return self.state
			if handle is not None:
				self.drag_context = DragContext('drag', pos, overlay, None, handle)
				self._gesture_overlay = overlay
				self.state = InteractionState.OVERLAY_DRAGGING
				return self.state
		
		# Outside any overlay: draw through it (the stroke flattens it first)
		self.session.begin_stroke(pos)
		self.state = InteractionState.STROKING
		return self.state
	
	def pointer_move(self, pos):
		"""Extend the stroke or re-apply the accumulated overlay delta"""
		if self.state == InteractionState.STROKING:
			self.session.extend_stroke(pos)
			return
		if not self.gesture_active:
			return
		
		if self.session.overlay is not self._gesture_overlay:
			# Overlay was flattened or replaced by another action mid-gesture
			self._logger.debug("Overlay changed during gesture, ending it")
			self._reset()
			return
		
		ctx = self.drag_context
		delta = ctx.delta(pos)
		updated = ctx.handle.drag(
			ctx.start_overlay, delta.x, delta.y,
			self.session.canvas_size, current=self.session.overlay
		)
		self.session.set_overlay(updated)
		self._gesture_overlay = updated
	
	def pointer_up(self, pos=None):
		"""End the current gesture; a finished stroke is committed.
		
		A release without a matching press is a no-op.
		
		Returns:
			Snapshot if a stroke was committed, else None
		"""
		if self.state == InteractionState.IDLE:
			return None
		finished = self.state
		self._reset()
		if finished == InteractionState.STROKING:
			return self.session.end_stroke()
		# Drag/resize leave the overlay pending; redraw to bring back the chrome
		self.session.refresh()
		return None
	
	# Leaving the canvas ends a gesture exactly like a release
	pointer_leave = pointer_up
	
	def cursor_for(self, pos):
		"""Cursor shape for a hover (or active gesture) at a canvas point"""
		if self.drag_context is not None:
			return self.drag_context.handle.get_cursor()
		overlay = self.session.overlay
		if overlay is not None:
			_, handle = self.transform_mode.get_handle_at_pos(pos.x, pos.y, overlay)
			if handle is not None:
				return handle.get_cursor()
		return Qt.CrossCursor
	
	def _reset(self):
		self.state = InteractionState.IDLE
		self.drag_context = None
		self._gesture_overlay = None

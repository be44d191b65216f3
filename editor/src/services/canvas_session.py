"""Canvas session - commit pipeline and action handlers.

The session is the single owner of canvas state for one editing session:
- the snapshot history (what the base canvas shows)
- the pending overlay (at most one)
- the working raster of an in-progress stroke
- the session context (pen, model, loading flag, error message)

Every new snapshot is produced here. Any action that makes edits durable or
replaces the base first runs the flatten guard, which merges a pending
overlay into a new "Image placed" snapshot.
"""

import functools
import logging

from constants import (
    LABEL_INITIAL, LABEL_DRAWING, LABEL_IMAGE_PLACED, LABEL_CANVAS_CLEARED,
    MAX_HISTORY_ENTRIES, MSG_GENERATION_NO_IMAGE
)
from models.generation import GenerationRequest
from models.overlay import place_overlay
from models.session import SessionContext
from models.snapshot import Snapshot, encode_png
from services.canvas_renderer import CanvasRenderer
from services.image_loader import decode_image
from utils.errors import DecodeFailure, extract_error_message
from utils.history_manager import HistoryManager


def flattens_overlay(method):
	"""Run the flatten guard before an action handler.
	
	A live stroke is committed first, then pending overlay edits become a
	snapshot, both before the action changes state.
	"""
	@functools.wraps(method)
	def wrapper(self, *args, **kwargs):
		self.end_stroke()
		self.flatten()
		return method(self, *args, **kwargs)
	return wrapper


class CanvasSession:
	"""Owns history, overlay and stroke state; the only producer of snapshots"""
	
	def __init__(self, context=None, renderer=None, max_history=MAX_HISTORY_ENTRIES):
		"""
		Args:
			context: SessionContext (a default one is created if omitted)
			renderer: CanvasRenderer used for all raster work
			max_history: Snapshot cap passed to the HistoryManager
		"""
		self.context = context or SessionContext()
		self.renderer = renderer or CanvasRenderer()
		self._logger = logging.getLogger('CanvasSession')
		
		blank = self.renderer.blank_canvas(self.context.canvas_size)
		initial = Snapshot.from_image(blank, LABEL_INITIAL)
		self.history = HistoryManager(initial, max_history=max_history)
		self._base_cache = (initial.id, blank)
		
		self.overlay = None  # Pending Overlay
		self._stroke_raster = None  # Working raster while a stroke is live
		self._stroke_last_point = None
		
		# Latest outstanding async request ids
		self._image_request_id = 0
		self._generation_request = None
		self._generation_counter = 0
		
		self._listeners = []  # Called with no args whenever pixels may change
	
	# ========================================
	# State queries
	# ========================================
	
	@property
	def canvas_size(self):
		return self.context.canvas_size
	
	@property
	def current_snapshot(self):
		return self.history.current
	
	@property
	def is_stroking(self):
		return self._stroke_raster is not None
	
	@property
	def has_overlay(self):
		return self.overlay is not None
	
	def base_image(self):
		"""Decoded raster of the snapshot at the cursor (cached, do not mutate)"""
		snapshot = self.history.current
		cached_id, cached_image = self._base_cache
		if cached_id != snapshot.id:
			cached_image = snapshot.decode()
			self._base_cache = (snapshot.id, cached_image)
		return cached_image
	
	def render(self, show_chrome=True):
		"""Frame for the interactive view.
		
		Selection chrome is only drawn while no stroke is in progress.
		
		Args:
			show_chrome: Caller-side switch (False while a gesture is active)
		"""
		base = self._stroke_raster if self.is_stroking else self.base_image()
		chrome = show_chrome and not self.is_stroking
		return self.renderer.render(base, self.overlay, show_chrome=chrome)
	
	def export_image(self):
		"""Current snapshot composited with the pending overlay.
		
		Ignores any live stroke and never draws selection chrome.
		"""
		return self.renderer.flatten(self.base_image(), self.overlay)
	
	def export_png(self):
		"""PNG bytes of export_image(); does not change state"""
		return encode_png(self.export_image())
	
	# ========================================
	# Listeners
	# ========================================
	
	def add_listener(self, callback):
		"""Register a no-argument callback fired whenever the view may change"""
		self._listeners.append(callback)
	
	def remove_listener(self, callback):
		if callback in self._listeners:
			self._listeners.remove(callback)
	
	def refresh(self):
		"""Ask listeners to redraw without any state change"""
		self._changed()
	
	def _changed(self):
		for callback in self._listeners:
			callback()
	
	# ========================================
	# Commit pipeline
	# ========================================
	
	def commit_image(self, label, image):
		"""Encode a full-canvas raster and append it to history.
		
		Args:
			label: History label
			image: RGBA raster at canvas size
			
		Returns:
			Snapshot: The new current snapshot
		"""
		# A stroke drawn on the old base lands before the new snapshot
		self.end_stroke()
		snapshot = self.history.commit(label, encode_png(image))
		self._base_cache = (snapshot.id, image)
		self._changed()
		return snapshot
	
	def flatten(self, label=LABEL_IMAGE_PLACED):
		"""Merge the pending overlay into a new snapshot and clear it.
		
		No-op (no history entry) when no overlay is pending.
		
		Returns:
			Snapshot or None
		"""
		if self.overlay is None:
			return None
		self.end_stroke()
		merged = self.renderer.flatten(self.base_image(), self.overlay)
		self.overlay = None
		self._logger.debug(f"Flattening overlay as '{label}'")
		return self.commit_image(label, merged)
	
	def place(self):
		"""Explicit "place image" action"""
		return self.flatten()
	
	# ========================================
	# Strokes
	# ========================================
	
	@flattens_overlay
	def begin_stroke(self, pos):
		"""Start a freehand stroke at a canvas point"""
		self._stroke_raster = self.base_image().copy()
		self._stroke_last_point = pos
	
	def extend_stroke(self, pos):
		"""Append a segment from the previous point to pos"""
		if not self.is_stroking:
			return
		self.renderer.draw_segment(
			self._stroke_raster, self._stroke_last_point, pos,
			self.context.pen_color, self.context.pen_width
		)
		self._stroke_last_point = pos
		self._changed()
	
	def end_stroke(self):
		"""Finish the live stroke and commit it as "Drawing".
		
		Returns:
			Snapshot, or None if no stroke was in progress
		"""
		if not self.is_stroking:
			return None
		raster = self._stroke_raster
		self._stroke_raster = None
		self._stroke_last_point = None
		return self.commit_image(LABEL_DRAWING, raster)
	
	# ========================================
	# Overlay
	# ========================================
	
	def set_overlay(self, overlay):
		"""Replace the pending overlay geometry (interaction controller only)"""
		self.overlay = overlay
		self._changed()
	
	@flattens_overlay
	def begin_image_load(self):
		"""Flatten, then hand out the id for a new image load.
		
		Returns:
			int: Request id to pass back to receive_image()
		"""
		self._image_request_id += 1
		return self._image_request_id
	
	def receive_image(self, image, request_id=None):
		"""Place a decoded image as the new pending overlay.
		
		Args:
			image: Decoded Pillow image
			request_id: Id from begin_image_load(); superseded ids are dropped
			
		Returns:
			Overlay, or None if the request was superseded
		"""
		if request_id is not None and request_id != self._image_request_id:
			self._logger.info(f"Dropping superseded image load {request_id}")
			return None
		canvas_w, canvas_h = self.canvas_size
		self.overlay = place_overlay(image, canvas_w, canvas_h)
		self._changed()
		return self.overlay
	
	def place_image(self, image):
		"""Synchronous upload: flatten, then place the image as overlay"""
		return self.receive_image(image, self.begin_image_load())
	
	def image_load_failed(self, request_id, message):
		"""Decode failures are ignored; state is left untouched"""
		self._logger.warning(f"Image load {request_id} ignored: {message}")
	
	# ========================================
	# History actions
	# ========================================
	
	@flattens_overlay
	def clear_canvas(self):
		"""Fill white and commit "Canvas cleared" """
		blank = self.renderer.blank_canvas(self.canvas_size)
		return self.commit_image(LABEL_CANVAS_CLEARED, blank)
	
	@flattens_overlay
	def undo(self):
		snapshot = self.history.undo()
		if snapshot is not None:
			self._changed()
		return snapshot
	
	@flattens_overlay
	def redo(self):
		snapshot = self.history.redo()
		if snapshot is not None:
			self._changed()
		return snapshot
	
	@flattens_overlay
	def revert_to(self, index):
		"""Move the cursor to any snapshot (raises InvalidRevertIndex)"""
		snapshot = self.history.revert_to(index)
		self._changed()
		return snapshot
	
	@flattens_overlay
	def download_png(self):
		"""Make pending edits durable, then export the canvas as PNG"""
		return self.export_png()
	
	# ========================================
	# Generation
	# ========================================
	
	@flattens_overlay
	def begin_generation(self, prompt=None, model=None):
		"""Start a generation request from the flattened canvas.
		
		Marks the session as loading. Any earlier outstanding request is
		superseded: its eventual result or failure will be ignored.
		
		Returns:
			GenerationRequest: Payload for the generation adapter
		"""
		self._generation_counter += 1
		request = GenerationRequest(
			request_id=self._generation_counter,
			model=model or self.context.selected_model,
			prompt=self.context.prompt if prompt is None else prompt,
			image_data=self.history.current.image_data,
		)
		self._generation_request = request
		self.context.is_loading = True
		self.context.error_message = None
		self._changed()
		return request
	
	def _is_latest_generation(self, request_id):
		latest = self._generation_request
		return latest is not None and latest.request_id == request_id
	
	def complete_generation(self, request_id, result):
		"""Integrate an adapter result if it belongs to the latest request.
		
		An image replaces the whole canvas (labelled with the prompt); a
		text-only reply re-commits the current canvas labelled with the text.
		
		Returns:
			Snapshot, or None if stale or nothing was committed
		"""
		if not self._is_latest_generation(request_id):
			self._logger.info(f"Ignoring stale generation result {request_id}")
			return None
		request = self._generation_request
		self.end_stroke()
		
		if result.image_data:
			try:
				generated = decode_image(result.image_data)
			except DecodeFailure as e:
				self.fail_generation(request_id, e)
				return None
			self._finish_generation()
			replaced = self.renderer.replace_canvas(generated, self.canvas_size)
			return self.commit_image(request.prompt, replaced)
		
		if result.text:
			self._finish_generation()
			self.context.prompt = ''
			current_image = self.base_image()
			snapshot = self.history.commit(result.text, self.history.current.image_data)
			self._base_cache = (snapshot.id, current_image)
			self._changed()
			return snapshot
		
		self.fail_generation(request_id, MSG_GENERATION_NO_IMAGE)
		return None
	
	def fail_generation(self, request_id, error):
		"""Surface an adapter failure if it belongs to the latest request.
		
		History is never touched.
		
		Returns:
			bool: True if the failure was surfaced
		"""
		if not self._is_latest_generation(request_id):
			self._logger.info(f"Ignoring stale generation failure {request_id}")
			return False
		self._finish_generation()
		self.context.error_message = extract_error_message(error)
		self._logger.warning(f"Generation {request_id} failed: {self.context.error_message}")
		self._changed()
		return True
	
	def _finish_generation(self):
		self._generation_request = None
		self.context.is_loading = False

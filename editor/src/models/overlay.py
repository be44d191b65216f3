"""Floating image overlay and its transform math.

The overlay is the single pending image placed on top of the current base
snapshot. Geometry is always expressed in canvas pixels (top-left origin).
Every operation returns a new Overlay; the gesture-start instance is kept
untouched so accumulated pointer deltas can be re-applied without drift.
"""
from dataclasses import dataclass, field, replace
from typing import Any

from constants import HANDLE_SIZE, HANDLE_NAMES, OVERLAY_MAX_FRACTION, OVERLAY_MIN_SIZE
from models.transform import Rect


# Which edges each corner handle moves: (moves_left_edge, moves_top_edge)
_CORNER_EDGES = {
	'topLeft': (True, True),
	'topRight': (False, True),
	'bottomLeft': (True, False),
	'bottomRight': (False, False),
}


@dataclass(frozen=True)
class Overlay:
	"""Pending, not-yet-committed image placed over the base canvas.
	
	Attributes:
		image: Decoded Pillow image (native size)
		x, y: Top-left position in canvas pixels
		width, height: Displayed size in canvas pixels
		aspect_ratio: native width / native height, fixed at placement
	"""
	image: Any = field(compare=False, repr=False)
	x: float
	y: float
	width: float
	height: float
	aspect_ratio: float
	
	@property
	def rect(self):
		return Rect(self.x, self.y, self.width, self.height)
	
	def contains(self, px, py):
		"""Check if a canvas point falls inside the overlay bounds"""
		return self.rect.contains(px, py)
	
	def handle_rects(self):
		"""Corner hit-boxes, HANDLE_SIZE square, centered on each corner.
		
		Returns:
			dict: handle name -> Rect, in hit-test priority order
		"""
		half = HANDLE_SIZE / 2
		corners = {
			'topLeft': (self.x, self.y),
			'topRight': (self.x + self.width, self.y),
			'bottomLeft': (self.x, self.y + self.height),
			'bottomRight': (self.x + self.width, self.y + self.height),
		}
		return {
			name: Rect(corners[name][0] - half, corners[name][1] - half, HANDLE_SIZE, HANDLE_SIZE)
			for name in HANDLE_NAMES
		}
	
	def handle_at(self, px, py):
		"""Name of the corner handle under a canvas point, or None"""
		for name, rect in self.handle_rects().items():
			if rect.contains(px, py):
				return name
		return None
	
	def dragged(self, dx, dy, canvas_width, canvas_height):
		"""Translate by (dx, dy) and clamp fully inside the canvas.
		
		Args:
			dx, dy: Pointer delta from gesture start
			canvas_width, canvas_height: Canvas pixel size
			
		Returns:
			Overlay: Moved copy
		"""
		new_x = max(0, min(canvas_width - self.width, self.x + dx))
		new_y = max(0, min(canvas_height - self.height, self.y + dy))
		return replace(self, x=new_x, y=new_y)
	
	def resized(self, handle, dx, dy, canvas_width, canvas_height, current=None):
		"""Aspect-locked resize from one corner, keeping the opposite corner fixed.
		
		Width is the driving dimension; height follows from the aspect ratio.
		A candidate leaving the canvas is rejected and `current` (or self when
		not given) is returned unchanged.
		
		Args:
			handle: 'topLeft', 'topRight', 'bottomLeft' or 'bottomRight'
			dx, dy: Pointer delta from gesture start
			canvas_width, canvas_height: Canvas pixel size
			current: Last accepted geometry during the gesture
			
		Returns:
			Overlay: Resized copy, or the previous geometry if rejected
		"""
		moves_left, moves_top = _CORNER_EDGES[handle]
		
		width_delta = -dx if moves_left else dx
		new_w = max(OVERLAY_MIN_SIZE, self.width + width_delta)
		new_h = new_w / self.aspect_ratio
		
		# Anchor the opposite corner
		new_x = self.x + self.width - new_w if moves_left else self.x
		new_y = self.y + self.height - new_h if moves_top else self.y
		
		candidate = Rect(new_x, new_y, new_w, new_h)
		if not candidate.within(canvas_width, canvas_height):
			return current if current is not None else self
		return replace(self, x=new_x, y=new_y, width=new_w, height=new_h)


def place_overlay(image, canvas_width, canvas_height):
	"""Size an image to fit 80% of the canvas and center it.
	
	Shrinks the width first if the image is too wide, then re-checks height.
	Images already small enough keep their native size.
	
	Args:
		image: Decoded Pillow image
		canvas_width, canvas_height: Canvas pixel size
		
	Returns:
		Overlay: Centered overlay with the native aspect ratio captured
	"""
	max_w = canvas_width * OVERLAY_MAX_FRACTION
	max_h = canvas_height * OVERLAY_MAX_FRACTION
	native_w, native_h = image.size
	width, height = float(native_w), float(native_h)
	
	if width > max_w:
		height *= max_w / width
		width = max_w
	if height > max_h:
		width *= max_h / height
		height = max_h
	
	return Overlay(
		image=image,
		x=(canvas_width - width) / 2,
		y=(canvas_height - height) / 2,
		width=width,
		height=height,
		aspect_ratio=native_w / native_h,
	)

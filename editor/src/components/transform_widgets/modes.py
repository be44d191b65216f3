"""Transform widget modes - defines which handles are active for the overlay."""

from .handles import CornerHandle, CenterHandle
from constants import HANDLE_NAMES


class TransformMode:
	"""Base class for transform modes."""
	
	# Handle types checked by get_handle_at_pos, highest priority first
	check_order = ()
	
	def __init__(self):
		self.handles = {}  # handle_type -> handle_object
	
	def get_handles(self):
		"""Return all handles for this mode."""
		return self.handles
	
	def get_handle_at_pos(self, canvas_x, canvas_y, overlay):
		"""Find which handle (if any) is at a canvas position.
		
		Returns:
			(handle_type, Handle) or (None, None)
		"""
		for handle_type in self.check_order:
			handle = self.handles[handle_type]
			if handle.hit_test(canvas_x, canvas_y, overlay):
				return handle_type, handle
		return None, None
	
	def draw(self, draw, overlay):
		"""Draw outline first, then corner handles on top."""
		for handle_type in reversed(self.check_order):
			self.handles[handle_type].draw(draw, overlay)


class BboxMode(TransformMode):
	"""Bounding box with four corner resize handles and body drag."""
	
	# Corners before the body so a handle overlapping the body wins
	check_order = HANDLE_NAMES + ('center',)
	
	def __init__(self):
		super().__init__()
		self.handles = {name: CornerHandle(name) for name in HANDLE_NAMES}
		self.handles['center'] = CenterHandle()

"""
Undo/Redo History Manager for CoDrawing Canvas Editor

Linear stack of immutable full-canvas snapshots with a cursor.
Committing after an undo discards everything past the cursor.
"""

import logging

from models.snapshot import Snapshot
from utils.errors import InvalidRevertIndex


class HistoryManager:
	"""Manages undo/redo history with raster snapshots"""
	
	def __init__(self, initial_snapshot, max_history=None):
		"""
		Initialize the history manager, seeded so it is never empty
		
		Args:
			initial_snapshot: Snapshot of the blank canvas
			max_history: Maximum number of snapshots to keep (None = unbounded)
		"""
		self.max_history = max_history
		self.history = [initial_snapshot]  # List of Snapshot objects
		self.current_index = 0  # Position of the snapshot the canvas shows
		self._listeners = []  # Callbacks to notify on state changes
		self._logger = logging.getLogger('History')
	
	@property
	def current(self):
		"""The snapshot at the cursor"""
		return self.history[self.current_index]
	
	@property
	def snapshots(self):
		"""Read-only view of all snapshots, oldest first"""
		return tuple(self.history)
	
	def __len__(self):
		return len(self.history)
	
	def commit(self, label, image_data):
		"""
		Append a new snapshot after the cursor
		
		Args:
			label: Prompt or action that produced the raster
			image_data: PNG-encoded full-canvas raster
			
		Returns:
			Snapshot: The newly current snapshot
		"""
		# Drop redo entries beyond the cursor
		if self.current_index < len(self.history) - 1:
			discarded = len(self.history) - 1 - self.current_index
			self.history = self.history[:self.current_index + 1]
			self._logger.debug(f"Discarded {discarded} redo state(s)")
		
		snapshot = Snapshot(image_data=image_data, label=label)
		self.history.append(snapshot)
		self.current_index = len(self.history) - 1
		
		# Trim oldest if over capacity
		if self.max_history and len(self.history) > self.max_history:
			overflow = len(self.history) - self.max_history
			self.history = self.history[overflow:]
			self.current_index -= overflow
		
		self._notify_listeners()
		
		self._logger.info(f"State saved: {label} (index: {self.current_index}, total: {len(self.history)})")
		return snapshot
	
	def undo(self):
		"""
		Move back one snapshot
		
		Returns:
			Snapshot now current, or None if already at the beginning
		"""
		if not self.can_undo():
			self._logger.debug("Cannot undo - at beginning of history")
			return None
		
		self.current_index -= 1
		self._notify_listeners()
		
		self._logger.info(f"Undo to: {self.current.label} (index: {self.current_index})")
		return self.current
	
	def redo(self):
		"""
		Move forward one snapshot
		
		Returns:
			Snapshot now current, or None if already at the end
		"""
		if not self.can_redo():
			self._logger.debug("Cannot redo - at end of history")
			return None
		
		self.current_index += 1
		self._notify_listeners()
		
		self._logger.info(f"Redo to: {self.current.label} (index: {self.current_index})")
		return self.current
	
	def revert_to(self, index):
		"""
		Jump the cursor to an arbitrary snapshot
		
		Args:
			index: Target position, must be in [0, len-1]
			
		Returns:
			Snapshot now current
			
		Raises:
			InvalidRevertIndex: If index is out of range
		"""
		if not 0 <= index < len(self.history):
			raise InvalidRevertIndex(f"History index {index} out of range [0, {len(self.history) - 1}]")
		
		self.current_index = index
		self._notify_listeners()
		
		self._logger.info(f"Reverted to: {self.current.label} (index: {self.current_index})")
		return self.current
	
	def can_undo(self):
		"""Check if undo is available"""
		return self.current_index > 0
	
	def can_redo(self):
		"""Check if redo is available"""
		return self.current_index < len(self.history) - 1
	
	def add_listener(self, callback):
		"""
		Add a listener to be notified when history state changes
		
		Args:
			callback: Function to call when history changes (receives can_undo, can_redo)
		"""
		self._listeners.append(callback)
	
	def remove_listener(self, callback):
		"""Remove a listener"""
		if callback in self._listeners:
			self._listeners.remove(callback)
	
	def _notify_listeners(self):
		"""Notify all listeners of history state change"""
		for callback in self._listeners:
			try:
				callback(self.can_undo(), self.can_redo())
			except Exception as e:
				self._logger.error(f"Error notifying listener: {e}")
	
	def get_current_description(self):
		"""Get the label of the current snapshot"""
		return self.current.label
	
	def get_undo_description(self):
		"""Get the label of the snapshot that would be restored by undo"""
		if self.can_undo():
			return self.history[self.current_index - 1].label
		return ""
	
	def get_redo_description(self):
		"""Get the label of the snapshot that would be restored by redo"""
		if self.can_redo():
			return self.history[self.current_index + 1].label
		return ""

"""Window event handlers for CoDrawing Canvas Editor"""


class EventMixin:
	"""Window event handlers (show, close)"""
	
	def showEvent(self, event):
		"""Populate history-driven UI on first show"""
		super().showEvent(event)
		if not getattr(self, '_history_ui_initialized', False):
			self._history_ui_initialized = True
			history = self.session.history
			self._on_history_changed(history.can_undo(), history.can_redo())
	
	def closeEvent(self, event):
		"""Persist settings and stop background work"""
		self._save_config()
		self.image_loader.shutdown()
		self._stop_generation_threads()
		super().closeEvent(event)

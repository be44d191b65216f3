"""Generation requests for CoDrawing Canvas Editor"""

import functools
import logging

from PyQt5.QtCore import QThread

from constants import GENERATION_SHUTDOWN_WAIT_MS
from services.generation_service import GenerationWorker
from utils.logger import show_warning


logger = logging.getLogger('Generator')

# Workers still blocked in a service call at shutdown, held until they return
_abandoned_threads = {}


class GeneratorMixin:
	"""Starts generation workers and folds their results into the session"""
	
	def submit_generation(self, prompt, model):
		"""Send the flattened canvas to the selected model.
		
		Args:
			prompt: Instruction text
			model: Model identifier from the selector
		"""
		context = self.session.context
		context.prompt = prompt
		context.selected_model = model
		request = self.session.begin_generation()
		self.prompt_bar.set_loading(True)
		self.statusBar().showMessage(f"Sending canvas to {request.model} ...")
		
		thread = QThread()
		worker = GenerationWorker(self.generation_service, request)
		worker.moveToThread(thread)
		
		thread.started.connect(worker.run)
		worker.finished.connect(self._on_generation_finished)
		worker.failed.connect(self._on_generation_failed)
		worker.finished.connect(thread.quit)
		worker.failed.connect(thread.quit)
		thread.finished.connect(lambda: self._release_generation_thread(thread))
		thread.finished.connect(thread.deleteLater)
		
		# Keep both alive until the thread stops
		self._generation_threads[thread] = worker
		thread.start()
	
	def _release_generation_thread(self, thread):
		self._generation_threads.pop(thread, None)
	
	def _on_generation_finished(self, request_id, result):
		if self.session.complete_generation(request_id, result) is not None:
			self.statusBar().showMessage("Generation complete", 3000)
		self._after_generation()
	
	def _on_generation_failed(self, request_id, error):
		self.session.fail_generation(request_id, error)
		self._after_generation()
	
	def _after_generation(self):
		"""Sync the prompt bar and surface any pending error"""
		context = self.session.context
		self.prompt_bar.set_loading(context.is_loading)
		if self.prompt_bar.prompt() != context.prompt:
			self.prompt_bar.set_prompt(context.prompt)
		if context.error_message:
			message = context.error_message
			context.dismiss_error()
			self.statusBar().clearMessage()
			show_warning("Generation Failed", message)
	
	def _stop_generation_threads(self):
		"""Give in-flight workers a bounded wait before the window goes away.
		
		A worker still blocked in a service call after the wait is cut off from
		the window; its result is dropped when the call eventually returns.
		"""
		for thread, worker in list(self._generation_threads.items()):
			thread.quit()
			if thread.wait(GENERATION_SHUTDOWN_WAIT_MS):
				continue
			logger.warning(f"Generation {worker.request.request_id} still running at shutdown, abandoning it")
			worker.finished.disconnect(self._on_generation_finished)
			worker.failed.disconnect(self._on_generation_failed)
			del self._generation_threads[thread]
			_abandoned_threads[thread] = worker
			thread.finished.connect(functools.partial(_abandoned_threads.pop, thread, None))

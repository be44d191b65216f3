"""Image upload, drop and paste handling for CoDrawing Canvas Editor"""

import os
import logging

from PyQt5.QtWidgets import QApplication, QFileDialog

from services.image_loader import IMAGE_FILE_EXTENSIONS, qimage_to_pil
from utils.errors import DecodeFailure


logger = logging.getLogger('Images')


class ImageMixin:
	"""Routes every image source through the session's load requests"""
	
	def _connect_image_loader(self):
		self.image_loader.imageLoaded.connect(self._on_image_loaded)
		self.image_loader.loadFailed.connect(self._on_image_load_failed)
	
	def open_image_dialog(self):
		"""Pick an image file and place it as the overlay"""
		patterns = ' '.join(f"*{ext}" for ext in IMAGE_FILE_EXTENSIONS)
		path, _ = QFileDialog.getOpenFileName(
			self, "Upload Image", self.last_image_dir or os.path.expanduser("~"),
			f"Images ({patterns});;All Files (*)"
		)
		if path:
			self.last_image_dir = os.path.dirname(path)
			self.load_image_file(path)
	
	def load_image_file(self, path):
		"""Decode a file in the background; only the latest load is placed"""
		request_id = self.session.begin_image_load()
		logger.debug(f"Loading {path} as request {request_id}")
		self.image_loader.load_file(path, request_id)
	
	def load_qimage(self, qimage):
		"""Place an in-memory image (drop or clipboard)"""
		if qimage.isNull():
			return
		request_id = self.session.begin_image_load()
		try:
			image = qimage_to_pil(qimage)
		except DecodeFailure as e:
			self._on_image_load_failed(str(e), request_id)
			return
		self.session.receive_image(image, request_id)
	
	def paste_image(self):
		"""Place the clipboard image, if any"""
		qimage = QApplication.clipboard().image()
		if qimage.isNull():
			self.statusBar().showMessage("Clipboard has no image", 2000)
			return
		self.load_qimage(qimage)
	
	def _on_image_loaded(self, image, request_id):
		self.session.receive_image(image, request_id)
	
	def _on_image_load_failed(self, message, request_id):
		self.session.image_load_failed(request_id, message)
		self.statusBar().showMessage("Could not read that image", 3000)

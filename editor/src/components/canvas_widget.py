"""
Canvas Widget - Interactive drawing surface

Displays the session's rendered frame letterboxed inside the widget and
feeds pointer input to the interaction controller:
- mouse and touch events are mapped to canvas pixels
- hovering updates the cursor (resize / move / draw)
- image files or raw images dropped on the canvas are forwarded as signals
"""

from PyQt5.QtWidgets import QWidget, QSizePolicy
from PyQt5.QtCore import Qt, QRectF, QEvent, pyqtSignal
from PyQt5.QtGui import QPainter, QColor, QPen, QImage

from services.image_loader import pil_to_qimage, is_image_path
from utils.coordinate_transforms import map_event_to_canvas


class CanvasWidget(QWidget):
	"""Shows the composited canvas and routes pointer input"""
	
	# Signals
	imageFileDropped = pyqtSignal(str)  # local file path
	imageDropped = pyqtSignal(QImage)  # raw image from the drag source
	
	BACKGROUND = QColor(53, 53, 53)
	DROP_HIGHLIGHT = QColor(0, 123, 255)
	
	def __init__(self, session, controller, parent=None):
		super().__init__(parent)
		self.session = session
		self.controller = controller
		self.is_dragging_over = False
		
		self.setMouseTracking(True)
		self.setAcceptDrops(True)
		self.setAttribute(Qt.WA_AcceptTouchEvents)
		self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
		self.setMinimumSize(480, 270)
		self.setCursor(Qt.CrossCursor)
		
		self.session.add_listener(self.update)
	
	# ========================================
	# Geometry
	# ========================================
	
	def display_rect(self):
		"""Letterboxed rectangle the canvas occupies inside the widget.
		
		Returns:
			tuple: (left, top, width, height) in widget pixels
		"""
		canvas_w, canvas_h = self.session.canvas_size
		scale = min(self.width() / canvas_w, self.height() / canvas_h)
		shown_w = canvas_w * scale
		shown_h = canvas_h * scale
		return (self.width() - shown_w) / 2, (self.height() - shown_h) / 2, shown_w, shown_h
	
	def _canvas_pos(self, event):
		return map_event_to_canvas(event, self.display_rect(), self.session.canvas_size)
	
	# ========================================
	# Painting
	# ========================================
	
	def paintEvent(self, event):
		painter = QPainter(self)
		painter.fillRect(self.rect(), self.BACKGROUND)
		
		frame = self.session.render(show_chrome=not self.controller.gesture_active)
		target = QRectF(*self.display_rect())
		painter.setRenderHint(QPainter.SmoothPixmapTransform)
		painter.drawImage(target, pil_to_qimage(frame))
		
		if self.is_dragging_over:
			pen = QPen(self.DROP_HIGHLIGHT, 3, Qt.DashLine)
			painter.setPen(pen)
			painter.drawRect(target.adjusted(1, 1, -1, -1))
		painter.end()
	
	# ========================================
	# Mouse
	# ========================================
	
	def mousePressEvent(self, event):
		if event.button() != Qt.LeftButton:
			super().mousePressEvent(event)
			return
		self.controller.pointer_down(self._canvas_pos(event))
		self._update_cursor(event)
		self.update()
	
	def mouseMoveEvent(self, event):
		if event.buttons() & Qt.LeftButton:
			self.controller.pointer_move(self._canvas_pos(event))
		self._update_cursor(event)
	
	def mouseReleaseEvent(self, event):
		if event.button() != Qt.LeftButton:
			super().mouseReleaseEvent(event)
			return
		self.controller.pointer_up(self._canvas_pos(event))
		self._update_cursor(event)
		self.update()
	
	def leaveEvent(self, event):
		"""Leaving the canvas ends the gesture like a release"""
		self.controller.pointer_leave()
		super().leaveEvent(event)
	
	def _update_cursor(self, event):
		self.setCursor(self.controller.cursor_for(self._canvas_pos(event)))
	
	# ========================================
	# Touch
	# ========================================
	
	def event(self, event):
		"""Route touch events through the same controller calls as the mouse"""
		kind = event.type()
		if kind == QEvent.TouchBegin:
			self.controller.pointer_down(self._canvas_pos(event))
		elif kind == QEvent.TouchUpdate:
			self.controller.pointer_move(self._canvas_pos(event))
		elif kind in (QEvent.TouchEnd, QEvent.TouchCancel):
			self.controller.pointer_up()
		else:
			return super().event(event)
		event.accept()
		self.update()
		return True
	
	# ========================================
	# Drag and drop
	# ========================================
	
	def _dropped_image_path(self, mime_data):
		for url in mime_data.urls():
			if url.isLocalFile() and is_image_path(url.toLocalFile()):
				return url.toLocalFile()
		return None
	
	def dragEnterEvent(self, event):
		mime_data = event.mimeData()
		if mime_data.hasImage() or self._dropped_image_path(mime_data):
			event.acceptProposedAction()
			self.is_dragging_over = True
			self.update()
		else:
			event.ignore()
	
	def dragMoveEvent(self, event):
		event.acceptProposedAction()
	
	def dragLeaveEvent(self, event):
		self.is_dragging_over = False
		self.update()
	
	def dropEvent(self, event):
		self.is_dragging_over = False
		mime_data = event.mimeData()
		path = self._dropped_image_path(mime_data)
		if path:
			self.imageFileDropped.emit(path)
		elif mime_data.hasImage():
			self.imageDropped.emit(QImage(mime_data.imageData()))
		event.acceptProposedAction()
		self.update()

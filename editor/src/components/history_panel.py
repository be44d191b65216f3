"""History panel - browsable list of canvas snapshots.

Each entry shows a thumbnail, the label and the time it was created.
Clicking an entry asks the main window to revert the canvas to it.
"""

from PyQt5.QtWidgets import QListWidget, QListWidgetItem, QAbstractItemView
from PyQt5.QtCore import Qt, QSize, pyqtSignal
from PyQt5.QtGui import QIcon, QPixmap

from constants import HISTORY_THUMBNAIL_WIDTH, CANVAS_WIDTH, CANVAS_HEIGHT
from services.image_loader import pil_to_qimage


class HistoryPanel(QListWidget):
    """Newest-last list of snapshots with the current one highlighted"""
    
    revertRequested = pyqtSignal(int)  # history index
    
    def __init__(self, parent=None):
        super().__init__(parent)
        thumb_height = round(HISTORY_THUMBNAIL_WIDTH * CANVAS_HEIGHT / CANVAS_WIDTH)
        self.setIconSize(QSize(HISTORY_THUMBNAIL_WIDTH, thumb_height))
        self.setSelectionMode(QAbstractItemView.SingleSelection)
        self.setMinimumWidth(HISTORY_THUMBNAIL_WIDTH + 40)
        self._thumbnails = {}  # snapshot id -> QIcon
        self.itemClicked.connect(self._on_item_clicked)
    
    def refresh(self, snapshots, current_index):
        """Rebuild the list from history.
        
        Args:
            snapshots: Sequence of Snapshot objects, oldest first
            current_index: History cursor
        """
        self.blockSignals(True)
        self.clear()
        live_ids = set()
        for index, snapshot in enumerate(snapshots):
            live_ids.add(snapshot.id)
            item = QListWidgetItem(self._thumbnail(snapshot), self._item_text(snapshot))
            item.setData(Qt.UserRole, index)
            item.setToolTip(snapshot.label)
            self.addItem(item)
        # Drop thumbnails of snapshots truncated from history
        self._thumbnails = {k: v for k, v in self._thumbnails.items() if k in live_ids}
        self.setCurrentRow(current_index)
        self.blockSignals(False)
        self.scrollToItem(self.item(current_index))
    
    @staticmethod
    def _item_text(snapshot):
        label = snapshot.label if len(snapshot.label) <= 60 else snapshot.label[:57] + '...'
        return f"{label}\n{snapshot.timestamp.strftime('%H:%M:%S')}"
    
    def _thumbnail(self, snapshot):
        icon = self._thumbnails.get(snapshot.id)
        if icon is None:
            image = snapshot.decode()
            image.thumbnail((self.iconSize().width(), self.iconSize().height()))
            icon = QIcon(QPixmap.fromImage(pil_to_qimage(image)))
            self._thumbnails[snapshot.id] = icon
        return icon
    
    def _on_item_clicked(self, item):
        self.revertRequested.emit(item.data(Qt.UserRole))

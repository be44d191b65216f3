"""Menu bar, toolbar and their action handlers for CoDrawing Canvas Editor"""

import os

from PyQt5.QtWidgets import QFileDialog, QColorDialog, QSpinBox, QLabel
from PyQt5.QtGui import QColor, QIcon, QPixmap

from constants import EXPORT_FILENAME


class MenuMixin:
    """Menu bar, toolbar and menu action handlers"""
    
    def _create_menu_bar(self):
        """Create the menu bar with File and Edit menus"""
        menubar = self.menuBar()
        
        # File Menu
        file_menu = menubar.addMenu("&File")
        
        self.upload_action = file_menu.addAction("&Upload Image...")
        self.upload_action.setShortcut("Ctrl+O")
        self.upload_action.triggered.connect(self.open_image_dialog)
        
        self.download_action = file_menu.addAction("&Download PNG...")
        self.download_action.setShortcut("Ctrl+S")
        self.download_action.triggered.connect(self.download_png)
        
        file_menu.addSeparator()
        
        exit_action = file_menu.addAction("E&xit")
        exit_action.setShortcut("Alt+F4")
        exit_action.triggered.connect(self.close)
        
        # Edit Menu
        self.edit_menu = menubar.addMenu("&Edit")
        
        self.undo_action = self.edit_menu.addAction("&Undo")
        self.undo_action.setShortcut("Ctrl+Z")
        self.undo_action.triggered.connect(self.undo)
        self.undo_action.setEnabled(False)
        
        self.redo_action = self.edit_menu.addAction("&Redo")
        self.redo_action.setShortcut("Ctrl+Y")
        self.redo_action.triggered.connect(self.redo)
        self.redo_action.setEnabled(False)
        
        self.edit_menu.addSeparator()
        
        self.paste_action = self.edit_menu.addAction("&Paste Image")
        self.paste_action.setShortcut("Ctrl+V")
        self.paste_action.triggered.connect(self.paste_image)
        
        self.place_action = self.edit_menu.addAction("P&lace Image")
        self.place_action.setShortcut("Ctrl+Return")
        self.place_action.triggered.connect(self.place_image)
        
        self.edit_menu.addSeparator()
        
        self.clear_action = self.edit_menu.addAction("&Clear Canvas")
        self.clear_action.setShortcut("Ctrl+Shift+Delete")
        self.clear_action.triggered.connect(self.clear_canvas)
        
        self.edit_menu.addSeparator()
        
        self.pen_color_action = self.edit_menu.addAction("Pen &Color...")
        self.pen_color_action.triggered.connect(self.choose_pen_color)
    
    def _create_toolbar(self):
        """Drawing toolbar mirroring the most used menu actions"""
        toolbar = self.addToolBar("Tools")
        toolbar.setMovable(False)
        
        toolbar.addAction(self.pen_color_action)
        toolbar.addWidget(QLabel(" Width "))
        self.pen_width_spin = QSpinBox()
        self.pen_width_spin.setRange(1, 50)
        self.pen_width_spin.setValue(self.session.context.pen_width)
        self.pen_width_spin.valueChanged.connect(self._on_pen_width_changed)
        toolbar.addWidget(self.pen_width_spin)
        
        toolbar.addSeparator()
        toolbar.addAction(self.upload_action)
        toolbar.addAction(self.place_action)
        toolbar.addSeparator()
        toolbar.addAction(self.undo_action)
        toolbar.addAction(self.redo_action)
        toolbar.addAction(self.clear_action)
        toolbar.addSeparator()
        toolbar.addAction(self.download_action)
        
        self._update_pen_color_icon()
    
    def choose_pen_color(self):
        context = self.session.context
        color = QColorDialog.getColor(QColor(context.pen_color), self, "Pen Color")
        if color.isValid():
            context.pen_color = color.name()
            self._update_pen_color_icon()
    
    def _on_pen_width_changed(self, value):
        self.session.context.pen_width = value
    
    def _update_pen_color_icon(self):
        swatch = QPixmap(16, 16)
        swatch.fill(QColor(self.session.context.pen_color))
        self.pen_color_action.setIcon(QIcon(swatch))
    
    def download_png(self):
        """Flatten pending edits and save the canvas as PNG"""
        default_path = os.path.join(self.last_image_dir or os.path.expanduser("~"), EXPORT_FILENAME)
        path, _ = QFileDialog.getSaveFileName(self, "Download PNG", default_path, "PNG Image (*.png)")
        if not path:
            return
        data = self.session.download_png()
        try:
            with open(path, 'wb') as f:
                f.write(data)
        except OSError as e:
            self.statusBar().showMessage(f"Could not save {path}: {e.strerror}", 5000)
            return
        self.statusBar().showMessage(f"Saved {path}", 3000)

import sys
import os

# Add editor/src to path so imports work when running directly
if __name__ == "__main__":
    current_dir = os.path.dirname(os.path.abspath(__file__))
    if current_dir not in sys.path:
        sys.path.insert(0, current_dir)

from PyQt5 import QtWidgets
from PyQt5.QtWidgets import QMainWindow
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QPalette, QColor

# Service imports
from services.canvas_session import CanvasSession
from services.interaction_controller import InteractionController
from services.image_loader import ImageLoader
from services.generation_service import GenerationService

# Utility imports
from utils.logger import set_main_window, setup_logging

# Mixin imports
from main.menu_mixin import MenuMixin
from main.event_mixin import EventMixin
from main.config_mixin import ConfigMixin
from main.history_mixin import HistoryMixin
from main.image_mixin import ImageMixin
from main.generator_mixin import GeneratorMixin
from main.ui_setup_mixin import UISetupMixin


class CoDrawingEditor(MenuMixin, EventMixin, ConfigMixin, HistoryMixin, ImageMixin, GeneratorMixin, UISetupMixin, QMainWindow):
    def __init__(self, generation_service=None, config_dir=None):
        super().__init__()
        self.setWindowTitle("CoDrawing Canvas")
        self.resize(1280, 800)
        self.setMinimumSize(960, 640)
        
        # Canvas core (single owner of history, overlay and strokes)
        self.session = CanvasSession()
        self.controller = InteractionController(self.session)
        self.session.history.add_listener(self._on_history_changed)
        
        # Background work
        self.image_loader = ImageLoader(self)
        self._connect_image_loader()
        self.generation_service = generation_service or GenerationService()
        self._generation_threads = {}  # QThread -> GenerationWorker
        
        # Settings
        self.last_image_dir = None
        self.config_dir = config_dir or os.path.join(os.path.expanduser("~"), ".codrawing")
        self.config_file = os.path.join(self.config_dir, "config.json")
        self._load_config()
        
        # Initialize global logger with main window reference
        set_main_window(self)
        
        self.setup_ui()


def main():
    """Main entry point for the CoDrawing Canvas application"""
    setup_logging()
    app = QtWidgets.QApplication([])
    
    # Dark Fusion theme
    app.setStyle("Fusion")
    
    dark_palette = QPalette()
    dark_palette.setColor(QPalette.Window, QColor(53, 53, 53))
    dark_palette.setColor(QPalette.WindowText, Qt.white)
    dark_palette.setColor(QPalette.Base, QColor(25, 25, 25))
    dark_palette.setColor(QPalette.AlternateBase, QColor(53, 53, 53))
    dark_palette.setColor(QPalette.ToolTipBase, Qt.white)
    dark_palette.setColor(QPalette.ToolTipText, Qt.white)
    dark_palette.setColor(QPalette.Text, Qt.white)
    dark_palette.setColor(QPalette.Button, QColor(53, 53, 53))
    dark_palette.setColor(QPalette.ButtonText, Qt.white)
    dark_palette.setColor(QPalette.BrightText, Qt.red)
    dark_palette.setColor(QPalette.Link, QColor(42, 130, 218))
    dark_palette.setColor(QPalette.Highlight, QColor(42, 130, 218))
    dark_palette.setColor(QPalette.HighlightedText, Qt.black)
    
    app.setPalette(dark_palette)
    
    window = CoDrawingEditor()
    window.show()
    app.exec_()


if __name__ == "__main__":
    main()

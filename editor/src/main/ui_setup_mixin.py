"""UI setup for CoDrawing Canvas Editor"""

from PyQt5.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QSplitter, QLabel
from PyQt5.QtCore import Qt

from components.canvas_widget import CanvasWidget
from components.history_panel import HistoryPanel
from components.prompt_bar import PromptBar


class UISetupMixin:
    """UI initialization and component wiring"""
    
    def setup_ui(self):
        """Initialize and wire up all UI components"""
        self._create_menu_bar()
        self._create_toolbar()
        
        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        
        main_layout = QHBoxLayout(central_widget)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)
        
        splitter = QSplitter(Qt.Horizontal)
        
        # Center: canvas above the prompt bar
        canvas_column = QWidget()
        column_layout = QVBoxLayout(canvas_column)
        column_layout.setContentsMargins(0, 0, 0, 0)
        column_layout.setSpacing(0)
        
        self.canvas_widget = CanvasWidget(self.session, self.controller)
        self.canvas_widget.imageFileDropped.connect(self.load_image_file)
        self.canvas_widget.imageDropped.connect(self.load_qimage)
        column_layout.addWidget(self.canvas_widget, 1)
        
        self.prompt_bar = PromptBar()
        self.prompt_bar.set_model(self.session.context.selected_model)
        self.prompt_bar.submitted.connect(self.submit_generation)
        self.prompt_bar.modelChanged.connect(self._on_model_changed)
        column_layout.addWidget(self.prompt_bar)
        splitter.addWidget(canvas_column)
        
        # Right: history panel
        self.history_panel = HistoryPanel()
        self.history_panel.revertRequested.connect(self.revert_to)
        splitter.addWidget(self.history_panel)
        
        splitter.setSizes([1000, 220])
        splitter.setCollapsible(0, False)
        main_layout.addWidget(splitter)
        
        self.status_left = QLabel()
        self.statusBar().addWidget(self.status_left)
    
    def _on_model_changed(self, model):
        self.session.context.selected_model = model

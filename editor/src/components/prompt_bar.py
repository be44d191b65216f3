"""Prompt bar - instruction text, model selector and submit button."""

from PyQt5.QtWidgets import QWidget, QHBoxLayout, QLineEdit, QComboBox, QPushButton
from PyQt5.QtCore import pyqtSignal

from constants import AVAILABLE_MODELS, DEFAULT_MODEL


class PromptBar(QWidget):
    """Collects a prompt and model choice; shows the loading state"""
    
    submitted = pyqtSignal(str, str)  # prompt, model
    modelChanged = pyqtSignal(str)
    
    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(6, 6, 6, 6)
        
        self.prompt_edit = QLineEdit()
        self.prompt_edit.setPlaceholderText("Add your change...")
        self.prompt_edit.returnPressed.connect(self._submit)
        layout.addWidget(self.prompt_edit, 1)
        
        self.model_combo = QComboBox()
        for value, label in AVAILABLE_MODELS:
            self.model_combo.addItem(label, value)
        self.set_model(DEFAULT_MODEL)
        self.model_combo.currentIndexChanged.connect(
            lambda _: self.modelChanged.emit(self.selected_model())
        )
        layout.addWidget(self.model_combo)
        
        self.submit_button = QPushButton("Generate")
        self.submit_button.clicked.connect(self._submit)
        layout.addWidget(self.submit_button)
    
    def selected_model(self):
        return self.model_combo.currentData()
    
    def set_model(self, model):
        index = self.model_combo.findData(model)
        if index >= 0:
            self.model_combo.setCurrentIndex(index)
    
    def prompt(self):
        return self.prompt_edit.text()
    
    def set_prompt(self, text):
        self.prompt_edit.setText(text)
    
    def set_loading(self, loading):
        """Disable input while a request is in flight"""
        self.submit_button.setEnabled(not loading)
        self.submit_button.setText("Generating..." if loading else "Generate")
    
    def _submit(self):
        if not self.submit_button.isEnabled():
            return
        self.submitted.emit(self.prompt(), self.selected_model())

"""UI components for CoDrawing Canvas Editor

This package contains the Qt widgets of the editor shell:
- canvas_widget: interactive drawing surface
- history_panel: snapshot browser
- prompt_bar: generation prompt and model selector
- transform_widgets: overlay handles, modes and drag context
"""

from .canvas_widget import CanvasWidget
from .history_panel import HistoryPanel
from .prompt_bar import PromptBar

__all__ = [
    'CanvasWidget',
    'HistoryPanel',
    'PromptBar',
]

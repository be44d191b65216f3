"""
CoDrawing Canvas Editor - Overlay Transform Components

- handles.py: ABC-based handle classes (CornerHandle, CenterHandle)
- modes.py: Mode classes defining handle sets (BboxMode)
- drag_context.py: Gesture state for drag/resize
"""

from .handles import Handle, CornerHandle, CenterHandle
from .modes import TransformMode, BboxMode
from .drag_context import DragContext

__all__ = [
    'Handle', 'CornerHandle', 'CenterHandle',
    'TransformMode', 'BboxMode',
    'DragContext',
]

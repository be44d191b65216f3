"""Transform widget handle system - ABC-based handle architecture.

Each handle type is a class that knows:
- How to draw itself
- How to test if a canvas position hits it
- How a pointer drag changes the overlay geometry
"""

from abc import ABC, abstractmethod
from PyQt5.QtCore import Qt

from constants import SELECTION_COLOR, HANDLE_OUTLINE_COLOR, SELECTION_LINE_WIDTH, SELECTION_DASH


class Handle(ABC):
    """Abstract base class for overlay handles."""
    
    @abstractmethod
    def hit_test(self, canvas_x, canvas_y, overlay) -> bool:
        """Test if a canvas position hits this handle.
        
        Args:
            canvas_x, canvas_y: Pointer position in canvas pixels
            overlay: Overlay the handle belongs to
            
        Returns:
            bool: True if the position hits this handle
        """
        pass
    
    @abstractmethod
    def draw(self, draw, overlay):
        """Draw this handle.
        
        Args:
            draw: PIL.ImageDraw.ImageDraw for the frame being rendered
            overlay: Overlay the handle belongs to
        """
        pass
    
    @abstractmethod
    def drag(self, start_overlay, dx, dy, canvas_size, current=None):
        """Apply an accumulated pointer delta to the gesture-start geometry.
        
        Args:
            start_overlay: Overlay as it was at pointer-down
            dx, dy: Pointer delta since pointer-down, canvas pixels
            canvas_size: (width, height) of the canvas
            current: Last accepted overlay during this gesture
            
        Returns:
            Overlay: Updated overlay
        """
        pass
    
    @abstractmethod
    def get_cursor(self):
        """Get the Qt cursor shape for this handle.
        
        Returns:
            Qt.CursorShape: Cursor to display when hovering over this handle
        """
        pass


class CornerHandle(Handle):
    """Corner handle for aspect-locked resizing."""
    
    def __init__(self, corner_type):
        """
        Args:
            corner_type: 'topLeft', 'topRight', 'bottomLeft', 'bottomRight'
        """
        self.corner_type = corner_type
    
    def hit_test(self, canvas_x, canvas_y, overlay):
        return overlay.handle_rects()[self.corner_type].contains(canvas_x, canvas_y)
    
    def draw(self, draw, overlay):
        rect = overlay.handle_rects()[self.corner_type]
        draw.rectangle(
            [rect.x, rect.y, rect.right, rect.bottom],
            fill=SELECTION_COLOR,
            outline=HANDLE_OUTLINE_COLOR,
            width=SELECTION_LINE_WIDTH,
        )
    
    def drag(self, start_overlay, dx, dy, canvas_size, current=None):
        """Resize from this corner; the opposite corner stays put."""
        canvas_w, canvas_h = canvas_size
        return start_overlay.resized(self.corner_type, dx, dy, canvas_w, canvas_h, current=current)
    
    def get_cursor(self):
        """Diagonal resize cursor matching the corner's diagonal."""
        if self.corner_type in ('topLeft', 'bottomRight'):
            return Qt.SizeFDiagCursor
        return Qt.SizeBDiagCursor


class CenterHandle(Handle):
    """Full-body handle for translation (the whole overlay rectangle)."""
    
    def hit_test(self, canvas_x, canvas_y, overlay):
        return overlay.contains(canvas_x, canvas_y)
    
    def draw(self, draw, overlay):
        """Dashed selection outline around the overlay."""
        rect = overlay.rect
        on, off = SELECTION_DASH
        edges = [
            ((rect.x, rect.y), (rect.right, rect.y)),
            ((rect.right, rect.y), (rect.right, rect.bottom)),
            ((rect.right, rect.bottom), (rect.x, rect.bottom)),
            ((rect.x, rect.bottom), (rect.x, rect.y)),
        ]
        for (x0, y0), (x1, y1) in edges:
            length = abs(x1 - x0) + abs(y1 - y0)  # Axis-aligned edge
            if length == 0:
                continue
            step_x = (x1 - x0) / length
            step_y = (y1 - y0) / length
            offset = 0.0
            while offset < length:
                end = min(offset + on, length)
                draw.line(
                    [(x0 + step_x * offset, y0 + step_y * offset),
                     (x0 + step_x * end, y0 + step_y * end)],
                    fill=SELECTION_COLOR,
                    width=SELECTION_LINE_WIDTH,
                )
                offset += on + off
    
    def drag(self, start_overlay, dx, dy, canvas_size, current=None):
        """Translate and clamp inside the canvas."""
        canvas_w, canvas_h = canvas_size
        return start_overlay.dragged(dx, dy, canvas_w, canvas_h)
    
    def get_cursor(self):
        return Qt.SizeAllCursor

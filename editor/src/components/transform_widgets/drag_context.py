"""Drag context dataclass for overlay interactions.

Transient gesture state that exists only between pointer-down and pointer-up.
"""

from dataclasses import dataclass
from typing import Any, Optional

from models.transform import Vec2


@dataclass
class DragContext:
    """Unified gesture state for overlay drag/resize.
    
    Records where the gesture started and the overlay geometry at that
    moment, so every move re-applies the accumulated delta to the start state.
    """
    operation: str  # 'drag' or 'resize'
    start_pos: Vec2  # Pointer position at pointer-down, canvas pixels
    start_overlay: Any  # Overlay at pointer-down
    handle_type: Optional[str] = None  # Corner name for 'resize'
    handle: Any = None  # Handle object driving the gesture
    
    def delta(self, pos):
        """Accumulated pointer delta since gesture start."""
        return pos - self.start_pos

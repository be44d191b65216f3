"""Session-wide UI state passed explicitly into the canvas core."""
from dataclasses import dataclass
from typing import Optional

from constants import (
    CANVAS_WIDTH, CANVAS_HEIGHT, DEFAULT_PEN_COLOR, DEFAULT_PEN_WIDTH,
    DEFAULT_MODEL
)


@dataclass
class SessionContext:
    """Mutable editing context for one canvas session.
    
    Replaces ambient globals (pen color, selected model, loading flag) with a
    single object the interaction controller and commit pipeline share.
    """
    canvas_width: int = CANVAS_WIDTH
    canvas_height: int = CANVAS_HEIGHT
    pen_color: str = DEFAULT_PEN_COLOR
    pen_width: int = DEFAULT_PEN_WIDTH
    selected_model: str = DEFAULT_MODEL
    prompt: str = ''
    is_loading: bool = False
    error_message: Optional[str] = None
    
    @property
    def canvas_size(self):
        return self.canvas_width, self.canvas_height
    
    def dismiss_error(self):
        """Clear the pending error notification"""
        self.error_message = None

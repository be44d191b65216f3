"""
CoDrawing Canvas Editor - Data Models

This module contains the data model classes for the canvas core.
This is the MODEL in MVC architecture.
"""

from .transform import Vec2, Rect
from .snapshot import Snapshot, encode_png
from .overlay import Overlay, place_overlay
from .session import SessionContext
from .generation import GenerationRequest, GenerationResult

__all__ = ['Vec2', 'Rect', 'Snapshot', 'encode_png', 'Overlay', 'place_overlay', 'SessionContext',
           'GenerationRequest', 'GenerationResult']

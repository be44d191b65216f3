"""Geometry data structures for canvas-space coordinates."""
from dataclasses import dataclass


@dataclass
class Vec2:
    """2D vector for coordinate pairs.
    
    Used for any x/y coordinate pair across different spaces:
    - Display pixels (widget space, top-left origin)
    - Canvas pixels (intrinsic raster space, top-left origin)
    - Pointer deltas
    """
    x: float
    y: float
    
    def __iter__(self):
        """Allow tuple unpacking: x, y = vec2"""
        return iter((self.x, self.y))
    
    def __sub__(self, other):
        return Vec2(self.x - other.x, self.y - other.y)
    
    def __add__(self, other):
        return Vec2(self.x + other.x, self.y + other.y)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in canvas pixels (top-left origin)."""
    x: float
    y: float
    width: float
    height: float
    
    @property
    def right(self):
        return self.x + self.width
    
    @property
    def bottom(self):
        return self.y + self.height
    
    def contains(self, px, py):
        """Inclusive point-in-rectangle test."""
        return self.x <= px <= self.right and self.y <= py <= self.bottom
    
    def within(self, width, height):
        """True if the rectangle lies entirely inside [0, width] x [0, height]."""
        return self.x >= 0 and self.y >= 0 and self.right <= width and self.bottom <= height

"""Canvas Renderer Service.

Produces canvas rasters from session state with Pillow. Every method is a
pure function of its arguments: the renderer never owns history or overlay
state, it only turns them into pixels.

Layer order, bottom to top:
- base raster (current snapshot, or the working raster while stroking)
- pending overlay image at its current geometry
- selection chrome (dashed outline + corner handles), interactive view only
"""

from PIL import Image, ImageDraw

from components.transform_widgets import BboxMode
from constants import CANVAS_BACKGROUND


class CanvasRenderer:
    """Composites base rasters, overlays and selection chrome."""
    
    def __init__(self):
        self.transform_mode = BboxMode()
    
    # ------------------------------------------------------------------
    # Raster construction
    # ------------------------------------------------------------------
    
    @staticmethod
    def blank_canvas(canvas_size):
        """White, fully opaque canvas of the given (width, height)."""
        return Image.new('RGBA', canvas_size, CANVAS_BACKGROUND)
    
    def replace_canvas(self, image, canvas_size):
        """Full-canvas replacement for a generated image.
        
        Fills white, then stretches the image over the whole canvas.
        
        Args:
            image: Decoded Pillow image (any size/mode)
            canvas_size: (width, height) of the canvas
            
        Returns:
            Image: New RGBA raster at canvas size
        """
        canvas = self.blank_canvas(canvas_size)
        scaled = image.convert('RGBA').resize(canvas_size, Image.Resampling.LANCZOS)
        canvas.alpha_composite(scaled)
        return canvas
    
    # ------------------------------------------------------------------
    # Compositing
    # ------------------------------------------------------------------
    
    def flatten(self, base, overlay):
        """Base with the overlay drawn at its geometry, no chrome.
        
        Args:
            base: RGBA base raster (not modified)
            overlay: Overlay to merge, or None
            
        Returns:
            Image: New RGBA raster
        """
        result = base.copy()
        if overlay is not None:
            self._draw_overlay(result, overlay)
        return result
    
    def render(self, base, overlay=None, show_chrome=False):
        """Frame for the interactive view.
        
        Args:
            base: RGBA base raster (snapshot or working stroke raster)
            overlay: Pending overlay, or None
            show_chrome: Draw the selection outline and handles
            
        Returns:
            Image: New RGBA raster
        """
        frame = self.flatten(base, overlay)
        if overlay is not None and show_chrome:
            self.transform_mode.draw(ImageDraw.Draw(frame), overlay)
        return frame
    
    def _draw_overlay(self, target, overlay):
        """Scale the overlay image to its geometry and composite it in place"""
        size = (max(1, round(overlay.width)), max(1, round(overlay.height)))
        scaled = overlay.image.convert('RGBA').resize(size, Image.Resampling.LANCZOS)
        # alpha_composite needs a non-negative destination; geometry is on-canvas
        dest = (max(0, round(overlay.x)), max(0, round(overlay.y)))
        target.alpha_composite(scaled, dest=dest)
    
    # ------------------------------------------------------------------
    # Strokes
    # ------------------------------------------------------------------
    
    @staticmethod
    def draw_segment(target, start, end, color, width):
        """Draw one round-capped line segment onto a raster in place.
        
        Coordinates are not clamped; Pillow clips to the raster like a
        native canvas does.
        
        Args:
            target: RGBA raster to draw on
            start, end: Vec2 endpoints in canvas pixels
            color: Pen color ('#rrggbb')
            width: Pen width in pixels
        """
        draw = ImageDraw.Draw(target)
        draw.line([(start.x, start.y), (end.x, end.y)], fill=color, width=width)
        radius = width / 2
        for point in (start, end):
            draw.ellipse(
                [point.x - radius, point.y - radius, point.x + radius, point.y + radius],
                fill=color,
            )

"""Immutable full-canvas raster captured at one point in history."""
import io
import uuid
from dataclasses import dataclass, field
from datetime import datetime

from PIL import Image


@dataclass(frozen=True)
class Snapshot:
    """One history entry.
    
    Attributes:
        image_data: PNG-encoded raster at full canvas size
        label: Prompt or action that produced the raster
        timestamp: Creation time
        id: Unique identity (uuid4 hex)
    """
    image_data: bytes
    label: str
    timestamp: datetime = field(default_factory=datetime.now)
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    
    @classmethod
    def from_image(cls, image, label):
        """Encode a Pillow image as PNG and wrap it in a new Snapshot."""
        return cls(image_data=encode_png(image), label=label)
    
    def decode(self):
        """Decode the stored raster into a fresh RGBA Pillow image."""
        with Image.open(io.BytesIO(self.image_data)) as img:
            return img.convert('RGBA')
    
    @property
    def size(self):
        with Image.open(io.BytesIO(self.image_data)) as img:
            return img.size


def encode_png(image):
    """Encode a Pillow image as PNG bytes."""
    buffer = io.BytesIO()
    image.save(buffer, format='PNG')
    return buffer.getvalue()

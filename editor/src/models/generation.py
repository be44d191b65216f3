"""Request/result payloads exchanged with the generation adapter."""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class GenerationRequest:
    """One submission of the flattened canvas to the generation adapter.
    
    request_id increases monotonically per session; only the latest
    outstanding request may change the canvas.
    """
    request_id: int
    model: str
    prompt: str
    image_data: bytes  # PNG of the flattened canvas


@dataclass(frozen=True)
class GenerationResult:
    """Adapter output: a replacement raster, a text reply, or both."""
    image_data: Optional[bytes] = None
    text: Optional[str] = None

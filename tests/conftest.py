"""
Shared fixtures for CoDrawing Canvas tests.

Provides canvas sessions, sample images and generation fakes.
"""
import sys
import os
import io
import pytest

# Ensure editor/src is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'editor', 'src'))

# Widgets are created without a display
os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')

from PIL import Image


# ── Sample images ───────────────────────────────────────────────────────

def solid_image(width, height, color=(255, 0, 0, 255)):
    """Opaque single-color RGBA image"""
    return Image.new('RGBA', (width, height), color)


def png_bytes(image):
    buffer = io.BytesIO()
    image.save(buffer, format='PNG')
    return buffer.getvalue()


@pytest.fixture
def red_square():
    """200x200 opaque red image"""
    return solid_image(200, 200)


@pytest.fixture
def wide_image():
    """2000x500 image wider than the canvas"""
    return solid_image(2000, 500, (0, 0, 255, 255))


@pytest.fixture
def tall_image():
    """300x1000 image taller than the canvas"""
    return solid_image(300, 1000, (0, 128, 0, 255))


# ── Sessions ────────────────────────────────────────────────────────────

@pytest.fixture
def session():
    """Fresh canvas session with a blank initial snapshot"""
    from services.canvas_session import CanvasSession
    return CanvasSession()


@pytest.fixture
def controller(session):
    from services.interaction_controller import InteractionController
    return InteractionController(session)


@pytest.fixture
def session_with_overlay(session, red_square):
    """Session with a 200x200 overlay placed at its default position"""
    session.place_image(red_square)
    return session


# ── Generation fakes ────────────────────────────────────────────────────

class FakeGenerationService:
    """Stands in for GenerationService; returns a queued result or raises"""
    
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []
    
    def generate(self, model, prompt, image_data):
        self.calls.append((model, prompt, image_data))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def fake_service_factory():
    return FakeGenerationService

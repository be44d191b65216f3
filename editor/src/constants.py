"""
CoDrawing Canvas Editor - Constants and Configuration

This module contains all constant values used throughout the application:
- Canvas dimensions and fill colors
- Pen defaults
- Overlay placement and handle geometry
- Selection chrome styling
- History labels
- Generation models and prompt keywords
"""

# ======================================================================
# CANVAS
# ======================================================================

CANVAS_WIDTH = 960
CANVAS_HEIGHT = 540
CANVAS_BACKGROUND = '#FFFFFF'

# Default download file name
EXPORT_FILENAME = 'gemini-codrawing.png'

# ======================================================================
# PEN
# ======================================================================

DEFAULT_PEN_COLOR = '#000000'
DEFAULT_PEN_WIDTH = 5  # Pixels, round caps

# ======================================================================
# OVERLAY / TRANSFORM HANDLES
# ======================================================================

# Fraction of the canvas an uploaded image may occupy on placement
OVERLAY_MAX_FRACTION = 0.8

# Corner hit-box size (square, centered on each corner)
HANDLE_SIZE = 10

# Smallest overlay width allowed while resizing
OVERLAY_MIN_SIZE = HANDLE_SIZE * 2

# Handle names in hit-test priority order
HANDLE_NAMES = ('topLeft', 'topRight', 'bottomLeft', 'bottomRight')

# Selection chrome
SELECTION_COLOR = '#007bff'
SELECTION_LINE_WIDTH = 2
SELECTION_DASH = (6, 3)  # on, off
HANDLE_OUTLINE_COLOR = '#ffffff'

# ======================================================================
# HISTORY
# ======================================================================

LABEL_INITIAL = 'Initial canvas'
LABEL_DRAWING = 'Drawing'
LABEL_IMAGE_PLACED = 'Image placed'
LABEL_CANVAS_CLEARED = 'Canvas cleared'

# None keeps every snapshot for the whole session
MAX_HISTORY_ENTRIES = None

# History panel thumbnail size
HISTORY_THUMBNAIL_WIDTH = 160

# ======================================================================
# GENERATION
# ======================================================================

MODEL_FLASH_IMAGE = 'gemini-2.5-flash-image-preview'
MODEL_FLASH_IMAGE_GEN = 'gemini-2.0-flash-preview-image-generation'
MODEL_IMAGEN = 'imagen-4.0-generate-001'
MODEL_FLASH_DESCRIBE = 'gemini-2.5-flash'

DEFAULT_MODEL = MODEL_FLASH_IMAGE

# Models offered in the selector (value, label)
AVAILABLE_MODELS = [
    (MODEL_FLASH_IMAGE, 'Gemini 2.5 Flash Image'),
    (MODEL_FLASH_IMAGE_GEN, 'Gemini 2.0 Flash Image Generation'),
    (MODEL_IMAGEN, 'Imagen 4'),
    (MODEL_FLASH_DESCRIBE, 'Gemini 2.5 Flash (describe)'),
]

# Models that edit the current drawing
IMAGE_EDIT_MODELS = (MODEL_FLASH_IMAGE, MODEL_FLASH_IMAGE_GEN)

# Prompts mentioning any of these keep their own style
STYLE_KEYWORDS = [
    'style of', 'watercolor', 'photorealistic', 'cartoon', 'pixel art',
    'impressionist', 'cubist', 'surrealist', 'sketch', 'drawing',
    'minimalist', 'comic book', 'anime', 'manga', '3d render', 'low poly',
    'isometric', 'steampunk', 'cyberpunk', 'vintage', 'retro', 'painting',
    'oil painting', 'acrylic', 'charcoal',
]
STYLE_SUFFIX = '. Keep the same minimal line drawing style.'

IMAGEN_ASPECT_RATIO = '16:9'

# Environment variables checked for the API key, in order
API_KEY_ENV_VARS = ('GEMINI_API_KEY', 'GOOGLE_API_KEY')

# How long closing the window waits for an in-flight request
GENERATION_SHUTDOWN_WAIT_MS = 2000

# ======================================================================
# ERROR MESSAGES
# ======================================================================

MSG_GENERATION_NO_IMAGE = 'Failed to generate image. Please try again.'
MSG_UNEXPECTED_ERROR = 'An unexpected error occurred.'

"""Image source adapter - decodes uploads, drops and clipboard images.

Decoding is the only place raw image bytes enter the editor. Everything
returned here is an RGBA Pillow image; anything undecodable raises
DecodeFailure so callers can ignore it without touching canvas state.
"""

import io
import logging
from concurrent.futures import ThreadPoolExecutor

import numpy as np
from PIL import Image, UnidentifiedImageError
from PyQt5.QtCore import QObject, QBuffer, QByteArray, QIODevice, pyqtSignal
from PyQt5.QtGui import QImage

from utils.errors import DecodeFailure

logger = logging.getLogger(__name__)

IMAGE_FILE_EXTENSIONS = ('.png', '.jpg', '.jpeg', '.gif', '.bmp', '.webp', '.tif', '.tiff')


def decode_image(data):
    """Decode encoded image bytes into an RGBA Pillow image.
    
    Args:
        data: Encoded image (PNG, JPEG, ...)
        
    Returns:
        Image: Fully loaded RGBA image
        
    Raises:
        DecodeFailure: If the bytes are empty or not a readable image
    """
    if not data:
        raise DecodeFailure("No image data")
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            return img.convert('RGBA')
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise DecodeFailure(f"Cannot decode image: {e}") from e


def load_image_file(path):
    """Read and decode an image file.
    
    Raises:
        DecodeFailure: If the file cannot be read or decoded
    """
    try:
        with open(path, 'rb') as f:
            data = f.read()
    except OSError as e:
        raise DecodeFailure(f"Cannot read {path}: {e}") from e
    return decode_image(data)


def is_image_path(path):
    """Check a file name against the supported image extensions"""
    return str(path).lower().endswith(IMAGE_FILE_EXTENSIONS)


def qimage_to_pil(qimage):
    """Convert a QImage (e.g. from the clipboard) to an RGBA Pillow image.
    
    Raises:
        DecodeFailure: If the QImage is null
    """
    if qimage is None or qimage.isNull():
        raise DecodeFailure("Clipboard image is empty")
    byte_array = QByteArray()
    buffer = QBuffer(byte_array)
    buffer.open(QIODevice.WriteOnly)
    qimage.save(buffer, 'PNG')
    buffer.close()
    return decode_image(bytes(byte_array))


def pil_to_qimage(image):
    """Convert a Pillow image to a QImage that owns its pixel buffer."""
    rgba = np.ascontiguousarray(np.array(image.convert('RGBA')))
    height, width = rgba.shape[:2]
    qimage = QImage(rgba.data, width, height, width * 4, QImage.Format_RGBA8888)
    return qimage.copy()  # Detach from the numpy buffer


class ImageLoader(QObject):
    """Decodes images off the GUI thread.
    
    Results are delivered through Qt signals, which queue them back onto the
    GUI thread. Each request carries the id handed out by the canvas session
    so superseded loads can be dropped there.
    """
    
    imageLoaded = pyqtSignal(object, int)  # image, request_id
    loadFailed = pyqtSignal(str, int)  # message, request_id
    
    def __init__(self, parent=None):
        super().__init__(parent)
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix='image-decode')
    
    def load_file(self, path, request_id):
        """Decode an image file asynchronously"""
        future = self._executor.submit(load_image_file, path)
        future.add_done_callback(lambda f: self._deliver(f, request_id))
    
    def load_bytes(self, data, request_id):
        """Decode encoded image bytes asynchronously"""
        future = self._executor.submit(decode_image, data)
        future.add_done_callback(lambda f: self._deliver(f, request_id))
    
    def _deliver(self, future, request_id):
        try:
            image = future.result()
        except DecodeFailure as e:
            logger.warning(f"Image request {request_id} failed: {e}")
            self.loadFailed.emit(str(e), request_id)
            return
        self.imageLoaded.emit(image, request_id)
    
    def shutdown(self):
        """Stop the worker thread (pending decodes are discarded)"""
        self._executor.shutdown(wait=False, cancel_futures=True)

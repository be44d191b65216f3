"""Generation adapter over the Google GenAI SDK.

Turns a GenerationRequest (flattened canvas PNG + prompt + model) into a
GenerationResult. Three request shapes are supported, chosen by model:
- image edit models: drawing + prompt in, replacement image out
- Imagen: prompt in, 16:9 image out (the drawing is not sent)
- describe model: drawing + prompt in, text description out

GenerationWorker runs one request on a QThread and reports back through
signals so the canvas session is only touched on the GUI thread.
"""

import logging
import os

from google import genai
from google.genai import errors, types
from PyQt5.QtCore import QObject, pyqtSignal

from constants import (
    API_KEY_ENV_VARS, IMAGE_EDIT_MODELS, MODEL_IMAGEN, MODEL_FLASH_DESCRIBE,
    STYLE_KEYWORDS, STYLE_SUFFIX, IMAGEN_ASPECT_RATIO, MSG_GENERATION_NO_IMAGE
)
from models.generation import GenerationResult
from utils.errors import GenerationFailure

logger = logging.getLogger(__name__)


def resolve_api_key():
    """First non-empty API key among the supported environment variables"""
    for name in API_KEY_ENV_VARS:
        value = os.environ.get(name)
        if value:
            return value
    return None


def build_edit_prompt(prompt):
    """Keep the drawing's minimal line style unless the prompt names a style.
    
    Args:
        prompt: User instruction
        
    Returns:
        str: Prompt sent to the image edit models
    """
    lower = prompt.lower()
    if any(keyword in lower for keyword in STYLE_KEYWORDS):
        return prompt
    return f"{prompt}{STYLE_SUFFIX}"


class GenerationService:
    """Stateless facade over genai.Client for the supported models."""
    
    def __init__(self, api_key=None, client=None):
        """
        Args:
            api_key: Explicit key (falls back to the environment)
            client: Pre-built client, mainly for tests
        """
        self._api_key = api_key
        self._client = client
    
    @property
    def client(self):
        if self._client is None:
            api_key = self._api_key or resolve_api_key()
            if not api_key:
                raise GenerationFailure(
                    f"No API key configured. Set {' or '.join(API_KEY_ENV_VARS)}."
                )
            self._client = genai.Client(api_key=api_key)
        return self._client
    
    def generate(self, model, prompt, image_data):
        """Run one generation call.
        
        Args:
            model: Model id (see constants.AVAILABLE_MODELS)
            prompt: User instruction
            image_data: PNG of the flattened canvas
            
        Returns:
            GenerationResult
            
        Raises:
            GenerationFailure: Unknown model, API error or a response without output
        """
        logger.info(f"Generating with {model}")
        if model in IMAGE_EDIT_MODELS:
            call = lambda: self._edit_image(model, prompt, image_data)
        elif model == MODEL_IMAGEN:
            call = lambda: self._generate_image(model, prompt)
        elif model == MODEL_FLASH_DESCRIBE:
            call = lambda: self._describe_image(model, prompt, image_data)
        else:
            raise GenerationFailure(f"Unsupported model: {model}")
        try:
            return call()
        except errors.APIError as e:
            raise GenerationFailure(e.message or str(e)) from e
    
    def _edit_image(self, model, prompt, image_data):
        response = self.client.models.generate_content(
            model=model,
            contents=[
                types.Part.from_bytes(data=image_data, mime_type='image/png'),
                build_edit_prompt(prompt),
            ],
            config=types.GenerateContentConfig(response_modalities=['TEXT', 'IMAGE']),
        )
        
        text = None
        generated = None
        candidates = response.candidates or []
        parts = candidates[0].content.parts if candidates and candidates[0].content else None
        for part in parts or []:
            if part.text:
                text = part.text
            elif part.inline_data and part.inline_data.data:
                generated = part.inline_data.data
        
        if generated is None:
            if text:
                logger.warning(f"Model replied without an image: {text}")
            raise GenerationFailure(MSG_GENERATION_NO_IMAGE)
        return GenerationResult(image_data=generated, text=text)
    
    def _generate_image(self, model, prompt):
        response = self.client.models.generate_images(
            model=model,
            prompt=prompt,
            config=types.GenerateImagesConfig(
                number_of_images=1,
                output_mime_type='image/png',
                aspect_ratio=IMAGEN_ASPECT_RATIO,
            ),
        )
        images = response.generated_images or []
        if not images or not images[0].image or not images[0].image.image_bytes:
            raise GenerationFailure(MSG_GENERATION_NO_IMAGE)
        return GenerationResult(image_data=images[0].image.image_bytes)
    
    def _describe_image(self, model, prompt, image_data):
        response = self.client.models.generate_content(
            model=model,
            contents=[
                types.Part.from_bytes(data=image_data, mime_type='image/png'),
                f"Describe this image. {prompt}",
            ],
        )
        if not response.text:
            raise GenerationFailure("The model returned no description.")
        return GenerationResult(text=response.text)


class GenerationWorker(QObject):
    """Runs a single GenerationRequest; move to a QThread and start run()."""
    
    finished = pyqtSignal(int, object)  # request_id, GenerationResult
    failed = pyqtSignal(int, str)  # request_id, error text
    
    def __init__(self, service, request):
        super().__init__()
        self.service = service
        self.request = request
    
    def run(self):
        request = self.request
        try:
            result = self.service.generate(request.model, request.prompt, request.image_data)
        except Exception as e:  # noqa: BLE001 - SDK errors surface as messages
            logger.error(f"Generation request {request.request_id} failed: {e}")
            self.failed.emit(request.request_id, str(e))
            return
        self.finished.emit(request.request_id, result)

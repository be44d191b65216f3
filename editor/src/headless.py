"""Headless CoDrawing - CLI entry point.

Runs one canvas session without a window: optionally places an image on a
blank canvas, sends the flattened canvas to a generation model and writes
the resulting canvas as PNG.

Usage:
    python -m editor.src.headless [-i IMAGE] [-p PROMPT] [-m MODEL] [-o OUTPUT]

Examples:
    python -m editor.src.headless -i sketch.png -p "add a sun in the sky"
    python -m editor.src.headless -i sketch.png -o composed.png
    python -m editor.src.headless -p "a lighthouse" -m imagen-4.0-generate-001
"""

import sys
import os
import argparse
import logging

# Add editor/src to path so imports work
_src_dir = os.path.dirname(os.path.abspath(__file__))
if _src_dir not in sys.path:
    sys.path.insert(0, _src_dir)

from constants import AVAILABLE_MODELS, DEFAULT_MODEL, EXPORT_FILENAME
from utils.errors import CanvasError
from utils.logger import setup_logging


logger = logging.getLogger('Headless')


def run(image_path=None, prompt=None, model=DEFAULT_MODEL, service=None):
    """Compose and optionally generate, returning the final PNG bytes.

    Args:
        image_path: Image placed centered on the blank canvas (optional).
        prompt: Generation instruction; no request is sent when omitted.
        model: Generation model identifier.
        service: GenerationService (created on demand).

    Returns:
        PNG bytes of the final canvas.

    Raises:
        DecodeFailure: The input image could not be read.
        GenerationFailure: The model returned an error or no usable output.
    """
    from services.canvas_session import CanvasSession
    from services.image_loader import load_image_file
    from utils.errors import GenerationFailure

    session = CanvasSession()
    if image_path:
        session.place_image(load_image_file(image_path))

    if prompt:
        from services.generation_service import GenerationService
        service = service or GenerationService()
        request = session.begin_generation(prompt=prompt, model=model)
        logger.info(f"Sending canvas to {request.model}")
        try:
            result = service.generate(request.model, request.prompt, request.image_data)
        except GenerationFailure as e:
            session.fail_generation(request.request_id, e)
        else:
            session.complete_generation(request.request_id, result)
        if session.context.error_message:
            raise GenerationFailure(session.context.error_message)

    return session.download_png()


def main():
    parser = argparse.ArgumentParser(
        description='Compose a canvas and run it through a generation model (headless).',
    )
    parser.add_argument(
        '-i', '--image',
        help='Image file placed on the blank canvas.',
    )
    parser.add_argument(
        '-p', '--prompt',
        help='Instruction sent with the canvas. Without it the canvas is only exported.',
    )
    parser.add_argument(
        '-m', '--model',
        default=DEFAULT_MODEL,
        choices=[value for value, _ in AVAILABLE_MODELS],
        help=f'Generation model (default: {DEFAULT_MODEL}).',
    )
    parser.add_argument(
        '-o', '--output',
        default=EXPORT_FILENAME,
        help=f'Output PNG path (default: {EXPORT_FILENAME}).',
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging.',
    )
    args = parser.parse_args()

    setup_logging(args.verbose)

    if args.image and not os.path.isfile(args.image):
        print(f"Error: Input image not found: {args.image}")
        sys.exit(1)

    try:
        data = run(args.image, args.prompt, args.model)
    except CanvasError as e:
        print(f"Error: {e}")
        sys.exit(1)

    output_path = os.path.abspath(args.output)
    with open(output_path, 'wb') as f:
        f.write(data)
    print(f"Wrote {output_path}")


if __name__ == "__main__":
    main()

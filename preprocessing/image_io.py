"""
Conversion between encoded image blobs and RGBA pixel surfaces.

Decoding and encoding are the only I/O boundaries of the preprocessing
pipeline. Pillow handles the codecs; OpenCV writes debugging artifacts.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

import cv2
import numpy as np
from PIL import Image, UnidentifiedImageError

from config import OUTPUT_IMAGE_FORMAT, OUTPUT_IMAGE_MIME_TYPE
from errors import ImageDecodeError, ImageEncodeError

from .types import ImageBlob, PreprocessInput, Surface

logger = logging.getLogger(__name__)


def decode_image(blob: ImageBlob) -> Surface:
    """Decode an image blob into an RGBA surface.

    Raises:
        ImageDecodeError: If the bytes are not a readable image.
    """
    try:
        with Image.open(io.BytesIO(blob.data)) as image:
            image.load()
            rgba = image.convert("RGBA")
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        raise ImageDecodeError(f"Failed to load image {blob.name or ''}".rstrip()) from exc

    pixels = np.array(rgba, dtype=np.uint8)
    logger.debug("Decoded %s (%d bytes) to %dx%d", blob.mime_type, len(blob), *rgba.size)
    return Surface(pixels=pixels)


def encode_png(surface: Surface) -> ImageBlob:
    """Encode a surface as lossless PNG.

    Raises:
        ImageEncodeError: If the codec fails or produces no data.
    """
    buffer = io.BytesIO()
    try:
        Image.fromarray(surface.pixels).save(buffer, format=OUTPUT_IMAGE_FORMAT)
    except (OSError, ValueError, SystemError) as exc:
        raise ImageEncodeError("Failed to convert the preprocessed image") from exc

    data = buffer.getvalue()
    if not data:
        raise ImageEncodeError("Failed to convert the preprocessed image")
    return ImageBlob(data=data, mime_type=OUTPUT_IMAGE_MIME_TYPE)


def to_surface(image: PreprocessInput) -> Surface:
    """Return image as a surface, decoding only when it is still a blob."""
    if isinstance(image, Surface):
        return image
    return decode_image(image)


def to_blob(image: PreprocessInput) -> ImageBlob:
    """Return image as a blob, encoding only when it is a surface."""
    if isinstance(image, ImageBlob):
        return image
    return encode_png(image)


def save_surface(surface: Surface, path: str | Path) -> str:
    """Save a surface to disk for debugging.

    Args:
        surface: Image to save.
        path: Output file path; the extension selects the format.

    Returns:
        The path written, as a string.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    cv2.imwrite(str(path), cv2.cvtColor(surface.pixels, cv2.COLOR_RGBA2BGRA))
    return str(path)


def decode_rgb(blob: ImageBlob) -> np.ndarray:
    """Decode an image blob to an RGB array, compositing transparency onto white.

    Raises:
        ImageDecodeError: If the bytes are not a readable image.
    """
    rgba = decode_image(blob).pixels
    alpha = rgba[:, :, 3:4].astype(np.float64) / 255.0
    rgb = rgba[:, :, :3].astype(np.float64) * alpha + 255.0 * (1.0 - alpha)
    return np.clip(np.rint(rgb), 0, 255).astype(np.uint8)

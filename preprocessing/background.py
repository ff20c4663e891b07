"""
Background color removal.

Spreadsheets and slides often shade header rows or alternate cells. The shading
survives grayscale conversion as mid-gray blocks that confuse the recognizer.
This step splits the image into dark ink and lighter background with Otsu's
method and paints everything on the background side white.
"""

import logging

import numpy as np

from config import WHITE_PIXEL

from .thresholding import extract_luminance, otsu_threshold

logger = logging.getLogger(__name__)


def background_mask(pixels: np.ndarray) -> np.ndarray:
    """Return a flat boolean mask of pixels lighter than the Otsu threshold.

    Returns an all-False mask when the image has a single luminance level,
    since there is no ink/background split to make.
    """
    luminance = extract_luminance(pixels)
    if luminance.size == 0 or luminance.min() == luminance.max():
        return np.zeros(luminance.shape, dtype=bool)
    threshold = otsu_threshold(luminance)
    return luminance > threshold


def remove_background_color(pixels: np.ndarray) -> np.ndarray:
    """Flatten tinted backgrounds to white, keeping dark foreground pixels.

    Pure function: returns a new array without modifying the input.

    Args:
        pixels: RGBA pixels of shape (height, width, 4).

    Returns:
        New RGBA array where every background pixel is (255, 255, 255, 255).
    """
    result = np.array(pixels, dtype=np.uint8, copy=True)
    mask = background_mask(result)
    rgba = result.reshape(-1, 4)
    rgba[mask] = WHITE_PIXEL

    logger.debug(
        "Background removal: whitened %d of %d pixels",
        int(mask.sum()), int(mask.size),
    )
    return result

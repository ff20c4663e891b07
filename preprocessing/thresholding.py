"""
Luminance extraction and global Otsu thresholding.

All functions are pure: they take an input and return a new output without
mutating the original array. Pixel buffers are RGBA uint8, either flat
(4 samples per pixel, row-major) or shaped (height, width, 4).
"""

import numpy as np

from config import LUMINANCE_WEIGHTS, OTSU_FALLBACK_THRESHOLD
from errors import ShapeMismatchError

# Marks a dark (ink / line) pixel in a binary mask
DARK_PIXEL = 1


def as_flat_array(buffer) -> np.ndarray:
    """View a bytes-like object or array-like as a flat array."""
    if isinstance(buffer, (bytes, bytearray, memoryview)):
        return np.frombuffer(buffer, dtype=np.uint8)
    if not isinstance(buffer, np.ndarray):
        buffer = np.asarray(buffer)
    return buffer.reshape(-1)


def extract_luminance(pixels) -> np.ndarray:
    """Convert an RGBA pixel buffer to one luminance byte per pixel.

    Uses L = round(0.299*R + 0.587*G + 0.114*B), rounding halves up.
    The alpha channel is ignored.

    Args:
        pixels: RGBA samples, flat or shaped (height, width, 4).

    Returns:
        Flat uint8 array with one value per pixel.

    Raises:
        ShapeMismatchError: If the sample count is not a multiple of 4.

    Examples:
        >>> extract_luminance(np.array([255, 0, 0, 255], dtype=np.uint8))
        array([76], dtype=uint8)
    """
    flat = as_flat_array(pixels)
    if flat.size % 4 != 0:
        raise ShapeMismatchError(
            f"RGBA buffer length must be a multiple of 4, got {flat.size}"
        )

    rgba = flat.reshape(-1, 4).astype(np.float64)
    red_weight, green_weight, blue_weight = LUMINANCE_WEIGHTS
    weighted = (
        rgba[:, 0] * red_weight
        + rgba[:, 1] * green_weight
        + rgba[:, 2] * blue_weight
    )
    return np.clip(np.floor(weighted + 0.5), 0, 255).astype(np.uint8)


def otsu_threshold(values) -> int:
    """Pick the global threshold that maximizes between-class variance.

    Candidate thresholds t=0..255 split the histogram into a background
    class (values <= t) and a foreground class (values > t). Thresholds
    where either class is empty are not considered. On equal variance the
    lowest t wins.

    Args:
        values: Luminance samples (uint8).

    Returns:
        Threshold in [0, 255], or 128 when no valid split exists
        (e.g. every sample has the same value).
    """
    samples = as_flat_array(values)
    total = samples.size
    if total == 0:
        return OTSU_FALLBACK_THRESHOLD

    histogram = np.bincount(samples, minlength=256).astype(np.int64)
    levels = np.arange(256, dtype=np.int64)

    background_weight = np.cumsum(histogram)
    foreground_weight = total - background_weight
    background_sum = np.cumsum(levels * histogram)
    weighted_total = background_sum[-1]

    valid = (background_weight > 0) & (foreground_weight > 0)
    if not valid.any():
        return OTSU_FALLBACK_THRESHOLD

    wb = background_weight[valid].astype(np.float64)
    wf = foreground_weight[valid].astype(np.float64)
    sum_b = background_sum[valid].astype(np.float64)
    mean_b = sum_b / wb
    mean_f = (weighted_total - sum_b) / wf
    between_class_variance = wb * wf * (mean_b - mean_f) ** 2

    # argmax returns the first maximum, so ties keep the lowest threshold
    return int(levels[valid][int(np.argmax(between_class_variance))])


def create_binary_mask(luminance, threshold: int) -> np.ndarray:
    """Mark pixels at or below the threshold as dark foreground.

    Assumes dark ink on a light background. Light-on-dark images are
    misclassified and must be inverted by the caller.

    Args:
        luminance: Luminance samples (uint8).
        threshold: Threshold from otsu_threshold().

    Returns:
        Flat uint8 mask with DARK_PIXEL (1) for foreground and 0 elsewhere.
    """
    samples = as_flat_array(luminance)
    return (samples <= threshold).astype(np.uint8)

"""
Table gridline detection and removal.

Gridlines show up in a binarized table as long unbroken runs of dark pixels.
Text strokes are short, so marking only runs that span a large share of the
row or column isolates the borders, which are then painted white.
"""

import logging
import math

import numpy as np

from config import WHITE_PIXEL
from errors import ShapeMismatchError

from .config import DEFAULT_GRID_LINE_CONFIG, GridLineConfig
from .thresholding import (
    DARK_PIXEL,
    as_flat_array,
    create_binary_mask,
    extract_luminance,
    otsu_threshold,
)

logger = logging.getLogger(__name__)


def _mark_long_runs(grid: np.ndarray, min_run_length: int) -> np.ndarray:
    """Mark every pixel of each row-wise dark run at least min_run_length long.

    Runs are found per row by padding with a background pixel on both ends
    and taking the difference: +1 opens a run, -1 closes it (exclusive end).

    Returns:
        Boolean array with the same shape as grid.
    """
    height, width = grid.shape
    padded = np.zeros((height, width + 2), dtype=np.int8)
    padded[:, 1:-1] = grid == DARK_PIXEL
    edges = np.diff(padded, axis=1)

    # nonzero() walks row-major, so the i-th start pairs with the i-th end
    start_rows, start_cols = np.nonzero(edges == 1)
    _, end_cols = np.nonzero(edges == -1)
    long_runs = (end_cols - start_cols) >= min_run_length

    delta = np.zeros((height, width + 1), dtype=np.int32)
    np.add.at(delta, (start_rows[long_runs], start_cols[long_runs]), 1)
    np.add.at(delta, (start_rows[long_runs], end_cols[long_runs]), -1)
    return np.cumsum(delta, axis=1)[:, :width] > 0


def detect_long_line_mask(
    binary,
    width: int,
    height: int,
    min_horizontal_run_length: int,
    min_vertical_run_length: int,
) -> np.ndarray:
    """Find long horizontal and vertical dark runs in a binary mask.

    Every maximal run of DARK_PIXEL values whose length reaches the minimum
    for its axis is marked in full. The horizontal and vertical passes are
    independent and OR-ed together; shorter runs are never marked.

    Args:
        binary: Flat mask of width*height values in {0, 1}.
        width: Image width in pixels.
        height: Image height in pixels.
        min_horizontal_run_length: Minimum run length along a row.
        min_vertical_run_length: Minimum run length along a column.

    Returns:
        Flat uint8 line mask of width*height values, 1 on detected lines.

    Raises:
        ShapeMismatchError: If the mask length is not width*height.

    Examples:
        >>> mask = np.array([1, 1, 1, 0, 1, 0], dtype=np.uint8)
        >>> detect_long_line_mask(mask, 3, 2, 3, 3)
        array([1, 1, 1, 0, 0, 0], dtype=uint8)
    """
    flat = as_flat_array(binary)
    if width < 0 or height < 0 or flat.size != width * height:
        raise ShapeMismatchError(
            f"Binary mask size {flat.size} does not match image shape {width}x{height}"
        )

    grid = flat.reshape(height, width)
    horizontal = _mark_long_runs(grid, min_horizontal_run_length)
    vertical = _mark_long_runs(grid.T, min_vertical_run_length).T
    return (horizontal | vertical).astype(np.uint8).reshape(-1)


def whiten_detected_lines(pixels: np.ndarray, line_mask) -> np.ndarray:
    """Paint every masked pixel opaque white.

    Pure function: returns a new array without modifying the input.

    Args:
        pixels: RGBA pixels, flat or shaped (height, width, 4).
        line_mask: Flat mask with one value per pixel; 1 marks a line.

    Returns:
        Copy of pixels (same shape) with masked pixels set to (255, 255, 255, 255).

    Raises:
        ShapeMismatchError: If the mask and the pixel buffer disagree in size.
    """
    result = np.array(pixels, dtype=np.uint8, copy=True)
    rgba = result.reshape(-1)
    if rgba.size % 4 != 0:
        raise ShapeMismatchError(
            f"RGBA buffer length must be a multiple of 4, got {rgba.size}"
        )
    rgba = rgba.reshape(-1, 4)

    mask = as_flat_array(line_mask)
    if mask.size != rgba.shape[0]:
        raise ShapeMismatchError(
            f"Line mask size {mask.size} does not match pixel count {rgba.shape[0]}"
        )

    rgba[mask == 1] = WHITE_PIXEL
    return result


def resolve_min_run_lengths(
    width: int,
    height: int,
    config: GridLineConfig = DEFAULT_GRID_LINE_CONFIG,
) -> tuple[int, int]:
    """Derive (horizontal, vertical) minimum run lengths for an image size.

    Each minimum is max(min_run_length_px, floor(long_run_ratio * dimension)).
    """
    min_horizontal = max(config.min_run_length_px, math.floor(width * config.long_run_ratio))
    min_vertical = max(config.min_run_length_px, math.floor(height * config.long_run_ratio))
    return min_horizontal, min_vertical


def remove_table_grid_lines(
    pixels: np.ndarray,
    config: GridLineConfig = DEFAULT_GRID_LINE_CONFIG,
) -> np.ndarray:
    """Erase table borders from an RGBA image.

    luminance -> Otsu threshold -> binary mask -> long-run line mask -> whiten.

    Args:
        pixels: RGBA pixels of shape (height, width, 4).
        config: Line detection parameters.

    Returns:
        New RGBA array with detected gridlines painted white.
    """
    config.validate()
    height, width = pixels.shape[:2]

    luminance = extract_luminance(pixels)
    threshold = otsu_threshold(luminance)
    binary = create_binary_mask(luminance, threshold)

    min_horizontal, min_vertical = resolve_min_run_lengths(width, height, config)
    line_mask = detect_long_line_mask(binary, width, height, min_horizontal, min_vertical)

    logger.debug(
        "Gridline removal: %dx%d, threshold=%d, min_runs=(%d, %d), line_pixels=%d",
        width, height, threshold, min_horizontal, min_vertical, int(line_mask.sum()),
    )
    return whiten_detected_lines(pixels, line_mask)

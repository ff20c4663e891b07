"""
Image preprocessing module for clipboard OCR.

This module provides pure, deterministic functions that clean up pasted images
before OCR. All pixel functions follow the pattern: input -> output with no
mutation of the original arrays.

Key components:
- config: PreprocessOptions / GridLineConfig and PreprocessResult
- types: ImageBlob | Surface tagged union passed between steps
- thresholding: luminance, Otsu threshold, binary mask
- lines: long-run gridline detection and whitening
- background: tinted background flattening
- image_io: decode/encode boundary (Pillow)
- steps: fixed table of registered steps
- pipeline: run_preprocess_pipeline() that applies the enabled steps in order
"""

from .config import (
    DEFAULT_GRID_LINE_CONFIG,
    DEFAULT_PREPROCESS_OPTIONS,
    GridLineConfig,
    PreprocessOptions,
    PreprocessResult,
)
from .types import ImageBlob, PreprocessInput, Surface
from .thresholding import extract_luminance, otsu_threshold, create_binary_mask
from .lines import (
    detect_long_line_mask,
    whiten_detected_lines,
    resolve_min_run_lengths,
    remove_table_grid_lines,
)
from .background import remove_background_color
from .image_io import decode_image, decode_rgb, encode_png
from .steps import (
    PREPROCESS_STEPS,
    REMOVE_BACKGROUND_COLOR,
    REMOVE_TABLE_GRID_LINES,
    PreprocessStep,
    enabled_steps,
)
from .pipeline import run_preprocess_pipeline

__all__ = [
    # Config and results
    "DEFAULT_GRID_LINE_CONFIG",
    "DEFAULT_PREPROCESS_OPTIONS",
    "GridLineConfig",
    "PreprocessOptions",
    "PreprocessResult",
    # Representations
    "ImageBlob",
    "PreprocessInput",
    "Surface",
    # Pixel algorithms
    "extract_luminance",
    "otsu_threshold",
    "create_binary_mask",
    "detect_long_line_mask",
    "whiten_detected_lines",
    "resolve_min_run_lengths",
    "remove_table_grid_lines",
    "remove_background_color",
    # Codec boundary
    "decode_image",
    "decode_rgb",
    "encode_png",
    # Steps and pipeline
    "PREPROCESS_STEPS",
    "REMOVE_BACKGROUND_COLOR",
    "REMOVE_TABLE_GRID_LINES",
    "PreprocessStep",
    "enabled_steps",
    "run_preprocess_pipeline",
]

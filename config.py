"""Central configuration for clipboard OCR.

All tunable parameters are defined here with descriptive names.
These values are injected at call sites; nothing here is mutated at runtime.
"""

import os

# =============================================================================
# GRID LINE REMOVAL
# =============================================================================

# A run counts as a table line when it spans at least this fraction of the
# image dimension along its axis (width for rows, height for columns)
LONG_RUN_RATIO = 0.45

# Floor for the minimum run length in pixels, so tiny images do not treat
# every stroke as a gridline
MIN_RUN_LENGTH_PX = 24

# =============================================================================
# THRESHOLDING
# =============================================================================

# Threshold returned by Otsu's method when no valid split exists
# (every pixel has the same luminance)
OTSU_FALLBACK_THRESHOLD = 128

# ITU-R BT.601 luma weights (R, G, B)
LUMINANCE_WEIGHTS = (0.299, 0.587, 0.114)

# Value written to every channel of an erased pixel (opaque white)
WHITE_PIXEL = (255, 255, 255, 255)

# =============================================================================
# PREPROCESS OPTIONS
# =============================================================================

# Tinted cells and paper are flattened to white before OCR
DEFAULT_HAS_BACKGROUND_COLOR = False

# Table borders are erased before OCR
DEFAULT_HAS_TABLE_GRID_LINES = True

# Encoding used for the final preprocessed image (lossless)
OUTPUT_IMAGE_FORMAT = "PNG"
OUTPUT_IMAGE_MIME_TYPE = "image/png"

# =============================================================================
# RECOGNITION
# =============================================================================

# Character modes enabled by default
DEFAULT_READ_JAPANESE = True
DEFAULT_READ_ENGLISH = True
DEFAULT_READ_DIGITS = True

# EasyOCR language codes per character class
JAPANESE_LANGUAGE_CODE = "ja"
LATIN_LANGUAGE_CODE = "en"

# Characters allowed when only digits are enabled (numbers, separators, brackets, space)
DIGIT_ONLY_ALLOWLIST = "0123456789.,:/-+%()[]{} "

# Run EasyOCR on GPU when available
OCR_USE_GPU = os.environ.get("CLIPOCR_GPU", "0") == "1"

# =============================================================================
# PASTE SOURCE
# =============================================================================

# MIME types accepted from the clipboard, matched exactly
SUPPORTED_IMAGE_TYPES = ("image/png", "image/jpeg", "image/webp")

# Human-readable names used in the "no image found" message
SUPPORTED_IMAGE_LABELS = "PNG / JPEG / WEBP"

# =============================================================================
# WEB SERVICE
# =============================================================================

WEB_HOST = "localhost"
WEB_PORT = 30003

# Largest accepted upload in bytes (clipboard screenshots are rarely above a few MB)
MAX_UPLOAD_BYTES = 20 * 1024 * 1024

"""
Text recognition on top of EasyOCR.

The OCR engine is an external collaborator. This package decides how to call
it for the enabled character modes and cleans up what it returns.

Key components:
- modes: CharacterModes, language resolution, digits-only options, filtering
- reader: OcrReader interface and cached EasyOCR readers
- recognize: recognize_image() and run_ocr() (preprocess + recognize)
"""

from .modes import (
    DEFAULT_CHARACTER_MODES,
    CharacterModes,
    build_readtext_options,
    filter_by_modes,
    resolve_languages,
)
from .reader import OcrReader, clear_reader_cache, get_reader
from .recognize import OcrResult, ProgressCallback, recognize_image, run_ocr

__all__ = [
    "DEFAULT_CHARACTER_MODES",
    "CharacterModes",
    "build_readtext_options",
    "filter_by_modes",
    "resolve_languages",
    "OcrReader",
    "clear_reader_cache",
    "get_reader",
    "OcrResult",
    "ProgressCallback",
    "recognize_image",
    "run_ocr",
]

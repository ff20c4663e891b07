"""
OCR reader interface and the EasyOCR-backed implementation.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Protocol, Sequence

import numpy as np

import config

logger = logging.getLogger(__name__)


class OcrReader(Protocol):
    """Interface for OCR engines (matches easyocr.Reader.readtext)."""

    def readtext(self, image: np.ndarray, **kwargs: Any) -> list:
        """Read text from an RGB image."""


_READERS: dict[tuple[str, ...], OcrReader] = {}
_READERS_LOCK = threading.Lock()


def get_reader(languages: Sequence[str]) -> OcrReader:
    """Return a cached EasyOCR reader for a language combination.

    Model loading takes seconds, so one reader per combination is kept for
    the life of the process.
    """
    key = tuple(languages)
    if not key:
        raise ValueError("At least one language is required")

    with _READERS_LOCK:
        reader = _READERS.get(key)
        if reader is None:
            import easyocr

            logger.info("Loading EasyOCR reader for %s (gpu=%s)", "+".join(key), config.OCR_USE_GPU)
            reader = easyocr.Reader(list(key), gpu=config.OCR_USE_GPU)
            _READERS[key] = reader
    return reader


def clear_reader_cache() -> None:
    """Drop every cached reader."""
    with _READERS_LOCK:
        _READERS.clear()

"""
Text recognition: preprocess, read with EasyOCR, filter by character modes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from errors import NoReadingModeEnabledError, RecognitionError
from preprocessing import (
    DEFAULT_PREPROCESS_OPTIONS,
    ImageBlob,
    PreprocessOptions,
    decode_rgb,
    run_preprocess_pipeline,
)

from .modes import (
    DEFAULT_CHARACTER_MODES,
    CharacterModes,
    build_readtext_options,
    filter_by_modes,
    resolve_languages,
)
from .reader import OcrReader, get_reader

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]


@dataclass
class OcrResult:
    """Text read from one image.

    Attributes:
        text: Recognized text after mode filtering.
        applied_steps: Preprocessing steps that ran before recognition.
        preprocessed: The image handed to the recognizer.
    """

    text: str
    applied_steps: list[str] = field(default_factory=list)
    preprocessed: ImageBlob | None = field(default=None, repr=False)

    def to_dict(self) -> dict:
        return {"text": self.text, "applied_steps": list(self.applied_steps)}


class _ProgressReporter:
    """Forwards progress to a callback, clamped to [0, 100] and never decreasing."""

    def __init__(self, callback: ProgressCallback | None) -> None:
        self._callback = callback
        self._last = -1

    def report(self, percent: float) -> None:
        value = max(0, min(100, int(round(percent))))
        if self._callback is None or value <= self._last:
            return
        self._last = value
        self._callback(value)


def _join_results(results: list) -> str:
    """Join readtext(detail=0) output into one text, one entry per line."""
    return "\n".join(str(entry).strip() for entry in results if str(entry).strip())


def recognize_image(
    image: ImageBlob,
    on_progress: ProgressCallback | None = None,
    modes: CharacterModes = DEFAULT_CHARACTER_MODES,
    reader: OcrReader | None = None,
) -> str:
    """Read text from an image.

    Args:
        image: Image to read (usually the preprocessed PNG).
        on_progress: Called with increasing integers in [0, 100].
        modes: Character classes to return.
        reader: OCR engine. Defaults to a cached EasyOCR reader for the
                languages the modes need.

    Returns:
        Recognized text with disabled character classes removed.

    Raises:
        NoReadingModeEnabledError: If every mode is off. Raised before the
                                   engine is created or called.
        ImageDecodeError: If the image cannot be decoded.
        RecognitionError: If the engine fails.
    """
    languages = resolve_languages(modes)
    if not languages:
        raise NoReadingModeEnabledError()

    progress = _ProgressReporter(on_progress)
    progress.report(0)

    rgb = decode_rgb(image)

    options = build_readtext_options(modes)
    logger.debug("Recognizing %dx%d image with %s %s", rgb.shape[1], rgb.shape[0], languages, options)

    try:
        engine = reader if reader is not None else get_reader(languages)
        results = engine.readtext(rgb, detail=0, **options)
    except Exception as exc:
        raise RecognitionError(f"OCR engine failed: {exc}") from exc

    progress.report(100)
    return filter_by_modes(_join_results(results), modes)


def run_ocr(
    image: ImageBlob,
    modes: CharacterModes = DEFAULT_CHARACTER_MODES,
    options: PreprocessOptions = DEFAULT_PREPROCESS_OPTIONS,
    on_progress: ProgressCallback | None = None,
    reader: OcrReader | None = None,
    artifact_dir: str | Path | None = None,
) -> OcrResult:
    """Preprocess an image and read its text.

    Raises:
        NoReadingModeEnabledError: If every mode is off (nothing is processed).
        PreprocessError: If preprocessing fails.
        RecognitionError: If recognition fails.
    """
    if not modes.any_enabled:
        raise NoReadingModeEnabledError()

    preprocessed = run_preprocess_pipeline(image, options, artifact_dir=artifact_dir)
    text = recognize_image(preprocessed.image, on_progress=on_progress, modes=modes, reader=reader)
    logger.info("Recognized %d characters", len(text))
    return OcrResult(
        text=text,
        applied_steps=preprocessed.applied_steps,
        preprocessed=preprocessed.image,
    )

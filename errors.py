"""Exception types raised by clipboard OCR.

Every error derives from ClipOcrError so surfaces (CLI, web) can catch the
whole family, and from the builtin that best describes it so library callers
can keep catching ValueError / RuntimeError.
"""

from __future__ import annotations

from config import SUPPORTED_IMAGE_LABELS


class ClipOcrError(Exception):
    """Base class for clipboard OCR errors."""


class ShapeMismatchError(ClipOcrError, ValueError):
    """A mask or pixel buffer length disagrees with the declared width x height."""


class PreprocessError(ClipOcrError, RuntimeError):
    """The preprocessing pipeline could not produce an image."""

    user_message = "Preprocessing failed. Check the image and try again."


class ImageDecodeError(PreprocessError):
    """The source image could not be decoded into a pixel surface."""


class ImageEncodeError(PreprocessError):
    """The final pixel surface could not be encoded back to an image."""


class RecognitionError(ClipOcrError, RuntimeError):
    """The OCR engine rejected the image or failed while reading it."""

    user_message = "OCR failed. Check the image and run it again."


class UnsupportedPasteDataError(ClipOcrError, ValueError):
    """The clipboard content holds no image of a supported type."""

    user_message = f"Paste an image. Supported formats: {SUPPORTED_IMAGE_LABELS}"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.user_message)


class NoReadingModeEnabledError(ClipOcrError, ValueError):
    """Every character mode is switched off."""

    user_message = "Turn on at least one reading mode."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.user_message)


class ClipboardUnavailableError(ClipOcrError, RuntimeError):
    """The host has no way to write text to the system clipboard."""

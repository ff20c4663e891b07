"""
Type definitions for the preprocessing pipeline.

Steps hand images to each other as one of two representations:
- ImageBlob: encoded bytes (what the user pasted, or the final PNG)
- Surface: decoded RGBA pixels that steps can read and write

PreprocessInput is the tagged union of both. Conversion between them happens
only when a step needs pixels (decode) or the pipeline finishes (encode).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

import numpy as np

from errors import ShapeMismatchError


@dataclass(frozen=True)
class ImageBlob:
    """An encoded image.

    Attributes:
        data: Encoded image bytes (PNG, JPEG, WEBP, ...).
        mime_type: MIME type reported by the source, e.g. "image/png".
        name: Optional file name, used only for logging.
    """

    data: bytes
    mime_type: str = "application/octet-stream"
    name: str | None = None

    def __len__(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class Surface:
    """A decoded RGBA image owned by whichever step currently processes it.

    Attributes:
        pixels: uint8 array of shape (height, width, 4), row-major RGBA.
    """

    pixels: np.ndarray = field(repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.pixels, np.ndarray):
            raise TypeError(f"Expected numpy.ndarray, got {type(self.pixels).__name__}")
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 4:
            raise ShapeMismatchError(
                f"Surface pixels must have shape (height, width, 4), got {self.pixels.shape}"
            )
        if self.pixels.dtype != np.uint8:
            raise TypeError(f"Surface pixels must be uint8, got {self.pixels.dtype}")

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def dimensions(self) -> tuple[int, int]:
        """(width, height) of the surface."""
        return self.width, self.height

    def __repr__(self) -> str:
        return f"Surface(width={self.width}, height={self.height})"


PreprocessInput = Union[ImageBlob, Surface]

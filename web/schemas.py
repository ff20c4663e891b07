"""Pydantic schemas for API request forms and response bodies.

Domain types (PreprocessOptions, CharacterModes) live in their packages.
These schemas define the exact wire format accepted / returned by each endpoint.
"""

from pydantic import BaseModel, Field

from config import SUPPORTED_IMAGE_TYPES
from preprocessing import DEFAULT_PREPROCESS_OPTIONS, PreprocessOptions
from recognition import DEFAULT_CHARACTER_MODES, CharacterModes


# ---------------------------------------------------------------------------
# Requests (multipart form fields next to the pasted image)
# ---------------------------------------------------------------------------

class PreprocessForm(BaseModel):
    """Form fields for POST /api/preprocess."""
    has_background_color: bool = DEFAULT_PREPROCESS_OPTIONS.has_background_color
    has_table_grid_lines: bool = DEFAULT_PREPROCESS_OPTIONS.has_table_grid_lines

    def to_options(self) -> PreprocessOptions:
        return PreprocessOptions(
            has_background_color=self.has_background_color,
            has_table_grid_lines=self.has_table_grid_lines,
        )


class OcrForm(PreprocessForm):
    """Form fields for POST /api/ocr."""
    japanese: bool = DEFAULT_CHARACTER_MODES.japanese
    english: bool = DEFAULT_CHARACTER_MODES.english
    digits: bool = DEFAULT_CHARACTER_MODES.digits

    def to_modes(self) -> CharacterModes:
        return CharacterModes(japanese=self.japanese, english=self.english, digits=self.digits)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class OcrResponse(BaseModel):
    """Response for POST /api/ocr."""
    text: str
    applied_steps: list[str] = Field(default_factory=list)


class PreprocessOptionsOut(BaseModel):
    has_background_color: bool
    has_table_grid_lines: bool


class CharacterModesOut(BaseModel):
    japanese: bool
    english: bool
    digits: bool


class ConfigResponse(BaseModel):
    """Response for GET /api/config."""
    preprocess_options: PreprocessOptionsOut
    character_modes: CharacterModesOut
    supported_image_types: list[str] = Field(default_factory=lambda: list(SUPPORTED_IMAGE_TYPES))


class ErrorResponse(BaseModel):
    """Body returned with every 4xx/5xx response."""
    error: str
    detail: str | None = None

"""
Registered preprocessing steps.

Each step is a frozen record of an identifier, an enablement predicate over
PreprocessOptions, and a transform. Transforms accept either representation
(ImageBlob or Surface) and return a new Surface; they never mutate their input.

The registration order in PREPROCESS_STEPS is the execution order:
background removal runs before gridline removal when both are enabled.

Usage:
    from preprocessing.steps import enabled_steps

    for step in enabled_steps(PreprocessOptions(has_table_grid_lines=True)):
        image = step.apply(image)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .background import remove_background_color
from .config import DEFAULT_GRID_LINE_CONFIG, PreprocessOptions
from .image_io import to_surface
from .lines import remove_table_grid_lines
from .types import PreprocessInput, Surface

REMOVE_BACKGROUND_COLOR = "remove-background-color"
REMOVE_TABLE_GRID_LINES = "remove-table-grid-lines"


@dataclass(frozen=True)
class PreprocessStep:
    """A named unit of preprocessing work.

    Attributes:
        id: Stable identifier reported in PreprocessResult.applied_steps.
        is_enabled: Predicate deciding whether the step runs for given options.
        apply: Transform from the current representation to a new Surface.
    """

    id: str
    is_enabled: Callable[[PreprocessOptions], bool]
    apply: Callable[[PreprocessInput], Surface]


def preprocess_image_for_background_color_removal(image: PreprocessInput) -> Surface:
    """Decode if needed and flatten tinted backgrounds to white."""
    surface = to_surface(image)
    return Surface(pixels=remove_background_color(surface.pixels))


def preprocess_image_for_grid_line_removal(image: PreprocessInput) -> Surface:
    """Decode if needed and erase long horizontal/vertical table lines."""
    surface = to_surface(image)
    return Surface(pixels=remove_table_grid_lines(surface.pixels, DEFAULT_GRID_LINE_CONFIG))


PREPROCESS_STEPS: tuple[PreprocessStep, ...] = (
    PreprocessStep(
        id=REMOVE_BACKGROUND_COLOR,
        is_enabled=lambda options: options.has_background_color,
        apply=preprocess_image_for_background_color_removal,
    ),
    PreprocessStep(
        id=REMOVE_TABLE_GRID_LINES,
        is_enabled=lambda options: options.has_table_grid_lines,
        apply=preprocess_image_for_grid_line_removal,
    ),
)


def enabled_steps(
    options: PreprocessOptions,
    steps: tuple[PreprocessStep, ...] = PREPROCESS_STEPS,
) -> list[PreprocessStep]:
    """Return the steps that run for options, in registration order."""
    return [step for step in steps if step.is_enabled(options)]

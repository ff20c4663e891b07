"""
Preprocessing pipeline that applies the enabled steps in order.

The pipeline is the main entry point for preprocessing pasted images. It walks
the fixed step table, skips disabled steps, hands each step whatever the
previous one produced, and encodes the final surface to PNG.

Pipeline Philosophy:
- No decode/encode round trip happens between consecutive steps
- With every step disabled the source blob is returned as-is
- Only the steps that actually ran are reported
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from .config import DEFAULT_PREPROCESS_OPTIONS, PreprocessOptions, PreprocessResult
from .image_io import save_surface, to_blob
from .steps import PREPROCESS_STEPS, PreprocessStep, enabled_steps
from .types import ImageBlob, PreprocessInput, Surface

logger = logging.getLogger(__name__)


def _validate_input(image: ImageBlob) -> None:
    """Validate the source image.

    Raises:
        TypeError: If image is not an ImageBlob.
    """
    if not isinstance(image, ImageBlob):
        raise TypeError(f"Expected ImageBlob, got {type(image).__name__}")


def run_preprocess_pipeline(
    image: ImageBlob,
    options: PreprocessOptions = DEFAULT_PREPROCESS_OPTIONS,
    artifact_dir: str | Path | None = None,
    steps: tuple[PreprocessStep, ...] = PREPROCESS_STEPS,
) -> PreprocessResult:
    """Apply every enabled preprocessing step to an image.

    Steps run in registration order, not in the order of the option fields.
    A disabled step is neither called nor reported.

    Args:
        image: Source image as pasted.
        options: Which optional steps to run. Defaults to gridline removal only.
        artifact_dir: Optional directory to save each step's output as PNG.
        steps: Step table to walk. Defaults to the registered steps.

    Returns:
        PreprocessResult with the final PNG (or the untouched source when no
        step ran) and the identifiers of the applied steps.

    Raises:
        ImageDecodeError: If the source cannot be decoded.
        ImageEncodeError: If the final surface cannot be encoded.

    Examples:
        >>> result = run_preprocess_pipeline(blob, PreprocessOptions(False, False))
        >>> result.image is blob, result.applied_steps
        (True, [])
    """
    _validate_input(image)

    current: PreprocessInput = image
    applied_steps: list[str] = []
    artifact_paths: dict[str, str] = {}

    for step in enabled_steps(options, steps):
        started = time.perf_counter()
        current = step.apply(current)
        applied_steps.append(step.id)
        logger.debug(
            "Applied %s in %.1f ms (%dx%d)",
            step.id, (time.perf_counter() - started) * 1000, *current.dimensions,
        )

        if artifact_dir and isinstance(current, Surface):
            # Number artifacts so they sort in execution order
            path = Path(artifact_dir) / f"{len(applied_steps):02d}_{step.id}.png"
            artifact_paths[step.id] = save_surface(current, path)

    output = to_blob(current)
    if applied_steps:
        logger.info("Preprocessed %s with %s", image.name or "image", ", ".join(applied_steps))

    return PreprocessResult(
        image=output,
        applied_steps=applied_steps,
        artifact_paths=artifact_paths,
    )

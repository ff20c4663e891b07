"""
Configuration for the preprocessing pipeline.

PreprocessOptions selects which optional steps run for one invocation.
GridLineConfig parameterizes how long a dark run must be to count as a
table line. Both are immutable and passed explicitly at call sites.
"""

from dataclasses import dataclass, field

from config import (
    DEFAULT_HAS_BACKGROUND_COLOR,
    DEFAULT_HAS_TABLE_GRID_LINES,
    LONG_RUN_RATIO,
    MIN_RUN_LENGTH_PX,
)

from .types import ImageBlob


@dataclass(frozen=True)
class PreprocessOptions:
    """Independent toggles for the optional preprocessing steps.

    Attributes:
        has_background_color: The image has tinted cells or paper that
                              should be flattened to white.
        has_table_grid_lines: The image has table borders that should be
                              erased before OCR.
    """

    has_background_color: bool = DEFAULT_HAS_BACKGROUND_COLOR
    has_table_grid_lines: bool = DEFAULT_HAS_TABLE_GRID_LINES


DEFAULT_PREPROCESS_OPTIONS = PreprocessOptions()


@dataclass(frozen=True)
class GridLineConfig:
    """Parameters for long-run line detection.

    Attributes:
        long_run_ratio: Fraction of the image dimension a run must span.
        min_run_length_px: Lower bound on the run length in pixels.
    """

    long_run_ratio: float = LONG_RUN_RATIO
    min_run_length_px: int = MIN_RUN_LENGTH_PX

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises:
            ValueError: If any parameter is invalid.
        """
        if not (0.0 < self.long_run_ratio <= 1.0):
            raise ValueError(
                f"long_run_ratio must be in (0, 1], got {self.long_run_ratio}"
            )
        if self.min_run_length_px <= 0:
            raise ValueError(
                f"min_run_length_px must be positive, got {self.min_run_length_px}"
            )


DEFAULT_GRID_LINE_CONFIG = GridLineConfig()


@dataclass
class PreprocessResult:
    """Result of the preprocessing pipeline.

    Attributes:
        image: Final encoded image. When no step ran this is the caller's
               source blob itself, untouched.
        applied_steps: Identifiers of the steps that ran, in order.
        artifact_paths: Dict mapping step identifiers to saved file paths
                        (if artifact saving enabled).
    """

    image: ImageBlob
    applied_steps: list[str] = field(default_factory=list)
    artifact_paths: dict[str, str] = field(default_factory=dict)

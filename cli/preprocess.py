"""Preprocess command CLI parsing and control flow."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from errors import ClipOcrError
from preprocessing import run_preprocess_pipeline
from .options import (
    add_image_source_args,
    add_preprocess_args,
    load_image_from_args,
    preprocess_options_from_args,
)

logger = logging.getLogger(__name__)


def add_preprocess_subparser(subparsers: argparse._SubParsersAction) -> None:
    preprocess_parser = subparsers.add_parser(
        "preprocess",
        help="Clean up an image for OCR and save it",
    )
    add_image_source_args(preprocess_parser)
    add_preprocess_args(preprocess_parser)
    preprocess_parser.add_argument(
        "-o", "--output",
        required=True,
        help="Where to write the preprocessed image",
    )
    preprocess_parser.set_defaults(_cmd=cmd_preprocess)


def cmd_preprocess(args: argparse.Namespace) -> int:
    try:
        image = load_image_from_args(args)
        result = run_preprocess_pipeline(
            image,
            preprocess_options_from_args(args),
            artifact_dir=args.artifact_dir,
        )
    except (ClipOcrError, ValueError, OSError) as exc:
        logger.error("%s", exc)
        return 1

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(result.image.data)

    if result.applied_steps:
        logger.info("Applied steps: %s", ", ".join(result.applied_steps))
    else:
        logger.info("No preprocessing step enabled; wrote the source image unchanged")
    for step_id, path in result.artifact_paths.items():
        logger.info("  %s -> %s", step_id, path)
    logger.info("Saved %s (%d bytes)", output, len(result.image))
    return 0

"""Run command: preprocess, recognize, print (and optionally copy) the text."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from tqdm import tqdm

from clipboard_io import copy_text_to_clipboard
from errors import ClipboardUnavailableError, ClipOcrError, PreprocessError, RecognitionError
from recognition import run_ocr
from .options import (
    add_image_source_args,
    add_mode_args,
    add_preprocess_args,
    character_modes_from_args,
    load_image_from_args,
    preprocess_options_from_args,
)

logger = logging.getLogger(__name__)


def add_run_subparser(subparsers: argparse._SubParsersAction) -> None:
    run_parser = subparsers.add_parser(
        "run",
        help="Read the text of an image (file or clipboard)",
    )
    add_image_source_args(run_parser)
    add_preprocess_args(run_parser)
    add_mode_args(run_parser)
    run_parser.add_argument(
        "--copy",
        action="store_true",
        help="Copy the recognized text to the clipboard",
    )
    run_parser.add_argument(
        "--preprocessed-out",
        help="Also save the image handed to the recognizer",
    )
    run_parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Hide the progress bar",
    )
    run_parser.set_defaults(_cmd=cmd_run)


def cmd_run(args: argparse.Namespace) -> int:
    modes = character_modes_from_args(args)
    options = preprocess_options_from_args(args)

    try:
        image = load_image_from_args(args)
    except (ClipOcrError, ValueError, OSError) as exc:
        logger.error("%s", exc)
        return 1

    with tqdm(total=100, desc="OCR", unit="%", disable=args.no_progress, file=sys.stderr) as bar:
        def on_progress(percent: int) -> None:
            bar.update(percent - bar.n)

        try:
            result = run_ocr(
                image,
                modes=modes,
                options=options,
                on_progress=on_progress,
                artifact_dir=args.artifact_dir,
            )
        except PreprocessError as exc:
            logger.error("%s (%s)", PreprocessError.user_message, exc)
            return 1
        except RecognitionError as exc:
            logger.error("%s (%s)", RecognitionError.user_message, exc)
            return 1
        except ClipOcrError as exc:
            logger.error("%s", exc)
            return 1

    if args.preprocessed_out and result.preprocessed is not None:
        Path(args.preprocessed_out).write_bytes(result.preprocessed.data)
        logger.info("Saved preprocessed image to %s", args.preprocessed_out)

    if result.applied_steps:
        logger.info("Applied steps: %s", ", ".join(result.applied_steps))
    print(result.text)

    if args.copy:
        if not result.text.strip():
            logger.error("Nothing to copy: no text was recognized")
            return 1
        try:
            copy_text_to_clipboard(result.text)
        except ClipboardUnavailableError as exc:
            logger.error("%s", exc)
            return 1
        logger.info("Copied OCR result to clipboard")
    return 0

#!/usr/bin/env python3
"""
Unified CLI for clipocr, the clipboard image-to-text reader.

Usage:
    clipocr run <image>                     # Read the text of an image file
    clipocr run --clipboard --copy          # Read the clipboard image, copy the text back
    clipocr run <image> --no-japanese       # Latin letters and digits only
    clipocr run <image> --no-japanese --no-english   # Digits-only recognition
    clipocr preprocess <image> -o out.png   # Clean up an image and save it
    clipocr preprocess <image> -o out.png --background-color --no-grid-lines
    clipocr serve                           # Launch the OCR web service (port 30003)
"""

import argparse
import logging
import sys

from logging_utils import configure_logging, add_logging_args
from cli.preprocess import add_preprocess_subparser
from cli.run import add_run_subparser
from cli.serve import add_serve_subparser

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clipocr",
        description="clipocr - read Japanese, Latin, and digit text from images",
    )
    add_logging_args(parser)
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    add_run_subparser(subparsers)
    add_preprocess_subparser(subparsers)
    add_serve_subparser(subparsers)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, args.verbose, args.quiet)

    cmd = getattr(args, "_cmd", None)
    if args.command is None or cmd is None:
        parser.print_help()
        return 1
    return cmd(args)


if __name__ == "__main__":
    sys.exit(main())

"""Shared CLI flags for preprocessing toggles, character modes, and image input."""

from __future__ import annotations

import argparse

from clipboard_io import item_from_path, read_system_clipboard_image, require_image_from_clipboard
from preprocessing import DEFAULT_PREPROCESS_OPTIONS, ImageBlob, PreprocessOptions
from recognition import DEFAULT_CHARACTER_MODES, CharacterModes


def add_image_source_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "image",
        nargs="?",
        help="Image file (PNG, JPEG or WEBP). Omit with --clipboard.",
    )
    parser.add_argument(
        "--clipboard",
        action="store_true",
        help="Read the image from the system clipboard",
    )


def add_preprocess_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--background-color",
        dest="has_background_color",
        action=argparse.BooleanOptionalAction,
        default=DEFAULT_PREPROCESS_OPTIONS.has_background_color,
        help="Flatten tinted cells/paper to white",
    )
    parser.add_argument(
        "--grid-lines",
        dest="has_table_grid_lines",
        action=argparse.BooleanOptionalAction,
        default=DEFAULT_PREPROCESS_OPTIONS.has_table_grid_lines,
        help="Erase table gridlines",
    )
    parser.add_argument(
        "--artifact-dir",
        help="Save each applied step's output as PNG into this directory",
    )


def add_mode_args(parser: argparse.ArgumentParser) -> None:
    for name, label in (("japanese", "Japanese"), ("english", "Latin letters"), ("digits", "digits")):
        parser.add_argument(
            f"--{name}",
            action=argparse.BooleanOptionalAction,
            default=getattr(DEFAULT_CHARACTER_MODES, name),
            help=f"Read {label}",
        )


def preprocess_options_from_args(args: argparse.Namespace) -> PreprocessOptions:
    return PreprocessOptions(
        has_background_color=args.has_background_color,
        has_table_grid_lines=args.has_table_grid_lines,
    )


def character_modes_from_args(args: argparse.Namespace) -> CharacterModes:
    return CharacterModes(japanese=args.japanese, english=args.english, digits=args.digits)


def load_image_from_args(args: argparse.Namespace) -> ImageBlob:
    """Read the input image from the file argument or the system clipboard.

    Raises:
        ValueError: If neither or both sources are given.
        UnsupportedPasteDataError: If the source is not a supported image.
    """
    if args.clipboard and args.image:
        raise ValueError("Pass either an image path or --clipboard, not both")
    if args.clipboard:
        return read_system_clipboard_image()
    if not args.image:
        raise ValueError("Please provide an image path or --clipboard")
    return require_image_from_clipboard([item_from_path(args.image)])

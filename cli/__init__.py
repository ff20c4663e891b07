"""Subcommand parsers for the clipocr CLI."""

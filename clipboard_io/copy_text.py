"""Writing recognized text to the system clipboard."""

from __future__ import annotations

import logging

import pyperclip

from errors import ClipboardUnavailableError

logger = logging.getLogger(__name__)


def copy_text_to_clipboard(text: str) -> None:
    """Put text on the system clipboard.

    Raises:
        ClipboardUnavailableError: If the host has no clipboard mechanism
                                   (e.g. headless Linux without xclip/wl-copy).
    """
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as exc:
        raise ClipboardUnavailableError(
            "Clipboard API is not supported in this environment."
        ) from exc
    logger.debug("Copied %d characters to clipboard", len(text))
